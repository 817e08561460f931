"""
Integration Layer connecting memory search with symbolic reasoning.
"""

import logging
from typing import Any, Dict, List, Optional

from ..memory.memory_store import MemoryStore
from ..reasoning.engine import ReasoningEngine
from .confidence_assessor import ConfidenceAssessor
from .models import ConfidenceAssessment
from .reflection import Reflector

logger = logging.getLogger(__name__)


class IntegrationLayer:
    """Meta-cognitive reflection and confidence assessment over one memory store."""

    def __init__(
        self,
        memory_store: MemoryStore,
        reasoning_engine: ReasoningEngine,
        config: Optional[Dict[str, Any]] = None,
    ):
        self.memory = memory_store
        self.reasoning = reasoning_engine
        self.reflector = Reflector(memory_store, config)
        self.assessor = ConfidenceAssessor(memory_store, reasoning_engine)

    async def reflect(self, topic: str, depth: str = "surface") -> str:
        return await self.reflector.reflect(topic, depth)

    async def assess_confidence(self, statement: str, evidence: Optional[List[str]] = None) -> ConfidenceAssessment:
        return await self.assessor.assess_confidence(statement, evidence)
