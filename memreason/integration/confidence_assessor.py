"""
Multi-factor confidence assessment of statements.
"""

import logging
from typing import List, Optional

from ..kb.models import ReasoningContext, clamp_confidence
from ..memory.memory_store import MemoryStore
from ..memory.models import MemoryRecord
from ..reasoning.engine import ReasoningEngine
from ..reasoning.models import ReasoningMethod, ReasoningRequest
from .heuristics import detect_contradiction, determine_support
from .models import (
    ConfidenceAssessment,
    ConfidenceLevel,
    ConsistencyCheck,
    MemorySupport,
    ReasoningSupport,
)

logger = logging.getLogger(__name__)

MEMORY_WEIGHT = 0.3
REASONING_WEIGHT = 0.4
CONSISTENCY_WEIGHT = 0.2
SOURCE_WEIGHT = 0.1

ABDUCTIVE_DISCOUNT = 0.8


class ConfidenceAssessor:
    """Weighs memory support, reasoning support, consistency and source reliability."""

    def __init__(self, memory_store: MemoryStore, reasoning_engine: ReasoningEngine):
        self.memory = memory_store
        self.reasoning = reasoning_engine

    async def assess_confidence(self, statement: str, evidence: Optional[List[str]] = None) -> ConfidenceAssessment:
        """
        Assess confidence in a statement.

        Args:
            statement: Statement to assess
            evidence: Supporting premises, used for reasoning support

        Returns:
            ConfidenceAssessment with level, score, factors and weighted breakdown
        """
        evidence = evidence or []
        logger.info(f"Assessing confidence in: {statement}")

        memory_support = await self.assess_memory_support(statement)
        reasoning_support = await self.assess_reasoning_support(statement, evidence)
        consistency = await self.check_consistency(statement)
        source_reliability = self.assess_source_reliability(evidence)

        breakdown = {
            "memory_support": memory_support.confidence * MEMORY_WEIGHT,
            "reasoning_support": reasoning_support.confidence * REASONING_WEIGHT,
            "consistency": consistency.score * CONSISTENCY_WEIGHT,
            "source_reliability": source_reliability * SOURCE_WEIGHT,
        }
        score = clamp_confidence(sum(breakdown.values()))
        level = ConfidenceLevel.from_score(score)

        factors = [
            f"Memory support: {memory_support.matches} relevant memories ({memory_support.confidence * 100:.1f}%)",
            f"Reasoning support: {reasoning_support.method} reasoning with {reasoning_support.confidence * 100:.1f}% confidence",
            f"Consistency: {consistency.contradictions} contradictions found",
            f"Source reliability: {source_reliability * 100:.1f}% average",
        ]

        await self.memory.store(MemoryRecord(
            content=f"Confidence assessment: {statement} - {level.value}",
            context="confidence_assessment",
            type="semantic",
            emotional_weight=0.1,
            confidence=score,
        ))

        logger.info(f"Confidence in '{statement}': {level.value} ({score:.2f})")

        return ConfidenceAssessment(
            statement=statement,
            level=level,
            score=score,
            factors=factors,
            breakdown=breakdown,
            metadata={
                "memory_support": memory_support,
                "reasoning_support": reasoning_support,
                "consistency": consistency,
                "source_reliability": source_reliability,
            },
        )

    async def assess_memory_support(self, statement: str) -> MemorySupport:
        memories = await self.memory.search(statement, None, 10)

        support_score = 0.0
        contradiction_score = 0.0
        supporting = 0
        contradicting = 0

        for memory in memories:
            support = determine_support(memory.content, statement)
            if support > 0:
                supporting += 1
                support_score += memory.confidence
            elif support < 0:
                contradicting += 1
                contradiction_score += memory.confidence

        confidence = clamp_confidence((support_score - contradiction_score) / max(1, len(memories)))

        return MemorySupport(
            confidence=confidence,
            matches=len(memories),
            supporting=supporting,
            contradicting=contradicting,
        )

    async def assess_reasoning_support(self, statement: str, evidence: List[str]) -> ReasoningSupport:
        """Forward chaining first, then discounted abduction, then a fixed low score."""
        if not evidence:
            return ReasoningSupport(confidence=0.5, method="no_evidence")

        # A copy of the engine facts, so evidence never leaks back into them
        engine_context = self.reasoning.context
        context = ReasoningContext(
            facts=dict(engine_context.facts),
            confidences=dict(engine_context.confidences),
        )

        support = await self._try_forward(statement, evidence, context)
        if support is None:
            support = await self._try_abductive(statement, evidence, context)
        if support is None:
            support = ReasoningSupport(confidence=0.3, method="reasoning_failed")
        return support

    async def _try_forward(
        self, statement: str, evidence: List[str], context: ReasoningContext
    ) -> Optional[ReasoningSupport]:
        request = ReasoningRequest(premises=evidence, goal=statement, method=ReasoningMethod.FORWARD.value)
        try:
            result = await self.reasoning.reason(request, context)
        except Exception as e:
            logger.warning(f"Forward chaining failed: {e}, trying abductive reasoning")
            return None

        if not result.found:
            logger.debug(f"Forward chaining could not derive '{statement}'")
            return None
        return ReasoningSupport(confidence=result.confidence, method="forward_chaining", steps=result.steps)

    async def _try_abductive(
        self, statement: str, evidence: List[str], context: ReasoningContext
    ) -> Optional[ReasoningSupport]:
        request = ReasoningRequest(premises=evidence, goal=statement, method=ReasoningMethod.ABDUCTIVE.value)
        try:
            result = await self.reasoning.reason(request, context)
        except Exception as e:
            logger.warning(f"Abductive reasoning failed: {e}")
            return None

        if not result.found:
            return None
        return ReasoningSupport(
            confidence=clamp_confidence(result.confidence * ABDUCTIVE_DISCOUNT),
            method="abductive_reasoning",
            steps=result.steps,
            explanations=result.explanations,
        )

    async def check_consistency(self, statement: str) -> ConsistencyCheck:
        memories = await self.memory.search(statement, None, 15)

        contradictions = [
            {"memory_id": m.id, "content": m.content, "confidence": m.confidence}
            for m in memories
            if detect_contradiction(statement, m.content)
        ]

        return ConsistencyCheck(
            score=max(0.0, 1 - len(contradictions) * 0.2),
            contradictions=len(contradictions),
            details=contradictions,
        )

    def assess_source_reliability(self, evidence: List[str]) -> float:
        # Fixed placeholder values, not a credibility model
        return 0.7 if evidence else 0.5
