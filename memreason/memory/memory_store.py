"""
Memory Store for saving, searching and replaying memories and reasoning sessions.
"""

import json
import logging
import uuid
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..reasoning.models import ReasoningSession
from .models import MemoryRecord

logger = logging.getLogger(__name__)

CONTENT_RELEVANCE = 1.0
CONTEXT_RELEVANCE = 0.6
TAGS_RELEVANCE = 0.5


class MemoryStore(ABC):
    """Interface the integration layer and reasoning engine rely on."""

    @abstractmethod
    async def store(self, record: MemoryRecord) -> MemoryRecord:
        """Persist a record and return it with a generated id."""
        pass

    @abstractmethod
    async def search(self, query: str, context: Optional[str] = None, limit: int = 10) -> List[MemoryRecord]:
        """Return records relevant to ``query``, most relevant first."""
        pass

    @abstractmethod
    async def store_reasoning_history(self, session: ReasoningSession) -> ReasoningSession:
        pass

    @abstractmethod
    async def get_reasoning_history(self, limit: int = 10) -> List[ReasoningSession]:
        """Return past reasoning sessions, most recent first."""
        pass


class InMemoryMemoryStore(MemoryStore):
    """
    Memory store kept in process memory.

    When ``storage_path`` is given, memories are loaded from and saved to
    ``memories.json`` inside it. Reasoning history is never written to disk.
    """

    def __init__(self, storage_path: Optional[Path] = None):
        self.storage_path = Path(storage_path) if storage_path else None
        self.memories_file = None

        self.memories: List[MemoryRecord] = []
        self.memory_index: Dict[str, int] = {}  # id -> index mapping
        self.reasoning_history: List[ReasoningSession] = []

        if self.storage_path is not None:
            self.storage_path.mkdir(parents=True, exist_ok=True)
            self.memories_file = self.storage_path / "memories.json"
            self._load_memories()

    def _load_memories(self):
        """Load memories from persistent storage."""
        try:
            if self.memories_file.exists():
                with open(self.memories_file, "r") as f:
                    memories_data = json.load(f)

                for memory_data in memories_data:
                    record = MemoryRecord.from_dict(memory_data)
                    self.memories.append(record)
                    self.memory_index[record.id] = len(self.memories) - 1

                logger.info(f"Loaded {len(self.memories)} memories from storage")
            else:
                logger.info("No existing memories found, starting with empty store")

        except Exception as e:
            logger.error(f"Failed to load memories: {e}")
            self.memories = []
            self.memory_index = {}

    def _save_memories(self):
        """Save memories to persistent storage."""
        if self.memories_file is None:
            return
        try:
            with open(self.memories_file, "w") as f:
                json.dump([record.to_dict() for record in self.memories], f, indent=2)
            logger.debug(f"Saved {len(self.memories)} memories to storage")
        except OSError as e:
            logger.error(f"Failed to save memories: {e}")
            raise

    async def store(self, record: MemoryRecord) -> MemoryRecord:
        stored = replace(record, id=str(uuid.uuid4()))
        self.memories.append(stored)
        self.memory_index[stored.id] = len(self.memories) - 1
        self._save_memories()

        logger.info(f"Stored memory {stored.id} in context '{stored.context}'")
        return stored

    def get_memory(self, memory_id: str) -> Optional[MemoryRecord]:
        if memory_id in self.memory_index:
            return self.memories[self.memory_index[memory_id]]
        return None

    def _relevance(self, record: MemoryRecord, query: str) -> Optional[float]:
        if query in record.content.lower():
            return CONTENT_RELEVANCE
        if query in (record.context or "").lower():
            return CONTEXT_RELEVANCE
        if query in (record.tags or "").lower():
            return TAGS_RELEVANCE
        return None

    async def search(self, query: str, context: Optional[str] = None, limit: int = 10) -> List[MemoryRecord]:
        """
        Case-insensitive substring search over content, context and tags.

        Returned copies carry ``confidence = relevance x stored confidence``.
        """
        query_lower = query.lower()
        scored = []

        for record in self.memories:
            if context and record.context != context:
                continue
            relevance = self._relevance(record, query_lower)
            if relevance is not None:
                scored.append((relevance, record))

        scored.sort(
            key=lambda item: (item[0], item[1].emotional_weight, item[1].timestamp),
            reverse=True,
        )

        return [
            replace(record, confidence=relevance * record.confidence)
            for relevance, record in scored[:limit]
        ]

    async def get_memories_by_type(self, memory_type: str, limit: int = 50) -> List[MemoryRecord]:
        memories = [m for m in self.memories if m.type == memory_type]
        memories.sort(key=lambda m: m.timestamp, reverse=True)
        return memories[:limit]

    async def store_reasoning_history(self, session: ReasoningSession) -> ReasoningSession:
        self.reasoning_history.append(session)
        return session

    async def get_reasoning_history(self, limit: int = 10) -> List[ReasoningSession]:
        history = sorted(self.reasoning_history, key=lambda s: s.timestamp, reverse=True)
        return history[:limit]

    async def get_memory_stats(self) -> Dict[str, Any]:
        """Get statistics about the memory store."""
        return {
            "total_memories": len(self.memories),
            "memory_types": dict(Counter(m.type for m in self.memories)),
            "reasoning_sessions": len(self.reasoning_history),
        }

    def clear(self):
        """Clear all memories and reasoning history."""
        self.memories = []
        self.memory_index = {}
        self.reasoning_history = []
        self._save_memories()
        logger.info("Cleared all memories from store")
