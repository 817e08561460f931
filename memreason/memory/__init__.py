"""
Memory storage consumed by the reasoning and integration layers.
"""

from .memory_store import InMemoryMemoryStore, MemoryStore
from .models import MemoryRecord

__all__ = ["MemoryStore", "InMemoryMemoryStore", "MemoryRecord"]
