"""
Symbolic reasoning: forward, backward and abductive inference.
"""

from .engine import ReasoningEngine, UnknownMethodError
from .models import (
    Explanation,
    ReasoningMethod,
    ReasoningRequest,
    ReasoningResult,
    ReasoningSession,
)

__all__ = [
    "ReasoningEngine",
    "UnknownMethodError",
    "Explanation",
    "ReasoningMethod",
    "ReasoningRequest",
    "ReasoningResult",
    "ReasoningSession",
]
