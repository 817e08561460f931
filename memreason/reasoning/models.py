"""
Data models for the Reasoning module.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List


class ReasoningMethod(Enum):
    """Inference modes supported by the engine."""
    FORWARD = "forward"
    BACKWARD = "backward"
    ABDUCTIVE = "abductive"


@dataclass
class ReasoningRequest:
    """A caller's reasoning request."""
    premises: List[str]
    goal: str
    method: str = ReasoningMethod.FORWARD.value

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReasoningRequest":
        premises = data.get("premises", [])
        if not isinstance(premises, list) or not all(isinstance(p, str) for p in premises):
            raise ValueError("premises must be a list of strings")
        goal = data.get("goal")
        if not isinstance(goal, str) or not goal:
            raise ValueError("goal must be a non-empty string")
        return cls(
            premises=premises,
            goal=goal,
            method=data.get("method") or ReasoningMethod.FORWARD.value,
        )


@dataclass
class Explanation:
    """A candidate explanation produced by abductive reasoning."""
    rule: str
    premises: List[str]
    confidence: float
    plausibility: float

    @property
    def score(self) -> float:
        return self.confidence * self.plausibility


@dataclass
class ReasoningResult:
    """Result of a reasoning call."""
    conclusion: str
    found: bool
    confidence: float
    steps: List[str]
    method: str
    explanations: List[Explanation] = field(default_factory=list)
    applied_rules: List[str] = field(default_factory=list)
    iterations: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ReasoningSession:
    """History record of one ``reason()`` call."""
    premises: List[str]
    goal: str
    method: str
    result: ReasoningResult
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
