"""
Data models for the Knowledge Base module.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Union


def clamp_confidence(value: float) -> float:
    """Clamp a confidence value into [0, 1]."""
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class StaticConfidence:
    """A fixed base confidence for a rule."""
    value: float

    def resolve(self, premise_confidences: Optional[Sequence[float]] = None) -> float:
        return clamp_confidence(self.value)


@dataclass(frozen=True)
class ComputedConfidence:
    """A base confidence derived from the confidences of the matched premises."""
    calculate: Callable[[Sequence[float]], float]

    def resolve(self, premise_confidences: Optional[Sequence[float]] = None) -> float:
        # Without premise confidences there is nothing to combine
        if not premise_confidences:
            return 1.0
        return clamp_confidence(self.calculate(premise_confidences))


RuleConfidence = Union[StaticConfidence, ComputedConfidence]


@dataclass
class Rule:
    """An inference rule: premise patterns, a conclusion pattern and a confidence."""
    name: str
    premises: List[str]
    conclusion: str
    confidence: RuleConfidence = field(default_factory=lambda: StaticConfidence(1.0))
    usage_count: int = 0
    success_rate: float = 1.0

    @property
    def static_confidence(self) -> Optional[float]:
        """The fixed confidence, or None for computed rules."""
        if isinstance(self.confidence, StaticConfidence):
            return self.confidence.value
        return None

    def base_confidence(self, premise_confidences: Optional[Sequence[float]] = None) -> float:
        return self.confidence.resolve(premise_confidences)


@dataclass
class ReasoningContext:
    """
    Fact state for reasoning sessions.

    ``facts`` holds asserted propositions in insertion order with the
    confidence they were asserted with. ``confidences`` is the shared
    confidence table: it is written on assertion and whenever forward
    chaining derives a conclusion.
    """
    facts: Dict[str, float] = field(default_factory=dict)
    confidences: Dict[str, float] = field(default_factory=dict)

    def add_fact(self, text: str, confidence: float = 1.0):
        confidence = clamp_confidence(confidence)
        self.facts[text] = confidence
        self.confidences[text] = confidence

    def has_fact(self, text: str) -> bool:
        return text in self.facts

    def confidence_of(self, text: str, default: Optional[float] = None) -> Optional[float]:
        return self.confidences.get(text, default)

    def record_confidence(self, text: str, confidence: float):
        self.confidences[text] = clamp_confidence(confidence)

    def clear(self):
        self.facts.clear()
        self.confidences.clear()
