"""
Data models for the Integration module.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ReflectionDepth(Enum):
    """Reflection depth and the number of levels it produces."""
    SURFACE = "surface"
    DEEP = "deep"
    PHILOSOPHICAL = "philosophical"

    @property
    def levels(self) -> int:
        return {"surface": 1, "deep": 3, "philosophical": 5}[self.value]


class ConfidenceLevel(Enum):
    """Categorical confidence buckets."""
    VERY_HIGH = "very_high"
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"
    VERY_LOW = "very_low"

    @classmethod
    def from_score(cls, score: float) -> "ConfidenceLevel":
        if score >= 0.9:
            return cls.VERY_HIGH
        if score >= 0.7:
            return cls.HIGH
        if score >= 0.5:
            return cls.MODERATE
        if score >= 0.3:
            return cls.LOW
        return cls.VERY_LOW


@dataclass
class Reflection:
    """One level of a reflection."""
    level: str
    summary: str
    patterns_identified: List[str] = field(default_factory=list)
    knowledge_gaps: List[str] = field(default_factory=list)
    confidence_in_understanding: float = 0.0
    emotional_resonance: float = 0.0
    meta_questions: List[str] = field(default_factory=list)
    reasoning_patterns: List[str] = field(default_factory=list)
    potential_biases: List[str] = field(default_factory=list)
    uncertainty_areas: List[str] = field(default_factory=list)
    growth_opportunities: List[str] = field(default_factory=list)


@dataclass
class MemorySupport:
    confidence: float
    matches: int
    supporting: int
    contradicting: int


@dataclass
class ReasoningSupport:
    confidence: float
    method: str
    steps: List[str] = field(default_factory=list)
    explanations: List[Any] = field(default_factory=list)


@dataclass
class ConsistencyCheck:
    score: float
    contradictions: int
    details: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ConfidenceAssessment:
    """Result of a multi-factor confidence assessment."""
    statement: str
    level: ConfidenceLevel
    score: float
    factors: List[str]
    breakdown: Dict[str, float]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def reasoning_method(self) -> Optional[str]:
        support = self.metadata.get("reasoning_support")
        return support.method if support is not None else None
