"""
Knowledge Base: rules, facts and confidence for the reasoning engine.
"""

from .knowledge_base import KnowledgeBase
from .matcher import Matcher, PatternMatcher
from .confidence import ConfidenceCalculator
from .models import Rule, StaticConfidence, ComputedConfidence, ReasoningContext

__all__ = [
    "KnowledgeBase",
    "Matcher",
    "PatternMatcher",
    "ConfidenceCalculator",
    "Rule",
    "StaticConfidence",
    "ComputedConfidence",
    "ReasoningContext",
]
