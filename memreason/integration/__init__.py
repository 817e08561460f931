"""
Integration of memory and reasoning: reflection and confidence assessment.
"""

from .confidence_assessor import ConfidenceAssessor
from .heuristics import calculate_similarity, detect_contradiction, determine_support
from .layer import IntegrationLayer
from .models import ConfidenceAssessment, ConfidenceLevel, Reflection, ReflectionDepth
from .reflection import Reflector

__all__ = [
    "IntegrationLayer",
    "ConfidenceAssessor",
    "Reflector",
    "ConfidenceAssessment",
    "ConfidenceLevel",
    "Reflection",
    "ReflectionDepth",
    "calculate_similarity",
    "detect_contradiction",
    "determine_support",
]
