"""
Confidence calculation shared by the inference modes.
"""

from typing import List

from .matcher import Binding, Matcher, PatternMatcher
from .models import ReasoningContext, Rule, clamp_confidence

UNKNOWN_PREMISE_CONFIDENCE = 0.5


class ConfidenceCalculator:
    """Combines rule confidence, premise confidence and rule success rate."""

    def __init__(self, matcher: Matcher = None):
        self.matcher = matcher or PatternMatcher()

    def premise_confidences(self, rule: Rule, binding: Binding, context: ReasoningContext) -> List[float]:
        """Look up the confidence of each instantiated premise (0.5 if unknown)."""
        confidences = []
        for premise in rule.premises:
            instantiated = self.matcher.instantiate(premise, binding)
            confidence = context.confidence_of(instantiated)
            if confidence is None:
                confidence = context.confidence_of(premise, UNKNOWN_PREMISE_CONFIDENCE)
            confidences.append(confidence)
        return confidences

    def calculate(self, rule: Rule, binding: Binding, context: ReasoningContext) -> float:
        """
        Compute the confidence of a rule instance.

        base confidence x min(premise confidence) x success rate, clamped to [0, 1].
        """
        premise_confidences = self.premise_confidences(rule, binding, context)
        confidence = rule.base_confidence(premise_confidences)
        if premise_confidences:
            confidence *= min(premise_confidences)
        confidence *= rule.success_rate
        return clamp_confidence(confidence)
