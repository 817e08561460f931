"""
Forward chaining: saturate the fact set until the goal appears.
"""

import logging
from typing import List

from ..kb.confidence import ConfidenceCalculator
from ..kb.matcher import Matcher, PatternMatcher
from ..kb.models import ReasoningContext, Rule
from .models import ReasoningResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100


class ForwardChainer:
    """Breadth-first rule application bounded by an iteration cap."""

    def __init__(
        self,
        matcher: Matcher = None,
        calculator: ConfidenceCalculator = None,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
    ):
        self.matcher = matcher or PatternMatcher()
        self.calculator = calculator or ConfidenceCalculator(self.matcher)
        self.max_iterations = max_iterations

    def run(self, goal: str, rules: List[Rule], context: ReasoningContext) -> ReasoningResult:
        """
        Apply every rule to the working fact set until ``goal`` is derived,
        a pass adds nothing new, or the iteration cap is reached.

        Derived conclusions are never removed from the working set, and their
        confidences are recorded in ``context``.
        """
        derived = dict.fromkeys(context.facts)
        steps: List[str] = []
        applied_rules: List[str] = []
        iterations = 0

        while iterations < self.max_iterations:
            iterations += 1
            new_facts_added = False

            for rule in rules:
                for binding in self.matcher.match_rule(rule, derived):
                    conclusion = self.matcher.instantiate(rule.conclusion, binding)
                    if conclusion in derived:
                        continue

                    derived[conclusion] = None
                    confidence = self.calculator.calculate(rule, binding, context)
                    context.record_confidence(conclusion, confidence)

                    steps.append(f"Applied {rule.name}: {conclusion} (confidence: {confidence:.2f})")
                    applied_rules.append(rule.name)
                    rule.usage_count += 1
                    new_facts_added = True
                    logger.debug(f"Derived '{conclusion}' via {rule.name}")

                    if self.matcher.entails(conclusion, goal):
                        return ReasoningResult(
                            conclusion=goal,
                            found=True,
                            confidence=confidence,
                            steps=steps,
                            method="forward_chaining",
                            applied_rules=applied_rules,
                            iterations=iterations,
                        )

            if not new_facts_added:
                break

        found = goal in derived
        return ReasoningResult(
            conclusion=goal,
            found=found,
            confidence=context.confidence_of(goal, 0.0) if found else 0.0,
            steps=steps,
            method="forward_chaining",
            applied_rules=applied_rules,
            iterations=iterations,
        )
