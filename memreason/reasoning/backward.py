"""
Backward chaining: depth-bounded goal-directed search.
"""

import logging
from typing import List, Set, Tuple

from ..kb.matcher import Matcher, PatternMatcher
from ..kb.models import ReasoningContext, Rule, clamp_confidence
from .models import ReasoningResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 10


class BackwardChainer:
    """
    Recursive depth-first search from a goal to asserted facts.

    A sub-goal is visited at most once per top-level call, even when two
    branches need the same premise. The first rule whose premises are all
    satisfied wins; alternatives are not explored after that.
    """

    def __init__(self, matcher: Matcher = None, max_depth: int = DEFAULT_MAX_DEPTH):
        self.matcher = matcher or PatternMatcher()
        self.max_depth = max_depth

    def run(self, goal: str, rules: List[Rule], context: ReasoningContext) -> ReasoningResult:
        steps: List[str] = []
        visited: Set[str] = set()

        found, confidence = self._search(goal, 0, rules, context, visited, steps)

        return ReasoningResult(
            conclusion=goal,
            found=found,
            confidence=confidence,
            steps=steps,
            method="backward_chaining",
        )

    def _search(
        self,
        goal: str,
        depth: int,
        rules: List[Rule],
        context: ReasoningContext,
        visited: Set[str],
        steps: List[str],
    ) -> Tuple[bool, float]:
        if depth > self.max_depth:
            return False, 0.0
        if goal in visited:
            return False, 0.0
        visited.add(goal)

        if context.has_fact(goal):
            steps.append(f"Found fact: {goal}")
            return True, context.confidence_of(goal, 1.0)

        for rule in rules:
            if not self.matcher.matches_conclusion(rule.conclusion, goal):
                continue

            steps.append(f"Trying rule {rule.name} for {goal}")
            premise_confidences = []
            for premise in rule.premises:
                found, confidence = self._search(premise, depth + 1, rules, context, visited, steps)
                if not found:
                    break
                premise_confidences.append(confidence)
            else:
                confidence = rule.base_confidence(premise_confidences)
                if premise_confidences:
                    confidence *= min(premise_confidences)
                confidence = clamp_confidence(confidence)
                steps.append(f"Satisfied {rule.name}: {goal} (confidence: {confidence:.2f})")
                logger.debug(f"Backward chain satisfied '{goal}' at depth {depth}")
                return True, confidence

        return False, 0.0
