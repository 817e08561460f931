"""
Abductive reasoning: rank candidate explanations for an observation.
"""

import logging
from typing import List

from ..kb.matcher import Matcher, PatternMatcher
from ..kb.models import ReasoningContext, Rule
from .models import Explanation, ReasoningResult

logger = logging.getLogger(__name__)

NEGATION_PREFIX = "¬"


class AbductiveReasoner:
    """Finds rules whose conclusion matches an observation and ranks their premises."""

    def __init__(self, matcher: Matcher = None):
        self.matcher = matcher or PatternMatcher()

    def run(self, observation: str, rules: List[Rule], context: ReasoningContext) -> ReasoningResult:
        explanations: List[Explanation] = []
        steps = [f"Finding explanations for: {observation}"]

        for rule in rules:
            if not self.matcher.matches_conclusion(rule.conclusion, observation):
                continue
            explanations.append(Explanation(
                rule=rule.name,
                premises=list(rule.premises),
                confidence=rule.base_confidence(),
                plausibility=self.assess_plausibility(rule.premises, context),
            ))
            steps.append(f"Possible explanation via {rule.name}: {', '.join(rule.premises)}")

        explanations.extend(self.find_causal_explanations(observation))

        # sorted() is stable, so ties keep insertion order
        explanations = sorted(explanations, key=lambda e: e.score, reverse=True)

        if not explanations:
            return ReasoningResult(
                conclusion="No explanation found",
                found=False,
                confidence=0.0,
                steps=steps,
                method="abductive_reasoning",
            )

        best = explanations[0]
        logger.debug(f"Best explanation for '{observation}' via {best.rule} (score {best.score:.3f})")
        return ReasoningResult(
            conclusion=f"Best explanation: {' & '.join(best.premises)}",
            found=True,
            confidence=best.score,
            steps=steps,
            method="abductive_reasoning",
            explanations=explanations,
        )

    def assess_plausibility(self, premises: List[str], context: ReasoningContext) -> float:
        """Known premises keep plausibility, contradicted ones cut it to 10%, unknown ones halve it."""
        plausibility = 1.0
        for premise in premises:
            if context.has_fact(premise):
                continue
            elif context.has_fact(f"{NEGATION_PREFIX}{premise}"):
                plausibility *= 0.1
            else:
                plausibility *= 0.5
        return plausibility

    def find_causal_explanations(self, observation: str) -> List[Explanation]:
        if "effect" not in observation:
            return []
        return [Explanation(
            rule="causal_inference",
            premises=[observation.replace("effect", "cause")],
            confidence=0.6,
            plausibility=0.7,
        )]
