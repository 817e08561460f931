"""
Pattern matching between rule patterns and fact text.
"""

import logging
from abc import ABC, abstractmethod
from typing import Collection, Dict, List, Optional

from .models import Rule

logger = logging.getLogger(__name__)

Binding = Dict[str, str]

VARIABLE_MARKER = "?"


class Matcher(ABC):
    """Interface the chainers use to match patterns against facts."""

    @abstractmethod
    def unify(self, pattern: str, fact: str) -> Optional[Binding]:
        """Return a binding if ``pattern`` matches ``fact``, otherwise None."""
        pass

    @abstractmethod
    def instantiate(self, pattern: str, binding: Binding) -> str:
        """Substitute bound variables into ``pattern``."""
        pass

    def matches_conclusion(self, pattern: str, goal: str) -> bool:
        return pattern == goal or self.unify(pattern, goal) is not None

    def entails(self, conclusion: str, goal: str) -> bool:
        # Only exact equality is recognised as entailment
        return conclusion == goal

    def match_rule(self, rule: Rule, facts: Collection[str]) -> List[Binding]:
        """
        Find every binding under which ``rule`` is satisfied by ``facts``.

        The first premise is unified against each fact; the binding is kept
        only if every premise, once instantiated, is present in ``facts``.
        """
        if not rule.premises:
            return []

        matches = []
        for fact in list(facts):
            binding = self.unify(rule.premises[0], fact)
            if binding is not None and self.all_premises_satisfied(rule.premises, facts, binding):
                matches.append(binding)
        return matches

    def all_premises_satisfied(self, premises: List[str], facts: Collection[str], binding: Binding) -> bool:
        return all(
            self.instantiate(premise, binding) in facts or premise in facts
            for premise in premises
        )


class PatternMatcher(Matcher):
    """
    Tagged-pattern matcher: a pattern is either a literal or a single variable.

    A literal matches only identical text. A pattern starting with ``?`` is
    treated as one variable and binds to the whole fact text. This is plain
    textual substitution, not first-order unification.
    """

    def unify(self, pattern: str, fact: str) -> Optional[Binding]:
        if pattern == fact:
            return {}
        if pattern.startswith(VARIABLE_MARKER):
            return {pattern: fact}
        return None

    def instantiate(self, pattern: str, binding: Binding) -> str:
        result = pattern
        for variable, value in binding.items():
            result = result.replace(variable, value)
        return result
