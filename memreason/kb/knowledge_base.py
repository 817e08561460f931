"""
Knowledge Base holding inference rules and asserted facts.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Sequence

from .models import ComputedConfidence, ReasoningContext, Rule, StaticConfidence

logger = logging.getLogger(__name__)


def _product(confidences: Sequence[float]) -> float:
    return math.prod(confidences)


class KnowledgeBase:
    """Rules shared by every reasoning session plus a default fact context."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.rules: Dict[str, Rule] = {}
        self.context = ReasoningContext()

        if self.config.get("builtin_rules", True):
            self._load_basic_rules()

    def _load_basic_rules(self):
        """Load the built-in logical, uncertainty and causal rules."""
        rules = [
            Rule("modus_ponens", ["?P → ?Q", "?P"], "?Q", StaticConfidence(0.95)),
            Rule("modus_tollens", ["?P → ?Q", "¬?Q"], "¬?P", StaticConfidence(0.95)),
            Rule("hypothetical_syllogism", ["?P → ?Q", "?Q → ?R"], "?P → ?R", StaticConfidence(0.9)),
            Rule(
                "uncertainty_propagation",
                ["?P", "confidence(?P) = ?C1", "?P → ?Q", "confidence(?P → ?Q) = ?C2"],
                "?Q",
                ComputedConfidence(_product),
            ),
            Rule("causal_inference", ["cause(?X, ?Y)", "observed(?X)"], "likely(?Y)", StaticConfidence(0.7)),
        ]

        for rule in rules:
            self.add_rule(rule)

        logger.info(f"Loaded {len(rules)} built-in reasoning rules")

    def add_rule(self, rule: Rule):
        """Register a rule. A rule with the same name is replaced."""
        if rule.name in self.rules:
            logger.debug(f"Replacing rule {rule.name}")
        self.rules[rule.name] = rule

    def get_rule(self, name: str) -> Optional[Rule]:
        return self.rules.get(name)

    def get_rules(self) -> List[Rule]:
        return list(self.rules.values())

    def add_fact(self, fact: str, confidence: float = 1.0):
        """Assert a fact in the default context, overwriting its confidence."""
        self.context.add_fact(fact, confidence)

    def clear(self):
        """Drop all facts and confidences. Rules are kept."""
        self.context.clear()
        logger.info("Cleared knowledge base facts")

    def get_stats(self) -> Dict[str, Any]:
        """Get knowledge base statistics."""
        return {
            "total_rules": len(self.rules),
            "total_facts": len(self.context.facts),
            "rule_statistics": [
                {
                    "name": rule.name,
                    "usage_count": rule.usage_count,
                    "success_rate": rule.success_rate,
                    "confidence": rule.static_confidence,
                }
                for rule in self.rules.values()
            ],
        }
