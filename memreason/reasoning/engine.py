"""
Reasoning Engine coordinating the knowledge base and the three inference modes.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from ..kb.confidence import ConfidenceCalculator
from ..kb.knowledge_base import KnowledgeBase
from ..kb.matcher import Matcher, PatternMatcher
from ..kb.models import ReasoningContext, Rule
from .abductive import AbductiveReasoner
from .backward import DEFAULT_MAX_DEPTH, BackwardChainer
from .forward import DEFAULT_MAX_ITERATIONS, ForwardChainer
from .models import ReasoningMethod, ReasoningRequest, ReasoningResult, ReasoningSession

logger = logging.getLogger(__name__)


class UnknownMethodError(ValueError):
    """Raised when a reasoning request names an unsupported method."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unknown reasoning method: {method}")


class ReasoningEngine:
    """
    Symbolic reasoning over a shared rule set.

    Facts live in a ReasoningContext. When ``reason()`` is called without a
    context, the engine's default context is used, so premises accumulate
    across calls until ``clear()``. A caller that needs isolation passes its
    own context. A context must not be shared by concurrent ``reason()`` calls.
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        knowledge_base: Optional[KnowledgeBase] = None,
        memory_store=None,
        matcher: Optional[Matcher] = None,
    ):
        self.config = config or {}
        self.kb = knowledge_base or KnowledgeBase(self.config)
        self.memory_store = memory_store
        self.log_sessions = self.config.get("log_sessions", True)

        self.matcher = matcher or PatternMatcher()
        self.calculator = ConfidenceCalculator(self.matcher)
        self.forward_chainer = ForwardChainer(
            self.matcher,
            self.calculator,
            max_iterations=self.config.get("max_iterations", DEFAULT_MAX_ITERATIONS),
        )
        self.backward_chainer = BackwardChainer(
            self.matcher,
            max_depth=self.config.get("max_depth", DEFAULT_MAX_DEPTH),
        )
        self.abductive_reasoner = AbductiveReasoner(self.matcher)

        self.reasoning_history: List[ReasoningSession] = []

        logger.info(f"Reasoning Engine initialized with {len(self.kb.rules)} rules")

    @property
    def context(self) -> ReasoningContext:
        return self.kb.context

    def add_rule(self, rule: Rule):
        self.kb.add_rule(rule)

    def add_fact(self, fact: str, confidence: float = 1.0):
        self.kb.add_fact(fact, confidence)

    async def reason(
        self,
        request: Union[ReasoningRequest, Dict[str, Any]],
        context: Optional[ReasoningContext] = None,
    ) -> ReasoningResult:
        """
        Run a reasoning request.

        Args:
            request: Premises, goal and method ("forward", "backward" or "abductive")
            context: Fact context to reason in; defaults to the engine's own

        Returns:
            ReasoningResult for the selected method

        Raises:
            UnknownMethodError: if the method is not supported
        """
        if isinstance(request, dict):
            request = ReasoningRequest.from_dict(request)

        try:
            method = ReasoningMethod(request.method)
        except ValueError:
            raise UnknownMethodError(request.method) from None

        context = context if context is not None else self.context
        for premise in request.premises:
            context.add_fact(premise)

        logger.info(f"Reasoning ({method.value}) towards: {request.goal}")

        if method is ReasoningMethod.FORWARD:
            result = self.forward_chain(request.goal, context)
        elif method is ReasoningMethod.BACKWARD:
            result = self.backward_chain(request.goal, context)
        else:
            result = self.abductive_reason(request.goal, context)

        session = ReasoningSession(
            premises=list(request.premises),
            goal=request.goal,
            method=method.value,
            result=result,
        )
        self.reasoning_history.append(session)

        if self.memory_store is not None and self.log_sessions:
            await self.memory_store.store_reasoning_history(session)

        logger.info(f"Reasoning finished: found={result.found}, confidence={result.confidence:.2f}")
        return result

    def forward_chain(self, goal: str, context: Optional[ReasoningContext] = None) -> ReasoningResult:
        context = context if context is not None else self.context
        return self.forward_chainer.run(goal, self.kb.get_rules(), context)

    def backward_chain(self, goal: str, context: Optional[ReasoningContext] = None) -> ReasoningResult:
        context = context if context is not None else self.context
        return self.backward_chainer.run(goal, self.kb.get_rules(), context)

    def abductive_reason(self, observation: str, context: Optional[ReasoningContext] = None) -> ReasoningResult:
        context = context if context is not None else self.context
        return self.abductive_reasoner.run(observation, self.kb.get_rules(), context)

    def get_reasoning_stats(self) -> Dict[str, Any]:
        """Get rule, fact and session statistics."""
        stats = self.kb.get_stats()
        return {
            "total_rules": stats["total_rules"],
            "total_facts": stats["total_facts"],
            "reasoning_sessions": len(self.reasoning_history),
            "rule_statistics": stats["rule_statistics"],
        }

    def clear(self):
        """Reset the default fact context. Rules and history are kept."""
        self.kb.clear()
