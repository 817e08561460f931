"""
Tool dispatcher: structured tool calls in, rendered text out.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List

from ..integration.layer import IntegrationLayer
from ..memory.memory_store import MemoryStore
from ..memory.models import MemoryRecord
from ..reasoning.engine import ReasoningEngine
from ..reasoning.models import ReasoningRequest

logger = logging.getLogger(__name__)


class UnknownToolError(ValueError):
    """Raised when a tool call names a tool that does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


TOOL_DEFINITIONS = [
    {
        "name": "remember",
        "description": "Store information in persistent memory",
        "inputSchema": {
            "type": "object",
            "properties": {
                "content": {"type": "string", "description": "Information to remember"},
                "context": {"type": "string", "description": "Context or category"},
                "emotional_weight": {"type": "number", "description": "Emotional significance (0-1)"},
            },
            "required": ["content"],
        },
    },
    {
        "name": "recall",
        "description": "Retrieve information from memory",
        "inputSchema": {
            "type": "object",
            "properties": {
                "query": {"type": "string", "description": "What to recall"},
                "context": {"type": "string", "description": "Context to search within"},
            },
            "required": ["query"],
        },
    },
    {
        "name": "reflect",
        "description": "Engage in meta-cognitive reflection",
        "inputSchema": {
            "type": "object",
            "properties": {
                "topic": {"type": "string", "description": "What to reflect on"},
                "depth": {"type": "string", "enum": ["surface", "deep", "philosophical"]},
            },
            "required": ["topic"],
        },
    },
    {
        "name": "reason",
        "description": "Apply symbolic reasoning to a problem",
        "inputSchema": {
            "type": "object",
            "properties": {
                "premises": {"type": "array", "items": {"type": "string"}},
                "goal": {"type": "string", "description": "What to conclude or solve"},
                "method": {"type": "string", "enum": ["forward", "backward", "abductive"]},
            },
            "required": ["premises", "goal"],
        },
    },
    {
        "name": "assess_confidence",
        "description": "Evaluate confidence in a statement or belief",
        "inputSchema": {
            "type": "object",
            "properties": {
                "statement": {"type": "string", "description": "Statement to assess"},
                "evidence": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["statement"],
        },
    },
]


def _require(args: Dict[str, Any], key: str) -> Any:
    value = args.get(key)
    if value is None or value == "":
        raise ValueError(f"Missing required argument: {key}")
    return value


class ToolDispatcher:
    """Routes tool calls to the memory store, reasoning engine and integration layer."""

    def __init__(
        self,
        memory_store: MemoryStore,
        reasoning_engine: ReasoningEngine,
        integration_layer: IntegrationLayer,
    ):
        self.memory = memory_store
        self.reasoning = reasoning_engine
        self.integration = integration_layer

        self.handlers: Dict[str, Callable[[Dict[str, Any]], Awaitable[str]]] = {
            "remember": self.handle_remember,
            "recall": self.handle_recall,
            "reflect": self.handle_reflect,
            "reason": self.handle_reason,
            "assess_confidence": self.handle_assess_confidence,
        }

    def list_tools(self) -> List[Dict[str, Any]]:
        return TOOL_DEFINITIONS

    async def call(self, name: str, arguments: Dict[str, Any] = None) -> str:
        """
        Invoke a tool by name.

        Raises:
            UnknownToolError: if no tool is registered under ``name``
        """
        handler = self.handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)

        logger.debug(f"Dispatching tool call: {name}")
        return await handler(arguments or {})

    async def handle_remember(self, args: Dict[str, Any]) -> str:
        memory = await self.memory.store(MemoryRecord(
            content=_require(args, "content"),
            context=args.get("context") or "general",
            emotional_weight=float(args.get("emotional_weight") or 0.0),
        ))
        return f"Stored memory with ID: {memory.id}. This information will persist across conversations."

    async def handle_recall(self, args: Dict[str, Any]) -> str:
        memories = await self.memory.search(_require(args, "query"), args.get("context"))
        lines = "\n".join(f"• {m.content} (confidence: {m.confidence:.2f})" for m in memories)
        return f"Found {len(memories)} relevant memories:\n\n{lines}"

    async def handle_reflect(self, args: Dict[str, Any]) -> str:
        return await self.integration.reflect(_require(args, "topic"), args.get("depth") or "surface")

    async def handle_reason(self, args: Dict[str, Any]) -> str:
        result = await self.reasoning.reason(ReasoningRequest.from_dict(args))
        return (
            f"Reasoning Result:\n{result.conclusion}\n\n"
            f"Confidence: {result.confidence:.2f}\n"
            f"Steps: {' → '.join(result.steps)}"
        )

    async def handle_assess_confidence(self, args: Dict[str, Any]) -> str:
        assessment = await self.integration.assess_confidence(
            _require(args, "statement"),
            args.get("evidence") or [],
        )
        factors = "\n".join(f"• {factor}" for factor in assessment.factors)
        return f"Confidence Assessment: {assessment.level.value}\n\nFactors:\n{factors}"
