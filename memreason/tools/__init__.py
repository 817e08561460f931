"""
Tool-call front end for the memory and reasoning system.
"""

from .dispatcher import ToolDispatcher, UnknownToolError

__all__ = ["ToolDispatcher", "UnknownToolError"]
