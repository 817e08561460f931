"""
memreason - Memory-backed Symbolic Reasoning System

Stores timestamped memories and answers reasoning queries over them with a
small forward/backward/abductive rule engine, meta-cognitive reflection and
multi-factor confidence assessment.
"""

__version__ = "0.1.0"
__author__ = "memreason Team"
