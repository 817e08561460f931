"""
Meta-cognitive reflection over memories and reasoning history.
"""

import logging
from collections import Counter
from datetime import timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from ..memory.memory_store import MemoryStore
from ..memory.models import MemoryRecord, utcnow
from ..reasoning.models import ReasoningSession
from .models import Reflection, ReflectionDepth

logger = logging.getLogger(__name__)

BASE_META_QUESTIONS = [
    "What assumptions am I making?",
    "What might I be missing?",
    "How reliable is my reasoning process?",
    "What biases might be influencing my thinking?",
]

DEEP_META_QUESTIONS = [
    "How has my understanding changed?",
    "What would change my mind about this?",
    "What are the implications of being wrong?",
]

RECENCY_WINDOW = timedelta(days=7)


class Reflector:
    """Builds iterative reflections on a topic from stored memories."""

    def __init__(self, memory_store: MemoryStore, config: Optional[Dict[str, Any]] = None):
        self.memory = memory_store
        self.config = config or {}
        self.memory_limit = self.config.get("reflection_memory_limit", 20)
        self.history_limit = self.config.get("reflection_history_limit", 10)

    async def reflect(self, topic: str, depth: str = "surface") -> str:
        """
        Reflect on a topic and return a formatted report.

        Args:
            topic: What to reflect on
            depth: "surface" (1 level), "deep" (3) or "philosophical" (5)

        Returns:
            Markdown report built from the final reflection level
        """
        try:
            reflection_depth = ReflectionDepth(depth)
        except ValueError:
            raise ValueError(f"Unknown reflection depth: {depth}") from None

        logger.info(f"Reflecting on '{topic}' at {depth} depth")

        memories = await self.memory.search(topic, None, self.memory_limit)
        reasoning_history = await self.memory.get_reasoning_history(self.history_limit)

        current = self.generate_base_reflection(topic, memories)
        reflections = [current]

        for level in range(1, reflection_depth.levels):
            current = self.deepen_reflection(current, level, memories, reasoning_history)
            reflections.append(current)

        await self.memory.store(MemoryRecord(
            content=f"Reflection on {topic}: {reflections[-1].summary}",
            context="meta_cognition",
            type="semantic",
            emotional_weight=0.3,
            tags=f"reflection,{topic},depth_{depth}",
        ))

        return self.format_reflection_output(topic, depth, reflections)

    def generate_base_reflection(self, topic: str, memories: List[MemoryRecord]) -> Reflection:
        patterns = self.identify_patterns(memories)
        gaps = self.identify_knowledge_gaps(memories)

        return Reflection(
            level="base",
            patterns_identified=patterns,
            knowledge_gaps=gaps,
            confidence_in_understanding=self.assess_topic_confidence(memories),
            emotional_resonance=self.assess_emotional_resonance(memories),
            summary=(
                f"Based on {len(memories)} relevant memories, I observe patterns in "
                f"{', '.join(patterns)} with gaps in {', '.join(gaps)}"
            ),
        )

    def deepen_reflection(
        self,
        previous: Optional[Reflection],
        level: int,
        memories: List[MemoryRecord],
        reasoning_history: List[ReasoningSession],
    ) -> Reflection:
        """Reflect on the previous level: questions, reasoning habits, biases."""
        meta_questions = self.generate_meta_questions(level)
        reasoning_patterns = self.analyze_reasoning_patterns(reasoning_history)

        return Reflection(
            level=f"deep_{level}",
            patterns_identified=list(previous.patterns_identified) if previous else [],
            knowledge_gaps=list(previous.knowledge_gaps) if previous else [],
            confidence_in_understanding=previous.confidence_in_understanding if previous else 0.0,
            emotional_resonance=previous.emotional_resonance if previous else 0.0,
            meta_questions=meta_questions,
            reasoning_patterns=reasoning_patterns,
            potential_biases=self.assess_potential_biases(memories, reasoning_history),
            uncertainty_areas=self.identify_uncertainty_areas(previous),
            growth_opportunities=self.identify_growth_opportunities(previous, memories),
            summary=(
                f"At depth {level}, I question {len(meta_questions)} assumptions and "
                f"recognize {len(reasoning_patterns)} reasoning patterns"
            ),
        )

    def identify_patterns(self, memories: List[MemoryRecord]) -> List[str]:
        patterns = [
            f"{context}_pattern"
            for context, count in Counter(m.context for m in memories).items()
            if count > 2
        ]

        days = {m.timestamp.date() for m in memories}
        if len(days) < len(memories) * 0.7:
            patterns.append("temporal_clustering")

        return patterns

    def identify_knowledge_gaps(self, memories: List[MemoryRecord]) -> List[str]:
        gaps = []

        if len(memories) < 3:
            gaps.append("insufficient_information")

        low_confidence = [m for m in memories if m.confidence < 0.5]
        if len(low_confidence) > len(memories) * 0.3:
            gaps.append("low_confidence_knowledge")

        if len({m.context for m in memories}) == 1:
            gaps.append("limited_perspective")

        return gaps

    def assess_topic_confidence(self, memories: List[MemoryRecord]) -> float:
        if not memories:
            return 0.0
        avg_confidence = float(np.mean([m.confidence for m in memories]))
        diversity_bonus = min(0.2, len({m.context for m in memories}) * 0.05)
        return min(1.0, avg_confidence + diversity_bonus)

    def assess_emotional_resonance(self, memories: List[MemoryRecord]) -> float:
        if not memories:
            return 0.0
        return float(np.mean([m.emotional_weight or 0.0 for m in memories]))

    def generate_meta_questions(self, level: int) -> List[str]:
        questions = list(BASE_META_QUESTIONS)
        if level > 1:
            questions.extend(DEEP_META_QUESTIONS)
        return questions

    def analyze_reasoning_patterns(self, reasoning_history: List[ReasoningSession]) -> List[str]:
        methods = Counter(session.method for session in reasoning_history)
        return [f"{method}: {count} uses" for method, count in methods.items()]

    def assess_potential_biases(
        self,
        memories: List[MemoryRecord],
        reasoning_history: List[ReasoningSession],
    ) -> List[str]:
        biases = []

        now = utcnow()
        recent = [m for m in memories if now - m.timestamp < RECENCY_WINDOW]
        if len(recent) > len(memories) * 0.7:
            biases.append("recency_bias")

        forward_sessions = [s for s in reasoning_history if s.method == "forward"]
        if len(forward_sessions) > len(reasoning_history) * 0.8:
            biases.append("confirmation_bias_tendency")

        return biases

    def identify_uncertainty_areas(self, reflection: Optional[Reflection]) -> List[str]:
        if reflection is None:
            return []

        areas = []
        if reflection.confidence_in_understanding < 0.7:
            areas.append("topic_understanding")
        if len(reflection.knowledge_gaps) > 2:
            areas.append("knowledge_completeness")
        return areas

    def identify_growth_opportunities(
        self,
        reflection: Optional[Reflection],
        memories: List[MemoryRecord],
    ) -> List[str]:
        opportunities = []

        if reflection is not None and "limited_perspective" in reflection.knowledge_gaps:
            opportunities.append("seek_diverse_viewpoints")

        if memories:
            semantic = [m for m in memories if m.type == "semantic"]
            if len(semantic) < len(memories) * 0.3:
                opportunities.append("build_conceptual_knowledge")

        return opportunities

    def format_reflection_output(self, topic: str, depth: str, reflections: List[Reflection]) -> str:
        final = reflections[-1]

        return (
            f"## Reflection on {topic} ({depth} level)\n"
            f"\n"
            f"**Key Insights:**\n"
            f"{final.summary}\n"
            f"\n"
            f"**Patterns Identified:**\n"
            f"{', '.join(final.patterns_identified) or 'None'}\n"
            f"\n"
            f"**Areas of Uncertainty:**\n"
            f"{', '.join(final.uncertainty_areas) or 'None'}\n"
            f"\n"
            f"**Growth Opportunities:**\n"
            f"{', '.join(final.growth_opportunities) or 'None'}\n"
            f"\n"
            f"**Confidence in Understanding:** {final.confidence_in_understanding * 100:.1f}%\n"
            f"\n"
            f"**Emotional Resonance:** {final.emotional_resonance * 10:.1f}/10\n"
            f"\n"
            f"---\n"
            f"*This reflection was generated through {len(reflections)} levels of meta-cognitive analysis.*"
        )
