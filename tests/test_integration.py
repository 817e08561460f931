"""
Tests for reflection, confidence assessment and the text heuristics.
"""

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from memreason.integration.confidence_assessor import ConfidenceAssessor
from memreason.integration.heuristics import calculate_similarity, detect_contradiction, determine_support
from memreason.integration.layer import IntegrationLayer
from memreason.integration.models import ConfidenceLevel, Reflection
from memreason.integration.reflection import Reflector
from memreason.kb.models import ReasoningContext, Rule, StaticConfidence
from memreason.memory.memory_store import InMemoryMemoryStore
from memreason.memory.models import MemoryRecord, utcnow
from memreason.reasoning.engine import ReasoningEngine
from memreason.reasoning.models import ReasoningResult, ReasoningSession


def make_session(method: str) -> ReasoningSession:
    result = ReasoningResult(conclusion="Q", found=True, confidence=0.9, steps=[], method=method)
    return ReasoningSession(premises=["P"], goal="Q", method=method, result=result)


class TestHeuristics:
    """Test support, similarity and contradiction heuristics."""

    def test_full_overlap_supports(self):
        """Test full overlap supports."""
        assert determine_support("the sky is blue", "the sky is blue") == 1.0

    def test_partial_overlap_weak_support(self):
        """Test partial overlap weak support."""
        assert determine_support("apples", "apples are red and sweet") == 0.5

    def test_no_overlap(self):
        """Test no overlap."""
        assert determine_support("bananas", "apples are red") == 0.0

    def test_negated_memory_contradicts(self):
        """Test negated memory contradicts."""
        assert determine_support("the sky is not blue", "the sky is blue") == -1.0

    def test_negation_substring_inside_word(self):
        """Test negation substring inside word."""
        # "another" contains "not"
        assert determine_support("another sunny day", "another sunny day") == -1.0

    def test_similarity(self):
        """Test similarity."""
        assert calculate_similarity("a b", "b c") == pytest.approx(1 / 3)
        assert calculate_similarity("", "") == 0.0

    def test_contradiction_detected(self):
        """Test contradiction detected."""
        assert detect_contradiction("the sky is blue", "the sky is not blue")
        assert not detect_contradiction("the sky is blue", "the grass is green")
        assert not detect_contradiction("the sky is not blue", "it is never green")


class TestReflector:
    """Test meta-cognitive reflection."""

    @pytest.fixture
    def store(self):
        return InMemoryMemoryStore()

    @pytest.fixture
    def reflector(self, store):
        return Reflector(store)

    @pytest.mark.asyncio
    async def test_empty_store_surface_reflection(self, reflector, store):
        """Test empty store surface reflection."""
        output = await reflector.reflect("quantum")

        assert output.startswith("## Reflection on quantum (surface level)")
        assert "Based on 0 relevant memories" in output
        assert "with gaps in insufficient_information" in output
        assert "**Patterns Identified:**\nNone" in output
        assert "**Confidence in Understanding:** 0.0%" in output
        assert "**Emotional Resonance:** 0.0/10" in output
        assert "1 levels of meta-cognitive analysis" in output

        assert len(store.memories) == 1
        stored = store.memories[0]
        assert stored.context == "meta_cognition"
        assert stored.type == "semantic"
        assert stored.tags == "reflection,quantum,depth_surface"

    @pytest.mark.asyncio
    async def test_patterns_from_clustered_memories(self, reflector, store):
        """Test patterns from clustered memories."""
        for i in range(3):
            await store.store(MemoryRecord(content=f"project note {i}", context="work"))

        output = await reflector.reflect("project")

        assert "work_pattern, temporal_clustering" in output
        assert "limited_perspective" in output
        assert "**Confidence in Understanding:** 100.0%" in output

    @pytest.mark.asyncio
    async def test_deep_reflection_levels(self, reflector, store):
        """Test deep reflection levels."""
        for i in range(3):
            await store.store(MemoryRecord(content=f"project note {i}", context="work"))

        output = await reflector.reflect("project", "deep")

        assert "At depth 2, I question 7 assumptions" in output
        assert "work_pattern, temporal_clustering" in output
        assert "seek_diverse_viewpoints, build_conceptual_knowledge" in output
        assert "3 levels of meta-cognitive analysis" in output
        assert store.memories[-1].content.startswith("Reflection on project: At depth 2")

    @pytest.mark.asyncio
    async def test_philosophical_reflection_levels(self, reflector):
        """Test philosophical reflection levels."""
        output = await reflector.reflect("ethics", "philosophical")
        assert "5 levels of meta-cognitive analysis" in output

    @pytest.mark.asyncio
    async def test_unknown_depth(self, reflector):
        """Test unknown depth."""
        with pytest.raises(ValueError):
            await reflector.reflect("quantum", "bottomless")

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self):
        """Test store failure propagates."""
        store = Mock()
        store.search = AsyncMock(side_effect=RuntimeError("store offline"))
        store.get_reasoning_history = AsyncMock(return_value=[])

        with pytest.raises(RuntimeError):
            await Reflector(store).reflect("quantum")

    def test_biases(self, reflector):
        """Test biases."""
        memories = [MemoryRecord(content=f"m{i}") for i in range(3)]
        history = [make_session("forward") for _ in range(5)]
        assert reflector.assess_potential_biases(memories, history) == [
            "recency_bias",
            "confirmation_bias_tendency",
        ]

    def test_no_biases(self, reflector):
        """Test no biases."""
        old = utcnow() - timedelta(days=30)
        memories = [MemoryRecord(content="old", timestamp=old)]
        history = [make_session("forward"), make_session("backward")]
        assert reflector.assess_potential_biases(memories, history) == []
        assert reflector.assess_potential_biases([], []) == []

    def test_reasoning_patterns(self, reflector):
        """Test reasoning patterns."""
        history = [make_session("forward"), make_session("forward"), make_session("abductive")]
        assert reflector.analyze_reasoning_patterns(history) == ["forward: 2 uses", "abductive: 1 uses"]

    def test_uncertainty_areas(self, reflector):
        """Test uncertainty areas."""
        assert reflector.identify_uncertainty_areas(None) == []

        reflection = Reflection(
            level="base",
            summary="",
            knowledge_gaps=["a", "b", "c"],
            confidence_in_understanding=0.2,
        )
        assert reflector.identify_uncertainty_areas(reflection) == [
            "topic_understanding",
            "knowledge_completeness",
        ]

    def test_meta_questions_grow_with_level(self, reflector):
        """Test meta questions grow with level."""
        assert len(reflector.generate_meta_questions(1)) == 4
        assert len(reflector.generate_meta_questions(2)) == 7

    def test_knowledge_gaps(self, reflector):
        """Test knowledge gaps."""
        assert reflector.identify_knowledge_gaps([]) == ["insufficient_information"]

        memories = [
            MemoryRecord(content="a", context="work", confidence=0.2),
            MemoryRecord(content="b", context="home", confidence=0.3),
            MemoryRecord(content="c", context="travel", confidence=0.9),
        ]
        assert reflector.identify_knowledge_gaps(memories) == ["low_confidence_knowledge"]

    def test_topic_confidence_diversity_bonus_capped(self, reflector):
        """Test topic confidence diversity bonus capped."""
        memories = [MemoryRecord(content=f"m{i}", context=f"context{i}", confidence=0.5) for i in range(5)]
        assert reflector.assess_topic_confidence(memories) == pytest.approx(0.7)

        two_contexts = memories[:2]
        assert reflector.assess_topic_confidence(two_contexts) == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_naive_timestamps(self, reflector, store):
        """Test naive timestamps."""
        await store.store(MemoryRecord(content="project note", timestamp=datetime(2026, 10, 1, 12, 0)))
        await store.store(MemoryRecord(content="project plan"))

        output = await reflector.reflect("project", "deep")
        assert "3 levels of meta-cognitive analysis" in output


class TestConfidenceAssessor:
    """Test multi-factor confidence assessment."""

    @pytest.fixture
    def store(self):
        return InMemoryMemoryStore()

    @pytest.fixture
    def engine(self, store):
        engine = ReasoningEngine({"builtin_rules": False}, memory_store=store)
        engine.add_rule(Rule("p_implies_q", ["P"], "Q", StaticConfidence(0.95)))
        return engine

    @pytest.fixture
    def assessor(self, store, engine):
        return ConfidenceAssessor(store, engine)

    @pytest.mark.asyncio
    async def test_zero_evidence(self, assessor, store):
        """Test zero evidence."""
        assessment = await assessor.assess_confidence("Water boils at 100C")

        assert assessment.score == pytest.approx(0.45)
        assert assessment.level is ConfidenceLevel.LOW
        assert assessment.reasoning_method == "no_evidence"
        assert assessment.breakdown["reasoning_support"] == pytest.approx(0.2)
        assert assessment.breakdown["memory_support"] == 0.0
        assert "Consistency: 0 contradictions found" in assessment.factors

        assert len(store.memories) == 1
        assert store.memories[0].context == "confidence_assessment"
        assert store.memories[0].content == "Confidence assessment: Water boils at 100C - low"

    @pytest.mark.asyncio
    async def test_forward_support(self, assessor, engine):
        """Test forward support."""
        assessment = await assessor.assess_confidence("Q", ["P"])

        assert assessment.reasoning_method == "forward_chaining"
        assert assessment.metadata["reasoning_support"].confidence == pytest.approx(0.95)
        assert assessment.score == pytest.approx(0.65)
        assert assessment.level is ConfidenceLevel.MODERATE
        assert "Reasoning support: forward_chaining reasoning with 95.0% confidence" in assessment.factors

        # evidence is reasoned over in a separate context
        assert engine.context.facts == {}

    @pytest.mark.asyncio
    async def test_asserted_facts_take_part(self, store):
        """Test asserted facts take part."""
        engine = ReasoningEngine({"builtin_rules": False}, memory_store=store)
        engine.add_rule(Rule("a_and_b", ["A", "B"], "C", StaticConfidence(0.9)))
        engine.add_fact("A")

        support = await ConfidenceAssessor(store, engine).assess_reasoning_support("C", ["B"])

        assert support.method == "forward_chaining"
        assert support.confidence == pytest.approx(0.9)
        assert engine.context.facts == {"A": 1.0}

    @pytest.mark.asyncio
    async def test_abductive_fallback(self, store):
        """Test abductive fallback."""
        assessor = ConfidenceAssessor(store, ReasoningEngine(memory_store=store))
        support = await assessor.assess_reasoning_support("It rained", ["wet"])

        assert support.method == "abductive_reasoning"
        assert support.confidence == pytest.approx(0.95 * 0.25 * 0.8)
        assert support.explanations[0].rule == "modus_ponens"

    @pytest.mark.asyncio
    async def test_reasoning_failed(self, store):
        """Test reasoning failed."""
        assessor = ConfidenceAssessor(store, ReasoningEngine({"builtin_rules": False}))
        support = await assessor.assess_reasoning_support("It rained", ["wet"])

        assert support.method == "reasoning_failed"
        assert support.confidence == 0.3

    @pytest.mark.asyncio
    async def test_engine_errors_fall_through(self, store):
        """Test engine errors fall through."""
        engine = Mock()
        engine.context = ReasoningContext()
        engine.reason = AsyncMock(side_effect=RuntimeError("engine down"))
        support = await ConfidenceAssessor(store, engine).assess_reasoning_support("Q", ["P"])

        assert support.method == "reasoning_failed"
        assert engine.reason.await_count == 2

    @pytest.mark.asyncio
    async def test_forward_error_then_abductive(self, store):
        """Test forward error then abductive."""
        abductive = ReasoningResult(
            conclusion="Best explanation: P",
            found=True,
            confidence=0.5,
            steps=[],
            method="abductive_reasoning",
        )
        engine = Mock()
        engine.context = ReasoningContext()
        engine.reason = AsyncMock(side_effect=[RuntimeError("engine down"), abductive])
        support = await ConfidenceAssessor(store, engine).assess_reasoning_support("Q", ["P"])

        assert support.method == "abductive_reasoning"
        assert support.confidence == pytest.approx(0.4)

    @pytest.mark.asyncio
    async def test_memory_support(self, assessor, store):
        """Test memory support."""
        await store.store(MemoryRecord(content="the sky is blue today"))
        support = await assessor.assess_memory_support("the sky is blue")

        assert support.matches == 1
        assert support.supporting == 1
        assert support.contradicting == 0
        assert support.confidence == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_consistency(self, assessor, store):
        """Test consistency."""
        await store.store(MemoryRecord(content="the sky is blue is false"))
        check = await assessor.check_consistency("the sky is blue")

        assert check.contradictions == 1
        assert check.score == pytest.approx(0.8)
        assert check.details[0]["content"] == "the sky is blue is false"

    def test_source_reliability(self, assessor):
        """Test source reliability."""
        assert assessor.assess_source_reliability(["x"]) == 0.7
        assert assessor.assess_source_reliability([]) == 0.5


class TestIntegrationLayer:
    """Test the layer facade."""

    @pytest.mark.asyncio
    async def test_delegates(self):
        """Test delegates."""
        store = InMemoryMemoryStore()
        layer = IntegrationLayer(store, ReasoningEngine(memory_store=store))

        output = await layer.reflect("anything", "deep")
        assessment = await layer.assess_confidence("anything")

        assert "3 levels" in output
        assert assessment.level in set(ConfidenceLevel)
