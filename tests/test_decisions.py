"""Tests for the ambiguity cache and decision providers."""

from slicer_profile_converter.decisions import (
    Ambiguity,
    AmbiguityCache,
    AmbiguityKind,
    InteractiveDecisionProvider,
    accept_proposed,
    discard_conditions,
)
from slicer_profile_converter.tables import SUPPORT_STYLES


def _style(value, proposal=None):
    return Ambiguity(kind=AmbiguityKind.SUPPORT_STYLE, key="support_material_style", value=value, proposal=proposal)


def _condition(value):
    return Ambiguity(kind=AmbiguityKind.COMPATIBILITY_CONDITION, key="compatible_printers_condition", value=value)


class FakeBackend:
    def __init__(self, confirms, answer=None):
        self.confirms = list(confirms)
        self.answer = answer
        self.messages = []
        self.asked = []

    def confirm(self, message, default):
        self.messages.append(message)
        return self.confirms.pop(0)

    def ask(self, message, choices, default):
        self.asked.append((choices, default))
        return self.answer


class TestHeadlessProviders:
    def test_accept_proposed(self):
        assert accept_proposed(_style("tree", ("tree", "default"))) == ("tree", "default")
        assert accept_proposed(_condition("x")) is True

    def test_discard_conditions(self):
        assert discard_conditions(_style("tree", ("tree", "default"))) == ("tree", "default")
        assert discard_conditions(_condition("x")) is False


class TestAmbiguityCache:
    def test_first_occurrence_wins(self):
        calls = []

        def provider(ambiguity):
            calls.append(ambiguity.value)
            return ambiguity.proposal

        cache = AmbiguityCache(provider)
        assert cache.resolve(_style("tree", ("tree", "default"))) == ("tree", "default")
        assert cache.resolve(_style("grid", ("normal", "grid"))) == ("tree", "default")
        assert calls == ["tree"]

    def test_kinds_are_independent(self):
        cache = AmbiguityCache(discard_conditions)
        cache.resolve(_style("grid", ("normal", "grid")))
        assert not cache.has(AmbiguityKind.COMPATIBILITY_CONDITION)
        assert cache.resolve(_condition("x")) is False
        assert cache.has(AmbiguityKind.COMPATIBILITY_CONDITION)

    def test_default_provider(self):
        cache = AmbiguityCache()
        assert cache.resolve(_condition("x")) is True

    def test_clear(self):
        cache = AmbiguityCache()
        cache.resolve(_condition("x"))
        cache.clear()
        assert not cache.has(AmbiguityKind.COMPATIBILITY_CONDITION)
        assert cache.get(AmbiguityKind.COMPATIBILITY_CONDITION) is None

    def test_separate_caches_do_not_share_decisions(self):
        first = AmbiguityCache(discard_conditions)
        second = AmbiguityCache(accept_proposed)
        assert first.resolve(_condition("x")) is False
        assert second.resolve(_condition("x")) is True


class TestInteractiveDecisionProvider:
    def test_accepts_proposed_style(self):
        backend = FakeBackend([True])
        provider = InteractiveDecisionProvider(SUPPORT_STYLES, backend)
        assert provider(_style("organic", ("tree", "organic"))) == ("tree", "organic")
        assert "organic" in backend.messages[0]
        assert backend.asked == []

    def test_picks_other_style(self):
        backend = FakeBackend([False], answer="snug")
        provider = InteractiveDecisionProvider(SUPPORT_STYLES, backend)
        assert provider(_style("organic", ("tree", "organic"))) == ("normal", "snug")
        choices, default = backend.asked[0]
        assert choices == list(SUPPORT_STYLES)
        assert default == "organic"

    def test_condition(self):
        backend = FakeBackend([False])
        provider = InteractiveDecisionProvider(SUPPORT_STYLES, backend)
        assert provider(_condition("printer_notes=~/.*MK3.*/")) is False
        assert "printer_notes=~/.*MK3.*/" in backend.messages[0]

    def test_unmapped_style_goes_straight_to_choice(self):
        backend = FakeBackend([], answer="tree")
        provider = InteractiveDecisionProvider(SUPPORT_STYLES, backend)
        assert provider(_style("weird")) == ("tree", "default")
        assert backend.messages == []
        assert backend.asked[0][1] == "grid"


def test_none_decision_is_not_cached():
    answers = [None, ("tree", "organic")]
    calls = []

    def provider(ambiguity):
        calls.append(ambiguity.value)
        return answers.pop(0)

    cache = AmbiguityCache(provider)
    assert cache.resolve(_style("weird")) is None
    assert not cache.has(AmbiguityKind.SUPPORT_STYLE)
    assert cache.resolve(_style("organic", ("tree", "organic"))) == ("tree", "organic")
    assert cache.resolve(_style("grid", ("normal", "grid"))) == ("tree", "organic")
    assert calls == ["weird", "organic"]
