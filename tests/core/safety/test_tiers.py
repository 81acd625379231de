"""Tests for safety tiers and verdict folding."""

from __future__ import annotations

from toolgate.core.safety.tiers import ClassificationVerdict, SafetyTier, escalate


def test_tiers_are_ordered() -> None:
    assert SafetyTier.GREEN < SafetyTier.YELLOW < SafetyTier.RED
    assert SafetyTier.RED >= SafetyTier.RED
    assert max([SafetyTier.YELLOW, SafetyTier.RED, SafetyTier.GREEN]) is SafetyTier.RED


def test_escalate_returns_worst_tier() -> None:
    assert escalate() is SafetyTier.GREEN
    assert escalate(SafetyTier.GREEN, SafetyTier.YELLOW) is SafetyTier.YELLOW
    assert escalate(SafetyTier.RED, SafetyTier.GREEN) is SafetyTier.RED


class TestClassificationVerdict:
    """Tests for ClassificationVerdict."""

    def test_starts_green_without_reasons(self) -> None:
        verdict = ClassificationVerdict()

        assert verdict.tier is SafetyTier.GREEN
        assert verdict.reasons == []
        assert not verdict.is_red

    def test_escalate_never_lowers_tier(self) -> None:
        # input
        verdict = ClassificationVerdict()

        # act
        verdict.escalate(SafetyTier.RED, "blocked command: rm")
        verdict.escalate(SafetyTier.YELLOW, "unknown command: make")
        verdict.escalate(SafetyTier.GREEN, "ignored")

        # assert
        assert verdict.tier is SafetyTier.RED
        assert verdict.is_red
        assert verdict.reasons == [
            "RED: blocked command: rm",
            "YELLOW: unknown command: make",
        ]

    def test_merge_folds_tier_and_reasons(self) -> None:
        # input
        outer = ClassificationVerdict()
        outer.escalate(SafetyTier.YELLOW, "first")
        inner = ClassificationVerdict()
        inner.escalate(SafetyTier.RED, "second")

        # act
        outer.merge(inner)

        # assert
        assert outer.tier is SafetyTier.RED
        assert outer.reasons == ["YELLOW: first", "RED: second"]

    def test_merge_with_green_keeps_tier(self) -> None:
        outer = ClassificationVerdict()
        outer.escalate(SafetyTier.YELLOW, "first")

        outer.merge(ClassificationVerdict())

        assert outer.tier is SafetyTier.YELLOW
        assert len(outer.reasons) == 1
