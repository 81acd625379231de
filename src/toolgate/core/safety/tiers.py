"""Risk tiers and the verdict type folded across a command line."""

from __future__ import annotations

from dataclasses import dataclass, field
import enum


class SafetyTier(enum.Enum):
    """Risk tier for a command or path.

    GREEN runs without a prompt, YELLOW needs a human yes/no, RED is blocked.
    """

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    RED = "RED"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, SafetyTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, SafetyTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, SafetyTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, SafetyTier):
            return NotImplemented
        return self.rank >= other.rank


_RANK = {SafetyTier.GREEN: 0, SafetyTier.YELLOW: 1, SafetyTier.RED: 2}


def escalate(*tiers: SafetyTier) -> SafetyTier:
    """Return the worst tier, GREEN when nothing is given."""
    return max(tiers, default=SafetyTier.GREEN)


@dataclass(slots=True)
class ClassificationVerdict:
    """Tier plus ordered, human-readable reasons for audit logging.

    The tier only moves upward; ``escalate`` never lowers it.
    """

    tier: SafetyTier = SafetyTier.GREEN
    reasons: list[str] = field(default_factory=list)

    def escalate(self, tier: SafetyTier, reason: str | None = None) -> None:
        """Raise the tier to ``tier`` if it is worse and record the reason."""
        self.tier = escalate(self.tier, tier)
        if reason and tier is not SafetyTier.GREEN:
            self.reasons.append(f"{tier.value}: {reason}")

    def merge(self, other: ClassificationVerdict) -> None:
        """Fold another verdict into this one, keeping its reasons verbatim."""
        self.tier = escalate(self.tier, other.tier)
        self.reasons.extend(other.reasons)

    @property
    def is_red(self) -> bool:
        return self.tier is SafetyTier.RED
