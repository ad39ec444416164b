# src/models/trust.py

"""Trust assessment model produced by the trust scorer."""

from dataclasses import dataclass
from enum import Enum


class TrustTag(Enum):
    """Headline verdict for a listing."""

    VERIFIED = "Verified"
    MIXED = "Mixed"
    FLAGGED = "Flagged"


class Tone(Enum):
    """Display tone paired with each trust tag."""

    GOOD = "good"
    WARN = "warn"
    BAD = "bad"


@dataclass(frozen=True)
class TrustAssessment:
    """Score, verdict and ordered penalty reasons for one product."""

    score: int
    tag: TrustTag
    tone: Tone
    reasons: tuple[str, ...] = ()

    @property
    def first_reason(self) -> str | None:
        """The reason surfaced in compact displays, if any."""
        return self.reasons[0] if self.reasons else None
