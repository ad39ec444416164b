# src/filters/trust_scorer.py

"""Heuristic trust scoring for individual listings."""

import logging

from src.config.settings import Settings
from src.models.product import Product
from src.models.trust import Tone, TrustAssessment, TrustTag

logger = logging.getLogger("veribuy.trust")

# (name, offset) pairs for the per-aspect demo ratings
_ASPECT_OFFSETS: tuple[tuple[str, int], ...] = (
    ("Value", 2),
    ("Longevity", 1),
    ("Comfort", 3),
    ("Pigmentation", 0),
)


def is_major_retailer(source: str | None) -> bool:
    """Case-insensitive substring match against the major retailer list."""
    lowered = (source or "").lower()
    return any(name in lowered for name in Settings.MAJOR_RETAILERS)


class TrustScorer:
    """Score how far a listing can be trusted from its seller signals."""

    @staticmethod
    def _verdict(score: int) -> tuple[TrustTag, Tone]:
        """Map a clamped score to its tag and tone."""
        if score < Settings.TRUST_FLAGGED_BELOW:
            return TrustTag.FLAGGED, Tone.BAD
        if score < Settings.TRUST_MIXED_BELOW:
            return TrustTag.MIXED, Tone.WARN
        return TrustTag.VERIFIED, Tone.GOOD

    @staticmethod
    def score(product: Product, strict: bool = True) -> TrustAssessment:
        """Compute the trust assessment for *product*.

        Starts from a base of 72 and applies additive bonuses and
        penalties for the seller, rating presence and review volume.
        Strict mode roughly doubles the missing-signal penalties.
        Reasons are recorded in the order the penalties apply.
        """
        score = Settings.TRUST_BASE_SCORE
        reasons: list[str] = []

        if is_major_retailer(product.source):
            score += 10
        else:
            score -= 5
            reasons.append("Non-major seller")

        if product.rating is None:
            score -= 12 if strict else 6
            reasons.append("No rating signal")

        reviews = product.reviews or 0
        if reviews == 0:
            score -= 14 if strict else 7
            reasons.append("No review count")
        elif reviews < Settings.LOW_REVIEW_VOLUME:
            score -= 9 if strict else 5
            reasons.append("Low review volume")
        elif reviews > Settings.HIGH_REVIEW_VOLUME:
            score += 6

        score = max(0, min(100, score))
        tag, tone = TrustScorer._verdict(score)
        logger.debug(
            "Trust %d (%s) for '%s' from %s",
            score, tag.value, product.title, product.source,
        )
        return TrustAssessment(
            score=score, tag=tag, tone=tone, reasons=tuple(reasons)
        )


def aspect_scores(trust_score: int) -> dict[str, float]:
    """Derive the demo per-aspect star ratings from a trust score.

    Each aspect is centred on ``3.6 + trust/100 * 1.2``, nudged by a
    fixed offset and clamped to [3.5, 4.9].
    """
    base = 3.6 + (trust_score / 100) * 1.2
    return {
        name: round(max(3.5, min(4.9, base + (offset - 1.5) * 0.08)), 1)
        for name, offset in _ASPECT_OFFSETS
    }
