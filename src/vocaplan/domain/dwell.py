"""
Dwell-time classification.

Maps the seconds a learner looked at a card onto one of five familiarity
bands. Bands are half-open, lower bound inclusive:

    VERY_FAST  [0, 2)   very familiar
    FAST       [2, 5)   familiar
    MEDIUM     [5, 8)   unfamiliar
    SLOW       [8, 10)  difficult
    VERY_SLOW  [10, ∞)  very difficult
"""

from enum import Enum

from .constants import (
    DIFFICULT_THRESHOLD,
    FAMILIAR_THRESHOLD,
    UNFAMILIAR_THRESHOLD,
    VERY_FAMILIAR_THRESHOLD,
)


class DwellBand(str, Enum):
    VERY_FAST = "very_fast"
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"
    VERY_SLOW = "very_slow"

    @property
    def lower_bound(self) -> float:
        return _LOWER_BOUNDS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_difficult(self) -> bool:
        """MEDIUM and slower count as words needing work."""
        return self in (DwellBand.MEDIUM, DwellBand.SLOW, DwellBand.VERY_SLOW)


_LOWER_BOUNDS = {
    DwellBand.VERY_FAST: 0.0,
    DwellBand.FAST: VERY_FAMILIAR_THRESHOLD,
    DwellBand.MEDIUM: FAMILIAR_THRESHOLD,
    DwellBand.SLOW: UNFAMILIAR_THRESHOLD,
    DwellBand.VERY_SLOW: DIFFICULT_THRESHOLD,
}

_LABELS = {
    DwellBand.VERY_FAST: "<2s",
    DwellBand.FAST: "2-5s",
    DwellBand.MEDIUM: "5-8s",
    DwellBand.SLOW: "8-10s",
    DwellBand.VERY_SLOW: ">10s",
}

_DISPLAY_NAMES = {
    DwellBand.VERY_FAST: "very familiar",
    DwellBand.FAST: "familiar",
    DwellBand.MEDIUM: "unfamiliar",
    DwellBand.SLOW: "difficult",
    DwellBand.VERY_SLOW: "very difficult",
}


def classify(dwell_seconds: float) -> DwellBand:
    """
    Classify a dwell time into its familiarity band.

    Callers clamp negative values to 0 first; anything below the first
    threshold lands in VERY_FAST regardless.
    """
    if dwell_seconds < VERY_FAMILIAR_THRESHOLD:
        return DwellBand.VERY_FAST
    if dwell_seconds < FAMILIAR_THRESHOLD:
        return DwellBand.FAST
    if dwell_seconds < UNFAMILIAR_THRESHOLD:
        return DwellBand.MEDIUM
    if dwell_seconds < DIFFICULT_THRESHOLD:
        return DwellBand.SLOW
    return DwellBand.VERY_SLOW
