"""
Exposure strategy: how many times a word should be shown.

The longer a learner lingers on a card, the less familiar the word is and
the more exposures it gets. Swipe history nudges the count up or down and
the result is clamped to a fixed range.

Policies are variants of one strategy value, selected by configuration:

    DWELL     dwell band + swipe adjustment (default)
    FIXED     constant count, ignores evidence
    ADAPTIVE  DWELL scaled by how far into the plan the learner is
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from vocaplan.domain.constants import (
    ADAPTIVE_EARLY_PHASE,
    ADAPTIVE_GOAL_MAX_DAYS,
    ADAPTIVE_LATE_PHASE,
    ADAPTIVE_MODIFIERS,
    EARLY_MASTERY_RIGHT_SWIPES,
    FAMILIAR_EXPOSURES,
    FAMILIAR_THRESHOLD,
    FIXED_EXPOSURE_COUNT,
    LEFT_SWIPE_PENALTY,
    MAX_EXPOSURES,
    MIN_EXPOSURES,
    RIGHT_SWIPE_BONUS,
    UNFAMILIAR_EXPOSURES,
    UNFAMILIAR_THRESHOLD,
    VERY_FAMILIAR_EXPOSURES,
    VERY_FAMILIAR_THRESHOLD,
    VERY_UNFAMILIAR_EXPOSURES,
)
from vocaplan.domain.models import LearningGoal, ReviewRecord

logger = logging.getLogger(__name__)


class ExposurePolicy(str, Enum):
    DWELL = "dwell"
    FIXED = "fixed"
    ADAPTIVE = "adaptive"


@dataclass(frozen=True)
class ExposureSettings:
    """
    Tunable numbers for the exposure policies.

    Thresholds are half-open upper bounds in seconds: below
    `very_familiar_threshold` gets `very_familiar_exposures`, and so on;
    anything at or above `unfamiliar_threshold` gets `very_unfamiliar_exposures`.
    """

    very_familiar_threshold: float = VERY_FAMILIAR_THRESHOLD
    familiar_threshold: float = FAMILIAR_THRESHOLD
    unfamiliar_threshold: float = UNFAMILIAR_THRESHOLD

    very_familiar_exposures: int = VERY_FAMILIAR_EXPOSURES
    familiar_exposures: int = FAMILIAR_EXPOSURES
    unfamiliar_exposures: int = UNFAMILIAR_EXPOSURES
    very_unfamiliar_exposures: int = VERY_UNFAMILIAR_EXPOSURES

    right_swipe_bonus: int = RIGHT_SWIPE_BONUS  # per unit of right dominance
    left_swipe_penalty: int = LEFT_SWIPE_PENALTY  # per unit of left dominance

    min_exposures: int = MIN_EXPOSURES
    max_exposures: int = MAX_EXPOSURES

    fixed_exposure_count: int = FIXED_EXPOSURE_COUNT


@dataclass(frozen=True)
class ExposureStrategy:
    """
    Decides the exposure quota of a word and when exposure can stop.

    Attributes:
        policy: Which variant to apply.
        settings: Thresholds, counts and clamp bounds.
        current_day: 1-based plan day (ADAPTIVE only).
        total_days: Plan length (ADAPTIVE only).
    """

    policy: ExposurePolicy = ExposurePolicy.DWELL
    settings: ExposureSettings = field(default_factory=ExposureSettings)
    current_day: int = 1
    total_days: int = 1

    @property
    def name(self) -> str:
        if self.policy is ExposurePolicy.FIXED:
            return "Fixed exposure"
        if self.policy is ExposurePolicy.ADAPTIVE:
            return f"Adaptive exposure (day {self.current_day}/{self.total_days})"
        return "Dwell-time exposure"

    @property
    def description(self) -> str:
        s = self.settings
        if self.policy is ExposurePolicy.FIXED:
            return f"Every word is shown {s.fixed_exposure_count} times."
        lines = [
            f"dwell < {s.very_familiar_threshold}s -> {s.very_familiar_exposures} exposures",
            f"dwell < {s.familiar_threshold}s -> {s.familiar_exposures} exposures",
            f"dwell < {s.unfamiliar_threshold}s -> {s.unfamiliar_exposures} exposures",
            f"otherwise -> {s.very_unfamiliar_exposures} exposures",
            f"right dominance {s.right_swipe_bonus:+d}, left dominance {s.left_swipe_penalty:+d}",
            f"clamped to [{s.min_exposures}, {s.max_exposures}]",
        ]
        if self.policy is ExposurePolicy.ADAPTIVE:
            lines.append("scaled x1.2 early in the plan, x1.0 mid-plan, x0.8 late")
        return "\n".join(lines)

    def calculate_exposures(self, record: ReviewRecord) -> int:
        """Total number of exposures this word should receive."""
        return _CALCULATORS[self.policy](self, record)

    def should_continue_exposure(self, record: ReviewRecord) -> bool:
        """
        False once the quota is used up, or (except FIXED) once the word is
        clearly known: at least three right swipes with a fast average dwell.
        """
        if record.remaining_exposures <= 0:
            logger.debug(f"word_id={record.word_id}: no remaining exposures, stop")
            return False

        if self.policy is not ExposurePolicy.FIXED and self.is_early_mastery(record):
            logger.debug(f"word_id={record.word_id}: early mastery, stop")
            return False

        return True

    def is_early_mastery(self, record: ReviewRecord) -> bool:
        return (
            record.right_count >= EARLY_MASTERY_RIGHT_SWIPES
            and record.average_dwell < self.settings.very_familiar_threshold
        )

    def base_exposures(self, dwell_seconds: float) -> int:
        s = self.settings
        if dwell_seconds < s.very_familiar_threshold:
            return s.very_familiar_exposures
        if dwell_seconds < s.familiar_threshold:
            return s.familiar_exposures
        if dwell_seconds < s.unfamiliar_threshold:
            return s.unfamiliar_exposures
        return s.very_unfamiliar_exposures

    def swipe_adjustment(self, right_count: int, left_count: int) -> int:
        dominance = right_count - left_count
        if dominance > 0:
            return dominance * self.settings.right_swipe_bonus
        if dominance < 0:
            return -dominance * self.settings.left_swipe_penalty
        return 0

    def day_modifier(self) -> float:
        early, standard, late = ADAPTIVE_MODIFIERS
        progress = self.current_day / max(self.total_days, 1)
        if progress < ADAPTIVE_EARLY_PHASE:
            return early
        if progress < ADAPTIVE_LATE_PHASE:
            return standard
        return late


def _dwell_exposures(strategy: ExposureStrategy, record: ReviewRecord) -> int:
    s = strategy.settings
    base = strategy.base_exposures(record.average_dwell)
    adjustment = strategy.swipe_adjustment(record.right_count, record.left_count)
    result = max(s.min_exposures, min(s.max_exposures, base + adjustment))

    if record.total_exposures > 0:
        logger.debug(
            f"word_id={record.word_id}: dwell={record.average_dwell:.1f}s, "
            f"base={base}, adjust={adjustment}, final={result}"
        )
    return result


def _fixed_exposures(strategy: ExposureStrategy, record: ReviewRecord) -> int:
    return strategy.settings.fixed_exposure_count


def _adaptive_exposures(strategy: ExposureStrategy, record: ReviewRecord) -> int:
    base = _dwell_exposures(strategy, record)
    modifier = strategy.day_modifier()
    adjusted = int(round(base * modifier, 6))
    return max(strategy.settings.min_exposures, adjusted)


_CALCULATORS = {
    ExposurePolicy.DWELL: _dwell_exposures,
    ExposurePolicy.FIXED: _fixed_exposures,
    ExposurePolicy.ADAPTIVE: _adaptive_exposures,
}


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def default_strategy(settings: ExposureSettings | None = None) -> ExposureStrategy:
    return ExposureStrategy(ExposurePolicy.DWELL, settings or ExposureSettings())


def fixed_strategy(exposure_count: int = FIXED_EXPOSURE_COUNT) -> ExposureStrategy:
    return ExposureStrategy(
        ExposurePolicy.FIXED, ExposureSettings(fixed_exposure_count=exposure_count)
    )


def adaptive_strategy(
    current_day: int, total_days: int, settings: ExposureSettings | None = None
) -> ExposureStrategy:
    return ExposureStrategy(
        ExposurePolicy.ADAPTIVE,
        settings or ExposureSettings(),
        current_day=current_day,
        total_days=total_days,
    )


def build_strategy(
    policy: ExposurePolicy,
    settings: ExposureSettings | None = None,
    current_day: int | None = None,
    total_days: int | None = None,
) -> ExposureStrategy:
    """
    Build a strategy from a configured policy name.

    Raises:
        ValueError: If the policy is ADAPTIVE and the plan position is missing
            or out of range.
    """
    settings = settings or ExposureSettings()
    if policy is ExposurePolicy.ADAPTIVE:
        if current_day is None or total_days is None:
            raise ValueError("adaptive exposure needs the current day and the plan length")
        if total_days < 1 or not 1 <= current_day <= total_days:
            raise ValueError(f"day {current_day} is outside a {total_days}-day plan")
        return adaptive_strategy(current_day, total_days, settings)
    return ExposureStrategy(policy, settings)


def strategy_for_goal(
    goal: LearningGoal, settings: ExposureSettings | None = None
) -> ExposureStrategy:
    """Short sprints (10 days or fewer) adapt to plan progress; longer plans use dwell."""
    if goal.duration_days <= ADAPTIVE_GOAL_MAX_DAYS:
        return adaptive_strategy(goal.current_day, goal.duration_days, settings)
    return default_strategy(settings)


# ---------------------------------------------------------------------------
# Decision maker
# ---------------------------------------------------------------------------


class ExposureDecisionMaker:
    """
    Applies a strategy to concrete records during a study session.
    """

    def __init__(self, strategy: ExposureStrategy | None = None):
        self._strategy = strategy or default_strategy()

    @property
    def strategy(self) -> ExposureStrategy:
        return self._strategy

    def assign_initial_exposures(self, word_id: int) -> int:
        """Quota for a word that has never been shown."""
        return self._strategy.calculate_exposures(ReviewRecord(word_id=word_id))

    def introduce(self, word_id: int) -> ReviewRecord:
        """Create the record for a newly introduced word with its seeded quota."""
        return ReviewRecord.initial(word_id, self.assign_initial_exposures(word_id))

    def adjust_exposures(self, record: ReviewRecord) -> int:
        """
        Recompute the target as evidence accumulates.

        The target never drops below its current value while exposures remain,
        and is frozen once it has been reached.
        """
        if record.total_exposures >= record.target_exposures:
            return record.target_exposures
        recommended = self._strategy.calculate_exposures(record)
        return max(recommended, record.target_exposures)

    def can_stop_early(self, record: ReviewRecord) -> bool:
        return not self._strategy.should_continue_exposure(record)
