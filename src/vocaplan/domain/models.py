"""
Domain models for the scheduling engine.

These are pure data structures with no I/O or external dependencies.
The engine never keeps references to them across calls; callers own the
records and persist whatever comes back.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .constants import (
    DEFAULT_EASE_FACTOR,
    EARLY_MASTERY_RIGHT_SWIPES,
    SECONDS_PER_EXPOSURE,
    VERY_FAMILIAR_THRESHOLD,
)


class SwipeDirection(str, Enum):
    """Right swipe means the learner knew the word, left means they did not."""

    KNOWN = "known"
    UNKNOWN = "unknown"


class LearningPhase(str, Enum):
    INITIAL = "initial"
    REINFORCEMENT = "reinforcement"
    CONSOLIDATION = "consolidation"
    MAINTENANCE = "maintenance"


class MasteryLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    MASTERED = "mastered"

    @property
    def rank(self) -> int:
        """Ordinal position, beginner = 0."""
        return list(MasteryLevel).index(self)

    @property
    def progress(self) -> float:
        return (self.rank + 1) / len(MasteryLevel)


class TaskStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


@dataclass
class ReviewRecord:
    """
    Per-word learning state.

    One record exists per learner/word pair. It is created when the word is
    introduced (target exposures seeded by the exposure strategy) and mutated
    once per swipe event by `SpacedRepetitionScheduler.record_swipe`.
    """

    word_id: int

    # Exposure counters
    total_exposures: int = 0
    remaining_exposures: int = 0
    target_exposures: int = 0

    # Swipe counters
    right_count: int = 0  # "known"
    left_count: int = 0  # "unknown"

    # Seconds on screen, one entry per exposure
    dwell_history: list[float] = field(default_factory=list)

    # SM-2 scheduling state
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval: int = 0  # days
    last_reviewed_at: datetime | None = None
    next_due: datetime | None = None
    review_count: int = 0
    lapses: int = 0
    consecutive_correct: int = 0
    consecutive_incorrect: int = 0

    # Derived classification, refreshed on every swipe
    phase: LearningPhase = LearningPhase.INITIAL
    mastery: MasteryLevel = MasteryLevel.BEGINNER

    first_learned_at: datetime | None = None

    @classmethod
    def initial(cls, word_id: int, target_exposures: int) -> "ReviewRecord":
        target = max(0, target_exposures)
        return cls(word_id=word_id, target_exposures=target, remaining_exposures=target)

    @property
    def total_dwell(self) -> float:
        return sum(self.dwell_history)

    @property
    def average_dwell(self) -> float:
        if not self.dwell_history:
            return 0.0
        return self.total_dwell / len(self.dwell_history)

    @property
    def is_mastered(self) -> bool:
        """Quick mastery check used while a word is still in its exposure quota."""
        return (
            self.right_count >= EARLY_MASTERY_RIGHT_SWIPES
            and self.average_dwell < VERY_FAMILIAR_THRESHOLD
        )

    @property
    def right_ratio(self) -> float:
        return self.right_count / max(self.total_exposures, 1)

    def set_target(self, target_exposures: int) -> None:
        self.target_exposures = max(0, target_exposures)
        self.sync_remaining()

    def sync_remaining(self) -> None:
        self.remaining_exposures = max(0, self.target_exposures - self.total_exposures)


@dataclass(frozen=True)
class ReviewSchedule:
    """Output of one SM-2 step."""

    interval: int
    ease_factor: float
    due_at: datetime


@dataclass(frozen=True)
class LearningGoal:
    """
    A fixed-length vocabulary plan, e.g. 3000 words in 10 days.

    Attributes:
        goal_id: Identifier carried onto every generated task.
        total_words: Words to introduce over the whole plan.
        duration_days: Number of days in the plan.
        start_date: Calendar date of day 1.
        current_day: 1-based day the learner is on.
    """

    goal_id: int
    total_words: int
    duration_days: int
    start_date: date
    current_day: int = 1
    name: str = ""


@dataclass
class DailyTask:
    """One day of a plan: which words to introduce and which to revisit."""

    goal_id: int
    day: int
    date: date
    new_word_ids: list[int]
    review_word_ids: list[int]
    total_exposures_planned: int
    completed_exposures: int = 0
    status: TaskStatus = TaskStatus.PENDING

    @property
    def total_words(self) -> int:
        return len(self.new_word_ids) + len(self.review_word_ids)

    @property
    def progress(self) -> float:
        if self.total_exposures_planned <= 0:
            return 0.0
        return self.completed_exposures / self.total_exposures_planned

    @property
    def remaining_exposures(self) -> int:
        return max(0, self.total_exposures_planned - self.completed_exposures)

    @property
    def estimated_minutes(self) -> int:
        return int(self.total_exposures_planned * SECONDS_PER_EXPOSURE / 60)

    def record_progress(self, exposures: int = 1) -> None:
        """Count finished exposures and advance the status."""
        if exposures <= 0:
            return
        self.completed_exposures = min(
            self.total_exposures_planned, self.completed_exposures + exposures
        )
        if self.completed_exposures >= self.total_exposures_planned:
            self.status = TaskStatus.COMPLETED
        else:
            self.status = TaskStatus.IN_PROGRESS
