"""
Multi-day task planning.

Spreads a fixed vocabulary over a fixed number of days. The default
(quantitative) policy front-loads new words: the first 70% of days carry
90% of the vocabulary, later days shift toward review. Review words for a
day are yesterday's slowest words, taken from the dwell-time analysis.

Policies are variants of one strategy value:

    QUANTITATIVE  front-loaded split, presets standard / intensive / relaxed
    BALANCED      same number of new words every day
    PROGRESSIVE   light start, heavy middle, lighter finish
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum

from vocaplan.domain.constants import (
    DAILY_REVIEW_COUNT,
    FRONT_LOAD_RATIO,
    FRONT_LOAD_WORDS,
    NEW_WORD_EXPOSURES,
    PROGRESSIVE_WEIGHTS,
    REVIEW_WORD_EXPOSURES,
)
from vocaplan.domain.models import DailyTask, LearningGoal, ReviewRecord

from .analysis.analyzer import DwellTimeAnalysis, DwellTimeAnalyzer

logger = logging.getLogger(__name__)


class TaskPolicy(str, Enum):
    QUANTITATIVE = "quantitative"
    BALANCED = "balanced"
    PROGRESSIVE = "progressive"


@dataclass(frozen=True)
class PlannerConfig:
    """
    Attributes:
        front_load_ratio: Share of days that carry the bulk of new words.
        front_load_words: Share of words introduced in those days.
        daily_review_count: Review words taken from yesterday's analysis.
        new_word_exposures: Planned exposures per new word.
        review_word_exposures: Planned exposures per review word.
    """

    front_load_ratio: float = FRONT_LOAD_RATIO
    front_load_words: float = FRONT_LOAD_WORDS
    daily_review_count: int = DAILY_REVIEW_COUNT
    new_word_exposures: int = NEW_WORD_EXPOSURES
    review_word_exposures: int = REVIEW_WORD_EXPOSURES


STANDARD = PlannerConfig()
INTENSIVE = PlannerConfig(
    front_load_ratio=0.6,
    front_load_words=0.95,
    daily_review_count=30,
    new_word_exposures=12,
    review_word_exposures=6,
)
RELAXED = PlannerConfig(
    front_load_ratio=0.8,
    front_load_words=0.85,
    daily_review_count=15,
    new_word_exposures=8,
    review_word_exposures=4,
)

PRESETS = {"standard": STANDARD, "intensive": INTENSIVE, "relaxed": RELAXED}


@dataclass(frozen=True)
class WordDistribution:
    front_days: int
    front_words: int
    back_words: int
    daily_new_words: list[int] = field(default_factory=list)


def _floor(value: float) -> int:
    # 10 * 0.7 must give 7, not 6
    return math.floor(round(value, 9))


def front_loaded_distribution(
    total_days: int, total_words: int, config: PlannerConfig = STANDARD
) -> WordDistribution:
    """
    New words per day for the quantitative policy.

    Each period splits its words evenly with integer division; whatever is
    left over lands on the last day so the plan sums to `total_words`.
    """
    if total_days <= 0:
        return WordDistribution(0, 0, total_words, [])

    front_days = _floor(total_days * config.front_load_ratio)
    front_words = _floor(total_words * config.front_load_words)
    back_words = total_words - front_words
    back_days = total_days - front_days

    daily = [front_words // max(front_days, 1)] * front_days
    daily += [back_words // max(back_days, 1)] * back_days
    _correct_last_day(daily, total_words)

    return WordDistribution(front_days, front_words, back_words, daily)


def balanced_distribution(total_days: int, total_words: int) -> list[int]:
    if total_days <= 0:
        return []
    daily = [total_words // total_days] * total_days
    _correct_last_day(daily, total_words)
    return daily


def progressive_distribution(total_days: int, total_words: int) -> list[int]:
    """Thirds of the plan weighted 0.7 / 1.2 / 0.8 of the daily average."""
    if total_days <= 0:
        return []
    average = total_words // total_days
    front_days = total_days // 3
    mid_days = total_days // 3
    back_days = total_days - front_days - mid_days
    early, middle, late = PROGRESSIVE_WEIGHTS

    daily = [_floor(average * early)] * front_days
    daily += [_floor(average * middle)] * mid_days
    daily += [_floor(average * late)] * back_days
    _correct_last_day(daily, total_words)
    return daily


def _correct_last_day(daily: list[int], total_words: int) -> None:
    if not daily:
        return
    daily[-1] = max(0, daily[-1] + total_words - sum(daily))


@dataclass(frozen=True)
class TaskGenerationStrategy:
    """
    Turns a learning goal into daily tasks.

    Attributes:
        policy: Which distribution to use.
        config: Ratios, review count and exposure multipliers.
    """

    policy: TaskPolicy = TaskPolicy.QUANTITATIVE
    config: PlannerConfig = STANDARD

    @property
    def name(self) -> str:
        return {
            TaskPolicy.QUANTITATIVE: "Front-loaded plan",
            TaskPolicy.BALANCED: "Balanced plan",
            TaskPolicy.PROGRESSIVE: "Progressive plan",
        }[self.policy]

    @property
    def description(self) -> str:
        c = self.config
        if self.policy is TaskPolicy.QUANTITATIVE:
            return (
                f"First {int(c.front_load_ratio * 100)}% of days introduce "
                f"{int(c.front_load_words * 100)}% of the words; "
                f"{c.daily_review_count} review words a day chosen by yesterday's dwell time; "
                f"{c.new_word_exposures} exposures per new word, "
                f"{c.review_word_exposures} per review word."
            )
        if self.policy is TaskPolicy.BALANCED:
            return "Same number of new words every day."
        return "Light start, heavy middle, lighter finish."

    def daily_new_word_counts(self, goal: LearningGoal, pack_entries: Sequence[int]) -> list[int]:
        total_words = min(goal.total_words, len(pack_entries))
        if self.policy is TaskPolicy.BALANCED:
            return balanced_distribution(goal.duration_days, total_words)
        if self.policy is TaskPolicy.PROGRESSIVE:
            return progressive_distribution(goal.duration_days, total_words)
        return front_loaded_distribution(goal.duration_days, total_words, self.config).daily_new_words

    def generate_complete_plan(
        self, goal: LearningGoal, pack_entries: Sequence[int]
    ) -> list[DailyTask]:
        """
        Every day of the plan up front.

        Review words stay empty here; they depend on how each day actually
        went and are filled in by `generate_daily_task`.
        """
        if goal.duration_days <= 0:
            logger.warning(f"Goal {goal.goal_id} has no days, nothing to plan")
            return []

        counts = self.daily_new_word_counts(goal, pack_entries)
        logger.debug(
            f"{self.name}: {goal.duration_days} days, {sum(counts)} words, "
            f"first day {counts[0]}, last day {counts[-1]}"
        )

        tasks = []
        offset = 0
        for day, count in enumerate(counts, start=1):
            new_words = list(pack_entries[offset : offset + count])
            offset += len(new_words)
            tasks.append(self._create_task(goal, day, new_words, []))

        logger.info(
            f"Planned {len(tasks)} days for goal {goal.goal_id}: "
            f"{sum(len(t.new_word_ids) for t in tasks)} new words"
        )
        return tasks

    def generate_daily_task(
        self,
        goal: LearningGoal,
        day: int,
        pack_entries: Sequence[int],
        previous_analysis: DwellTimeAnalysis | None = None,
    ) -> DailyTask:
        """
        One day's task, with review words taken from the previous day's
        analysis (hardest first).
        """
        if goal.duration_days <= 0:
            logger.warning(f"Goal {goal.goal_id} has no days, returning an empty task")
            return self._create_task(goal, max(day, 1), [], [])

        clamped = max(1, min(day, goal.duration_days))
        if clamped != day:
            logger.warning(f"Day {day} outside 1..{goal.duration_days}, using day {clamped}")
            day = clamped

        counts = self.daily_new_word_counts(goal, pack_entries)
        start = sum(counts[: day - 1])
        new_words = list(pack_entries[start : start + counts[day - 1]])

        review_words: list[int] = []
        if previous_analysis is not None and (
            day > 1 or self.policy is not TaskPolicy.QUANTITATIVE
        ):
            review_words = previous_analysis.get_words_needing_review(
                self.config.daily_review_count
            )

        logger.debug(
            f"Day {day}/{goal.duration_days}: {len(new_words)} new, {len(review_words)} review"
        )
        return self._create_task(goal, day, new_words, review_words)

    def _create_task(
        self, goal: LearningGoal, day: int, new_words: list[int], review_words: list[int]
    ) -> DailyTask:
        exposures = (
            len(new_words) * self.config.new_word_exposures
            + len(review_words) * self.config.review_word_exposures
        )
        return DailyTask(
            goal_id=goal.goal_id,
            day=day,
            date=goal.start_date + timedelta(days=day - 1),
            new_word_ids=new_words,
            review_word_ids=review_words,
            total_exposures_planned=exposures,
        )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def build_task_strategy(
    policy: TaskPolicy = TaskPolicy.QUANTITATIVE, config: PlannerConfig | None = None
) -> TaskGenerationStrategy:
    return TaskGenerationStrategy(policy, config or STANDARD)


def strategy_for_goal(goal: LearningGoal) -> TaskGenerationStrategy:
    """
    Pick a plan shape from the goal length:

        1-7 days    intensive
        8-15 days   standard
        16-30 days  relaxed
        longer      balanced
    """
    if 1 <= goal.duration_days <= 7:
        return TaskGenerationStrategy(TaskPolicy.QUANTITATIVE, INTENSIVE)
    if 8 <= goal.duration_days <= 15:
        return TaskGenerationStrategy(TaskPolicy.QUANTITATIVE, STANDARD)
    if 16 <= goal.duration_days <= 30:
        return TaskGenerationStrategy(TaskPolicy.QUANTITATIVE, RELAXED)
    return TaskGenerationStrategy(TaskPolicy.BALANCED, STANDARD)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class TaskPlanner:
    """
    Top-level planner: combines a task strategy with the dwell-time analyzer.

    Both collaborators are injected; defaults are the standard front-loaded
    strategy and the default analyzer.
    """

    def __init__(
        self,
        strategy: TaskGenerationStrategy | None = None,
        analyzer: DwellTimeAnalyzer | None = None,
    ):
        self._strategy = strategy or TaskGenerationStrategy()
        self._analyzer = analyzer or DwellTimeAnalyzer()

    @property
    def strategy(self) -> TaskGenerationStrategy:
        return self._strategy

    def generate_complete_plan(
        self, goal: LearningGoal, pack_entries: Sequence[int]
    ) -> list[DailyTask]:
        return self._strategy.generate_complete_plan(goal, pack_entries)

    def generate_daily_task(
        self,
        goal: LearningGoal,
        day: int,
        pack_entries: Sequence[int],
        yesterday_records: Mapping[int, ReviewRecord] | None = None,
    ) -> DailyTask:
        """
        Build one day's task, analyzing yesterday's records to choose the
        review words. No records (or none at all) means no review words.
        """
        analysis = None
        if yesterday_records:
            analysis = self._analyzer.analyze(yesterday_records)
            logger.debug(f"Yesterday: {analysis.brief_summary}")

        return self._strategy.generate_daily_task(goal, day, pack_entries, analysis)
