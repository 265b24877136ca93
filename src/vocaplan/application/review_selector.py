"""
Review selection across all days.

Picks the words due today and orders them so the most urgent come first:

1. Earlier due day first. A record with no due date ranks level with the
   most overdue word (or with today when nothing is overdue), so the
   remaining keys decide between them.
2. More lapses first.
3. Lower mastery level first.
4. Lower familiarity score first.
5. Ascending word id.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from vocaplan.domain.constants import (
    FAMILIARITY_DWELL_CEILING,
    FAMILIARITY_DWELL_WEIGHT,
    FAMILIARITY_MASTERY_WEIGHT,
    FAMILIARITY_RIGHT_RATIO_WEIGHT,
    UPCOMING_LONG_WINDOW_DAYS,
    UPCOMING_WINDOW_DAYS,
)
from vocaplan.domain.models import LearningPhase, MasteryLevel, ReviewRecord

from .scheduling.sm2 import SpacedRepetitionScheduler

logger = logging.getLogger(__name__)


def familiarity_score(record: ReviewRecord) -> int:
    """
    0-100 blend of mastery level, right-swipe ratio and dwell speed.

    Halves round up.
    """
    dwell_bonus = max(0.0, (FAMILIARITY_DWELL_CEILING - record.average_dwell) / FAMILIARITY_DWELL_CEILING)
    raw = (
        record.mastery.progress * FAMILIARITY_MASTERY_WEIGHT
        + record.right_ratio * FAMILIARITY_RIGHT_RATIO_WEIGHT
        + dwell_bonus * FAMILIARITY_DWELL_WEIGHT
    )
    return int(math.floor(raw + 0.5))


@dataclass(frozen=True)
class ReviewStatistics:
    today_count: int
    overdue_count: int  # includes records without a due date
    upcoming_7_days: int
    upcoming_30_days: int
    by_phase: dict[LearningPhase, int] = field(default_factory=dict)
    by_level: dict[MasteryLevel, int] = field(default_factory=dict)

    @property
    def total_due(self) -> int:
        return self.today_count + self.overdue_count


class ReviewSelector:
    """
    Chooses and ranks due words.

    Stateless; the scheduler is injected for its due-date rule.
    """

    def __init__(self, scheduler: SpacedRepetitionScheduler | None = None):
        self._scheduler = scheduler or SpacedRepetitionScheduler()

    def due_for_review(
        self,
        records: Mapping[int, ReviewRecord],
        now: datetime,
        limit: int | None = None,
    ) -> list[int]:
        """
        Ids due for review at `now`, most urgent first.

        Args:
            records: All records of the learner, keyed by word id.
            now: Reference time; only its calendar day matters.
            limit: Optional cap on the number of ids returned.

        Returns:
            Ranked word ids.
        """
        due = [r for r in records.values() if self._scheduler.is_due(r, now)]
        today = now.date()
        undated_day = min(
            (r.next_due.date() for r in due if r.next_due is not None), default=today
        )

        due.sort(
            key=lambda r: (
                r.next_due.date() if r.next_due is not None else undated_day,
                -r.lapses,
                r.mastery.rank,
                familiarity_score(r),
                r.word_id,
            )
        )
        ids = [r.word_id for r in due]

        logger.debug(f"{len(ids)} of {len(records)} words due on {today.isoformat()}")

        if limit is not None:
            return ids[: max(limit, 0)]
        return ids

    def today_review_count(self, records: Mapping[int, ReviewRecord], now: datetime) -> int:
        return len(self.due_for_review(records, now))

    def mark_as_reviewed(
        self,
        records: Mapping[int, ReviewRecord],
        word_ids: Iterable[int],
        now: datetime,
    ) -> list[ReviewRecord]:
        """
        Stamp `last_reviewed_at` on the given words in place.

        A record with no due date is made due at `now`. Unknown ids are skipped.
        Returns the records that were updated.
        """
        updated = []
        for word_id in word_ids:
            record = records.get(word_id)
            if record is None:
                continue
            record.last_reviewed_at = now
            if record.next_due is None:
                record.next_due = now
            updated.append(record)

        logger.debug(f"Marked {len(updated)} words reviewed")
        return updated

    def upcoming_review_count(
        self,
        records: Mapping[int, ReviewRecord],
        now: datetime,
        days: int = UPCOMING_WINDOW_DAYS,
    ) -> int:
        """Words due within the next `days` days, counting everything already due."""
        today = now.date()
        count = 0
        for record in records.values():
            if record.next_due is None:
                count += 1
                continue
            if (record.next_due.date() - today).days <= days:
                count += 1
        return count

    def review_statistics(
        self, records: Mapping[int, ReviewRecord], now: datetime
    ) -> ReviewStatistics:
        today = now.date()
        today_count = 0
        overdue_count = 0
        upcoming_7 = 0
        upcoming_30 = 0
        by_phase = {phase: 0 for phase in LearningPhase}
        by_level = {level: 0 for level in MasteryLevel}

        for record in records.values():
            if record.next_due is None:
                overdue_count += 1
            else:
                days_until = (record.next_due.date() - today).days
                if days_until == 0:
                    today_count += 1
                elif days_until < 0:
                    overdue_count += 1
                if 0 < days_until <= UPCOMING_WINDOW_DAYS:
                    upcoming_7 += 1
                if 0 < days_until <= UPCOMING_LONG_WINDOW_DAYS:
                    upcoming_30 += 1

            by_phase[record.phase] += 1
            by_level[record.mastery] += 1

        return ReviewStatistics(
            today_count=today_count,
            overdue_count=overdue_count,
            upcoming_7_days=upcoming_7,
            upcoming_30_days=upcoming_30,
            by_phase=by_phase,
            by_level=by_level,
        )
