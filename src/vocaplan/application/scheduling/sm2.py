"""
SM-2 style spaced repetition.

Turns a swipe (direction + dwell time) into a 0-5 recall quality, then into a
new interval, ease factor and due date. Also owns the single state transition
of the engine, `record_swipe`.

All functions take `now` explicitly; nothing here reads the wall clock.
"""

import logging
import math
from datetime import datetime, timedelta

from vocaplan.domain.constants import (
    ADVANCED_MIN_INTERVAL,
    ADVANCED_MIN_STREAK,
    CONSOLIDATION_MIN_INTERVAL,
    EASE_ADJUSTMENTS,
    INITIAL_INTERVAL,
    INTERMEDIATE_MIN_REVIEWS,
    MAINTENANCE_MIN_INTERVAL,
    MASTERED_MIN_INTERVAL,
    MASTERED_MIN_STREAK,
    MAX_EASE_FACTOR,
    MIN_EASE_FACTOR,
    PASSING_QUALITY,
    REINFORCEMENT_MIN_REVIEWS,
)
from vocaplan.domain.models import (
    LearningPhase,
    MasteryLevel,
    ReviewRecord,
    ReviewSchedule,
    SwipeDirection,
)

logger = logging.getLogger(__name__)


class SpacedRepetitionScheduler:
    """
    SM-2 (SuperMemo 2) variant driven by swipe direction and dwell time.

    Stateless; one instance can be shared by any number of callers.
    """

    def quality(self, direction: SwipeDirection, dwell_seconds: float) -> int:
        """
        Score a single exposure on the SM-2 0-5 scale.

        Args:
            direction: KNOWN (right swipe) or UNKNOWN (left swipe).
            dwell_seconds: Time the card was on screen.

        Returns:
            5 - known in under 1s
            4 - known in under 2s
            3 - known in under 3s
            2 - known, but slowly
            1 - gave up quickly (under 2s)
            0 - gave up after thinking about it
        """
        if direction is SwipeDirection.KNOWN:
            if dwell_seconds < 1.0:
                return 5
            if dwell_seconds < 2.0:
                return 4
            if dwell_seconds < 3.0:
                return 3
            return 2

        if dwell_seconds < 2.0:
            return 1
        return 0

    def next_review(
        self,
        current_interval: int,
        ease_factor: float,
        quality: int,
        last_reviewed_at: datetime,
    ) -> ReviewSchedule:
        """
        Compute the next interval, ease factor and due date.

        A quality below 3 is a lapse and resets the interval to one day no
        matter how long it had grown.
        """
        adjustment = EASE_ADJUSTMENTS.get(quality, 0.0)
        # Deltas are multiples of 0.05; rounding keeps float drift out of ceil()
        new_ease = round(ease_factor + adjustment, 4)
        new_ease = max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, new_ease))

        if quality < PASSING_QUALITY:
            new_interval = INITIAL_INTERVAL
        elif current_interval <= 0:
            new_interval = INITIAL_INTERVAL
        else:
            new_interval = math.ceil(round(current_interval * new_ease, 6))

        return ReviewSchedule(
            interval=new_interval,
            ease_factor=new_ease,
            due_at=last_reviewed_at + timedelta(days=new_interval),
        )

    def classify_phase(self, review_count: int, interval: int, ease_factor: float) -> LearningPhase:
        if review_count == 0:
            return LearningPhase.INITIAL
        if review_count < REINFORCEMENT_MIN_REVIEWS or interval < CONSOLIDATION_MIN_INTERVAL:
            return LearningPhase.REINFORCEMENT
        if interval < MAINTENANCE_MIN_INTERVAL:
            return LearningPhase.CONSOLIDATION
        return LearningPhase.MAINTENANCE

    def classify_mastery(
        self,
        review_count: int,
        interval: int,
        consecutive_correct: int,
        lapses: int,
    ) -> MasteryLevel:
        if (
            consecutive_correct >= MASTERED_MIN_STREAK
            and interval >= MASTERED_MIN_INTERVAL
            and lapses == 0
        ):
            return MasteryLevel.MASTERED
        if consecutive_correct >= ADVANCED_MIN_STREAK and interval >= ADVANCED_MIN_INTERVAL:
            return MasteryLevel.ADVANCED
        if review_count >= INTERMEDIATE_MIN_REVIEWS:
            return MasteryLevel.INTERMEDIATE
        return MasteryLevel.BEGINNER

    def is_due(self, record: ReviewRecord, now: datetime) -> bool:
        """
        True if the record has no due date or is due on or before today.

        Comparison is by calendar day, so anything due later today counts.
        """
        if record.next_due is None:
            return True
        return now.date() >= record.next_due.date()

    def record_swipe(
        self,
        record: ReviewRecord,
        direction: SwipeDirection,
        dwell_seconds: float,
        now: datetime,
    ) -> ReviewRecord:
        """
        Apply one exposure event to a record in place and return it.

        Every call is a real exposure: counters only ever grow. The review
        count grows on every call except the word's very first exposure.
        """
        if dwell_seconds < 0:
            logger.warning(
                f"Negative dwell time {dwell_seconds} for word_id={record.word_id}, clamping to 0"
            )
            dwell_seconds = 0.0

        is_first_exposure = record.total_exposures == 0

        record.total_exposures += 1
        record.dwell_history.append(dwell_seconds)
        record.sync_remaining()

        if direction is SwipeDirection.KNOWN:
            record.right_count += 1
            record.consecutive_correct += 1
            record.consecutive_incorrect = 0
        else:
            record.left_count += 1
            record.consecutive_incorrect += 1
            record.consecutive_correct = 0
            record.lapses += 1

        if not is_first_exposure:
            record.review_count += 1
        if record.first_learned_at is None:
            record.first_learned_at = now

        quality = self.quality(direction, dwell_seconds)
        anchor = record.last_reviewed_at or now
        schedule = self.next_review(record.interval, record.ease_factor, quality, anchor)

        record.ease_factor = schedule.ease_factor
        record.interval = schedule.interval
        record.next_due = schedule.due_at
        record.last_reviewed_at = now

        record.phase = self.classify_phase(record.review_count, record.interval, record.ease_factor)
        record.mastery = self.classify_mastery(
            record.review_count,
            record.interval,
            record.consecutive_correct,
            record.lapses,
        )

        logger.debug(
            f"word_id={record.word_id}: {direction.value} dwell={dwell_seconds:.2f}s "
            f"q={quality} interval={record.interval} ease={record.ease_factor:.2f} "
            f"phase={record.phase.value} mastery={record.mastery.value}"
        )
        return record
