from datetime import datetime, timedelta

import pytest

from vocaplan.application.scheduling.sm2 import SpacedRepetitionScheduler
from vocaplan.domain.models import (
    LearningPhase,
    MasteryLevel,
    ReviewRecord,
    SwipeDirection,
)

KNOWN = SwipeDirection.KNOWN
UNKNOWN = SwipeDirection.UNKNOWN


@pytest.fixture
def scheduler():
    return SpacedRepetitionScheduler()


@pytest.mark.parametrize(
    "direction,dwell,expected",
    [
        (KNOWN, 0.5, 5),
        (KNOWN, 1.0, 4),
        (KNOWN, 2.5, 3),
        (KNOWN, 3.0, 2),
        (KNOWN, 20.0, 2),
        (UNKNOWN, 1.0, 1),
        (UNKNOWN, 2.0, 0),
        (UNKNOWN, 9.0, 0),
    ],
)
def test_quality(scheduler, direction, dwell, expected):
    assert scheduler.quality(direction, dwell) == expected


class TestNextReview:
    def test_first_success_is_one_day(self, scheduler, now):
        schedule = scheduler.next_review(0, 2.5, 5, now)
        assert schedule.interval == 1
        assert schedule.ease_factor == 2.5
        assert schedule.due_at == now + timedelta(days=1)

    def test_interval_grows_by_ease(self, scheduler, now):
        schedule = scheduler.next_review(3, 2.5, 4, now)
        # ease capped at 2.5, ceil(3 * 2.5) = 8
        assert schedule.interval == 8
        assert schedule.due_at == now + timedelta(days=8)

    def test_quality_three_keeps_ease(self, scheduler, now):
        schedule = scheduler.next_review(10, 2.0, 3, now)
        assert schedule.ease_factor == 2.0
        assert schedule.interval == 20

    def test_lapse_resets_long_interval(self, scheduler, now):
        schedule = scheduler.next_review(40, 2.5, 0, now)
        assert schedule.interval == 1
        assert schedule.ease_factor == 2.3

    def test_successive_successes_never_shrink(self, scheduler, now):
        interval, ease = 1, 2.5
        intervals = []
        for _ in range(8):
            schedule = scheduler.next_review(interval, ease, 5, now)
            interval, ease = schedule.interval, schedule.ease_factor
            intervals.append(interval)
        assert intervals == sorted(intervals)
        assert intervals[0] == 3

    def test_ease_never_leaves_bounds(self, scheduler, now):
        ease = 2.5
        for _ in range(20):
            ease = scheduler.next_review(1, ease, 0, now).ease_factor
            assert 1.3 <= ease <= 2.5
        assert ease == 1.3

        for _ in range(30):
            ease = scheduler.next_review(1, ease, 5, now).ease_factor
            assert 1.3 <= ease <= 2.5
        assert ease == 2.5


def test_classify_phase(scheduler):
    assert scheduler.classify_phase(0, 0, 2.5) is LearningPhase.INITIAL
    assert scheduler.classify_phase(2, 40, 2.5) is LearningPhase.REINFORCEMENT
    assert scheduler.classify_phase(5, 3, 2.5) is LearningPhase.REINFORCEMENT
    assert scheduler.classify_phase(3, 7, 2.5) is LearningPhase.CONSOLIDATION
    assert scheduler.classify_phase(3, 30, 2.5) is LearningPhase.MAINTENANCE


def test_classify_mastery(scheduler):
    assert scheduler.classify_mastery(10, 30, 5, 0) is MasteryLevel.MASTERED
    # A single lapse rules out mastered, not advanced
    assert scheduler.classify_mastery(10, 30, 5, 1) is MasteryLevel.ADVANCED
    assert scheduler.classify_mastery(4, 14, 3, 2) is MasteryLevel.ADVANCED
    assert scheduler.classify_mastery(2, 1, 0, 0) is MasteryLevel.INTERMEDIATE
    assert scheduler.classify_mastery(1, 1, 1, 0) is MasteryLevel.BEGINNER


def test_is_due_by_calendar_day(scheduler, now):
    record = ReviewRecord(word_id=1)
    assert scheduler.is_due(record, now)

    record.next_due = now.replace(hour=23)
    assert scheduler.is_due(record, now)

    record.next_due = now + timedelta(days=1)
    assert not scheduler.is_due(record, now)

    record.next_due = now - timedelta(days=3)
    assert scheduler.is_due(record, now)


class TestRecordSwipe:
    def test_first_exposure(self, scheduler, now):
        record = ReviewRecord.initial(1, 3)
        scheduler.record_swipe(record, KNOWN, 0.5, now)

        assert record.total_exposures == 1
        assert record.remaining_exposures == 2
        assert record.right_count == 1
        assert record.dwell_history == [0.5]
        assert record.review_count == 0
        assert record.interval == 1
        assert record.next_due == now + timedelta(days=1)
        assert record.last_reviewed_at == now
        assert record.first_learned_at == now
        assert record.phase is LearningPhase.INITIAL

    def test_successive_successes_grow_interval(self, scheduler, now):
        record = ReviewRecord.initial(1, 5)
        scheduler.record_swipe(record, KNOWN, 0.5, now)
        scheduler.record_swipe(record, KNOWN, 0.5, now + timedelta(days=1))
        assert record.interval == 3
        assert record.review_count == 1
        assert record.phase is LearningPhase.REINFORCEMENT

        scheduler.record_swipe(record, KNOWN, 0.5, now + timedelta(days=4))
        assert record.interval == 8
        assert record.next_due == now + timedelta(days=1 + 8)
        assert record.first_learned_at == now

    def test_unknown_swipe_counts_lapse(self, scheduler, now):
        record = ReviewRecord.initial(1, 5)
        record.interval = 40
        record.consecutive_correct = 4
        scheduler.record_swipe(record, UNKNOWN, 6.0, now)

        assert record.left_count == 1
        assert record.lapses == 1
        assert record.consecutive_correct == 0
        assert record.consecutive_incorrect == 1
        assert record.interval == 1
        assert record.ease_factor == 2.3

    def test_lapses_are_cumulative(self, scheduler, now):
        record = ReviewRecord.initial(1, 5)
        scheduler.record_swipe(record, UNKNOWN, 4.0, now)
        scheduler.record_swipe(record, KNOWN, 1.0, now)
        scheduler.record_swipe(record, UNKNOWN, 4.0, now)
        assert record.lapses == 2
        assert record.consecutive_incorrect == 1

    def test_counters_never_decrease(self, scheduler, now):
        record = ReviewRecord.initial(1, 2)
        previous = (0, 0, 0)
        for i, direction in enumerate([KNOWN, UNKNOWN, KNOWN, KNOWN, UNKNOWN]):
            scheduler.record_swipe(record, direction, 1.5, now + timedelta(hours=i))
            current = (record.total_exposures, record.right_count + record.left_count, record.review_count)
            assert all(c >= p for c, p in zip(current, previous))
            previous = current
        assert record.total_exposures == 5
        assert record.remaining_exposures == 0

    def test_negative_dwell_clamped(self, scheduler, now):
        record = ReviewRecord.initial(1, 3)
        scheduler.record_swipe(record, KNOWN, -4.0, now)
        assert record.dwell_history == [0.0]
        assert record.ease_factor == 2.5
