from datetime import date

import pytest

from vocaplan.domain.errors import MissingWordData
from vocaplan.domain.models import DailyTask, MasteryLevel, ReviewRecord, TaskStatus


class TestReviewRecord:
    def test_initial_seeds_target_and_remaining(self):
        record = ReviewRecord.initial(7, 5)
        assert record.word_id == 7
        assert record.target_exposures == 5
        assert record.remaining_exposures == 5
        assert record.total_exposures == 0
        assert record.ease_factor == 2.5

    def test_initial_never_negative(self):
        assert ReviewRecord.initial(1, -3).remaining_exposures == 0

    def test_average_dwell(self, make_record):
        assert make_record(1).average_dwell == 0.0
        assert make_record(1, dwell=[1.0, 2.0, 6.0]).average_dwell == 3.0

    def test_set_target_resyncs_remaining(self):
        record = ReviewRecord.initial(1, 3)
        record.total_exposures = 2
        record.set_target(7)
        assert record.remaining_exposures == 5

        record.set_target(1)
        assert record.remaining_exposures == 0

    def test_is_mastered(self, make_record):
        assert make_record(1, dwell=[1.0, 1.5, 1.0], right=3).is_mastered
        assert not make_record(1, dwell=[1.0, 1.5], right=2).is_mastered
        assert not make_record(1, dwell=[3.0, 3.0, 3.0], right=3).is_mastered

    def test_right_ratio(self, make_record):
        assert make_record(1).right_ratio == 0.0
        assert make_record(1, dwell=[1, 1, 1, 1], right=3, left=1).right_ratio == 0.75


def test_mastery_level_progress():
    assert MasteryLevel.BEGINNER.rank == 0
    assert MasteryLevel.MASTERED.rank == 3
    assert MasteryLevel.BEGINNER.progress == 0.25
    assert MasteryLevel.MASTERED.progress == 1.0


class TestDailyTask:
    @pytest.fixture
    def task(self):
        return DailyTask(
            goal_id=1,
            day=1,
            date=date(2024, 3, 1),
            new_word_ids=[1, 2, 3],
            review_word_ids=[9],
            total_exposures_planned=40,
        )

    def test_derived_counts(self, task):
        assert task.total_words == 4
        assert task.progress == 0.0
        assert task.remaining_exposures == 40
        assert task.estimated_minutes == 2

    def test_record_progress(self, task):
        task.record_progress(10)
        assert task.status is TaskStatus.IN_PROGRESS
        assert task.progress == 0.25

        task.record_progress(100)
        assert task.status is TaskStatus.COMPLETED
        assert task.completed_exposures == 40
        assert task.remaining_exposures == 0

    def test_record_progress_ignores_non_positive(self, task):
        task.record_progress(0)
        assert task.status is TaskStatus.PENDING


def test_missing_word_data_message():
    err = MissingWordData([4, 5], requested_count=10, resolved_count=8)
    assert err.missing_ratio == 0.2
    assert "2 of 10" in str(err)
    assert "4, 5" in str(err)
