from datetime import date

import pytest

from vocaplan.application.analysis.analyzer import DwellTimeAnalyzer
from vocaplan.application.analysis.report import WordSummary, build_daily_report
from vocaplan.infrastructure.adapters.records_file import RecordStore


@pytest.fixture
def store(make_record):
    return RecordStore(
        records={
            1: make_record(1, dwell=[1.0, 1.0, 1.0], right=3),
            2: make_record(2, dwell=[3.0, 4.0], right=1, left=1),
            3: make_record(3, dwell=[6.0, 6.0], left=2),
            4: make_record(4, dwell=[12.0, 11.0, 13.0, 12.0], right=1, left=3),
            5: make_record(5),
        },
        words={1: "apple", 2: "bridge", 3: "candor", 4: "diligent"},
    )


def test_build_daily_report(store):
    report = build_daily_report(
        goal_id=9,
        day=2,
        report_date=date(2024, 3, 2),
        records=store.records,
        catalog=store,
        study_duration_seconds=125.0,
    )

    assert report.goal_id == 9
    assert report.total_words_studied == 4
    assert report.total_exposures == 11
    assert report.right_count == 5
    assert report.left_count == 6
    assert report.familiar_word_ids == [1]
    assert report.unfamiliar_word_ids == [3, 4]
    assert report.mastery_rate == 0.25
    assert report.study_duration_formatted == "2m05s"
    assert [s.word for s in report.top_difficult_words(2)] == ["diligent", "candor"]


def test_report_reuses_precomputed_analysis(store):
    analysis = DwellTimeAnalyzer().analyze(store.records)
    report = build_daily_report(1, 1, date(2024, 3, 1), store.records, store, analysis=analysis)
    assert report.average_dwell == analysis.average_dwell
    assert [s.word_id for s in report.sorted_by_dwell] == [4, 3, 2, 1]


def test_unknown_word_text(make_record):
    records = {8: make_record(8, dwell=[3.0])}
    report = build_daily_report(1, 1, date(2024, 3, 1), records, RecordStore())
    assert report.sorted_by_dwell[0].word == "unknown"


def test_empty_report():
    report = build_daily_report(1, 1, date(2024, 3, 1), {}, RecordStore())
    assert report.total_words_studied == 0
    assert report.mastery_rate == 0.0
    assert report.study_duration_formatted == "0m00s"
    assert report.top_difficult_words() == []


def test_word_summary_scores():
    summary = WordSummary(
        word_id=1, word="x", average_dwell=4.0, left_count=3, right_count=1, total_exposures=4
    )
    assert summary.difficulty_score == 55.0
    assert summary.swipe_indicator == "←3"

    knew_it = WordSummary(1, "x", 1.0, 0, 4, 4)
    assert knew_it.swipe_indicator == "→4"
