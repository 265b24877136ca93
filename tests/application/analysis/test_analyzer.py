import pytest

from vocaplan.application.analysis.analyzer import (
    AnalyzerConfig,
    DwellTimeAnalyzer,
    sort_by_dwell,
)
from vocaplan.domain.dwell import DwellBand
from vocaplan.infrastructure.adapters.records_file import RecordStore


@pytest.fixture
def analyzer():
    return DwellTimeAnalyzer()


@pytest.fixture
def day_records(make_record):
    # word 1 took 25s, word 25 took 1s
    return {i: make_record(i, dwell=[float(26 - i)]) for i in range(1, 26)}


class TestAnalyze:
    def test_ranking_and_statistics(self, analyzer, day_records):
        analysis = analyzer.analyze(day_records)

        assert analysis.total_words == 25
        assert [r.word_id for r in analysis.sorted_by_dwell] == list(range(1, 26))
        assert analysis.median_dwell == 13.0
        assert analysis.average_dwell == 13.0
        assert analysis.get_words_needing_review() == list(range(1, 21))
        assert analysis.get_top_difficult_words(3) == [1, 2, 3]

    def test_band_partition(self, analyzer, day_records):
        analysis = analyzer.analyze(day_records)

        assert analysis.distribution == {
            DwellBand.VERY_FAST: 1,
            DwellBand.FAST: 3,
            DwellBand.MEDIUM: 3,
            DwellBand.SLOW: 2,
            DwellBand.VERY_SLOW: 16,
        }
        assert sum(analysis.distribution.values()) == analysis.total_words
        assert [r.word_id for r in analysis.very_familiar] == [25]
        assert [r.word_id for r in analysis.difficult] == [17, 18]
        assert analysis.band(DwellBand.FAST) is analysis.familiar
        assert analysis.mastery_rate == 1 / 25
        assert analysis.difficulty_rate == 21 / 25

    def test_ties_broken_by_word_id(self, analyzer, make_record):
        records = {
            7: make_record(7, dwell=[4.0]),
            3: make_record(3, dwell=[4.0]),
            5: make_record(5, dwell=[9.0]),
        }
        assert analyzer.analyze(records).get_words_needing_review() == [5, 3, 7]

    def test_even_count_median(self, analyzer, make_record):
        records = {i: make_record(i, dwell=[d]) for i, d in enumerate([1.0, 2.0, 4.0, 9.0], start=1)}
        assert analyzer.analyze(records).median_dwell == 3.0

    def test_empty_input(self, analyzer):
        analysis = analyzer.analyze({})
        assert analysis.total_words == 0
        assert analysis.average_dwell == 0.0
        assert analysis.median_dwell == 0.0
        assert analysis.sorted_by_dwell == []
        assert len(analysis.distribution) == 5
        assert all(n == 0 for n in analysis.distribution.values())
        assert analysis.mastery_rate == 0.0

    def test_filters_unseen_and_zero_dwell(self, analyzer, make_record):
        records = {
            1: make_record(1),
            2: make_record(2, dwell=[0.0, 0.0]),
            3: make_record(3, dwell=[3.0]),
        }
        analysis = analyzer.analyze(records)
        assert [r.word_id for r in analysis.sorted_by_dwell] == [3]

        keep_zero = DwellTimeAnalyzer(AnalyzerConfig(include_zero_dwell=True))
        assert [r.word_id for r in keep_zero.analyze(records).sorted_by_dwell] == [3, 2]

    def test_non_positive_count(self, analyzer, day_records):
        analysis = analyzer.analyze(day_records)
        assert analysis.get_words_needing_review(0) == []
        assert analysis.get_words_needing_review(-5) == []
        assert len(analysis.get_words_needing_review(100)) == 25

    def test_summaries(self, analyzer, day_records):
        analysis = analyzer.analyze(day_records)
        assert analysis.brief_summary.startswith("25 words")
        assert "median dwell: 13.0s" in analysis.text_summary
        assert "very difficult (>10s): 16" in analysis.text_summary


def test_sort_by_dwell_is_order_independent(make_record):
    records = [make_record(i, dwell=[float(i % 3)]) for i in range(1, 10)]
    forward = [r.word_id for r in sort_by_dwell(records)]
    backward = [r.word_id for r in sort_by_dwell(list(reversed(records)))]
    assert forward == backward == [2, 5, 8, 1, 4, 7, 3, 6, 9]


def test_analyze_with_words(analyzer, make_record):
    records = {
        1: make_record(1, dwell=[9.0]),
        2: make_record(2, dwell=[1.0]),
        3: make_record(3, dwell=[5.0]),
    }
    catalog = RecordStore(words={1: "abandon", 2: "apple"})

    enhanced = analyzer.analyze_with_words(records, catalog, top_count=2)

    assert [e.word for e in enhanced.sorted_with_words] == ["abandon", "unknown", "apple"]
    assert enhanced.top_difficult_words == ["abandon", "unknown"]
    assert enhanced.analysis.total_words == 3


class TestTrend:
    def test_improving(self, analyzer, make_record):
        records = {i: make_record(i, dwell=[6.0 if i <= 5 else 3.0]) for i in range(1, 11)}
        trend = analyzer.analyze_trend(records)
        assert trend.improving
        assert not trend.stable
        assert "improving" in trend.description

    def test_stable(self, analyzer, make_record):
        records = {i: make_record(i, dwell=[4.0]) for i in range(1, 11)}
        trend = analyzer.analyze_trend(records)
        assert trend.stable
        assert not trend.improving

    def test_too_few_words(self, analyzer, make_record):
        records = {i: make_record(i, dwell=[10.0 - i]) for i in range(1, 6)}
        trend = analyzer.analyze_trend(records)
        assert trend.stable
        assert not trend.improving

    def test_slowing_down(self, analyzer, make_record):
        records = {i: make_record(i, dwell=[2.0 if i <= 5 else 6.0]) for i in range(1, 11)}
        assert "dropping" in analyzer.analyze_trend(records).description
