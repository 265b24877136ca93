"""
Daily report built from one day's study records.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date

from vocaplan.domain.constants import DEFAULT_DIFFICULT_WORDS, UNKNOWN_WORD_TEXT
from vocaplan.domain.models import ReviewRecord
from vocaplan.domain.ports import WordCatalog

from .analyzer import DwellTimeAnalysis, DwellTimeAnalyzer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WordSummary:
    word_id: int
    word: str
    average_dwell: float
    left_count: int
    right_count: int
    total_exposures: int

    @property
    def difficulty_score(self) -> float:
        return self.average_dwell * 10 + self.left_count * 5

    @property
    def swipe_indicator(self) -> str:
        if self.right_count > self.left_count:
            return f"→{self.right_count}"
        return f"←{self.left_count}"


@dataclass(frozen=True)
class DailyReport:
    goal_id: int
    day: int
    report_date: date
    total_words_studied: int
    total_exposures: int
    study_duration_seconds: float
    right_count: int
    left_count: int
    average_dwell: float
    sorted_by_dwell: list[WordSummary]
    familiar_word_ids: list[int]  # <2s
    unfamiliar_word_ids: list[int]  # >=5s

    @property
    def mastery_rate(self) -> float:
        if self.total_words_studied == 0:
            return 0.0
        return len(self.familiar_word_ids) / self.total_words_studied

    @property
    def study_duration_formatted(self) -> str:
        minutes, seconds = divmod(int(self.study_duration_seconds), 60)
        return f"{minutes}m{seconds:02d}s"

    def top_difficult_words(self, count: int = DEFAULT_DIFFICULT_WORDS) -> list[WordSummary]:
        return self.sorted_by_dwell[: max(count, 0)]


def build_daily_report(
    goal_id: int,
    day: int,
    report_date: date,
    records: Mapping[int, ReviewRecord],
    catalog: WordCatalog,
    study_duration_seconds: float = 0.0,
    analyzer: DwellTimeAnalyzer | None = None,
    analysis: DwellTimeAnalysis | None = None,
) -> DailyReport:
    """
    Summarize a study day.

    Swipe and exposure totals cover every record passed in; word lists and
    averages cover only the records the analyzer keeps. Pass a precomputed
    `analysis` to avoid analyzing twice.
    """
    if analysis is None:
        analysis = (analyzer or DwellTimeAnalyzer()).analyze(records)

    summaries = [
        WordSummary(
            word_id=r.word_id,
            word=catalog.lookup(r.word_id) or UNKNOWN_WORD_TEXT,
            average_dwell=r.average_dwell,
            left_count=r.left_count,
            right_count=r.right_count,
            total_exposures=r.total_exposures,
        )
        for r in analysis.sorted_by_dwell
    ]

    unfamiliar = analysis.unfamiliar + analysis.difficult + analysis.very_difficult

    logger.info(f"Daily report for goal {goal_id} day {day}: {analysis.brief_summary}")

    return DailyReport(
        goal_id=goal_id,
        day=day,
        report_date=report_date,
        total_words_studied=analysis.total_words,
        total_exposures=sum(r.total_exposures for r in records.values()),
        study_duration_seconds=study_duration_seconds,
        right_count=sum(r.right_count for r in records.values()),
        left_count=sum(r.left_count for r in records.values()),
        average_dwell=analysis.average_dwell,
        sorted_by_dwell=summaries,
        familiar_word_ids=[r.word_id for r in analysis.very_familiar],
        unfamiliar_word_ids=[r.word_id for r in unfamiliar],
    )
