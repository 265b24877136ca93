"""
Dwell-time analyzer.

Batch analysis over one day's records. The descending-by-dwell ordering it
produces is the difficulty ranking used everywhere downstream: tomorrow's
review candidates, the daily report and the difficult-word list handed to
passage generation.

Ties on average dwell are broken by ascending word id so the ranking is
deterministic regardless of input order.

This is a pure computation module with no I/O.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from vocaplan.domain.constants import (
    DEFAULT_DIFFICULT_WORDS,
    DEFAULT_REVIEW_CANDIDATES,
    MINIMUM_ANALYZED_EXPOSURES,
    TREND_IMPROVEMENT_RATIO,
    TREND_MIN_WORDS,
    TREND_STABLE_RATIO,
    UNKNOWN_WORD_TEXT,
)
from vocaplan.domain.dwell import DwellBand, classify
from vocaplan.domain.models import ReviewRecord
from vocaplan.domain.ports import WordCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalyzerConfig:
    minimum_exposures: int = MINIMUM_ANALYZED_EXPOSURES  # filters never-seen noise
    include_zero_dwell: bool = False


@dataclass(frozen=True)
class DwellTimeAnalysis:
    """
    Immutable result of one analysis pass.

    `sorted_by_dwell` is non-increasing in average dwell; the five band
    lists partition it and keep its order.
    """

    sorted_by_dwell: list[ReviewRecord]

    very_familiar: list[ReviewRecord]  # <2s
    familiar: list[ReviewRecord]  # 2-5s
    unfamiliar: list[ReviewRecord]  # 5-8s
    difficult: list[ReviewRecord]  # 8-10s
    very_difficult: list[ReviewRecord]  # >=10s

    total_words: int
    average_dwell: float
    median_dwell: float
    distribution: dict[DwellBand, int] = field(default_factory=dict)

    def band(self, band: DwellBand) -> list[ReviewRecord]:
        return {
            DwellBand.VERY_FAST: self.very_familiar,
            DwellBand.FAST: self.familiar,
            DwellBand.MEDIUM: self.unfamiliar,
            DwellBand.SLOW: self.difficult,
            DwellBand.VERY_SLOW: self.very_difficult,
        }[band]

    @property
    def mastery_rate(self) -> float:
        """Share of words under 2s."""
        if self.total_words == 0:
            return 0.0
        return len(self.very_familiar) / self.total_words

    @property
    def difficulty_rate(self) -> float:
        """Share of words at 5s or more."""
        if self.total_words == 0:
            return 0.0
        hard = len(self.unfamiliar) + len(self.difficult) + len(self.very_difficult)
        return hard / self.total_words

    def get_words_needing_review(self, count: int = DEFAULT_REVIEW_CANDIDATES) -> list[int]:
        """Ids of the `count` slowest words, hardest first."""
        if count <= 0:
            return []
        return [r.word_id for r in self.sorted_by_dwell[:count]]

    def get_top_difficult_words(self, count: int = DEFAULT_DIFFICULT_WORDS) -> list[int]:
        """Same ranking as review candidates, sized for passage generation."""
        return self.get_words_needing_review(count)

    @property
    def brief_summary(self) -> str:
        known = len(self.very_familiar) + len(self.familiar)
        hard = self.total_words - known
        return (
            f"{self.total_words} words, average dwell {self.average_dwell:.1f}s; "
            f"{known} familiar, {hard} difficult"
        )

    @property
    def text_summary(self) -> str:
        lines = [
            "Dwell time analysis:",
            f"  total words: {self.total_words}",
            f"  average dwell: {self.average_dwell:.1f}s",
            f"  median dwell: {self.median_dwell:.1f}s",
            f"  mastery rate: {int(self.mastery_rate * 100)}%",
            f"  difficulty rate: {int(self.difficulty_rate * 100)}%",
        ]
        for band in DwellBand:
            lines.append(f"  {band.display_name} ({band.label}): {self.distribution.get(band, 0)}")
        return "\n".join(lines)


@dataclass(frozen=True)
class WordEntry:
    record: ReviewRecord
    word: str


@dataclass(frozen=True)
class EnhancedDwellTimeAnalysis:
    """Analysis with word text attached, ready for reports and passage generation."""

    analysis: DwellTimeAnalysis
    sorted_with_words: list[WordEntry]
    top_difficult_words: list[str]


@dataclass(frozen=True)
class TimeTrend:
    improving: bool
    stable: bool

    @property
    def description(self) -> str:
        if self.improving:
            return "Learning speed is improving"
        if self.stable:
            return "Learning speed is stable"
        return "Learning speed is dropping; consider adjusting the routine"


class DwellTimeAnalyzer:
    """
    Ranks and classifies records by average dwell time.

    Stateless and side-effect free.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self._config = config or AnalyzerConfig()

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    def analyze(self, records: Mapping[int, ReviewRecord]) -> DwellTimeAnalysis:
        valid = self._filter(records)
        ranked = sort_by_dwell(valid)

        buckets: dict[DwellBand, list[ReviewRecord]] = {band: [] for band in DwellBand}
        for record in ranked:
            buckets[classify(record.average_dwell)].append(record)

        average, median = _dwell_statistics(ranked)
        distribution = {band: len(buckets[band]) for band in DwellBand}

        counts = ", ".join(f"{b.value}={n}" for b, n in distribution.items())
        logger.debug(
            f"Analyzed {len(records)} records, {len(ranked)} valid; "
            f"avg={average:.2f}s median={median:.2f}s ({counts})"
        )

        return DwellTimeAnalysis(
            sorted_by_dwell=ranked,
            very_familiar=buckets[DwellBand.VERY_FAST],
            familiar=buckets[DwellBand.FAST],
            unfamiliar=buckets[DwellBand.MEDIUM],
            difficult=buckets[DwellBand.SLOW],
            very_difficult=buckets[DwellBand.VERY_SLOW],
            total_words=len(ranked),
            average_dwell=average,
            median_dwell=median,
            distribution=distribution,
        )

    def analyze_with_words(
        self,
        records: Mapping[int, ReviewRecord],
        catalog: WordCatalog,
        top_count: int = DEFAULT_DIFFICULT_WORDS,
    ) -> EnhancedDwellTimeAnalysis:
        """
        Analyze and attach word text. Unknown ids show as "unknown" rather
        than failing; use `resolve_words` where completeness matters.
        """
        analysis = self.analyze(records)
        entries = [
            WordEntry(record=r, word=catalog.lookup(r.word_id) or UNKNOWN_WORD_TEXT)
            for r in analysis.sorted_by_dwell
        ]
        return EnhancedDwellTimeAnalysis(
            analysis=analysis,
            sorted_with_words=entries,
            top_difficult_words=[e.word for e in entries[: max(top_count, 0)]],
        )

    def analyze_trend(self, records: Mapping[int, ReviewRecord]) -> TimeTrend:
        """
        Compare the first and second half of studied words (by word id).

        Needs at least 10 studied words; with fewer the trend is reported as
        stable and not improving.
        """
        studied = sorted(
            (r for r in records.values() if r.total_exposures > 0),
            key=lambda r: r.word_id,
        )
        if len(studied) < TREND_MIN_WORDS:
            return TimeTrend(improving=False, stable=True)

        mid = len(studied) // 2
        first_half, second_half = studied[:mid], studied[mid:]
        avg_first = sum(r.average_dwell for r in first_half) / len(first_half)
        avg_second = sum(r.average_dwell for r in second_half) / len(second_half)

        improving = avg_second < avg_first * TREND_IMPROVEMENT_RATIO
        stable = abs(avg_second - avg_first) < avg_first * TREND_STABLE_RATIO

        logger.debug(
            f"Trend: first={avg_first:.2f}s second={avg_second:.2f}s improving={improving}"
        )
        return TimeTrend(improving=improving, stable=stable)

    def _filter(self, records: Mapping[int, ReviewRecord]) -> list[ReviewRecord]:
        valid = []
        for record in records.values():
            if record.total_exposures < self._config.minimum_exposures:
                continue
            if not self._config.include_zero_dwell and record.average_dwell == 0:
                continue
            valid.append(record)
        return valid


def sort_by_dwell(records: list[ReviewRecord]) -> list[ReviewRecord]:
    """Descending average dwell, ascending word id on ties."""
    return sorted(records, key=lambda r: (-r.average_dwell, r.word_id))


def _dwell_statistics(records: list[ReviewRecord]) -> tuple[float, float]:
    if not records:
        return 0.0, 0.0

    values = sorted(r.average_dwell for r in records)
    n = len(values)
    average = sum(values) / n
    if n % 2 == 0:
        median = (values[n // 2 - 1] + values[n // 2]) / 2
    else:
        median = values[n // 2]
    return average, median
