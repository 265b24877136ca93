# Application Analysis Package
from .analyzer import (
    AnalyzerConfig,
    DwellTimeAnalysis,
    DwellTimeAnalyzer,
    EnhancedDwellTimeAnalysis,
    TimeTrend,
    WordEntry,
)
from .report import DailyReport, WordSummary, build_daily_report

__all__ = [
    "AnalyzerConfig",
    "DwellTimeAnalysis",
    "DwellTimeAnalyzer",
    "EnhancedDwellTimeAnalysis",
    "TimeTrend",
    "WordEntry",
    "DailyReport",
    "WordSummary",
    "build_daily_report",
]
