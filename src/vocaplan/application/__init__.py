# Application Package
from .analysis import DwellTimeAnalysis, DwellTimeAnalyzer
from .exposure import ExposureDecisionMaker, ExposurePolicy, ExposureStrategy
from .review_selector import ReviewSelector, familiarity_score
from .scheduling import SpacedRepetitionScheduler
from .task_planner import TaskGenerationStrategy, TaskPlanner, TaskPolicy
from .word_resolver import resolve_words

__all__ = [
    "DwellTimeAnalysis",
    "DwellTimeAnalyzer",
    "ExposureDecisionMaker",
    "ExposurePolicy",
    "ExposureStrategy",
    "ReviewSelector",
    "familiarity_score",
    "SpacedRepetitionScheduler",
    "TaskGenerationStrategy",
    "TaskPlanner",
    "TaskPolicy",
    "resolve_words",
]
