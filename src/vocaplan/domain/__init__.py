# Domain Package
from .dwell import DwellBand, classify
from .errors import MissingWordData
from .models import (
    DailyTask,
    LearningGoal,
    LearningPhase,
    MasteryLevel,
    ReviewRecord,
    ReviewSchedule,
    SwipeDirection,
    TaskStatus,
)
from .ports import WordCatalog

__all__ = [
    "DwellBand",
    "classify",
    "MissingWordData",
    "DailyTask",
    "LearningGoal",
    "LearningPhase",
    "MasteryLevel",
    "ReviewRecord",
    "ReviewSchedule",
    "SwipeDirection",
    "TaskStatus",
    "WordCatalog",
]
