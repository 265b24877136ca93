# Application Scheduling Package
from .sm2 import SpacedRepetitionScheduler

__all__ = ["SpacedRepetitionScheduler"]
