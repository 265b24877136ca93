"""Centralized constants for the vocaplan engine.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Dwell bands (seconds) ----------
VERY_FAMILIAR_THRESHOLD = 2.0
FAMILIAR_THRESHOLD = 5.0
UNFAMILIAR_THRESHOLD = 8.0
DIFFICULT_THRESHOLD = 10.0

# ---------- SM-2 ----------
MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
DEFAULT_EASE_FACTOR = 2.5
INITIAL_INTERVAL = 1  # days
PASSING_QUALITY = 3
EASE_ADJUSTMENTS = {0: -0.20, 1: -0.15, 2: -0.10, 3: 0.0, 4: 0.05, 5: 0.10}

# ---------- Phase / mastery ----------
REINFORCEMENT_MIN_REVIEWS = 3
CONSOLIDATION_MIN_INTERVAL = 7
MAINTENANCE_MIN_INTERVAL = 30
MASTERED_MIN_STREAK = 5
MASTERED_MIN_INTERVAL = 30
ADVANCED_MIN_STREAK = 3
ADVANCED_MIN_INTERVAL = 14
INTERMEDIATE_MIN_REVIEWS = 2

# ---------- Exposure ----------
VERY_FAMILIAR_EXPOSURES = 3
FAMILIAR_EXPOSURES = 5
UNFAMILIAR_EXPOSURES = 7
VERY_UNFAMILIAR_EXPOSURES = 10
RIGHT_SWIPE_BONUS = -1
LEFT_SWIPE_PENALTY = 2
MIN_EXPOSURES = 2
MAX_EXPOSURES = 15
FIXED_EXPOSURE_COUNT = 10
EARLY_MASTERY_RIGHT_SWIPES = 3
ADAPTIVE_EARLY_PHASE = 0.3
ADAPTIVE_LATE_PHASE = 0.7
ADAPTIVE_MODIFIERS = (1.2, 1.0, 0.8)
ADAPTIVE_GOAL_MAX_DAYS = 10

# ---------- Analyzer ----------
MINIMUM_ANALYZED_EXPOSURES = 1
DEFAULT_REVIEW_CANDIDATES = 20
DEFAULT_DIFFICULT_WORDS = 10
TREND_MIN_WORDS = 10
TREND_IMPROVEMENT_RATIO = 0.9
TREND_STABLE_RATIO = 0.1

# ---------- Planner ----------
FRONT_LOAD_RATIO = 0.7
FRONT_LOAD_WORDS = 0.9
DAILY_REVIEW_COUNT = 20
NEW_WORD_EXPOSURES = 10
REVIEW_WORD_EXPOSURES = 5
PROGRESSIVE_WEIGHTS = (0.7, 1.2, 0.8)
SECONDS_PER_EXPOSURE = 3.0

# ---------- Review selection ----------
FAMILIARITY_MASTERY_WEIGHT = 50
FAMILIARITY_RIGHT_RATIO_WEIGHT = 30
FAMILIARITY_DWELL_WEIGHT = 20
FAMILIARITY_DWELL_CEILING = 3.0
UPCOMING_WINDOW_DAYS = 7
UPCOMING_LONG_WINDOW_DAYS = 30

# ---------- Word resolution ----------
MISSING_WORD_TOLERANCE = 0.1
UNKNOWN_WORD_TEXT = "unknown"
