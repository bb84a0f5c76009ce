"""Application constants."""

# Routine shape
MIN_DAYS_PER_WEEK = 1
MAX_DAYS_PER_WEEK = 7
DEFAULT_DAYS_PER_WEEK = 3
DEFAULT_ESTIMATED_DURATION_MINUTES = 45
DAY_NAME_FORMAT = "Day {n}"
CLONE_NAME_SUFFIX = " (Copy)"

# Defaults for a slot added in the routine builder
DEFAULT_SLOT_SETS = 3
DEFAULT_SLOT_REPS = 10
DEFAULT_SLOT_REST_SECONDS = 60

# A materialized exercise always has at least one completable set
MIN_SETS_PER_EXERCISE = 1

# Templates listing
DEFAULT_TEMPLATES_PAGE_SIZE = 10
MAX_TEMPLATES_PAGE_SIZE = 50
