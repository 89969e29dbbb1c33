"""Application constants."""

# Workout details defaults (used when an exercise has no logged sets yet)
DEFAULT_SETS_PER_EXERCISE = 3
DEFAULT_REPS_RANGE = "8-10"
DEFAULT_WORKOUT_DURATION_MINUTES = 45

# Pagination
FEED_PAGE_SIZE = 5
MAX_FEED_PAGE_SIZE = 50
CHAT_MESSAGES_PAGE_SIZE = 50
MAX_CHAT_MESSAGES_PAGE_SIZE = 200

# Validation
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
