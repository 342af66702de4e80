"""Application constants."""

# Query-string date format (yyyy-MM-dd)
DATE_PARAM_FORMAT = "%Y-%m-%d"

# Shown when a workout has no name
DEFAULT_WORKOUT_NAME = "Workout"

# Column sizes shared by models and schemas
NAME_MAX_LENGTH = 255
USER_ID_MAX_LENGTH = 255

# Set weight column: Numeric(6, 2), kilograms
WEIGHT_PRECISION = 6
WEIGHT_SCALE = 2
