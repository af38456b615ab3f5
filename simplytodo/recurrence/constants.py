"""Defaults and bounds for the recurrence engine."""
from datetime import time

DAILY = "daily"
WEEKLY = "weekly"
MONTHLY = "monthly"
RECURRENCE_KINDS = (DAILY, WEEKLY, MONTHLY)

DEFAULT_TIME_OF_DAY = time(9, 0)  # 09:00 local
DEFAULT_MAX_INSTANCES = 100
DEFAULT_IMPORTANCE = 3

# Steps allowed before next_occurrence gives up, whatever the kind.
NEXT_OCCURRENCE_ITERATION_CEILING = 365

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 5

# Weekday index convention: 0=Sunday .. 6=Saturday
WEEKDAY_ABBREVIATIONS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
