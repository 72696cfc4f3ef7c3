"""Default configuration values for DayTally."""

# Minutes in a calendar day
DAY_MINUTES = 24 * 60  # 1440

# Reserved tag id the store writes for an explicit "no tag" override.
CLEAR_OVERRIDE_TAG_ID = "__tt_clear__"

# All weekdays, 0 = Sunday ... 6 = Saturday
ALL_WEEKDAYS = frozenset(range(7))

# Reminder window (local hours, end exclusive)
NOTIFICATION_START_HOUR = 7
NOTIFICATION_END_HOUR = 23

# User settings applied to a fresh store
DEFAULT_INTERVAL = 30
DEFAULT_CLOCK_FORMAT = 24
DEFAULT_NOTIFICATION_MODE = "browser"

TAG_COLORS = (
    "#4A90D9",  # blue
    "#D94A4A",  # red
    "#50B86C",  # green
    "#E8A838",  # amber
    "#9B6DD7",  # purple
    "#D97B4A",  # orange
    "#4ABFBF",  # teal
    "#D94A8A",  # pink
    "#8B8B8B",  # gray
    "#6B8E5A",  # olive
)

# Placeholder used by stats for tag ids with no matching tag
UNKNOWN_TAG_NAME = "Unknown"
UNKNOWN_TAG_COLOR = TAG_COLORS[8]

# (id, name, color) seeded into an empty tag table
DEFAULT_TAGS = (
    ("work", "Work", TAG_COLORS[0]),
    ("sleep", "Sleep", TAG_COLORS[4]),
    ("exercise", "Exercise", TAG_COLORS[2]),
    ("break", "Break", TAG_COLORS[3]),
    ("personal", "Personal", TAG_COLORS[5]),
)
