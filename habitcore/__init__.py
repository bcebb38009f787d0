"""Habit tracker engine — streaks, display entries and metrics.

Public API re-exports for convenient imports:
    from habitcore import HabitConfig, build_display_entries, aggregate_metrics, ...
"""

# Errors
from habitcore.errors import (
    HabitTrackerError,
    InvalidDate,
    InvalidFrequencyConfig,
    InvalidHabitConfig,
)

# Dates
from habitcore.dates import (
    parse_day,
    to_day,
    format_day,
    day_of_week,
    days_between,
    date_range,
)

# Models
from habitcore.models import (
    HabitEntry,
    FrequencyConfig,
    HabitConfig,
    DateRange,
    DisplayEntry,
    HabitMetrics,
    parse_entries,
    index_entries,
    habit_color,
)

# Engines
from habitcore.frequency import matches, validate_frequency
from habitcore.streaks import DayFlag, StreakResult, compute_streaks, streak_progression
from habitcore.display import build_display_entries, is_ticked, value_intensity
from habitcore.metrics import aggregate_metrics, weekly_success_rate
from habitcore.entries import validate_entry

# Settings & workspace
from habitcore.workspace import workspace_root, settings_path, today_local
from habitcore.settings import (
    GlobalSettings,
    load_settings,
    save_settings,
    update_settings,
    configure_logging,
    is_valid_css_color,
    resolve_display_range,
)
