"""Happy-hour normalization, reconciliation, and the edit-state controller."""

from .time_of_day import normalize_time, time_to_hhmm, format_time, format_time_range
from .weekdays import map_weekday, map_weekdays
from .deals import normalize_deal
from .edit_state import EditState, PendingMenu, NotEditingError, bar_to_updates, save_edit
from .reconcile import (
    new_entry_id,
    session_to_entry,
    reconcile_sessions,
    append_entries,
    apply_analysis,
)

__all__ = [
    "normalize_time",
    "time_to_hhmm",
    "format_time",
    "format_time_range",
    "map_weekday",
    "map_weekdays",
    "normalize_deal",
    "EditState",
    "PendingMenu",
    "NotEditingError",
    "bar_to_updates",
    "save_edit",
    "new_entry_id",
    "session_to_entry",
    "reconcile_sessions",
    "append_entries",
    "apply_analysis",
]
