"""Internal application services."""

from .frames import (
    SavedCard,
    final_total,
    get_active_match,
    load_frames,
    match_lock,
    save_frame,
)

__all__ = [
    "SavedCard",
    "final_total",
    "get_active_match",
    "load_frames",
    "match_lock",
    "save_frame",
]
