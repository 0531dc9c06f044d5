"""Scoring engine for ten-pin bowling."""

from . import bowling, frame
from .bowling import (
    FrameSequenceError,
    changed_frames,
    running_totals,
    upsert_frame,
    validate_frames,
    with_running_totals,
)
from .frame import (
    SPARE,
    Frame,
    empty_frames,
    frame_marks,
    resolve_second_shot,
    resolve_third_shot,
)

__all__ = [
    "bowling",
    "frame",
    "SPARE",
    "Frame",
    "FrameSequenceError",
    "changed_frames",
    "empty_frames",
    "frame_marks",
    "resolve_second_shot",
    "resolve_third_shot",
    "running_totals",
    "upsert_frame",
    "validate_frames",
    "with_running_totals",
]
