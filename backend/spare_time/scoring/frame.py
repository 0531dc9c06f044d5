"""Ten-pin frame model and shot resolution helpers.

Shots are stored the way the entry screen captures them: plain pin counts,
``None`` for a ball not yet bowled and ``SPARE`` (``-1``) for "knock down
whatever is still standing". Everything that needs real pin counts goes
through :func:`resolve_second_shot` / :func:`resolve_third_shot`; nothing
else in the package looks at the sentinel directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

SPARE = -1
PIN_COUNT = 10
FRAME_COUNT = 10


@dataclass(frozen=True)
class Frame:
    id: int
    first_shot: Optional[int] = None
    second_shot: Optional[int] = None
    third_shot: Optional[int] = None
    # Derived; only ever filled in by the running-total pass.
    running_total: Optional[int] = None

    @property
    def is_last(self) -> bool:
        return self.id == FRAME_COUNT

    @property
    def is_strike(self) -> bool:
        return self.first_shot == PIN_COUNT

    @property
    def is_spare(self) -> bool:
        if self.is_strike or self.first_shot is None:
            return False
        second = resolve_second_shot(self)
        return second is not None and self.first_shot + second == PIN_COUNT

    @property
    def earns_third_shot(self) -> bool:
        """Whether the tenth frame has earned its bonus ball."""
        if not self.is_last or self.first_shot is None:
            return False
        if self.is_strike:
            return self.second_shot is not None
        return self.is_spare

    @property
    def pins_remaining(self) -> int:
        if self.first_shot is None or self.is_strike:
            return 0
        return PIN_COUNT - self.first_shot

    @property
    def is_well_formed(self) -> bool:
        return is_well_formed(self)


def _is_pin_count(value: int, standing: int = PIN_COUNT) -> bool:
    return 0 <= value <= standing


def resolve_second_shot(frame: Frame) -> Optional[int]:
    first, second = frame.first_shot, frame.second_shot
    if first is None or second is None:
        return None
    if second == SPARE:
        # After a tenth-frame strike the rack is fresh; "spare" means nothing.
        if first == PIN_COUNT:
            return None
        return PIN_COUNT - first
    return second


def resolve_third_shot(frame: Frame) -> Optional[int]:
    if not frame.is_last or frame.third_shot is None:
        return None
    first, second, third = frame.first_shot, frame.second_shot, frame.third_shot
    if third != SPARE:
        return third
    if first == PIN_COUNT and second is not None and 0 <= second < PIN_COUNT:
        return PIN_COUNT - second
    # Sentinel on a fresh rack (X-X or spare before it).
    return None


def _last_frame_is_well_formed(frame: Frame) -> bool:
    first = frame.first_shot
    second = frame.second_shot
    third = frame.third_shot

    if second is not None and second != SPARE:
        standing = PIN_COUNT if first == PIN_COUNT else PIN_COUNT - first
        if not _is_pin_count(second, standing):
            return False
    if second is not None and resolve_second_shot(frame) is None:
        return False

    if third is None:
        return True
    if second is None:
        return False
    if not frame.earns_third_shot:
        # An open tenth has no bonus ball to record.
        return False
    if third == SPARE:
        return resolve_third_shot(frame) is not None
    resolved_second = resolve_second_shot(frame)
    if first == PIN_COUNT and resolved_second != PIN_COUNT:
        return _is_pin_count(third, PIN_COUNT - resolved_second)
    return _is_pin_count(third)


def is_well_formed(frame: Frame) -> bool:
    """Check that the recorded shots describe a physically possible frame.

    Malformed frames are a normal transient state while shots are entered, so
    this never raises; the running-total pass simply refuses to score them.
    """

    first, second = frame.first_shot, frame.second_shot
    if first is None:
        return second is None and frame.third_shot is None
    if not _is_pin_count(first):
        return False
    if frame.is_last:
        return _last_frame_is_well_formed(frame)
    if frame.third_shot is not None:
        return False
    if second is None:
        return True
    if first == PIN_COUNT:
        return False
    if second == SPARE:
        return True
    return _is_pin_count(second, PIN_COUNT - first)


def empty_frames() -> List[Frame]:
    return [Frame(id=i) for i in range(1, FRAME_COUNT + 1)]


def _mark(value: int, standing: int, fresh: bool) -> str:
    # Clearing a fresh rack is a strike; clearing what is left of one is a spare.
    if value == standing:
        return "X" if fresh else "/"
    return str(value)


def frame_marks(frame: Frame) -> Tuple[str, str, str]:
    """Scoresheet notation for the three boxes of a frame.

    Frames one to nine show a strike as an ``X`` in the second box and leave
    the first blank. Boxes for balls not yet bowled are empty strings.
    """

    first = frame.first_shot
    if first is None:
        return ("", "", "")

    second = resolve_second_shot(frame)
    if not frame.is_last:
        if frame.is_strike:
            return ("", "X", "")
        if second is None:
            return (str(first), "", "")
        return (str(first), "/" if frame.is_spare else str(second), "")

    first_box = "X" if first == PIN_COUNT else str(first)
    if second is None:
        return (first_box, "", "")
    if first == PIN_COUNT:
        second_box = _mark(second, PIN_COUNT, fresh=True)
        fresh_third = second == PIN_COUNT
        standing = PIN_COUNT if fresh_third else PIN_COUNT - second
    else:
        second_box = "/" if frame.is_spare else str(second)
        fresh_third = True
        standing = PIN_COUNT

    third = resolve_third_shot(frame) if frame.earns_third_shot else None
    if third is None:
        return (first_box, second_box, "")
    return (first_box, second_box, _mark(third, standing, fresh_third))
