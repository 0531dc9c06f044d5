"""Ten-pin bowling scoring engine.

Totals are always recomputed from the whole card. An edit to any frame can
change the bonus of the frames before it and the resolvability of every frame
after it, so there is no incremental update path.
"""
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from .frame import (
    FRAME_COUNT,
    PIN_COUNT,
    SPARE,
    Frame,
    empty_frames,
    frame_marks,
    resolve_second_shot,
    resolve_third_shot,
)


class FrameSequenceError(ValueError):
    """Raised when a caller hands the engine something that is not a card."""


def validate_frames(frames: Sequence[Frame]) -> None:
    if len(frames) != FRAME_COUNT:
        raise FrameSequenceError(
            f"expected {FRAME_COUNT} frames, got {len(frames)}"
        )
    for position, frame in enumerate(frames, start=1):
        if not isinstance(frame, Frame):
            raise FrameSequenceError(f"frame #{position} is not a Frame")
        if frame.id != position:
            raise FrameSequenceError(
                f"frame ids must run 1..{FRAME_COUNT} in order "
                f"(found {frame.id} at position {position})"
            )


def _bonus_source(frame: Frame) -> Optional[Frame]:
    if frame.first_shot is None or not frame.is_well_formed:
        return None
    return frame


def _strike_bonus(frames: Sequence[Frame], i: int) -> Optional[int]:
    nxt = _bonus_source(frames[i + 1])
    if nxt is None:
        return None
    if nxt.is_strike and not nxt.is_last:
        after = _bonus_source(frames[i + 2])
        if after is None:
            return None
        return PIN_COUNT + after.first_shot
    second = resolve_second_shot(nxt)
    if second is None:
        return None
    return nxt.first_shot + second


def _spare_bonus(frames: Sequence[Frame], i: int) -> Optional[int]:
    nxt = _bonus_source(frames[i + 1])
    if nxt is None:
        return None
    return nxt.first_shot


def _frame_score(frames: Sequence[Frame], i: int) -> Optional[int]:
    frame = frames[i]
    first = frame.first_shot
    if first is None or not frame.is_well_formed:
        return None

    if frame.is_last:
        second = resolve_second_shot(frame)
        if second is None:
            return None
        third = 0
        if frame.earns_third_shot:
            third = resolve_third_shot(frame)
            if third is None:
                return None
        return first + second + third

    if frame.is_strike:
        bonus = _strike_bonus(frames, i)
        return None if bonus is None else PIN_COUNT + bonus

    second = resolve_second_shot(frame)
    if second is None:
        return None
    if first + second == PIN_COUNT:
        bonus = _spare_bonus(frames, i)
        return None if bonus is None else PIN_COUNT + bonus
    return first + second


def running_totals(frames: Sequence[Frame]) -> List[Optional[int]]:
    """Cumulative score after each frame, ``None`` where it cannot be known yet.

    The pass stops at the first frame that cannot be scored, so a total is
    never reported for a frame while an earlier one is still unresolved.
    """

    validate_frames(frames)
    totals: List[Optional[int]] = [None] * FRAME_COUNT
    cumulative = 0
    for i in range(FRAME_COUNT):
        score = _frame_score(frames, i)
        if score is None:
            break
        cumulative += score
        totals[i] = cumulative
    return totals


def with_running_totals(frames: Sequence[Frame]) -> List[Frame]:
    totals = running_totals(frames)
    return [replace(f, running_total=t) for f, t in zip(frames, totals)]


def upsert_frame(frames: Sequence[Frame], edited: Frame) -> List[Frame]:
    """Replace or add ``edited`` by id and return the full rescored card.

    ``frames`` may be a partial card; missing ids are filled with empty frames.
    """

    if not 1 <= edited.id <= FRAME_COUNT:
        raise FrameSequenceError(f"frame id {edited.id} out of range")
    by_id: Dict[int, Frame] = {}
    for frame in frames:
        if not 1 <= frame.id <= FRAME_COUNT:
            raise FrameSequenceError(f"frame id {frame.id} out of range")
        if frame.id in by_id:
            raise FrameSequenceError(f"duplicate frame id {frame.id}")
        by_id[frame.id] = frame
    by_id[edited.id] = edited
    card = [by_id.get(i, Frame(id=i)) for i in range(1, FRAME_COUNT + 1)]
    return with_running_totals(card)


def changed_frames(before: Sequence[Frame], after: Sequence[Frame]) -> List[Frame]:
    """Frames of ``after`` that differ from their counterpart in ``before``."""
    previous = {f.id: f for f in before}
    return [f for f in after if previous.get(f.id) != f]


# ---------------------------------------------------------------------------
# Event API, shared shape with the other engines
# ---------------------------------------------------------------------------


def init_state(config: Dict) -> Dict:
    return {"config": config, "frames": with_running_totals(empty_frames())}


def _is_complete(frame: Frame) -> bool:
    if frame.first_shot is None:
        return False
    if not frame.is_last:
        return frame.is_strike or frame.second_shot is not None
    if frame.second_shot is None:
        return False
    return not frame.earns_third_shot or frame.third_shot is not None


def _encode(pins: int, standing: int) -> int:
    if pins > standing:
        raise ValueError("pins exceed the pins standing")
    return SPARE if pins == standing else pins


def _record_roll(frame: Frame, pins: int) -> Frame:
    first = frame.first_shot
    if first is None:
        return replace(frame, first_shot=pins)

    if frame.second_shot is None:
        if frame.is_last and first == PIN_COUNT:
            return replace(frame, second_shot=pins)
        standing = PIN_COUNT - first
        second = _encode(pins, standing)
        return replace(frame, second_shot=second)

    second = resolve_second_shot(frame)
    if first == PIN_COUNT and second != PIN_COUNT:
        standing = PIN_COUNT - second
        third = _encode(pins, standing)
        return replace(frame, third_shot=third)
    return replace(frame, third_shot=pins)


def _frame_from_event(data: Dict) -> Frame:
    if not isinstance(data, dict) or "id" not in data:
        raise ValueError("frame event requires a frame with an id")
    raw_id = data["id"]
    if isinstance(raw_id, bool):
        raise ValueError("frame event requires an integer id")
    try:
        frame_id = int(raw_id)
    except (TypeError, ValueError):
        raise ValueError("frame event requires an integer id") from None
    return Frame(
        id=frame_id,
        first_shot=data.get("first_shot"),
        second_shot=data.get("second_shot"),
        third_shot=data.get("third_shot"),
    )


def apply(event: Dict, state: Dict) -> Dict:
    kind = event.get("type")
    frames = state["frames"]

    if kind == "FRAME":
        state["frames"] = upsert_frame(frames, _frame_from_event(event.get("frame")))
        return state
    if kind != "ROLL":
        raise ValueError("invalid bowling event")

    pins = event.get("pins", 0)
    if isinstance(pins, bool):
        raise ValueError("pins must be an integer")
    pins = int(pins)
    if not 0 <= pins <= PIN_COUNT:
        raise ValueError("pins out of range")

    for i, frame in enumerate(frames):
        if _is_complete(frame):
            continue
        card = list(frames)
        card[i] = _record_roll(frame, pins)
        state["frames"] = with_running_totals(card)
        return state
    raise ValueError("no rolls left in final frame")


def summary(state: Dict) -> Dict:
    frames = state["frames"]
    scores = running_totals(frames)
    resolved = [s for s in scores if s is not None]
    return {
        "frames": [
            {
                "id": f.id,
                "first_shot": f.first_shot,
                "second_shot": f.second_shot,
                "third_shot": f.third_shot,
                "running_total": score,
                "marks": list(frame_marks(f)),
            }
            for f, score in zip(frames, scores)
        ],
        "scores": scores,
        "total": resolved[-1] if resolved else None,
        "complete": scores[-1] is not None,
    }
