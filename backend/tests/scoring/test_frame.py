import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from spare_time.scoring import (
    SPARE,
    Frame,
    empty_frames,
    frame_marks,
    resolve_second_shot,
    resolve_third_shot,
)


def test_resolve_second_shot():
    assert resolve_second_shot(Frame(1, 9, SPARE)) == 1
    assert resolve_second_shot(Frame(1, 0, SPARE)) == 10
    assert resolve_second_shot(Frame(1, 6, 2)) == 2
    assert resolve_second_shot(Frame(1, 6)) is None
    # No first ball, nothing to resolve against.
    assert resolve_second_shot(Frame(1, None, SPARE)) is None


def test_resolve_second_shot_in_tenth_frame():
    assert resolve_second_shot(Frame(10, 10, 10)) == 10
    assert resolve_second_shot(Frame(10, 4, SPARE)) == 6
    assert resolve_second_shot(Frame(10, 10, SPARE)) is None


@pytest.mark.parametrize(
    "frame, expected",
    [
        (Frame(10, 10, 3, SPARE), 7),
        (Frame(10, 10, 0, SPARE), 10),
        (Frame(10, 10, 10, 10), 10),
        (Frame(10, 10, 4, 10), 10),
        (Frame(10, 10, 10, 7), 7),
        (Frame(10, 4, SPARE, 10), 10),
        (Frame(10, 4, SPARE, 3), 3),
        (Frame(10, 10, 10, SPARE), None),
        (Frame(10, 4, SPARE, SPARE), None),
        (Frame(10, 10, 3), None),
        (Frame(9, 3, 4, 5), None),
    ],
)
def test_resolve_third_shot(frame, expected):
    assert resolve_third_shot(frame) == expected


def test_derived_flags():
    strike = Frame(4, 10)
    assert strike.is_strike and not strike.is_spare
    assert strike.pins_remaining == 0

    spare = Frame(4, 7, SPARE)
    assert spare.is_spare and not spare.is_strike
    assert spare.pins_remaining == 3

    raw_spare = Frame(4, 7, 3)
    assert raw_spare.is_spare

    open_frame = Frame(4, 7, 2)
    assert not open_frame.is_spare and not open_frame.is_strike

    assert Frame(4).pins_remaining == 0
    assert Frame(4, 0).pins_remaining == 10


def test_earns_third_shot_only_in_tenth():
    assert Frame(10, 10, 2).earns_third_shot
    assert Frame(10, 3, SPARE).earns_third_shot
    assert Frame(10, 3, 7).earns_third_shot
    assert not Frame(10, 3, 6).earns_third_shot
    assert not Frame(10, 10).earns_third_shot
    assert not Frame(9, 3, SPARE).earns_third_shot


@pytest.mark.parametrize(
    "frame, ok",
    [
        (Frame(1), True),
        (Frame(1, 7), True),
        (Frame(1, 7, 3), True),
        (Frame(1, 7, SPARE), True),
        (Frame(1, None, 3), False),
        (Frame(1, 11), False),
        (Frame(1, 10, 0), False),
        (Frame(1, 7, 4), False),
        (Frame(1, 3, 4, 1), False),
        (Frame(10, 10, 10, 10), True),
        (Frame(10, 10, 3, 7), True),
        (Frame(10, 10, 3, SPARE), True),
        (Frame(10, 3, 4, 9), False),
        (Frame(10, 10, SPARE), False),
        (Frame(10, 10, 3, 8), False),
        (Frame(10, 5, SPARE, SPARE), False),
        (Frame(10, 5, 6), False),
        (Frame(10, 5, None, 2), False),
    ],
)
def test_is_well_formed(frame, ok):
    assert frame.is_well_formed is ok


@pytest.mark.parametrize(
    "frame, marks",
    [
        (Frame(1), ("", "", "")),
        (Frame(1, 10), ("", "X", "")),
        (Frame(1, 7), ("7", "", "")),
        (Frame(1, 7, SPARE), ("7", "/", "")),
        (Frame(1, 7, 2), ("7", "2", "")),
        (Frame(10, 10, 10, 10), ("X", "X", "X")),
        (Frame(10, 10, 10, 7), ("X", "X", "7")),
        (Frame(10, 10, 3, SPARE), ("X", "3", "/")),
        (Frame(10, 10, 0, SPARE), ("X", "0", "/")),
        (Frame(10, 10, 0, 0), ("X", "0", "0")),
        (Frame(10, 6, SPARE, 10), ("6", "/", "X")),
        (Frame(10, 6, SPARE, 5), ("6", "/", "5")),
        (Frame(10, 0, 10, 10), ("0", "/", "X")),
        (Frame(10, 3, 4), ("3", "4", "")),
        (Frame(10, 10), ("X", "", "")),
    ],
)
def test_frame_marks(frame, marks):
    assert frame_marks(frame) == marks


def test_empty_frames():
    frames = empty_frames()
    assert [f.id for f in frames] == list(range(1, 11))
    assert all(f.first_shot is None and f.running_total is None for f in frames)


def test_frames_are_immutable():
    frame = Frame(1, 3)
    with pytest.raises(AttributeError):
        frame.first_shot = 4
