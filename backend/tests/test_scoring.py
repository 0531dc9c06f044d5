import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from spare_time.scoring import SPARE, bowling


def _roll_all(pins):
    state = bowling.init_state({})
    for p in pins:
        state = bowling.apply({"type": "ROLL", "pins": p}, state)
    return state


def test_bowling_simple_score():
    summary = bowling.summary(_roll_all([1] * 20))
    assert summary["total"] == 20
    assert summary["complete"] is True
    assert summary["scores"] == [2 * i for i in range(1, 11)]


def test_bowling_perfect_game():
    summary = bowling.summary(_roll_all([10] * 12))
    assert summary["total"] == 300
    assert summary["frames"][9]["marks"] == ["X", "X", "X"]


def test_empty_state_has_no_total():
    summary = bowling.summary(bowling.init_state({}))
    assert summary["total"] is None
    assert summary["complete"] is False
    assert summary["scores"] == [None] * 10


def test_roll_encodes_spares_with_sentinel():
    state = _roll_all([7, 3, 4])
    frames = state["frames"]
    assert frames[0].second_shot == SPARE
    assert frames[0].running_total == 14
    assert frames[1].first_shot == 4
    assert bowling.summary(state)["frames"][0]["marks"] == ["7", "/", ""]


def test_roll_after_strike_moves_to_next_frame():
    frames = _roll_all([10, 3])["frames"]
    assert frames[0].first_shot == 10
    assert frames[0].second_shot is None
    assert frames[1].first_shot == 3


def test_tenth_frame_strike_then_spare():
    state = _roll_all([0] * 18 + [10, 3, 7])
    tenth = state["frames"][9]
    assert (tenth.first_shot, tenth.second_shot, tenth.third_shot) == (10, 3, SPARE)
    assert bowling.summary(state)["total"] == 20


def test_tenth_frame_spare_gets_fresh_rack():
    state = _roll_all([0] * 18 + [6, 4, 10])
    tenth = state["frames"][9]
    assert (tenth.first_shot, tenth.second_shot, tenth.third_shot) == (6, SPARE, 10)
    assert bowling.summary(state)["total"] == 20


def test_tenth_frame_open_ends_game():
    state = _roll_all([0] * 18 + [3, 4])
    with pytest.raises(ValueError, match="no rolls left"):
        bowling.apply({"type": "ROLL", "pins": 1}, state)


def test_roll_rejects_more_pins_than_standing():
    state = _roll_all([7])
    with pytest.raises(ValueError, match="pins standing"):
        bowling.apply({"type": "ROLL", "pins": 5}, state)


def test_tenth_frame_third_ball_limited_by_rack():
    state = _roll_all([0] * 18 + [10, 6])
    with pytest.raises(ValueError, match="pins standing"):
        bowling.apply({"type": "ROLL", "pins": 5}, state)


@pytest.mark.parametrize("pins", [-1, 11, True])
def test_roll_rejects_invalid_pin_values(pins):
    with pytest.raises(ValueError):
        bowling.apply({"type": "ROLL", "pins": pins}, bowling.init_state({}))


def test_unknown_event_type():
    with pytest.raises(ValueError, match="invalid bowling event"):
        bowling.apply({"type": "POINT"}, bowling.init_state({}))


def test_frame_event_edits_and_rescored():
    state = _roll_all([3, 4] * 10)
    assert bowling.summary(state)["total"] == 70

    state = bowling.apply(
        {"type": "FRAME", "frame": {"id": 1, "first_shot": 10}}, state
    )
    summary = bowling.summary(state)
    assert summary["scores"][0] == 17
    assert summary["total"] == 80


def test_frame_event_requires_id():
    with pytest.raises(ValueError, match="requires a frame"):
        bowling.apply({"type": "FRAME", "frame": {}}, bowling.init_state({}))


def test_roll_fills_frame_cleared_by_edit():
    state = _roll_all([3, 4, 5, 2])
    state = bowling.apply({"type": "FRAME", "frame": {"id": 1}}, state)
    state = bowling.apply({"type": "ROLL", "pins": 9}, state)
    assert state["frames"][0].first_shot == 9
    assert bowling.summary(state)["scores"][:2] == [None, None]


def test_tenth_frame_strike_gutter_then_clear_is_a_spare():
    state = _roll_all([0] * 18 + [10, 0, 10])
    tenth = state["frames"][9]
    assert tenth.third_shot == SPARE
    summary = bowling.summary(state)
    assert summary["frames"][9]["marks"] == ["X", "0", "/"]
    assert summary["total"] == 20


@pytest.mark.parametrize("frame", [{"id": None}, {"id": "three"}, {"id": [1]}])
def test_frame_event_rejects_non_integer_id(frame):
    with pytest.raises(ValueError, match="integer id"):
        bowling.apply({"type": "FRAME", "frame": frame}, bowling.init_state({}))
