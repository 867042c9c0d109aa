"""Heuristic ordering of equally scoring completions.

Higher is more believable: spares with a strong first ball are favoured,
strike runs and gutter first balls are penalised. The weights only affect
presentation order, never which completions are valid.
"""
from ..scoring.bowling import (
    Frame,
    PINS,
    is_open,
    is_spare,
    is_strike,
    is_tenth_spare,
    is_tenth_strike,
)

WEIGHTS: dict[str, float] = {
    "spare_base": 5,
    "spare_first_ball_mul": 2,
    "strike_penalty": -3,
    "consecutive_strike_penalty": -4,
    "open_first_ball_mul": 1,
    "open_second_ball_mul": 0.5,
    "gutter_first_penalty": -8,
    "tenth_nice_bonus": 2,
    "triple_strike_penalty": -2,
}


def _spare_points(first_ball: int) -> float:
    return WEIGHTS["spare_base"] + first_ball * WEIGHTS["spare_first_ball_mul"]


def _open_points(frame: Frame) -> float:
    a, b = frame
    s = a * WEIGHTS["open_first_ball_mul"] + b * WEIGHTS["open_second_ball_mul"]
    if a == 0:
        s += WEIGHTS["gutter_first_penalty"]
    return s


def realism(f8: Frame, f9: Frame, f10: Frame) -> float:
    s = 0.0

    mids = (f8, f9)
    for i, f in enumerate(mids):
        if is_strike(f):
            s += WEIGHTS["strike_penalty"]
            if i > 0 and is_strike(mids[i - 1]):
                s += WEIGHTS["consecutive_strike_penalty"]
        elif is_spare(f):
            s += _spare_points(f[0])
        elif is_open(f):
            s += _open_points(f)

    if is_tenth_strike(f10):
        _, b, c = f10
        if b == PINS and c == PINS:
            s += WEIGHTS["triple_strike_penalty"]
        if b != PINS and b + c == PINS:
            s += WEIGHTS["tenth_nice_bonus"]
    elif is_tenth_spare(f10):
        s += _spare_points(f10[0])
    elif len(f10) == 2:
        s += _open_points(f10)

    # NOTE: back-to-back strikes in 8 and 9 are charged a second time here;
    # existing result orderings depend on it.
    if is_strike(f8) and is_strike(f9):
        s += WEIGHTS["consecutive_strike_penalty"]
    return s
