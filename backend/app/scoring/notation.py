"""Score-sheet notation for bowling frames (``X``, ``9/``, ``8-``, ``X9/``)."""
from typing import List, Optional, Sequence

from .bowling import FRAMES_PER_GAME, PINS, Frame

STRIKE = "X"
SPARE = "/"
GUTTER = "-"


def _roll(ch: str) -> Optional[int]:
    if ch == GUTTER:
        return 0
    if ch == STRIKE:
        return PINS
    if ch in "0123456789":
        return int(ch)
    return None


def _parse_pair(s: str) -> Optional[Frame]:
    a = _roll(s[0])
    if a is None or a == PINS:
        return None
    if s[1] == SPARE:
        return (a, PINS - a)
    b = _roll(s[1])
    if b is None or a + b > PINS:
        return None
    return (a, b)


def _parse_bonus(s: str) -> Optional[Frame]:
    if s[0] == STRIKE:
        b = _roll(s[1])
        if b is None:
            return None
        if s[2] == SPARE:
            # a spare needs a fresh rack left standing after the second ball
            if b == PINS:
                return None
            return (PINS, b, PINS - b)
        c = _roll(s[2])
        if c is None or (b != PINS and b + c > PINS):
            return None
        return (PINS, b, c)

    first_two = _parse_pair(s[:2])
    if first_two is None or sum(first_two) != PINS:
        return None
    c = _roll(s[2])
    if c is None:
        return None
    return first_two + (c,)


def parse_frame(symbol: Optional[str]) -> Optional[Frame]:
    """Parse one frame of notation, returning ``None`` when it is not valid.

    Two-character forms cover frames 1-10; three-character forms are the
    tenth frame with its bonus roll(s). Whitespace and case are ignored.
    """
    if not symbol:
        return None
    s = "".join(symbol.split()).upper()
    if s == STRIKE:
        return (PINS,)
    if len(s) == 2:
        return _parse_pair(s)
    if len(s) == 3:
        return _parse_bonus(s)
    return None


def _mark(pins: int) -> str:
    if pins == 0:
        return GUTTER
    if pins == PINS:
        return STRIKE
    return str(pins)


def format_frame(frame: Frame) -> str:
    if len(frame) == 1 and frame[0] == PINS:
        return STRIKE
    if len(frame) == 2:
        a, b = frame
        if a + b == PINS:
            return f"{_mark(a)}{SPARE}"
        return f"{_mark(a)}{_mark(b)}"

    a, b, c = frame
    if a == PINS:
        if b != PINS and b + c == PINS:
            third = SPARE
        else:
            third = _mark(c)
        return f"{STRIKE}{_mark(b)}{third}"
    return f"{_mark(a)}{SPARE}{_mark(c)}"


def parse_frames(symbols: Sequence[Optional[str]], upto: int = FRAMES_PER_GAME) -> List[Optional[Frame]]:
    """Positional parse; blank or invalid entries stay as ``None`` placeholders."""
    frames: List[Optional[Frame]] = []
    for i in range(upto):
        raw = symbols[i] if i < len(symbols) else None
        frames.append(parse_frame(raw))
    return frames
