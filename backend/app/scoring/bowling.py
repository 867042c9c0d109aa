"""Ten-pin bowling frame model and scoring engine."""
from typing import Dict, List, Optional, Sequence, Tuple

Frame = Tuple[int, ...]

FRAMES_PER_GAME = 10
PINS = 10
MAX_SCORE = 300


def is_strike(frame: Frame) -> bool:
    return len(frame) == 1 and frame[0] == PINS


def is_spare(frame: Frame) -> bool:
    return len(frame) == 2 and frame[0] + frame[1] == PINS and frame[0] != PINS


def is_open(frame: Frame) -> bool:
    return len(frame) == 2 and frame[0] + frame[1] < PINS


def is_tenth_strike(frame: Frame) -> bool:
    return len(frame) == 3 and frame[0] == PINS


def is_tenth_spare(frame: Frame) -> bool:
    return len(frame) == 3 and frame[0] + frame[1] == PINS and frame[0] != PINS


def _pins_ok(frame: Frame) -> bool:
    return all(isinstance(p, int) and 0 <= p <= PINS for p in frame)


def is_valid_ordinary(frame: Frame) -> bool:
    """Frames 1-9: a lone strike or two rolls totalling at most ten."""
    if not _pins_ok(frame):
        return False
    if len(frame) == 1:
        return frame[0] == PINS
    return len(frame) == 2 and frame[0] < PINS and frame[0] + frame[1] <= PINS


def is_valid_tenth(frame: Frame) -> bool:
    """Frame 10: an open pair, or a strike/spare carrying its bonus rolls."""
    if not _pins_ok(frame):
        return False
    if len(frame) == 2:
        return frame[0] + frame[1] < PINS
    if len(frame) != 3:
        return False
    a, b, c = frame
    if a == PINS:
        return b == PINS or b + c <= PINS
    return a + b == PINS


def _flatten(frames: Sequence[Frame]) -> List[int]:
    rolls: List[int] = []
    for frame in frames:
        rolls.extend(frame)
    return rolls


def frame_scores(frames: Sequence[Frame]) -> List[int]:
    """Per-frame contributions for frames 1-10.

    Rolls past the end of ``frames`` count as zero, so a partial game yields
    a running total instead of an error.
    """
    rolls = _flatten(frames)

    def at(i: int) -> int:
        return rolls[i] if i < len(rolls) else 0

    scores: List[int] = []
    cursor = 0
    for number in range(1, FRAMES_PER_GAME + 1):
        first = at(cursor)
        if first == PINS:
            scores.append(PINS + at(cursor + 1) + at(cursor + 2))
            cursor += 1
            continue

        a, b = first, at(cursor + 1)
        total = a + b
        if total == PINS:
            points = PINS + at(cursor + 2)
        else:
            points = total
        cursor += 2

        if number == FRAMES_PER_GAME and total == PINS:
            # the tenth frame walks its own bonus roll as well, so a spare
            # there earns that ball on top of the look-ahead
            points += at(cursor)
            cursor += 1
        scores.append(points)
    return scores


def score_game(frames: Sequence[Frame]) -> int:
    return sum(frame_scores(frames))


def preview_score(frames: Sequence[Optional[Frame]]) -> int:
    """Score a partly entered game, treating unknown frames as gutter pairs."""
    filled = [f if f else (0, 0) for f in list(frames)[:FRAMES_PER_GAME]]
    filled += [(0, 0)] * (FRAMES_PER_GAME - len(filled))
    return score_game(filled)


def summary(frames: Sequence[Frame]) -> Dict:
    scores = frame_scores(frames)
    cumulative = []
    total = 0
    for s in scores:
        total += s
        cumulative.append(total)
    return {
        "frames": [list(f) for f in frames],
        "scores": scores,
        "cumulative": cumulative,
        "total": total,
    }
