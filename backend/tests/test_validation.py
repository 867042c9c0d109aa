import pytest
from app.services.validation import (
    ValidationError,
    require_complete_game,
    require_known_prefix,
    validate_game_frames,
    validate_limit,
)


def test_accepts_valid_records() -> None:
    validate_game_frames([(10,)] * 9 + [(10, 10, 10)])
    validate_game_frames([(9, 1), None, (0, 0)])
    validate_game_frames([])


@pytest.mark.parametrize(
    "frames, msg",
    [
        ([(0, 0)] * 11, "Too many frames"),                 # eleven frames
        ([(10, 9, 1)], "cannot have bonus balls"),          # bonus in frame 1
        ([(6, 5)], "at most 10"),                           # pin overflow
        ([(10, 0)], "at most 10"),                          # strike with second ball
        ([None] * 9 + [(10,)], "bonus balls"),              # tenth strike, no bonus
        ([None] * 9 + [(4, 5, 1)], "bonus balls"),          # open tenth with third ball
        ([None] * 9 + [(10, 6, 6)], "bonus balls"),         # bonus pair over ten
    ],
    ids=[
        "too-many",
        "bonus-early",
        "pin-overflow",
        "strike-pair",
        "tenth-strike-alone",
        "tenth-open-third",
        "tenth-bonus-overflow",
    ],
)
def test_rejects_invalid_records(frames, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_game_frames(frames)
    assert msg.lower() in str(exc.value).lower()


def test_known_prefix_lists_missing_frames() -> None:
    require_known_prefix([(1, 1)] * 7)
    with pytest.raises(ValidationError, match="missing: 3, 6, 7"):
        require_known_prefix([(1, 1), (1, 1), None, (1, 1), (1, 1)])


def test_complete_game_needs_ten_frames() -> None:
    require_complete_game([(1, 1)] * 10)
    with pytest.raises(ValidationError, match="missing: 10"):
        require_complete_game([(1, 1)] * 9 + [None])


@pytest.mark.parametrize(
    "limit, msg",
    [(0, "at least 1"), (201, "less than or equal to 200"), (True, "boolean"), ("x", "integer")],
)
def test_rejects_bad_limits(limit, msg) -> None:
    with pytest.raises(ValidationError) as exc:
        validate_limit(limit, max_limit=200)  # type: ignore[arg-type]
    assert msg in str(exc.value)


def test_accepts_limit_in_range() -> None:
    assert validate_limit(50, max_limit=200) == 50
