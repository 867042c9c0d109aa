from typing import Optional, Sequence

from ..scoring.bowling import (
    FRAMES_PER_GAME,
    Frame,
    is_valid_ordinary,
    is_valid_tenth,
)

KNOWN_PREFIX_FRAMES = 7


class ValidationError(Exception):
    """Raised when a submitted game record cannot be searched or scored."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


def validate_game_frames(frames: Sequence[Optional[Frame]]) -> None:
    """Check parsed frames against the per-position frame rules.

    Rules:
    - At most ten frames
    - Frames 1-9 are a strike or two balls totalling at most ten
    - Frame 10 is an open pair, or a strike/spare with its bonus balls
    - ``None`` marks a frame that has not been entered and is skipped
    """

    if len(frames) > FRAMES_PER_GAME:
        raise ValidationError(
            f"Too many frames. A game has {FRAMES_PER_GAME} frames."
        )

    for i, frame in enumerate(frames, start=1):
        if frame is None:
            continue
        if i < FRAMES_PER_GAME:
            if not is_valid_ordinary(frame):
                if len(frame) == 3:
                    raise ValidationError(
                        f"Frame #{i} cannot have bonus balls; only frame 10 does."
                    )
                raise ValidationError(
                    f"Frame #{i} must be a strike or two balls totalling at most 10."
                )
        elif not is_valid_tenth(frame):
            raise ValidationError(
                f"Frame #{i} must be an open frame or a strike/spare with bonus balls."
            )

    return None


def require_known_prefix(
    frames: Sequence[Optional[Frame]],
    *,
    known: int = KNOWN_PREFIX_FRAMES,
) -> None:
    missing = [
        i
        for i in range(1, known + 1)
        if i > len(frames) or frames[i - 1] is None
    ]
    if missing:
        formatted = ", ".join(str(i) for i in missing)
        raise ValidationError(
            f"Frames 1-{known} must all be entered (missing: {formatted})."
        )


def require_complete_game(frames: Sequence[Optional[Frame]]) -> None:
    require_known_prefix(frames, known=FRAMES_PER_GAME)


def validate_limit(limit: int, *, max_limit: int) -> int:
    if isinstance(limit, bool):
        raise ValidationError("Limit must be an integer (not a boolean).")
    try:
        value = int(limit)
    except (TypeError, ValueError):
        raise ValidationError("Limit must be an integer.")
    if value < 1:
        raise ValidationError("Limit must be at least 1.")
    if value > max_limit:
        raise ValidationError(f"Limit must be less than or equal to {max_limit}.")
    return value
