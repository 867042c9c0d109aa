"""Internal application services (pure helpers, no I/O)."""

from .validation import (
    ValidationError,
    validate_game_frames,
    require_known_prefix,
    require_complete_game,
    validate_limit,
)
from .candidates import (
    CandidatePools,
    LegalityPolicy,
    ordinary_frame_candidates,
    tenth_frame_candidates,
)
from .realism import realism
from .completion import (
    FREE,
    CompletionSearch,
    FrameSlot,
    SearchStats,
    Solution,
    search,
)

__all__ = [
    "ValidationError",
    "validate_game_frames",
    "require_known_prefix",
    "require_complete_game",
    "validate_limit",
    "CandidatePools",
    "LegalityPolicy",
    "ordinary_frame_candidates",
    "tenth_frame_candidates",
    "realism",
    "FREE",
    "CompletionSearch",
    "FrameSlot",
    "SearchStats",
    "Solution",
    "search",
]
