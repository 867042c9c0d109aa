from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    DEFAULT_FORBID_FIRST_ZERO,
    DEFAULT_PREFER_REALISM,
    DEFAULT_SOLUTION_LIMIT,
    MAX_SOLUTION_LIMIT,
)
from .scoring.bowling import FRAMES_PER_GAME


def _normalize_symbol(value: object) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("frame notation must be a string")
    trimmed = "".join(value.split()).upper()
    return trimmed or None


class CompletionRequest(BaseModel):
    frames: List[Optional[str]] = Field(
        default_factory=list, max_length=FRAMES_PER_GAME
    )
    target: int
    limit: int = Field(default=DEFAULT_SOLUTION_LIMIT, ge=1, le=MAX_SOLUTION_LIMIT)
    preferRealism: bool = DEFAULT_PREFER_REALISM
    forbidFirstZero: bool = DEFAULT_FORBID_FIRST_ZERO

    model_config = ConfigDict(extra="forbid")

    @field_validator("frames", mode="before")
    @classmethod
    def _normalize_frames(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [_normalize_symbol(v) for v in value]


class SolutionOut(BaseModel):
    frame8: str
    frame9: str
    frame10: str
    realism: float


class CompletionResponse(BaseModel):
    target: int
    previewScore: int
    count: int
    truncated: bool = False
    solutions: List[SolutionOut] = Field(default_factory=list)


class ScoreRequest(BaseModel):
    frames: List[str] = Field(
        ..., min_length=FRAMES_PER_GAME, max_length=FRAMES_PER_GAME
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("frames", mode="before")
    @classmethod
    def _normalize_frames(cls, value: object) -> object:
        if not isinstance(value, list):
            return value
        return [_normalize_symbol(v) or "" for v in value]


class ScoreOut(BaseModel):
    frames: List[str]
    scores: List[int]
    cumulative: List[int]
    total: int


class CandidateListOut(BaseModel):
    position: int
    forbidFirstZero: bool
    count: int
    frames: List[str]
