"""Legal frame values for the trailing frames of a game."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..scoring.bowling import PINS, Frame


@dataclass(frozen=True)
class LegalityPolicy:
    """Which frame values count as plausible during generation.

    ``forbid_first_zero`` drops every frame whose first ball is a gutter;
    a strike is never affected.
    """

    forbid_first_zero: bool = True

    @property
    def first_ball_min(self) -> int:
        return 1 if self.forbid_first_zero else 0


def ordinary_frame_candidates(policy: LegalityPolicy) -> Tuple[Frame, ...]:
    res: list[Frame] = [(PINS,)]
    lo = policy.first_ball_min
    for a in range(lo, PINS):
        res.append((a, PINS - a))
    for a in range(lo, PINS):
        for b in range(0, PINS - a):
            res.append((a, b))
    return tuple(res)


def tenth_frame_candidates(policy: LegalityPolicy) -> Tuple[Frame, ...]:
    res: list[Frame] = []
    lo = policy.first_ball_min
    for a in range(lo, PINS):
        for b in range(0, PINS - a):
            res.append((a, b))
    for a in range(lo, PINS):
        for c in range(0, PINS + 1):
            res.append((a, PINS - a, c))
    for b in range(0, PINS + 1):
        top = PINS if b == PINS else PINS - b
        for c in range(0, top + 1):
            res.append((PINS, b, c))
    return tuple(res)


@dataclass(frozen=True)
class CandidatePools:
    """The four precomputed pools: ordinary/tenth, with and without the filter."""

    ordinary: Tuple[Frame, ...]
    tenth: Tuple[Frame, ...]
    ordinary_filtered: Tuple[Frame, ...]
    tenth_filtered: Tuple[Frame, ...]

    @classmethod
    def build(cls) -> "CandidatePools":
        open_policy = LegalityPolicy(forbid_first_zero=False)
        strict_policy = LegalityPolicy(forbid_first_zero=True)
        return cls(
            ordinary=ordinary_frame_candidates(open_policy),
            tenth=tenth_frame_candidates(open_policy),
            ordinary_filtered=ordinary_frame_candidates(strict_policy),
            tenth_filtered=tenth_frame_candidates(strict_policy),
        )

    def for_policy(self, policy: LegalityPolicy) -> Tuple[Tuple[Frame, ...], Tuple[Frame, ...]]:
        if policy.forbid_first_zero:
            return self.ordinary_filtered, self.tenth_filtered
        return self.ordinary, self.tenth
