"""Target-score completion search over frames 8, 9 and 10.

Given frames 1-7 and, optionally, some of frames 8-10, every combination of
legal values for the open positions is scored and the ones that land exactly
on the target are returned. The pools are small (at most 66 x 66 x 241
combinations), so the search is a plain enumeration; the only latency control
is the overflow bound, which stops enumeration once enough matches have been
recorded.
"""
from __future__ import annotations

import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Iterator, List, Literal, NamedTuple, Optional, Sequence, Tuple

from ..scoring.bowling import Frame, score_game
from .candidates import CandidatePools, LegalityPolicy
from .realism import realism

logger = logging.getLogger(__name__)

RANKED_OVERFLOW_FACTOR = 3


@dataclass(frozen=True)
class FrameSlot:
    """A trailing frame position: either fixed to a value or free to search.

    ``kind`` is the tag; a fixed slot always carries its frame and a free
    slot never does.
    """

    kind: Literal["fixed", "free"]
    frame: Optional[Frame] = None

    def __post_init__(self) -> None:
        if self.kind not in ("fixed", "free"):
            raise ValueError(f"unknown slot kind: {self.kind!r}")
        if self.kind == "fixed" and self.frame is None:
            raise ValueError("a fixed slot needs a frame")
        if self.kind == "free" and self.frame is not None:
            raise ValueError("a free slot cannot carry a frame")

    @classmethod
    def fixed(cls, frame: Sequence[int]) -> "FrameSlot":
        return cls("fixed", tuple(frame))

    @classmethod
    def free(cls) -> "FrameSlot":
        return cls("free")

    @property
    def is_fixed(self) -> bool:
        return self.kind == "fixed"


FREE = FrameSlot.free()


class Solution(NamedTuple):
    frame8: Frame
    frame9: Frame
    frame10: Frame

    @property
    def realism(self) -> float:
        return realism(self.frame8, self.frame9, self.frame10)


@dataclass
class SearchStats:
    combinations: int = 0
    matches: int = 0
    overflowed: bool = False
    elapsed_ms: float = 0.0


@dataclass
class _Enumeration:
    prefix: Tuple[Frame, ...]
    pools: Tuple[Tuple[Frame, ...], Tuple[Frame, ...], Tuple[Frame, ...]]
    target: int
    stats: SearchStats = field(default_factory=SearchStats)

    def matches(self) -> Iterator[Solution]:
        for combo in itertools.product(*self.pools):
            self.stats.combinations += 1
            if score_game(self.prefix + combo) == self.target:
                self.stats.matches += 1
                yield Solution(*combo)


class CompletionSearch:
    """Enumerates completions using pools built once and held here."""

    def __init__(
        self,
        pools: Optional[CandidatePools] = None,
        *,
        overflow_factor: int = RANKED_OVERFLOW_FACTOR,
    ) -> None:
        self.pools = pools or CandidatePools.build()
        self.overflow_factor = max(1, overflow_factor)

    def _pool_for(self, slot: FrameSlot, free_pool: Tuple[Frame, ...]) -> Tuple[Frame, ...]:
        if slot.is_fixed:
            return (slot.frame,)
        return free_pool

    def overflow_bound(self, cap: int, rank: bool) -> int:
        return cap * self.overflow_factor if rank else cap

    def run(
        self,
        prefix: Sequence[Sequence[int]],
        slot8: FrameSlot,
        slot9: FrameSlot,
        slot10: FrameSlot,
        target: int,
        cap: int,
        policy: LegalityPolicy,
        rank: bool = True,
    ) -> Tuple[List[Solution], SearchStats]:
        started = time.perf_counter()
        if cap < 1:
            return [], SearchStats()

        ordinary, tenth = self.pools.for_policy(policy)
        enumeration = _Enumeration(
            prefix=tuple(tuple(f) for f in prefix),
            pools=(
                self._pool_for(slot8, ordinary),
                self._pool_for(slot9, ordinary),
                self._pool_for(slot10, tenth),
            ),
            target=target,
        )
        bound = self.overflow_bound(cap, rank)
        solutions = list(itertools.islice(enumeration.matches(), bound))
        stats = enumeration.stats
        stats.overflowed = len(solutions) >= bound

        if not solutions and slot8.is_fixed and slot9.is_fixed and slot10.is_fixed:
            fixed = Solution(slot8.frame, slot9.frame, slot10.frame)
            if score_game(enumeration.prefix + tuple(fixed)) == target:
                solutions.append(fixed)

        if rank:
            solutions.sort(key=lambda sol: sol.realism, reverse=True)

        stats.elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            "completion search target=%d cap=%d examined=%d matched=%d overflowed=%s in %.1fms",
            target,
            cap,
            stats.combinations,
            stats.matches,
            stats.overflowed,
            stats.elapsed_ms,
        )
        return solutions[:cap], stats

    def search(
        self,
        prefix: Sequence[Sequence[int]],
        slot8: FrameSlot,
        slot9: FrameSlot,
        slot10: FrameSlot,
        target: int,
        cap: int,
        policy: LegalityPolicy,
        rank: bool = True,
    ) -> List[Solution]:
        """Like :meth:`run` without the statistics."""
        solutions, _ = self.run(
            prefix, slot8, slot9, slot10, target, cap, policy, rank=rank
        )
        return solutions


def search(
    prefix: Sequence[Sequence[int]],
    slot8: FrameSlot,
    slot9: FrameSlot,
    slot10: FrameSlot,
    target: int,
    cap: int,
    policy: LegalityPolicy,
    rank: bool = True,
    *,
    pools: Optional[CandidatePools] = None,
) -> List[Solution]:
    """One-shot search; long-lived callers should hold a ``CompletionSearch``."""
    return CompletionSearch(pools).search(
        prefix, slot8, slot9, slot10, target, cap, policy, rank
    )
