import logging

import pytest

from app.scoring.bowling import score_game
from app.services.candidates import CandidatePools, LegalityPolicy
from app.services.completion import (
    FREE,
    CompletionSearch,
    FrameSlot,
    Solution,
    search,
)

STRICT = LegalityPolicy(forbid_first_zero=True)
OPEN = LegalityPolicy(forbid_first_zero=False)

SEVEN_STRIKES = [(10,)] * 7
SEVEN_SPARES = [(9, 1)] * 7
SEVEN_OPENS = [(3, 4)] * 7


@pytest.fixture(scope="module")
def searcher():
    return CompletionSearch(CandidatePools.build())


def test_seven_strikes_reach_perfect_game(searcher):
    result = searcher.search(SEVEN_STRIKES, FREE, FREE, FREE, 300, 50, STRICT)
    assert result == [Solution((10,), (10,), (10, 10, 10))]


def test_gutter_game_needs_gutter_first_balls(searcher):
    gutters = [(0, 0)] * 7
    assert searcher.search(gutters, FREE, FREE, FREE, 0, 50, STRICT) == []
    result = searcher.search(gutters, FREE, FREE, FREE, 0, 50, OPEN)
    assert result == [Solution((0, 0), (0, 0), (0, 0))]


def test_fixed_eighth_frame_is_respected(searcher):
    result = searcher.search(
        SEVEN_SPARES, FrameSlot.fixed([9, 1]), FREE, FREE, 210, 50, STRICT
    )
    assert result
    assert all(sol[0] == (9, 1) for sol in result)
    assert result == [Solution((9, 1), (10,), (10, 10, 7))]


def test_unreachable_target_returns_nothing(searcher):
    assert searcher.search(SEVEN_STRIKES, FREE, FREE, FREE, 301, 50, STRICT) == []
    assert searcher.search(SEVEN_OPENS, FrameSlot.fixed((3, 4)), FREE, FREE, -1, 50, OPEN) == []


def test_every_solution_hits_target(searcher):
    slot8 = FrameSlot.fixed((3, 4))
    result = searcher.search(SEVEN_OPENS, slot8, FREE, FREE, 70, 20, STRICT)
    assert len(result) == 20
    for sol in result:
        assert score_game(SEVEN_OPENS + list(sol)) == 70


def test_all_fixed_frames_are_checked_directly(searcher):
    slots = [FrameSlot.fixed((3, 4))] * 3
    assert searcher.search(SEVEN_OPENS, *slots, 70, 5, STRICT) == [
        Solution((3, 4), (3, 4), (3, 4))
    ]
    assert searcher.search(SEVEN_OPENS, *slots, 71, 5, STRICT) == []


def test_fixed_frames_bypass_legality_policy(searcher):
    slots = [FrameSlot.fixed((0, 5)), FrameSlot.fixed((0, 5)), FrameSlot.fixed((0, 5))]
    result = searcher.search(SEVEN_OPENS, *slots, 49 + 15, 5, STRICT)
    assert result == [Solution((0, 5), (0, 5), (0, 5))]


def test_overflow_bound_stops_enumeration(searcher):
    slot8 = FrameSlot.fixed((3, 4))
    solutions, stats = searcher.run(
        SEVEN_OPENS, slot8, FREE, FREE, 70, 5, STRICT, rank=False
    )
    assert len(solutions) == 5
    assert stats.overflowed is True
    assert stats.matches == 5
    assert stats.combinations < 55 * 220

    solutions, stats = searcher.run(
        SEVEN_OPENS, slot8, FREE, FREE, 70, 5, STRICT, rank=True
    )
    assert len(solutions) == 5
    assert stats.matches == 15


def test_unranked_results_keep_enumeration_order(searcher):
    slot8 = FrameSlot.fixed((3, 4))
    first = searcher.search(SEVEN_OPENS, slot8, FREE, FREE, 70, 3, STRICT, rank=False)
    longer = searcher.search(SEVEN_OPENS, slot8, FREE, FREE, 70, 8, STRICT, rank=False)
    assert longer[:3] == first


def test_ranked_results_sorted_by_realism(searcher):
    slot8 = FrameSlot.fixed((3, 4))
    result = searcher.search(SEVEN_OPENS, slot8, FREE, FREE, 70, 10, STRICT, rank=True)
    scores = [sol.realism for sol in result]
    assert scores == sorted(scores, reverse=True)


def test_cap_is_prefix_consistent_below_overflow(searcher):
    slot8 = FrameSlot.fixed((10,))
    full, stats = searcher.run(SEVEN_STRIKES, slot8, FREE, FREE, 280, 100, STRICT)
    assert stats.overflowed is False
    assert len(full) == 10
    # spare finishes with a strong first ball rank above every strike finish
    assert full[0] == Solution((10,), (10,), (8, 2, 6))
    assert full[4] == Solution((10,), (10,), (10, 0, 10))
    for cap in range(2, 8):
        assert searcher.search(SEVEN_STRIKES, slot8, FREE, FREE, 280, cap, STRICT) == full[:cap]


def test_search_is_idempotent(searcher):
    args = (SEVEN_OPENS, FrameSlot.fixed((3, 4)), FREE, FREE, 70, 10, STRICT)
    assert searcher.search(*args) == searcher.search(*args)


def test_non_positive_cap_returns_nothing(searcher):
    assert searcher.search(SEVEN_STRIKES, FREE, FREE, FREE, 300, 0, STRICT) == []


def test_module_search_accepts_injected_pools():
    pools = CandidatePools.build()
    result = search(
        SEVEN_STRIKES,
        FrameSlot.fixed((10,)),
        FrameSlot.fixed((10,)),
        FREE,
        300,
        5,
        STRICT,
        pools=pools,
    )
    assert result == [Solution((10,), (10,), (10, 10, 10))]


def test_frame_slot_variants():
    assert FREE.is_fixed is False
    assert FREE.kind == "free"
    assert FrameSlot.free() == FREE
    slot = FrameSlot.fixed([9, 1])
    assert slot.is_fixed
    assert slot.kind == "fixed"
    assert slot.frame == (9, 1)


@pytest.mark.parametrize(
    "kind, frame",
    [("fixed", None), ("free", (9, 1)), ("maybe", None)],
    ids=["fixed-without-frame", "free-with-frame", "unknown-kind"],
)
def test_frame_slot_rejects_mismatched_tag(kind, frame):
    with pytest.raises(ValueError):
        FrameSlot(kind, frame)


def test_search_method_takes_run_parameters(searcher):
    slot8 = FrameSlot.fixed((3, 4))
    result = searcher.search(
        prefix=SEVEN_OPENS,
        slot8=slot8,
        slot9=FREE,
        slot10=FREE,
        target=70,
        cap=4,
        policy=STRICT,
        rank=False,
    )
    solutions, _ = searcher.run(SEVEN_OPENS, slot8, FREE, FREE, 70, 4, STRICT, rank=False)
    assert result == solutions


def test_search_logs_summary(searcher, caplog):
    with caplog.at_level(logging.DEBUG, logger="app.services.completion"):
        searcher.search(SEVEN_OPENS, *[FrameSlot.fixed((3, 4))] * 3, 70, 5, STRICT)
    assert "completion search target=70" in caplog.text
