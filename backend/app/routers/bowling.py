# backend/app/routers/bowling.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from ..cache import completion_cache, completion_cache_key
from ..config import (
    COMPLETION_RATE_LIMIT,
    DEFAULT_FORBID_FIRST_ZERO,
    MAX_SOLUTION_LIMIT,
    RANKED_OVERFLOW_FACTOR,
    rate_limits_disabled,
)
from ..exceptions import (
    InvalidFrameNotation,
    InvalidGameRecord,
    ProblemDetail,
    http_problem,
    problem_response,
)
from ..schemas import (
    CandidateListOut,
    CompletionRequest,
    CompletionResponse,
    ScoreOut,
    ScoreRequest,
    SolutionOut,
)
from ..scoring import bowling
from ..scoring.bowling import Frame
from ..scoring.notation import format_frame, parse_frame
from ..services import (
    CandidatePools,
    CompletionSearch,
    FrameSlot,
    LegalityPolicy,
    ValidationError,
    require_complete_game,
    require_known_prefix,
    validate_game_frames,
    validate_limit,
)
from ..services.validation import KNOWN_PREFIX_FRAMES

logger = logging.getLogger(__name__)


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        parts = [ip.strip() for ip in forwarded.split(",") if ip.strip()]
        if parts:
            return parts[-1]
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    if request.client and request.client.host:
        return request.client.host
    return "anonymous"


def completion_rate_limit() -> str:
    if rate_limits_disabled():
        return "1000/second"
    return COMPLETION_RATE_LIMIT


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else ""
    if detail:
        message = f"rate limit exceeded: {detail}"
    else:
        message = "rate limit exceeded: please wait before requesting more completions."
    logger.info("completion rate limit hit for %s", _client_ip(request))
    problem = ProblemDetail(
        title="Too Many Requests",
        detail=message,
        status=429,
        instance=request.url.path,
        code="rate_limit_exceeded",
    )
    return problem_response(problem)


limiter = Limiter(key_func=_client_ip)
router = APIRouter(prefix="/bowling", tags=["bowling"])

# Pools depend only on the legality policy, so they are built once here.
completion_search = CompletionSearch(
    CandidatePools.build(), overflow_factor=RANKED_OVERFLOW_FACTOR
)


def _parse_record(symbols: List[Optional[str]]) -> List[Optional[Frame]]:
    frames: List[Optional[Frame]] = []
    for number, symbol in enumerate(symbols, start=1):
        if not symbol:
            frames.append(None)
            continue
        frame = parse_frame(symbol)
        if frame is None:
            raise InvalidFrameNotation(number, symbol)
        frames.append(frame)
    try:
        validate_game_frames(frames)
    except ValidationError as exc:
        raise InvalidGameRecord(exc.detail)
    return frames


def _slot(frames: List[Optional[Frame]], index: int) -> FrameSlot:
    frame = frames[index] if index < len(frames) else None
    return FrameSlot.fixed(frame) if frame else FrameSlot.free()


# POST /api/v0/bowling/completions
@router.post("/completions", response_model=CompletionResponse)
@limiter.limit(completion_rate_limit, key_func=_client_ip)
async def complete_game(request: Request, body: CompletionRequest) -> CompletionResponse:
    frames = _parse_record(body.frames)
    try:
        require_known_prefix(frames)
        limit = validate_limit(body.limit, max_limit=MAX_SOLUTION_LIMIT)
    except ValidationError as exc:
        raise InvalidGameRecord(exc.detail)

    key = completion_cache_key(
        frames, body.target, limit, body.preferRealism, body.forbidFirstZero
    )
    cached = await completion_cache.get(key)
    if cached is not None:
        return cached

    solutions, stats = completion_search.run(
        frames[:KNOWN_PREFIX_FRAMES],
        _slot(frames, 7),
        _slot(frames, 8),
        _slot(frames, 9),
        body.target,
        limit,
        LegalityPolicy(forbid_first_zero=body.forbidFirstZero),
        rank=body.preferRealism,
    )
    if stats.overflowed:
        logger.info(
            "completion search for target %d stopped at overflow bound after %d combinations",
            body.target,
            stats.combinations,
        )

    response = CompletionResponse(
        target=body.target,
        previewScore=bowling.preview_score(frames),
        count=len(solutions),
        truncated=stats.overflowed,
        solutions=[
            SolutionOut(
                frame8=format_frame(sol.frame8),
                frame9=format_frame(sol.frame9),
                frame10=format_frame(sol.frame10),
                realism=sol.realism,
            )
            for sol in solutions
        ],
    )
    await completion_cache.set(key, response)
    return response


# POST /api/v0/bowling/score
@router.post("/score", response_model=ScoreOut)
async def score_record(body: ScoreRequest) -> ScoreOut:
    frames = _parse_record(body.frames)
    try:
        require_complete_game(frames)
    except ValidationError as exc:
        raise InvalidGameRecord(exc.detail)
    result = bowling.summary(frames)
    return ScoreOut(
        frames=[format_frame(f) for f in frames],
        scores=result["scores"],
        cumulative=result["cumulative"],
        total=result["total"],
    )


# GET /api/v0/bowling/candidates?position=8
@router.get("/candidates", response_model=CandidateListOut)
async def list_candidates(
    position: int = Query(..., description="Frame number, 8-10"),
    forbidFirstZero: bool = Query(DEFAULT_FORBID_FIRST_ZERO),
) -> CandidateListOut:
    if position not in (8, 9, 10):
        raise http_problem(400, "position must be 8, 9 or 10", "invalid_position")
    ordinary, tenth = completion_search.pools.for_policy(
        LegalityPolicy(forbid_first_zero=forbidFirstZero)
    )
    pool = tenth if position == 10 else ordinary
    return CandidateListOut(
        position=position,
        forbidFirstZero=forbidFirstZero,
        count=len(pool),
        frames=[format_frame(f) for f in pool],
    )
