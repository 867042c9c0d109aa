import logging
import os
from typing import List, Tuple

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import API_PREFIX
from .exceptions import DomainException, ProblemDetail, problem_response
from .routers import bowling
from .utils.sentry import init_sentry

logger = logging.getLogger(__name__)

# The API only reads candidates and posts game records as JSON.
CORS_METHODS = ["GET", "POST"]
CORS_HEADERS = ["Content-Type"]


def _load_cors_settings() -> Tuple[List[str], bool]:
    raw = os.getenv("ALLOWED_ORIGINS", "").strip()
    if not raw:
        raise ValueError(
            "ALLOWED_ORIGINS environment variable must be set to a comma-separated "
            "list of front-end origins allowed to call the bowling API."
        )
    origins = [o.strip().rstrip("/") for o in raw.split(",") if o.strip()]
    if not origins:
        raise ValueError("ALLOWED_ORIGINS must contain at least one non-empty origin.")
    if "*" in origins:
        raise ValueError(
            "ALLOWED_ORIGINS cannot include '*' (wildcard). Specify explicit, trusted origins."
        )
    credentials = os.getenv("ALLOW_CREDENTIALS", "false").lower() == "true"
    return origins, credentials


init_sentry()
ALLOWED_ORIGINS, ALLOW_CREDENTIALS = _load_cors_settings()

app = FastAPI(
    title="Bowling Target Completion API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.state.limiter = bowling.limiter
app.add_exception_handler(RateLimitExceeded, bowling.rate_limit_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOW_CREDENTIALS,
    allow_methods=CORS_METHODS,
    allow_headers=CORS_HEADERS,
)

logger.info("API_PREFIX=%r origins=%s", API_PREFIX, ", ".join(ALLOWED_ORIGINS))


def _validation_detail(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "request body is invalid"


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    return problem_response(
        ProblemDetail(
            type=exc.type,
            title=exc.title,
            detail=exc.detail,
            status=exc.status_code,
            instance=request.url.path,
            code=exc.code,
        )
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return problem_response(
        ProblemDetail(
            title="Invalid request",
            detail=_validation_detail(exc),
            status=422,
            instance=request.url.path,
            code="invalid_request",
        )
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return problem_response(
        ProblemDetail(
            title=detail,
            detail=detail,
            status=exc.status_code,
            instance=request.url.path,
            code=getattr(exc, "code", f"http_{exc.status_code}"),
        ),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    # internals stay in the log; clients only get a generic problem
    return problem_response(
        ProblemDetail(
            title="Internal Server Error",
            detail="the completion service failed to handle this request",
            status=500,
            instance=request.url.path,
            code="internal_server_error",
        )
    )


@app.get("/healthz", tags=["health"])  # Unprefixed for reverse proxy / uptime checks
def root_healthz():
    return {"status": "ok"}


api_router = APIRouter(prefix=API_PREFIX)


@api_router.get("/healthz", tags=["health"])
def api_healthz():
    pools = bowling.completion_search.pools
    return {
        "status": "ok",
        "pools": {
            "ordinary": len(pools.ordinary),
            "tenth": len(pools.tenth),
            "ordinaryFiltered": len(pools.ordinary_filtered),
            "tenthFiltered": len(pools.tenth_filtered),
        },
    }


v0_router = APIRouter(prefix="/v0")
v0_router.include_router(bowling.router)
api_router.include_router(v0_router)
app.include_router(api_router)
