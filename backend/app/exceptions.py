from typing import Optional

from fastapi import HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class InvalidFrameNotation(DomainException):
    def __init__(self, frame_number: int, symbol: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid frame notation",
            detail=(
                f"frame {frame_number}: '{symbol}' is not valid notation "
                "(e.g. X, 9/, 9-, 81, --, XXX, X9/, 9/X)"
            ),
            code="invalid_frame_notation",
        )
        self.frame_number = frame_number


class InvalidGameRecord(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid game record",
            detail=detail,
            code="invalid_game_record",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc


def problem_response(
    problem: ProblemDetail, *, headers: Optional[dict[str, str]] = None
) -> JSONResponse:
    """Render a problem as ``application/problem+json``."""

    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(),
        media_type="application/problem+json",
        headers=headers,
    )
