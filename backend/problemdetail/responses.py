"""FastAPI / Starlette integration.

Turns raised problem details into `application/problem+json` or
`application/problem+xml` responses. The web framework stays at the edge:
rendering goes through a ResponseRecorder and the recorded status, headers
and body are copied into a Starlette Response.
"""

from typing import Awaitable, Callable, Optional

import structlog
from fastapi import FastAPI, Request
from starlette.responses import Response

from problemdetail.capability import UNTYPED, as_problem
from problemdetail.errors import ProblemValidationError
from problemdetail.problem import ProblemDetail, ProblemExtension, new, with_validation_level
from problemdetail.render import Encoding, ResponseRecorder, render
from problemdetail.validators.models import ValidationLevel

logger = structlog.get_logger()

XML_MEDIA_TYPES = {"application/problem+xml", "application/xml", "text/xml"}
JSON_MEDIA_TYPES = {"application/problem+json", "application/json", "*/*", "application/*"}


def negotiate_encoding(accept: Optional[str]) -> Encoding:
    """Pick XML only when the client asks for it before any JSON type.

    Entries with q=0 are ignored; anything unrecognised falls back to JSON.
    """
    for entry in (accept or "").split(","):
        media_type, *params = [part.strip().lower() for part in entry.split(";")]
        if any(p.replace(" ", "") in ("q=0", "q=0.0", "q=0.00", "q=0.000") for p in params):
            continue
        if media_type in XML_MEDIA_TYPES:
            return Encoding.XML
        if media_type in JSON_MEDIA_TYPES:
            return Encoding.JSON
    return Encoding.JSON


def problem_response(problem, status_code: int, encoding: Encoding = Encoding.JSON) -> Response:
    """Render `problem` into a Starlette Response.

    Raises:
        ProblemValidationError: the problem violates its validation level
    """
    recorder = ResponseRecorder()
    render(recorder, problem, status_code, encoding)
    return Response(
        content=bytes(recorder.body),
        status_code=recorder.status_code,
        headers=recorder.headers,
    )


def generic_problem() -> ProblemDetail:
    """Untyped problem; its title becomes the reason phrase of the status it is rendered with."""
    return new(UNTYPED, with_validation_level(ValidationLevel.NONE))


def register_problem_handlers(
    app: FastAPI,
    status_map: Optional[dict[str, int]] = None,
    default_status: int = 500,
) -> Callable[[Request, Exception], Awaitable[Response]]:
    """Install exception handlers that answer raised problem details.

    Args:
        app: Application to install on
        status_map: Problem type → HTTP status; wins over the problem's own status
        default_status: Used when neither the map nor the problem gives a status

    Returns:
        The installed handler, for reuse by catch-all handlers on wrapped errors
    """
    status_map = dict(status_map or {})

    async def problem_exception_handler(request: Request, exc: Exception) -> Response:
        problem = as_problem(exc)
        encoding = negotiate_encoding(request.headers.get("accept"))
        status_code = status_map.get(problem.kind()) or problem.status or default_status

        try:
            response = problem_response(problem, status_code, encoding)
        except ProblemValidationError as err:
            logger.error(
                "problem_response_invalid",
                path=request.url.path,
                problem_type=problem.kind(),
                failures=[code.value for code in err.codes],
            )
            return problem_response(generic_problem(), 500, encoding)

        logger.info(
            "problem_response",
            path=request.url.path,
            method=request.method,
            problem_type=problem.kind(),
            status=status_code,
        )
        return response

    app.add_exception_handler(ProblemDetail, problem_exception_handler)
    app.add_exception_handler(ProblemExtension, problem_exception_handler)
    return problem_exception_handler
