"""Renderer — validate, serialize, then commit a problem detail to a sink.

All validation and encoding happens before the sink is touched. A problem
that fails validation leaves the sink exactly as it was; once the first
header is set, only the sink itself can fail.
"""

from enum import Enum
from typing import Any

import structlog

from problemdetail.errors import ProblemValidationError
from problemdetail.render.encoders import encode_json, encode_xml
from problemdetail.render.sink import ResponseSink
from problemdetail.validators.engine import validation_engine

logger = structlog.get_logger()


class Encoding(str, Enum):
    """The two wire formats a problem detail can be rendered as."""

    JSON = "json"
    XML = "xml"

    @property
    def content_type(self) -> str:
        return CONTENT_TYPES[self]


CONTENT_TYPES = {
    Encoding.JSON: "application/problem+json; charset=utf-8",
    Encoding.XML: "application/problem+xml; charset=utf-8",
}

ENCODERS = {
    Encoding.JSON: encode_json,
    Encoding.XML: encode_xml,
}


def problem_members(problem) -> list[tuple[str, Any]]:
    """Ordered (name, value) pairs to put on the wire.

    type, title and status are always present; detail and instance only
    when set; extension members follow in their declared order.
    """
    members: list[tuple[str, Any]] = [
        ("type", problem.type),
        ("title", problem.title),
        ("status", problem.status),
    ]
    if problem.detail:
        members.append(("detail", problem.detail))
    if problem.instance:
        members.append(("instance", problem.instance))

    extension_members = getattr(problem, "extension_members", None)
    if extension_members is not None:
        members.extend(extension_members())

    return members


def render_bytes(problem, status_code: int, encoding: Encoding = Encoding.JSON) -> tuple[bytes, str]:
    """Validate and serialize without writing anywhere.

    Returns:
        (body, content type)

    Raises:
        ProblemValidationError: the problem violates its validation level
    """
    encoding = Encoding(encoding)
    bound = problem.bind_status(status_code)

    try:
        validation_engine.check(bound)
    except ProblemValidationError as err:
        logger.warning(
            "problem_render_rejected",
            problem_type=bound.type,
            level=bound.validation_level.value,
            failures=[code.value for code in err.codes],
        )
        raise

    body = ENCODERS[encoding](problem_members(bound))
    return body, encoding.content_type


def render(sink: ResponseSink, problem, status_code: int, encoding: Encoding = Encoding.JSON) -> None:
    """Write `problem` to `sink` as a complete response.

    Raises:
        ProblemValidationError: nothing was written
        Exception: whatever the sink raised; the response state is unknown
    """
    body, content_type = render_bytes(problem, status_code, encoding)

    sink.set_header("Content-Type", content_type)
    sink.set_status(status_code)
    sink.write(body)

    logger.debug(
        "problem_rendered",
        problem_type=problem.type,
        status=status_code,
        encoding=Encoding(encoding).value,
        bytes=len(body),
    )


def write_json(sink: ResponseSink, problem, status_code: int) -> None:
    render(sink, problem, status_code, Encoding.JSON)


def write_xml(sink: ResponseSink, problem, status_code: int) -> None:
    render(sink, problem, status_code, Encoding.XML)
