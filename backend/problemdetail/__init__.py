"""RFC 7807 problem details for HTTP APIs.

Usage:
    from problemdetail import new, with_detail, with_instance, with_title, write_json

    problem = new(
        "https://example.com/probs/out-of-credit",
        with_title("You do not have enough credit."),
        with_detail("Your current balance is 30, but that costs 50."),
        with_instance("/account/12345/msgs/abc"),
    )
    write_json(sink, problem, 403)
"""

from problemdetail.capability import UNTYPED, ProblemLike, as_problem, is_problem, kind_of
from problemdetail.errors import ProblemValidationError
from problemdetail.problem import (
    ProblemDetail,
    ProblemExtension,
    new,
    with_detail,
    with_instance,
    with_status,
    with_title,
    with_validation_level,
)
from problemdetail.render import (
    Encoding,
    ResponseRecorder,
    ResponseSink,
    render,
    render_bytes,
    write_json,
    write_xml,
)
from problemdetail.validators import ErrorCode, ValidationFailure, ValidationLevel

__all__ = [
    "UNTYPED",
    "Encoding",
    "ErrorCode",
    "ProblemDetail",
    "ProblemExtension",
    "ProblemLike",
    "ProblemValidationError",
    "ResponseRecorder",
    "ResponseSink",
    "ValidationFailure",
    "ValidationLevel",
    "as_problem",
    "is_problem",
    "kind_of",
    "new",
    "render",
    "render_bytes",
    "with_detail",
    "with_instance",
    "with_status",
    "with_title",
    "with_validation_level",
    "write_json",
    "write_xml",
]
