"""URI Format Validator — `type` and `instance` must be URI references.

Only enforced at the STRICT level. Empty members are left to the
RequiredFieldValidator: a missing value is not a format violation.
"""

import re
from typing import Optional
from urllib.parse import urlsplit

from problemdetail.capability import UNTYPED, ProblemLike
from problemdetail.validators.base import BaseValidator
from problemdetail.validators.models import ErrorCode, ValidationFailure, ValidationLevel

# member → code raised when it does not parse
URI_MEMBERS = {
    "type": ErrorCode.TYPE_FORMAT,
    "instance": ErrorCode.INSTANCE_FORMAT,
}

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def uri_reference_error(value: str) -> Optional[str]:
    """Return why `value` is not a URI reference, or None if it is one.

    Accepts absolute URIs and relative references alike.
    """
    match = _CONTROL_CHARS.search(value)
    if match:
        return f"invalid control character {match.group()!r} in URI"

    if _BAD_ESCAPE.search(value):
        return "invalid percent-escape in URI"

    # Scheme, or a relative reference whose first segment has no colon
    first_segment = re.split(r"[/?#]", value, maxsplit=1)[0]
    if ":" in first_segment:
        scheme = first_segment.split(":", 1)[0]
        if not scheme:
            return "missing protocol scheme"
        if not _SCHEME.match(scheme):
            return "first path segment in URI cannot contain colon"

    try:
        parts = urlsplit(value)
        parts.port  # raises on a non-numeric or out of range port
    except ValueError as e:
        return str(e)

    return None


class UriFormatValidator(BaseValidator):
    """Checks URI reference syntax of `type` and `instance` (strict only)."""

    @property
    def name(self) -> str:
        return "UriFormatValidator"

    def validate(self, problem: ProblemLike, level: ValidationLevel) -> list[ValidationFailure]:
        failures = []

        if level is not ValidationLevel.STRICT:
            return failures

        for member, code in URI_MEMBERS.items():
            value = getattr(problem, member)
            if self._is_blank(value):
                continue
            if member == "type" and value == UNTYPED:
                continue

            reason = uri_reference_error(value)
            if reason:
                failures.append(self._failure(
                    code=code,
                    field=member,
                    message=f"'{member}' is not a valid URI reference: {reason}",
                    evidence=repr(value),
                ))

        return failures
