"""Required Validator — problem members that must be present at each level.

STANDARD requires the members RFC 7807 needs to describe a problem type
(type, title, status). STRICT additionally requires the per-occurrence
members (detail, instance).
"""

from problemdetail.capability import ProblemLike
from problemdetail.validators.base import BaseValidator
from problemdetail.validators.models import ErrorCode, ValidationFailure, ValidationLevel

# member → code raised when it is empty
REQUIRED_MEMBERS = {
    "type": ErrorCode.TYPE_REQUIRED,
    "title": ErrorCode.TITLE_REQUIRED,
    "status": ErrorCode.STATUS_REQUIRED,
    "detail": ErrorCode.DETAIL_REQUIRED,
    "instance": ErrorCode.INSTANCE_REQUIRED,
}

REQUIRED_BY_LEVEL = {
    ValidationLevel.NONE: (),
    ValidationLevel.STANDARD: ("type", "title", "status"),
    ValidationLevel.STRICT: ("type", "title", "status", "detail", "instance"),
}


class RequiredFieldValidator(BaseValidator):
    """Flags empty string members and a zero status."""

    @property
    def name(self) -> str:
        return "RequiredFieldValidator"

    def validate(self, problem: ProblemLike, level: ValidationLevel) -> list[ValidationFailure]:
        failures = []

        for member in REQUIRED_BY_LEVEL[level]:
            value = getattr(problem, member)
            if self._is_blank(value):
                failures.append(self._failure(
                    code=REQUIRED_MEMBERS[member],
                    field=member,
                    message=f"'{member}' is required",
                    evidence=repr(value),
                ))

        return failures
