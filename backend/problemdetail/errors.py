"""Errors raised by the problem detail pipeline.

Only validation has its own error type. Whatever a response sink raises
while being written to is propagated untouched: by then headers may already
be on the wire and there is nothing sensible to retry.
"""

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from problemdetail.validators.models import ErrorCode, ValidationFailure


class ProblemValidationError(ValueError):
    """Every rule a problem detail violated, collected from one validation pass.

    Membership tests work against each constituent kind independently::

        try:
            write_json(sink, problem, 403)
        except ProblemValidationError as err:
            if ErrorCode.TYPE_FORMAT in err:
                ...
    """

    def __init__(self, failures: Iterable["ValidationFailure"]):
        self.failures: tuple["ValidationFailure", ...] = tuple(failures)
        super().__init__(self._format_message())

    @property
    def codes(self) -> tuple["ErrorCode", ...]:
        return tuple(f.code for f in self.failures)

    def contains(self, code: "ErrorCode | str") -> bool:
        """True if any failure carries `code` (enum member or its value)."""
        return any(f.code == code for f in self.failures)

    def __contains__(self, code) -> bool:
        return self.contains(code)

    def _format_message(self) -> str:
        if not self.failures:
            return "problem detail is invalid"
        joined = "; ".join(str(f) for f in self.failures)
        return f"problem detail is invalid ({len(self.failures)} failure(s)): {joined}"
