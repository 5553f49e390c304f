"""Base validator — abstract class implementing the Strategy Pattern.

Each validator is a standalone, independently testable unit.
New rules are added as validators without modifying the engine.
"""

from abc import ABC, abstractmethod
from typing import Optional

from problemdetail.capability import ProblemLike
from problemdetail.validators.models import ErrorCode, ValidationFailure, ValidationLevel


class BaseValidator(ABC):
    """Abstract base for all problem detail validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns every violation it finds (empty = no issues)
        - validate() never mutates the problem
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @abstractmethod
    def validate(self, problem: ProblemLike, level: ValidationLevel) -> list[ValidationFailure]:
        """Run this validator's rules against the problem.

        Args:
            problem: Problem detail (bare or extended)
            level: Strictness to apply; NONE is filtered out by the engine

        Returns:
            List of ValidationFailure findings (empty if no issues)
        """
        ...

    # ── Helper Methods ──

    def _failure(
        self,
        code: ErrorCode,
        field: str,
        message: str,
        evidence: Optional[str] = None,
    ) -> ValidationFailure:
        """Convenience method to create a ValidationFailure."""
        return ValidationFailure(code=code, field=field, message=message, evidence=evidence)

    def _is_blank(self, value) -> bool:
        """Empty string, None and 0 all count as unset."""
        return not value
