"""Validation Engine — runs every validator and collects all failures.

This is the entry point for problem detail validation. Failures are
accumulated across validators rather than stopping at the first one, so a
caller sees every missing or malformed member at once.

Usage:
    failures = validation_engine.validate(problem)
    validation_engine.check(problem)  # raises ProblemValidationError
"""

import time
from typing import Optional, Union

import structlog

from problemdetail.capability import ProblemLike
from problemdetail.errors import ProblemValidationError
from problemdetail.validators.base import BaseValidator
from problemdetail.validators.models import MEMBER_ORDER, ValidationFailure, ValidationLevel

from problemdetail.validators.required_validator import RequiredFieldValidator
from problemdetail.validators.format_validator import UriFormatValidator

logger = structlog.get_logger()


class ValidationEngine:
    """Orchestrates all validators and produces one ordered failure list.

    Design principles:
        - Deterministic: same input → same output
        - Accumulating: every applicable rule runs
        - Extensible: add validators without modifying engine
        - Observable: logs every validation run with timing
    """

    def __init__(self, validators: Optional[list[BaseValidator]] = None):
        """Initialize with default validators or custom list.

        Args:
            validators: Optional list of validators. If None, uses all defaults.
        """
        self.validators = validators or self._default_validators()

    @staticmethod
    def _default_validators() -> list[BaseValidator]:
        """Create the default validator chain in execution order."""
        return [
            RequiredFieldValidator(),  # Presence first, so a member reports required before format
            UriFormatValidator(),      # STRICT only
        ]

    def validate(
        self,
        problem: ProblemLike,
        level: Union[ValidationLevel, str, None] = None,
    ) -> list[ValidationFailure]:
        """Run all validators against the problem.

        Args:
            problem: Problem detail (bare or extended)
            level: Strictness override; defaults to the problem's own level

        Returns:
            Failures ordered by member (type, title, status, detail, instance)
        """
        level = ValidationLevel.parse(level if level is not None else problem.validation_level)
        if level is ValidationLevel.NONE:
            return []

        start_time = time.perf_counter()
        failures: list[ValidationFailure] = []
        validator_timings: dict[str, float] = {}

        for validator in self.validators:
            v_start = time.perf_counter()
            try:
                failures.extend(validator.validate(problem, level))
            except Exception as e:
                logger.error(
                    "validator_failed",
                    validator=validator.name,
                    error=str(e),
                )
                raise
            finally:
                v_duration = (time.perf_counter() - v_start) * 1000
                validator_timings[validator.name] = round(v_duration, 3)

        # Stable sort keeps required-before-format within a member
        failures.sort(key=lambda f: MEMBER_ORDER.index(f.field) if f.field in MEMBER_ORDER else len(MEMBER_ORDER))

        logger.debug(
            "validation_complete",
            problem_type=problem.type,
            level=level.value,
            failures=[f.code.value for f in failures],
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
            validator_timings=validator_timings,
        )

        return failures

    def check(
        self,
        problem: ProblemLike,
        level: Union[ValidationLevel, str, None] = None,
    ) -> None:
        """Validate and raise a single composite error if anything failed."""
        failures = self.validate(problem, level)
        if failures:
            raise ProblemValidationError(failures)

    def add_validator(self, validator: BaseValidator) -> None:
        """Add a custom validator to the chain."""
        self.validators.append(validator)

    def remove_validator(self, validator_name: str) -> None:
        """Remove a validator by name."""
        self.validators = [v for v in self.validators if v.name != validator_name]


# Module-level singleton
validation_engine = ValidationEngine()
