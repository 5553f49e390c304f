"""Problem detail validators — tiered, accumulating member checks.

Usage:
    from problemdetail.validators import validation_engine

    failures = validation_engine.validate(problem, ValidationLevel.STRICT)
    if failures:
        # Fix the problem and construct it again
"""

from problemdetail.validators.engine import ValidationEngine, validation_engine
from problemdetail.validators.models import ErrorCode, ValidationFailure, ValidationLevel

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "ValidationFailure",
    "ValidationLevel",
    "ErrorCode",
]
