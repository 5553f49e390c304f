"""Validation models — strictness levels, failure codes, and the failure record.

All validation is deterministic: same problem + same level → same failures.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ValidationLevel(str, Enum):
    """How strictly a problem detail is checked before rendering."""

    NONE = "none"          # Skip every check (trusted or generic problems)
    STANDARD = "standard"  # Every member required, no format checks
    STRICT = "strict"      # Every member required + URI reference format

    @classmethod
    def parse(cls, value: "ValidationLevel | str") -> "ValidationLevel":
        """Accept an enum member or its case-insensitive name/value."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        try:
            return cls(text)
        except ValueError:
            raise ValueError(
                f"Unknown validation level '{value}', use one of: "
                f"{', '.join(level.value for level in cls)}"
            ) from None


class ErrorCode(str, Enum):
    """Stable identifier for every validation rule.

    Naming convention: MEMBER_RULE
    """

    TYPE_REQUIRED = "TYPE_REQUIRED"
    TYPE_FORMAT = "TYPE_FORMAT"
    TITLE_REQUIRED = "TITLE_REQUIRED"
    STATUS_REQUIRED = "STATUS_REQUIRED"
    DETAIL_REQUIRED = "DETAIL_REQUIRED"
    INSTANCE_REQUIRED = "INSTANCE_REQUIRED"
    INSTANCE_FORMAT = "INSTANCE_FORMAT"

    @property
    def is_format(self) -> bool:
        return self.value.endswith("_FORMAT")


# Order members are reported in, matches the wire order
MEMBER_ORDER = ("type", "title", "status", "detail", "instance")


class ValidationFailure(BaseModel):
    """A single violated rule."""

    code: ErrorCode
    field: str                      # Which member triggered this
    message: str
    evidence: Optional[str] = None  # Offending value, repr'd

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
