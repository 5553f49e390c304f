"""Problem detail objects (RFC 7807).

A ProblemDetail is an exception so it can be raised and travel through
error handling layers like any other error. It is immutable: every member
is fixed at construction, and `bind_status` returns a new object.

Applications add their own members by composition:

    @dataclass(eq=False)
    class OutOfCreditProblem(ProblemExtension):
        balance: int
        accounts: list[str]

    raise OutOfCreditProblem(problem=new(...), balance=30, accounts=[...])
"""

import dataclasses
import inspect
from collections import Counter
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Callable, Union

import structlog

from problemdetail.capability import UNTYPED
from problemdetail.config import get_settings
from problemdetail.validators.engine import validation_engine
from problemdetail.validators.models import MEMBER_ORDER, ErrorCode, ValidationLevel

logger = structlog.get_logger()

# A construction option: updates the pending members in place
Option = Callable[[dict], None]


def status_title(status: int) -> str:
    """Standard HTTP reason phrase for `status`, empty if unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


class ProblemDetail(Exception):
    """A problem detail: type, title, status, detail and instance."""

    def __init__(
        self,
        type_: str,
        title: str = "",
        status: int = 0,
        detail: str = "",
        instance: str = "",
        validation_level: Union[ValidationLevel, str] = ValidationLevel.STRICT,
    ):
        super().__init__(type_)
        self._type = type_
        self._title = title
        self._status = status
        self._detail = detail
        self._instance = instance
        self._validation_level = ValidationLevel.parse(validation_level)

    @property
    def type(self) -> str:
        return self._type

    @property
    def title(self) -> str:
        return self._title

    @property
    def status(self) -> int:
        return self._status

    @property
    def detail(self) -> str:
        return self._detail

    @property
    def instance(self) -> str:
        return self._instance

    @property
    def validation_level(self) -> ValidationLevel:
        return self._validation_level

    def kind(self) -> str:
        return self._type

    def bind_status(self, status: int) -> "ProblemDetail":
        """Copy of this problem carrying `status`.

        An untyped problem without a title takes the HTTP reason phrase.
        """
        title = self._title
        if self._type == UNTYPED and not title:
            title = status_title(status)

        return ProblemDetail(
            self._type,
            title=title,
            status=status,
            detail=self._detail,
            instance=self._instance,
            validation_level=self._validation_level,
        )

    def __str__(self) -> str:
        return f"problem detail: {self._type}"

    def __repr__(self) -> str:
        return (
            f"ProblemDetail(type={self._type!r}, title={self._title!r}, "
            f"status={self._status!r}, detail={self._detail!r}, "
            f"instance={self._instance!r}, validation_level={self._validation_level.value!r})"
        )


# ── Construction ──


def with_title(title: str) -> Option:
    def apply(members: dict) -> None:
        members["title"] = title
    return apply


def with_detail(detail: str) -> Option:
    def apply(members: dict) -> None:
        members["detail"] = detail
    return apply


def with_instance(instance: str) -> Option:
    def apply(members: dict) -> None:
        members["instance"] = instance
    return apply


def with_status(status: int) -> Option:
    """Preset the status; a status passed at render time still wins."""
    def apply(members: dict) -> None:
        members["status"] = status
    return apply


def with_validation_level(level: Union[ValidationLevel, str]) -> Option:
    def apply(members: dict) -> None:
        members["validation_level"] = ValidationLevel.parse(level)
    return apply


def new(type_: str, *options: Option) -> ProblemDetail:
    """Build a problem detail of type `type_`.

    Options apply in order; when two set the same member the last one wins.
    Members no option sets stay empty. The validation level defaults to
    the DEFAULT_VALIDATION_LEVEL setting.
    """
    members = {
        "title": "",
        "status": 0,
        "detail": "",
        "instance": "",
        "validation_level": ValidationLevel.parse(get_settings().DEFAULT_VALIDATION_LEVEL),
    }
    for option in options:
        option(members)

    problem = ProblemDetail(type_, **members)

    # Status is normally bound at render time, so it is not reported here
    failures = [
        f for f in validation_engine.validate(problem)
        if f.code is not ErrorCode.STATUS_REQUIRED
    ]
    if failures:
        logger.debug(
            "problem_detail_incomplete",
            problem_type=type_,
            level=problem.validation_level.value,
            failures=[f.code.value for f in failures],
        )

    return problem


# ── Extension ──


@dataclass(eq=False)
class ProblemExtension(Exception):
    """Base for problem details carrying application-specific members.

    Subclasses are dataclasses declaring their extra members; those are
    rendered after the five standard members, in declaration order. A member
    can be given a different wire name with `field(metadata={"wire_name": ...})`.

    Neither attribute names nor wire names may reuse a standard member, and
    wire names must be unique. Members cannot be reassigned once set; values
    that are themselves mutable (lists, dicts) must be treated as frozen.
    """

    problem: ProblemDetail

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Runs before @dataclass: inherited members come from the base's
        # field list, this class's own from its annotations and defaults.
        wire_names = {
            f.name: f.metadata.get("wire_name", f.name)
            for f in dataclasses.fields(cls)
            if f.name != "problem"
        }
        for name in inspect.get_annotations(cls):
            default = cls.__dict__.get(name)
            metadata = default.metadata if isinstance(default, dataclasses.Field) else {}
            wire_names[name] = metadata.get("wire_name", name)

        clash = set(MEMBER_ORDER) & (set(wire_names) | set(wire_names.values()))
        if clash:
            raise TypeError(
                f"{cls.__name__} redeclares standard problem member(s): {', '.join(sorted(clash))}"
            )

        duplicates = sorted(w for w, count in Counter(wire_names.values()).items() if count > 1)
        if duplicates:
            raise TypeError(f"{cls.__name__} uses wire name(s) more than once: {', '.join(duplicates)}")

    def __post_init__(self):
        super().__init__(self.problem.type)

    def __setattr__(self, name, value):
        if name in self.__dataclass_fields__ and name in self.__dict__:
            raise dataclasses.FrozenInstanceError(f"cannot assign to member {name!r}")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        if name in self.__dataclass_fields__:
            raise dataclasses.FrozenInstanceError(f"cannot delete member {name!r}")
        super().__delattr__(name)

    @property
    def type(self) -> str:
        return self.problem.type

    @property
    def title(self) -> str:
        return self.problem.title

    @property
    def status(self) -> int:
        return self.problem.status

    @property
    def detail(self) -> str:
        return self.problem.detail

    @property
    def instance(self) -> str:
        return self.problem.instance

    @property
    def validation_level(self) -> ValidationLevel:
        return self.problem.validation_level

    def kind(self) -> str:
        return self.problem.kind()

    def extension_members(self) -> list[tuple[str, Any]]:
        """(wire name, value) of each declared member, in declaration order."""
        return [
            (f.metadata.get("wire_name", f.name), getattr(self, f.name))
            for f in dataclasses.fields(self)
            if f.name != "problem"
        ]

    def bind_status(self, status: int) -> "ProblemExtension":
        return dataclasses.replace(self, problem=self.problem.bind_status(status))

    def __str__(self) -> str:
        return str(self.problem)
