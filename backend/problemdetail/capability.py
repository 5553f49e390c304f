"""Capability accessor — recognise a problem detail among arbitrary errors.

Error handlers should not need to know which concrete problem class was
raised. Anything exposing `kind()`, the five RFC 7807 members, the validation
level it is rendered at and `bind_status()` counts, whether it is a bare
ProblemDetail or an application extension of one.
"""

from typing import Iterator, Optional, Protocol, runtime_checkable

# Sentinel type: "no specific type", title comes from the status code
UNTYPED = "about:blank"


@runtime_checkable
class ProblemLike(Protocol):
    """Structural interface every problem detail exposes."""

    @property
    def type(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def status(self) -> int: ...

    @property
    def detail(self) -> str: ...

    @property
    def instance(self) -> str: ...

    @property
    def validation_level(self): ...

    def kind(self) -> str: ...

    def bind_status(self, status: int) -> "ProblemLike": ...


def _chain(err: object) -> Iterator[object]:
    """Yield `err` and everything it wraps, breadth first, each once."""
    queue = [err]
    seen: set[int] = set()

    while queue:
        current = queue.pop(0)
        if current is None or id(current) in seen:
            continue
        seen.add(id(current))
        yield current

        if isinstance(current, BaseExceptionGroup):
            queue.extend(current.exceptions)
        if isinstance(current, BaseException):
            queue.append(current.__cause__)
            if not current.__suppress_context__:
                queue.append(current.__context__)


def as_problem(err: object) -> Optional[ProblemLike]:
    """Return the first problem detail found in `err`'s chain, if any.

    Args:
        err: Any exception (or plain object)

    Returns:
        The conforming value, or None when nothing in the chain conforms
    """
    for candidate in _chain(err):
        if isinstance(candidate, ProblemLike):
            return candidate
    return None


def is_problem(err: object) -> bool:
    """True if `err` is, or wraps, a problem detail."""
    return as_problem(err) is not None


def kind_of(err: object) -> Optional[str]:
    """The problem type of `err`, or None if it carries no problem detail."""
    problem = as_problem(err)
    return problem.kind() if problem is not None else None
