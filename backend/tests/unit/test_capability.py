"""Unit tests for recognising problem details among arbitrary errors."""

import pytest

from problemdetail.capability import ProblemLike, as_problem, is_problem, kind_of
from problemdetail.render import Encoding, render_bytes
from problemdetail.validators.models import ValidationLevel
from tests.helpers import OUT_OF_CREDIT


class ForeignProblem:
    """Not derived from ProblemDetail, but shaped like one."""

    type = "https://example.com/probs/foreign"
    title = "Foreign"
    detail = ""
    instance = ""
    validation_level = ValidationLevel.NONE

    def __init__(self, status: int = 418):
        self.status = status

    def kind(self) -> str:
        return self.type

    def bind_status(self, status: int) -> "ForeignProblem":
        return ForeignProblem(status)


class KindOnly:
    """Has kind() and the members, but cannot be bound to a status."""

    type = "https://example.com/probs/kind-only"
    title = "Kind only"
    status = 400
    detail = ""
    instance = ""
    validation_level = ValidationLevel.NONE

    def kind(self) -> str:
        return self.type


@pytest.mark.unit
class TestAsProblem:
    """as_problem() walks exception chains."""

    def test_bare_problem(self, out_of_credit):
        assert as_problem(out_of_credit) is out_of_credit

    def test_extension(self, balance_problem):
        assert as_problem(balance_problem) is balance_problem

    def test_structural_conformance(self):
        foreign = ForeignProblem()

        assert isinstance(foreign, ProblemLike)
        assert as_problem(foreign) is foreign

    def test_explicit_cause(self, out_of_credit):
        # Arrange
        try:
            try:
                raise out_of_credit
            except Exception as e:
                raise RuntimeError("wrapped") from e
        except RuntimeError as err:
            wrapped = err

        # Act & Assert
        assert as_problem(wrapped) is out_of_credit

    def test_implicit_context(self, balance_problem):
        # Arrange
        try:
            try:
                raise balance_problem
            except Exception:
                raise KeyError("during handling")
        except KeyError as err:
            wrapped = err

        # Act & Assert
        assert as_problem(wrapped) is balance_problem

    def test_suppressed_context_is_skipped(self, out_of_credit):
        # Arrange
        try:
            try:
                raise out_of_credit
            except Exception:
                raise KeyError("replaced") from None
        except KeyError as err:
            wrapped = err

        # Act & Assert
        assert as_problem(wrapped) is None

    def test_exception_group_members(self, out_of_credit):
        group = ExceptionGroup("many", [ValueError("x"), out_of_credit])

        assert as_problem(group) is out_of_credit

    def test_cyclic_chain_terminates(self):
        # Arrange
        first, second = ValueError("a"), ValueError("b")
        first.__cause__ = second
        second.__cause__ = first

        # Act & Assert
        assert as_problem(first) is None

    def test_plain_error(self):
        assert as_problem(ValueError("nope")) is None

    def test_none(self):
        assert as_problem(None) is None


@pytest.mark.unit
class TestHelpers:
    def test_is_problem(self, out_of_credit):
        assert is_problem(out_of_credit)
        assert not is_problem(RuntimeError())

    def test_kind_of(self, balance_problem):
        assert kind_of(balance_problem) == OUT_OF_CREDIT
        assert kind_of(RuntimeError()) is None


@pytest.mark.unit
class TestStructuralRendering:
    """Anything as_problem() returns can be handed to the renderer."""

    def test_foreign_problem_renders_with_bound_status(self):
        # Arrange
        foreign = as_problem(ForeignProblem())

        # Act
        body, _ = render_bytes(foreign, 409, Encoding.JSON)

        # Assert
        assert body == (
            b'{"type":"https://example.com/probs/foreign","title":"Foreign","status":409}'
        )

    def test_object_without_bind_status_is_not_a_problem(self):
        assert not isinstance(KindOnly(), ProblemLike)
        assert as_problem(KindOnly()) is None
