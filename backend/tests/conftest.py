"""Shared fixtures for problem detail tests."""

import pytest

from problemdetail.config import get_settings
from problemdetail.problem import new, with_detail, with_instance, with_title
from problemdetail.render import ResponseRecorder
from tests.helpers import (
    OUT_OF_CREDIT,
    OUT_OF_CREDIT_DETAIL,
    OUT_OF_CREDIT_INSTANCE,
    OUT_OF_CREDIT_TITLE,
    BalanceProblem,
)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; drop the cache so env changes in a test apply."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recorder() -> ResponseRecorder:
    return ResponseRecorder()


@pytest.fixture
def out_of_credit():
    return new(
        OUT_OF_CREDIT,
        with_detail(OUT_OF_CREDIT_DETAIL),
        with_instance(OUT_OF_CREDIT_INSTANCE),
        with_title(OUT_OF_CREDIT_TITLE),
    )


@pytest.fixture
def balance_problem(out_of_credit) -> BalanceProblem:
    return BalanceProblem(
        problem=out_of_credit,
        balance=30,
        accounts=["/account/12345", "/account/67890"],
    )
