"""Unit tests for the FastAPI / Starlette boundary."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from problemdetail.capability import UNTYPED
from problemdetail.errors import ProblemValidationError
from problemdetail.problem import new, with_status, with_title, with_validation_level
from problemdetail.render import Encoding
from problemdetail.responses import negotiate_encoding, problem_response, register_problem_handlers
from problemdetail.validators.models import ValidationLevel
from tests.helpers import OUT_OF_CREDIT, BalanceProblem


@pytest.mark.unit
class TestNegotiateEncoding:
    @pytest.mark.parametrize(
        "accept, expected",
        [
            (None, Encoding.JSON),
            ("", Encoding.JSON),
            ("application/problem+xml", Encoding.XML),
            ("application/xml;q=0.9", Encoding.XML),
            ("text/html, application/xml", Encoding.XML),
            ("application/json, application/problem+xml", Encoding.JSON),
            ("application/problem+xml;q=0, application/json", Encoding.JSON),
            ("*/*", Encoding.JSON),
            ("text/html", Encoding.JSON),
        ],
    )
    def test_negotiation(self, accept, expected):
        assert negotiate_encoding(accept) is expected


@pytest.mark.unit
class TestProblemResponse:
    def test_copies_recorded_response(self, balance_problem):
        # Act
        response = problem_response(balance_problem, 403, Encoding.XML)

        # Assert
        assert response.status_code == 403
        assert response.headers["content-type"] == "application/problem+xml; charset=utf-8"
        assert response.body.startswith(b'<problem xmlns="urn:ietf:rfc:7807">')
        assert response.body.endswith(b"<accounts>/account/67890</accounts></problem>")

    def test_invalid_problem_raises(self):
        with pytest.raises(ProblemValidationError):
            problem_response(new(""), 500)


def _app() -> FastAPI:
    app = FastAPI()
    register_problem_handlers(app, status_map={OUT_OF_CREDIT: 403})

    @app.get("/credit")
    async def credit():
        raise new(
            OUT_OF_CREDIT,
            with_title("You do not have enough credit."),
            with_validation_level(ValidationLevel.STANDARD),
        )

    @app.get("/gone")
    async def gone():
        raise new(UNTYPED, with_status(410), with_validation_level(ValidationLevel.STANDARD))

    @app.get("/broken")
    async def broken():
        raise new("")

    @app.get("/extended")
    async def extended():
        raise BalanceProblem(
            problem=new(UNTYPED, with_validation_level(ValidationLevel.NONE)),
            balance=0,
            accounts=[],
        )

    return app


@pytest.mark.unit
class TestRegisterProblemHandlers:
    """Raised problem details become problem responses."""

    def test_status_map_selects_status(self):
        # Act
        response = TestClient(_app()).get("/credit")

        # Assert
        assert response.status_code == 403
        assert response.headers["content-type"] == "application/problem+json; charset=utf-8"
        assert response.json()["type"] == OUT_OF_CREDIT

    def test_problem_status_used_when_not_mapped(self):
        # Act
        response = TestClient(_app()).get("/gone")

        # Assert
        assert response.status_code == 410
        assert response.json() == {"type": "about:blank", "title": "Gone", "status": 410}

    def test_default_status_and_xml(self):
        # Act
        response = TestClient(_app()).get(
            "/extended", headers={"Accept": "application/problem+xml"},
        )

        # Assert
        assert response.status_code == 500
        assert response.text == (
            '<problem xmlns="urn:ietf:rfc:7807"><type>about:blank</type>'
            "<title>Internal Server Error</title><status>500</status>"
            "<balance>0</balance></problem>"
        )

    def test_invalid_problem_falls_back_to_generic_500(self):
        # Act
        response = TestClient(_app()).get("/broken")

        # Assert
        assert response.status_code == 500
        assert response.json() == {
            "type": "about:blank",
            "title": "Internal Server Error",
            "status": 500,
        }
