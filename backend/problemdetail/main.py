"""Example service answering every error with an RFC 7807 problem detail.

Main FastAPI application with structured logging, CORS, and global error handling.
"""

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from problemdetail.api.accounts import out_of_credit_type
from problemdetail.api.router import api_router
from problemdetail.capability import as_problem
from problemdetail.config import get_settings
from problemdetail.problem import ProblemExtension, new, with_detail, with_title, with_validation_level
from problemdetail.responses import (
    generic_problem,
    negotiate_encoding,
    problem_response,
    register_problem_handlers,
)
from problemdetail.validators.models import ValidationLevel


def configure_logging() -> None:
    """Configure structlog for the service."""
    settings = get_settings()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.DEBUG else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
        ),
    )


configure_logging()

logger = structlog.get_logger()


@dataclass(eq=False)
class RequestValidationProblem(ProblemExtension):
    """Request body or parameters failed FastAPI validation."""

    errors: list[dict]


def validation_error_type() -> str:
    return f"{get_settings().PROBLEM_TYPE_BASE_URL}/validation-error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown lifecycle."""
    settings = get_settings()
    logger.info(
        "app_starting",
        debug=settings.DEBUG,
        default_validation_level=settings.DEFAULT_VALIDATION_LEVEL,
    )

    yield

    logger.info("app_stopped")


# ── Create Application ──

app = FastAPI(
    title="problemdetail",
    description="RFC 7807 problem details rendered as JSON or XML.",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# ── Middleware ──

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Exception Handlers ──

problem_handler = register_problem_handlers(
    app,
    status_map={
        out_of_credit_type(): 403,
        validation_error_type(): 422,
    },
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report request validation errors as a problem with the field errors attached."""
    # input and ctx echo client data back; only location and message go out
    errors = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    problem = RequestValidationProblem(
        problem=new(
            validation_error_type(),
            with_title("Your request parameters didn't validate."),
            with_detail(f"{len(errors)} validation error(s) in request"),
            with_validation_level(ValidationLevel.STANDARD),
        ),
        errors=jsonable_encoder(errors),
    )
    return problem_response(problem, 422, negotiate_encoding(request.headers.get("accept")))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all error handler for unhandled exceptions."""
    if as_problem(exc) is not None:
        return await problem_handler(request, exc)

    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return problem_response(generic_problem(), 500, negotiate_encoding(request.headers.get("accept")))


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Handle validation errors."""
    problem = new(
        validation_error_type(),
        with_title("Invalid value."),
        with_detail(str(exc)),
        with_validation_level(ValidationLevel.STANDARD),
    )
    return problem_response(problem, 422, negotiate_encoding(request.headers.get("accept")))


# ── Routes ──

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint — API info."""
    return {
        "name": "problemdetail",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
