"""FastAPI application setup."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from termreg import __version__
from termreg.api.dependencies import (
    close_controller,
    close_state_store,
    init_controller,
    init_state_store,
)
from termreg.api.models import APIResponse, violation_to_response
from termreg.api.routes import courses, enrollments, students
from termreg.config import load_config
from termreg.enrollment import EnrollmentRulesViolation
from termreg.logging import get_logger, setup_logging
from termreg.state_store import (
    CourseExistsError,
    CourseNotFoundError,
    StateStoreError,
    StudentExistsError,
    StudentNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

DB_PATH_ENV_VAR = "TERMREG_DB_PATH"

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    if app.state.configure_logging:
        setup_logging()
    config = load_config(app.state.config_path)
    init_state_store(app.state.db_path)
    init_controller(config)
    logger.info("termreg API started (db=%s)", app.state.db_path)

    yield
    # Shutdown
    close_controller()
    close_state_store()


def create_app(
    db_path: str | None = None,
    config_path: str | None = None,
    configure_logging: bool = True,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: SQLite database path. Defaults to TERMREG_DB_PATH or "termreg.db".
        config_path: Rules YAML file. Defaults to TERMREG_CONFIG or built-in rules.
        configure_logging: Whether to install the termreg log handlers on startup.
    """
    app = FastAPI(
        title="termreg API",
        description="Term enrollment validation",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.db_path = db_path or os.environ.get(DB_PATH_ENV_VAR, "termreg.db")
    app.state.config_path = config_path
    app.state.configure_logging = configure_logging

    # Exception handlers
    @app.exception_handler(StudentNotFoundError)
    async def student_not_found_handler(
        _request: Request, _exc: StudentNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Student not found").model_dump(),
        )

    @app.exception_handler(CourseNotFoundError)
    async def course_not_found_handler(
        _request: Request, _exc: CourseNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=APIResponse[None](data=None, error="Course not found").model_dump(),
        )

    @app.exception_handler(StudentExistsError)
    async def student_exists_handler(_request: Request, _exc: StudentExistsError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=APIResponse[None](
                data=None, error="Student with this id already exists"
            ).model_dump(),
        )

    @app.exception_handler(CourseExistsError)
    async def course_exists_handler(_request: Request, _exc: CourseExistsError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=APIResponse[None](
                data=None, error="Course with this id already exists"
            ).model_dump(),
        )

    @app.exception_handler(EnrollmentRulesViolation)
    async def rules_violation_handler(
        _request: Request, exc: EnrollmentRulesViolation
    ) -> JSONResponse:
        violations = [violation_to_response(v).model_dump() for v in exc.violations]
        return JSONResponse(
            status_code=422,
            content=APIResponse[dict](
                data={"violations": violations}, error=exc.report
            ).model_dump(),
        )

    @app.exception_handler(StateStoreError)
    async def state_store_error_handler(_request: Request, _exc: StateStoreError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=APIResponse[None](data=None, error="Internal server error").model_dump(),
        )

    # Include routers
    app.include_router(courses.router, prefix="/api/v1")
    app.include_router(students.router, prefix="/api/v1")
    app.include_router(enrollments.router, prefix="/api/v1")

    return app


# Default app instance
app = create_app()
