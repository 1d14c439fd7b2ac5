"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends

from termreg.config import RulesConfig
from termreg.enrollment import EnrollmentController
from termreg.state_store import StateStore

# Global StateStore instance (initialized on app startup)
_state_store: StateStore | None = None


def init_state_store(db_path: str = "termreg.db") -> StateStore:
    """Initialize the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    _state_store = StateStore(db_path)
    return _state_store


def close_state_store() -> None:
    """Close the global StateStore instance."""
    global _state_store  # noqa: PLW0603
    if _state_store is not None:
        _state_store.close()
        _state_store = None


def get_state_store() -> Generator[StateStore, None, None]:
    """Dependency that provides the StateStore instance."""
    if _state_store is None:
        raise RuntimeError("StateStore not initialized. Call init_state_store() first.")
    yield _state_store


# Type alias for dependency injection
StateStoreDep = Annotated[StateStore, Depends(get_state_store)]

# Global EnrollmentController instance (initialized on app startup)
_controller: EnrollmentController | None = None


def init_controller(config: RulesConfig | None = None) -> EnrollmentController:
    """Initialize the global EnrollmentController instance."""
    global _controller  # noqa: PLW0603
    _controller = EnrollmentController(config=config)
    return _controller


def close_controller() -> None:
    """Drop the global EnrollmentController instance."""
    global _controller  # noqa: PLW0603
    _controller = None


def get_controller() -> Generator[EnrollmentController, None, None]:
    """Dependency that provides the EnrollmentController instance."""
    if _controller is None:
        raise RuntimeError("EnrollmentController not initialized. Call init_controller() first.")
    yield _controller


# Type alias for dependency injection
ControllerDep = Annotated[EnrollmentController, Depends(get_controller)]
