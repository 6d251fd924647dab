# src/project_reloader/core/errors.py

from __future__ import annotations

from typing import Any


class ReloaderError(Exception):
    """Base class for errors raised by project_reloader."""


class UnsupportedProjectType(ReloaderError, ValueError):
    """The factory has no refresh task set for this project type."""

    def __init__(self, project_type: Any) -> None:
        self.project_type = project_type
        super().__init__(f"Unsupported project type: {project_type!r}")


class SchedulerStateError(ReloaderError, RuntimeError):
    """A scheduler operation was called in a state that does not allow it."""
