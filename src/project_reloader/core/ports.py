# src/project_reloader/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The scheduler and the loaders depend on Protocols instead of concrete
implementations, so the external systems (login server, persistence) stay
swappable and tests can inject fakes.
"""

from datetime import datetime
from typing import Protocol

from .project import LoginStatistics, ProjectDetails


class RefreshTask(Protocol):
    """One periodic unit of work. `run` executes a single refresh cycle."""

    name: str

    def run(self) -> None: ...


class LoginStatisticsSource(Protocol):
    """Login server: who is logged in to a project."""
    def fetch_login_statistics(self, project_name: str) -> LoginStatistics: ...


class ProjectDetailsSource(Protocol):
    """Persistence: descriptive project data."""
    def fetch_project_details(self, project_name: str) -> ProjectDetails: ...


class LastUpdateTimeSource(Protocol):
    def fetch_last_update_time(self, project_name: str) -> datetime: ...
