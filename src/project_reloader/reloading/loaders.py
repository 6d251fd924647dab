# src/project_reloader/reloading/loaders.py

from __future__ import annotations

"""
Refresh tasks.

Each loader is bound to one Project and one data source for its whole life and
refreshes exactly one slice of the project state per `run()`. Loaders do not
catch errors: failure isolation happens at the scheduler's execution boundary.
"""

import logging

from ..core.ports import LastUpdateTimeSource, LoginStatisticsSource, ProjectDetailsSource
from ..core.project import Project

logger = logging.getLogger(__name__)


class StatisticsLoader:
    name = "login_statistics"

    def __init__(self, project: Project, source: LoginStatisticsSource) -> None:
        self.project = project
        self.source = source

    def run(self) -> None:
        stats = self.source.fetch_login_statistics(self.project.name)
        self.project.update_login_statistics(stats)
        logger.debug("Login statistics refreshed project=%s active=%s", self.project.name, stats.active_users)


class ProjectDetailsLoader:
    name = "project_details"

    def __init__(self, project: Project, source: ProjectDetailsSource) -> None:
        self.project = project
        self.source = source

    def run(self) -> None:
        self.project.update_details(self.source.fetch_project_details(self.project.name))
        logger.debug("Project details refreshed project=%s", self.project.name)


class LastUpdateTimeLoader:
    name = "last_update_time"

    def __init__(self, project: Project, source: LastUpdateTimeSource) -> None:
        self.project = project
        self.source = source

    def run(self) -> None:
        self.project.update_last_update_time(self.source.fetch_last_update_time(self.project.name))
        logger.debug("Last update time refreshed project=%s", self.project.name)


class ProjectStatusReporter:
    """Periodically reports the project's current state to the log."""

    name = "status"

    def __init__(self, project: Project) -> None:
        self.project = project

    def run(self) -> None:
        logger.info("%s", self.project.pretty_print())
