# src/project_reloader/reloading/factory.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from ..config import Settings
from ..core.errors import UnsupportedProjectType
from ..core.ports import LastUpdateTimeSource, LoginStatisticsSource, ProjectDetailsSource, RefreshTask
from ..core.project import Project, ProjectType
from ..sources.offline import OfflineLoginServer, OfflineProjectStore
from .loaders import LastUpdateTimeLoader, ProjectDetailsLoader, StatisticsLoader
from .scheduler import RefreshScheduler

logger = logging.getLogger(__name__)

LoaderClass = type[StatisticsLoader] | type[ProjectDetailsLoader] | type[LastUpdateTimeLoader]

_LOADERS_BY_TYPE: dict[ProjectType, tuple[LoaderClass, ...]] = {
    ProjectType.STATIC: (StatisticsLoader,),
    ProjectType.LIVE: (ProjectDetailsLoader, LastUpdateTimeLoader, StatisticsLoader),
}


def _default_store() -> OfflineProjectStore:
    return OfflineProjectStore()


@dataclass(slots=True)
class ReloaderSources:
    """External systems the loaders read from. Defaults to the offline demo sources."""

    statistics: LoginStatisticsSource = field(default_factory=OfflineLoginServer)
    details: ProjectDetailsSource = field(default_factory=_default_store)
    last_update: LastUpdateTimeSource = field(default_factory=_default_store)


def loaders_for_type(project_type: Any) -> tuple[LoaderClass, ...]:
    try:
        loaders = _LOADERS_BY_TYPE.get(project_type)
    except TypeError:
        # Unhashable tag, e.g. a list.
        loaders = None
    if loaders is None:
        raise UnsupportedProjectType(project_type)
    return loaders


def _bind(loader_cls: LoaderClass, project: Project, sources: ReloaderSources) -> RefreshTask:
    if loader_cls is StatisticsLoader:
        return StatisticsLoader(project, sources.statistics)
    if loader_cls is ProjectDetailsLoader:
        return ProjectDetailsLoader(project, sources.details)
    return LastUpdateTimeLoader(project, sources.last_update)


def create_scheduler(
        project: Project,
        *,
        sources: ReloaderSources | None = None,
        settings: Settings | None = None,
) -> RefreshScheduler:
    """
    Build a scheduler with the refresh tasks that apply to the project's type.

    Raises UnsupportedProjectType when the type has no task set; no scheduler
    is created in that case.
    """
    loaders = loaders_for_type(project.type)
    if sources is None:
        sources = ReloaderSources()

    tasks = [_bind(cls, project, sources) for cls in loaders]
    logger.debug("Project %s (%s): tasks=%s", project.name, project.type, [t.name for t in tasks])
    return RefreshScheduler(project, tasks, settings=settings)
