# src/project_reloader/sources/offline.py

from __future__ import annotations

import itertools
import threading
import zlib
from datetime import datetime, timedelta

from ..core.project import LoginStatistics, ProjectDetails


def _seed(project_name: str) -> int:
    # Stable across runs (unlike hash()).
    return zlib.crc32(project_name.encode("utf-8"))


class OfflineLoginServer:
    """
    Offline deterministic login server used for demos when no real one is wired in.

    Each call returns slightly different numbers so the periodic refresh is
    visible in the status output.
    """

    def __init__(self) -> None:
        self._calls = itertools.count()
        self._lock = threading.Lock()

    def fetch_login_statistics(self, project_name: str) -> LoginStatistics:
        with self._lock:
            n = next(self._calls)
        base = _seed(project_name) % 50
        return LoginStatistics(
            active_users=base + (n % 7),
            total_logins=base * 10 + n,
            fetched_at=datetime.now(),
        )


class OfflineProjectStore:
    """Offline persistence: project details derived from the project name."""

    def fetch_project_details(self, project_name: str) -> ProjectDetails:
        seed = _seed(project_name)
        return ProjectDetails(
            owner=f"owner-{seed % 100:02d}",
            description=f"Offline demo data for {project_name}",
            member_count=1 + seed % 25,
        )

    def fetch_last_update_time(self, project_name: str) -> datetime:
        # Pretend the project was touched a few minutes ago.
        minutes = _seed(project_name) % 60
        return datetime.now().replace(microsecond=0) - timedelta(minutes=minutes)
