# src/project_reloader/core/project.py

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any


class ProjectType(StrEnum):
    """
    Project classification.

    Decides which refresh tasks are assembled for a project.
    """

    STATIC = "static"
    LIVE = "live"


@dataclass(slots=True, frozen=True)
class LoginStatistics:
    active_users: int
    total_logins: int
    fetched_at: datetime


@dataclass(slots=True, frozen=True)
class ProjectDetails:
    owner: str
    description: str
    member_count: int


@dataclass(slots=True)
class Project:
    """
    The entity whose cached data is kept fresh.

    Refresh tasks run on separate worker threads and each writes its own slice,
    so every slice goes through update_* which holds the project lock.
    """

    name: str
    type: ProjectType

    login_statistics: LoginStatistics | None = None
    details: ProjectDetails | None = None
    last_update_time: datetime | None = None

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def update_login_statistics(self, stats: LoginStatistics) -> None:
        with self._lock:
            self.login_statistics = stats

    def update_details(self, details: ProjectDetails) -> None:
        with self._lock:
            self.details = details

    def update_last_update_time(self, ts: datetime) -> None:
        with self._lock:
            self.last_update_time = ts

    def snapshot(self) -> dict[str, Any]:
        """Consistent copy of the project state (taken under the lock)."""
        with self._lock:
            return {
                "name": self.name,
                "type": str(self.type),
                "login_statistics": asdict(self.login_statistics) if self.login_statistics else None,
                "details": asdict(self.details) if self.details else None,
                "last_update_time": self.last_update_time,
            }

    def pretty_print(self) -> str:
        snap = self.snapshot()
        lines = [f'Project "{snap["name"]}" (type: {snap["type"]})']

        stats = snap["login_statistics"]
        if stats is None:
            lines.append("  login statistics: <not loaded>")
        else:
            lines.append(
                f"  login statistics: {stats['active_users']} active / {stats['total_logins']} total"
                f" (fetched {stats['fetched_at']:%Y-%m-%d %H:%M:%S})"
            )

        details = snap["details"]
        if details is None:
            lines.append("  details: <not loaded>")
        else:
            lines.append(
                f"  details: owner={details['owner']} members={details['member_count']}"
                f" - {details['description']}"
            )

        last = snap["last_update_time"]
        lines.append(f"  last update: {last:%Y-%m-%d %H:%M:%S}" if last else "  last update: <not loaded>")
        return "\n".join(lines)
