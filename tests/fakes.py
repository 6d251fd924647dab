# tests/fakes.py

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime

from project_reloader.core.project import LoginStatistics, ProjectDetails


def wait_until(predicate: Callable[[], bool], timeout: float, interval: float = 0.005) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(interval)
    return predicate()


class CountingTask:
    """RefreshTask that only counts its invocations."""

    def __init__(self, name: str, duration: float = 0.0) -> None:
        self.name = name
        self.duration = duration
        self._lock = threading.Lock()
        self.calls = 0
        self.active = 0
        self.max_active = 0

    def run(self) -> None:
        with self._lock:
            self.calls += 1
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.duration:
                time.sleep(self.duration)
        finally:
            with self._lock:
                self.active -= 1


class FailingTask(CountingTask):
    def run(self) -> None:
        super().run()
        raise RuntimeError(f"boom from {self.name}")


class ExitingTask(CountingTask):
    """Raises SystemExit, which a plain `except Exception` would let through."""

    def run(self) -> None:
        super().run()
        raise SystemExit(3)


class HangingTask(CountingTask):
    """Blocks until release() is called. Used to simulate a stuck external call."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.started = threading.Event()
        self._release = threading.Event()

    def run(self) -> None:
        with self._lock:
            self.calls += 1
        self.started.set()
        self._release.wait()

    def release(self) -> None:
        self._release.set()


class RecordingSources:
    """
    Fake login server + project store.

    Records every project name it was asked about, so tests can check a
    scheduler only ever touches its own project.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.asked: list[tuple[str, str]] = []

    def _record(self, kind: str, project_name: str) -> None:
        with self._lock:
            self.asked.append((kind, project_name))

    def names(self) -> set[str]:
        with self._lock:
            return {name for _, name in self.asked}

    def fetch_login_statistics(self, project_name: str) -> LoginStatistics:
        self._record("statistics", project_name)
        return LoginStatistics(active_users=3, total_logins=42, fetched_at=datetime(2024, 1, 2, 3, 4, 5))

    def fetch_project_details(self, project_name: str) -> ProjectDetails:
        self._record("details", project_name)
        return ProjectDetails(owner=f"owner-of-{project_name}", description="fake", member_count=7)

    def fetch_last_update_time(self, project_name: str) -> datetime:
        self._record("last_update", project_name)
        return datetime(2024, 5, 6, 7, 8, 9)
