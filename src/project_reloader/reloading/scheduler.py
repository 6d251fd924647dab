# src/project_reloader/reloading/scheduler.py

from __future__ import annotations

"""
Refresh scheduler.

Runs every bound refresh task once immediately and then at a fixed rate, on a
worker pool owned by this scheduler instance:
- a daemon timer thread decides when each task is due,
- the worker pool executes the firings,
- a failing execution is logged and counted, its schedule keeps going.

Lifecycle: CREATED -> RUNNING -> STOPPED. A scheduler is started at most once;
stop() on a scheduler that is not running is a no-op.
"""

import logging
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from functools import partial

from ..config import Settings, get_settings
from ..core.errors import SchedulerStateError
from ..core.ports import RefreshTask
from ..core.project import Project
from .loaders import ProjectStatusReporter
from .worker_pool import WorkerPool

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 4


class SchedulerState(StrEnum):
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(slots=True)
class TaskStats:
    runs: int = 0  # finished executions, failed ones included
    failures: int = 0
    skipped: int = 0  # firings dropped because the previous one was still running
    last_error: str | None = None
    last_started_at: float | None = None
    last_finished_at: float | None = None


@dataclass(slots=True, frozen=True)
class ShutdownReport:
    drained: bool
    cancelled: int
    abandoned: int
    elapsed: float


@dataclass(slots=True)
class _PeriodicJob:
    task: RefreshTask
    initial_delay: float
    period: float
    next_due: float = 0.0
    in_flight: int = 0
    stats: TaskStats = field(default_factory=TaskStats)


def resolve_pool_size(configured: int, task_count: int) -> int:
    """
    Pick the worker count for a scheduler.

    All tasks (plus the status task) fire together at start, so the automatic
    size never goes below task_count + 1.
    """
    needed = task_count + 1
    if configured <= 0:
        return max(DEFAULT_POOL_SIZE, needed)
    if configured < needed:
        logger.warning(
            "pool_size=%d is smaller than %d tasks + status task; firings will queue",
            configured,
            task_count,
        )
    return configured


class RefreshScheduler:
    def __init__(
            self,
            project: Project,
            tasks: Sequence[RefreshTask],
            *,
            status_task: RefreshTask | None = None,
            settings: Settings | None = None,
    ) -> None:
        self._project = project
        self._tasks = tuple(tasks)
        self._status_task = status_task if status_task is not None else ProjectStatusReporter(project)
        self._settings = settings if settings is not None else get_settings()

        if self._settings.reload_period_seconds <= 0 or self._settings.status_period_seconds <= 0:
            raise ValueError("Reload and status periods must be positive")

        names = [t.name for t in (*self._tasks, self._status_task)]
        if len(set(names)) != len(names):
            raise ValueError(f"Task names must be unique per scheduler, got {names}")

        self._pool_size = resolve_pool_size(self._settings.pool_size, len(self._tasks))

        period = self._settings.reload_period_seconds
        self._jobs = [_PeriodicJob(task=t, initial_delay=0.0, period=period) for t in self._tasks]
        self._jobs.append(
            _PeriodicJob(
                task=self._status_task,
                initial_delay=self._settings.status_initial_delay_seconds,
                period=self._settings.status_period_seconds,
            )
        )

        # _lock serializes lifecycle transitions; _jobs_lock guards job bookkeeping.
        self._lock = threading.Lock()
        self._jobs_lock = threading.Lock()

        self._state = SchedulerState.CREATED
        self._pool: WorkerPool | None = None
        self._timer: threading.Thread | None = None
        self._stop_event = threading.Event()

    # ---- introspection ----

    @property
    def project(self) -> Project:
        return self._project

    @property
    def tasks(self) -> tuple[RefreshTask, ...]:
        return self._tasks

    @property
    def status_task(self) -> RefreshTask:
        return self._status_task

    @property
    def pool_size(self) -> int:
        return self._pool_size

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    @property
    def has_pool(self) -> bool:
        return self._pool is not None

    def stats(self) -> dict[str, TaskStats]:
        """Per-task counters keyed by task name (copies)."""
        with self._jobs_lock:
            return {job.task.name: replace(job.stats) for job in self._jobs}

    # ---- lifecycle ----

    def start(self) -> None:
        with self._lock:
            if self._state is not SchedulerState.CREATED:
                raise SchedulerStateError(
                    f"Scheduler for project {self._project.name!r} is {self._state}; it can only be started once"
                )

            logger.info(
                'Starting project data reloading for project "%s", type: %s',
                self._project.name,
                self._project.type,
            )

            self._pool = WorkerPool(self._pool_size, name=f"reloader-{self._project.name}")

            now = time.monotonic()
            with self._jobs_lock:
                for job in self._jobs:
                    job.next_due = now + job.initial_delay

            self._timer = threading.Thread(
                target=self._timer_loop,
                name=f"reloader-{self._project.name}-timer",
                daemon=True,
            )
            self._state = SchedulerState.RUNNING
            self._timer.start()

    def stop(self, timeout: float | None = None) -> ShutdownReport | None:
        """
        Stop firing and drain the pool within the grace window.

        Returns None (and does nothing) when the scheduler is not running.
        """
        with self._lock:
            if self._state is not SchedulerState.RUNNING:
                logger.warning(
                    "stop() ignored for project %s: scheduler is %s",
                    self._project.name,
                    self._state,
                )
                return None

            logger.info('Stopping project data reloading for project "%s"...', self._project.name)

            grace = self._settings.shutdown_grace_seconds if timeout is None else max(0.0, timeout)
            started = time.monotonic()
            deadline = started + grace

            self._stop_event.set()
            if self._timer is not None:
                self._timer.join(timeout=max(0.0, deadline - time.monotonic()))

            assert self._pool is not None
            result = self._pool.shutdown(timeout=max(0.0, deadline - time.monotonic()))

            if not result.drained:
                logger.warning(
                    "Grace window of %.1fs elapsed for project %s: %d queued firings cancelled, %d executions abandoned",
                    grace,
                    self._project.name,
                    result.cancelled,
                    result.abandoned,
                )

            self._pool = None
            self._timer = None
            self._state = SchedulerState.STOPPED

            report = ShutdownReport(
                drained=result.drained,
                cancelled=result.cancelled,
                abandoned=result.abandoned,
                elapsed=time.monotonic() - started,
            )
            logger.info("Project %s stopped in %.2fs", self._project.name, report.elapsed)
            return report

    def __enter__(self) -> RefreshScheduler:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # ---- internals ----

    def _timer_loop(self) -> None:
        while not self._stop_event.is_set():
            now = time.monotonic()
            next_wake = now + 3600.0

            for job in self._jobs:
                if job.next_due <= now:
                    self._fire(job)
                    # Fixed rate: stay on the start-anchored grid; missed ticks collapse into this one.
                    missed = int((now - job.next_due) // job.period)
                    if missed:
                        logger.debug("Task %s missed %d firings", job.task.name, missed)
                    job.next_due += (missed + 1) * job.period
                next_wake = min(next_wake, job.next_due)

            self._stop_event.wait(max(0.0, next_wake - time.monotonic()))

    def _fire(self, job: _PeriodicJob) -> None:
        pool = self._pool
        if pool is None:
            return

        with self._jobs_lock:
            if job.in_flight and not self._settings.allow_overlap:
                job.stats.skipped += 1
                logger.debug(
                    "Skipping %s for project %s: previous run still in progress",
                    job.task.name,
                    self._project.name,
                )
                return
            job.in_flight += 1

        if not pool.submit(partial(self._execute, job)):
            with self._jobs_lock:
                job.in_flight -= 1

    def _execute(self, job: _PeriodicJob) -> None:
        with self._jobs_lock:
            job.stats.last_started_at = time.time()

        try:
            job.task.run()
        # A worker thread has no caller to hand SystemExit or KeyboardInterrupt to.
        except BaseException as e:
            with self._jobs_lock:
                job.stats.failures += 1
                job.stats.last_error = repr(e)
            logger.exception("Refresh task %s failed for project %s", job.task.name, self._project.name)
        finally:
            with self._jobs_lock:
                job.stats.runs += 1
                job.stats.last_finished_at = time.time()
                job.in_flight -= 1
