# src/project_reloader/reloading/worker_pool.py

from __future__ import annotations

import logging
import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

WorkItem = Callable[[], None]


@dataclass(slots=True, frozen=True)
class PoolShutdown:
    drained: bool
    cancelled: int  # queued items dropped without running
    abandoned: int  # items still running when the deadline passed


class WorkerPool:
    """
    Fixed-size pool of daemon worker threads fed by a FIFO queue.

    - submit() never blocks; items queue when every worker is busy.
    - shutdown() stops accepting work and waits (bounded) until queued and
      running items are done. It returns as soon as the pool drains.
    - If the deadline passes first, queued items are dropped and running items
      are abandoned: Python threads cannot be interrupted, so they finish on
      their own in the background. No item starts after shutdown() returns.

    Workers are daemon threads so an abandoned item never blocks process exit.
    """

    def __init__(self, size: int, *, name: str = "reloader") -> None:
        if size < 1:
            raise ValueError(f"pool size must be >= 1, got {size}")

        self.size = size
        self.name = name

        self._queue: "queue.Queue[WorkItem | None]" = queue.Queue()
        self._cond = threading.Condition()
        self._pending = 0  # queued + running
        self._running = 0
        self._closed = False
        self._aborted = False

        self._workers = [
            threading.Thread(target=self._worker_loop, name=f"{name}-worker-{i}", daemon=True)
            for i in range(size)
        ]
        for t in self._workers:
            t.start()

        logger.debug("Worker pool %s started with %d workers", name, size)

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(self, item: WorkItem) -> bool:
        """Queue an item. Returns False if the pool no longer accepts work."""
        with self._cond:
            if self._closed:
                return False
            self._pending += 1
            # Put under the lock so no item can land behind the stop sentinels.
            self._queue.put(item)
        return True

    def _worker_loop(self) -> None:
        while True:
            item = self._queue.get()
            if item is None:
                return

            with self._cond:
                if self._aborted:
                    continue
                self._running += 1

            try:
                item()
            except BaseException:
                logger.exception("Work item failed in pool %s", self.name)
            finally:
                with self._cond:
                    self._running -= 1
                    self._pending -= 1
                    self._cond.notify_all()

    def shutdown(self, timeout: float) -> PoolShutdown:
        deadline = time.monotonic() + max(0.0, timeout)

        with self._cond:
            self._closed = True
            drained = self._cond.wait_for(lambda: self._pending == 0, timeout=max(0.0, timeout))

            if drained:
                cancelled = abandoned = 0
            else:
                self._aborted = True
                abandoned = self._running
                cancelled = self._pending - self._running
                self._drop_queued()

            for _ in self._workers:
                self._queue.put(None)

        if drained:
            for t in self._workers:
                t.join(timeout=max(0.0, deadline - time.monotonic()))
        else:
            logger.warning(
                "Worker pool %s did not drain in %.1fs: cancelled=%d abandoned=%d",
                self.name,
                timeout,
                cancelled,
                abandoned,
            )

        return PoolShutdown(drained=drained, cancelled=cancelled, abandoned=abandoned)

    def _drop_queued(self) -> None:
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                return
