# src/project_reloader/cli/main.py

"""
CLI entrypoint.

Demo run: one STATIC and one LIVE project backed by the offline sources.
The STATIC project starts first, the LIVE one a second later; both are stopped
after --duration seconds or on SIGINT/SIGTERM.
"""

from __future__ import annotations

import argparse
import logging
import signal
import threading

from ..config import get_settings
from ..core.errors import ReloaderError
from ..core.project import Project, ProjectType
from ..logging_setup import setup_logging
from ..reloading.factory import ReloaderSources, create_scheduler
from ..reloading.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep cached project data fresh (offline demo)")
    parser.add_argument(
        "--duration",
        type=float,
        default=180.0,
        help="Seconds to run before stopping (default: 180)",
    )
    parser.add_argument(
        "--stagger",
        type=float,
        default=1.0,
        help="Seconds between starting the first and the second project (default: 1)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    sources = ReloaderSources()
    projects = [Project("project1", ProjectType.STATIC), Project("project2", ProjectType.LIVE)]

    try:
        schedulers = [create_scheduler(p, sources=sources, settings=settings) for p in projects]
    except ReloaderError:
        logger.exception("Failed to build schedulers.")
        return 1

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    started: list[RefreshScheduler] = []
    try:
        for i, scheduler in enumerate(schedulers):
            if i and stop_main.wait(args.stagger):
                break
            scheduler.start()
            started.append(scheduler)

        stop_main.wait(args.duration)
    finally:
        # Stop concurrently so the grace windows overlap instead of adding up.
        stoppers = [threading.Thread(target=s.stop, name=f"stop-{s.project.name}") for s in started]
        for t in stoppers:
            t.start()
        for t in stoppers:
            t.join()
        logger.info("Bye.")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
