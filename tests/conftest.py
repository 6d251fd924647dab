# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import replace

import pytest

from project_reloader.config import Settings
from project_reloader.reloading.scheduler import RefreshScheduler

from .fakes import HangingTask


@pytest.fixture()
def make_settings() -> Callable[..., Settings]:
    """
    Settings with sub-second periods so scheduling tests finish quickly.

    We build Settings directly instead of reading the environment, to keep
    tests isolated and deterministic.
    """
    base = Settings(
        reload_period_seconds=0.1,
        status_initial_delay_seconds=0.05,
        status_period_seconds=0.1,
        shutdown_grace_seconds=2.0,
    )

    def _make(**overrides) -> Settings:
        return replace(base, **overrides)

    return _make


@pytest.fixture()
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture()
def cleanup() -> Iterator[list]:
    """
    Register schedulers / hanging tasks here; they are stopped / released on teardown
    so a failing test never leaks running worker threads into the next one.
    """
    items: list = []
    yield items
    for item in items:
        if isinstance(item, HangingTask):
            item.release()
    for item in items:
        if isinstance(item, RefreshScheduler):
            item.stop(timeout=0.0)
