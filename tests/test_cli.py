# tests/test_cli.py

from __future__ import annotations

from project_reloader.cli import main as cli_main
from project_reloader.config import Settings


def test_demo_runs_both_projects_and_stops(monkeypatch, tmp_path) -> None:
    settings = Settings(
        log_dir=tmp_path,
        reload_period_seconds=0.05,
        status_initial_delay_seconds=0.01,
        status_period_seconds=0.05,
        shutdown_grace_seconds=1.0,
    )
    logging_calls: list[dict] = []
    handlers: list[int] = []

    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "setup_logging", lambda **kw: logging_calls.append(kw))
    # Keep pytest's own SIGINT handling intact.
    monkeypatch.setattr(cli_main.signal, "signal", lambda signum, _handler: handlers.append(signum))

    started: list[str] = []
    real_create = cli_main.create_scheduler

    def _create(project, **kw):
        started.append(f"{project.name}:{project.type}")
        return real_create(project, **kw)

    monkeypatch.setattr(cli_main, "create_scheduler", _create)

    rc = cli_main.main(["--duration", "0.2", "--stagger", "0.02"])

    assert rc == 0
    assert started == ["project1:static", "project2:live"]
    assert logging_calls and logging_calls[0]["log_dir"] == tmp_path
    assert len(handlers) == 2
