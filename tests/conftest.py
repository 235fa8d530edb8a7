# tests/conftest.py

from __future__ import annotations

import pytest

from devrunner.runner import command_runner
from devrunner.runner.command_runner import CommandRunner

from .fakes import FakeBackgroundTask, FakeChooser, FakeNotifier, FakeProcessTable


@pytest.fixture()
def fake_tasks(monkeypatch: pytest.MonkeyPatch) -> type:
    """Replaces process creation in the runner with FakeBackgroundTask."""
    FakeBackgroundTask.created = []
    monkeypatch.setattr(command_runner, "BackgroundTask", FakeBackgroundTask)
    return FakeBackgroundTask


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def chooser() -> FakeChooser:
    return FakeChooser(0)


@pytest.fixture()
def process_table() -> FakeProcessTable:
    return FakeProcessTable()


@pytest.fixture()
def runner(fake_tasks, notifier, chooser, process_table) -> CommandRunner:
    """
    A runner wired with fakes. Every executable resolves, and discovery uses
    short timings so tests stay fast.
    """
    runner = CommandRunner(
        notifier,
        chooser=chooser,
        resolve_executable=lambda binary: True,
        process_table=process_table,
        discovery_timeout=0.5,
        poll_interval=0.01,
    )
    yield runner
    runner.kill_tasks()
