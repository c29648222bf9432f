"""Pytest configuration and fixtures for releasebucket tests.

This module provides a recording fake in place of gsutil so no test spawns
a real process.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from releasebucket.storage.errors import GSUtilCommandError
from releasebucket.storage.gcs import GCSClient
from releasebucket.storage.models import GSUtilConfig
from releasebucket.storage.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """Fake runner that records argument lists instead of running gsutil."""

    def __init__(self, returncode: int = 0) -> None:
        self.calls: list[list[str]] = []
        self.returncode = returncode

    def run(self, args: Sequence[str]) -> None:
        self.calls.append(list(args))
        if self.returncode != 0:
            raise GSUtilCommandError(
                command_args=args,
                returncode=self.returncode,
                output="CommandException: No URLs matched",
            )


@pytest.fixture(autouse=True)
def clear_gsutil_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's RELEASEBUCKET_GSUTIL_BIN out of the tests."""
    monkeypatch.delenv("RELEASEBUCKET_GSUTIL_BIN", raising=False)


@pytest.fixture
def runner() -> RecordingRunner:
    """Return a runner that always succeeds."""
    return RecordingRunner()


@pytest.fixture
def failing_runner() -> RecordingRunner:
    """Return a runner that always exits with status 1."""
    return RecordingRunner(returncode=1)


@pytest.fixture
def client(runner: RecordingRunner) -> GCSClient:
    """Return a GCSClient wired to the recording runner."""
    return GCSClient(runner=runner, config=GSUtilConfig())
