"""
Shared pytest fixtures for nixrun tests.

This module provides:
- reset_container: Fresh service container for every test
- fake_runner: A process runner that records requests instead of spawning
- recording_logger: A logger that keeps every message for assertions
- make_script: Writes executable Python stand-ins for nix, nom and editors
"""

import os
import stat
import sys
import textwrap
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest

from nixrun.core import bootstrap as bootstrap_module
from nixrun.core.container import get_container
from nixrun.core.interfaces.logger import ILogger
from nixrun.core.interfaces.process import IProcessRunner
from nixrun.core.models.process import ExitStatus, PipelineStatus, Stream


class FakeProcessRunner(IProcessRunner):
    """Process runner that records every request and never spawns."""

    def __init__(
        self,
        status: ExitStatus | None = None,
        output: bytes = b"",
        pipeline_status: PipelineStatus | None = None,
        error: Exception | None = None,
    ) -> None:
        self.status = status or ExitStatus.exited(0)
        self.output = output
        self.pipeline_status = pipeline_status or PipelineStatus(
            producer=ExitStatus.exited(0),
            consumer=ExitStatus.exited(0),
        )
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def join(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | str | None = None,
        stdout: Stream = Stream.INHERIT,
        stderr: Stream = Stream.INHERIT,
    ) -> ExitStatus:
        self.calls.append(
            {"kind": "join", "argv": list(argv), "cwd": cwd, "stdout": stdout, "stderr": stderr}
        )
        if self.error:
            raise self.error
        return self.status

    def capture(self, argv: Sequence[str]) -> bytes:
        self.calls.append({"kind": "capture", "argv": list(argv)})
        if self.error:
            raise self.error
        return self.output

    def pipeline(self, producer: Sequence[str], consumer: Sequence[str]) -> PipelineStatus:
        self.calls.append(
            {"kind": "pipeline", "producer": list(producer), "consumer": list(consumer)}
        )
        if self.error:
            raise self.error
        return self.pipeline_status


class RecordingLogger(ILogger):
    """Logger that stores (level, rendered message) tuples."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, message: str, *args: Any) -> None:
        self.records.append((level, message % args if args else message))

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", message, *args)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", message, *args)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", message, *args)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", message, *args)

    def set_level(self, level: str) -> None:
        pass

    def messages(self, level: str) -> list[str]:
        return [msg for lvl, msg in self.records if lvl == level]


@pytest.fixture(autouse=True)
def reset_container():
    """Give every test an empty service container."""
    bootstrap_module.reset()
    yield
    bootstrap_module.reset()


@pytest.fixture(autouse=True)
def clean_nixrun_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop NIXRUN_* overrides from the developer's environment."""
    for name in list(os.environ):
        if name.startswith("NIXRUN_"):
            monkeypatch.delenv(name)


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    return FakeProcessRunner()


@pytest.fixture
def registered_runner(fake_runner: FakeProcessRunner) -> FakeProcessRunner:
    """Fake runner registered in the container, as the CLI would resolve it."""
    get_container().register_singleton(IProcessRunner, instance=fake_runner)  # type: ignore[type-abstract]
    return fake_runner


@pytest.fixture
def recording_logger() -> RecordingLogger:
    logger = RecordingLogger()
    get_container().register_singleton(ILogger, instance=logger)  # type: ignore[type-abstract]
    return logger


@pytest.fixture
def make_script(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Return a factory writing an executable Python script into tmp_path/bin.

    The script runs with the current interpreter, so stand-ins for nix,
    nom or an editor need no shell.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    def _make(name: str, body: str) -> Path:
        script = bin_dir / name
        script.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def make_runner() -> type[FakeProcessRunner]:
    """The FakeProcessRunner class, for tests needing a configured instance."""
    return FakeProcessRunner
