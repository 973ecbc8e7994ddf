"""
Subprocess-backed process runner.

Spawns children directly from an argument vector (never through a shell)
and maps OS-level failures onto SpawnError.
"""

import subprocess
from collections.abc import Sequence
from pathlib import Path

from ...core.exceptions import SpawnError
from ...core.interfaces.process import IProcessRunner
from ...core.models.process import ExitStatus, PipelineStatus, Stream

_STDOUT_TARGETS = {
    Stream.INHERIT: None,
    Stream.DISCARD: subprocess.DEVNULL,
    Stream.PIPE: subprocess.PIPE,
}

_STDERR_TARGETS = {
    Stream.INHERIT: None,
    Stream.DISCARD: subprocess.DEVNULL,
    Stream.MERGE: subprocess.STDOUT,
}


class SubprocessRunner(IProcessRunner):
    """
    Process runner built on ``subprocess.Popen``.

    Usage:
        runner = SubprocessRunner()
        status = runner.join(["nix", "build", ".#default"])
        output = runner.capture(["nix", "eval", "--raw", ".#name"])
        statuses = runner.pipeline(["nix", "build", ...], ["nom", "--json"])
    """

    def join(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | str | None = None,
        stdout: Stream = Stream.INHERIT,
        stderr: Stream = Stream.INHERIT,
    ) -> ExitStatus:
        if stdout not in _STDOUT_TARGETS or stdout is Stream.PIPE:
            raise ValueError(f"Unsupported stdout disposition for join: {stdout}")
        if stderr not in _STDERR_TARGETS:
            raise ValueError(f"Unsupported stderr disposition: {stderr}")

        proc = self._spawn(
            argv,
            cwd=cwd,
            stdout=_STDOUT_TARGETS[stdout],
            stderr=_STDERR_TARGETS[stderr],
        )
        return self._wait(proc, argv)

    def capture(self, argv: Sequence[str]) -> bytes:
        proc = self._spawn(argv, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL)
        try:
            out, _ = proc.communicate()
        except OSError as e:
            proc.kill()
            proc.wait()
            raise SpawnError(
                f"Failed to read output of {argv[0]}: {e}", program=argv[0]
            ) from e
        return out or b""

    def pipeline(
        self,
        producer: Sequence[str],
        consumer: Sequence[str],
    ) -> PipelineStatus:
        first = self._spawn(producer, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        try:
            second = self._spawn(consumer, stdin=first.stdout)
        except SpawnError:
            first.kill()
            first.wait()
            first.stdout.close()
            raise

        # Only the consumer holds the read end now, so the producer gets
        # SIGPIPE instead of blocking if the consumer exits early.
        first.stdout.close()

        consumer_status = self._wait(second, consumer)
        consumer_exited_first = first.poll() is None
        producer_status = self._wait(first, producer)
        return PipelineStatus(
            producer=producer_status,
            consumer=consumer_status,
            consumer_exited_first=consumer_exited_first,
        )

    def _spawn(self, argv: Sequence[str], **kwargs) -> subprocess.Popen:
        """Start a child, translating OS errors into SpawnError."""
        if not argv:
            raise ValueError("argv must contain at least the program name")
        try:
            return subprocess.Popen(list(argv), **kwargs)
        except OSError as e:
            reason = e.strerror or str(e)
            raise SpawnError(f"Failed to spawn {argv[0]}: {reason}", program=argv[0]) from e

    def _wait(self, proc: subprocess.Popen, argv: Sequence[str]) -> ExitStatus:
        try:
            returncode = proc.wait()
        except OSError as e:
            raise SpawnError(f"Failed to wait on {argv[0]}: {e}", program=argv[0]) from e
        return ExitStatus.from_returncode(returncode)


def default_runner() -> IProcessRunner:
    """Resolve the process runner from the container, or a SubprocessRunner."""
    from ...core.di import resolve_or_default

    return resolve_or_default(IProcessRunner, SubprocessRunner)  # type: ignore[type-abstract]
