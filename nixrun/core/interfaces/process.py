"""
Process runner interface.

The only seam between nixrun and the operating system's process
primitives. Command types describe *what* to run; a runner decides *how*.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from ..models.process import ExitStatus, PipelineStatus, Stream


class IProcessRunner(ABC):
    """
    Interface for spawning child processes without a shell.

    Every method blocks until the child (or both pipeline stages) exit.
    Implementations raise SpawnError when the OS cannot create a child.
    """

    @abstractmethod
    def join(
        self,
        argv: Sequence[str],
        *,
        cwd: Path | str | None = None,
        stdout: Stream = Stream.INHERIT,
        stderr: Stream = Stream.INHERIT,
    ) -> ExitStatus:
        """
        Run a process to completion.

        Args:
            argv: Program followed by its arguments
            cwd: Working directory for the child
            stdout: INHERIT or DISCARD
            stderr: INHERIT, DISCARD or MERGE (into stdout)

        Returns:
            How the process terminated
        """
        pass

    @abstractmethod
    def capture(self, argv: Sequence[str]) -> bytes:
        """
        Run a process with stderr discarded and return its stdout.

        The child's exit status is not inspected.
        """
        pass

    @abstractmethod
    def pipeline(
        self,
        producer: Sequence[str],
        consumer: Sequence[str],
    ) -> PipelineStatus:
        """
        Run ``producer | consumer``.

        The producer's stdout and stderr both feed the consumer's stdin;
        the consumer's output goes to the caller's streams. Both stages
        run concurrently and are waited on.
        """
        pass
