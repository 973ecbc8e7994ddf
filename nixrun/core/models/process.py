"""
Process status models.

Provides Pydantic models describing how a child process (or a two-stage
pipeline) terminated.
"""

from __future__ import annotations

from enum import Enum
from signal import SIGPIPE, Signals

from pydantic import model_validator

from .base import ImmutableModel


class Stream(str, Enum):
    """Disposition of a child's standard stream."""

    INHERIT = "inherit"
    DISCARD = "discard"
    PIPE = "pipe"
    MERGE = "merge"  # stderr only: send to wherever stdout goes


class ExitStatus(ImmutableModel):
    """Terminal disposition of a process.

    Exactly one of ``code`` (normal exit) or ``signal`` (killed by a
    signal) is set.
    """

    code: int | None = None
    signal: int | None = None

    @model_validator(mode="after")
    def check_exactly_one(self) -> ExitStatus:
        """Reject statuses that are neither or both an exit and a signal."""
        if (self.code is None) == (self.signal is None):
            raise ValueError("ExitStatus needs exactly one of code or signal")
        return self

    @classmethod
    def exited(cls, code: int) -> ExitStatus:
        return cls(code=code)

    @classmethod
    def signaled(cls, signum: int) -> ExitStatus:
        return cls(signal=signum)

    @classmethod
    def from_returncode(cls, returncode: int) -> ExitStatus:
        """Build a status from a ``subprocess`` return code.

        Negative return codes mean the child was terminated by signal ``-N``.
        """
        if returncode < 0:
            return cls.signaled(-returncode)
        return cls.exited(returncode)

    @property
    def success(self) -> bool:
        """True only for a clean exit with code 0."""
        return self.code == 0

    def __str__(self) -> str:
        if self.code is not None:
            return f"exited with code {self.code}"
        try:
            name = Signals(self.signal).name
        except ValueError:
            return f"terminated by signal {self.signal}"
        return f"terminated by signal {self.signal} ({name})"


class PipelineStatus(ImmutableModel):
    """Statuses of both stages of a producer | consumer pipeline.

    ``consumer_exited_first`` is set when the producer was still running
    after the consumer had been reaped, i.e. the producer lost its reader.
    """

    producer: ExitStatus
    consumer: ExitStatus
    consumer_exited_first: bool = False

    @property
    def success(self) -> bool:
        return self.producer.success and self.consumer.success

    @property
    def producer_lost_reader(self) -> bool:
        """True when the producer's failure follows from a failed consumer."""
        if self.consumer.success or self.producer.success:
            return False
        return self.producer.signal == SIGPIPE or self.consumer_exited_first

    def dominant(self, strict: bool = True) -> tuple[str, ExitStatus]:
        """Pick the status that decides the pipeline's outcome.

        Args:
            strict: When True, a failing producer is reported even if the
                consumer exited cleanly, unless it only failed because the
                consumer had already died. When False only the last stage
                counts.

        Returns:
            Tuple of (stage name, status)
        """
        if strict and not self.producer.success and not self.producer_lost_reader:
            return "producer", self.producer
        return "consumer", self.consumer
