import math
from dataclasses import dataclass
from enum import Enum

from macroapi.domain.exception import PreconditionError

DEFAULT_CHUNK_SIZE = 4
DEFAULT_TASK_TIMEOUT = 120.0


@dataclass
class RunOptions:
    chunk_size: int = DEFAULT_CHUNK_SIZE
    throw_on_failure: bool = True
    report_progress: bool = False
    task_timeout: float = DEFAULT_TASK_TIMEOUT
    show_messages: bool = True

    def validate(self) -> None:
        """
        Check the options before a run starts.

        :raises PreconditionError: If the chunk size or timeout is not usable
        """
        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size < 1:
            raise PreconditionError(f"chunk_size must be a positive integer, got {self.chunk_size!r}")
        if self.task_timeout is None or not math.isfinite(self.task_timeout) or self.task_timeout <= 0:
            raise PreconditionError(f"task_timeout must be a positive finite number, got {self.task_timeout!r}")


class RunStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL_FAILURE = "partial_failure"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    HARD_EXCEPTION = "hard_exception"
