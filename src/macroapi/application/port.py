from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from macroapi.domain.entity import RunResult, TaskDescriptor, TaskOutcome
from macroapi.domain.port import Environment
from macroapi.domain.value_object import RunOptions


class TargetResolver(ABC):
    """Maps a task descriptor to the target its execution context navigates to."""

    @abstractmethod
    def resolve(self, descriptor: TaskDescriptor) -> Any:
        """
        Resolve the navigation target for a descriptor.

        :param descriptor: The task descriptor
        :type descriptor: TaskDescriptor
        :returns: The target, e.g. a URL
        :rtype: Any
        """


class ProgressReporter(ABC):
    """Sink for run progress."""

    @abstractmethod
    def __call__(self, fraction: float, done: bool) -> None:
        """
        Report progress.

        :param fraction: Completed fraction of the run, between 0 and 1
        :type fraction: float
        :param done: Whether this is the final report
        :type done: bool
        """


class TaskRunner(ABC):
    """Runs exactly one task to a terminal outcome."""

    @abstractmethod
    def run(self, descriptor: TaskDescriptor) -> TaskOutcome:
        """
        Run a task. Soft failures are returned as outcomes, never raised.

        :param descriptor: The task to run
        :type descriptor: TaskDescriptor
        :returns: The task's terminal outcome
        :rtype: TaskOutcome
        """


class ChunkExecutor(ABC):
    """Runs a bounded group of tasks concurrently and waits for all of them to settle."""

    @abstractmethod
    def run_chunk(self, descriptors: Sequence[TaskDescriptor]) -> list[TaskOutcome]:
        """
        Run every descriptor of the chunk.

        :param descriptors: The chunk's descriptors
        :type descriptors: Sequence[TaskDescriptor]
        :returns: One outcome per descriptor, in input order
        :rtype: list[TaskOutcome]
        """


class ExecutorFactory(ABC):
    """Abstract factory for creating chunk executors bound to an acquired environment."""

    @abstractmethod
    def get_executor(self, environment: Environment, options: RunOptions) -> ChunkExecutor:
        """
        Get a chunk executor for the given environment.

        :param environment: The environment acquired for the current run
        :type environment: Environment
        :param options: The options of the current run
        :type options: RunOptions
        :returns: An executor whose task runners use the environment
        :rtype: ChunkExecutor
        """


class Orchestrator(ABC):
    """Abstract base class defining the orchestrator interface."""

    @abstractmethod
    def run(
        self,
        descriptors: Sequence[TaskDescriptor],
        options: RunOptions | None = None,
        run_id: str | None = None,
    ) -> RunResult:
        """
        Runs all tasks.

        :param descriptors: The tasks to run; ids must be unique
        :type descriptors: Sequence[TaskDescriptor]
        :param options: Options for this run
        :type options: RunOptions | None
        :param run_id: Optional run identifier
        :type run_id: str | None
        :returns: The aggregated result of the run
        :rtype: RunResult
        """
        ...
