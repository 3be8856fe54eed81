import logging
import uuid
from collections.abc import Callable, Sequence

from macroapi.application.port import ExecutorFactory, Orchestrator
from macroapi.application.service import OutcomeRegistrar
from macroapi.domain.entity import RunResult, TaskDescriptor
from macroapi.domain.exception import EnvironmentAcquireError, EnvironmentReleaseError
from macroapi.domain.port import Environment, EnvironmentProvider
from macroapi.domain.service import partition, validate_descriptors
from macroapi.domain.value_object import RunOptions
from macroapi.infrastructure.progress import CommandLineProgress

logger = logging.getLogger(__name__)


class UUIDGenerator:
    """Generates unique identifiers using UUID."""

    def generate(self) -> str:
        """
        Generate a unique identifier.

        :returns: A unique identifier string
        :rtype: str
        """
        return uuid.uuid4().hex


class ChunkedOrchestrator(Orchestrator):
    """
    Runs tasks in sequential chunks against one shared environment.

    At most ``chunk_size`` tasks are in flight at once: chunk *k+1* starts only after
    every task of chunk *k* has settled. The environment is acquired once and released
    once per run, whatever the outcome.
    """

    def __init__(
        self,
        environment_provider: EnvironmentProvider,
        executor_factory: ExecutorFactory,
        progress: Callable[[float, bool], None] | None = None,
    ):
        """
        Initializes with an environment provider and an executor factory.

        :param environment_provider: Acquires the shared environment at the start of each run
        :type environment_provider: EnvironmentProvider
        :param executor_factory: Builds the chunk executor for the acquired environment
        :type executor_factory: ExecutorFactory
        :param progress: Progress sink used when ``report_progress`` is set; defaults to a
            command line progress bar
        :type progress: Callable[[float, bool], None] | None
        """
        self.environment_provider = environment_provider
        self.executor_factory = executor_factory
        self.progress = progress if progress is not None else CommandLineProgress()

    def run(
        self,
        descriptors: Sequence[TaskDescriptor],
        options: RunOptions | None = None,
        run_id: str | None = None,
    ) -> RunResult:
        """
        Runs every task and aggregates the outcomes.

        :param descriptors: The tasks to run; ids must be unique
        :type descriptors: Sequence[TaskDescriptor]
        :param options: Options for this run
        :type options: RunOptions | None
        :param run_id: Optional run identifier
        :type run_id: str | None
        :returns: Payloads by task id, with ``None`` and an error entry for failed tasks
        :rtype: RunResult
        :raises PreconditionError: If ids are not unique or options are invalid
        :raises EnvironmentAcquireError: If the environment cannot be acquired
        :raises EnvironmentReleaseError: If the environment cannot be released after a run
        :raises TaskHardError: If starting or navigating a context raised
        """
        options = options if options is not None else RunOptions()
        descriptors = list(descriptors)
        validate_descriptors(descriptors)
        options.validate()
        chunks = partition(descriptors, options.chunk_size)

        if len(descriptors) > 1:
            logger.info("Extracting APIs for tasks: %s", ", ".join(d.id for d in descriptors))

        try:
            environment = self.environment_provider.acquire()
        except Exception as e:
            raise EnvironmentAcquireError(f"Could not acquire environment: {e}") from e

        result = RunResult(id=run_id if run_id is not None else UUIDGenerator().generate())
        try:
            self._run_chunks(environment, chunks, options, result)
        except BaseException:
            self._release(environment, strict=False)
            raise
        self._release(environment, strict=True)

        if result.errors:
            logger.error(
                "Errors while extracting APIs: %s",
                {task_id: str(error) for task_id, error in result.errors.items()},
            )
        return result

    def _run_chunks(
        self,
        environment: Environment,
        chunks: list[list[TaskDescriptor]],
        options: RunOptions,
        result: RunResult,
    ) -> None:
        executor = self.executor_factory.get_executor(environment, options)
        registrar = OutcomeRegistrar(result, options.throw_on_failure)
        total = len(chunks)

        for index, chunk in enumerate(chunks, start=1):
            logger.info("Running chunk %d/%d: %s", index, total, ", ".join(d.id for d in chunk))
            outcomes = executor.run_chunk(chunk)
            for outcome in outcomes:
                registrar.register(outcome)
            logger.info("Chunk %d/%d settled", index, total)
            if options.report_progress:
                self.progress(index / total, index == total)

        if total == 0 and options.report_progress:
            self.progress(1.0, True)

    def _release(self, environment: Environment, strict: bool) -> None:
        try:
            environment.release()
        except Exception as e:
            if strict:
                raise EnvironmentReleaseError(f"Could not release environment: {e}") from e
            logger.error("Could not release environment: %r", e)
