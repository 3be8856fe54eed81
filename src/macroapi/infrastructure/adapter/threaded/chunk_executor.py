import concurrent.futures
import logging
from collections.abc import Sequence

from macroapi.application.port import ChunkExecutor, TaskRunner
from macroapi.domain.entity import HardExceptionOutcome, TaskDescriptor, TaskOutcome

logger = logging.getLogger(__name__)


class ThreadedChunkExecutor(ChunkExecutor):
    """Runs every task of a chunk on its own thread and waits for all of them to settle."""

    def __init__(self, task_runner: TaskRunner):
        self.task_runner = task_runner

    def run_chunk(self, descriptors: Sequence[TaskDescriptor]) -> list[TaskOutcome]:
        if not descriptors:
            return []

        with concurrent.futures.ThreadPoolExecutor(
            max_workers=len(descriptors), thread_name_prefix="macroapi-task"
        ) as executor:
            futures = [executor.submit(self.task_runner.run, descriptor) for descriptor in descriptors]
            concurrent.futures.wait(futures)

        # Keep order as in descriptors
        outcomes = []
        for descriptor, future in zip(descriptors, futures):
            try:
                outcomes.append(future.result())
            except Exception as e:
                logger.error("Task runner for %s raised: %r", descriptor.id, e)
                outcomes.append(HardExceptionOutcome(task_id=descriptor.id, error=e))
        return outcomes
