from collections.abc import Iterable
from typing import Any

from macroapi.application.port import Orchestrator
from macroapi.application.service import execute_run
from macroapi.domain.entity import RunResult, TaskDescriptor
from macroapi.domain.value_object import RunOptions


class Client:
    """
    Client façade for API extraction runs.

    Holds a configured orchestrator and the default options for its runs.
    """

    def __init__(self, orchestrator: Orchestrator, options: RunOptions | None = None):
        """
        Initialize the client with an orchestrator and default run options.

        :param orchestrator: The orchestrator implementation (e.g., ChunkedOrchestrator)
        :type orchestrator: Orchestrator
        :param options: Options used when a run does not pass its own
        :type options: RunOptions | None
        """
        self._orchestrator = orchestrator
        self.options = options if options is not None else RunOptions()

    def run(
        self,
        tasks: Iterable[TaskDescriptor | str | dict[str, Any]],
        options: RunOptions | None = None,
        run_id: str | None = None,
    ) -> RunResult:
        """
        Run the given tasks.

        :param tasks: Descriptors, task ids or descriptor dictionaries
        :type tasks: Iterable[TaskDescriptor | str | dict[str, Any]]
        :param options: Options overriding the client's defaults for this run
        :type options: RunOptions | None
        :param run_id: Optional run identifier
        :type run_id: str | None
        :returns: The result of the run
        :rtype: RunResult
        """
        options = options if options is not None else self.options
        return execute_run(tasks, self._orchestrator, options, run_id)
