import logging
from collections.abc import Iterable
from typing import Any

import msgspec

from macroapi.application.port import Orchestrator
from macroapi.domain.entity import (
    FailureOutcome,
    HardExceptionOutcome,
    RunResult,
    SuccessOutcome,
    TaskDescriptor,
    TaskOutcome,
)
from macroapi.domain.exception import PreconditionError, SignaledFailureError, TaskHardError
from macroapi.domain.service import validate_descriptors
from macroapi.domain.value_object import RunOptions, RunStatus

logger = logging.getLogger(__name__)


class OutcomeRegistrar:
    """Records task outcomes into a RunResult and applies the failure policy."""

    def __init__(self, result: RunResult, throw_on_failure: bool):
        self.result = result
        self.throw_on_failure = throw_on_failure

    def register(self, outcome: TaskOutcome) -> None:
        """
        Register one outcome.

        :param outcome: The settled outcome of a task
        :type outcome: TaskOutcome
        :raises Exception: The task's error, for a soft failure in strict mode
        :raises TaskHardError: For a hard exception, whatever the policy
        """
        if isinstance(outcome, SuccessOutcome):
            self.result.results[outcome.task_id] = outcome.payload
        elif isinstance(outcome, FailureOutcome):
            error = outcome.error
            if not isinstance(error, BaseException):
                error = SignaledFailureError(outcome.task_id, error)
            if self.throw_on_failure:
                logger.error("Error in %s: %s", outcome.task_id, error)
                raise error
            logger.warning("Task %s failed: %s", outcome.task_id, error)
            self.result.results[outcome.task_id] = None
            self.result.errors[outcome.task_id] = error
            self.result.status = RunStatus.PARTIAL_FAILURE
        elif isinstance(outcome, HardExceptionOutcome):
            logger.error("Hard failure in %s: %r", outcome.task_id, outcome.error)
            raise TaskHardError(outcome.task_id, outcome.error) from outcome.error
        else:
            raise TypeError(f"Unknown outcome type: {type(outcome)}")


def load_descriptors(data: Iterable[TaskDescriptor | str | dict[str, Any]]) -> list[TaskDescriptor]:
    """
    Decodes and validates task descriptors.

    Plain strings become descriptors with that id and an empty payload.

    :param data: Descriptors, task ids or descriptor dictionaries
    :type data: Iterable[TaskDescriptor | str | dict[str, Any]]
    :returns: The validated descriptors, in input order
    :rtype: list[TaskDescriptor]
    :raises PreconditionError: If an item cannot be decoded or ids are not unique
    """
    if isinstance(data, (str, bytes)):
        raise PreconditionError("Expected a collection of task descriptors, got a single string")

    descriptors = []
    for item in data:
        if isinstance(item, TaskDescriptor):
            descriptors.append(item)
        elif isinstance(item, str):
            descriptors.append(TaskDescriptor(id=item))
        else:
            try:
                descriptors.append(msgspec.convert(item, type=TaskDescriptor))
            except msgspec.ValidationError as e:
                raise PreconditionError(f"Invalid task descriptor {item!r}: {e}") from e
    validate_descriptors(descriptors)
    return descriptors


def execute_run(
    descriptors: Iterable[TaskDescriptor | str | dict[str, Any]],
    orchestrator: Orchestrator,
    options: RunOptions | None = None,
    run_id: str | None = None,
) -> RunResult:
    """
    Runs the given tasks with the specified orchestrator and returns a RunResult.

    :param descriptors: The tasks to run
    :type descriptors: Iterable[TaskDescriptor | str | dict[str, Any]]
    :param orchestrator: The orchestrator to use
    :type orchestrator: Orchestrator
    :param options: Options for the run
    :type options: RunOptions | None
    :param run_id: Optional run identifier
    :type run_id: str | None
    :returns: The result of the run
    :rtype: RunResult
    """
    return orchestrator.run(load_descriptors(descriptors), options, run_id)
