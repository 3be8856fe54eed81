from typing import Any

import msgspec

from macroapi.domain.value_object import OutcomeKind, RunStatus


class TaskDescriptor(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Identifies one unit of work.

    The payload is opaque to the orchestrator; only the target resolver reads it.
    """

    id: str
    payload: dict[str, Any] = msgspec.field(default_factory=dict)


class TaskOutcome(msgspec.Struct, tag_field="kind", kw_only=True):
    """Terminal outcome of a single task."""

    task_id: str | None


class SuccessOutcome(TaskOutcome, tag=OutcomeKind.SUCCESS.value, kw_only=True):
    payload: Any


class FailureOutcome(TaskOutcome, tag=OutcomeKind.FAILURE.value, kw_only=True):
    """A soft, per-task failure: a signalled error or a timeout."""

    error: Any


class HardExceptionOutcome(TaskOutcome, tag=OutcomeKind.HARD_EXCEPTION.value, kw_only=True):
    """Starting or navigating the execution context raised."""

    error: Any


TaskOutcomeTypes = SuccessOutcome | FailureOutcome | HardExceptionOutcome


class RunResult(msgspec.Struct):
    """Aggregated result of a run.

    ``results`` holds an entry for every attempted task; failed tasks map to ``None`` and
    their error is kept in ``errors``.
    """

    id: str
    status: RunStatus = RunStatus.SUCCESS
    results: dict[str, Any] = msgspec.field(default_factory=dict)
    errors: dict[str, Any] = msgspec.field(default_factory=dict)

    @property
    def succeeded(self) -> list[str]:
        return [task_id for task_id in self.results if task_id not in self.errors]

    @property
    def failed(self) -> list[str]:
        return list(self.errors)

    def to_dict(self) -> dict[str, Any]:
        """Convert the RunResult to a dictionary, rendering errors as strings."""
        return {
            "id": self.id,
            "status": self.status.value,
            "results": msgspec.to_builtins(self.results),
            "errors": {task_id: str(error) for task_id, error in self.errors.items()},
        }

    def to_json(self) -> str:
        """Convert the RunResult to a JSON string."""
        return msgspec.json.encode(self.to_dict()).decode()

    def to_yaml(self) -> str:
        """Convert the RunResult to a YAML string."""
        return msgspec.yaml.encode(self.to_dict()).decode()
