from typing import Any


class MacroAPIError(Exception):
    """Base class for all errors raised by the orchestration engine."""

    def __init__(self, message: str, code: str | None = None, params: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.params = params


class PreconditionError(ValueError, MacroAPIError):
    """Raised before a run starts when its inputs are unusable (e.g. duplicate task ids)."""

    def __init__(self, message: str, code: str | None = None, params: dict[str, Any] | None = None):
        MacroAPIError.__init__(self, message, code=code, params=params)


class OrchestrationEnvironmentError(MacroAPIError):
    """Raised when the shared environment cannot be acquired or released."""


class EnvironmentAcquireError(OrchestrationEnvironmentError):
    pass


class EnvironmentReleaseError(OrchestrationEnvironmentError):
    pass


class TaskError(MacroAPIError):
    """An error attributed to a single task."""

    def __init__(self, task_id: str, message: str, code: str | None = None, params: dict[str, Any] | None = None):
        super().__init__(message, code=code, params=params)
        self.task_id = task_id


class TaskTimeoutError(TaskError):
    """A task produced no signal before its timeout expired."""

    def __init__(self, task_id: str, timeout: float):
        super().__init__(task_id, f"Timeout after {timeout}s while extracting API for {task_id}", code="timeout")
        self.timeout = timeout


class SignaledFailureError(TaskError):
    """A task's execution context reported an error."""

    def __init__(self, task_id: str, reason: Any):
        super().__init__(task_id, f"Execution context for {task_id} reported an error: {reason}", code="signaled")
        self.reason = reason


class TaskHardError(TaskError):
    """Starting or navigating a task's execution context raised; always fatal to the run."""

    def __init__(self, task_id: str | None, error: BaseException):
        super().__init__(task_id, f"Hard failure for {task_id}: {error!r}", code="hard")
        self.error = error
