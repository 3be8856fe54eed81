import logging
import threading
from collections.abc import Callable
from typing import Any

from macroapi.application.port import TargetResolver, TaskRunner
from macroapi.domain.entity import (
    FailureOutcome,
    HardExceptionOutcome,
    SuccessOutcome,
    TaskDescriptor,
    TaskOutcome,
)
from macroapi.domain.exception import SignaledFailureError, TaskTimeoutError
from macroapi.domain.port import Environment, ExecutionContext
from macroapi.domain.value_object import DEFAULT_TASK_TIMEOUT

logger = logging.getLogger(__name__)


class CleanupGuard:
    """
    One-shot latch owned by a single task.

    The first racer to call :meth:`settle` cancels the timer, closes the context and
    publishes its outcome; every later call is a no-op. Closing a context can itself
    raise an error signal, so the flag is flipped before the close.
    """

    def __init__(self, task_id: str, context: ExecutionContext):
        self.task_id = task_id
        self._context = context
        self._lock = threading.Lock()
        self._cleaned = False
        self._timer: threading.Timer | None = None
        self._settled = threading.Event()
        self._outcome: TaskOutcome | None = None

    @property
    def cleaned(self) -> bool:
        return self._cleaned

    def arm(self, timeout: float, on_timeout: Callable[[], None]) -> None:
        """
        Start the task's timer unless the guard has already been settled.

        :param timeout: Seconds before ``on_timeout`` fires
        :type timeout: float
        :param on_timeout: Called from the timer thread
        :type on_timeout: Callable[[], None]
        """
        with self._lock:
            if self._cleaned:
                return
            self._timer = threading.Timer(timeout, on_timeout)
            self._timer.daemon = True
            self._timer.start()

    def settle(self, outcome: TaskOutcome) -> bool:
        """
        Close the context and publish ``outcome`` if no other racer got here first.

        :param outcome: The outcome to publish
        :type outcome: TaskOutcome
        :returns: Whether this call won the race
        :rtype: bool
        """
        with self._lock:
            if self._cleaned:
                return False
            self._cleaned = True
            timer = self._timer

        if timer is not None:
            timer.cancel()
        try:
            self._context.close()
        except Exception as e:
            logger.warning("Closing execution context for %s failed: %r", self.task_id, e)
        finally:
            self._outcome = outcome
            self._settled.set()
        return True

    def wait(self, timeout: float | None = None) -> TaskOutcome | None:
        """Block until the guard is settled and return the published outcome."""
        self._settled.wait(timeout)
        return self._outcome


class ContextTaskRunner(TaskRunner):
    """Runs a task in its own execution context, racing completion, error and timeout."""

    def __init__(
        self,
        environment: Environment,
        resolver: TargetResolver,
        timeout: float = DEFAULT_TASK_TIMEOUT,
        show_messages: bool = True,
    ):
        """
        Initializes the runner.

        :param environment: The acquired environment used to start contexts
        :type environment: Environment
        :param resolver: Maps descriptors to navigation targets
        :type resolver: TargetResolver
        :param timeout: Seconds a task may run without signalling
        :type timeout: float
        :param show_messages: Log messages emitted by the unit at info level
        :type show_messages: bool
        """
        self.environment = environment
        self.resolver = resolver
        self.timeout = timeout
        self.show_messages = show_messages

    def run(self, descriptor: TaskDescriptor) -> TaskOutcome:
        task_id = descriptor.id
        try:
            context = self.environment.start_context()
        except Exception as e:
            logger.error("Could not start execution context for %s: %r", task_id, e)
            return HardExceptionOutcome(task_id=task_id, error=e)

        guard = CleanupGuard(task_id, context)

        def succeed(payload: Any) -> None:
            if not guard.settle(SuccessOutcome(task_id=task_id, payload=payload)):
                logger.debug("Ignoring completion of %s after cleanup", task_id)

        def fail(error: Any) -> None:
            if guard.settle(FailureOutcome(task_id=task_id, error=self._signaled(task_id, error))):
                logger.warning("Execution context for %s reported an error: %s", task_id, error)
            else:
                logger.debug("Suppressed error for %s after cleanup: %s", task_id, error)

        def expire() -> None:
            if guard.settle(FailureOutcome(task_id=task_id, error=TaskTimeoutError(task_id, self.timeout))):
                logger.warning("Task %s timed out after %ss", task_id, self.timeout)

        try:
            context.on_success(succeed)
            context.on_error(fail)
            context.on_message(lambda message: self._forward(task_id, message))
            guard.arm(self.timeout, expire)
            context.navigate(self.resolver.resolve(descriptor))
        except Exception as e:
            # navigate also raises when a winning racer closes the context mid-navigation
            if guard.settle(HardExceptionOutcome(task_id=task_id, error=e)):
                logger.error("Navigation failed for %s: %r", task_id, e)
            else:
                logger.debug("Suppressed navigation error for %s after cleanup: %r", task_id, e)

        return guard.wait()

    @staticmethod
    def _signaled(task_id: str, error: Any) -> SignaledFailureError:
        wrapped = SignaledFailureError(task_id, error)
        if isinstance(error, BaseException):
            wrapped.__cause__ = error
        return wrapped

    def _forward(self, task_id: str, message: str) -> None:
        if self.show_messages:
            logger.info("[%s] %s", task_id, message)
        else:
            logger.debug("[%s] %s", task_id, message)
