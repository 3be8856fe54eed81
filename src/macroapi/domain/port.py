from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class ExecutionContext(ABC):
    """An isolated, closable unit hosting one task's work (e.g. a browser page)."""

    @abstractmethod
    def on_success(self, callback: Callable[[Any], None]) -> None:
        """
        Register the callback invoked with the payload once the unit signals completion.

        :param callback: Called with the completion payload
        :type callback: Callable[[Any], None]
        """

    @abstractmethod
    def on_error(self, callback: Callable[[Any], None]) -> None:
        """
        Register the callback invoked when the unit crashes or reports an error.

        :param callback: Called with the error (usually an exception)
        :type callback: Callable[[Any], None]
        """

    def on_message(self, callback: Callable[[str], None]) -> None:
        """
        Register a callback for informational messages emitted by the unit.

        Contexts that cannot surface messages may ignore the registration.

        :param callback: Called with each message text
        :type callback: Callable[[str], None]
        """

    @abstractmethod
    def navigate(self, target: Any) -> None:
        """
        Point the context at its target and start the unit's work.

        :param target: The resolved target, e.g. a URL
        :type target: Any
        :raises Exception: If the context cannot be navigated
        """

    @abstractmethod
    def close(self) -> None:
        """Close the context. Closing may interrupt pending work and trigger an error signal."""


class Environment(ABC):
    """Shared resource that creates execution contexts (e.g. a browser)."""

    @abstractmethod
    def start_context(self) -> ExecutionContext:
        """
        Open a new execution context.

        :returns: A fresh, private execution context
        :rtype: ExecutionContext
        """

    @abstractmethod
    def release(self) -> None:
        """Release the environment and everything it still holds."""


class EnvironmentProvider(ABC):
    """Acquires the shared environment for one run."""

    @abstractmethod
    def acquire(self) -> Environment:
        """
        Acquire the environment.

        :returns: The acquired environment
        :rtype: Environment
        """
