import logging
import threading
from collections.abc import Callable, Mapping
from typing import Any

import msgspec

from macroapi.domain.port import Environment, EnvironmentProvider, ExecutionContext

logger = logging.getLogger(__name__)


class ContextScript(msgspec.Struct, kw_only=True, forbid_unknown_fields=True):
    """Scripted behaviour of an in-memory context once it navigates to its target.

    After ``delay`` seconds the context emits ``messages`` and then either signals
    ``error`` or completes with ``payload``. ``hang`` never signals anything.
    """

    payload: Any = None
    error: str | None = None
    delay: float = 0.0
    hang: bool = False
    messages: list[str] = []
    navigate_error: str | None = None
    close_error: str | None = None
    error_on_close: bool = False


class InMemoryContext(ExecutionContext):
    """Execution context that plays back a :class:`ContextScript` on a timer thread."""

    def __init__(self, environment: "InMemoryEnvironment", scripts: Mapping[Any, ContextScript]):
        self._environment = environment
        self._scripts = scripts
        self._on_success: Callable[[Any], None] | None = None
        self._on_error: Callable[[Any], None] | None = None
        self._on_message: Callable[[str], None] | None = None
        self._timer: threading.Timer | None = None
        self.target: Any = None
        self.closed = False
        self.close_calls = 0

    def on_success(self, callback: Callable[[Any], None]) -> None:
        self._on_success = callback

    def on_error(self, callback: Callable[[Any], None]) -> None:
        self._on_error = callback

    def on_message(self, callback: Callable[[str], None]) -> None:
        self._on_message = callback

    def navigate(self, target: Any) -> None:
        self.target = target
        try:
            script = self._scripts[target]
        except KeyError:
            raise KeyError(f"No script registered for target {target!r}") from None
        if script.navigate_error is not None:
            raise RuntimeError(script.navigate_error)
        if script.hang:
            return
        self._timer = threading.Timer(script.delay, self._play, args=(script,))
        self._timer.daemon = True
        self._timer.start()

    def _play(self, script: ContextScript) -> None:
        if self.closed:
            return
        for message in script.messages:
            if self._on_message is not None:
                self._on_message(message)
        if script.error is not None:
            if self._on_error is not None:
                self._on_error(RuntimeError(script.error))
        elif self._on_success is not None:
            self._on_success(script.payload)

    def close(self) -> None:
        self.close_calls += 1
        if self._timer is not None:
            self._timer.cancel()
        if not self.closed:
            self.closed = True
            self._environment._context_closed(self)

        script = self._scripts.get(self.target)
        if script is None:
            return
        # closing interrupts the unit, which may report that as an error
        if script.error_on_close and self._on_error is not None:
            self._on_error(RuntimeError(f"Target closed: {self.target}"))
        if script.close_error is not None:
            raise RuntimeError(script.close_error)


class InMemoryEnvironment(Environment):
    """Creates scripted contexts and keeps count of how many are open at once."""

    def __init__(self, scripts: Mapping[Any, ContextScript]):
        self._scripts = scripts
        self._lock = threading.Lock()
        self.contexts: list[InMemoryContext] = []
        self.open_contexts = 0
        self.peak_open_contexts = 0
        self.released = False
        self.release_calls = 0

    def start_context(self) -> InMemoryContext:
        with self._lock:
            if self.released:
                raise RuntimeError("Environment has already been released")
            context = InMemoryContext(self, self._scripts)
            self.contexts.append(context)
            self.open_contexts += 1
            self.peak_open_contexts = max(self.peak_open_contexts, self.open_contexts)
        return context

    def _context_closed(self, context: InMemoryContext) -> None:
        with self._lock:
            self.open_contexts -= 1

    def release(self) -> None:
        with self._lock:
            self.release_calls += 1
            self.released = True
            open_contexts = self.open_contexts
        if open_contexts:
            logger.warning("Releasing environment with %d open contexts", open_contexts)


class InMemoryEnvironmentProvider(EnvironmentProvider):
    """Provides in-memory environments driven by per-target scripts."""

    def __init__(self, scripts: Mapping[Any, ContextScript | dict[str, Any]] | None = None):
        """
        :param scripts: Behaviour per navigation target; dictionaries are converted to
            :class:`ContextScript`
        :type scripts: Mapping[Any, ContextScript | dict[str, Any]] | None
        """
        self.scripts = {
            target: script if isinstance(script, ContextScript) else msgspec.convert(script, type=ContextScript)
            for target, script in (scripts or {}).items()
        }
        self.environments: list[InMemoryEnvironment] = []

    def acquire(self) -> InMemoryEnvironment:
        environment = InMemoryEnvironment(self.scripts)
        self.environments.append(environment)
        return environment
