"""Runtime configuration for API extraction runs."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from macroapi.domain.exception import PreconditionError
from macroapi.domain.value_object import DEFAULT_CHUNK_SIZE, DEFAULT_TASK_TIMEOUT, RunOptions

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}


@dataclass(slots=True)
class Settings:
    """Extraction settings, loadable from ``MACROAPI_*`` environment variables."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    task_timeout: float = DEFAULT_TASK_TIMEOUT
    throw_on_failure: bool = True
    report_progress: bool = False
    show_messages: bool = True
    from_built_version: bool = False

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment with the defaults of the extraction tool."""

        return cls(
            chunk_size=_env_int("MACROAPI_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
            task_timeout=_env_float("MACROAPI_TASK_TIMEOUT", DEFAULT_TASK_TIMEOUT),
            throw_on_failure=_env_bool("MACROAPI_THROW_ON_FAILURE", True),
            report_progress=_env_bool("MACROAPI_REPORT_PROGRESS", False),
            show_messages=_env_bool("MACROAPI_SHOW_MESSAGES", True),
            from_built_version=_env_bool("MACROAPI_FROM_BUILT_VERSION", False),
        )

    def to_run_options(self) -> RunOptions:
        return RunOptions(
            chunk_size=self.chunk_size,
            throw_on_failure=self.throw_on_failure,
            report_progress=self.report_progress,
            task_timeout=self.task_timeout,
            show_messages=self.show_messages,
        )


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise PreconditionError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise PreconditionError(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise PreconditionError(f"{name} must be a finite number, got {raw!r}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise PreconditionError(f"{name} must be a boolean, got {raw!r}")
