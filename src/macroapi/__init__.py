"""
macroapi - Bounded-concurrency API extraction

Runs many independent, crash-prone execution units (one per simulation) in
sequential chunks against one shared environment, closing each unit exactly
once and aggregating their payloads into a single result map.
"""

from macroapi.client import Client
from macroapi.config import Settings
from macroapi.domain.entity import RunResult, TaskDescriptor
from macroapi.domain.exception import (
    EnvironmentAcquireError,
    EnvironmentReleaseError,
    MacroAPIError,
    PreconditionError,
    SignaledFailureError,
    TaskHardError,
    TaskTimeoutError,
)
from macroapi.domain.port import Environment, EnvironmentProvider, ExecutionContext
from macroapi.domain.value_object import RunOptions, RunStatus
from macroapi.factory import create

__version__ = "1.0.0.dev0"

__all__ = [
    "Client",
    "create",
    "Settings",
    "RunOptions",
    "RunStatus",
    "RunResult",
    "TaskDescriptor",
    "Environment",
    "EnvironmentProvider",
    "ExecutionContext",
    "MacroAPIError",
    "PreconditionError",
    "EnvironmentAcquireError",
    "EnvironmentReleaseError",
    "TaskTimeoutError",
    "SignaledFailureError",
    "TaskHardError",
]
