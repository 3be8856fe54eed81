from collections.abc import Callable

from macroapi.application.port import TargetResolver
from macroapi.client import Client
from macroapi.config import Settings
from macroapi.domain.port import EnvironmentProvider
from macroapi.infrastructure.adapter.threaded.executor_factory import ThreadedExecutorFactory
from macroapi.infrastructure.adapter.threaded.orchestrator import ChunkedOrchestrator
from macroapi.infrastructure.resolver import SimulationURLResolver, TaskIdResolver


def create(
    environment_provider: EnvironmentProvider,
    resolver: TargetResolver | None = None,
    settings: Settings | None = None,
    progress: Callable[[float, bool], None] | None = None,
    base_url: str | None = None,
) -> Client:
    """
    Factory function to create a Client that runs tasks in sequential chunks.

    :param environment_provider: Acquires the shared environment for each run
    :type environment_provider: EnvironmentProvider
    :param resolver: Maps descriptors to navigation targets; defaults to a
        SimulationURLResolver when ``base_url`` is given, else to the task id
    :type resolver: TargetResolver | None
    :param settings: Run settings; loaded from the environment when omitted
    :type settings: Settings | None
    :param progress: Progress sink used when progress reporting is on
    :type progress: Callable[[float, bool], None] | None
    :param base_url: Root URL of the resource server serving the units
    :type base_url: str | None
    :returns: A configured Client instance
    :rtype: Client
    """
    settings = settings if settings is not None else Settings.from_env()

    if resolver is None:
        if base_url is not None:
            resolver = SimulationURLResolver(base_url, from_built_version=settings.from_built_version)
        else:
            resolver = TaskIdResolver()

    orchestrator = ChunkedOrchestrator(
        environment_provider=environment_provider,
        executor_factory=ThreadedExecutorFactory(resolver),
        progress=progress,
    )
    return Client(orchestrator, settings.to_run_options())
