from typing import Any

from macroapi.application.port import TargetResolver
from macroapi.domain.entity import TaskDescriptor

# API comparison loads units with this exact query; keep in sync with consumers of the generated API.
DEFAULT_QUERY: tuple[tuple[str, str | None], ...] = (
    ("ea", None),
    ("brand", "phet-io"),
    ("phetioStandalone", None),
    ("phetioPrintAPI", None),
    ("randomSeed", "332211"),
    ("locales", "*"),
    ("webgl", "false"),
)


class TaskIdResolver(TargetResolver):
    """Uses the task id itself as the target."""

    def resolve(self, descriptor: TaskDescriptor) -> Any:
        return descriptor.id


class SimulationURLResolver(TargetResolver):
    """Builds the URL of a simulation's entry point on a local resource server."""

    def __init__(
        self,
        base_url: str,
        from_built_version: bool = False,
        query: tuple[tuple[str, str | None], ...] = DEFAULT_QUERY,
    ):
        """
        :param base_url: Root URL of the resource server, e.g. ``http://localhost:8080``
        :type base_url: str
        :param from_built_version: Load the built artifact instead of the unbuilt entry point
        :type from_built_version: bool
        :param query: Query parameters; a ``None`` value renders a bare flag
        :type query: tuple[tuple[str, str | None], ...]
        """
        self.base_url = base_url.rstrip("/")
        self.from_built_version = from_built_version
        self.query = query

    def resolve(self, descriptor: TaskDescriptor) -> str:
        """
        Resolve the entry-point URL for a descriptor.

        A ``path`` in the descriptor payload overrides the default relative path.

        :param descriptor: The task descriptor; its id names the simulation repository
        :type descriptor: TaskDescriptor
        :returns: The absolute URL
        :rtype: str
        """
        repo = descriptor.id
        relative_path = descriptor.payload.get("path") or self._relative_path(repo)
        return f"{self.base_url}/{repo}/{relative_path}?{self._query_string()}"

    def _relative_path(self, repo: str) -> str:
        if self.from_built_version:
            return f"build/phet-io/{repo}_all_phet-io.html"
        return f"{repo}_en.html"

    def _query_string(self) -> str:
        return "&".join(key if value is None else f"{key}={value}" for key, value in self.query)
