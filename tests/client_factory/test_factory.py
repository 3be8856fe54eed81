"""
Tests for factory functions.

This module tests the create factory function.
"""

from unittest.mock import Mock

import pytest

from macroapi.application.port import TargetResolver
from macroapi.client import Client
from macroapi.config import Settings
from macroapi.domain.port import EnvironmentProvider
from macroapi.factory import create
from macroapi.infrastructure.adapter.threaded.executor_factory import ThreadedExecutorFactory
from macroapi.infrastructure.adapter.threaded.orchestrator import ChunkedOrchestrator
from macroapi.infrastructure.progress import CommandLineProgress
from macroapi.infrastructure.resolver import SimulationURLResolver, TaskIdResolver


class TestCreate:
    """Test cases for create factory function."""

    def setup_method(self):
        self.provider = Mock(spec=EnvironmentProvider)

    def test_create_with_settings(self):
        """Test settings become the client's default run options."""
        settings = Settings(chunk_size=6, task_timeout=10.0, throw_on_failure=False)

        client = create(self.provider, settings=settings)

        assert isinstance(client, Client)
        assert client.options == settings.to_run_options()
        orchestrator = client._orchestrator
        assert isinstance(orchestrator, ChunkedOrchestrator)
        assert orchestrator.environment_provider is self.provider
        assert isinstance(orchestrator.executor_factory, ThreadedExecutorFactory)
        assert isinstance(orchestrator.progress, CommandLineProgress)

    def test_create_defaults_to_task_id_resolver(self):
        """Test the task id is the target when no base URL is given."""
        client = create(self.provider, settings=Settings())

        assert isinstance(client._orchestrator.executor_factory.resolver, TaskIdResolver)

    def test_create_with_base_url(self):
        """Test a base URL selects the simulation URL resolver."""
        client = create(self.provider, settings=Settings(from_built_version=True), base_url="http://localhost")

        resolver = client._orchestrator.executor_factory.resolver
        assert isinstance(resolver, SimulationURLResolver)
        assert resolver.base_url == "http://localhost"
        assert resolver.from_built_version is True

    def test_create_with_explicit_resolver_and_progress(self):
        """Test an explicit resolver wins over the base URL."""
        resolver = Mock(spec=TargetResolver)
        progress = Mock()

        client = create(self.provider, resolver=resolver, settings=Settings(), progress=progress, base_url="http://x")

        assert client._orchestrator.executor_factory.resolver is resolver
        assert client._orchestrator.progress is progress

    def test_create_reads_environment(self, monkeypatch):
        """Test settings are loaded from the environment when omitted."""
        monkeypatch.setenv("MACROAPI_CHUNK_SIZE", "3")
        monkeypatch.delenv("MACROAPI_TASK_TIMEOUT", raising=False)

        client = create(self.provider)

        assert client.options.chunk_size == 3

    def test_create_with_invalid_environment(self, monkeypatch):
        monkeypatch.setenv("MACROAPI_CHUNK_SIZE", "many")

        with pytest.raises(ValueError):
            create(self.provider)
