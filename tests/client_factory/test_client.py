"""
Tests for client facade.

This module tests the Client facade implementation.
"""

from unittest.mock import Mock

import pytest

from macroapi.application.port import Orchestrator
from macroapi.client import Client
from macroapi.domain.entity import RunResult, TaskDescriptor
from macroapi.domain.exception import PreconditionError
from macroapi.domain.value_object import RunOptions


class TestClient:
    """Test cases for Client facade."""

    def setup_method(self):
        """Setup test fixtures."""
        self.orchestrator = Mock(spec=Orchestrator)
        self.orchestrator.run.return_value = RunResult(id="run")
        self.options = RunOptions(chunk_size=2, throw_on_failure=False)
        self.client = Client(self.orchestrator, self.options)

    def test_default_options(self):
        """Test a client created without options uses the defaults."""
        client = Client(self.orchestrator)

        assert client.options == RunOptions()

    def test_run_uses_client_options(self):
        """Test running with the client's default options."""
        result = self.client.run(["a", {"id": "b"}])

        assert result.id == "run"
        self.orchestrator.run.assert_called_once_with(
            [TaskDescriptor(id="a"), TaskDescriptor(id="b")], self.options, None
        )

    def test_run_with_overrides(self):
        """Test per-run options and run id override the defaults."""
        override = RunOptions(chunk_size=1)

        self.client.run([TaskDescriptor(id="a")], options=override, run_id="nightly")

        self.orchestrator.run.assert_called_once_with([TaskDescriptor(id="a")], override, "nightly")

    def test_run_rejects_duplicates(self):
        """Test duplicate task ids fail before the orchestrator is reached."""
        with pytest.raises(PreconditionError):
            self.client.run(["a", "a"])

        self.orchestrator.run.assert_not_called()
