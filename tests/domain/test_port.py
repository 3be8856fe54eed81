"""
Tests for domain ports.

This module tests the ExecutionContext, Environment and EnvironmentProvider
abstractions including:
- Abstract method enforcement
- The optional message hook
"""

import pytest

from macroapi.domain.port import Environment, EnvironmentProvider, ExecutionContext


class MinimalContext(ExecutionContext):
    def on_success(self, callback):
        self.success = callback

    def on_error(self, callback):
        self.error = callback

    def navigate(self, target):
        self.target = target

    def close(self):
        self.closed = True


class TestExecutionContext:
    """Test cases for ExecutionContext."""

    def test_cannot_instantiate_abstract_context(self):
        with pytest.raises(TypeError):
            ExecutionContext()

    def test_incomplete_context_cannot_be_instantiated(self):
        class NoClose(ExecutionContext):
            def on_success(self, callback):
                pass

            def on_error(self, callback):
                pass

            def navigate(self, target):
                pass

        with pytest.raises(TypeError):
            NoClose()

    def test_on_message_is_optional(self):
        """A context may ignore message registration."""
        context = MinimalContext()

        assert context.on_message(lambda message: None) is None


class TestEnvironmentPorts:
    """Test cases for Environment and EnvironmentProvider."""

    def test_environment_requires_all_methods(self):
        class StartOnly(Environment):
            def start_context(self):
                return MinimalContext()

        with pytest.raises(TypeError):
            StartOnly()

    def test_provider_implementation(self):
        class Provider(EnvironmentProvider):
            def acquire(self):
                return "environment"

        assert Provider().acquire() == "environment"

        with pytest.raises(TypeError):
            EnvironmentProvider()
