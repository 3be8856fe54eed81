"""
Tests for domain value objects.

This module tests RunOptions, RunStatus and OutcomeKind.
"""

import pytest

from macroapi.domain.exception import PreconditionError
from macroapi.domain.value_object import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TASK_TIMEOUT,
    OutcomeKind,
    RunOptions,
    RunStatus,
)


class TestRunOptions:
    """Test cases for RunOptions."""

    def test_defaults(self):
        options = RunOptions()

        assert options.chunk_size == DEFAULT_CHUNK_SIZE == 4
        assert options.throw_on_failure is True
        assert options.report_progress is False
        assert options.task_timeout == DEFAULT_TASK_TIMEOUT == 120.0
        assert options.show_messages is True

    def test_valid_options_pass(self):
        RunOptions(chunk_size=1, task_timeout=0.01).validate()

    @pytest.mark.parametrize("chunk_size", [0, -1, 1.5, True, "2"])
    def test_invalid_chunk_size(self, chunk_size):
        with pytest.raises(PreconditionError, match="chunk_size"):
            RunOptions(chunk_size=chunk_size).validate()

    @pytest.mark.parametrize("timeout", [0, -5, None, float("inf"), float("-inf"), float("nan")])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(PreconditionError, match="task_timeout"):
            RunOptions(task_timeout=timeout).validate()


class TestEnums:
    def test_run_status_values(self):
        assert RunStatus.SUCCESS.value == "success"
        assert RunStatus.PARTIAL_FAILURE.value == "partial_failure"

    def test_outcome_kind_matches_outcome_tags(self):
        assert [kind.value for kind in OutcomeKind] == ["success", "failure", "hard_exception"]
