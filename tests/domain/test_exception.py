"""
Tests for the error taxonomy.
"""

import pytest

from macroapi.domain.exception import (
    EnvironmentAcquireError,
    EnvironmentReleaseError,
    MacroAPIError,
    OrchestrationEnvironmentError,
    PreconditionError,
    SignaledFailureError,
    TaskError,
    TaskHardError,
    TaskTimeoutError,
)
from macroapi.domain.value_object import RunOptions


class TestErrorTaxonomy:
    def test_hierarchy(self):
        assert issubclass(PreconditionError, ValueError)
        assert issubclass(PreconditionError, MacroAPIError)
        assert issubclass(EnvironmentAcquireError, OrchestrationEnvironmentError)
        assert issubclass(EnvironmentReleaseError, OrchestrationEnvironmentError)
        for cls in (TaskTimeoutError, SignaledFailureError, TaskHardError):
            assert issubclass(cls, TaskError)

    def test_base_error_fields(self):
        error = MacroAPIError("broken", code="x", params={"a": 1})

        assert str(error) == "broken"
        assert error.message == "broken"
        assert error.code == "x"
        assert error.params == {"a": 1}

    def test_precondition_error_fields(self):
        error = PreconditionError("x")

        assert error.message == "x"
        assert error.code is None
        assert error.params is None
        assert str(error) == "x"

    def test_precondition_error_from_options_carries_message(self):
        with pytest.raises(PreconditionError) as exc_info:
            RunOptions(chunk_size=0).validate()

        assert "chunk_size" in exc_info.value.message

    def test_precondition_error_with_code(self):
        error = PreconditionError("bad", code="duplicate_ids", params={"ids": ["a"]})

        assert error.code == "duplicate_ids"
        assert error.params == {"ids": ["a"]}

    def test_timeout_error(self):
        error = TaskTimeoutError("area-builder", 120.0)

        assert error.task_id == "area-builder"
        assert error.timeout == 120.0
        assert error.code == "timeout"
        assert "area-builder" in str(error)

    def test_signaled_failure_keeps_reason(self):
        reason = RuntimeError("page crashed")
        error = SignaledFailureError("a", reason)

        assert error.reason is reason
        assert "page crashed" in str(error)

    def test_hard_error_keeps_original(self):
        original = ConnectionError("browser gone")
        error = TaskHardError("a", original)

        assert error.error is original
        assert error.code == "hard"
