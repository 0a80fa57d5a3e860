"""Tests for cancellation tokens and call deadlines."""

import threading
import time

import pytest

from agent_coordinator.cancellation import CancellationToken, call_with_timeout
from agent_coordinator.exceptions import CoordinationCancelled, StepTimeoutError


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_initial_state(self):
        """Test a new token is not cancelled."""
        token = CancellationToken()
        assert not token.is_cancelled
        token.raise_if_cancelled()

    def test_cancel(self):
        """Test cancel flips the flag and raise_if_cancelled raises."""
        token = CancellationToken()
        token.cancel()
        assert token.is_cancelled
        with pytest.raises(CoordinationCancelled):
            token.raise_if_cancelled()

    def test_cancel_from_other_thread(self):
        """Test a token cancelled on another thread is seen by the caller."""
        token = CancellationToken()
        worker = threading.Thread(target=token.cancel)
        worker.start()
        worker.join()
        assert token.is_cancelled


class TestCallWithTimeout:
    """Tests for call_with_timeout."""

    def test_no_timeout_runs_inline(self):
        """Test a call without deadline runs on the caller's thread."""
        caller = threading.current_thread()
        assert call_with_timeout(lambda: threading.current_thread(), None) is caller

    def test_returns_result(self):
        """Test a fast call returns its value."""
        assert call_with_timeout(lambda: 42, 1.0) == 42

    def test_timeout(self):
        """Test a slow call raises StepTimeoutError naming the operation."""
        with pytest.raises(StepTimeoutError, match="slow step"):
            call_with_timeout(lambda: time.sleep(0.5), 0.05, operation="slow step")

    def test_propagates_errors(self):
        """Test exceptions from the call are raised unchanged."""
        def boom():
            raise KeyError("missing")

        with pytest.raises(KeyError):
            call_with_timeout(boom, 1.0)
