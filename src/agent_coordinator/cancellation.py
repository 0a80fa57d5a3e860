"""Cancellation and deadlines for blocking agent and oracle calls."""

import concurrent.futures
import contextvars
import threading
from typing import Callable, TypeVar

from .exceptions import CoordinationCancelled, StepTimeoutError

T = TypeVar("T")


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a coordination run.

    The coordinator checks the token before each phase and between workflow
    steps; a call that is already running is allowed to finish.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CoordinationCancelled if cancellation was requested."""
        if self._event.is_set():
            raise CoordinationCancelled()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"


def call_with_timeout(
    func: Callable[[], T],
    timeout: float | None,
    operation: str = "call",
) -> T:
    """Run ``func`` and return its result, failing once ``timeout`` seconds pass.

    With no timeout the call runs inline on the caller's thread. Otherwise it
    runs on a single-use worker thread; when the deadline passes the worker is
    abandoned (Python threads cannot be killed) and StepTimeoutError is raised.
    Exceptions raised by ``func`` propagate unchanged.

    Args:
        func: Zero-argument callable to invoke.
        timeout: Deadline in seconds, or None for no deadline.
        operation: Name used in the timeout error message.
    """
    if timeout is None:
        return func()

    executor = concurrent.futures.ThreadPoolExecutor(
        max_workers=1, thread_name_prefix="agent-coordinator"
    )
    # carry context variables (the logging run id) into the worker
    future = executor.submit(contextvars.copy_context().run, func)
    try:
        return future.result(timeout=timeout)
    except concurrent.futures.TimeoutError as e:
        future.cancel()
        raise StepTimeoutError(operation, timeout) from e
    finally:
        executor.shutdown(wait=False)
