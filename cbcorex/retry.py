"""Retrying operations under a deadline."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Callable, TypeVar

RespT = TypeVar("RespT")


class DeadlineExceededError(TimeoutError):
    """Raised when an operation's deadline passes."""

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)


class RetryDeadlineError(DeadlineExceededError):
    """A deadline was reached while retrying; carries the last real error."""

    def __init__(
        self, cause: BaseException, last_error: BaseException | None
    ) -> None:
        message = str(cause) or "deadline exceeded"
        if last_error is not None:
            message = f"{message} (last error: {last_error})"
        super().__init__(message)
        self.cause = cause
        self.last_error = last_error


class RetryController(ABC):
    """Decides, for one operation, whether and when to try again."""

    @abstractmethod
    def should_retry(self, error: BaseException) -> tuple[float, bool]:
        """Return the delay in seconds before the next attempt and whether to retry."""


class RetryManager(ABC):
    """Hands out a retry controller for each operation."""

    @abstractmethod
    def new_retry_controller(self) -> RetryController:
        """Create a controller for a new operation."""


class _FastFailController(RetryController):
    """Refuses every retry, remembering the error it refused."""

    def __init__(self) -> None:
        self.last_error: BaseException | None = None

    def should_retry(self, error: BaseException) -> tuple[float, bool]:
        self.last_error = error
        return 0.0, False


class RetryManagerFastFail(RetryManager):
    """A retry manager that never retries."""

    def new_retry_controller(self) -> RetryController:
        return _FastFailController()


def orchestrate_retries(
    manager: RetryManager,
    fn: Callable[[], RespT],
    deadline: float | None = None,
) -> RespT:
    """Call ``fn`` until it succeeds or its error is not to be retried.

    ``deadline`` is a point on the ``time.monotonic`` clock, or None for no
    deadline.  If ``fn`` raises DeadlineExceededError, or the deadline falls
    during a wait between attempts, RetryDeadlineError is raised carrying the
    last error that had been retried.
    """
    controller: RetryController | None = None
    last_error: BaseException | None = None

    while True:
        try:
            return fn()
        except DeadlineExceededError as exc:
            raise RetryDeadlineError(exc, last_error) from exc
        except Exception as exc:
            if controller is None:
                controller = manager.new_retry_controller()

            delay, retry = controller.should_retry(exc)
            if not retry:
                raise

            delay = max(0.0, delay)
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining < delay:
                    if remaining > 0:
                        time.sleep(remaining)
                    raise RetryDeadlineError(DeadlineExceededError(), exc) from exc
            if delay:
                time.sleep(delay)

            last_error = exc