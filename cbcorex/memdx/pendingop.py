"""Handles for operations that are in flight and can be cancelled."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod


class PendingOp(ABC):
    """An operation awaiting its response."""

    @abstractmethod
    def cancel(self, error: BaseException) -> None:
        """Cancel the operation, failing it with ``error``."""


class MultiPendingOp(PendingOp):
    """A group of pending operations cancelled together.

    Once cancelled, any operation added afterwards is cancelled at once
    with the same error.
    """

    def __init__(self) -> None:
        self._ops: list[PendingOp] = []
        self._lock = threading.Lock()
        self._cancel_error: BaseException | None = None

    def cancel(self, error: BaseException) -> None:
        if error is None:
            raise ValueError("must specify a cancellation error")

        with self._lock:
            self._cancel_error = error
            ops = list(self._ops)

        for op in ops:
            op.cancel(error)

    def add(self, op: PendingOp) -> None:
        """Add an operation to the group."""
        with self._lock:
            cancel_error = self._cancel_error
            if cancel_error is None:
                self._ops.append(op)
                return

        op.cancel(cancel_error)


class NoopPendingOp(PendingOp):
    """A pending operation for which cancelling does nothing."""

    def cancel(self, error: BaseException) -> None:
        return None