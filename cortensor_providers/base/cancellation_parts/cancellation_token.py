"""Cooperative cancellation for adapter calls.

An adapter call issues up to three outbound requests in sequence. The caller
holds a ``CancellationToken``; the pipeline calls :meth:`checkpoint` with the
name of the step it is about to start, so a cancelled call never begins a
new request. The service layer can derive a child token per request from a
process-wide one and cancel everything at shutdown.
"""

from __future__ import annotations

from threading import Lock
from typing import List, Optional

from .cancelled_error import CancelledError
from .state import State


class CancellationToken:
    """Thread-safe cancellation flag with parent-to-child cascade."""

    def __init__(self, *, parent: Optional["CancellationToken"] = None) -> None:
        self._state = State()
        self._lock = Lock()
        self._children: List[CancellationToken] = []
        if parent is not None:
            parent._adopt(self)

    @property
    def cancelled(self) -> bool:
        return self._state.cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._state.reason

    @property
    def observed_stage(self) -> Optional[str]:
        """First checkpoint that saw this token cancelled."""
        return self._state.observed_stage

    def cancel(self, reason: Optional[str] = None) -> None:
        """Mark the token cancelled; the first reason wins. Children follow."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            children = list(self._children)
        for token in children:
            token.cancel(reason)

    def child(self) -> "CancellationToken":
        """Return a new token that is cancelled whenever this one is."""
        return CancellationToken(parent=self)

    def _adopt(self, token: "CancellationToken") -> None:
        with self._lock:
            self._children.append(token)
            cancelled, reason = self._state.cancelled, self._state.reason
        if cancelled:
            token.cancel(reason)

    def checkpoint(self, stage: Optional[str] = None) -> None:
        """Raise ``CancelledError`` if cancelled, recording ``stage``.

        Call immediately before starting the named step.
        """
        if not self._state.cancelled:
            return
        with self._lock:
            if self._state.observed_stage is None:
                self._state.observed_stage = stage
        raise CancelledError(self._state.reason or "operation cancelled", stage)

    def __repr__(self) -> str:  # pragma: no cover
        return f"CancellationToken(cancelled={self._state.cancelled}, reason={self._state.reason!r})"


__all__ = ["CancellationToken"]
