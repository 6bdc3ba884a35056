"""Error raised when an adapter call observes a cancelled token."""

from __future__ import annotations

from typing import Optional


class CancelledError(RuntimeError):
    """Raised at a pipeline checkpoint once the caller has abandoned the call.

    Attributes:
        reason: Text supplied to ``CancellationToken.cancel``.
        stage: Checkpoint that observed the cancellation (``"web search"``,
            ``"backend request"``...), or ``None`` outside a named stage.
    """

    def __init__(self, reason: str = "operation cancelled", stage: Optional[str] = None) -> None:
        self.reason = reason
        self.stage = stage
        super().__init__(f"{reason} (before {stage})" if stage else reason)


__all__ = ["CancelledError"]
