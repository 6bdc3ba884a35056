"""Mutable state shared by a cancellation token and its observers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    """Cancellation flag plus where and why it was raised.

    ``observed_stage`` is the first pipeline stage that checked the token
    after cancellation; it stays ``None`` until then.
    """

    cancelled: bool = False
    reason: Optional[str] = None
    observed_stage: Optional[str] = None


__all__ = ["State"]
