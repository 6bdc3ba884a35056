"""Small shared helpers for the adapter base layer."""

from .messages import extract_message_text, split_system
from .validation import summarize_validation_error

__all__ = ["extract_message_text", "split_system", "summarize_validation_error"]
