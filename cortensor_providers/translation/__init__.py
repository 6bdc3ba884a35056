"""Backend response translation and citation rendering."""

from .citations import format_citations
from .response_translator import (
    APOLOGY_MESSAGE,
    apology_response,
    translate_response,
    translate_transport_response,
)

__all__ = [
    "format_citations",
    "APOLOGY_MESSAGE",
    "apology_response",
    "translate_response",
    "translate_transport_response",
]
