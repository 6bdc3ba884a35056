"""Adapter controller: the single request/response entry point."""

from .controller import CortensorAdapter, create_cortensor_adapter, error_response

__all__ = ["CortensorAdapter", "create_cortensor_adapter", "error_response"]
