"""Model-identifier configuration codec.

Purpose
-------
The standard chat-completion request offers a single free-text ``model``
field. This codec turns that field into a full configuration carrier:

    <base model name>-config-<base64(JSON of explicitly set fields)>

Only fields the caller set are serialized, so decoding can tell "caller
chose the default" from "caller said nothing"; omitted fields take the values
in ``DEFAULT_MODEL_CONFIG``. Everything downstream of the codec works with a
structured ``ModelConfig`` and never parses strings.

Search capabilities cannot be serialized; the token carries the capability's
name in a ``SearchProviderRegistry`` instead.

Failure modes
-------------
All decode failures raise ``ConfigExtractionError`` (HTTP 400,
``CONFIGURATION_ERROR``).
"""

from __future__ import annotations

import base64
import json
import re
from collections.abc import Mapping
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from ..base.dto.model_config import ModelConfig
from ..base.errors import ConfigExtractionError, ConfigurationError
from ..base.utils.validation import summarize_validation_error
from ..config.defaults import CONFIG_MARKER, DEFAULT_MODEL_CONFIG
from ..search.registry import SearchProviderRegistry, UnknownSearchProviderError, get_search_registry

CONFIG_PATTERN = re.compile(r"-config-([A-Za-z0-9+/=]+)$")

_MISSING_SUFFIX = (
    'Configuration not found in model name. Model name should end with "-config-{base64EncodedConfig}"'
)


class ConfigCodec:
    """Serialize/deserialize ``ModelConfig`` to and from a model identifier.

    Parameters
    ----------
    registry:
        Registry used to name search capabilities; defaults to the process
        registry so encode and decode in one process agree.
    """

    def __init__(self, registry: Optional[SearchProviderRegistry] = None) -> None:
        self.registry = registry or get_search_registry()

    def to_wire(self, config: ModelConfig) -> Dict[str, Any]:
        """Return the camelCase mapping of explicitly set fields."""
        wire = config.model_dump(by_alias=True, exclude_unset=True, exclude={"web_search"}, mode="json")
        ws = config.web_search
        if ws is not None and "web_search" in config.model_fields_set:
            ws_wire = ws.model_dump(by_alias=True, exclude_unset=True, exclude={"provider"}, mode="json")
            if ws.provider is not None:
                ws_wire["provider"] = self.registry.ensure_registered(ws.provider)
            wire["webSearch"] = ws_wire
        return wire

    def encode(self, config: ModelConfig, base_model_name: Optional[str] = None) -> str:
        """Return ``<base>-config-<token>`` for ``config``.

        ``base_model_name`` defaults to ``config.model_name``. A capability
        object in ``web_search.provider`` is registered by identity and stays
        registered until removed with ``SearchProviderRegistry.unregister``.
        """
        base = base_model_name or config.model_name or DEFAULT_MODEL_CONFIG["modelName"]
        compact = json.dumps(self.to_wire(config), separators=(",", ":"), ensure_ascii=False)
        token = base64.b64encode(compact.encode("utf-8")).decode("ascii")
        return f"{base}{CONFIG_MARKER}{token}"

    def _resolve_provider(self, data: Dict[str, Any]) -> Dict[str, Any]:
        ws = data.get("webSearch")
        if not isinstance(ws, Mapping) or not isinstance(ws.get("provider"), str):
            return data
        try:
            provider = self.registry.resolve(ws["provider"])
        except UnknownSearchProviderError as e:
            raise ConfigExtractionError(f"Failed to extract model configuration: {e}", raw=e) from e
        return {**data, "webSearch": {**ws, "provider": provider}}

    def decode(self, model_identifier: str) -> ModelConfig:
        """Parse the configuration suffix of ``model_identifier``.

        Raises
        ------
        ConfigExtractionError
            If the suffix is absent, the token is not base64-encoded JSON
            object data, ``sessionId`` is missing, a field is invalid, or the
            named search provider is unknown.
        """
        if not isinstance(model_identifier, str):
            raise ConfigExtractionError(
                f"Failed to extract model configuration: model must be a string, got {type(model_identifier).__name__}"
            )
        match = CONFIG_PATTERN.search(model_identifier)
        if not match:
            raise ConfigExtractionError(_MISSING_SUFFIX)
        try:
            raw = base64.b64decode(match.group(1), validate=True)
            data = json.loads(raw.decode("utf-8"))
        except ValueError as e:
            raise ConfigExtractionError(f"Failed to extract model configuration: {e}", raw=e) from e
        if not isinstance(data, dict):
            raise ConfigExtractionError("Failed to extract model configuration: token must encode a JSON object")
        if not data.get("sessionId") and not data.get("session_id"):
            raise ConfigExtractionError(
                "Failed to extract model configuration: Session ID not found in model configuration"
            )
        data = self._resolve_provider(data)
        try:
            return ModelConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigExtractionError(
                f"Failed to extract model configuration: {summarize_validation_error(e)}", raw=e
            ) from e

    def extract_model_configuration(self, raw_body: Union[str, bytes, Mapping[str, Any]]) -> ModelConfig:
        """Parse a standard request body and decode its ``model`` field."""
        body: Any = raw_body
        if isinstance(raw_body, (str, bytes, bytearray)):
            try:
                body = json.loads(raw_body)
            except ValueError as e:
                raise ConfigExtractionError(f"Failed to extract model configuration: invalid JSON body: {e}", raw=e) from e
        if not isinstance(body, Mapping):
            raise ConfigExtractionError("Failed to extract model configuration: request body must be a JSON object")
        return self.decode(body.get("model"))

    def cortensor_model(self, session_id: int, base_model_name: Optional[str] = None, **overrides: Any) -> str:
        """Build an encoded model identifier from a session id and overrides.

        Overrides accept snake_case attribute names or camelCase wire names.

        Raises
        ------
        ConfigurationError
            If ``session_id`` is not a positive integer or an override is
            invalid.
        """
        if isinstance(session_id, bool) or not isinstance(session_id, int) or session_id <= 0:
            raise ConfigurationError(f"session_id must be a positive integer, got {session_id!r}")
        try:
            config = ModelConfig(session_id=session_id, **overrides)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid model configuration: {summarize_validation_error(e)}", raw=e) from e
        return self.encode(config, base_model_name)


_DEFAULT_CODEC = ConfigCodec()


def encode(config: ModelConfig, base_model_name: Optional[str] = None) -> str:
    return _DEFAULT_CODEC.encode(config, base_model_name)


def decode(model_identifier: str) -> ModelConfig:
    return _DEFAULT_CODEC.decode(model_identifier)


def extract_model_configuration(raw_body: Union[str, bytes, Mapping[str, Any]]) -> ModelConfig:
    return _DEFAULT_CODEC.extract_model_configuration(raw_body)


def cortensor_model(session_id: int, base_model_name: Optional[str] = None, **overrides: Any) -> str:
    return _DEFAULT_CODEC.cortensor_model(session_id, base_model_name, **overrides)


__all__ = [
    "CONFIG_PATTERN",
    "ConfigCodec",
    "encode",
    "decode",
    "extract_model_configuration",
    "cortensor_model",
]
