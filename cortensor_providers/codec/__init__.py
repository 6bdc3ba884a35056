"""Configuration-in-model-identifier codec."""

from .config_codec import (
    CONFIG_PATTERN,
    ConfigCodec,
    cortensor_model,
    decode,
    encode,
    extract_model_configuration,
)

__all__ = [
    "CONFIG_PATTERN",
    "ConfigCodec",
    "encode",
    "decode",
    "extract_model_configuration",
    "cortensor_model",
]
