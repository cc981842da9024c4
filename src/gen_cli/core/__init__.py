"""Core exception modules."""

from gen_cli.core.exceptions import (
    APIError,
    ConfigurationError,
    EmptyResultError,
    ExternalServiceError,
    GenCLIError,
    ImageReadError,
    OutputWriteError,
    TransportError,
    UnknownModelError,
    UnsupportedEditError,
)

__all__ = [
    "APIError",
    "ConfigurationError",
    "EmptyResultError",
    "ExternalServiceError",
    "GenCLIError",
    "ImageReadError",
    "OutputWriteError",
    "TransportError",
    "UnknownModelError",
    "UnsupportedEditError",
]
