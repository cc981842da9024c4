"""Exception hierarchy for gen-cli.

Every failure an invocation can hit is represented here. All of them are
fatal for the invocation: the CLI prints the message to stderr and exits
with status 1. There is no retry path.

Exception Hierarchy:
    GenCLIError (base for all gen-cli exceptions)
    ├── ConfigurationError (missing FAL_KEY or invalid settings)
    ├── UnknownModelError (model name not in the registry)
    ├── UnsupportedEditError (model has no edit endpoint)
    ├── ImageReadError (edit-mode input image unreadable)
    ├── ExternalServiceError (remote API failures)
    │   ├── TransportError (network failure, timeout, unparseable body)
    │   ├── APIError (non-2xx response)
    │   └── EmptyResultError (2xx response with zero images)
    └── OutputWriteError (saving the result locally failed)

Usage:
    from gen_cli.core.exceptions import GenCLIError

    try:
        run(config)
    except GenCLIError as e:
        print(f"Error: {e}", file=sys.stderr)
"""

from __future__ import annotations

from typing import Any


class GenCLIError(Exception):
    """Base exception for all gen-cli errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context about the error (optional).
        error_code: Machine-readable error code (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Additional context as key-value pairs.
            error_code: Machine-readable error code.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a JSON-serializable dictionary.

        Returns:
            Dictionary with the error class, message, code and details.
        """
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.error_code:
            result["code"] = self.error_code
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(GenCLIError):
    """Configuration-related errors.

    Raised when FAL_KEY cannot be found in the environment or either
    .env file, or when a setting fails validation.

    Example:
        >>> raise ConfigurationError(
        ...     "FAL_KEY not found",
        ...     details={"hint": "Set FAL_KEY environment variable"},
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message, details=details, error_code=error_code or "CONFIGURATION_ERROR"
        )


class UnknownModelError(GenCLIError):
    """Requested model is not in the registry (after alias resolution)."""

    def __init__(
        self,
        model: str,
        *,
        available: list[str] | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize unknown model error.

        Args:
            model: The model name as the user typed it.
            available: Known model names, for the error details.
            details: Additional context.
            error_code: Machine-readable error code.
        """
        details = details or {}
        details["model"] = model
        if available:
            details["available"] = available
        message = (
            f"unknown model '{model}'. Use 'gen models' to see available options."
        )
        super().__init__(
            message, details=details, error_code=error_code or "UNKNOWN_MODEL"
        )
        self.model = model


class UnsupportedEditError(GenCLIError):
    """Input images were given for a model without an edit endpoint."""

    def __init__(
        self,
        model: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        details["model"] = model
        super().__init__(
            f"model '{model}' does not support editing.",
            details=details,
            error_code=error_code or "EDIT_UNSUPPORTED",
        )
        self.model = model


class ImageReadError(GenCLIError):
    """An edit-mode input image could not be read.

    Attributes:
        index: 1-based position of the image on the command line.
        path: The offending path.
    """

    def __init__(
        self,
        index: int,
        path: str,
        reason: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize image read error.

        Args:
            index: 1-based position of the image.
            path: Path of the image that failed to load.
            reason: Underlying OS error text.
            details: Additional context.
            error_code: Machine-readable error code.
        """
        details = details or {}
        details["index"] = index
        details["path"] = path
        super().__init__(
            f"reading image {index} ({path}): {reason}",
            details=details,
            error_code=error_code or "IMAGE_READ_ERROR",
        )
        self.index = index
        self.path = path


class ExternalServiceError(GenCLIError):
    """Base class for failures talking to the remote image API.

    Example:
        >>> raise ExternalServiceError(
        ...     "Service unavailable",
        ...     service_name="fal",
        ...     status_code=503,
        ... )
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize external service error.

        Args:
            message: Description of the service error.
            service_name: Name of the external service.
            status_code: HTTP status code if applicable.
            details: Additional context.
            error_code: Machine-readable error code.
        """
        details = details or {}
        if service_name:
            details["service_name"] = service_name
        if status_code:
            details["status_code"] = status_code
        super().__init__(
            message, details=details, error_code=error_code or "EXTERNAL_SERVICE_ERROR"
        )
        self.status_code = status_code


class TransportError(ExternalServiceError):
    """Network failure, timeout, or an unreadable response body."""

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message,
            service_name=service_name,
            details=details,
            error_code=error_code or "TRANSPORT_ERROR",
        )


class APIError(ExternalServiceError):
    """Non-success HTTP response from the image API.

    The message is whatever could be extracted from the error body
    (validation list, flat detail, or the raw text).

    Example:
        >>> str(APIError("bad prompt", status_code=422))
        'API error (422): bad prompt'
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message,
            service_name=service_name,
            status_code=status_code,
            details=details,
            error_code=error_code or "API_ERROR",
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"API error ({self.status_code}): {self.message}"


class EmptyResultError(ExternalServiceError):
    """The API call succeeded but returned no images."""

    def __init__(
        self,
        message: str = "No images returned",
        *,
        service_name: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(
            message,
            service_name=service_name,
            details=details,
            error_code=error_code or "EMPTY_RESULT",
        )


class OutputWriteError(GenCLIError):
    """Saving the generated image to local storage failed."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        if path:
            details["path"] = path
        super().__init__(
            message, details=details, error_code=error_code or "OUTPUT_WRITE_ERROR"
        )
        self.path = path


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
