"""fal API client for synchronous image generation requests.

One POST per invocation, no retries. Errors are translated into the
gen-cli exception hierarchy.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import BaseModel, ValidationError

from gen_cli.core.exceptions import APIError, EmptyResultError, TransportError
from gen_cli.progress import Spinner
from gen_cli.settings import GenSettings, get_settings

if TYPE_CHECKING:
    from gen_cli.request import GenerationRequest

logger = logging.getLogger(__name__)

SERVICE_NAME = "fal"


class OutputImage(BaseModel):
    """A generated image hosted by fal."""

    url: str
    width: int = 0
    height: int = 0
    content_type: str = ""


class GenerationResult(BaseModel):
    """Successful response body.

    Attributes:
        images: Generated images, in API order.
        seed: Seed the API actually used.
    """

    images: list[OutputImage]
    seed: int = 0


def parse_error_message(body: str) -> str:
    """Extract a human-readable message from an error response body.

    Tries, in order: a validation list ``{"detail": [{"msg": ...}]}``,
    a flat ``{"detail": "..."}``, then the raw body text.

    Args:
        body: Raw response text.

    Returns:
        The extracted message.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return body

    detail = data.get("detail") if isinstance(data, dict) else None
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and isinstance(first.get("msg"), str):
            return first["msg"]
    if isinstance(detail, str) and detail:
        return detail
    return body


class FalClient:
    """Client for fal model endpoints.

    Example:
        ```python
        client = FalClient()
        result = client.generate("fal-ai/z-image/turbo", request)
        print(result.images[0].url)
        ```
    """

    def __init__(
        self,
        settings: GenSettings | None = None,
        *,
        show_progress: bool = True,
    ) -> None:
        """Initialize the fal client.

        Args:
            settings: Optional settings. If not provided, reads from environment.
            show_progress: Animate a spinner while the request is in flight.

        Raises:
            ConfigurationError: If FAL_KEY is missing.
        """
        self.settings = settings or get_settings()
        self.base_url = self.settings.fal_base_url.rstrip("/")
        self.show_progress = show_progress

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Key {self.settings.get_key_value()}",
            "Content-Type": "application/json",
        }

    def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        """Send the request, animating the spinner while it is in flight.

        Raises:
            TransportError: On connection failure or timeout.
        """
        spinner = Spinner(enabled=self.show_progress)
        try:
            with spinner, httpx.Client(timeout=self.settings.request_timeout) as client:
                return client.post(url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            msg = f"API request timed out after {self.settings.request_timeout:g}s"
            raise TransportError(msg, service_name=SERVICE_NAME) from e
        except httpx.HTTPError as e:
            msg = f"API request failed: {e}"
            raise TransportError(msg, service_name=SERVICE_NAME) from e

    def generate(self, model_path: str, request: GenerationRequest) -> GenerationResult:
        """Submit a generation or edit request and wait for the result.

        Args:
            model_path: Endpoint path, e.g. ``fal-ai/flux-2-pro/edit``.
            request: Request body.

        Returns:
            Parsed result with at least one image.

        Raises:
            TransportError: On network failure, timeout or unparseable body.
            APIError: If the API returns a non-success status.
            EmptyResultError: If the response contains no images.
        """
        url = f"{self.base_url}/{model_path}"
        logger.debug("POST %s", url)

        response = self._post(url, request.to_api_dict())

        if not response.is_success:
            message = parse_error_message(response.text)
            logger.debug("API returned %d: %s", response.status_code, response.text)
            raise APIError(
                message,
                service_name=SERVICE_NAME,
                status_code=response.status_code,
            )

        try:
            result = GenerationResult.model_validate_json(response.content)
        except ValidationError as e:
            msg = f"failed to parse response: {e}"
            raise TransportError(msg, service_name=SERVICE_NAME) from e

        if not result.images:
            raise EmptyResultError(service_name=SERVICE_NAME)

        logger.debug("Received %d image(s), seed %d", len(result.images), result.seed)
        return result
