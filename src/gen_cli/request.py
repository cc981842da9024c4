"""Request building for fal generate and edit calls.

The size directive is chosen in priority order:

1. An explicit ``--size`` other than ``auto`` is used verbatim.
2. Edit mode on a model that accepts ``auto`` sends ``auto``.
3. Edit mode otherwise measures the first input image and picks the
   nearest preset ratio. If the image cannot be measured, no size is sent.
4. Generate mode defaults to ``4:3``.

The directive is then written to ``aspect_ratio`` untouched, or to
``image_size`` after ratio strings are converted to presets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from gen_cli.core.exceptions import ImageReadError
from gen_cli.models import DEFAULT_MODEL, ModelEntry
from gen_cli.sizing import AUTO, closest_ratio, get_image_dimensions, ratio_to_preset
from gen_cli.utils import image_to_data_uri

logger = logging.getLogger(__name__)

DEFAULT_GENERATE_RATIO = "4:3"


class Mode(str, Enum):
    """Whether the request creates a new image or edits input images."""

    GENERATE = "generate"
    EDIT = "edit"


@dataclass(frozen=True)
class GenerationConfig:
    """Everything the user asked for, built once from parsed arguments.

    Attributes:
        prompt: Text prompt.
        model: Model name or alias.
        images: Input image paths; non-empty switches to edit mode.
        size: Size override; "" or "auto" means resolve automatically.
        output_format: Image format requested from the API.
        output: Output file or directory; "" means the default location.
        seed: Seed for reproducibility; negative means unset.
    """

    prompt: str
    model: str = DEFAULT_MODEL
    images: tuple[str, ...] = ()
    size: str = ""
    output_format: str = "png"
    output: str = ""
    seed: int = -1

    @property
    def mode(self) -> Mode:
        return Mode.EDIT if self.images else Mode.GENERATE


@dataclass(frozen=True)
class SizeDirective:
    """Resolved size value plus, when auto-detected, the measured input size."""

    value: str | None
    detected: tuple[int, int] | None = None


class GenerationRequest(BaseModel):
    """JSON body sent to a fal model endpoint.

    Optional fields left as None are omitted from the wire format.
    """

    prompt: str = Field(min_length=1)
    output_format: str = "png"
    image_size: str | None = None
    aspect_ratio: str | None = None
    image_urls: list[str] | None = None
    seed: int | None = Field(default=None, ge=0)
    enable_safety_checker: bool = False

    def to_api_dict(self) -> dict[str, Any]:
        """Convert to API request format.

        Returns:
            Dictionary for the JSON request body.
        """
        return self.model_dump(exclude_none=True)


def resolve_size_directive(
    model: ModelEntry,
    mode: Mode,
    user_size: str = "",
    input_images: tuple[str, ...] | list[str] = (),
) -> SizeDirective:
    """Pick the size directive for a request.

    Args:
        model: Target model.
        mode: Generate or edit.
        user_size: Value of ``--size``.
        input_images: Edit-mode input image paths.

    Returns:
        The directive; ``value`` is None when no size should be sent.
    """
    if user_size and user_size != AUTO:
        return SizeDirective(user_size)

    if mode is Mode.EDIT:
        if model.supports_auto_size:
            return SizeDirective(AUTO)
        if input_images:
            try:
                width, height = get_image_dimensions(input_images[0])
            except OSError as e:
                logger.debug("Could not measure %s: %s", input_images[0], e)
                return SizeDirective(None)
            return SizeDirective(closest_ratio(width, height), (width, height))
        return SizeDirective(None)

    return SizeDirective(DEFAULT_GENERATE_RATIO)


def size_fields(model: ModelEntry, directive: str | None) -> dict[str, str]:
    """Map a directive onto the request field the model expects."""
    if not directive:
        return {}
    if model.size_param_name == "aspect_ratio":
        return {"aspect_ratio": directive}
    if directive == AUTO:
        return {"image_size": AUTO}
    return {"image_size": ratio_to_preset(directive)}


def encode_input_images(paths: tuple[str, ...] | list[str]) -> list[str]:
    """Read every input image into a data URI.

    Raises:
        ImageReadError: On the first image that cannot be read.
    """
    uris = []
    for index, path in enumerate(paths, 1):
        try:
            uris.append(image_to_data_uri(path))
        except OSError as e:
            raise ImageReadError(index, path, e.strerror or str(e)) from e
    return uris


def build_request(
    model: ModelEntry,
    config: GenerationConfig,
    *,
    directive: SizeDirective | None = None,
    enable_safety_checker: bool = False,
) -> GenerationRequest:
    """Build the request body for a model.

    Args:
        model: Resolved target model.
        config: User configuration.
        directive: Pre-resolved size directive. Resolved here when None.
        enable_safety_checker: Value for ``enable_safety_checker``.

    Returns:
        The request, ready for :meth:`GenerationRequest.to_api_dict`.

    Raises:
        ImageReadError: If an edit-mode input image cannot be read.
    """
    if directive is None:
        directive = resolve_size_directive(
            model, config.mode, config.size, config.images
        )

    image_urls = encode_input_images(config.images) if config.images else None

    return GenerationRequest(
        prompt=config.prompt,
        output_format=config.output_format,
        image_urls=image_urls,
        seed=config.seed if config.seed >= 0 else None,
        enable_safety_checker=enable_safety_checker,
        **size_fields(model, directive.value),
    )
