"""Model registry and type definitions for fal image generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from gen_cli.core.exceptions import UnknownModelError, UnsupportedEditError

# Type aliases for model configuration
SizeParamName = Literal["image_size", "aspect_ratio"]


@dataclass(frozen=True)
class ModelEntry:
    """Capabilities of a fal image model.

    Attributes:
        name: Canonical short name.
        gen_path: Endpoint path for text-to-image generation.
        edit_path: Endpoint path for image editing ("" if unsupported).
        supports_auto_size: Whether the model accepts the "auto" size directive.
        size_param_name: Request field that carries the size directive.
    """

    name: str
    gen_path: str
    edit_path: str
    supports_auto_size: bool
    size_param_name: SizeParamName

    @property
    def supports_edit(self) -> bool:
        """Whether the model has an edit endpoint."""
        return bool(self.edit_path)


# Model registry, in display order
MODELS: dict[str, ModelEntry] = {
    entry.name: entry
    for entry in (
        ModelEntry("z-turbo", "fal-ai/z-image/turbo", "", False, "image_size"),
        ModelEntry(
            "qwen",
            "fal-ai/qwen-image",
            "fal-ai/qwen-image-edit-plus",
            False,
            "image_size",
        ),
        ModelEntry(
            "flux2-pro", "fal-ai/flux-2-pro", "fal-ai/flux-2-pro/edit", True, "image_size"
        ),
        ModelEntry(
            "flux2-flex",
            "fal-ai/flux-2-flex",
            "fal-ai/flux-2-flex/edit",
            True,
            "image_size",
        ),
        ModelEntry(
            "nano-banana",
            "fal-ai/nano-banana",
            "fal-ai/nano-banana/edit",
            True,
            "aspect_ratio",
        ),
        ModelEntry(
            "nano-banana-pro",
            "fal-ai/nano-banana-pro",
            "fal-ai/nano-banana-pro/edit",
            True,
            "aspect_ratio",
        ),
    )
}

# Aliases resolve in a single hop
MODEL_ALIASES: dict[str, str] = {
    "flux2": "flux2-pro",
}

DEFAULT_MODEL = "z-turbo"


def resolve_model(name: str) -> ModelEntry:
    """Look up a model by short name or alias.

    Args:
        name: Model name or alias as given on the command line.

    Returns:
        The registry entry.

    Raises:
        UnknownModelError: If the name is not a known model or alias.
    """
    canonical = MODEL_ALIASES.get(name, name)
    try:
        return MODELS[canonical]
    except KeyError:
        raise UnknownModelError(name, available=list(MODELS)) from None


def resolve_endpoint(entry: ModelEntry, *, edit: bool, requested_as: str = "") -> str:
    """Return the endpoint path for generation or edit mode.

    Args:
        entry: Resolved model entry.
        edit: True when input images were supplied.
        requested_as: Name the user typed, used in the error message.

    Returns:
        Endpoint path relative to the API host.

    Raises:
        UnsupportedEditError: If edit mode is requested for a model without
            an edit endpoint.
    """
    if not edit:
        return entry.gen_path
    if not entry.supports_edit:
        raise UnsupportedEditError(requested_as or entry.name)
    return entry.edit_path


def model_aliases_for(name: str) -> list[str]:
    """List the aliases that point at a canonical model name."""
    return sorted(alias for alias, target in MODEL_ALIASES.items() if target == name)
