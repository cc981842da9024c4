"""gen-cli: image generation and editing with fal models.

Submits a single generate or edit request to a fal model endpoint,
waits for the result and saves the image locally.

Models:
    - z-turbo: Z-Image Turbo (generation only, default)
    - qwen: Qwen Image / Qwen Image Edit Plus
    - flux2-pro (alias flux2), flux2-flex: FLUX.2
    - nano-banana, nano-banana-pro: Gemini image models (aspect_ratio sizing)

Example:
    >>> from gen_cli import GenerationConfig, build_request, resolve_model
    >>> entry = resolve_model("z-turbo")
    >>> build_request(entry, GenerationConfig(prompt="a cat")).image_size
    'landscape_4_3'

"""

from gen_cli.client import FalClient, GenerationResult, OutputImage
from gen_cli.models import (
    DEFAULT_MODEL,
    MODEL_ALIASES,
    MODELS,
    ModelEntry,
    resolve_endpoint,
    resolve_model,
)
from gen_cli.request import (
    GenerationConfig,
    GenerationRequest,
    Mode,
    SizeDirective,
    build_request,
    resolve_size_directive,
)

__all__ = [
    "DEFAULT_MODEL",
    "MODELS",
    "MODEL_ALIASES",
    "FalClient",
    "GenerationConfig",
    "GenerationRequest",
    "GenerationResult",
    "Mode",
    "ModelEntry",
    "OutputImage",
    "SizeDirective",
    "build_request",
    "resolve_endpoint",
    "resolve_model",
    "resolve_size_directive",
]

__version__ = "0.1.0"
