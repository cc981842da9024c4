"""Conversions between ratio strings, fal size presets, and pixel dimensions.

fal models take their output size in one of two shapes. ``image_size``
models want a named preset such as ``landscape_16_9``; ``aspect_ratio``
models want the ratio string itself. This module holds the tables that
map between the two and the nearest-ratio match used when the size is
derived from an input image.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from PIL import Image

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_PRESET = "square_hd"
DEFAULT_RATIO = "1:1"
AUTO = "auto"

# Ratio strings accepted by --size, mapped to image_size presets
RATIO_TO_PRESET: dict[str, str] = {
    "9:16": "portrait_16_9",
    "3:4": "portrait_4_3",
    "1:1": "square_hd",
    "4:3": "landscape_4_3",
    "16:9": "landscape_16_9",
}

# Presets with their width/height ratio, ascending. Ties go to the earlier entry.
ASPECT_PRESETS: tuple[tuple[str, float], ...] = (
    ("portrait_16_9", 9.0 / 16.0),
    ("portrait_4_3", 3.0 / 4.0),
    ("square_hd", 1.0),
    ("landscape_4_3", 4.0 / 3.0),
    ("landscape_16_9", 16.0 / 9.0),
)

# Values the aspect_ratio parameter accepts. Not enforced locally; the API
# rejects anything else.
ASPECT_RATIO_VALUES: tuple[str, ...] = (
    "21:9",
    "16:9",
    "3:2",
    "4:3",
    "5:4",
    "1:1",
    "4:5",
    "3:4",
    "2:3",
    "9:16",
    AUTO,
)


def ratio_to_preset(value: str) -> str:
    """Convert a ratio string like ``16:9`` to its image_size preset.

    Values outside the table (presets, ``auto``) are returned unchanged.
    """
    return RATIO_TO_PRESET.get(value, value)


def closest_preset(width: int, height: int) -> str:
    """Return the preset whose aspect ratio is nearest to width/height.

    Args:
        width: Pixel width.
        height: Pixel height.

    Returns:
        Preset name. Degenerate dimensions yield ``square_hd``.
    """
    if width == 0 or height == 0:
        return DEFAULT_PRESET

    ratio = width / height
    best_name = DEFAULT_PRESET
    best_diff = float("inf")
    for name, preset_ratio in ASPECT_PRESETS:
        diff = abs(ratio - preset_ratio)
        if diff < best_diff:
            best_name, best_diff = name, diff
    return best_name


def preset_to_ratio(preset: str) -> str:
    """Reverse of :func:`ratio_to_preset`; unknown presets give ``1:1``."""
    for ratio, name in RATIO_TO_PRESET.items():
        if name == preset:
            return ratio
    return DEFAULT_RATIO


def closest_ratio(width: int, height: int) -> str:
    """Return the ratio string nearest to the given dimensions."""
    return preset_to_ratio(closest_preset(width, height))


def get_image_dimensions(image_path: Path | str) -> tuple[int, int]:
    """Read pixel dimensions from an image header.

    Only the header is decoded; pixel data is never loaded.

    Args:
        image_path: Path to a PNG, JPEG, GIF or WebP file.

    Returns:
        Tuple of (width, height).

    Raises:
        OSError: If the file is missing or not a recognised image.
    """
    try:
        return _read_size(image_path)
    except Image.DecompressionBombError:
        # The pixel limit guards decoding; reading the header is safe
        limit = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            return _read_size(image_path)
        finally:
            Image.MAX_IMAGE_PIXELS = limit


def _read_size(image_path: Path | str) -> tuple[int, int]:
    with Image.open(image_path) as img:
        width, height = img.size
    return width, height
