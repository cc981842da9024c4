"""Utility functions for fal image generation."""

from __future__ import annotations

import base64
import contextlib
import logging
import time
from pathlib import Path

import httpx

from gen_cli.core.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

MIME_TYPES: dict[str, str] = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
}

DEFAULT_MIME_TYPE = "application/octet-stream"


def get_mime_type(image_path: Path | str) -> str:
    """Get the MIME type for an image from its file extension.

    File contents are never inspected.

    Args:
        image_path: Path to the image file.

    Returns:
        MIME type string, ``application/octet-stream`` for unknown extensions.
    """
    return MIME_TYPES.get(Path(image_path).suffix.lower(), DEFAULT_MIME_TYPE)


def image_to_data_uri(image_path: Path | str) -> str:
    """Load an image file and wrap it in a base64 data URI.

    Args:
        image_path: Path to the image file.

    Returns:
        String of the form ``data:<mime>;base64,<payload>``.

    Raises:
        OSError: If the file cannot be read.
    """
    data = Path(image_path).read_bytes()
    encoded = base64.standard_b64encode(data).decode("ascii")
    return f"data:{get_mime_type(image_path)};base64,{encoded}"


def timestamped_filename(output_format: str) -> str:
    """Return ``generated_<unix-seconds>.<format>``."""
    return f"generated_{int(time.time())}.{output_format}"


def resolve_output_path(
    output: str,
    output_format: str,
    default_dir: Path | None = None,
) -> Path:
    """Work out where the generated image should be written.

    Args:
        output: Value of ``--output``. Empty means use the default directory.
        output_format: Requested format, used as the file extension.
        default_dir: Directory for unnamed outputs. Falls back to the
            current directory when None.

    Returns:
        Destination file path. An existing directory gets a timestamped
        filename inside it; any other value is used as-is.
    """
    if not output:
        return (default_dir or Path.cwd()) / timestamped_filename(output_format)

    path = Path(output)
    if path.is_dir():
        return path / timestamped_filename(output_format)
    return path


def download_image(url: str, output_path: Path, timeout: float = 120.0) -> Path:
    """Download a remote image and save it to disk.

    Args:
        url: URL of the generated image.
        output_path: Destination file path. Parent directories are created.
        timeout: HTTP timeout in seconds.

    Returns:
        The path written.

    Raises:
        OutputWriteError: If the download or the write fails. A partially
            written file is removed first.
    """
    started = False
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                with open(output_path, "wb") as f:
                    started = True
                    for chunk in response.iter_bytes():
                        f.write(chunk)
    except (httpx.HTTPError, OSError) as e:
        if started:
            with contextlib.suppress(OSError):
                output_path.unlink(missing_ok=True)
        msg = f"saving image: {e}"
        raise OutputWriteError(msg, path=str(output_path)) from e

    logger.debug("Wrote %s", output_path)
    return output_path
