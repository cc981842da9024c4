"""Pytest configuration and fixtures for gen-cli tests."""

from __future__ import annotations

import base64
import os
import struct
import zlib
from typing import TYPE_CHECKING
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from gen_cli.settings import GenSettings, reset_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

# Test constants
TEST_FAL_KEY = "test-fal-key-secret"
TEST_IMAGE_URL = "https://v3.fal.media/files/test/output.png"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point HOME and the working directory at tmp_path.

    Keeps a developer's real FAL_KEY or ~/.gen-cli/.env out of the tests.
    """
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    for name in list(os.environ):
        if name.upper() == "FAL_KEY" or name.upper().startswith(("GEN_", "FAL_")):
            monkeypatch.delenv(name)

    yield home
    reset_settings()


@pytest.fixture
def mock_env_vars() -> Iterator[None]:
    """Set FAL_KEY in the environment."""
    with patch.dict(os.environ, {"FAL_KEY": TEST_FAL_KEY}):
        yield


@pytest.fixture
def settings(mock_env_vars: None) -> GenSettings:
    """Settings built from the test environment."""
    return GenSettings()


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Return sample PNG image bytes (1x1 red pixel)."""
    # Minimal valid PNG: 1x1 red pixel
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8z8DwHwAFBQIA"
        "X8jx0gAAAABJRU5ErkJggg=="
    )


@pytest.fixture
def sample_image_path(tmp_path: Path, sample_image_bytes: bytes) -> Path:
    """Create a temporary sample image file."""
    image_path = tmp_path / "sample.png"
    image_path.write_bytes(sample_image_bytes)
    return image_path


@pytest.fixture
def make_image(tmp_path: Path):
    """Factory writing a blank image of the given size."""

    def _make(width: int, height: int, name: str = "input.png") -> Path:
        path = tmp_path / name
        Image.new("RGB", (width, height)).save(path)
        return path

    return _make


@pytest.fixture
def make_png_header(tmp_path: Path):
    """Factory writing a PNG that declares a size but carries no pixel data."""

    def _chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    def _make(width: int, height: int, name: str = "huge.png") -> Path:
        ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
        path = tmp_path / name
        path.write_bytes(
            b"\x89PNG\r\n\x1a\n"
            + _chunk(b"IHDR", ihdr)
            + _chunk(b"IDAT", b"")
            + _chunk(b"IEND", b"")
        )
        return path

    return _make


@pytest.fixture
def success_body() -> dict:
    """Successful fal response body."""
    return {
        "images": [
            {
                "url": TEST_IMAGE_URL,
                "width": 1024,
                "height": 768,
                "content_type": "image/png",
            }
        ],
        "seed": 1234,
    }


@pytest.fixture
def make_response():
    """Factory building a mock httpx.Response."""

    def _make(status_code: int, body: str | bytes) -> MagicMock:
        raw = body.encode() if isinstance(body, str) else body
        response = MagicMock()
        response.status_code = status_code
        response.is_success = 200 <= status_code < 300
        response.text = raw.decode()
        response.content = raw
        return response

    return _make


@pytest.fixture
def mock_httpx_client() -> Iterator[MagicMock]:
    """Patch httpx.Client as used by the fal client."""
    with patch("gen_cli.client.httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client.__enter__ = MagicMock(return_value=mock_client)
        mock_client.__exit__ = MagicMock(return_value=None)
        mock_client_class.return_value = mock_client
        yield mock_client
