"""Shared pytest fixtures for Hey Picture tests."""

import base64
import io
import json
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator

import httpx
import pytest
from PIL import Image

from heypicture.core.config import HeyPictureConfig
from heypicture.ui.models import UIState


def make_png(width: int = 400, height: int = 300, color=(30, 60, 90), mode: str = "RGB") -> bytes:
    """Encode a solid-colour PNG of the given size."""
    if mode == "RGBA" and len(color) == 3:
        color = (*color, 255)
    image = Image.new(mode, (width, height), color)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def predictions_body(images: list[bytes | None]) -> dict:
    """Build a predict response body; ``None`` entries carry no payload."""
    predictions = []
    for image in images:
        if image is None:
            predictions.append({"raiFilteredReason": "filtered"})
        else:
            predictions.append(
                {
                    "bytesBase64Encoded": base64.b64encode(image).decode("ascii"),
                    "mimeType": "image/png",
                }
            )
    return {"predictions": predictions}


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> HeyPictureConfig:
    """Create a test configuration with temporary directories.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        HeyPictureConfig instance for testing
    """
    return HeyPictureConfig(
        api_base_url="https://images.test/v1beta",
        model_id="imagen-test",
        sample_count=3,
        request_timeout=5.0,
        downloads_dir=str(temp_dir / "downloads"),
        _env_file=None,
    )


@pytest.fixture
def png_bytes() -> bytes:
    """A 400x300 opaque PNG."""
    return make_png()


@pytest.fixture
def png_factory() -> Callable[..., bytes]:
    """Factory for PNGs of arbitrary size and colour."""
    return make_png


@pytest.fixture
def predictions_factory() -> Callable[[list[bytes | None]], dict]:
    """Factory for predict response bodies."""
    return predictions_body


@pytest.fixture
def ui_state() -> UIState:
    """Create empty UI state for testing.

    Returns:
        UIState instance
    """
    return UIState()


class RecordingService:
    """Stand-in for the image service behind an ``httpx.MockTransport``.

    Records every request and answers with a fixed status and JSON body (or
    raw text when ``body`` is a str).
    """

    def __init__(self, status_code: int = 200, body=None, error: Exception | None = None):
        self.status_code = status_code
        self.body = body if body is not None else {"predictions": []}
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, text=self.body)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def service_factory() -> Callable[..., RecordingService]:
    """Factory for RecordingService instances."""
    return RecordingService


@pytest.fixture
def three_images(png_factory) -> list[bytes]:
    """Three distinct 400x300 PNGs."""
    return [
        png_factory(color=(200, 0, 0)),
        png_factory(color=(0, 200, 0)),
        png_factory(color=(0, 0, 200)),
    ]
