"""Test configuration and fixtures for cl_image_resizer.

This module provides:
- Synthetic image generators (PIL)
- A fake source server built on httpx.MockTransport
- Settings, pipeline and FastAPI TestClient fixtures
"""

from collections.abc import Callable
from io import BytesIO

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from cl_image_resizer.config import ResizerSettings
from cl_image_resizer.pipeline import ImageTransformPipeline

SOURCE_BASE_URL = "http://images.test"


# ============================================================================
# Image Helpers
# ============================================================================


def make_image(width: int, height: int, mode: str = "RGB") -> Image.Image:
    """Create a test image with a few shapes so encoders have real content."""
    img = Image.new("RGBA", (width, height), color=(73, 109, 137, 255))
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, width // 2, height // 2], fill="white")
    draw.line([(0, 0), (width - 1, height - 1)], fill="black", width=2)
    return img if mode == "RGBA" else img.convert(mode)


def make_image_bytes(width: int, height: int, format: str = "PNG", mode: str = "RGB") -> bytes:
    buffer = BytesIO()
    make_image(width, height, mode).save(buffer, format=format)
    return buffer.getvalue()


# ============================================================================
# Fake Source Server
# ============================================================================


class SourceServer:
    """Serves registered bodies on SOURCE_BASE_URL; unknown paths return 404."""

    def __init__(self):
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.requests: list[httpx.Request] = []
        self.transport: httpx.MockTransport = httpx.MockTransport(self._handle)

    def add(self, path: str, content: bytes, status_code: int = 200) -> str:
        self.routes[path] = (status_code, content)
        return f"{SOURCE_BASE_URL}{path}"

    def add_image(
        self, path: str, width: int, height: int, format: str = "PNG", mode: str = "RGB"
    ) -> str:
        return self.add(path, make_image_bytes(width, height, format, mode))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/boom":
            raise httpx.ConnectError("Connection refused", request=request)
        status_code, content = self.routes.get(request.url.path, (404, b"not found"))
        return httpx.Response(status_code, content=content)


@pytest.fixture
def source_server() -> SourceServer:
    """Provide a fake HTTP server for source images."""
    return SourceServer()


@pytest.fixture
def image_factory() -> Callable[..., bytes]:
    """Provide the encoded test image generator."""
    return make_image_bytes


@pytest.fixture
def image_builder() -> Callable[..., Image.Image]:
    """Provide the in-memory test image generator."""
    return make_image


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def settings() -> ResizerSettings:
    """Settings isolated from the developer's environment and .env file."""
    return ResizerSettings(_env_file=None)  # pyright: ignore[reportCallIssue]


@pytest.fixture
def pipeline(settings: ResizerSettings, source_server: SourceServer) -> ImageTransformPipeline:
    return ImageTransformPipeline(settings, transport=source_server.transport)


@pytest.fixture
def api_client(settings: ResizerSettings, source_server: SourceServer) -> TestClient:
    """Provide FastAPI TestClient wired to the fake source server."""
    from cl_image_resizer.main import create_app

    return TestClient(create_app(settings, transport=source_server.transport))
