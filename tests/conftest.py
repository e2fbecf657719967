"""Test configuration and fixtures for cl_image_proxy.

This module provides:
- Image byte factories (Pillow-generated, no checked-in media)
- A local origin folder populated with test images
- A mock remote CDN built on httpx.MockTransport
- Application and pipeline fixtures wired to those origins
"""

from collections.abc import Callable, Iterator
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from loguru import logger
from PIL import Image

from cl_image_proxy.app import create_app
from cl_image_proxy.common.config import ProxyConfig

REMOTE_CDN = "https://cdn.example.com/assets"


# ============================================================================
# Image factories
# ============================================================================


def make_image_bytes(
    width: int,
    height: int,
    *,
    mode: str = "RGB",
    format: str = "PNG",
    color: int | tuple[int, ...] = (200, 80, 40),
) -> bytes:
    """Encode a solid-color image in memory."""
    img = Image.new(mode, (width, height), color)
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def jpeg_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        assert img.format == "JPEG"
        return img.size


@pytest.fixture
def image_bytes() -> Callable[..., bytes]:
    return make_image_bytes


# ============================================================================
# Origins
# ============================================================================


@pytest.fixture
def local_folder(tmp_path: Path) -> Path:
    """Local origin with a few images and a non-image file."""
    folder = tmp_path / "origin"
    (folder / "nested").mkdir(parents=True)

    _ = (folder / "photo.png").write_bytes(make_image_bytes(800, 600))
    _ = (folder / "nested" / "tiny.png").write_bytes(make_image_bytes(3, 2))
    _ = (folder / "alpha.png").write_bytes(make_image_bytes(40, 20, mode="RGBA", color=(0, 0, 255, 128)))
    _ = (folder / "not-an-image.txt").write_bytes(b"hello, this is plain text\n")
    _ = (folder / "shared.png").write_bytes(make_image_bytes(100, 50))
    return folder


class MockCDN:
    """In-memory remote origin recording every request it serves."""

    def __init__(self) -> None:
        self.files: dict[str, bytes] = {
            "/assets/remote.png": make_image_bytes(640, 480),
            "/assets/shared.png": make_image_bytes(320, 320),
            "/assets/remote.txt": b"not an image",
        }
        self.requests: list[httpx.Request] = []
        self.fail_with: Exception | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        data = self.files.get(request.url.path)
        if data is None:
            return httpx.Response(404, content=b"missing")
        return httpx.Response(200, content=data)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def mock_cdn() -> MockCDN:
    return MockCDN()


# ============================================================================
# Application
# ============================================================================


@pytest.fixture
def proxy_config(local_folder: Path) -> ProxyConfig:
    return ProxyConfig(local_folder=local_folder, remote_cdn=REMOTE_CDN)


@pytest.fixture
def api_client(proxy_config: ProxyConfig, mock_cdn: MockCDN) -> Iterator[TestClient]:
    """TestClient for an app using both origins."""
    app = create_app(proxy_config, client=mock_cdn.client())
    with TestClient(app) as client:
        yield client


@pytest.fixture
def read_jpeg_size() -> Callable[[bytes], tuple[int, int]]:
    return jpeg_size


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)
