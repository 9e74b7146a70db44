"""Source image download and decoding."""

import asyncio
from collections.abc import Mapping
from io import BytesIO
from urllib.parse import urlparse

import httpx
from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..common.errors import DecodeError, TransportError
from ..utils.profiling import timed_stage

# Modes every supported encoder can write
_NATIVE_MODES = ("RGB", "RGBA", "L", "LA")


def decode_image(content: bytes) -> Image.Image:
    """
    Decode raw bytes into a fully loaded Pillow image.

    Only the first frame of animated sources is kept. Images in exotic modes
    (CMYK, palette, 16-bit...) are converted to RGB, or RGBA when they carry
    transparency.

    Raises:
        DecodeError: If the bytes are not a readable image
    """
    try:
        image = Image.open(BytesIO(content))
        image.load()
    except Image.DecompressionBombError as exc:
        raise DecodeError(str(exc)) from exc
    except UnidentifiedImageError as exc:
        raise DecodeError(f"Unrecognized image data: {exc}") from exc
    except (OSError, ValueError, SyntaxError) as exc:
        raise DecodeError(str(exc)) from exc

    if image.mode not in _NATIVE_MODES:
        has_alpha = "transparency" in image.info or image.mode.endswith("A")
        try:
            image = image.convert("RGBA" if has_alpha else "RGB")
        except (OSError, ValueError) as exc:
            raise DecodeError(f"Unsupported pixel layout {image.mode}: {exc}") from exc

    return image


@timed_stage("fetch")
async def fetch_image(
    url: str,
    *,
    timeout: float | None = 30.0,
    follow_redirects: bool = True,
    max_bytes: int | None = None,
    headers: Mapping[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Image.Image:
    """
    Download an image and decode it.

    Args:
        url: Source image URL
        timeout: Request timeout in seconds (None = no timeout)
        follow_redirects: Follow 3xx responses from the source
        max_bytes: Reject bodies larger than this (None = no limit)
        headers: Extra request headers
        transport: Custom httpx transport (used by tests)

    Returns:
        Decoded image

    Raises:
        TransportError: On network failure, invalid URL, non-2xx status or
            oversized body
        DecodeError: If the body is not a readable image
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise TransportError(f"Invalid URL: {url!r}")

    logger.info(f"[Fetch] GET {url[:120]}")

    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=follow_redirects,
            headers=dict(headers or {}),
            transport=transport,
        ) as client:
            async with client.stream("GET", url) as response:
                if not response.is_success:
                    raise TransportError(
                        f"Status code from source: {response.status_code} "
                        f"{response.reason_phrase}".strip(),
                        source_status=response.status_code,
                    )
                content = await _read_body(response, max_bytes)
    except httpx.TimeoutException as exc:
        raise TransportError(f"Timeout while fetching source: {exc}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise TransportError(str(exc) or type(exc).__name__) from exc

    logger.debug(f"[Fetch] Received {len(content)} bytes from {url[:120]}")
    return await asyncio.to_thread(decode_image, content)


async def _read_body(response: httpx.Response, max_bytes: int | None) -> bytes:
    """Read a streamed body, stopping as soon as it exceeds ``max_bytes``."""
    if max_bytes is not None:
        size_header = response.headers.get("content-length")
        if size_header is not None and size_header.isdigit() and int(size_header) > max_bytes:
            raise TransportError(
                f"Source image too large ({size_header} bytes, max {max_bytes})"
            )

    chunks: list[bytes] = []
    received = 0
    async for chunk in response.aiter_bytes():
        received += len(chunk)
        if max_bytes is not None and received > max_bytes:
            raise TransportError(
                f"Source image too large (more than {max_bytes} bytes)"
            )
        chunks.append(chunk)

    return b"".join(chunks)
