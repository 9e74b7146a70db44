"""Fetch -> resize -> encode pipeline for a single request."""

import asyncio

import httpx
from loguru import logger
from PIL import Image

from .algo.data_uri import to_data_uri
from .algo.encode import encode_image
from .algo.fetch import fetch_image
from .algo.resize import resize_image
from .algo.size_resolver import resolve_size
from .common.errors import ImageResizerError
from .common.schemas import (
    Dimensions,
    ImageRequestParams,
    ImageResponse,
    OutputFormat,
    ResizeMode,
    SamplingFilter,
)
from .config import ResizerSettings, get_settings


def render_image(
    image: Image.Image,
    target: Dimensions,
    output_format: OutputFormat,
    *,
    mode: ResizeMode = ResizeMode.CROP,
    filter: SamplingFilter = SamplingFilter.LINEAR,
) -> bytes:
    """Resize into the target box and encode. CPU only, no I/O."""
    resized = resize_image(image, target.width, target.height, filter, mode)
    return encode_image(resized, output_format)


class ImageTransformPipeline:
    """Stateless request handler.

    Holds only configuration; every call to ``run`` works on its own
    images and buffers.
    """

    def __init__(
        self,
        settings: ResizerSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings: ResizerSettings = settings or get_settings()
        self.transport: httpx.AsyncBaseTransport | None = transport

    async def run(self, filename: str, params: ImageRequestParams) -> ImageResponse:
        """
        Produce the response for one request.

        Raises:
            InvalidExtensionError: If the filename suffix is unsupported
            FetchError: If the source cannot be downloaded or decoded
            EncodeError: If the result cannot be serialized
        """
        settings = self.settings
        output_format = OutputFormat.from_filename(
            filename, params.quality, settings.default_quality
        )
        mode = params.mode or settings.default_mode
        sampling = SamplingFilter.from_name(params.sampling, settings.default_filter)

        image = await fetch_image(
            params.url,
            timeout=settings.fetch_timeout,
            follow_redirects=settings.follow_redirects,
            max_bytes=settings.max_source_bytes,
            headers={"User-Agent": settings.user_agent},
            transport=self.transport,
        )

        target = resolve_size(image.width, image.height, params.w, params.h)
        logger.info(
            f"Resizing image '{params.url}' to {target.width}x{target.height} "
            + f"(source {image.width}x{image.height}, mode={mode}, filter={sampling})"
        )

        buffer = await asyncio.to_thread(
            render_image,
            image,
            target,
            output_format,
            mode=mode,
            filter=sampling,
        )

        if params.base64:
            return ImageResponse.text(200, to_data_uri(buffer, output_format.content_type))
        return ImageResponse(200, output_format.content_type, buffer)

    async def handle(self, filename: str, params: ImageRequestParams) -> ImageResponse:
        """Like ``run`` but turns pipeline errors into text responses."""
        try:
            return await self.run(filename, params)
        except ImageResizerError as exc:
            log = logger.error if exc.status_code >= 500 else logger.warning
            log(f"[{type(exc).__name__}] {filename} <- {params.url[:120]}: {exc}")
            return ImageResponse.text(exc.status_code, exc.detail)
