"""Image resizer route factory."""

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, Response
from loguru import logger
from pydantic import ValidationError

from .common.errors import InvalidParametersError
from .common.schemas import ImageRequestParams, ImageResponse, ResizeMode, SamplingFilter
from .config import ResizerSettings, get_settings
from .pipeline import ImageTransformPipeline

_INDEX_HTML = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>Image resizer</title></head>
<body>
<h1>Image resizer</h1>
<p><code>GET /&lt;name&gt;.(jpg|png|gif)?url=&lt;source&gt;&amp;w=&amp;h=&amp;mode=&amp;quality=&amp;sampling=&amp;base64=</code></p>
<ul>
<li><b>w</b>, <b>h</b>: target size in pixels; give one to keep the aspect ratio</li>
<li><b>mode</b>: {modes} (default {default_mode})</li>
<li><b>quality</b>: JPEG quality 0-100 (default {default_quality})</li>
<li><b>sampling</b>: {filters}, best (default {default_filter})</li>
<li><b>base64</b>: on/true to get a data URI as text</li>
</ul>
</body>
</html>
"""


def format_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into ``field: message; ...``."""
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def to_http_response(result: ImageResponse) -> Response:
    return Response(
        content=result.body,
        status_code=result.status_code,
        media_type=result.content_type,
    )


def create_router(
    settings: ResizerSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> APIRouter:
    """Create router with injected dependencies.

    Args:
        settings: Service settings (defaults to environment settings)
        transport: httpx transport used to reach source images (tests only)

    Returns:
        APIRouter with the usage page and the image endpoint
    """
    settings = settings or get_settings()
    pipeline = ImageTransformPipeline(settings, transport=transport)
    router = APIRouter()

    @router.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Usage page."""
        return HTMLResponse(
            _INDEX_HTML.format(
                modes=", ".join(mode.value for mode in ResizeMode),
                default_mode=settings.default_mode.value,
                default_quality=settings.default_quality,
                filters=", ".join(f.value for f in SamplingFilter),
                default_filter=settings.default_filter.value,
            )
        )

    @router.get("/{filename}")
    async def generate_image(filename: str, request: Request) -> Response:
        """Fetch ``url``, resize it and return it encoded as ``filename``'s type.

        Returns:
            200 with the image (or a data URI as text/plain when base64 is on),
            400 for bad input or an unreachable source, 500 if encoding fails
        """
        try:
            params = ImageRequestParams.model_validate(dict(request.query_params))
        except ValidationError as exc:
            error = InvalidParametersError(format_validation_error(exc))
            logger.warning(f"[{type(error).__name__}] {filename}: {error}")
            return to_http_response(ImageResponse.text(error.status_code, error.detail))

        return to_http_response(await pipeline.handle(filename, params))

    _ = index, generate_image
    return router
