"""FastAPI application for the image resizer.

Run with:
    uvicorn cl_image_resizer.main:app
or the ``cl-image-resizer`` console script.
"""

import httpx
from fastapi import FastAPI

from . import __version__
from .config import ResizerSettings, get_settings
from .routes import create_router


def create_app(
    settings: ResizerSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the application.

    Example:
        from cl_image_resizer import ResizerSettings
        from cl_image_resizer.main import create_app

        app = create_app(ResizerSettings(default_quality=85))
    """
    app = FastAPI(
        title="cl_image_resizer",
        description="Fetch, resize and re-encode images by URL",
        version=__version__,
    )
    app.include_router(create_router(settings, transport=transport))
    return app


app = create_app()


def serve() -> None:
    """Console entry point: run the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
