"""cl_image_resizer - On-demand image fetch, resize and re-encode service."""

__version__ = "0.1.0"

from .algo import encode_image, fetch_image, resize_image, resolve_size, to_data_uri
from .common.errors import (
    DecodeError,
    EncodeError,
    FetchError,
    ImageResizerError,
    InvalidExtensionError,
    InvalidParametersError,
    TransportError,
)
from .common.schemas import (
    Dimensions,
    ImageFormat,
    ImageRequestParams,
    ImageResponse,
    OutputFormat,
    ResizeMode,
    SamplingFilter,
)
from .config import ResizerSettings, get_settings
from .pipeline import ImageTransformPipeline
from .routes import create_router

__all__ = [
    "DecodeError",
    "Dimensions",
    "EncodeError",
    "FetchError",
    "ImageFormat",
    "ImageRequestParams",
    "ImageResizerError",
    "ImageResponse",
    "ImageTransformPipeline",
    "InvalidExtensionError",
    "InvalidParametersError",
    "OutputFormat",
    "ResizeMode",
    "ResizerSettings",
    "SamplingFilter",
    "TransportError",
    "__version__",
    "create_router",
    "encode_image",
    "fetch_image",
    "get_settings",
    "resize_image",
    "resolve_size",
    "to_data_uri",
]
