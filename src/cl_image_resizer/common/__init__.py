"""Shared errors and schemas."""

from .errors import (
    DecodeError,
    EncodeError,
    FetchError,
    ImageResizerError,
    InvalidExtensionError,
    InvalidParametersError,
    TransportError,
)
from .schemas import (
    Dimensions,
    ImageFormat,
    ImageRequestParams,
    ImageResponse,
    OutputFormat,
    ResizeMode,
    SamplingFilter,
    clamp_quality,
)

__all__ = [
    "DecodeError",
    "Dimensions",
    "EncodeError",
    "FetchError",
    "ImageFormat",
    "ImageRequestParams",
    "ImageResizerError",
    "ImageResponse",
    "InvalidExtensionError",
    "InvalidParametersError",
    "OutputFormat",
    "ResizeMode",
    "SamplingFilter",
    "TransportError",
    "clamp_quality",
]
