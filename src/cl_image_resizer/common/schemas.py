"""Enumerations and pydantic schemas shared by the pipeline stages."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, NamedTuple

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidExtensionError

# ─────────────────────────────────────────────────────────────
# Geometry
# ─────────────────────────────────────────────────────────────


class Dimensions(NamedTuple):
    """Width and height in pixels."""

    width: int
    height: int


# ─────────────────────────────────────────────────────────────
# Resize policy
# ─────────────────────────────────────────────────────────────


class ResizeMode(StrEnum):
    FIT = "fit"
    CROP = "crop"
    STRETCH = "stretch"
    COVER = "cover"


class SamplingFilter(StrEnum):
    """Interpolation kernel used when resampling."""

    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    GAUSSIAN = "gaussian"
    LANCZOS = "lanczos"

    @classmethod
    def from_name(
        cls, name: str | None, default: "SamplingFilter | None" = None
    ) -> "SamplingFilter":
        """Look up a filter by case-insensitive name.

        Unknown or missing names resolve to ``default`` (linear if not given)
        instead of raising.
        """
        fallback = default if default is not None else cls.LINEAR
        if not name:
            return fallback
        return _FILTER_NAMES.get(name.strip().lower(), fallback)

    @property
    def resampling(self) -> Image.Resampling:
        return _RESAMPLING[self]


_FILTER_NAMES: dict[str, SamplingFilter] = {
    "nearest": SamplingFilter.NEAREST,
    "linear": SamplingFilter.LINEAR,
    "cubic": SamplingFilter.CUBIC,
    "gaussian": SamplingFilter.GAUSSIAN,
    "lanczos": SamplingFilter.LANCZOS,
    # Lanczos gives the best results for downsampling
    "best": SamplingFilter.LANCZOS,
}

# Pillow has no Gaussian kernel; Hamming is the closest smoothing filter it ships.
_RESAMPLING: dict[SamplingFilter, Image.Resampling] = {
    SamplingFilter.NEAREST: Image.Resampling.NEAREST,
    SamplingFilter.LINEAR: Image.Resampling.BILINEAR,
    SamplingFilter.CUBIC: Image.Resampling.BICUBIC,
    SamplingFilter.GAUSSIAN: Image.Resampling.HAMMING,
    SamplingFilter.LANCZOS: Image.Resampling.LANCZOS,
}


# ─────────────────────────────────────────────────────────────
# Output format
# ─────────────────────────────────────────────────────────────


class ImageFormat(StrEnum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"

    @property
    def content_type(self) -> str:
        return f"image/{self.value}"

    @property
    def pil_format(self) -> str:
        return self.value.upper()


_EXTENSIONS: dict[str, ImageFormat] = {
    ".jpg": ImageFormat.JPEG,
    ".png": ImageFormat.PNG,
    ".gif": ImageFormat.GIF,
}


def clamp_quality(quality: int | None, default: int = 100) -> int:
    """Clamp a requested JPEG quality into 0-100, using ``default`` when absent."""
    value = default if quality is None else quality
    return max(0, min(100, value))


@dataclass(frozen=True)
class OutputFormat:
    """Encoder target: image format plus JPEG quality."""

    format: ImageFormat
    quality: int | None = None

    @classmethod
    def from_filename(
        cls, filename: str, quality: int | None = None, default_quality: int = 100
    ) -> "OutputFormat":
        """Select the output format from the filename suffix.

        Raises:
            InvalidExtensionError: If the suffix is not .jpg, .png or .gif
        """
        image_format = next(
            (fmt for ext, fmt in _EXTENSIONS.items() if filename.endswith(ext)), None
        )
        if image_format is None:
            raise InvalidExtensionError()

        if image_format is ImageFormat.JPEG:
            return cls(image_format, clamp_quality(quality, default_quality))
        return cls(image_format)

    @property
    def content_type(self) -> str:
        return self.format.content_type


# ─────────────────────────────────────────────────────────────
# Request / response
# ─────────────────────────────────────────────────────────────

_TRUE_STRINGS = {"on", "true", ""}

# Largest width or height accepted from a query string
MAX_DIMENSION = 2**32 - 1


class ImageRequestParams(BaseModel):
    """Query parameters of ``GET /{filename}``.

    Attributes:
        url: Source image URL
        w: Requested width (0 or empty = not given)
        h: Requested height (0 or empty = not given)
        mode: Resize policy; the configured default when absent
        quality: JPEG quality 0-255, clamped to 0-100 before encoding
        sampling: Filter name; unknown names fall back to the default
        base64: Return a data URI instead of raw bytes
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str = Field(..., description="URL of the source image")
    w: int | None = Field(
        default=None, ge=0, le=MAX_DIMENSION, description="Target width in pixels"
    )
    h: int | None = Field(
        default=None, ge=0, le=MAX_DIMENSION, description="Target height in pixels"
    )
    mode: ResizeMode | None = Field(default=None, description="Resize mode")
    quality: int | None = Field(default=None, ge=0, le=255, description="JPEG quality")
    sampling: str | None = Field(default=None, description="Sampling filter name")
    base64: bool = Field(default=False, description="Return a base64 data URI")

    @field_validator("w", "h", "quality", "sampling", mode="before")
    @classmethod
    def empty_string_as_none(cls, v: Any) -> Any:
        if isinstance(v, str) and v == "":
            return None
        return v

    @field_validator("base64", mode="before")
    @classmethod
    def string_as_bool(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower() in _TRUE_STRINGS
        if v is None:
            return False
        return v


@dataclass(frozen=True)
class ImageResponse:
    """Status code, content type and body handed to the HTTP layer."""

    status_code: int
    content_type: str
    body: bytes | str

    @classmethod
    def text(cls, status_code: int, message: str) -> "ImageResponse":
        return cls(status_code, "text/plain", message)
