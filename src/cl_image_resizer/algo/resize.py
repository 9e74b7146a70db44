"""Pure image resize computation logic (in-memory)."""

from PIL import Image

from ..common.errors import EncodeError
from ..common.schemas import Dimensions, ResizeMode, SamplingFilter
from ..utils.profiling import timed_stage


def _scaled_dimensions(
    source_width: int, source_height: int, width: int, height: int, *, fill: bool
) -> Dimensions:
    width_ratio = width / source_width
    height_ratio = height / source_height
    ratio = max(width_ratio, height_ratio) if fill else min(width_ratio, height_ratio)

    return Dimensions(
        max(int(source_width * ratio + 0.5), 1),
        max(int(source_height * ratio + 0.5), 1),
    )


def fit_dimensions(
    source_width: int, source_height: int, width: int, height: int
) -> Dimensions:
    """Largest aspect-preserving size that fits inside the box."""
    return _scaled_dimensions(source_width, source_height, width, height, fill=False)


def fill_dimensions(
    source_width: int, source_height: int, width: int, height: int
) -> Dimensions:
    """Smallest aspect-preserving size that covers the box."""
    return _scaled_dimensions(source_width, source_height, width, height, fill=True)


def cover_dimensions(
    source_width: int, source_height: int, width: int, height: int
) -> Dimensions:
    """Size for the cover policy.

    The axis picked by comparing the box aspect to the source aspect matches
    the box exactly; the other axis is derived and ends up >= the box.
    """
    # width / height > source_width / source_height, without floats
    if width * source_height > height * source_width:
        return Dimensions(width, max(1, width * source_height // source_width))
    return Dimensions(max(1, height * source_width // source_height), height)


def _crop_to_fill(
    image: Image.Image, width: int, height: int, resample: Image.Resampling
) -> Image.Image:
    scaled = fill_dimensions(image.width, image.height, width, height)
    resized = image.resize(scaled, resample)

    left = (scaled.width - width) // 2
    top = (scaled.height - height) // 2
    return resized.crop((left, top, left + width, top + height))


@timed_stage("resize")
def resize_image(
    image: Image.Image,
    width: int,
    height: int,
    filter: SamplingFilter = SamplingFilter.LINEAR,
    mode: ResizeMode = ResizeMode.CROP,
) -> Image.Image:
    """
    Resize an image into a target box.

    Framework-agnostic, returns a new image and leaves the input untouched.

    Args:
        image: Decoded source image
        width: Target box width
        height: Target box height
        filter: Resampling kernel
        mode: Resize policy
            fit: scale to fit inside the box, keeping aspect ratio
            crop: scale to cover the box, then crop the overflow evenly
            stretch: scale each axis to the box, ignoring aspect ratio
            cover: scale to cover the box, keeping the overflow

    Returns:
        Resized image

    Raises:
        EncodeError: If Pillow cannot allocate or produce the target size
    """
    resample = filter.resampling

    try:
        match mode:
            case ResizeMode.FIT:
                size = fit_dimensions(image.width, image.height, width, height)
                return image.resize(size, resample)
            case ResizeMode.CROP:
                return _crop_to_fill(image, width, height, resample)
            case ResizeMode.STRETCH:
                return image.resize((width, height), resample)
            case ResizeMode.COVER:
                size = cover_dimensions(image.width, image.height, width, height)
                return image.resize(size, resample)
    except (ValueError, OverflowError, MemoryError) as exc:
        raise EncodeError(str(exc) or type(exc).__name__) from exc
