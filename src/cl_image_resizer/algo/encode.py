"""Pure image encoding logic (in-memory)."""

from io import BytesIO

from PIL import Image

from ..common.errors import EncodeError
from ..common.schemas import ImageFormat, OutputFormat
from ..utils.profiling import timed_stage


@timed_stage("encode")
def encode_image(image: Image.Image, output_format: OutputFormat) -> bytes:
    """
    Serialize an image into an in-memory buffer.

    Args:
        image: Image to encode
        output_format: Target format; quality is only applied to JPEG

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If Pillow cannot write the image in the requested format
    """
    save_kwargs: dict[str, object] = {}

    if output_format.format is ImageFormat.JPEG:
        # JPEG does not support alpha channel
        if image.mode in ("RGBA", "LA", "P"):
            image = image.convert("RGB")
        if output_format.quality is not None:
            save_kwargs["quality"] = output_format.quality

    buffer = BytesIO()
    try:
        image.save(buffer, format=output_format.format.pil_format, **save_kwargs)
    except (OSError, ValueError, KeyError) as exc:
        raise EncodeError(str(exc)) from exc

    return buffer.getvalue()
