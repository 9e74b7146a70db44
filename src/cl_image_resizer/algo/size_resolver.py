"""Target box resolution from optional requested width/height.

Framework-agnostic, pure integer logic. A requested dimension of 0 counts as
not given. When only one side is requested the other is derived from the
source aspect ratio, and a lone side larger than the source falls back to the
source size (no upscaling). When both sides are given they are used as-is.
"""

from enum import Enum

from ..common.schemas import Dimensions


class SizeCase(Enum):
    SOURCE = "source"
    EXPLICIT = "explicit"
    WIDTH_ONLY = "width_only"
    HEIGHT_ONLY = "height_only"


# Keyed by (width given, height given) after zeros are dropped
_SIZE_CASES: dict[tuple[bool, bool], SizeCase] = {
    (False, False): SizeCase.SOURCE,
    (True, True): SizeCase.EXPLICIT,
    (True, False): SizeCase.WIDTH_ONLY,
    (False, True): SizeCase.HEIGHT_ONLY,
}


def _given(value: int | None) -> int | None:
    return value if value else None


def classify_size_request(width: int | None, height: int | None) -> SizeCase:
    """Select the resolution rule for a (width, height) request."""
    return _SIZE_CASES[(_given(width) is not None, _given(height) is not None)]


def scale_dimension(value: int, numerator: int, denominator: int) -> int:
    """Return ``round(value * numerator / denominator)``, half-up, at least 1."""
    scaled = (2 * value * numerator + denominator) // (2 * denominator)
    return max(1, scaled)


def resolve_size(
    source_width: int,
    source_height: int,
    width: int | None = None,
    height: int | None = None,
) -> Dimensions:
    """
    Compute the target box for a resize request.

    Args:
        source_width: Width of the decoded source image
        source_height: Height of the decoded source image
        width: Requested width, None or 0 if not given
        height: Requested height, None or 0 if not given

    Returns:
        Target dimensions, both at least 1
    """
    source = Dimensions(source_width, source_height)
    width = _given(width)
    height = _given(height)

    match classify_size_request(width, height):
        case SizeCase.EXPLICIT if width is not None and height is not None:
            return Dimensions(width, height)

        case SizeCase.WIDTH_ONLY if width is not None:
            if width > source_width:
                return source
            return Dimensions(width, scale_dimension(width, source_height, source_width))

        case SizeCase.HEIGHT_ONLY if height is not None:
            if height > source_height:
                return source
            return Dimensions(scale_dimension(height, source_width, source_height), height)

        case _:
            return source
