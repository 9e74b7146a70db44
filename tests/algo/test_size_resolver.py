"""Unit tests for target box resolution.

Covers every branch of the decision table: no request, explicit box, zero
handling, single-side requests with aspect derivation and the upscale guard.
"""

import pytest

from cl_image_resizer.algo.size_resolver import (
    SizeCase,
    classify_size_request,
    resolve_size,
    scale_dimension,
)
from cl_image_resizer.common.schemas import Dimensions

# ============================================================================
# CLASSIFICATION
# ============================================================================


@pytest.mark.parametrize(
    ("width", "height", "expected"),
    [
        (None, None, SizeCase.SOURCE),
        (0, 0, SizeCase.SOURCE),
        (0, None, SizeCase.SOURCE),
        (200, 100, SizeCase.EXPLICIT),
        (200, None, SizeCase.WIDTH_ONLY),
        (200, 0, SizeCase.WIDTH_ONLY),
        (None, 100, SizeCase.HEIGHT_ONLY),
        (0, 100, SizeCase.HEIGHT_ONLY),
    ],
)
def test_classify_size_request(width: int | None, height: int | None, expected: SizeCase):
    assert classify_size_request(width, height) is expected


# ============================================================================
# RESOLUTION
# ============================================================================


@pytest.mark.parametrize(("sw", "sh"), [(1, 1), (1000, 500), (37, 911)])
def test_no_request_keeps_source(sw: int, sh: int):
    assert resolve_size(sw, sh) == (sw, sh)
    assert resolve_size(sw, sh, None, None) == (sw, sh)


def test_both_zero_keeps_source():
    assert resolve_size(640, 480, 0, 0) == (640, 480)


def test_zero_width_is_height_only():
    assert resolve_size(1000, 500, 0, 100) == resolve_size(1000, 500, None, 100)
    assert resolve_size(1000, 500, 0, 100) == (200, 100)


def test_zero_height_is_width_only():
    assert resolve_size(1000, 500, 200, 0) == resolve_size(1000, 500, 200, None)


def test_explicit_box_is_taken_verbatim():
    # aspect ratio of the source is ignored
    assert resolve_size(1000, 500, 300, 300) == (300, 300)
    assert resolve_size(10, 10, 4000, 20) == (4000, 20)


def test_width_only_derives_height():
    assert resolve_size(1000, 500, 200, None) == (200, 100)


def test_height_only_derives_width():
    assert resolve_size(1000, 500, None, 250) == (500, 250)


def test_width_only_larger_than_source_falls_back():
    assert resolve_size(1000, 500, 1001, None) == (1000, 500)


def test_height_only_larger_than_source_falls_back():
    assert resolve_size(1000, 500, None, 501) == (1000, 500)


def test_width_equal_to_source_is_allowed():
    assert resolve_size(1000, 500, 1000, None) == (1000, 500)


def test_derived_dimension_rounds_half_up():
    assert resolve_size(2, 5, 1, None) == (1, 3)  # 2.5
    assert resolve_size(4, 5, 3, None) == (3, 4)  # 3.75
    assert resolve_size(4, 5, 1, None) == (1, 1)  # 1.25


def test_derived_dimension_never_zero():
    assert resolve_size(1000, 1, 10, None) == (10, 1)
    assert resolve_size(1, 1000, None, 10) == (1, 10)


def test_scale_dimension():
    assert scale_dimension(200, 500, 1000) == 100
    assert scale_dimension(1, 1, 3) == 1  # 0.33 clamps to 1
    assert scale_dimension(5, 1, 2) == 3  # 2.5 rounds up


@pytest.mark.parametrize("width", [None, 0, 1, 300, 5000])
@pytest.mark.parametrize("height", [None, 0, 1, 200, 5000])
def test_every_request_resolves_to_positive_dimensions(width: int | None, height: int | None):
    """Each combination of inputs reaches a rule that returns a real box."""
    target = resolve_size(640, 480, width, height)

    assert isinstance(target, Dimensions)
    assert target.width >= 1 and target.height >= 1
