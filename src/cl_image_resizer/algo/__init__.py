"""Pipeline stages: fetch, size resolution, resize, encode, data URI."""

from .data_uri import to_data_uri
from .encode import encode_image
from .fetch import decode_image, fetch_image
from .resize import cover_dimensions, fill_dimensions, fit_dimensions, resize_image
from .size_resolver import SizeCase, classify_size_request, resolve_size

__all__ = [
    "SizeCase",
    "classify_size_request",
    "cover_dimensions",
    "decode_image",
    "encode_image",
    "fetch_image",
    "fill_dimensions",
    "fit_dimensions",
    "resize_image",
    "resolve_size",
    "to_data_uri",
]
