"""Base64 data URI wrapping for encoded images."""

import base64


def to_data_uri(buffer: bytes, content_type: str) -> str:
    """Wrap ``buffer`` as ``data:<content_type>;base64,<data>``.

    The base64 payload uses the standard alphabet with the trailing ``=``
    padding removed.
    """
    data = base64.b64encode(buffer).decode("ascii").rstrip("=")
    return f"data:{content_type};base64,{data}"
