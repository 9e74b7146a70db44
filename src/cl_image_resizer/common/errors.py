"""Error taxonomy for the image pipeline.

Every error carries the HTTP status it maps to and the text returned to the
client, so the HTTP layer never has to inspect the exception type.
"""

from typing import ClassVar, override


class ImageResizerError(Exception):
    """Base class for all errors raised by the pipeline."""

    status_code: ClassVar[int] = 500
    prefix: ClassVar[str] = ""

    def __init__(self, message: str = "An unknown error occurred."):
        self.message: str = message
        super().__init__(self.message)

    @property
    def detail(self) -> str:
        """Text sent back to the client."""
        return f"{self.prefix}{self.message}"

    @override
    def __str__(self):
        return self.message


class InvalidExtensionError(ImageResizerError):
    """Requested filename has no supported suffix."""

    status_code: ClassVar[int] = 400

    def __init__(self, message: str = "Invalid file extension"):
        super().__init__(message)


class InvalidParametersError(ImageResizerError):
    """Query string could not be parsed."""

    status_code: ClassVar[int] = 400
    prefix: ClassVar[str] = "Invalid query parameters: "


class FetchError(ImageResizerError):
    """Source image could not be obtained."""

    status_code: ClassVar[int] = 400
    prefix: ClassVar[str] = "Failed to fetch image: "


class TransportError(FetchError):
    """Network failure or non-success status from the source URL."""

    def __init__(self, message: str, source_status: int | None = None):
        self.source_status: int | None = source_status
        super().__init__(message)


class DecodeError(FetchError):
    """Fetched bytes are not a decodable image."""


class EncodeError(ImageResizerError):
    """Resized image could not be serialized to the requested format."""

    status_code: ClassVar[int] = 500
    prefix: ClassVar[str] = "Failed to resize image: "
