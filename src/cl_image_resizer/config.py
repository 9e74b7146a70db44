"""Service settings, loaded from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .common.schemas import ResizeMode, SamplingFilter


class ResizerSettings(BaseSettings):
    """Defaults and limits for the image pipeline.

    Every field can be overridden with a ``CL_IMAGE_RESIZER_<FIELD>``
    environment variable or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CL_IMAGE_RESIZER_",
        env_file=".env",
        extra="ignore",
    )

    # Pipeline defaults
    default_mode: ResizeMode = ResizeMode.CROP
    default_filter: SamplingFilter = SamplingFilter.LINEAR
    default_quality: int = Field(default=100, ge=0, le=100)

    # Source fetching
    fetch_timeout: float | None = Field(default=30.0, gt=0)
    follow_redirects: bool = True
    max_source_bytes: int | None = Field(default=None, gt=0)
    user_agent: str = f"cl-image-resizer/{__version__}"

    # Server
    host: str = "127.0.0.1"
    port: int = 2338


_settings: ResizerSettings | None = None


def get_settings() -> ResizerSettings:
    """Get or create the process-wide settings instance."""
    global _settings

    if _settings is None:
        _settings = ResizerSettings()
    return _settings
