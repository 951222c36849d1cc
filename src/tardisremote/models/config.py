"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from tardisremote.models.color import DEFAULT_ACCENT, Color
from tardisremote.utils.persistence import PydanticPersistence

CONFIG_DIR = Path.home() / ".tardisremote"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Application configuration and settings."""

    # Device connection
    device_url: str = Field(
        default="http://192.168.1.161",
        description="Base URL of the TARDIS controller REST API",
    )
    request_timeout: float = Field(
        default=5.0, gt=0, description="Total timeout for a single API request (seconds)"
    )

    # Animation
    fade_frame_rate: int = Field(
        default=60, ge=1, le=240, description="Opacity fade steps per second"
    )

    # Cosmetic seed for the local section model
    front_window_color: Color = Field(
        default=DEFAULT_ACCENT,
        description="Color shown for the front windows before any command is sent",
    )

    # CLI
    command_drain_timeout: float = Field(
        default=10.0,
        gt=0,
        description="How long the CLI waits for in-flight commands before giving up (seconds)",
    )

    @field_validator("device_url")
    @classmethod
    def validate_device_url(cls, v: str) -> str:
        """Require an absolute http(s) URL without a trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("device_url must start with http:// or https://")
        return v.rstrip("/")

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses default location
                  (~/.tardisremote/config.json).

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        return PydanticPersistence.load_json_or_default(path, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        if path is None:
            path = DEFAULT_CONFIG_PATH

        PydanticPersistence.save_json(self, path)
