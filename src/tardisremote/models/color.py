"""Color model for LED sections."""

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator


def quantize_channel(value: float) -> int:
    """Quantize a continuous channel value in [0, 1] to an 8-bit integer.

    The value is clamped before rounding, so out-of-gamut inputs coming from
    a color picker (e.g. extended-range colors) still map to 0 or 255.

    Example:
        >>> quantize_channel(1.2)
        255
        >>> quantize_channel(-0.3)
        0
    """
    if math.isnan(value):
        raise ValueError("Color channel must be a number, got NaN")
    return int(round(min(max(value, 0.0), 1.0) * 255))


class Color(BaseModel):
    """Standard 8-bit RGB color model.

    This is both the stored color of a section and the payload sent to the
    device. The model is frozen so colors can be shared between the store,
    observers and in-flight commands without defensive copies.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255, description="Red (0-255)")
    g: int = Field(ge=0, le=255, description="Green (0-255)")
    b: int = Field(ge=0, le=255, description="Blue (0-255)")

    @field_validator("r", "g", "b")
    @classmethod
    def validate_rgb(cls, v: int) -> int:
        """Ensure RGB values are in valid range."""
        if not 0 <= v <= 255:
            raise ValueError("RGB values must be between 0 and 255")
        return v

    @classmethod
    def off(cls) -> "Color":
        """Create off (black) color."""
        return cls(r=0, g=0, b=0)

    @classmethod
    def from_unit(cls, r: float, g: float, b: float) -> "Color":
        """Create a color from continuous channels in [0, 1].

        Example:
            >>> Color.from_unit(1.0, 0.5, 0.0)
            Color(r=255, g=128, b=0)
        """
        return cls(r=quantize_channel(r), g=quantize_channel(g), b=quantize_channel(b))

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse a CSS hex color string ('#FFCC00' or 'ffcc00').

        Raises:
            ValueError: If the string is not six hex digits
        """
        digits = value.strip().lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected 6 hex digits, got {value!r}")
        try:
            return cls(r=int(digits[0:2], 16), g=int(digits[2:4], 16), b=int(digits[4:6], 16))
        except ValueError as e:
            raise ValueError(f"Invalid hex color {value!r}") from e

    @property
    def is_off(self) -> bool:
        """True for pure black."""
        return self.r == 0 and self.g == 0 and self.b == 0

    def to_rgb_tuple(self) -> tuple[int, int, int]:
        """Convert to RGB tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Convert to CSS hex color string (e.g., '#FF0000').

        Returns:
            str: Hex color string in format '#RRGGBB'

        Example:
            >>> color = Color(r=255, g=0, b=0)
            >>> color.to_hex()
            '#FF0000'
        """
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"


# Warm accent used to seed the front windows at startup
DEFAULT_ACCENT = Color(r=255, g=204, b=0)
