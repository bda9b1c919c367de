"""
Color model for sketchlogic.

Block colors are stored on the wire as signed 32-bit integers holding an
ARGB value (0xAARRGGBB).
"""

from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Color(BaseModel):
    """
    A 32-bit ARGB color.
    """

    model_config = ConfigDict(frozen=True)

    value: int = Field(
        ...,
        description="The color packed as an unsigned 0xAARRGGBB integer"
    )

    @field_validator("value")
    @classmethod
    def _mask_to_32_bits(cls, value: int) -> int:
        return value & 0xFFFFFFFF

    @classmethod
    def from_signed(cls, value: int) -> "Color":
        """Create a color from the signed integer form used in logic files."""
        return cls(value=value)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        """Create an opaque color."""
        return cls.from_argb(0xFF, red, green, blue)

    @classmethod
    def from_argb(cls, alpha: int, red: int, green: int, blue: int) -> "Color":
        return cls(value=(alpha & 0xFF) << 24 | (red & 0xFF) << 16 | (green & 0xFF) << 8 | (blue & 0xFF))

    @classmethod
    def parse_hex(cls, text: str) -> "Color":
        """
        Parse an ``RRGGBB`` or ``AARRGGBB`` hex string, with or without a leading ``#``.

        Raises:
            ValueError: If the text is not a 6 or 8 digit hex number
        """
        digits = text[1:] if text.startswith("#") else text
        if len(digits) == 6:
            digits = "ff" + digits
        if len(digits) != 8:
            raise ValueError(f"Invalid hex color: {text!r}")
        return cls(value=int(digits, 16))

    @property
    def alpha(self) -> int:
        return self.value >> 24 & 0xFF

    @property
    def red(self) -> int:
        return self.value >> 16 & 0xFF

    @property
    def green(self) -> int:
        return self.value >> 8 & 0xFF

    @property
    def blue(self) -> int:
        return self.value & 0xFF

    def rgb(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def to_signed(self) -> int:
        """Return the signed 32-bit form written to logic files."""
        if self.value >= 0x80000000:
            return self.value - 0x100000000
        return self.value

    def __str__(self) -> str:
        return f"{self.value:#010x}"
