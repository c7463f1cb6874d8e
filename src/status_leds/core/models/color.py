"""RGBW colour value type with hex (de)serialisation."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from status_leds.core.exceptions import ColorFormatError

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class Color(BaseModel):
    """Immutable 4-channel colour.  The default instance is "off".

    Hex form is ``RRGGBBWW``; :meth:`from_hex` also accepts a ``0x`` or
    ``#`` prefix and either case.
    """

    model_config = ConfigDict(frozen=True)

    red: int = Field(default=0, ge=0, le=255)
    green: int = Field(default=0, ge=0, le=255)
    blue: int = Field(default=0, ge=0, le=255)
    white: int = Field(default=0, ge=0, le=255)

    @classmethod
    def rgbw(cls, red: int, green: int, blue: int, white: int) -> Color:
        """Positional shorthand: ``Color.rgbw(255, 0, 0, 0)``."""
        return cls(red=red, green=green, blue=blue, white=white)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``RRGGBBWW`` (optionally ``0x``/``#`` prefixed).

        Raises:
            ColorFormatError: Wrong length or non-hex characters.
        """
        digits = value
        if digits.startswith(("0x", "0X")):
            digits = digits[2:]
        elif digits.startswith("#"):
            digits = digits[1:]

        if len(digits) != 8:
            raise ColorFormatError(value, f"expected 8 hex characters, got {len(digits)}")
        if not _HEX_DIGITS.issuperset(digits):
            raise ColorFormatError(value, "contains non-hex characters")

        raw = bytes.fromhex(digits)
        return cls(red=raw[0], green=raw[1], blue=raw[2], white=raw[3])

    def to_hex(self) -> str:
        return f"{self.red:02x}{self.green:02x}{self.blue:02x}{self.white:02x}"

    def to_bytes(self) -> bytes:
        """Return the 4 channel bytes in R, G, B, W order."""
        return bytes((self.red, self.green, self.blue, self.white))

    def __str__(self) -> str:
        return self.to_hex()


OFF = Color()
# Dim white shown on every cell until its first state arrives.
LOADING = Color.rgbw(60, 60, 60, 60)
