"""
Style definitions for the Braille dump codec.

A Braille cell has 8 dots and the Unicode block U+2800..U+28FF assigns one
bit to each dot:

    Left | Right
    -----|------
      1  |   8
      2  |  16
      4  |  32
     64  | 128

A "style" decides which bit of the input byte lights which dot.
"""

from enum import Enum
from typing import Tuple

# Unicode Braille Patterns block starts at U+2800
BRAILLE_BASE = 0x2800
BRAILLE_LAST = BRAILLE_BASE + 0xFF

# Braille dot values given in LSB to MSB order for each nibble style
NLBB = (8, 16, 32, 128, 1, 2, 4, 64)
NLBT = (128, 32, 16, 8, 64, 4, 2, 1)
NRBB = (1, 2, 4, 64, 8, 16, 32, 128)
NRBT = (64, 4, 2, 1, 128, 32, 16, 8)

# BCD digit patterns (tens use the left column, ones the right)
TENS = (0x00, 0x40, 0x04, 0x44, 0x02, 0x42, 0x06, 0x46, 0x01, 0x41)
ONES = (0x00, 0x80, 0x20, 0xA0, 0x10, 0x90, 0x30, 0xB0, 0x08, 0x88)


class Style(Enum):
    """The closed set of byte-to-dot layouts."""

    BCD = "bcd"
    DIRECT = "direct"
    NLBB = "nlbb"
    NLBT = "nlbt"
    NRBB = "nrbb"
    NRBT = "nrbt"

    @property
    def description(self) -> str:
        return STYLE_DESCRIPTIONS[self]


STYLE_DESCRIPTIONS = {
    Style.BCD: "Binary Coded Decimal of byte values 0-99",
    Style.DIRECT: "Direct encoding using the standard Braille dot values",
    Style.NLBB: "MSN left column, MSB bottom row (default)",
    Style.NLBT: "MSN left column, MSB top row",
    Style.NRBB: "MSN right column, MSB bottom row",
    Style.NRBT: "MSN right column, MSB top row",
}


def style_encode(values) -> Tuple[Tuple[int, int], ...]:
    """Turn a weight list into (source bit mask, dot weight) pairs."""
    return tuple((1 << i, v) for i, v in enumerate(values))


def style_decode(values) -> Tuple[Tuple[int, int], ...]:
    """Turn a weight list into (dot weight, target bit mask) pairs."""
    return tuple((v, 1 << i) for i, v in enumerate(values))


ENCODE_NLBB = style_encode(NLBB)
ENCODE_NLBT = style_encode(NLBT)
ENCODE_NRBB = style_encode(NRBB)
ENCODE_NRBT = style_encode(NRBT)

DECODE_NLBB = style_decode(NLBB)
DECODE_NLBT = style_decode(NLBT)
DECODE_NRBB = style_decode(NRBB)
DECODE_NRBT = style_decode(NRBT)
