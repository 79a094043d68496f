"""
Per-byte Braille codecs, one strategy per style.

Every style is a class extending StyleCodec and registered with
@register_style. The module-level ``encode_<style>`` / ``decode_<style>``
names are the bound methods of the registered instances, so callers can
pass them around as plain functions.
"""

from abc import ABC, abstractmethod
from typing import Callable, Dict, Tuple, Union

from .styles import (
    BRAILLE_BASE,
    DECODE_NLBB,
    DECODE_NLBT,
    DECODE_NRBB,
    DECODE_NRBT,
    ENCODE_NLBB,
    ENCODE_NLBT,
    ENCODE_NRBB,
    ENCODE_NRBT,
    ONES,
    TENS,
    Style,
)

EncodeFn = Callable[[int], str]
DecodeFn = Callable[[str], int]

# ==========================================
#  FRAMEWORK: Abstract Base Class & Registry
# ==========================================

class StyleCodec(ABC):
    """Abstract base class that all styles must implement."""

    @property
    @abstractmethod
    def style(self) -> Style:
        """The enumeration member this codec serves."""
        pass

    @property
    def name(self) -> str:
        return self.style.value

    @property
    def description(self) -> str:
        return self.style.description

    @abstractmethod
    def encode_byte(self, b: int) -> str:
        pass

    @abstractmethod
    def decode_byte(self, c: str) -> int:
        pass


STYLE_REGISTRY: Dict[Style, StyleCodec] = {}

def register_style(cls):
    """Decorator to auto-register styles."""
    codec = cls()
    if codec.style in STYLE_REGISTRY:
        raise ValueError(f"Style '{codec.name}' registered twice")
    STYLE_REGISTRY[codec.style] = codec
    return cls


def _dot_byte(c: str) -> int:
    # Unchecked: anything outside the block is folded into 8 bits.
    return (ord(c) - BRAILLE_BASE) & 0xFF

# ==========================================
#  STYLE: bcd
# ==========================================

@register_style
class BcdStyle(StyleCodec):
    """
    Binary coded decimal of the values 0-99.

        Tens | Ones
        -----|-----
         n/a |  8
          64 |  4
          32 |  2
          16 |  1

    The dot numbers above are the digit weights, not Unicode bits.
    """

    style = Style.BCD

    def encode_byte(self, b: int) -> str:
        if not 0 <= b <= 99:
            raise ValueError(f"Invalid BCD value: {b}! Must be in range 0..=99.")
        tens, ones = divmod(b, 10)
        return chr(BRAILLE_BASE + TENS[tens] + ONES[ones])

    def decode_byte(self, c: str) -> int:
        dots = _dot_byte(c)
        return self._digit(dots, TENS) * 10 + self._digit(dots, ONES)

    @staticmethod
    def _digit(dots: int, table) -> int:
        # Highest digit whose pattern is fully present wins; 0 always matches.
        for digit in range(len(table) - 1, -1, -1):
            if dots & table[digit] == table[digit]:
                return digit
        return 0

# ==========================================
#  STYLE: direct
# ==========================================

@register_style
class DirectStyle(StyleCodec):
    """Byte value N is code point U+2800 + N."""

    style = Style.DIRECT

    def encode_byte(self, b: int) -> str:
        return chr(BRAILLE_BASE + b)

    def decode_byte(self, c: str) -> int:
        return _dot_byte(c)

# ==========================================
#  STYLES: nibble layouts
# ==========================================

class NibbleStyle(StyleCodec):
    """Bit-mapped style driven by an encode table and a decode table."""

    encode_table: Tuple[Tuple[int, int], ...] = ()
    decode_table: Tuple[Tuple[int, int], ...] = ()

    def encode_byte(self, b: int) -> str:
        code = BRAILLE_BASE
        for mask, weight in self.encode_table:
            if b & mask == mask:
                code += weight
        return chr(code)

    def decode_byte(self, c: str) -> int:
        dots = _dot_byte(c)
        result = 0
        for weight, mask in self.decode_table:
            if dots & weight == weight:
                result |= mask
        return result


@register_style
class NlbbStyle(NibbleStyle):
    style = Style.NLBB
    encode_table = ENCODE_NLBB
    decode_table = DECODE_NLBB


@register_style
class NlbtStyle(NibbleStyle):
    style = Style.NLBT
    encode_table = ENCODE_NLBT
    decode_table = DECODE_NLBT


@register_style
class NrbbStyle(NibbleStyle):
    style = Style.NRBB
    encode_table = ENCODE_NRBB
    decode_table = DECODE_NRBB


@register_style
class NrbtStyle(NibbleStyle):
    style = Style.NRBT
    encode_table = ENCODE_NRBT
    decode_table = DECODE_NRBT


_missing = [s.value for s in Style if s not in STYLE_REGISTRY]
if _missing:
    raise RuntimeError(f"No codec registered for style(s): {', '.join(_missing)}")
del _missing


def codec_for(style: Union[Style, str]) -> Tuple[EncodeFn, DecodeFn]:
    """Return the (encode_byte, decode_byte) pair for a style or style name."""
    if not isinstance(style, Style):
        try:
            style = Style(style)
        except ValueError:
            raise ValueError(f"Unknown style '{style}'") from None
    codec = STYLE_REGISTRY[style]
    return codec.encode_byte, codec.decode_byte


encode_bcd, decode_bcd = codec_for(Style.BCD)
encode_direct, decode_direct = codec_for(Style.DIRECT)
encode_nlbb, decode_nlbb = codec_for(Style.NLBB)
encode_nlbt, decode_nlbt = codec_for(Style.NLBT)
encode_nrbb, decode_nrbb = codec_for(Style.NRBB)
encode_nrbt, decode_nrbt = codec_for(Style.NRBT)
