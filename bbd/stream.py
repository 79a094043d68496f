"""Whole-buffer transcoding between bytes and Braille text."""

from typing import Iterable

from .codec import DecodeFn, EncodeFn
from .styles import BRAILLE_BASE, BRAILLE_LAST

WRAP_MARKER = "\\\n"
WRAP_CHARS = ("\\", "\n")


def encode(
    content: Iterable[int],
    convert_byte: EncodeFn,
    columns: int = 0,
    prev_content_length: int = 0,
) -> str:
    """
    Encode bytes to Braille text, one character per byte.

    Args:
        content: Input bytes
        convert_byte: Per-byte encoder of the chosen style
        columns: Characters per line; 0 disables wrapping
        prev_content_length: Bytes already emitted by earlier calls whose
            output will be concatenated with this one. Only its remainder
            modulo ``columns`` matters.

    Returns:
        The encoded text, with a backslash-newline after every full line.
    """
    wrapping = columns > 0
    column = prev_content_length % columns if wrapping else 0

    result = []
    for b in content:
        result.append(convert_byte(b))
        if wrapping:
            column += 1
            if column >= columns:
                result.append(WRAP_MARKER)
                column = 0

    return "".join(result)


def decode(content: str, convert_char: DecodeFn, strict: bool = False) -> bytes:
    """
    Decode Braille text to bytes, ignoring every backslash and newline.

    With ``strict`` set, characters outside U+2800..U+28FF raise ValueError
    instead of being handed to ``convert_char`` unchecked.
    """
    result = bytearray()
    for i, c in enumerate(content):
        if c in WRAP_CHARS:
            continue
        if strict and not BRAILLE_BASE <= ord(c) <= BRAILLE_LAST:
            raise ValueError(f"Bad char {c!r} (U+{ord(c):04X}) at position {i}")
        result.append(convert_char(c))
    return bytes(result)
