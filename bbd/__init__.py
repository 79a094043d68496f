"""Binary Braille Dump: encode/decode data to/from Braille Patterns characters."""

from .codec import (
    STYLE_REGISTRY,
    StyleCodec,
    codec_for,
    decode_bcd,
    decode_direct,
    decode_nlbb,
    decode_nlbt,
    decode_nrbb,
    decode_nrbt,
    encode_bcd,
    encode_direct,
    encode_nlbb,
    encode_nlbt,
    encode_nrbb,
    encode_nrbt,
)
from .stream import decode, encode
from .styles import Style

__version__ = "0.1.0"
