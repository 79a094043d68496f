from typing import Tuple

from reedsolo import ReedSolomonError, RSCodec

from .log import log_info, log_warn

# ECC magic byte for detection of error-corrected payloads
ECC_MAGIC_BYTE = 0xEC
DEFAULT_ECC_SYMBOLS = 0
MAX_ECC_SYMBOLS = 254


class ErrorCorrection:
    """
    Reed-Solomon error correction wrapper.
    Adds ECC bytes to a buffer before it is dumped to Braille.

    Frame: [MAGIC_BYTE] [ECC_SYMBOLS_COUNT] [RS_ENCODED_DATA]
    """

    @staticmethod
    def protect(data: bytes, ecc_symbols: int) -> bytes:
        """Add Reed-Solomon ECC to data; ecc_symbols <= 0 leaves it untouched."""
        if ecc_symbols <= 0:
            return data
        if ecc_symbols > MAX_ECC_SYMBOLS:
            raise ValueError(f"ECC symbols must be in range 1..={MAX_ECC_SYMBOLS}, got {ecc_symbols}")

        rsc = RSCodec(ecc_symbols)
        encoded = rsc.encode(data)
        log_info(f"Added {ecc_symbols} ECC symbol(s) per block to {len(data)} byte(s).")
        return bytes([ECC_MAGIC_BYTE, ecc_symbols]) + bytes(encoded)

    @staticmethod
    def recover(data: bytes) -> Tuple[bytes, bool, int]:
        """
        Decode and repair Reed-Solomon protected data.

        Only frames starting with the magic byte are touched; anything
        else is returned as-is.

        Returns:
            (decoded_data, had_ecc, errors_corrected); errors_corrected is
            -1 when the damage could not be repaired.
        """
        if len(data) < 2 or data[0] != ECC_MAGIC_BYTE:
            return data, False, 0

        ecc_symbols = data[1]
        payload = data[2:]
        if not 1 <= ecc_symbols <= MAX_ECC_SYMBOLS:
            # Never written by protect(), so not a frame.
            return data, False, 0

        try:
            rsc = RSCodec(ecc_symbols)
            decoded, _, errata_pos = rsc.decode(payload)
        except (ReedSolomonError, ValueError) as e:
            log_warn(f"ECC decode failed: {e}. Data may be corrupted beyond repair.")
            return payload, True, -1

        errors_corrected = len(errata_pos) if errata_pos else 0
        return bytes(decoded), True, errors_corrected
