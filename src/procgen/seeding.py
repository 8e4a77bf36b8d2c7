"""
Seed derivation for planet generation.

Every noise generator in the pipeline is constructed from an integer that
comes out of `stable_hash`, so the hash has to be bit-identical everywhere.
"""

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    """Wrap an arbitrary integer into the signed 32-bit range."""
    value &= _INT32_MASK
    if value & _INT32_SIGN:
        value -= 1 << 32
    return value


def stable_hash(text: str) -> int:
    """
    32-bit polynomial rolling hash (multiplier 31) of a string.

    Iterates over UTF-16 code units so that names outside the BMP hash the
    same way a browser would hash them. The running value wraps to signed
    32-bit after every step and the absolute value is returned, which means
    the result lies in [0, 2**31].

    Args:
        text: Planet name (may be empty)

    Returns:
        Non-negative integer seed; 0 for the empty string
    """

    encoded = (text or "").encode("utf-16-le")
    h = 0
    for i in range(0, len(encoded), 2):
        unit = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + unit)
    return abs(h)
