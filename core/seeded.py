"""
Deterministic pseudo-random values for synthetic market data.

Every generated figure in a report is derived from a seed built out of the
request itself (coordinates, asset type, candidate index), so the same input
always yields the same report. Nothing here is suitable for simulation or
security use.

Rounding helpers use half-up semantics throughout: half-up integer
rounding and fixed-point decimal rounding, rather than Python's
round-half-even.
"""

import math
from decimal import Decimal, ROUND_HALF_UP


INT32_MODULUS = 2 ** 32
INT32_MAX = 2 ** 31 - 1


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    value %= INT32_MODULUS
    if value > INT32_MAX:
        value -= INT32_MODULUS
    return value


def string_seed(text: str) -> int:
    """
    Stable, order-sensitive polynomial hash of a string.

    Iterates UTF-16 code units so non-ASCII input hashes the same way on
    every platform. The accumulator wraps at 32 bits after each step and the
    result is the absolute value of the final accumulator.
    """
    encoded = text.encode("utf-16-le")
    accumulator = 0
    for i in range(0, len(encoded), 2):
        code_unit = encoded[i] | (encoded[i + 1] << 8)
        accumulator = _to_int32((accumulator << 5) - accumulator + code_unit)
    return abs(accumulator)


def pseudo_random_01(seed: float) -> float:
    """Map any seed to a value in [0, 1) via sin mixing."""
    x = math.sin(seed) * 10000
    return x - math.floor(x)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int = 2) -> float:
    """
    Round to a fixed number of decimal places.

    Works on the exact binary value of the float, so 1.005 rounds to 1.0
    just as fixed-point formatting does.
    """
    return float(_quantize(value, places))


def coordinate_key(value: float) -> str:
    """Format a coordinate to 4 decimals for use inside a seed string."""
    # -0.0 must format as 0.0000
    return str(_quantize(value + 0.0, 4))


def _quantize(value: float, places: int) -> Decimal:
    quantum = Decimal(1).scaleb(-places)
    return Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
