"""Numeric helpers called from generated code.

Molang arithmetic follows IEEE-754 single precision semantics: generated
code rounds every computed value with :func:`f32`. The helpers here
never raise where Python's float operators would (division by zero,
domain errors); they return ``inf`` or ``nan`` instead.
"""

from __future__ import annotations

import math
import struct

INF = math.inf
NAN = math.nan

_FLOAT32 = struct.Struct("<f")


def f32(a: float) -> float:
    """Round to the nearest single precision value."""
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(a))[0]
    except OverflowError:
        return math.copysign(INF, a)


def div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or a != a:
            return NAN
        return math.copysign(INF, a) * math.copysign(1.0, b)
    return a / b


def mod(a: float, b: float) -> float:
    """Remainder with the sign of the dividend, like C ``fmod``."""
    if b == 0.0 or math.isinf(a) or a != a or b != b:
        return NAN
    return math.fmod(a, b)


def power(a: float, b: float) -> float:
    try:
        result = math.pow(a, b)
    except ValueError:
        return NAN
    except OverflowError:
        return INF
    return result


def sqrt(a: float) -> float:
    return math.sqrt(a) if a >= 0.0 else NAN


def ln(a: float) -> float:
    if a > 0.0:
        return math.log(a)
    if a == 0.0:
        return -INF
    return NAN


def exp(a: float) -> float:
    try:
        return math.exp(a)
    except OverflowError:
        return INF


def sin_deg(a: float) -> float:
    return math.sin(math.radians(a)) if math.isfinite(a) else NAN


def cos_deg(a: float) -> float:
    return math.cos(math.radians(a)) if math.isfinite(a) else NAN


def atan2_deg(y: float, x: float) -> float:
    return math.degrees(math.atan2(y, x))


def round_half_up(a: float) -> float:
    if not math.isfinite(a):
        return a
    return float(math.floor(a + 0.5))


def floor(a: float) -> float:
    return float(math.floor(a)) if math.isfinite(a) else a


def ceil(a: float) -> float:
    return float(math.ceil(a)) if math.isfinite(a) else a


def trunc(a: float) -> float:
    return float(math.trunc(a)) if math.isfinite(a) else a


def fmin(a: float, b: float) -> float:
    """Smaller of two values; NaN if either is NaN."""
    if a != a or b != b:
        return NAN
    return a if a <= b else b


def fmax(a: float, b: float) -> float:
    """Larger of two values; NaN if either is NaN."""
    if a != a or b != b:
        return NAN
    return a if a >= b else b


def truth(a: float) -> bool:
    """Molang truthiness: any non-zero value (including NaN) is true."""
    return a != 0.0


HELPERS = {
    "_div": div,
    "_mod": mod,
    "_pow": power,
    "_sqrt": sqrt,
    "_ln": ln,
    "_exp": exp,
    "_sin": sin_deg,
    "_cos": cos_deg,
    "_atan2": atan2_deg,
    "_round": round_half_up,
    "_floor": floor,
    "_ceil": ceil,
    "_trunc": trunc,
    "_abs": abs,
    "_min": fmin,
    "_max": fmax,
    "_f32": f32,
}
