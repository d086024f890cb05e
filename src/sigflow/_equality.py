"""Equality policy — decides whether a write actually changes a signal.

Identity semantics in the spirit of JavaScript's ``Object.is``: scalars
compare by value, everything else by identity. ``nan`` is the same as
``nan``; ``0.0`` and ``-0.0`` differ. ``int`` and ``float`` are one number
kind (``1`` is the same as ``1.0``), ``bool`` is not a number here. Other
scalars must share a type. Structured values are never compared deeply.
"""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction

_SCALARS = (int, float, complex, str, bytes, bool, Decimal, Fraction)


def _is_number(value: object) -> bool:
    return type(value) is int or type(value) is float


def _same_float(a: float, b: float) -> bool:
    if math.isnan(a) or math.isnan(b):
        return math.isnan(a) and math.isnan(b)
    if a == 0.0 and b == 0.0:
        return math.copysign(1.0, a) == math.copysign(1.0, b)
    return a == b


def _same_decimal(a: Decimal, b: Decimal) -> bool:
    # == raises InvalidOperation on signalling NaNs; never reach it with one.
    if a.is_nan() or b.is_nan():
        return a.is_nan() and b.is_nan()
    if a.is_zero() and b.is_zero():
        return a.is_signed() == b.is_signed()
    return a == b


def is_same(a: object, b: object) -> bool:
    """True when writing ``b`` over ``a`` should not notify anyone."""
    if a is b:
        return True
    if _is_number(a) and _is_number(b):
        if type(a) is float and type(b) is float:
            return _same_float(a, b)
        # int vs float: an int is never nan and its zero is +0.
        if a == 0 and b == 0:
            return math.copysign(1.0, a) == math.copysign(1.0, b)
        return a == b
    if type(a) is not type(b) or not isinstance(a, _SCALARS):
        return False
    if isinstance(a, complex):
        return _same_float(a.real, b.real) and _same_float(a.imag, b.imag)
    if isinstance(a, Decimal):
        return _same_decimal(a, b)
    return a == b
