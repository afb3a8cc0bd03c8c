"""
Fixed-width integer representations for residues.

A representation is a numpy integer dtype of 8, 16, 32 or 64 bits, signed
or unsigned. This module provides the integer semantics the modular
arithmetic is built on:

  - bounds (typemin / typemax) and signed / unsigned counterparts
  - widen: the next larger representation of the same signedness
  - promote: the common representation of two operands
  - checked and widening arithmetic on numpy scalars

Past 64 bits numpy has no wider integer type, so the wide tier of
add / neg / widemul is exact Python-int arithmetic.

All numpy arithmetic here runs under ``np.errstate(over="raise")``: a
computation that would wrap raises ``FloatingPointError`` instead.
"""

from typing import Optional, Tuple, Union

import numpy as np

from .errors import RepresentationError

DEFAULT_DTYPE = np.dtype(np.int64)

IntLike = Union[int, np.integer]


def as_dtype(t) -> np.dtype:
    """Normalise ``t`` (dtype, scalar type or string) to an integer dtype."""
    dt = np.dtype(t)
    if dt.kind not in "iu":
        raise TypeError(f"{dt.name} is not a fixed-width integer representation")
    return dt


def typemin(dt: np.dtype) -> int:
    return int(np.iinfo(dt).min)


def typemax(dt: np.dtype) -> int:
    return int(np.iinfo(dt).max)


def is_signed(dt: np.dtype) -> bool:
    return dt.kind == "i"


def signed(dt: np.dtype) -> np.dtype:
    """Signed representation of the same width."""
    return np.dtype(f"i{dt.itemsize}")


def unsigned(dt: np.dtype) -> np.dtype:
    """Unsigned representation of the same width."""
    return np.dtype(f"u{dt.itemsize}")


def widen(dt: np.dtype) -> Optional[np.dtype]:
    """Twice-as-wide representation of the same signedness, None past 64 bits."""
    if dt.itemsize >= 8:
        return None
    return np.dtype(f"{dt.kind}{dt.itemsize * 2}")


def promote(dt1: np.dtype, dt2: np.dtype) -> np.dtype:
    """
    Common representation of two operands.

    Same signedness gives the wider type. Mixed signedness gives the signed
    type when it is strictly wider, the unsigned type otherwise, so int32 and
    uint32 promote to uint32 (numpy itself would pick int64, and float64 for
    int64 with uint64).
    """
    if dt1.kind == dt2.kind:
        return dt1 if dt1.itemsize >= dt2.itemsize else dt2
    s, u = (dt1, dt2) if is_signed(dt1) else (dt2, dt1)
    return s if s.itemsize > u.itemsize else u


def covers(dt: np.dtype, *others: np.dtype) -> bool:
    """True if every value of every type in ``others`` fits in ``dt``."""
    return all(
        typemin(dt) <= typemin(o) and typemax(dt) >= typemax(o) for o in others
    )


def result_dtype(dt1: np.dtype, dt2: np.dtype) -> np.dtype:
    """
    Representation of the result of a binary operation.

    The promoted type is widened once more when it does not cover both input
    ranges (int8 with uint8 promotes to uint8, which loses int8's negative
    half, so the result is uint16). At 64 bits there is nothing wider; the
    promoted type is kept since residues are never negative and the promoted
    type's maximum is at least both inputs' maxima.
    """
    dt = promote(dt1, dt2)
    if dt1 != dt2 and not covers(dt, dt1, dt2):
        wider = widen(dt)
        if wider is not None:
            dt = wider
    return dt


def to_scalar(n: IntLike, dt: np.dtype) -> np.integer:
    """Exact conversion of ``n`` to a numpy scalar of ``dt``; never wraps."""
    n = int(n)
    if not typemin(dt) <= n <= typemax(dt):
        raise RepresentationError(f"{n} does not fit in {dt.name}")
    return dt.type(n)


def add(a: IntLike, b: IntLike, dt: Optional[np.dtype]):
    """a + b in ``dt``; None means exact Python ints."""
    if dt is None:
        return int(a) + int(b)
    with np.errstate(over="raise"):
        return to_scalar(a, dt) + to_scalar(b, dt)


def neg(a: IntLike, dt: Optional[np.dtype]):
    """-a in ``dt``; None means exact Python ints."""
    if dt is None:
        return -int(a)
    with np.errstate(over="raise"):
        return -to_scalar(a, dt)


def mul_with_overflow(a: IntLike, b: IntLike, dt: np.dtype) -> Tuple[np.integer, bool]:
    """
    Checked multiply in ``dt``.

    Returns (product, overflowed). When the product overflowed the first
    element is the wrapped value and must not be used.
    """
    x, y = to_scalar(a, dt), to_scalar(b, dt)
    try:
        with np.errstate(over="raise"):
            return x * y, False
    except FloatingPointError:
        with np.errstate(over="ignore"):
            return x * y, True


def widemul(a: IntLike, b: IntLike, dt: np.dtype):
    """
    Full product of two values of representation ``dt``.

    The product of two n-bit values always fits in 2n bits, so it is computed
    in ``widen(dt)``, or with Python ints when ``dt`` is already 64 bits.
    """
    wide = widen(dt)
    if wide is None:
        return int(a) * int(b)
    with np.errstate(over="raise"):
        return to_scalar(a, wide) * to_scalar(b, wide)
