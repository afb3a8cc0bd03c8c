"""
Modular integers with a class-level modulus.

``Modulo[p, dtype](n)`` is the residue of ``n`` modulo ``p`` stored as a
numpy scalar of ``dtype`` (default int64). The modulus and the
representation belong to the class, not the instance: ``Modulo[p, dtype]``
returns a cached subclass, one per distinct (p, dtype) pair.

    >>> x = Modulo[11](4)
    >>> x * 3
    Modulo[11, int64](1)
    >>> str(x / 3)
    '5'

Values of the same modulus combine even when their representations
differ; the result uses a representation covering both (see
``inttypes.result_dtype``). Arithmetic never wraps: when the modulus is
too large for the fast path the computation moves to a wider
representation.
"""

import math
import numbers
from functools import lru_cache
from typing import Optional, Union

import numpy as np
from sympy.core.intfunc import igcdex

from . import inttypes
from .errors import (
    InvalidModulusError,
    ModulusMismatchError,
    NotInvertibleError,
    RepresentationError,
)


class Modulo:
    """
    Immutable residue modulo ``cls.modulus``.

    Use ``Modulo[p]`` or ``Modulo[p, dtype]`` to get the concrete type;
    the unparameterised base class cannot be instantiated.
    """

    __slots__ = ("_value",)

    modulus: Optional[int] = None
    dtype: Optional[np.dtype] = None

    def __class_getitem__(cls, params):
        if cls.modulus is not None:
            raise TypeError(f"{cls.__name__} is already parameterised")
        if not isinstance(params, tuple):
            params = (params,)
        return modulo_type(*params)

    def __init__(self, n):
        cls = type(self)
        if cls.modulus is None:
            raise TypeError("Modulo needs a modulus: use Modulo[p](n) or Modulo[p, dtype](n)")
        if not isinstance(n, numbers.Integral):
            raise TypeError(f"cannot build {cls.__name__} from {type(n).__name__}")
        self._value = inttypes.to_scalar(int(n) % cls.modulus, cls.dtype)

    @classmethod
    def zero(cls):
        return cls(0)

    @classmethod
    def one(cls):
        return cls(1)

    @property
    def value(self) -> np.integer:
        """The residue, a numpy scalar in [0, modulus)."""
        return self._value

    def __int__(self) -> int:
        return int(self._value)

    def __reduce__(self):
        return (_rebuild, (self.modulus, self.dtype.str, int(self)))

    # -- equality ---------------------------------------------------------

    def __eq__(self, other):
        if isinstance(other, Modulo):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(self, other)
            return int(self) == int(other)
        if isinstance(other, numbers.Integral):
            return int(self) == int(other) % self.modulus
        return NotImplemented

    def __hash__(self):
        # Equal residues under different moduli hash apart.
        return hash((int(self), self.modulus))

    # -- arithmetic -------------------------------------------------------

    def _coerce(self, other) -> Optional["Modulo"]:
        if isinstance(other, Modulo):
            if other.modulus != self.modulus:
                raise ModulusMismatchError(self, other)
            return other
        if isinstance(other, numbers.Integral):
            return type(self)(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        p = self.modulus
        dt = inttypes.result_dtype(self.dtype, other.dtype)
        # Fast paths first: each operand is < p, so the sum is < 2p.
        if p < inttypes.typemax(dt) // 2:
            total = inttypes.add(self.value, other.value, dt)
        elif p < inttypes.typemax(inttypes.unsigned(dt)) // 2:
            total = inttypes.add(self.value, other.value, inttypes.unsigned(dt))
        else:
            total = inttypes.add(self.value, other.value, inttypes.widen(dt))
        return modulo_type(p, dt)(total)

    __radd__ = __add__

    def __neg__(self):
        cls = type(self)
        dt = cls.dtype
        if inttypes.is_signed(dt):
            return cls(inttypes.neg(self.value, dt))
        sdt = inttypes.signed(dt)
        if int(self.value) > inttypes.typemax(sdt):
            return cls(inttypes.neg(self.value, inttypes.widen(sdt)))
        return cls(inttypes.neg(self.value, sdt))

    def __pos__(self):
        return self

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return (-self) + other

    def __mul__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        dt = inttypes.result_dtype(self.dtype, other.dtype)
        product, overflowed = inttypes.mul_with_overflow(self.value, other.value, dt)
        if overflowed:
            product = inttypes.widemul(self.value, other.value, dt)
        return modulo_type(self.modulus, dt)(product)

    __rmul__ = __mul__

    def __truediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self * other.inv()

    def __rtruediv__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other * self.inv()

    def inv(self):
        """Multiplicative inverse; raises NotInvertibleError for non-units."""
        p = self.modulus
        if p == 1:
            # The zero ring has no units worth reporting.
            raise NotInvertibleError(self)
        v, _, g = igcdex(int(self), p)
        if g != 1:
            raise NotInvertibleError(self)
        return type(self)(v)

    def __pow__(self, k, mod=None):
        if mod is not None or not isinstance(k, numbers.Integral):
            return NotImplemented
        k = int(k)
        cls = type(self)
        if k > 0:
            return cls(pow(int(self), k, cls.modulus))
        if k == 0:
            return cls.one()
        return cls(pow(int(self.inv()), -k, cls.modulus))

    # -- display ----------------------------------------------------------

    def __str__(self):
        return str(int(self))

    def __repr__(self):
        return f"{type(self).__name__}({int(self)})"

    def __format__(self, spec):
        # "t" asks for the type-qualified form.
        if spec == "t":
            return repr(self)
        return format(int(self), spec)


def modulo_type(p, dtype=inttypes.DEFAULT_DTYPE) -> type:
    """
    The ``Modulo`` subclass for modulus ``p`` and representation ``dtype``.

    Raises InvalidModulusError unless ``p`` is a positive integer, and
    RepresentationError when residues mod ``p`` do not fit in ``dtype``.
    Both checks run once per distinct (p, dtype).
    """
    if not isinstance(p, numbers.Integral) or isinstance(p, bool):
        raise InvalidModulusError(p)
    return _modulo_type(int(p), inttypes.as_dtype(dtype))


@lru_cache(maxsize=None)
def _modulo_type(p: int, dt: np.dtype) -> type:
    if p <= 0:
        raise InvalidModulusError(p)
    if p - 1 > inttypes.typemax(dt):
        raise RepresentationError(f"residues mod {p} do not fit in {dt.name}")
    name = f"Modulo[{p}, {dt.name}]"
    return type(name, (Modulo,), {
        "__slots__": (),
        "__module__": __name__,
        "__qualname__": name,
        "modulus": p,
        "dtype": dt,
    })


def _rebuild(p: int, dtype: str, value: int) -> Modulo:
    return modulo_type(p, dtype)(value)


def inv(x: Modulo) -> Modulo:
    return x.inv()


def is_invertible(x: Modulo) -> bool:
    """True if ``x`` has a multiplicative inverse."""
    return x.modulus > 1 and math.gcd(int(x), x.modulus) == 1


def modulus_of(x: Union[Modulo, type]) -> int:
    """Modulus of a Modulo value or of a parameterised Modulo type."""
    if isinstance(x, type) and issubclass(x, Modulo) and x.modulus is not None:
        return x.modulus
    if isinstance(x, Modulo):
        return x.modulus
    raise TypeError(f"{x!r} has no modulus")


def to_integer(x: Modulo, dtype=None):
    """
    The residue of ``x`` as a Python int, or as a numpy scalar of ``dtype``.

    The residue is reinterpreted, not reduced again; RepresentationError if
    it does not fit.
    """
    if dtype is None:
        return int(x)
    return inttypes.to_scalar(x.value, inttypes.as_dtype(dtype))
