"""
Chinese Remainder Theorem reconstruction.

CRT(Modulo[m1](a1), ..., Modulo[mn](an)) folds the residues one modulus at
a time (Garner-style): after folding m1..mi the running result is the
unique integer in [0, m1*...*mi) congruent to a1..ai. Each step needs the
new modulus to be coprime with the product folded in so far.

crt_reconstruct / crt_reconstruct_signed take plain residue and modulus
lists, the way RNS residues come back from a batch of primes.
"""

import math
from typing import Iterable, List, Tuple

from . import inttypes
from .errors import ModuliNotCoprimeError
from .modulo import Modulo, modulo_type


def _fold(result: int, combined: int, y: Modulo) -> Tuple[int, int]:
    m = y.modulus
    if math.gcd(combined, m) != 1:
        raise ModuliNotCoprimeError(combined, m)
    if m == 1:
        # Every integer is congruent mod 1.
        return result, combined
    k = type(y)(combined).inv() * (int(y) - result)
    return result + int(k) * combined, combined * m


def CRT(*residues: Modulo) -> int:
    """
    Smallest non-negative integer congruent to every residue under its
    own modulus.

    >>> CRT(Modulo[11](4), Modulo[14](8))
    92

    CRT() is 0 and CRT(x) is int(x). Raises ModuliNotCoprimeError when a
    modulus shares a factor with the product of the moduli before it.
    """
    for r in residues:
        if not isinstance(r, Modulo):
            raise TypeError(f"CRT expects Modulo values, got {type(r).__name__}")
    if not residues:
        return 0

    first = residues[0]
    result = int(first)
    combined = first.modulus
    for y in residues[1:]:
        result, combined = _fold(result, combined, y)
    return result


def crt_reconstruct(residues: Iterable[int], moduli: Iterable[int],
                    dtype=inttypes.DEFAULT_DTYPE) -> Tuple[int, int]:
    """Reconstruct from residue/modulus lists.

    Returns (x, M) with M = prod(moduli) and x in [0, M).
    """
    residues = list(residues)
    moduli: List[int] = [int(m) for m in moduli]
    if len(residues) != len(moduli):
        raise ValueError(
            f"got {len(residues)} residues for {len(moduli)} moduli"
        )
    values = [modulo_type(m, dtype)(r) for r, m in zip(residues, moduli)]
    return CRT(*values), math.prod(moduli)


def centered(x: int, M: int) -> int:
    """Map x mod M to the symmetric range (-M/2, M/2]."""
    x = x % M
    return x - M if x > M // 2 else x


def crt_reconstruct_signed(residues: Iterable[int], moduli: Iterable[int],
                           dtype=inttypes.DEFAULT_DTYPE) -> int:
    """Reconstruct a signed integer assumed to lie in (-M/2, M/2]."""
    x, M = crt_reconstruct(residues, moduli, dtype)
    return centered(x, M)
