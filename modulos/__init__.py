"""
modulos: modular integers with a class-level modulus, and CRT reconstruction.

  Modulo[p, dtype](n)   residue of n mod p stored in a fixed-width numpy dtype
  inv, is_invertible    multiplicative inverse via extended GCD
  CRT(x1, x2, ...)      combine residues under pairwise coprime moduli
"""

from .errors import (
    ModulosError,
    InvalidModulusError,
    NotInvertibleError,
    ModuliNotCoprimeError,
    ModulusMismatchError,
    RepresentationError,
)
from .inttypes import DEFAULT_DTYPE
from .modulo import Modulo, modulo_type, inv, is_invertible, modulus_of, to_integer
from .crt import CRT, crt_reconstruct, crt_reconstruct_signed, centered

__version__ = "0.1.0"
__all__ = [
    "Modulo",
    "modulo_type",
    "inv",
    "is_invertible",
    "modulus_of",
    "to_integer",
    "CRT",
    "crt_reconstruct",
    "crt_reconstruct_signed",
    "centered",
    "DEFAULT_DTYPE",
    "ModulosError",
    "InvalidModulusError",
    "NotInvertibleError",
    "ModuliNotCoprimeError",
    "ModulusMismatchError",
    "RepresentationError",
]
