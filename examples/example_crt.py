#!/usr/bin/env python3
"""
CRT reconstruction from the command line.

Each argument is a residue:modulus pair; the moduli must be pairwise coprime.

Usage:
    python examples/example_crt.py 4:11 8:14
    python examples/example_crt.py 3:5 4:7 0:9 --dtype uint32 --signed
"""
import argparse
import math
import sys
from typing import List, Tuple

from modulos import (
    CRT, Modulo, ModulosError, centered, modulo_type,
)


def parse_pair(text: str) -> Tuple[int, int]:
    """Parse 'residue:modulus'."""
    try:
        residue, modulus = text.split(":")
        return int(residue), int(modulus)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected residue:modulus, got {text!r}")


def build_residues(pairs: List[Tuple[int, int]], dtype: str) -> List[Modulo]:
    return [modulo_type(m, dtype)(r) for r, m in pairs]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Chinese Remainder Theorem reconstruction")
    parser.add_argument("pairs", nargs="*", type=parse_pair,
                        help="residue:modulus pairs, e.g. 4:11 8:14")
    parser.add_argument("--dtype", type=str, default="int64",
                        help="numpy integer type holding each residue")
    parser.add_argument("--signed", action="store_true",
                        help="print the symmetric representative as well")
    args = parser.parse_args(argv)

    try:
        residues = build_residues(args.pairs, args.dtype)
        x = CRT(*residues)
    except ModulosError as e:
        print(f"ERROR: {e}")
        return 1

    M = math.prod(r.modulus for r in residues)

    print(f"Residues: {', '.join(format(r, 't') for r in residues)}")
    print(f"x = {x}  (mod {M})")
    if args.signed:
        print(f"centered x = {centered(x, M)}")

    for r in residues:
        ok = x % r.modulus == int(r)
        print(f"  {x} % {r.modulus} = {x % r.modulus}  {'ok' if ok else 'MISMATCH'}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
