"""
Unit tests for CRT reconstruction.

Round-trips residues through CRT and checks against sympy's crt as an
independent reference.
"""

import math
import random
import unittest

import numpy as np
from sympy import prevprime
from sympy.ntheory.modular import crt as sympy_crt

from modulos import (
    CRT,
    Modulo,
    ModuliNotCoprimeError,
    centered,
    crt_reconstruct,
    crt_reconstruct_signed,
)


def rns_primes(K):
    """K distinct 31-bit primes counting down from 2^31."""
    primes = []
    p = 1 << 31
    for _ in range(K):
        p = prevprime(p)
        primes.append(int(p))
    return primes


class TestCRT(unittest.TestCase):

    def test_example(self):
        r = CRT(Modulo[11](4), Modulo[14](8))
        self.assertEqual(r, 92)
        self.assertEqual(92 % 11, 4)
        self.assertEqual(92 % 14, 8)

    def test_no_arguments(self):
        self.assertEqual(CRT(), 0)

    def test_single_argument(self):
        self.assertEqual(CRT(Modulo[5](3)), 3)
        self.assertEqual(CRT(Modulo[5](13)), 3)
        self.assertIsInstance(CRT(Modulo[5](3)), int)

    def test_not_coprime(self):
        with self.assertRaises(ModuliNotCoprimeError) as ctx:
            CRT(Modulo[4](1), Modulo[6](3))
        self.assertEqual(ctx.exception.moduli, (4, 6))

    def test_not_coprime_with_product(self):
        # 10 is coprime with 3 but not with 3 * 5.
        with self.assertRaises(ModuliNotCoprimeError):
            CRT(Modulo[3](1), Modulo[5](2), Modulo[10](7))

    def test_round_trip(self):
        rng = random.Random(42)
        moduli = [3, 5, 7, 11, 13, 16, 17, 19, 23, 29]
        for _ in range(200):
            mods = rng.sample(moduli, rng.randint(2, len(moduli)))
            res = [rng.randrange(m) for m in mods]
            r = CRT(*(Modulo[m](a) for a, m in zip(res, mods)))
            M = math.prod(mods)
            self.assertTrue(0 <= r < M)
            for a, m in zip(res, mods):
                self.assertEqual(r % m, a)
            expected, _ = sympy_crt(mods, res)
            self.assertEqual(r, int(expected))

    def test_unnormalised_inputs(self):
        r = CRT(Modulo[11](-7), Modulo[14](36))
        self.assertEqual(r, 92)

    def test_mixed_dtypes(self):
        r = CRT(Modulo[251, np.uint8](200), Modulo[127, np.int8](100),
                Modulo[2**64 - 59, np.uint64](2**64 - 60))
        self.assertEqual(r % 251, 200)
        self.assertEqual(r % 127, 100)
        self.assertEqual(r % (2**64 - 59), 2**64 - 60)
        self.assertTrue(0 <= r < 251 * 127 * (2**64 - 59))

    def test_modulus_one(self):
        self.assertEqual(CRT(Modulo[7](3), Modulo[1](0), Modulo[5](4)), 24)
        self.assertEqual(CRT(Modulo[1](0), Modulo[5](4)), 4)

    def test_large_moduli(self):
        primes = rns_primes(16)
        rng = random.Random(123)
        M = math.prod(primes)
        for _ in range(20):
            x = rng.randrange(M)
            r = CRT(*(Modulo[p](x) for p in primes))
            self.assertEqual(r, x)

    def test_rejects_plain_integers(self):
        with self.assertRaises(TypeError):
            CRT(Modulo[5](1), 3)


class TestReconstruct(unittest.TestCase):

    def setUp(self):
        self.primes = rns_primes(8)
        self.M = math.prod(self.primes)

    def test_crt_reconstruct(self):
        rng = random.Random(456)
        for _ in range(20):
            x = rng.randrange(self.M)
            residues = [x % p for p in self.primes]
            y, M = crt_reconstruct(residues, self.primes)
            self.assertEqual(y, x)
            self.assertEqual(M, self.M)

    def test_numpy_inputs(self):
        primes = np.array(self.primes, dtype=np.uint32)
        residues = np.array([12345 % p for p in self.primes], dtype=np.uint32)
        y, M = crt_reconstruct(residues, primes, dtype=np.uint32)
        self.assertEqual(y, 12345)
        self.assertEqual(M, self.M)

    def test_empty(self):
        self.assertEqual(crt_reconstruct([], []), (0, 1))

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            crt_reconstruct([1, 2], [3])

    def test_overflow_wraps_mod_M(self):
        residues = [(self.M + 42) % p for p in self.primes]
        y, _ = crt_reconstruct(residues, self.primes)
        self.assertEqual(y, 42)

    def test_signed(self):
        for x in [-1, -100, -999999, 0, 1, 999999]:
            residues = [x % p for p in self.primes]
            self.assertEqual(crt_reconstruct_signed(residues, self.primes), x)

    def test_centered(self):
        self.assertEqual(centered(0, 7), 0)
        self.assertEqual(centered(3, 7), 3)
        self.assertEqual(centered(4, 7), -3)
        self.assertEqual(centered(5, 10), 5)
        self.assertEqual(centered(6, 10), -4)
        self.assertEqual(centered(-1, 10), -1)
        self.assertEqual(centered(0, 1), 0)


if __name__ == "__main__":
    unittest.main()
