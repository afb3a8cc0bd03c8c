"""Exceptions raised by modulos."""


class ModulosError(Exception):
    """Base class for all modulos errors."""


class InvalidModulusError(ModulosError, ValueError):
    """The modulus of a Modulo type is not a strictly positive integer."""

    def __init__(self, modulus):
        self.modulus = modulus
        super().__init__(f"modulus must be a positive integer, got {modulus!r}")


class NotInvertibleError(ModulosError, ArithmeticError):
    """Inversion, division or a negative power of a non-unit."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"{value!r} is not invertible")


class ModuliNotCoprimeError(ModulosError, ArithmeticError):
    """CRT was given two moduli sharing a common factor."""

    def __init__(self, m1: int, m2: int):
        self.moduli = (m1, m2)
        super().__init__(f"moduli must be coprime, got {m1} and {m2}")


class ModulusMismatchError(ModulosError, TypeError):
    """Arithmetic between values of different moduli."""

    def __init__(self, x, y):
        super().__init__(
            f"cannot combine {type(x).__name__} with {type(y).__name__}: moduli differ"
        )


class RepresentationError(ModulosError, OverflowError):
    """A value does not fit the requested fixed-width representation."""
