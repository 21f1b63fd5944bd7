"""Exception types raised by the bignumber package."""


class BigNumberError(Exception):
    """Base class for all bignumber errors."""


class InvalidInput(BigNumberError, ValueError):
    """A value cannot be represented with reduced limbs.

    Raised for out-of-range scalars, limbs >= BASE, and raw byte buffers
    whose length is not exactly NUMBER_BYTES.
    """


class DivisionByZero(BigNumberError, ZeroDivisionError):
    """Division or remainder with a zero divisor."""
