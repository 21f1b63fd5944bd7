"""
bignumber: fixed-capacity unsigned big integers over 16-bit limbs.

A BigNumber always holds exactly NUMBER_SIZE limbs of radix 65536 in a
numpy uint32 array.  Nothing grows: addition and multiplication wrap
modulo BASE**NUMBER_SIZE, subtraction saturates at zero, division is
floor division and rejects a zero divisor.
"""

__version__ = "0.1.0"

from .constants import (
    NUMBER_SIZE, BASE, BASE_BITS, LIMB_BITS, LIMB_BYTES,
    NUMBER_BYTES, NUMBER_BITS, MAX_WIDE, MODULUS,
)
from .errors import BigNumberError, InvalidInput, DivisionByZero
from .number import BigNumber, host_byte_order
from .differential import DiffConfig, load_config, run_differential
from .logging import RunLogger, RunManifest, create_manifest

__all__ = [
    "NUMBER_SIZE", "BASE", "BASE_BITS", "LIMB_BITS", "LIMB_BYTES",
    "NUMBER_BYTES", "NUMBER_BITS", "MAX_WIDE", "MODULUS",
    "BigNumberError", "InvalidInput", "DivisionByZero",
    "BigNumber", "host_byte_order",
    "DiffConfig", "load_config", "run_differential",
    "RunLogger", "RunManifest", "create_manifest",
]
