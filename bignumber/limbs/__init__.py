"""
Limb-level kernels for the bignumber package.

Pure-Python reference implementations over plain int sequences of any
length.  BigNumber builds on these for its carry and borrow chains.
"""

from .reference import (
    add_limbs, sub_limbs, normalize_carries,
    mul_small_limbs, mul_limbs,
    compare_limbs, rotate_right_limbs, leading_zeros_limb,
    limbs_to_int, int_to_limbs,
)

__all__ = [
    "add_limbs", "sub_limbs", "normalize_carries",
    "mul_small_limbs", "mul_limbs",
    "compare_limbs", "rotate_right_limbs", "leading_zeros_limb",
    "limbs_to_int", "int_to_limbs",
]
