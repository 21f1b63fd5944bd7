"""
Layout constants for the fixed-capacity limb representation.

A BigNumber is NUMBER_SIZE limbs of radix BASE, stored little-endian by
limb index (index 0 least significant).  Each limb lives in a 32-bit slot
although only 16 bits are ever significant after an arithmetic operation;
the headroom lets sums and borrows be formed before reduction.

Value represented:  sum(limb[i] * BASE**i  for i in range(NUMBER_SIZE))
"""

import numpy as np

NUMBER_SIZE = 10 * 255              # limbs per number
BASE_BITS = 16                      # significant bits per limb
BASE = 1 << BASE_BITS               # 65536

LIMB_DTYPE = np.uint32              # storage slot
WIDE_DTYPE = np.uint64              # accumulator for products / column sums
LIMB_BITS = 32
LIMB_BYTES = 4

NUMBER_BYTES = NUMBER_SIZE * LIMB_BYTES
NUMBER_BITS = NUMBER_SIZE * LIMB_BITS

MAX_LIMB = BASE - 1
MAX_WIDE = BASE * BASE - 1          # largest scalar accepted by from_wide
MODULUS = BASE ** NUMBER_SIZE       # fixed-width arithmetic is mod this
