"""
Pure-Python limb kernels.

These operate on plain lists of ints (index 0 least significant) of any
length, so they double as ground truth for tests on short numbers.
BigNumber uses them for the sequential carry / borrow chains that do not
vectorise.

All operations are exact integer arithmetic.  Results are truncated to the
input length: a carry out of the top limb is dropped.
"""

from typing import List, Sequence, Tuple

from ..constants import BASE, LIMB_BITS


# ---------------------------------------------------------------------------
# Carry / borrow chains
# ---------------------------------------------------------------------------

def add_limbs(a: Sequence[int], b: Sequence[int], base: int = BASE) -> List[int]:
    """Limb-wise a + b with carry, modulo base**len(a).

    Assumes len(a) == len(b) and every limb in [0, base).  The carry is
    always 0 or 1.
    """
    out = [0] * len(a)
    carry = 0
    for i in range(len(a)):
        s = a[i] + b[i] + carry
        out[i] = s % base
        carry = 0 if s < base else 1
    return out


def sub_limbs(a: Sequence[int], b: Sequence[int], base: int = BASE) -> List[int]:
    """Limb-wise a - b with borrow.

    Uses floor modulo so a negative difference lands in [0, base).  The
    borrow is 0 or -1.  If b > a the result wraps modulo base**len(a);
    callers that need saturation check the ordering first.
    """
    out = [0] * len(a)
    borrow = 0
    for i in range(len(a)):
        d = a[i] - b[i] + borrow
        out[i] = d % base
        borrow = 0 if d >= 0 else -1
    return out


def normalize_carries(columns: Sequence[int], base: int = BASE) -> List[int]:
    """Reduce unnormalised column sums to limbs in [0, base).

    Column i may hold any non-negative value; the excess is carried into
    column i+1.  The carry out of the last column is dropped.
    """
    out = [0] * len(columns)
    carry = 0
    for i in range(len(columns)):
        s = int(columns[i]) + carry
        out[i] = s % base
        carry = s // base
    return out


def mul_small_limbs(a: Sequence[int], k: int,
                    base: int = BASE) -> Tuple[List[int], int]:
    """a * k for a single limb value k.

    Returns:
        (limbs, carry_out) where limbs has len(a) entries and carry_out is
        the part of the product that did not fit.
    """
    out = [0] * len(a)
    carry = 0
    for i in range(len(a)):
        p = a[i] * k + carry
        out[i] = p % base
        carry = p // base
    return out, carry


def mul_limbs(a: Sequence[int], b: Sequence[int], base: int = BASE) -> List[int]:
    """Schoolbook product with per-row carries, truncated to len(a) limbs.

    Partial products (and carries) whose position falls outside the
    accumulator are dropped.
    """
    n = len(a)
    w = [0] * n
    for i in range(len(b)):
        c = 0
        for j in range(n):
            if i + j > n - 1:
                continue
            uv = w[i + j] + a[j] * b[i] + c
            w[i + j] = uv % base
            c = uv // base
    return w


# ---------------------------------------------------------------------------
# Ordering / utilities
# ---------------------------------------------------------------------------

def compare_limbs(a: Sequence[int], b: Sequence[int]) -> int:
    """-1, 0 or 1 by the most significant differing limb."""
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return -1 if x < y else 1
    return 0


def rotate_right_limbs(a: Sequence[int], shift: int) -> List[int]:
    """Cyclic rotation toward higher indices; the top limb wraps to 0."""
    n = len(a)
    shift %= n
    if shift == 0:
        return list(a)
    return list(a[n - shift:]) + list(a[:n - shift])


def leading_zeros_limb(value: int, width: int = LIMB_BITS) -> int:
    """Leading zero bits of one limb in a slot of the given width."""
    return width - int(value).bit_length()


# ---------------------------------------------------------------------------
# int <-> limbs
# ---------------------------------------------------------------------------

def limbs_to_int(limbs: Sequence[int], base: int = BASE) -> int:
    """Value of a limb sequence as a Python int."""
    x = 0
    for limb in reversed(limbs):
        x = x * base + int(limb)
    return x


def int_to_limbs(x: int, size: int, base: int = BASE) -> List[int]:
    """Encode a non-negative int into `size` limbs, modulo base**size."""
    out = [0] * size
    for i in range(size):
        x, out[i] = divmod(x, base)
        if x == 0:
            break
    return out
