"""
BigNumber: fixed-capacity unsigned integer over NUMBER_SIZE limbs.

Representation:
  limbs[i] in [0, BASE), BASE = 2**16, stored in uint32 slots
  value = sum(limbs[i] * BASE**i)

Arithmetic is fixed-width:
  a + b   wraps modulo BASE**NUMBER_SIZE
  a - b   saturates at zero when b > a
  a * b   keeps the low NUMBER_SIZE limbs of the product
  a / b   floor quotient (a // b is the same operation)

Binary operators return new values.  Augmented operators (+=, -=, *=,
/=, //=, %=) overwrite the receiver's limb array in place.
"""

import operator
import sys
from typing import Iterable, Tuple

import numpy as np

from .constants import (
    NUMBER_SIZE, BASE, LIMB_DTYPE, WIDE_DTYPE,
    NUMBER_BYTES, NUMBER_BITS, MAX_LIMB, MAX_WIDE, MODULUS,
)
from .errors import InvalidInput, DivisionByZero
from .limbs.reference import (
    add_limbs, sub_limbs, normalize_carries, mul_small_limbs,
    leading_zeros_limb, limbs_to_int,
)

# 16-bit little-endian view used for int conversion
_LE_HALF = np.dtype("<u2")
_LE_LIMB = np.dtype("<u4")


def _check_limb(value: int, what: str = "limb") -> int:
    value = operator.index(value)
    if not 0 <= value < BASE:
        raise InvalidInput(f"{what} {value} outside [0, {BASE})")
    return value


def _quotient_digit(window: int, divisor: int) -> int:
    """Largest q in [0, BASE) with q * divisor <= window (binary search)."""
    lo, hi = 0, MAX_LIMB
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if mid * divisor <= window:
            lo = mid
        else:
            hi = mid - 1
    return lo


class BigNumber:
    """Unsigned integer of exactly NUMBER_SIZE base-65536 limbs.

    Usage:
        a = BigNumber.from_wide(100000)
        q = a / BigNumber.from_limb(7)        # 14285
        a *= a
    """

    __slots__ = ("_limbs",)

    def __init__(self):
        self._limbs = np.zeros(NUMBER_SIZE, dtype=LIMB_DTYPE)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> "BigNumber":
        obj = cls.__new__(cls)
        obj._limbs = arr
        return obj

    @classmethod
    def zero(cls) -> "BigNumber":
        return cls()

    new = zero
    empty = zero

    @classmethod
    def from_limb(cls, value: int) -> "BigNumber":
        """Number whose limb 0 is `value`.

        Raises:
            InvalidInput: value is not in [0, BASE).  Unreduced limbs are
                never stored.
        """
        obj = cls()
        obj._limbs[0] = _check_limb(value, "single-limb value")
        return obj

    @classmethod
    def from_wide(cls, value: int) -> "BigNumber":
        """Two-limb constructor: limb 0 = value % BASE, limb 1 = value // BASE.

        Raises:
            InvalidInput: value is not in [0, BASE**2).
        """
        value = operator.index(value)
        if not 0 <= value <= MAX_WIDE:
            raise InvalidInput(f"wide value {value} outside [0, {MAX_WIDE}]")
        obj = cls()
        obj._limbs[1], obj._limbs[0] = divmod(value, BASE)
        return obj

    @classmethod
    def from_limbs(cls, limbs: Iterable[int]) -> "BigNumber":
        """Number from low-to-high limbs; missing high limbs are zero."""
        values = [_check_limb(v) for v in limbs]
        if len(values) > NUMBER_SIZE:
            raise InvalidInput(
                f"{len(values)} limbs given, capacity is {NUMBER_SIZE}"
            )
        obj = cls()
        obj._limbs[:len(values)] = values
        return obj

    @classmethod
    def from_int(cls, value: int) -> "BigNumber":
        """Number from a Python int in [0, BASE**NUMBER_SIZE)."""
        value = operator.index(value)
        if not 0 <= value < MODULUS:
            raise InvalidInput("int value outside [0, BASE**NUMBER_SIZE)")
        raw = value.to_bytes(NUMBER_SIZE * 2, "little")
        return cls._wrap(np.frombuffer(raw, dtype=_LE_HALF).astype(LIMB_DTYPE))

    @classmethod
    def _from_buffer(cls, buf, dtype) -> "BigNumber":
        data = memoryview(buf).tobytes()
        if len(data) != NUMBER_BYTES:
            raise InvalidInput(
                f"byte buffer must be exactly {NUMBER_BYTES} bytes, "
                f"got {len(data)}"
            )
        arr = np.frombuffer(data, dtype=dtype).astype(LIMB_DTYPE)
        bad = np.flatnonzero(arr >= BASE)
        if bad.size:
            i = int(bad[0])
            raise InvalidInput(
                f"limb {i} decodes to {int(arr[i])}, not below {BASE}"
            )
        return cls._wrap(arr)

    @classmethod
    def from_ne_bytes(cls, buf) -> "BigNumber":
        """Reinterpret NUMBER_BYTES bytes as 4-byte limbs in host byte order.

        Not portable between hosts of different endianness; see
        from_le_bytes for a fixed convention.
        """
        return cls._from_buffer(buf, LIMB_DTYPE)

    @classmethod
    def from_le_bytes(cls, buf) -> "BigNumber":
        """Decode NUMBER_BYTES bytes of little-endian 4-byte limbs."""
        return cls._from_buffer(buf, _LE_LIMB)

    def copy(self) -> "BigNumber":
        return self._wrap(self._limbs.copy())

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    # ------------------------------------------------------------------
    # Export / inspection
    # ------------------------------------------------------------------

    def to_ne_bytes(self) -> bytes:
        return self._limbs.tobytes()

    def to_le_bytes(self) -> bytes:
        return self._limbs.astype(_LE_LIMB).tobytes()

    def to_int(self) -> int:
        return int.from_bytes(self._limbs.astype(_LE_HALF).tobytes(), "little")

    __int__ = to_int

    @property
    def limbs(self) -> np.ndarray:
        """Read-only view of the limb array (index 0 least significant)."""
        view = self._limbs.view()
        view.flags.writeable = False
        return view

    def __getitem__(self, index):
        """One limb as an int, or a list of ints for a slice."""
        if isinstance(index, slice):
            return self._limbs[index].tolist()
        return int(self._limbs[index])

    def __len__(self) -> int:
        return NUMBER_SIZE

    def significant_limbs(self) -> int:
        """Index of the highest nonzero limb plus one (0 for zero)."""
        nz = np.flatnonzero(self._limbs)
        return int(nz[-1]) + 1 if nz.size else 0

    def is_zero(self) -> bool:
        return not self._limbs.any()

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __repr__(self):
        n = max(self.significant_limbs(), 1)
        return f"BigNumber.from_limbs({self._limbs[:n].tolist()})"

    # ------------------------------------------------------------------
    # Ordering
    # ------------------------------------------------------------------

    def compare(self, other: "BigNumber") -> int:
        """-1, 0 or 1, decided by the most significant differing limb."""
        diff = np.flatnonzero(self._limbs != other._limbs)
        if not diff.size:
            return 0
        k = diff[-1]
        return -1 if self._limbs[k] < other._limbs[k] else 1

    def __eq__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return bool(np.array_equal(self._limbs, other._limbs))

    def __ne__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return not np.array_equal(self._limbs, other._limbs)

    def __lt__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self.compare(other) >= 0

    __hash__ = None  # mutable

    # ------------------------------------------------------------------
    # Addition / subtraction
    # ------------------------------------------------------------------

    def __iadd__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        # Limbs above n are zero in both operands; one extra limb takes
        # the carry out of the top.
        n = max(self.significant_limbs(), other.significant_limbs())
        n = min(n + 1, NUMBER_SIZE)
        self._limbs[:n] = add_limbs(self._limbs[:n].tolist(),
                                    other._limbs[:n].tolist())
        return self

    def __add__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __isub__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        if other > self:
            self._limbs[:] = 0
            return self
        n = self.significant_limbs()
        self._limbs[:n] = sub_limbs(self._limbs[:n].tolist(),
                                    other._limbs[:n].tolist())
        return self

    def __sub__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        result = self.copy()
        result -= other
        return result

    # ------------------------------------------------------------------
    # Multiplication
    # ------------------------------------------------------------------

    def __imul__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        na = self.significant_limbs()
        nb = other.significant_limbs()
        if na == 0 or nb == 0:
            self._limbs[:] = 0
            return self

        # Column sums stay below NUMBER_SIZE * 2**32, far inside uint64.
        w = np.zeros(NUMBER_SIZE, dtype=WIDE_DTYPE)
        b = other._limbs[:nb].astype(WIDE_DTYPE)
        for i in np.flatnonzero(self._limbs[:na]):
            i = int(i)
            m = min(nb, NUMBER_SIZE - i)
            w[i:i + m] += WIDE_DTYPE(self._limbs[i]) * b[:m]

        top = min(na + nb, NUMBER_SIZE)
        self._limbs[:] = 0
        self._limbs[:top] = normalize_carries(w[:top].tolist())
        return self

    def __mul__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        result = self.copy()
        result *= other
        return result

    def mul_small(self, k: int) -> "BigNumber":
        """self * k for a single limb value k, truncated to NUMBER_SIZE."""
        k = _check_limb(k, "multiplier")
        n = min(self.significant_limbs() + 1, NUMBER_SIZE)
        result = BigNumber()
        result._limbs[:n], _ = mul_small_limbs(self._limbs[:n].tolist(), k)
        return result

    # ------------------------------------------------------------------
    # Division
    # ------------------------------------------------------------------

    def _long_divide(self, divisor: "BigNumber") -> Tuple["BigNumber", "BigNumber"]:
        """Schoolbook long division: (floor quotient, remainder).

        Works from the most significant digit position down.  At position i
        the divisor is aligned with rotated_right(i); only positions where
        that rotation does not wrap the divisor's significant limbs can
        carry a nonzero digit, so those are the only ones visited.  Each
        digit is found by binary search over [0, BASE).

        Before position i is processed, remainder < divisor * BASE**(i+1),
        so the remainder limbs at i .. i+d_len hold everything that matters.
        """
        if divisor.is_zero():
            raise DivisionByZero("BigNumber division by zero")

        quotient = BigNumber()
        remainder = self.copy()
        if self < divisor:
            return quotient, remainder

        d_len = divisor.significant_limbs()
        d_val = limbs_to_int(divisor._limbs[:d_len].tolist())
        r_len = remainder.significant_limbs()

        for i in range(r_len - d_len, -1, -1):
            hi = min(i + d_len + 1, NUMBER_SIZE)
            window = remainder._limbs[i:hi].tolist()
            w_val = limbs_to_int(window)
            if w_val < d_val:
                continue

            digit = _quotient_digit(w_val, d_val)
            shifted = divisor.rotated_right(i)
            product, _ = mul_small_limbs(shifted._limbs[i:hi].tolist(), digit)
            remainder._limbs[i:hi] = sub_limbs(window, product)
            quotient._limbs[i] = digit

        return quotient, remainder

    def __itruediv__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        quotient, _ = self._long_divide(other)
        self._limbs[:] = quotient._limbs
        return self

    __ifloordiv__ = __itruediv__

    def __truediv__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self._long_divide(other)[0]

    __floordiv__ = __truediv__

    def __imod__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        _, remainder = self._long_divide(other)
        self._limbs[:] = remainder._limbs
        return self

    def __mod__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self._long_divide(other)[1]

    def __divmod__(self, other):
        if not isinstance(other, BigNumber):
            return NotImplemented
        return self._long_divide(other)

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def rotate_right(self, shift: int) -> None:
        """Rotate limbs toward higher indices by shift % NUMBER_SIZE, in place.

        The limb at NUMBER_SIZE-1 wraps to index 0.
        """
        shift %= NUMBER_SIZE
        if shift:
            self._limbs[:] = np.roll(self._limbs, shift)

    def rotated_right(self, shift: int) -> "BigNumber":
        result = self.copy()
        result.rotate_right(shift)
        return result

    def leading_zeros(self) -> int:
        """Leading zero bits of the most significant nonzero limb.

        Counted over the 32-bit storage slot and NOT offset by the limb's
        position.  A zero number returns NUMBER_SIZE * 32.
        """
        n = self.significant_limbs()
        if n == 0:
            return NUMBER_BITS
        return leading_zeros_limb(int(self._limbs[n - 1]))


def host_byte_order() -> str:
    """Byte order used by from_ne_bytes / to_ne_bytes ('little' or 'big')."""
    return sys.byteorder
