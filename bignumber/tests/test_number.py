"""
Tests for BigNumber.

Run with: pytest bignumber/tests/test_number.py -v
"""

import copy
import random
import sys
import os

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from bignumber import (
    BigNumber, InvalidInput, DivisionByZero,
    NUMBER_SIZE, BASE, NUMBER_BYTES, NUMBER_BITS, MAX_WIDE, MODULUS,
)
from bignumber.limbs import compare_limbs, mul_limbs, rotate_right_limbs


@pytest.fixture
def rng():
    return random.Random(2024)


def rand_number(rng, max_limbs=6):
    return rng.getrandbits(16 * rng.randint(1, max_limbs))


class TestConstruction:
    def test_zero_forms(self):
        for z in (BigNumber(), BigNumber.zero(), BigNumber.new(), BigNumber.empty()):
            assert z.is_zero()
            assert z.to_int() == 0
            assert not z

    def test_from_limb(self):
        x = BigNumber.from_limb(BASE - 1)
        assert x[0] == BASE - 1
        assert x.significant_limbs() == 1
        assert x.to_int() == BASE - 1

    @pytest.mark.parametrize("value", [BASE, BASE + 5, -1])
    def test_from_limb_rejects_unreduced(self, value):
        with pytest.raises(InvalidInput):
            BigNumber.from_limb(value)

    @pytest.mark.parametrize("build, value", [
        (BigNumber.from_limb, 1.9),
        (BigNumber.from_wide, 2.5),
        (BigNumber.from_int, 0.5),
        (BigNumber.from_limb, 3.0),
    ])
    def test_rejects_floats(self, build, value):
        with pytest.raises(TypeError):
            build(value)

    def test_accepts_numpy_integers(self):
        assert BigNumber.from_limb(np.uint32(7)) == BigNumber.from_limb(7)
        assert BigNumber.from_wide(np.int64(100000)).to_int() == 100000

    def test_from_limbs_rejects_floats(self):
        with pytest.raises(TypeError):
            BigNumber.from_limbs([1, 2.5])

    def test_invalid_input_is_value_error(self):
        with pytest.raises(ValueError):
            BigNumber.from_limb(BASE)

    def test_from_wide_limbs(self, rng):
        for v in [0, 1, BASE - 1, BASE, 100000, MAX_WIDE] + \
                [rng.randint(0, MAX_WIDE) for _ in range(50)]:
            x = BigNumber.from_wide(v)
            assert x[0] == v % BASE
            assert x[1] == v // BASE
            assert x.to_int() == v

    @pytest.mark.parametrize("value", [MAX_WIDE + 1, -1])
    def test_from_wide_out_of_range(self, value):
        with pytest.raises(InvalidInput):
            BigNumber.from_wide(value)

    def test_from_limbs(self):
        x = BigNumber.from_limbs([1, 2, 3])
        assert [x[0], x[1], x[2], x[3]] == [1, 2, 3, 0]
        assert x.to_int() == 1 + 2 * BASE + 3 * BASE ** 2

    def test_from_limbs_too_many(self):
        with pytest.raises(InvalidInput):
            BigNumber.from_limbs([0] * (NUMBER_SIZE + 1))

    def test_from_limbs_unreduced(self):
        with pytest.raises(InvalidInput):
            BigNumber.from_limbs([0, BASE])

    def test_int_round_trip(self, rng):
        for _ in range(20):
            v = rng.randrange(MODULUS)
            assert BigNumber.from_int(v).to_int() == v
        assert int(BigNumber.from_int(MODULUS - 1)) == MODULUS - 1

    @pytest.mark.parametrize("value", [MODULUS, -1], ids=["MODULUS", "-1"])
    def test_from_int_out_of_range(self, value):
        with pytest.raises(InvalidInput):
            BigNumber.from_int(value)


class TestBytes:
    def test_native_order_limb(self):
        buf = (5).to_bytes(4, sys.byteorder) + (7).to_bytes(4, sys.byteorder)
        buf += bytes(NUMBER_BYTES - len(buf))
        x = BigNumber.from_ne_bytes(buf)
        assert x[0] == 5
        assert x[1] == 7
        assert x.to_ne_bytes() == buf

    def test_native_matches_numpy_layout(self, rng):
        limbs = np.array([rng.randrange(BASE) for _ in range(NUMBER_SIZE)],
                         dtype=np.uint32)
        x = BigNumber.from_ne_bytes(limbs.tobytes())
        assert np.array_equal(x.limbs, limbs)

    @pytest.mark.parametrize("length", [0, NUMBER_BYTES - 1, NUMBER_BYTES + 4])
    def test_wrong_length(self, length):
        with pytest.raises(InvalidInput):
            BigNumber.from_ne_bytes(bytes(length))
        with pytest.raises(InvalidInput):
            BigNumber.from_le_bytes(bytes(length))

    def test_unreduced_group_rejected(self):
        buf = bytearray(NUMBER_BYTES)
        buf[4:8] = BASE.to_bytes(4, sys.byteorder)
        with pytest.raises(InvalidInput):
            BigNumber.from_ne_bytes(bytes(buf))

    def test_little_endian_is_fixed(self):
        buf = bytearray(NUMBER_BYTES)
        buf[0:4] = (0x1234).to_bytes(4, "little")
        x = BigNumber.from_le_bytes(bytes(buf))
        assert x[0] == 0x1234
        assert x.to_le_bytes() == bytes(buf)

    def test_le_round_trip(self, rng):
        x = BigNumber.from_int(rng.randrange(MODULUS))
        assert BigNumber.from_le_bytes(x.to_le_bytes()) == x
        assert BigNumber.from_ne_bytes(x.to_ne_bytes()) == x


class TestOrdering:
    def test_most_significant_limb_decides(self):
        a = BigNumber.from_limbs([BASE - 1, 0, 1])
        b = BigNumber.from_limbs([0, 0, 2])
        assert a < b
        assert b > a
        assert a != b

    def test_equality_structural(self):
        assert BigNumber.from_wide(100000) == BigNumber.from_limbs([100000 % BASE, 1])

    def test_totality(self, rng):
        for _ in range(200):
            a = rand_number(rng, 3)
            b = rand_number(rng, 3) if rng.random() < 0.8 else a
            x, y = BigNumber.from_int(a), BigNumber.from_int(b)
            outcomes = [x < y, x == y, x > y]
            assert sum(outcomes) == 1
            assert outcomes == [a < b, a == b, a > b]
            assert x.compare(y) == (a > b) - (a < b)
            assert x.compare(y) == compare_limbs(x.limbs.tolist(), y.limbs.tolist())

    def test_non_bignumber(self):
        assert (BigNumber() == 0) is False
        with pytest.raises(TypeError):
            BigNumber() < 1

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(BigNumber())


class TestAddition:
    def test_matches_reference(self, rng):
        for _ in range(100):
            a, b = rand_number(rng), rand_number(rng)
            assert (BigNumber.from_int(a) + BigNumber.from_int(b)).to_int() == a + b

    def test_commutative_associative(self, rng):
        for _ in range(30):
            a, b, c = (BigNumber.from_int(rng.randrange(MODULUS)) for _ in range(3))
            assert a + b == b + a
            assert (a + b) + c == a + (b + c)

    def test_wraps_at_capacity(self):
        top = BigNumber.from_int(MODULUS - 1)
        assert (top + BigNumber.from_limb(1)).is_zero()
        assert (top + BigNumber.from_limb(2)) == BigNumber.from_limb(1)

    def test_in_place(self):
        a = BigNumber.from_limb(BASE - 1)
        alias = a
        a += BigNumber.from_limb(1)
        assert alias is a
        assert a == BigNumber.from_limbs([0, 1])

    def test_self_add(self):
        a = BigNumber.from_wide(MAX_WIDE)
        a += a
        assert a.to_int() == 2 * MAX_WIDE


class TestSubtraction:
    def test_saturates_at_zero(self):
        assert (BigNumber() - BigNumber.from_limb(1)).is_zero()
        assert (BigNumber.from_limb(3) - BigNumber.from_wide(BASE)).is_zero()

    def test_inverse_of_addition(self, rng):
        for _ in range(100):
            a, b = rand_number(rng), rand_number(rng)
            x, y = BigNumber.from_int(a), BigNumber.from_int(b)
            if b <= a:
                assert (x - y) + y == x
                assert (x - y).to_int() == a - b
            else:
                assert (x - y).is_zero()

    def test_borrow_across_limbs(self):
        x = BigNumber.from_int(BASE ** 5) - BigNumber.from_limb(1)
        assert x.to_int() == BASE ** 5 - 1
        assert all(x[i] == BASE - 1 for i in range(5))

    def test_self_sub(self):
        a = BigNumber.from_wide(12345678)
        a -= a
        assert a.is_zero()


class TestMultiplication:
    def test_identity(self, rng):
        one = BigNumber.from_limb(1)
        for _ in range(20):
            a = BigNumber.from_int(rng.randrange(MODULUS))
            assert a * one == a

    def test_zero(self, rng):
        a = BigNumber.from_int(rng.randrange(MODULUS))
        assert (a * BigNumber()).is_zero()
        assert (BigNumber() * a).is_zero()

    def test_repeated_65535(self):
        data = BigNumber.from_limb(BASE - 1)
        want = BASE - 1
        for _ in range(10):
            data *= BigNumber.from_limb(BASE - 1)
            want *= BASE - 1
        assert data.to_int() == want

    def test_repeated_squaring(self):
        data = BigNumber.from_limb(BASE - 1)
        want = BASE - 1
        for _ in range(10):
            data = data * data
            want = (want * want) % MODULUS
            assert data.to_int() == want

    def test_matches_reference(self, rng):
        for _ in range(50):
            a, b = rand_number(rng, 10), rand_number(rng, 10)
            assert (BigNumber.from_int(a) * BigNumber.from_int(b)).to_int() == a * b

    def test_matches_row_carry_schoolbook(self, rng):
        # Operands straddle the top so both forms drop partial products
        a = BigNumber.from_int(rng.randrange(MODULUS))
        b = BigNumber.from_int(rng.getrandbits(16 * 3))
        want = mul_limbs(a.limbs.tolist(), b.limbs[:3].tolist())
        assert (a * b).limbs.tolist() == want

    def test_truncates_full_width(self, rng):
        for _ in range(3):
            a, b = rng.randrange(MODULUS), rng.randrange(MODULUS)
            got = BigNumber.from_int(a) * BigNumber.from_int(b)
            assert got.to_int() == (a * b) % MODULUS

    def test_high_partial_products_dropped(self):
        top = BigNumber.from_int(BASE ** (NUMBER_SIZE - 1))
        assert (top * BigNumber.from_wide(BASE)).is_zero()

    def test_mul_small(self, rng):
        for _ in range(20):
            a, k = rand_number(rng), rng.randrange(BASE)
            assert BigNumber.from_int(a).mul_small(k).to_int() == a * k
        with pytest.raises(InvalidInput):
            BigNumber.from_limb(1).mul_small(BASE)


class TestDivision:
    def test_worked_example(self):
        q = BigNumber.from_wide(100000) / BigNumber.from_limb(7)
        assert q == BigNumber.from_limb(14285)

    def test_floor_property(self, rng):
        for _ in range(100):
            a, b = rand_number(rng, 8), rand_number(rng, 4) or 1
            x, y = BigNumber.from_int(a), BigNumber.from_int(b)
            q = (x / y).to_int()
            assert q * b <= a < (q + 1) * b

    def test_exact_multiples(self, rng):
        for _ in range(30):
            q, b = rand_number(rng, 4), rand_number(rng, 4) or 1
            x = BigNumber.from_int(q * b)
            assert (x / BigNumber.from_int(b)).to_int() == q

    def test_equal_operands(self):
        x = BigNumber.from_wide(987654321)
        assert x / x == BigNumber.from_limb(1)

    def test_smaller_dividend(self):
        assert (BigNumber.from_limb(6) / BigNumber.from_limb(7)).is_zero()

    def test_divisor_near_top(self):
        a = BigNumber.from_int(MODULUS - 1)
        b = BigNumber.from_int(BASE ** (NUMBER_SIZE - 1))
        assert (a / b).to_int() == BASE - 1

    def test_full_width(self, rng):
        for _ in range(3):
            a = rng.randrange(MODULUS)
            b = rng.randrange(1, BASE ** 3)
            assert (BigNumber.from_int(a) // BigNumber.from_int(b)).to_int() == a // b
        a = rng.randrange(MODULUS)
        b = rng.randrange(1, MODULUS)
        assert (BigNumber.from_int(a) / BigNumber.from_int(b)).to_int() == a // b

    def test_in_place(self):
        x = BigNumber.from_wide(100000)
        alias = x
        x /= BigNumber.from_limb(7)
        assert alias is x
        assert x.to_int() == 14285
        x //= BigNumber.from_limb(5)
        assert x.to_int() == 2857

    def test_divmod(self, rng):
        for _ in range(50):
            a, b = rand_number(rng, 6), rand_number(rng, 3) or 1
            q, r = divmod(BigNumber.from_int(a), BigNumber.from_int(b))
            assert (q.to_int(), r.to_int()) == divmod(a, b)
            assert (BigNumber.from_int(a) % BigNumber.from_int(b)).to_int() == a % b

    def test_division_by_zero(self):
        x = BigNumber.from_limb(5)
        with pytest.raises(DivisionByZero):
            x / BigNumber()
        with pytest.raises(ZeroDivisionError):
            x /= BigNumber()
        with pytest.raises(DivisionByZero):
            divmod(x, BigNumber())
        assert x == BigNumber.from_limb(5)

    def test_zero_dividend(self):
        assert (BigNumber() / BigNumber.from_limb(3)).is_zero()


class TestUtilities:
    def test_rotate_right_moves_up(self):
        x = BigNumber.from_limb(5)
        x.rotate_right(1)
        assert x[0] == 0
        assert x[1] == 5

    def test_rotate_wraps_top_limb(self):
        x = BigNumber.from_int(3 * BASE ** (NUMBER_SIZE - 1))
        y = x.rotated_right(1)
        assert y == BigNumber.from_limb(3)
        assert x[NUMBER_SIZE - 1] == 3

    def test_rotate_zero_and_full_turn(self, rng):
        x = BigNumber.from_int(rng.randrange(MODULUS))
        assert x.rotated_right(0) == x
        assert x.rotated_right(NUMBER_SIZE) == x

    def test_rotation_matches_reference(self, rng):
        x = BigNumber.from_int(rng.randrange(MODULUS))
        for k in [1, 5, NUMBER_SIZE - 3]:
            assert x.rotated_right(k).limbs.tolist() == \
                rotate_right_limbs(x.limbs.tolist(), k)

    def test_rotation_round_trip(self, rng):
        x = BigNumber.from_int(rng.randrange(MODULUS))
        for k in [1, 2, 17, NUMBER_SIZE // 2, NUMBER_SIZE - 1]:
            y = x.rotated_right(k)
            y.rotate_right(NUMBER_SIZE - k)
            assert y == x

    def test_leading_zeros_zero(self):
        assert BigNumber().leading_zeros() == NUMBER_BITS == NUMBER_SIZE * 32

    def test_leading_zeros_ignores_position(self):
        assert BigNumber.from_limb(1).leading_zeros() == 31
        assert BigNumber.from_int(BASE ** 5).leading_zeros() == 31
        assert BigNumber.from_limb(0x8000).leading_zeros() == 16
        assert BigNumber.from_wide(BASE - 1 + BASE).leading_zeros() == 31


class TestValueSemantics:
    def test_binary_ops_do_not_mutate(self):
        a, b = BigNumber.from_wide(100000), BigNumber.from_limb(7)
        before = a.to_ne_bytes()
        for _ in (a + b, a - b, a * b, a / b, a % b):
            pass
        assert a.to_ne_bytes() == before
        assert b == BigNumber.from_limb(7)

    def test_copy_is_independent(self):
        a = BigNumber.from_limb(1)
        for b in (a.copy(), copy.copy(a), copy.deepcopy(a)):
            b += BigNumber.from_limb(1)
            assert a == BigNumber.from_limb(1)

    def test_limbs_view_read_only(self):
        a = BigNumber.from_limb(1)
        with pytest.raises(ValueError):
            a.limbs[0] = 2
        assert len(a.limbs) == len(a) == NUMBER_SIZE

    def test_slice_access(self):
        a = BigNumber.from_limbs([4, 5, 6])
        assert a[0:2] == [4, 5]
        assert a[:4] == [4, 5, 6, 0]
        assert a[-1] == 0

    def test_repr(self):
        assert repr(BigNumber()) == "BigNumber.from_limbs([0])"
        assert repr(BigNumber.from_wide(BASE + 2)) == "BigNumber.from_limbs([2, 1])"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
