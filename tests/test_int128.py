import pytest
from hypothesis import given, strategies as st

from int128 import Int128Max, Int128Min, SignedInt128, UnsignedInt128, Uint128Max, make_int128
from tests.utils import MASK64, requires_asserts, shift_amounts, signed_ints, sint128, wrap_signed

@pytest.mark.parametrize("val,hi,lo", [
	(0, 0, 0),
	(-1, -1, MASK64),
	(-2**63, -1, 2**63),
	(MASK64, 0, MASK64),
	(5, 0, 5),
])
def test_native_construction(val, hi, lo):
	v = SignedInt128(val)
	assert (v.high, v.low) == (hi, lo)
	assert int(v) == val

def test_halves():
	assert int(make_int128(-1, 0)) == -2**64
	assert int(make_int128(1, 0)) == 2**64
	# a high half given as an unsigned pattern is reinterpreted
	assert make_int128(MASK64, MASK64) == -1

def test_constants():
	assert int(Int128Max) == 2**127 - 1
	assert int(Int128Min) == -2**127
	assert Int128Max.high == 2**63 - 1
	assert Int128Min.high == -2**63
	assert Int128Min.low == 0
	assert SignedInt128.min is Int128Min
	assert SignedInt128.max is Int128Max
	assert SignedInt128.digits == 127
	assert SignedInt128.is_signed
	assert not SignedInt128.is_modulo

@given(signed_ints, signed_ints)
def test_add_sub_mul(a, b):
	x, y = sint128(a), sint128(b)
	assert int(x + y) == wrap_signed(a + b)
	assert int(x - y) == wrap_signed(a - b)
	assert int(x * y) == wrap_signed(a * b)

def test_overflow_wraps():
	assert Int128Max + 1 == Int128Min
	assert Int128Min - 1 == Int128Max
	assert Int128Min * -1 == Int128Min
	assert Int128Max.inc() == Int128Min
	assert Int128Min.dec() == Int128Max

@given(signed_ints)
def test_neg_and_abs(a):
	if a == -2**127:
		return
	v = sint128(a)
	assert int(-v) == -a
	assert int(abs(v)) == abs(a)

@requires_asserts
def test_min_has_no_negation():
	with pytest.raises(AssertionError):
		-Int128Min
	with pytest.raises(AssertionError):
		abs(Int128Min)

def test_unsigned_abs():
	assert Int128Min.unsigned_abs() == UnsignedInt128(Int128Min)
	assert int(Int128Min.unsigned_abs()) == 2**127
	assert SignedInt128(-5).unsigned_abs() == 5
	assert SignedInt128(5).unsigned_abs() == 5
	assert isinstance(SignedInt128(-5).unsigned_abs(), UnsignedInt128)

@given(signed_ints, shift_amounts)
def test_shifts(a, k):
	v = sint128(a)
	assert int(v << k) == wrap_signed(a << k)
	# python shifts negative ints arithmetically too
	assert int(v >> k) == a >> k

@pytest.mark.parametrize("k,expected", [
	(0, -2**127),
	(1, -2**126),
	(63, -2**64),
	(64, -2**63),
	(65, -2**62),
	(127, -1),
])
def test_arithmetic_shift_of_min(k, expected):
	assert int(Int128Min >> k) == expected

def test_shift_left_into_sign():
	assert SignedInt128(1) << 127 == Int128Min
	assert SignedInt128(-1) << 64 == make_int128(-1, 0)

@requires_asserts
def test_shift_out_of_range():
	with pytest.raises(AssertionError):
		SignedInt128(1) >> 128
	with pytest.raises(AssertionError):
		SignedInt128(1) << 128

@given(signed_ints, signed_ints)
def test_bitwise(a, b):
	x, y = sint128(a), sint128(b)
	assert int(x & y) == a & b
	assert int(x | y) == a | b
	assert int(x ^ y) == a ^ b
	assert int(~x) == ~a

@given(signed_ints, signed_ints)
def test_total_order(a, b):
	x, y = sint128(a), sint128(b)
	assert [x < y, x == y, x > y].count(True) == 1
	assert (x < y) == (a < b)
	assert (x <= y) == (a <= b)
	assert (x >= y) == (a >= b)

def test_cross_sign_comparisons():
	assert SignedInt128(-1) < SignedInt128(0)
	assert Int128Min < Int128Max
	assert make_int128(-1, MASK64) < make_int128(0, 0)
	assert make_int128(0, 0) < make_int128(0, MASK64)
	assert SignedInt128(-1) < 0
	assert 0 > SignedInt128(-1)

@given(signed_ints)
def test_equal_to_exact_int(a):
	v = sint128(a)
	assert v == a
	assert a == v
	assert not v != a
	assert hash(v) == hash(a)

def test_dict_lookup_by_int():
	d = {SignedInt128(-5): "x", Int128Min: "min"}
	assert d.get(-5) == "x"
	assert d.get(-2**127) == "min"
	assert -1 in {SignedInt128(-1)}
	assert SignedInt128(-1) in {-1}

def test_same_bits_are_not_equal_across_signedness():
	assert SignedInt128(-1) != Uint128Max
	assert Uint128Max != SignedInt128(-1)
	assert SignedInt128(7) == UnsignedInt128(7)
	assert len({SignedInt128(-1), Uint128Max}) == 2

def test_wide_int_comparisons_are_exact():
	assert SignedInt128(-1) > -2**100
	assert Int128Min > -2**128
	assert Int128Min < -2**126
	assert Int128Max < 2**127
	assert not Int128Min == -2**127 - 1
	assert Int128Min == -2**127
	assert -2**100 < SignedInt128(0)

def test_shift_by_a_128_bit_amount():
	assert isinstance(1 << SignedInt128(4), SignedInt128)
	assert 1 << SignedInt128(127) == Int128Min
	assert -256 >> SignedInt128(4) == -16

def test_unsigned_reinterpretation():
	assert SignedInt128(Uint128Max) == -1
	assert SignedInt128(UnsignedInt128(1) << 127) == Int128Min
	assert SignedInt128(-7).as_unsigned() == Uint128Max - 6

@pytest.mark.parametrize("v,ctype,expected", [
	(-1, "uint64", MASK64),
	(-1, "int32", -1),
	(-129, "int8", 127),
	(0x1234, "uint8", 0x34),
	(0, "bool", False),
])
def test_cast(v, ctype, expected):
	assert SignedInt128(v).cast(ctype) == expected

@given(signed_ints)
def test_bytes(a):
	v = sint128(a)
	assert v.to_bytes() == a.to_bytes(16, "big", signed=True)
	assert SignedInt128.from_bytes(v.to_bytes("little"), "little") == v

def test_from_bytes_is_signed():
	assert SignedInt128.from_bytes(b"\xff" * 16) == -1
	assert SignedInt128.from_bytes(b"\x80" + b"\x00" * 15) == Int128Min

@given(st.integers(-2**63, 2**64 - 1))
def test_cast_idempotence(n):
	v = SignedInt128(n)
	assert SignedInt128(v.cast("int64")).low == v.low
