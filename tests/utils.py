import pytest
from hypothesis import strategies as st

import int128

MASK64 = 2**64 - 1
MASK128 = 2**128 - 1

limbs = st.one_of(
	st.integers(0, MASK64),
	st.sampled_from([0, 1, 2**32 - 1, 2**32, 2**63 - 1, 2**63, MASK64]),
)

# python ints standing in for the exact value
unsigned_ints = st.one_of(
	st.integers(0, MASK128),
	st.integers(0, MASK64),
	st.builds(lambda hi, lo: (hi << 64) | lo, limbs, limbs),
)
signed_ints = unsigned_ints.map(lambda n: n - 2**128 if n >> 127 else n)

shift_amounts = st.integers(0, 127)

def uint128(n):
	"UnsignedInt128 holding n mod 2**128"
	n &= MASK128
	return int128.make_uint128(n >> 64, n & MASK64)

def sint128(n):
	"SignedInt128 holding n mod 2**128"
	n &= MASK128
	return int128.make_int128(n >> 64, n & MASK64)

def wrap_signed(n):
	"Python oracle for two's complement wraparound"
	n &= MASK128
	return n - 2**128 if n >> 127 else n

def trunc_divmod(a, b):
	"Python oracle for truncating division"
	q = abs(a) // abs(b)
	if (a < 0) != (b < 0):
		q = -q
	return q, a - q * b

requires_asserts = pytest.mark.skipif(not __debug__, reason="preconditions are only checked with assertions enabled")
