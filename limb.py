"""
64-bit limb primitives

A python int stands in for one machine word here; every function takes and
returns values in [0, 2**64) unless it says otherwise. Two backends exist:
the native one leans on a double-width multiply and int.bit_length, the
portable one only ever multiplies 32-bit halves and counts leading zeros
with a nibble table. The backend is picked once, at import.
"""
import logging
import os

logger = logging.getLogger(__name__)

PORTABLE = os.environ.get("INT128_PORTABLE", "0") == "1"

BITS = 64
MASK64 = (1 << 64) - 1
MASK32 = (1 << 32) - 1
SIGN_BIT = 1 << 63
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

# name -> (width, signed)
NATIVE_TYPES = {
	"bool": (1, False),
	"int8": (8, True),
	"uint8": (8, False),
	"int16": (16, True),
	"uint16": (16, False),
	"int32": (32, True),
	"uint32": (32, False),
	"int64": (64, True),
	"uint64": (64, False),
}

def wrap(n):
	"Reduce n modulo 2**64"
	return n & MASK64

def bit_cast_to_signed(v):
	"Reinterpret an unsigned 64-bit pattern as int64"
	if v & SIGN_BIT:
		return v - (1 << 64)
	return v

def bit_cast_to_unsigned(v):
	"Reinterpret an int64 as its unsigned 64-bit pattern"
	return v & MASK64

def is_native(v):
	"True if v fits some native integer type, i.e. int64 or uint64"
	return INT64_MIN <= v <= MASK64

def narrow(v, ctype):
	"""
	Truncate the 64-bit pattern v to a native integer type the way a C cast does
	bool is the exception: it tests the whole limb
	"""
	try:
		width, signed = NATIVE_TYPES[ctype]
	except KeyError:
		raise ValueError("Unknown native integer type %r" % ctype) from None
	if ctype == "bool":
		return v != 0
	v &= (1 << width) - 1
	if signed and v >> (width - 1):
		v -= 1 << width
	return v

def add_carry(a, b):
	"Returns (sum, carry) with the carry detected from the wrapped sum, as a 64-bit machine would"
	s = (a + b) & MASK64
	return s, int(s < a)

def sub_borrow(a, b):
	"Returns (difference, borrow)"
	return (a - b) & MASK64, int(a < b)

def _umul64_native(a, b):
	"64x64->128 multiply using the double-width product, returns (hi, lo)"
	p = a * b
	return p >> 64, p & MASK64

def _umul64_portable(a, b):
	"64x64->128 multiply from four 32-bit partial products, returns (hi, lo)"
	a32, a00 = a >> 32, a & MASK32
	b32, b00 = b >> 32, b & MASK32
	hi = a32 * b32
	lo = a00 * b00
	# the two cross products each straddle the limb boundary
	for cross in (a32 * b00, a00 * b32):
		lo, carry = add_carry(lo, (cross << 32) & MASK64)
		hi += (cross >> 32) + carry
	return hi & MASK64, lo

def _clz64_native(n):
	return BITS - n.bit_length()

# leading zeros of a nibble, index 0 is never looked up with a nonzero input
_NIBBLE_CLZ = (4, 3, 2, 2, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0)

def _clz64_portable(n):
	"Count leading zeros by binary search down to a nibble. n must not be 0"
	assert n != 0, "clz64 of zero is undefined"
	zeroes = 60
	for step in (32, 16, 8, 4):
		if n >> step:
			zeroes -= step
			n >>= step
	return _NIBBLE_CLZ[n] + zeroes

if PORTABLE:
	umul64 = _umul64_portable
	clz64 = _clz64_portable
else:
	umul64 = _umul64_native
	clz64 = _clz64_native

logger.debug("limb backend: %s", "portable" if PORTABLE else "native")
