"""
Conversions between python floats (IEEE 754 doubles) and 128-bit limb pairs

Everything here speaks (hi, lo) tuples. For the unsigned functions both limbs
are unsigned 64-bit, for the signed ones hi is an int64.
Rounding from float is always toward zero, like a C cast.
"""
import math

import limb

TWO_64 = math.ldexp(1.0, 64)
TWO_127 = math.ldexp(1.0, 127)
TWO_128 = math.ldexp(1.0, 128)

def _negate(hi, lo):
	"Two's complement negation of an unsigned limb pair"
	hi = ~hi & limb.MASK64
	lo = (~lo + 1) & limb.MASK64
	if lo == 0: # carry
		hi = (hi + 1) & limb.MASK64
	return hi, lo

def uint128_from_float(v):
	assert math.isfinite(v) and -1 < v < TWO_128, "%r does not fit in uint128" % v
	if v >= TWO_64:
		# too large to truncate into one limb, scale the exponent down first
		hi = int(math.ldexp(v, -64))
		lo = int(v - math.ldexp(float(hi), 64))
		return hi, lo
	return 0, int(v)

def int128_from_float(v):
	# floats are sign-magnitude: convert the magnitude, then negate
	# the two's complement limbs would swamp the mantissa otherwise
	assert math.isfinite(v) and -TWO_127 <= v < TWO_127, "%r does not fit in int128" % v
	if v < 0:
		hi, lo = _negate(*uint128_from_float(-v))
	else:
		hi, lo = uint128_from_float(v)
	return limb.bit_cast_to_signed(hi), lo

def uint128_to_float(hi, lo):
	return float(lo) + math.ldexp(float(hi), 64)

def int128_to_float(hi, lo):
	"hi is signed"
	if hi < 0 and not (hi == limb.INT64_MIN and lo == 0):
		mag_hi, mag_lo = _negate(limb.bit_cast_to_unsigned(hi), lo)
		return -uint128_to_float(mag_hi, mag_lo)
	return float(lo) + math.ldexp(float(hi), 64)
