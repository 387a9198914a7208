"""
Shift-subtract long division for 128-bit unsigned values

Works on any value exposing .high/.low limbs, the 128-bit shifts, comparisons
and subtraction, plus a from_halves(high, low) constructor on its type. In
practice that is int128.UnsignedInt128; the signed type reduces to it through
absolute values before calling in here.
"""
import limb

def fls128(n):
	"""
	Index of the most significant set bit of n, e.g. 5 (0b101) -> 2
	n must not be zero
	"""
	hi = n.high
	if hi:
		return 127 - limb.clz64(hi)
	lo = n.low
	assert lo != 0, "fls128 of zero is undefined"
	return 63 - limb.clz64(lo)

def divmod_unsigned(dividend, divisor):
	"Returns (quotient, remainder) of dividend / divisor, divisor must be nonzero"
	make = type(dividend).from_halves
	assert divisor.high or divisor.low, "division by zero"

	if divisor > dividend:
		return make(0, 0), dividend
	if divisor == dividend:
		return make(0, 1), make(0, 0)

	quotient = make(0, 0)
	# left align the leading ones of divisor and dividend
	shift = fls128(dividend) - fls128(divisor)
	denominator = divisor << shift

	# the remainder is what is left of dividend afterwards
	for _ in range(shift + 1):
		quotient <<= 1
		if dividend >= denominator:
			dividend -= denominator
			quotient |= 1
		denominator >>= 1

	return quotient, dividend
