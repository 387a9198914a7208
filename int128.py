"""
Exact 128-bit integers built from two 64-bit limbs

UnsignedInt128 wraps modulo 2**128 like a native unsigned integer, SignedInt128
is its two's complement view. Both are small immutable values; every operator
returns a new one, so `a += b` rebinds a.

Native integer operands follow C conversion rules: a python int must fit some
64-bit native type, negative values are sign extended. Mixing the two 128-bit
types gives an unsigned result. Larger magnitudes come from make_uint128 and
make_int128, or from a float. Equality is the exception: == compares exact
values, so a value equals (and hashes like) the python int it stands for.

Preconditions (division by zero, shift amounts outside [0, 128), floats that do
not fit, negating Int128Min, Int128Min // -1) are asserted, so they trap in a
normal run and cost nothing under python -O.
"""
import operator

import divmod128
import float_bridge
import limb
import radix
from bits import bits

color = True

class _Int128Base:
	"Storage, comparisons, bitwise operators and conversions shared by both 128-bit types"
	__slots__ = ("_hi", "_lo")

	digits10 = 38

	def __init__(self, val=0):
		if isinstance(val, _Int128Base):
			self._set_pattern(*val._pattern())
		elif isinstance(val, float):
			self._hi, self._lo = self._from_float(val)
		elif isinstance(val, int):
			assert limb.is_native(val), "%d does not fit a native 64-bit integer, use from_halves" % val
			self._hi = self._extension(val < 0)
			self._lo = limb.wrap(val)
		else:
			raise TypeError("Cannot convert %r to %s" % (type(val), type(self).__name__))

	@classmethod
	def _make(cls, hi, lo):
		ret = cls.__new__(cls)
		ret._hi = hi
		ret._lo = lo
		return ret
	@classmethod
	def _from_pattern(cls, hi, lo):
		"Build from two unsigned limbs"
		ret = cls.__new__(cls)
		ret._set_pattern(hi, lo)
		return ret
	def _pattern(self):
		"Both limbs as unsigned 64-bit patterns"
		return limb.bit_cast_to_unsigned(self._hi), self._lo

	@property
	def high(self):
		return self._hi
	@property
	def low(self):
		return self._lo

	def __bool__(self):
		return bool(self._hi or self._lo)
	def __int__(self):
		return (self._hi << 64) | self._lo
	__index__ = __int__
	def __hash__(self):
		return hash(int(self))
	def cast(self, ctype):
		"Convert to a native integer type by name ('int32', 'uint64', ...), keeping only the low bits"
		if ctype == "bool":
			return bool(self)
		return limb.narrow(self._lo, ctype)

	# equality is between exact values, so it agrees with __hash__ and with int
	def __eq__(self, other):
		if isinstance(other, (_Int128Base, int)):
			return int(self) == int(other)
		return NotImplemented
	def __ne__(self, other):
		if isinstance(other, (_Int128Base, int)):
			return int(self) != int(other)
		return NotImplemented

	def _compare(self, other):
		"""
		Three-way ordering, -1, 0 or 1
		Native operands convert the way C converts them, python ints too wide for
		any native type compare by exact value
		"""
		if isinstance(other, int) and not limb.is_native(other):
			a, b = int(self), other
		else:
			other = self._coerce(other)
			if other is None:
				return NotImplemented
			a, b = (self._hi, self._lo), (other._hi, other._lo)
		return (a > b) - (a < b)
	def __lt__(self, other):
		c = self._compare(other)
		if c is NotImplemented:
			return c
		return c < 0
	def __gt__(self, other):
		c = self._compare(other)
		if c is NotImplemented:
			return c
		return c > 0
	def __le__(self, other):
		c = self._compare(other)
		if c is NotImplemented:
			return c
		return c <= 0
	def __ge__(self, other):
		c = self._compare(other)
		if c is NotImplemented:
			return c
		return c >= 0

	# hi stays inside the storage range under these for both signednesses
	def __invert__(self):
		return self._make(~self._hi if self.is_signed else ~self._hi & limb.MASK64, ~self._lo & limb.MASK64)
	def __and__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return self._make(self._hi & other._hi, self._lo & other._lo)
	def __or__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return self._make(self._hi | other._hi, self._lo | other._lo)
	def __xor__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return self._make(self._hi ^ other._hi, self._lo ^ other._lo)
	__rand__ = __and__
	__ror__ = __or__
	__rxor__ = __xor__

	def __pos__(self):
		return self
	def inc(self):
		"The next value, wrapping around at the maximum"
		return self + 1
	def dec(self):
		"The previous value, wrapping around at the minimum"
		return self - 1

	def __rsub__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return other - self
	def __rfloordiv__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return other // self
	def __rmod__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return other % self
	def __rdivmod__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return divmod(other, self)
	# a native left operand converts to this type, self is the shift amount
	def __rlshift__(self, other):
		if not isinstance(other, int):
			return NotImplemented
		return self._coerce(other) << self
	def __rrshift__(self, other):
		if not isinstance(other, int):
			return NotImplemented
		return self._coerce(other) >> self
	def __floordiv__(self, other):
		"Division truncating toward zero, like native integer division"
		ret = self.__divmod__(other)
		if ret is NotImplemented:
			return ret
		return ret[0]
	def __mod__(self, other):
		"Remainder of truncating division, it has the sign of the dividend"
		ret = self.__divmod__(other)
		if ret is NotImplemented:
			return ret
		return ret[1]

	def __bits__(self):
		return bits.from_limbs(*self._pattern())
	def to_bytes(self, byteorder="big"):
		"The 16 byte two's complement encoding"
		data = bytes(bits(self))
		if byteorder == "little":
			return data[::-1]
		elif byteorder == "big":
			return data
		raise ValueError("byteorder must be either 'little' or 'big', not %r" % byteorder)
	@classmethod
	def from_bytes(cls, data, byteorder="big"):
		if len(data) != 16:
			raise ValueError("%s needs exactly 16 bytes, got %d" % (cls.__name__, len(data)))
		if byteorder == "little":
			data = bytes(data)[::-1]
		elif byteorder != "big":
			raise ValueError("byteorder must be either 'little' or 'big', not %r" % byteorder)
		return cls._from_pattern(*bits(data).to_limbs())

	def to_string(self):
		return self.to_formatted_string()
	def __str__(self):
		return self.to_formatted_string()
	def __format__(self, spec):
		return radix.format_value(self, spec)
	def __repr__(self):
		hi, lo = (bits.encode_int(half, 64).hex() for half in self._pattern())
		if not color:
			return "%s(hi=0x%s, lo=0x%s) # %s" % (type(self).__name__, hi, lo, self)
		return "%s(hi=\x1b[32m0x%s\x1b[0m, lo=\x1b[33m0x%s\x1b[0m) # %s" % (type(self).__name__, hi, lo, self)

class UnsignedInt128(_Int128Base):
	"""
	Unsigned 128-bit integer, value is high * 2**64 + low
	Everything wraps modulo 2**128
	"""
	__slots__ = ()

	is_signed = False
	is_modulo = True
	digits = 128

	@staticmethod
	def _extension(negative):
		return limb.MASK64 if negative else 0
	@staticmethod
	def _from_float(val):
		return float_bridge.uint128_from_float(val)
	def _set_pattern(self, hi, lo):
		self._hi = hi
		self._lo = lo
	@classmethod
	def _coerce(cls, other):
		if isinstance(other, UnsignedInt128):
			return other
		elif isinstance(other, (SignedInt128, int)):
			return cls(other)
		return None

	@classmethod
	def from_halves(cls, high, low):
		"Build high * 2**64 + low, both halves are 64-bit native integers"
		assert limb.is_native(high) and limb.is_native(low), "halves must be 64-bit integers"
		return cls._make(limb.wrap(high), limb.wrap(low))

	def __float__(self):
		return float_bridge.uint128_to_float(self._hi, self._lo)

	def __neg__(self):
		hi = ~self._hi & limb.MASK64
		lo = (~self._lo + 1) & limb.MASK64
		if lo == 0: # carry
			hi = limb.wrap(hi + 1)
		return self._make(hi, lo)
	def __add__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		lo, carry = limb.add_carry(self._lo, other._lo)
		return self._make(limb.wrap(self._hi + other._hi + carry), lo)
	def __sub__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		lo, borrow = limb.sub_borrow(self._lo, other._lo)
		return self._make(limb.wrap(self._hi - other._hi - borrow), lo)
	def __mul__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		hi, lo = limb.umul64(self._lo, other._lo)
		# the high limbs only reach the result through their low 64 product bits
		hi += limb.umul64(self._lo, other._hi)[1] + limb.umul64(self._hi, other._lo)[1]
		return self._make(limb.wrap(hi), lo)
	__radd__ = __add__
	__rmul__ = __mul__
	def __divmod__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return divmod128.divmod_unsigned(self, other)

	def __lshift__(self, amount):
		amount = operator.index(amount)
		assert 0 <= amount < 128, "shift amount %d out of range" % amount
		if amount < 64:
			if amount:
				return self._make(
					limb.wrap(self._hi << amount) | (self._lo >> (64 - amount)),
					limb.wrap(self._lo << amount))
			return self
		# 64-bit shifts by 64 or more do not exist, build from the low limb alone
		return self._make(limb.wrap(self._lo << (amount - 64)), 0)
	def __rshift__(self, amount):
		amount = operator.index(amount)
		assert 0 <= amount < 128, "shift amount %d out of range" % amount
		if amount < 64:
			if amount:
				return self._make(
					self._hi >> amount,
					(self._lo >> amount) | limb.wrap(self._hi << (64 - amount)))
			return self
		return self._make(0, self._hi >> (amount - 64))

	def to_formatted_string(self, flags=radix.FormatFlags.DEC):
		return radix.format_unsigned(self, flags)

class SignedInt128(_Int128Base):
	"""
	Signed two's complement 128-bit integer
	high is the signed upper limb and carries the sign, low is unsigned
	Arithmetic goes through the unsigned bit pattern and wraps on overflow
	"""
	__slots__ = ()

	is_signed = True
	is_modulo = False
	digits = 127

	@staticmethod
	def _extension(negative):
		return -1 if negative else 0
	@staticmethod
	def _from_float(val):
		return float_bridge.int128_from_float(val)
	def _set_pattern(self, hi, lo):
		self._hi = limb.bit_cast_to_signed(hi)
		self._lo = lo
	@classmethod
	def _coerce(cls, other):
		if isinstance(other, SignedInt128):
			return other
		elif isinstance(other, int):
			return cls(other)
		return None # unsigned operands take over through their reflected operators

	@classmethod
	def from_halves(cls, high, low):
		"Build from a signed 64-bit high half and an unsigned 64-bit low half"
		assert limb.is_native(high) and limb.is_native(low), "halves must be 64-bit integers"
		return cls._make(limb.bit_cast_to_signed(limb.wrap(high)), limb.wrap(low))

	@property
	def isnegative(self):
		return self._hi < 0
	@property
	def ismin(self):
		return self._hi == limb.INT64_MIN and self._lo == 0
	def as_unsigned(self):
		"The same bits as an UnsignedInt128"
		return UnsignedInt128(self)
	def unsigned_abs(self):
		"Magnitude as an UnsignedInt128, exact for Int128Min too"
		# negate as unsigned, -Int128Min does not exist
		if self._hi < 0:
			return -UnsignedInt128(self)
		return UnsignedInt128(self)

	def __float__(self):
		return float_bridge.int128_to_float(self._hi, self._lo)

	def __neg__(self):
		assert not self.ismin, "Int128Min has no negation"
		return SignedInt128(-UnsignedInt128(self))
	def __abs__(self):
		assert not self.ismin, "Int128Min has no absolute value"
		return SignedInt128(self.unsigned_abs())
	def __add__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return SignedInt128(UnsignedInt128(self) + UnsignedInt128(other))
	def __sub__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return SignedInt128(UnsignedInt128(self) - UnsignedInt128(other))
	def __mul__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		return SignedInt128(UnsignedInt128(self) * UnsignedInt128(other))
	__radd__ = __add__
	__rmul__ = __mul__
	def __divmod__(self, other):
		other = self._coerce(other)
		if other is None:
			return NotImplemented
		assert not (self.ismin and other == -1), "Int128Min // -1 overflows"
		quotient, remainder = divmod128.divmod_unsigned(self.unsigned_abs(), other.unsigned_abs())
		if self.isnegative != other.isnegative:
			quotient = -quotient
		if self.isnegative:
			remainder = -remainder
		return SignedInt128(quotient), SignedInt128(remainder)

	def __lshift__(self, amount):
		return SignedInt128(UnsignedInt128(self) << amount)
	def __rshift__(self, amount):
		"Arithmetic shift, the sign bit is copied in from the left"
		amount = operator.index(amount)
		assert 0 <= amount < 128, "shift amount %d out of range" % amount
		if amount < 64:
			if amount:
				return self._make(
					self._hi >> amount,
					(self._lo >> amount) | limb.wrap(self._hi << (64 - amount)))
			return self
		return self._make(self._hi >> 63, limb.bit_cast_to_unsigned(self._hi >> (amount - 64)))

	def to_formatted_string(self, flags=radix.FormatFlags.DEC):
		return radix.format_signed(self, flags)

def make_uint128(high, low):
	return UnsignedInt128.from_halves(high, low)

def make_int128(high, low):
	return SignedInt128.from_halves(high, low)

Uint128Max = make_uint128(limb.MASK64, limb.MASK64)
Int128Max = make_int128(limb.INT64_MAX, limb.MASK64)
Int128Min = make_int128(limb.INT64_MIN, 0)

UnsignedInt128.min = UnsignedInt128(0)
UnsignedInt128.max = Uint128Max
SignedInt128.min = Int128Min
SignedInt128.max = Int128Max
