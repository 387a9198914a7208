from bitarray import bitarray
from bitarray.util import ba2int, int2ba

class bits:
	"Immutable(ish) layer on the bitarray module, most significant bit first"
	def __init__(self, val=0):
		if hasattr(val, "__bits__"):
			self._val = val.__bits__()._val
		elif isinstance(val, bits):
			self._val = val._val.copy()
		elif isinstance(val, (bytes, bytearray)):
			self._val = bitarray(endian="big")
			self._val.frombytes(bytes(val))
		elif isinstance(val, int):
			self._val = bitarray(val, endian="big")
			self._val.setall(0)
		else:
			self._val = bitarray(val, endian="big")
	def __getitem__(self, index):
		val = self._val[index]
		if isinstance(val, bitarray):
			return bits(val)
		return val
	def __str__(self):
		return self._val.to01()
	def __repr__(self):
		return "bits('%s')" % self._val.to01()
	def __len__(self):
		return len(self._val)
	def __iter__(self):
		return iter(self._val)
	def __eq__(self, other):
		if isinstance(other, bits):
			return other._val == self._val
		return NotImplemented
	def __add__(self, other):
		"Concatenation"
		if isinstance(other, bits):
			return bits(self._val + other._val)
		return bits(self._val + bitarray(other, endian="big"))
	def __invert__(self):
		return bits(~self._val)
	def __bytes__(self):
		return self._val.tobytes()

	def cut(self, length):
		"Yield consecutive length-bit pieces, the last one zero-filled on the right"
		for i in range(0, len(self), length):
			yield self[i:i+length].crop(length)
	def hex(self, uppercase=False):
		digits = '0123456789ABCDEF' if uppercase else '0123456789abcdef'
		return ''.join(digits[nibble.decode_int()] for nibble in self.cut(4))
	def crop(self, length):
		"Extend (on the right) or truncate, depending on length"
		if length <= 0:
			return bits()
		if len(self) > length:
			return self[:length]
		return self + bits(length - len(self))

	@classmethod
	def encode_int(cls, val, length):
		"Fixed-width unsigned encoding of val"
		if val < 0 or val >> length:
			raise ValueError("Cannot encode %d as a %d-bit unsigned integer" % (val, length))
		return cls(int2ba(val, length=length, endian="big"))
	def decode_int(self):
		if not len(self):
			return 0
		return ba2int(self._val)

	@classmethod
	def from_limbs(cls, *limbs, width=64):
		"Concatenate unsigned limbs, most significant first"
		ret = cls()
		for limb in limbs:
			ret += cls.encode_int(limb, width)
		return ret
	def to_limbs(self, width=64):
		"Split into unsigned limbs, most significant first. len(self) must be a multiple of width"
		if len(self) % width:
			raise ValueError("%d bits do not split into %d-bit limbs" % (len(self), width))
		return tuple(piece.decode_int() for piece in self.cut(width))
