"""
Text rendering of 128-bit values

Values are cut into three chunks with two divisions by the largest power of
the base that fits a limb, and every chunk after the leading one is zero
padded to the chunk's full digit count.
"""
import enum
import re

from divmod128 import divmod_unsigned

digits: str = "0123456789abcdef"

class FormatFlags(enum.IntFlag):
	"Stream-style formatting flags"
	DEC = 0x01
	OCT = 0x02
	HEX = 0x04
	UPPERCASE = 0x08
	SHOWBASE = 0x10
	SHOWPOS = 0x20
	LEFT = 0x40
	RIGHT = 0x80
	INTERNAL = 0x100

BASEFIELD = FormatFlags.DEC | FormatFlags.OCT | FormatFlags.HEX
ADJUSTFIELD = FormatFlags.LEFT | FormatFlags.RIGHT | FormatFlags.INTERNAL

# base -> (largest power of base below 2**64, its digit count)
CHUNKS = {
	10: (10**19, 19),
	8: (8**21, 21),
	16: (16**15, 15),
}

def base_of(flags) -> int:
	basefield = flags & BASEFIELD
	if basefield == FormatFlags.HEX:
		return 16
	elif basefield == FormatFlags.OCT:
		return 8
	return 10 # decimal, or no base given

def to_positional_base(i: int, b: int, uppercase: bool = False) -> str:
	"Digits of a nonnegative limb in base b"
	if not 1 < b <= len(digits):
		raise ValueError("Base %d not supported" % b)
	if i == 0:
		return "0"
	ret = ""
	while i:
		ret = digits[i % b] + ret
		i //= b
	return ret.upper() if uppercase else ret

def render_limb(i: int, flags, width: int = 0) -> str:
	"A single 64-bit chunk, with its base prefix if asked for and zero padded to width"
	b = base_of(flags)
	upper = bool(flags & FormatFlags.UPPERCASE)
	ret = to_positional_base(i, b, upper).rjust(width, "0")
	if flags & FormatFlags.SHOWBASE and i != 0:
		if b == 16:
			ret = ("0X" if upper else "0x") + ret
		elif b == 8:
			ret = "0" + ret
	return ret

def format_unsigned(v, flags=FormatFlags.DEC) -> str:
	"Digits of an unsigned 128-bit value, honoring base, UPPERCASE and SHOWBASE"
	div, width = CHUNKS[base_of(flags)]
	div = type(v).from_halves(0, div)

	# each chunk is below div and therefore fits a limb
	high, low = divmod_unsigned(v, div)
	high, mid = divmod_unsigned(high, div)
	chunk_flags = flags & ~FormatFlags.SHOWBASE
	if high.low:
		return render_limb(high.low, flags) + \
			render_limb(mid.low, chunk_flags, width) + \
			render_limb(low.low, chunk_flags, width)
	elif mid.low:
		return render_limb(mid.low, flags) + render_limb(low.low, chunk_flags, width)
	return render_limb(low.low, flags)

def format_signed(v, flags=FormatFlags.DEC) -> str:
	"""
	Decimal output gets a '-' for negatives, or a '+' with SHOWPOS, in front of the magnitude
	Octal and hexadecimal output show the two's complement bit pattern
	"""
	if base_of(flags) != 10:
		return format_unsigned(v.as_unsigned(), flags)
	if v.high < 0:
		sign = "-"
	elif flags & FormatFlags.SHOWPOS:
		sign = "+"
	else:
		sign = ""
	return sign + format_unsigned(v.unsigned_abs(), flags)

def pad(rep: str, width: int, fill: str = " ", flags=FormatFlags.RIGHT, nonzero: bool = True) -> str:
	"""
	Pad a formatted value to width the way stream insertion does
	LEFT appends the fill, RIGHT (the default) prepends it and INTERNAL puts
	it after a leading sign, or after the 0x of a nonzero SHOWBASE hex value
	"""
	if width <= len(rep):
		return rep
	padding = fill * (width - len(rep))
	adjust = flags & ADJUSTFIELD
	if adjust == FormatFlags.LEFT:
		return rep + padding
	elif adjust == FormatFlags.INTERNAL:
		if base_of(flags) == 10 and rep[:1] in ("+", "-"):
			return rep[:1] + padding + rep[1:]
		elif base_of(flags) == 16 and flags & FormatFlags.SHOWBASE and nonzero:
			return rep[:2] + padding + rep[2:]
	return padding + rep

_spec_re = re.compile(
	r"""
	^
	(?:(?P<fill>.)?(?P<align>[<>=^]))?
	(?P<sign>[-+ ])?
	(?P<alt>\#)?
	(?P<zero>0)?
	(?P<width>[0-9]+)?
	(?P<grouping>[,_])?
	(?:\.(?P<precision>[0-9]+))?
	(?P<type>[a-zA-Z%])?
	$
	""",
	re.X | re.S
)

_types = {
	None: FormatFlags.DEC,
	"d": FormatFlags.DEC,
	"o": FormatFlags.OCT,
	"x": FormatFlags.HEX,
	"X": FormatFlags.HEX | FormatFlags.UPPERCASE,
}

_aligns = {
	"<": FormatFlags.LEFT,
	">": FormatFlags.RIGHT,
	"=": FormatFlags.INTERNAL,
}

def parse_format_spec(spec: str):
	"""
	Translate a format() spec into (flags, width, fill)
	Supported: [[fill]align][sign][#][0][width][type], with align one of <>=,
	sign + or -, and type one of d o x X. '#' turns on SHOWBASE, which
	prefixes octal with 0 and hexadecimal with 0x/0X as streams do.
	"""
	match = _spec_re.match(spec)
	if not match:
		raise ValueError("Invalid format specifier %r" % spec)
	groups = match.groupdict()
	if groups["align"] == "^":
		raise ValueError("Centered alignment is not supported for 128-bit integers")
	if groups["sign"] == " ":
		raise ValueError("Space sign is not supported for 128-bit integers")
	if groups["grouping"] or groups["precision"]:
		raise ValueError("Grouping and precision are not allowed in 128-bit integer format specifier %r" % spec)
	if groups["type"] not in _types:
		raise ValueError("Unknown format code %r for 128-bit integers" % groups["type"])

	flags = _types[groups["type"]]
	if groups["sign"] == "+":
		flags |= FormatFlags.SHOWPOS
	if groups["alt"]:
		flags |= FormatFlags.SHOWBASE
	fill = groups["fill"] or " "
	if groups["align"]:
		flags |= _aligns[groups["align"]]
	elif groups["zero"]:
		fill = "0"
		flags |= FormatFlags.INTERNAL
	else:
		flags |= FormatFlags.RIGHT
	return flags, int(groups["width"] or 0), fill

def format_value(v, spec: str) -> str:
	"format() support for both 128-bit types"
	flags, width, fill = parse_format_spec(spec)
	if v.is_signed:
		rep = format_signed(v, flags)
	else:
		rep = format_unsigned(v, flags)
	return pad(rep, width, fill, flags, nonzero=bool(v))
