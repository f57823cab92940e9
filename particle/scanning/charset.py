"""
Sets of bytes and sets of characters, represented as sorted lists of closed intervals.

The finite automata in this package run over bytes: that keeps every transition table
exactly 256 columns wide, no matter what the patterns say. A pattern may mention any
unicode character, so the compiler thinks in terms of code-point intervals first and
then translates each interval into the UTF-8 byte sequences that encode it. The
functions here serve both purposes: they work on intervals of integers and do not
much care whether those integers are bytes or code points.

An interval is a closed range [lo, hi] with lo <= hi. A "normal" list of intervals is
sorted, and no two members overlap or even touch; `normalize` makes one from any
collection of intervals.
"""
from typing import NamedTuple, Iterable, Iterator, Optional, Union

class Interval(NamedTuple):
	lo: int
	hi: int

# As a transition label, an interval is a range of byte values.
ByteRange = Interval

BYTES = [Interval(0, 255)]
UNICODE = [Interval(0, 0xD7FF), Interval(0xE000, 0x10FFFF)] # Surrogates are not scalar values.

Universe = Union[Interval, Iterable[Interval]]

def contains(r:Interval, x:int) -> bool: return r.lo <= x <= r.hi

def intersect(a:Interval, b:Interval) -> Optional[Interval]:
	lo, hi = max(a.lo, b.lo), min(a.hi, b.hi)
	if lo <= hi: return Interval(lo, hi)

def normalize(ranges:Iterable) -> list:
	""" Sorted, disjoint, and with adjacent or overlapping members merged together. """
	result = []
	for lo, hi in sorted(ranges):
		assert lo <= hi, (lo, hi)
		if result and lo <= result[-1].hi + 1:
			if hi > result[-1].hi: result[-1] = Interval(result[-1].lo, hi)
		else:
			result.append(Interval(lo, hi))
	return result

def complement(ranges:Iterable, universe:Universe=BYTES) -> list:
	""" Everything in the universe which is not in any of the given ranges. """
	if isinstance(universe, Interval): universe = [universe]
	ranges = normalize(ranges)
	result = []
	for outer in normalize(universe):
		lo = outer.lo
		for r in ranges:
			if r.hi < lo: continue
			if r.lo > outer.hi: break
			if r.lo > lo: result.append(Interval(lo, r.lo - 1))
			lo = r.hi + 1
		if lo <= outer.hi: result.append(Interval(lo, outer.hi))
	return result

def describe(ranges:Iterable) -> str:
	""" For example, [48-57] and [95] come out as "48-57, 95". """
	return ", ".join(str(lo) if lo == hi else "%d-%d"%(lo, hi) for lo, hi in normalize(ranges))


# UTF-8 expansion:

MAX_SCALAR_OF_LENGTH = (0x7F, 0x7FF, 0xFFFF) # ... and 0x10FFFF for four bytes.

def utf8_sequences(lo:int, hi:int) -> Iterator[tuple]:
	"""
	Yield tuples of byte ranges, in ascending order, such that every scalar value
	in [lo, hi] (surrogates excepted) encodes to a byte string matched by exactly
	one of the tuples, and each tuple matches only such encodings.

	The idea is to split the interval until both ends share an encoded length and
	differ only in one suffix of continuation bytes whose ranges are "full". Then the
	encodings of the two ends, taken byte by byte, are the bounds of the sequence.
	"""
	stack = [(lo, hi)]
	while stack:
		lo, hi = stack.pop()
		while True:
			if lo < 0xE000 and hi > 0xD7FF:
				stack.append((0xE000, hi))
				hi = 0xD7FF
			if lo > hi: break
			split = _split_by_length(lo, hi) or _split_by_continuation(lo, hi)
			if split:
				stack.append(split[1])
				lo, hi = split[0]
				continue
			first, last = chr(lo).encode('utf-8'), chr(hi).encode('utf-8')
			yield tuple(ByteRange(a, b) for a, b in zip(first, last))
			break

def _split_by_length(lo, hi):
	for most in MAX_SCALAR_OF_LENGTH:
		if lo <= most < hi: return (lo, most), (most + 1, hi)

def _split_by_continuation(lo, hi):
	if hi <= 0x7F: return
	for i in range(1, 4):
		mask = (1 << (6 * i)) - 1
		if lo & ~mask != hi & ~mask:
			if lo & mask: return (lo, lo | mask), ((lo | mask) + 1, hi)
			if hi & mask != mask: return (lo, (hi & ~mask) - 1), (hi & ~mask, hi)


# Predefined classes of code points:

def _point(c:str): return Interval(ord(c), ord(c))
def _span(a:str, b:str): return Interval(ord(a), ord(b))

DIGIT = [_span('0', '9')]
WORD = normalize([_span('0', '9'), _span('A', 'Z'), _point('_'), _span('a', 'z')])
SPACE = normalize([_span('\t', '\r'), _point(' ')])
NEWLINE = [_point('\n')]
