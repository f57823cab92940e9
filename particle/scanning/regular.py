"""
A compiler from regular expressions to NFAs, by recursive descent with one character of look-ahead.

The language is deliberately small, since the target is lexing rather than general text matching:

	alternation := concat ('|' concat)*
	concat      := repeat+
	repeat      := atom ('*' | '+' | '?')?
	atom        := char | '.' | class | '(' alternation ')'
	class       := '[' '^'? classitem+ ']'
	classitem   := char | char '-' char | shorthand

Each grammar rule returns an NFA fragment, built with the combinators in the `finite` module.
There are no anchors, no counted repetition, no captures and no back-references: the
characters ^ $ { and } are errors outside a class, so that nobody mistakes them for working.
Escape any of them with a backslash to match it literally.

Escapes:
	\\n \\r \\t \\f \\v \\0   the usual control characters
	\\xHH                two hex digits
	\\u{H...}            any unicode scalar value
	\\d \\w \\s            digits, word characters, white space (ASCII); \\D \\W \\S are the complements
	\\ and punctuation   the punctuation character itself

Within a class, a ] right after the [ or [^ stands for itself, as does a - at either end.

Characters are unicode code points, which the NFA spells out as UTF-8 byte sequences.
Alternatively, a pattern compiled with unicode=False works on raw bytes: each character must
then be at most 0xFF, and it stands for that one byte.
"""
import warnings

from . import charset
from .charset import Interval
from .finite import NFA
from .interface import UnterminatedGroup, UnterminatedClass, InvalidEscape, EmptyAlternation, UnexpectedCharacter

SIMPLE_ESCAPES = {'n': '\n', 'r': '\r', 't': '\t', 'f': '\f', 'v': '\v', '0': '\0'}
SHORTHAND = {'d': charset.DIGIT, 'w': charset.WORD, 's': charset.SPACE}
HEX_DIGITS = frozenset('0123456789abcdefABCDEF')
NOTHING_TO_REPEAT = frozenset('*+?')
UNSUPPORTED = frozenset(']^${}')
END_OF_BRANCH = (None, '|', ')')

def compile_regex(pattern:str, *, unicode=True) -> NFA:
	""" Compile a pattern, or raise some kind of PatternError. """
	return PatternCompiler(pattern, unicode=unicode).compile()

class PatternCompiler:
	def __init__(self, pattern:str, *, unicode=True):
		self.pattern = pattern
		self.unicode = unicode
		self.universe = charset.UNICODE if unicode else charset.BYTES
		self.pos = 0

	def peek(self):
		return self.pattern[self.pos] if self.pos < len(self.pattern) else None

	def advance(self):
		ch = self.peek()
		self.pos += 1
		return ch

	def compile(self) -> NFA:
		nfa = self.alternation()
		if self.pos < len(self.pattern): raise UnexpectedCharacter(self.pattern, self.pos)
		return nfa

	def alternation(self) -> NFA:
		nfa = self.concat()
		while self.peek() == '|':
			self.advance()
			nfa = nfa.union(self.concat())
		return nfa

	def concat(self) -> NFA:
		if self.peek() in END_OF_BRANCH: raise EmptyAlternation(self.pattern, self.pos)
		nfa = self.repeat()
		while self.peek() not in END_OF_BRANCH:
			nfa = nfa.concat(self.repeat())
		return nfa

	def repeat(self) -> NFA:
		nfa = self.atom()
		ch = self.peek()
		if ch == '*': nfa = nfa.star()
		elif ch == '+': nfa = nfa.plus()
		elif ch == '?': nfa = nfa.optional()
		else: return nfa
		self.advance()
		return nfa

	def atom(self) -> NFA:
		at, ch = self.pos, self.peek()
		if ch == '(':
			self.advance()
			nfa = self.alternation()
			if self.peek() != ')': raise UnterminatedGroup(self.pattern, at)
			self.advance()
			return nfa
		if ch == '[': return self.char_class()
		if ch == '.':
			self.advance()
			return self.negated(charset.NEWLINE)
		if ch in NOTHING_TO_REPEAT or ch in UNSUPPORTED: raise UnexpectedCharacter(self.pattern, at)
		if self.at_shorthand():
			ranges, negate = self.shorthand()
			return self.negated(ranges) if negate else self.positive(ranges)
		codepoint = self.char()
		return self.positive([Interval(codepoint, codepoint)])

	def char_class(self) -> NFA:
		at = self.pos
		self.advance()
		negate = self.peek() == '^'
		if negate: self.advance()
		ranges, first = [], True
		while True:
			ch = self.peek()
			if ch is None: raise UnterminatedClass(self.pattern, at)
			if ch == ']' and not first:
				self.advance()
				break
			ranges.extend(self.class_item())
			first = False
		return self.negated(ranges) if negate else self.positive(ranges)

	def class_item(self) -> list:
		if self.at_shorthand():
			ranges, negate = self.shorthand()
			return charset.complement(ranges, self.universe) if negate else ranges
		at = self.pos
		lo = self.char()
		if self.peek() == '-' and self.pattern[self.pos+1:self.pos+2] not in ('', ']'):
			self.advance()
			hi = self.char()
			if hi < lo:
				warnings.warn("Backwards range at offset %d in pattern %r; swapping..."%(at, self.pattern))
				lo, hi = hi, lo
			return [Interval(lo, hi)]
		return [Interval(lo, lo)]

	def at_shorthand(self) -> bool:
		return self.peek() == '\\' and self.pattern[self.pos+1:self.pos+2].lower() in SHORTHAND

	def shorthand(self):
		""" Returns the ranges of the shorthand class, and whether they are to be complemented. """
		self.advance()
		letter = self.advance()
		return SHORTHAND[letter.lower()], letter.isupper()

	def char(self) -> int:
		""" One literal or escaped character, as a code point. """
		at = self.pos
		ch = self.advance()
		if ch != '\\': return self.checked(ord(ch), at, UnexpectedCharacter)
		ch = self.advance()
		if ch is None: raise InvalidEscape(self.pattern, at)
		if ch in SIMPLE_ESCAPES: value = ord(SIMPLE_ESCAPES[ch])
		elif ch == 'x': value = self.hex_digits(at, 2)
		elif ch == 'u':
			if self.advance() != '{': raise InvalidEscape(self.pattern, at)
			value = self.hex_digits(at, 6)
			if self.advance() != '}' or value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
				raise InvalidEscape(self.pattern, at)
		elif ch.isascii() and not ch.isalnum(): value = ord(ch)
		else: raise InvalidEscape(self.pattern, at)
		return self.checked(value, at, InvalidEscape)

	def hex_digits(self, at:int, most:int) -> int:
		""" For \\x exactly `most` digits are required; for \\u{...}, between one and `most`. """
		digits = ''
		while len(digits) < most and self.peek() in HEX_DIGITS:
			digits += self.advance()
		if not digits or (most == 2 and len(digits) < 2): raise InvalidEscape(self.pattern, at)
		return int(digits, 16)

	def checked(self, codepoint:int, at:int, error) -> int:
		if not self.unicode and codepoint > 0xFF: raise error(self.pattern, at)
		return codepoint

	def positive(self, ranges) -> NFA:
		return NFA.from_codepoints(ranges) if self.unicode else NFA.from_class(ranges)

	def negated(self, ranges) -> NFA:
		if self.unicode: return NFA.from_codepoints(charset.complement(ranges, charset.UNICODE))
		return NFA.from_class(ranges).complement_of_class()
