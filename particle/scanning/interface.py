"""
Scanning Interface Definitions.

The scanning algorithm is data-driven, but it should not care about the internal structure
of the automaton it drives, so long as the proper relevant questions may be answered.
That is what the FiniteAutomaton class captures.

The rest of the file is the vocabulary shared between the pattern compiler, the automata,
and the lexer runtime: source positions, and the exceptions each part may raise.
"""
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from ..support.failureprone import illustration

StateId = int
Priority = int

class Position(NamedTuple):
	""" Lines count from one; columns (in characters) from zero. """
	byte_offset: int
	line: int
	column: int

START = Position(0, 1, 0)

class Span(NamedTuple):
	""" Half-open: `end` is the position just after the last character matched. """
	start: Position
	end: Position

class FiniteAutomaton(ABC):
	"""
	A finite automaton determines which rule matches but knows nothing about the rules themselves.
	This interface captures the operations required to execute the general scanning algorithm.
	"""
	initial: StateId

	@abstractmethod
	def jam_state(self) -> StateId:
		""" The dead state: once there, no input can ever lead to acceptance. """

	@abstractmethod
	def get_next_state(self, current_state:StateId, byte:int) -> StateId:
		""" The FSM's delta function. """

	@abstractmethod
	def get_state_rule_id(self, state_id:StateId) -> Optional[Priority]:
		""" Return the associated rule priority if this state is accepting, otherwise None. """


class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """


class PatternError(LanguageError):
	"""
	Raised while compiling a pattern. Parameters are:
		the text of the pattern, and
		the offset (in characters) of the trouble within it.
	Either may be None if the problem was found outside the pattern compiler.
	"""
	gripe = "Malformed pattern."
	def __init__(self, pattern:str=None, offset:int=None):
		super().__init__(pattern, offset)
		self.pattern, self.offset = pattern, offset

	def __str__(self):
		if self.offset is None: return self.gripe
		return "%s (at offset %d in %r)"%(self.gripe, self.offset, self.pattern)

	def illustrate(self) -> str:
		""" Picture the pattern with a caret under the offending spot. """
		if self.pattern is None: return self.gripe
		return illustration(self.pattern, self.offset, prefix='  ', caption=self.gripe)

class UnterminatedGroup(PatternError):
	gripe = "This parenthesis is never closed."
class UnterminatedClass(PatternError):
	gripe = "This character class is never closed."
class InvalidEscape(PatternError):
	gripe = "Invalid escape sequence."
class EmptyAlternation(PatternError):
	gripe = "Empty alternative; every branch must match something."
class UnexpectedCharacter(PatternError):
	gripe = "Unexpected character."
class UnsupportedComplement(PatternError):
	gripe = "Only a single-symbol character class can be complemented."


class LexError(LanguageError):
	""" Raised by the lexer. Parameter is the Position where the attempted lexeme begins. """
	def __init__(self, position:Position):
		super().__init__(position)
		self.position = position

class NoRuleMatched(LexError):
	""" No rule matches any (non-empty) prefix of the remaining input. """
	def __str__(self):
		return "No rule matches at line %d, column %d."%(self.position.line, self.position.column + 1)

class EndOfInput(LexError):
	""" A token was requested, but none remains. """
