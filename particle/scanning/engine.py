"""
The lexer runtime: rules go in, one combined automaton comes out, and then the
automaton carves input into tokens by maximal munch.

Each rule gets a rank by (priority, order of definition). The rank labels the
rule's NFA, all the rule-NFAs unite into one, and the subset construction gives
every accepting DFA state the best rank among the rules it can accept. Then the
scanner only needs to remember the most recent accepting state it passed through.

Input arrives through a cursor, which knows the current position and keeps a
look-ahead buffer. The scanner peeks as far as the automaton will go, and then
the cursor consumes only the accepted prefix: that is the whole of backtracking.
"""
from typing import NamedTuple, Callable, Optional, Iterable

from .interface import START, Position, Span, NoRuleMatched, EndOfInput
from .finite import NFA, DFA
from .regular import compile_regex

VERBOSE = False

class Rule(NamedTuple):
	"""
	The action gets called with the matched text and its Span, and its result is the token.
	A discard rule needs no action: its matches are skipped over.
	Priority defaults to the order of definition. Lower wins, but only between matches of equal length.
	"""
	pattern: str
	action: Optional[Callable]
	discard: bool = False
	priority: Optional[int] = None


class CursorBase:
	"""
	Mutable scanning state: the position of the next unconsumed character, and a buffer
	of characters read from the source but not yet consumed. Subclasses say what a
	character is and how it looks as bytes.
	"""
	NEWLINE = None

	def __init__(self, subject:Iterable):
		self.__source = iter(subject)
		self.__buffer = []
		self.position = START

	def encode(self, unit) -> bytes: raise NotImplementedError(type(self))
	def join(self, units:list): raise NotImplementedError(type(self))

	def peek(self, k:int=0):
		""" The character k places beyond the cursor, or None if the input ends first. """
		while len(self.__buffer) <= k:
			try: self.__buffer.append(next(self.__source))
			except StopIteration: return None
		return self.__buffer[k]

	def eof(self) -> bool: return self.peek() is None

	def lexeme(self, n:int):
		""" The next n characters, without consuming them. """
		if n > 0: self.peek(n-1)
		return self.join(self.__buffer[:n])

	def advance(self, n:int=1):
		""" Consume up to n characters, keeping track of offset, line and column. """
		if n > 0: self.peek(n-1)
		taken = self.__buffer[:n]
		del self.__buffer[:n]
		offset, line, column = self.position
		for unit in taken:
			offset += len(self.encode(unit))
			if unit == self.NEWLINE: line, column = line + 1, 0
			else: column += 1
		self.position = Position(offset, line, column)

class StringCursor(CursorBase):
	""" Characters are unicode; the automaton sees their UTF-8 encoding. """
	NEWLINE = '\n'
	def encode(self, unit:str) -> bytes: return unit.encode('utf-8', 'surrogatepass')
	def join(self, units:list) -> str: return ''.join(units)

class BytesCursor(CursorBase):
	""" Every byte is a character, so columns count bytes. """
	NEWLINE = 10
	def encode(self, unit:int) -> bytes: return bytes((unit,))
	def join(self, units:list) -> bytes: return bytes(units)

def make_cursor(subject) -> CursorBase:
	if isinstance(subject, CursorBase): return subject
	if isinstance(subject, (bytes, bytearray)): return BytesCursor(subject)
	return StringCursor(subject)


def rank_rules(rules:Iterable[Rule]) -> list:
	""" Sorted by (priority, index), where a missing priority means the index. """
	indexed = [(i if r.priority is None else r.priority, i, r) for i, r in enumerate(rules)]
	return [r for _, _, r in sorted(indexed, key=lambda x:x[:2])]

def combined_nfa(ranked:list, *, unicode=True) -> NFA:
	""" Each rule's NFA, labelled with its rank, all in one. Any PatternError propagates. """
	nfa = NFA.nothing()
	for rank, rule in enumerate(ranked):
		nfa = nfa.union(compile_regex(rule.pattern, unicode=unicode).labelled(rank))
	return nfa

class Lexer:
	""" Immutable once built, so many cursors may share it. """
	def __init__(self, rules:Iterable[Rule], *, unicode=True, minimize=True):
		self.rules = rank_rules(rules)
		for rule in self.rules:
			if not (rule.discard or callable(rule.action)):
				raise TypeError("Rule for pattern %r needs a callable action."%rule.pattern)
		dfa = combined_nfa(self.rules, unicode=unicode).subset_construction()
		if VERBOSE: dfa.stats()
		if minimize:
			dfa = dfa.minimize_states()
			if VERBOSE: dfa.stats()
		self.dfa : DFA = dfa

	def scan_one_raw_lexeme(self, cursor:CursorBase) -> tuple:
		"""
		This is where the magic happens. Run the automaton forward from the cursor as far as it will go,
		noting the length (in characters) and rank of the last acceptance after a whole character.
		Zero-length matches are never noted, and the cursor does not move.
		Returns (length, rank), with rank None if nothing matched.
		"""
		dfa = self.dfa
		jammed = dfa.jam_state()
		state, length, rank, k = dfa.initial, 0, None, 0
		while True:
			unit = cursor.peek(k)
			if unit is None: return length, rank
			for byte in cursor.encode(unit):
				state = dfa.get_next_state(state, byte)
				if state == jammed: return length, rank
			k += 1
			accept = dfa.get_state_rule_id(state)
			if accept is not None: length, rank = k, accept

	def next_token(self, cursor:CursorBase):
		"""
		Skip discards, then return whatever the winning rule's action makes of the next lexeme.
		Raises EndOfInput if the input is exhausted, or NoRuleMatched at the start of a bad
		lexeme. Either way, the cursor is left at that position.
		"""
		while True:
			start = cursor.position
			if cursor.eof(): raise EndOfInput(start)
			length, rank = self.scan_one_raw_lexeme(cursor)
			if rank is None: raise NoRuleMatched(start)
			text = cursor.lexeme(length)
			cursor.advance(length)
			rule = self.rules[rank]
			if not rule.discard: return rule.action(text, Span(start, cursor.position))

	def scan(self, subject):
		""" Generate tokens until the input runs out. A NoRuleMatched ends the scan. """
		cursor = make_cursor(subject)
		while True:
			try: token = self.next_token(cursor)
			except EndOfInput: return
			yield token
