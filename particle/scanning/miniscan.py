""" Build a lexer one pattern at a time, instead of all at once from a list of rules. """

from typing import NamedTuple, Any

from .interface import Span
from .engine import Rule, Lexer

class Token(NamedTuple):
	kind: str
	value: Any
	span: Span

class Definition:
	"""
	For instance:
		lexemes = Definition()
		lexemes.ignore(r'\\s+')
		lexemes.token_map('number', r'\\d+', int)
		@lexemes.on(r'[a-z]+')
		def word(text): return ('keyword' if text in KEYWORDS else 'word'), text
		for token in lexemes.scan(text): ...
	Rules take part in the order they are defined, unless given an explicit priority.
	"""
	def __init__(self, *, unicode=True, minimize=True):
		self.__rules = []
		self.__lexer = None
		self.__unicode = unicode
		self.__minimize = minimize
		self.__awaiting_action = False

	def get_lexer(self) -> Lexer:
		if self.__lexer is None:
			if self.__awaiting_action: raise AssertionError('You forgot to provide the action for the final pattern!')
			self.__lexer = Lexer(self.__rules, unicode=self.__unicode, minimize=self.__minimize)
		return self.__lexer

	def scan(self, text):
		""" Yields Token objects. """
		return self.get_lexer().scan(text)

	def __install_rule(self, rule:Rule):
		assert self.__lexer is None, "The lexer was already built; it's too late to add rules."
		self.__rules.append(rule)

	def token(self, kind:str, pattern:str, *, priority=None):
		""" Every match is a token of the given kind, with the matched text for its value. """
		self.token_map(kind, pattern, None, priority=priority)

	def token_map(self, kind:str, pattern:str, fn:callable, *, priority=None):
		""" Every match is a token of the given kind, with fn(matched text) for its value. """
		@self.on(pattern, priority=priority)
		def action(text): return kind, (text if fn is None else fn(text))

	def ignore(self, pattern:str, *, priority=None):
		""" Matches are skipped over. """
		if self.__awaiting_action: raise AssertionError('You forgot to provide the action for the previous pattern!')
		self.__install_rule(Rule(pattern, None, discard=True, priority=priority))

	def on(self, pattern:str, *, priority=None):
		"""
		Decorate a function of the matched text which returns a (kind, value) pair.
		The Definition supplies the span.
		"""
		if self.__awaiting_action: raise AssertionError('You forgot to provide the action for the previous pattern!')
		self.__awaiting_action = True
		def decorator(fn):
			assert self.__awaiting_action
			self.__awaiting_action = False
			assert callable(fn)
			def action(text, span:Span):
				kind, value = fn(text)
				return Token(kind, value, span)
			self.__install_rule(Rule(pattern, action, priority=priority))
			return fn
		return decorator
