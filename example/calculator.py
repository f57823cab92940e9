"""
Tokens for a desktop-calculator language, from a plain list of rules.

Note that the Integer rule also matches a prefix of every Float. That's no trouble:
the longer match wins, so "321.654" is one Float rather than an Integer and some junk.
Between equally long matches the earlier rule wins, which is why Integer comes first.

Run this file to see the tokens of a sample expression, then a complaint about the
first character no rule can match.
"""
from typing import NamedTuple, Any

from particle.scanning.engine import Rule, Lexer, make_cursor
from particle.scanning.interface import Span, NoRuleMatched, EndOfInput

class Token(NamedTuple):
	kind: str
	value: Any
	span: Span

def _make(kind, convert=str):
	return lambda text, span: Token(kind, convert(text), span)

lexer = Lexer([
	Rule(r'[ \n\r\t]+', None, discard=True),
	Rule(r'[1-9][0-9]*', _make('Integer', int)),
	Rule(r'[1-9][0-9]*(\.[0-9]+)?([eE][+\-]?[0-9]+)?', _make('Float', float)),
	Rule(r'\+|-|\*|/|\(|\)', _make('Punctuation')),
	Rule(r'[a-zA-Z][_a-zA-Z0-9]*', _make('Identifier')),
])

def tokenize(text:str) -> list:
	""" All the tokens, in order; raises NoRuleMatched at the first bad spot. """
	return list(lexer.scan(text))

def main(text:str):
	cursor = make_cursor(text)
	while not cursor.eof():
		try: token = lexer.next_token(cursor)
		except NoRuleMatched as e:
			print("Error at %r: %s"%(e.position, e))
			break
		except EndOfInput: break
		else: print(token.kind, repr(token.value))

if __name__ == '__main__':
	main("(412 + 321.654) / 768.432 * 34e-1 - sin(30) % 2")
