""" JSON is JavaScript Object Notation. See http://www.json.org/ for more.
Python has a standard library for JSON, so this is just a worked example. """

from particle.scanning import miniscan
from particle.scanning.interface import LanguageError

###################################################################################
#  Begin with a scanner definition:
###################################################################################

lexemes = miniscan.Definition()

# It's easy to ignore whitespace:
lexemes.ignore(r'[ \t\n\r]+')

# The number pattern is a bit of a mouthful without named subexpressions.
# Both rules match integers; the float rule is defined later, so integers stay integers.
lexemes.token_map('number', r'-?(0|[1-9]\d*)', int)
lexemes.token_map('number', r'-?(0|[1-9]\d*)(\.\d+)?([eE][-+]?\d+)?', float)

# Punctuation will appear as such:
@lexemes.on(r'[][{}:,]')
def punctuation(text): return text, None

# You can dynamically generate your pattern...
reserved_words = {'true': True, 'false': False, 'null': None}
@lexemes.on('|'.join(reserved_words.keys()))
def match_reserved_word(text): return text, reserved_words[text]

# A whole string is one token: the value is the decoded text.
escapes = {'"': '"', '\\': '\\', '/': '/', 'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t'}
def decode_string(text:str) -> str:
	chunks, i, body = [], 0, text[1:-1]
	while i < len(body):
		if body[i] != '\\':
			chunks.append(body[i])
			i += 1
		elif body[i+1] == 'u':
			chunks.append(chr(int(body[i+2:i+6], 16)))
			i += 6
		else:
			chunks.append(escapes[body[i+1]])
			i += 2
	return ''.join(chunks)

lexemes.token_map('string', r'"([^"\\\x00-\x1f]|\\["\\/bfnrt]|\\u[0-9a-fA-F][0-9a-fA-F][0-9a-fA-F][0-9a-fA-F])*"', decode_string)

###################################################################################
#  A small recursive-descent parser makes values of the tokens:
###################################################################################

class JsonError(LanguageError):
	""" The tokens are fine but they do not make a JSON value. """

class Parser:
	def __init__(self, text):
		self.tokens = list(lexemes.scan(text))
		self.index = 0

	def peek(self):
		return self.tokens[self.index].kind if self.index < len(self.tokens) else None

	def take(self, kind):
		if self.peek() != kind: raise JsonError("Expected %r but found %r."%(kind, self.peek()))
		token = self.tokens[self.index]
		self.index += 1
		return token

	def value(self):
		kind = self.peek()
		if kind == '{': return self.members()
		if kind == '[': return self.elements()
		if kind in ('string', 'number', 'true', 'false', 'null'): return self.take(kind).value
		raise JsonError("Expected a value but found %r."%kind)

	def members(self):
		self.take('{')
		result = {}
		if self.peek() != '}':
			while True:
				key = self.take('string').value
				self.take(':')
				result[key] = self.value()
				if self.peek() != ',': break
				self.take(',')
		self.take('}')
		return result

	def elements(self):
		self.take('[')
		result = []
		if self.peek() != ']':
			result.append(self.value())
			while self.peek() == ',':
				self.take(',')
				result.append(self.value())
		self.take(']')
		return result

def parse(text):
	parser = Parser(text)
	result = parser.value()
	if parser.peek() is not None: raise JsonError("Extra text after the value.")
	return result
