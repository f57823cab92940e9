import unittest
from particle.scanning import miniscan
from particle.scanning.interface import Position, NoRuleMatched

class TestMiniScan(unittest.TestCase):
	def test_01_simple_tokens_with_priority_feature(self):
		s = miniscan.Definition()
		s.ignore(r'\s+') # Ignore spaces except inasmuch as they separate tokens.
		s.token('word', r'\w+') # The digits are included in the \w shorthand,
		s.token_map('number', r'\d+', int, priority=-1) # but the better priority makes numbers stand out.
		self.assertEqual(
			[
				('word', 'abc'),
				('number', 123),
				('word', 'def456'),
				('number', 789),
				('word', '789XYZ'),
			],
			[token[:2] for token in s.scan(' abc   123  def456  789 789XYZ ')],
		)

	def test_02_decorator(self):
		s = miniscan.Definition()
		keywords = {'if', 'then', 'else'}
		@s.on(r'[a-z]+')
		def word(text): return ('keyword' if text in keywords else 'name'), text
		s.ignore(' ')
		tokens = list(s.scan('if x then y'))
		self.assertEqual(['keyword', 'name', 'keyword', 'name'], [t.kind for t in tokens])
		self.assertEqual(Position(5, 1, 5), tokens[2].span.start)
		self.assertEqual(Position(9, 1, 9), tokens[2].span.end)

	def test_03_forgotten_action(self):
		s = miniscan.Definition()
		s.on('a')
		self.assertRaises(AssertionError, s.token, 'b', 'b')
		self.assertRaises(AssertionError, s.get_lexer)

	def test_04_lexer_is_built_once(self):
		s = miniscan.Definition()
		s.token('a', 'a+')
		self.assertIs(s.get_lexer(), s.get_lexer())
		self.assertRaises(AssertionError, s.token, 'b', 'b')

	def test_05_errors_propagate(self):
		s = miniscan.Definition()
		s.token('a', 'a+')
		tokens = s.scan('aab')
		self.assertEqual(('a', 'aa'), next(tokens)[:2])
		with self.assertRaises(NoRuleMatched) as context: next(tokens)
		self.assertEqual(2, context.exception.position.column)

	def test_06_bytes(self):
		s = miniscan.Definition(unicode=False, minimize=False)
		s.token_map('byte', '[\x80-\xff]', ord)
		self.assertEqual([('byte', 0x80), ('byte', 0xff)], [t[:2] for t in s.scan(b'\x80\xff')])


if __name__ == '__main__':
	unittest.main()
