import unittest
from particle.support.failureprone import illustration, SourceText

class TestIllustration(unittest.TestCase):
	def test_caret_under_the_spot(self):
		self.assertEqual('ab(cd\n  ^ near here', illustration('ab(cd', 2))
		self.assertEqual('  x = @@;\n      ^^ bad', illustration('x = @@;', 4, 2, prefix='  ', caption='bad'))

	def test_tabs_keep_alignment(self):
		self.assertEqual('\tx y\n\t  ^ near here', illustration('\tx y', 3))


class TestSourceText(unittest.TestCase):
	def setUp(self):
		self.source = SourceText('abc\ndef\n', filename='sample.txt')

	def test_find_row_col(self):
		self.assertEqual((1, 0), self.source.find_row_col(0))
		self.assertEqual((2, 1), self.source.find_row_col(5))

	def test_line_of_text(self):
		self.assertEqual('def\n', self.source.line_of_text(2))

	def test_complaint(self):
		self.assertEqual(
			'sample.txt: line 2, column 1: oops\n >>> def\n     ^^ near here',
			self.source.complaint(slice(4, 6), 'oops'),
		)

	def test_complaint_at_lexer_position(self):
		self.assertEqual(
			'At line 1, column 3: stuck\n >>> abc\n       ^ near here',
			SourceText('abc\ndef\n').complaint_at(1, 2, 'stuck'),
		)

	def test_other_line_breaks(self):
		self.assertEqual((2, 0), SourceText('ab\r\ncd', line_breaks='normal').find_row_col(4))
		self.assertEqual((2, 1), SourceText('ab\rcd', line_breaks='apple').find_row_col(4))


if __name__ == '__main__':
	unittest.main()
