import unittest
import io
import contextlib
import json as standard_json

import example.mini_json, example.calculator

from particle.scanning.interface import NoRuleMatched

# See https://json.org/example.html
GLOSSARY_JSON = """
{
    "glossary": {
        "title": "example glossary",
		"GlossDiv": {
            "title": "S",
			"GlossList": {
                "GlossEntry": {
                    "ID": "SGML",
					"SortAs": "SGML",
					"GlossTerm": "Standard Generalized Markup Language",
					"Acronym": "SGML",
					"Abbrev": "ISO 8879:1986",
					"GlossDef": {
                        "para": "A meta-markup language, used to create markup languages such as DocBook.",
						"GlossSeeAlso": ["GML", "XML"]
                    },
					"GlossSee": "markup",
					"Sizes": [12, -3.5e2, 0, true, false, null],
					"Escapes": "tab\\there \\"quoted\\" \\u00e9t\\u00E9 \\\\ café"
                }
            }
        }
    }
}
"""

class TestMiniJson(unittest.TestCase):
	def test_json_tokens_and_parser(self):
		self.assertEqual(standard_json.loads(GLOSSARY_JSON), example.mini_json.parse(GLOSSARY_JSON))

	def test_numbers_keep_their_type(self):
		self.assertEqual([1, 1.5, -20.0, 0], example.mini_json.parse('[1, 1.5, -2e1, 0]'))
		self.assertIsInstance(example.mini_json.parse('7'), int)

	def test_bad_input(self):
		self.assertRaises(example.mini_json.JsonError, example.mini_json.parse, '[1, 2')
		self.assertRaises(example.mini_json.JsonError, example.mini_json.parse, '{"a" 1}')
		self.assertRaises(NoRuleMatched, example.mini_json.parse, '[1, 2, @]')


class TestCalculator(unittest.TestCase):
	def test_00_tokens(self):
		tokens = example.calculator.tokenize("(412 + 321.654) / 768.432 * 34e-1 - sin(30)")
		self.assertEqual(
			[
				('Punctuation', '('), ('Integer', 412), ('Punctuation', '+'), ('Float', 321.654), ('Punctuation', ')'),
				('Punctuation', '/'), ('Float', 768.432), ('Punctuation', '*'), ('Float', 3.4), ('Punctuation', '-'),
				('Identifier', 'sin'), ('Punctuation', '('), ('Integer', 30), ('Punctuation', ')'),
			],
			[token[:2] for token in tokens],
		)
		self.assertEqual((4, 1, 4), tokens[1].span.end)

	def test_01_bad_character(self):
		with self.assertRaises(NoRuleMatched) as context: example.calculator.tokenize("1 % 2")
		self.assertEqual(2, context.exception.position.column)

	def test_02_main_with_trailing_whitespace(self):
		out = io.StringIO()
		with contextlib.redirect_stdout(out): example.calculator.main("1 + 2 \n")
		self.assertEqual(["Integer 1", "Punctuation '+'", "Integer 2"], out.getvalue().splitlines())

	def test_03_main_reports_bad_character(self):
		out = io.StringIO()
		with contextlib.redirect_stdout(out): example.calculator.main("1 % 2")
		lines = out.getvalue().splitlines()
		self.assertEqual("Integer 1", lines[0])
		self.assertTrue(lines[1].startswith("Error at Position(byte_offset=2, line=1, column=2)"))
		self.assertEqual(2, len(lines))


if __name__ == '__main__':
	unittest.main()
