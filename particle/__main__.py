"""
Compile regular expressions into a lexer, and then look at it or try it out.

Each PATTERN becomes a token rule, ranked in the order given; each -d PATTERN
becomes a rule whose matches are discarded. By default the minimal DFA is
built; the --stage option stops earlier in the pipeline.

For example:
	py -m particle "[0-9]+" "[a-z]+" -d "[ \\t\\n]+" --scan input.txt
"""

import sys, argparse

from particle.support.failureprone import SourceText
from particle.scanning import engine
from particle.scanning.engine import Rule, Lexer, make_cursor, rank_rules, combined_nfa
from particle.scanning.interface import PatternError, NoRuleMatched, EndOfInput

STAGES = ('nfa', 'dfa', 'minimal')

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m particle', description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument('patterns', nargs='*', metavar='PATTERN', help='a token rule')
	parser.add_argument('-d', '--discard', action='append', default=[], metavar='PATTERN', help='a rule for text to skip, such as white space')
	parser.add_argument('--bytes', action='store_true', help='patterns and input are raw bytes, not UTF-8 text')
	parser.add_argument('--stage', choices=STAGES, default='minimal', help='how far along the pipeline to go')
	parser.add_argument('--dot', metavar='PATH', help="write the automaton as a .dot file for the Graphviz package")
	parser.add_argument('--pretty', action='store_true', help='display the automaton in attractive grid format on STDOUT')
	parser.add_argument('--scan', metavar='FILE', help='tokenize the file, printing one token per line')
	parser.add_argument('-v', '--verbose', action='store_true', help="squawk about the sizes of the automata")
	args = parser.parse_args(argv)
	if not (args.patterns or args.discard): parser.error('at least one pattern is required')
	return args

def make_rules(args) -> list:
	def tag(i):
		return lambda text, span: (i, text, span)
	rules = [Rule(p, tag(i)) for i, p in enumerate(args.patterns)]
	rules.extend(Rule(p, None, discard=True) for p in args.discard)
	return rules

def build(args, rules):
	""" Returns the lexer (if the stage calls for one) and the automaton to show. """
	unicode = not args.bytes
	if args.stage == 'nfa':
		nfa = combined_nfa(rank_rules(rules), unicode=unicode)
		return (Lexer(rules, unicode=unicode) if args.scan else None), nfa
	lexer = Lexer(rules, unicode=unicode, minimize=args.stage == 'minimal')
	return lexer, lexer.dfa

def scan_file(args, lexer:Lexer) -> int:
	""" Print the tokens. After a bad character, complain and carry on. Returns the number of complaints. """
	mode = 'rb' if args.bytes else 'r'
	with open(args.scan, mode) as fh: subject = fh.read()
	source = SourceText(subject.decode('latin-1') if args.bytes else subject, filename=args.scan)
	cursor = make_cursor(subject)
	nr_errors = 0
	while True:
		try: index, text, span = lexer.next_token(cursor)
		except EndOfInput: break
		except NoRuleMatched as e:
			nr_errors += 1
			print(source.complaint_at(e.position.line, e.position.column, "No rule matches here."), file=sys.stderr)
			cursor.advance(1)
		else:
			print("%d:%d\t%d\t%r"%(span.start.line, span.start.column + 1, index, text))
	return nr_errors

def main(args):
	if args.verbose: engine.VERBOSE = True
	rules = make_rules(args)
	try:
		lexer, automaton = build(args, rules)
	except PatternError as e:
		print(e.illustrate(), file=sys.stderr)
		sys.exit(1)
	if args.pretty: automaton.display()
	if args.dot:
		with open(args.dot, 'w') as fh: fh.write(automaton.to_dot())
		print('Wrote automaton in Graphviz format to:')
		print('\t'+args.dot)
	if args.scan:
		if scan_file(args, lexer): sys.exit(1)

if __name__ == '__main__': main(parse_arguments())
