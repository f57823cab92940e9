"""
Read the Graphviz text back in, and make sure it describes the automaton it came from.
The patterns come from a small random generator with a fixed seed.
"""
import unittest
import random
import re

from particle.scanning.engine import Rule, Lexer, rank_rules, combined_nfa
from particle.scanning.finite import DFA
from particle.scanning.regular import compile_regex

NODE = re.compile(r'^\tN(\d+) \[label="([^"]*)", shape=(circle|doublecircle)\];$')
EDGE = re.compile(r'^\tN(\d+) -> N(\d+) \[label="([^"]*)"\];$')
START = re.compile(r'^\t__start__ -> N(\d+);$')

ATOMS = ['a', 'b', 'c', '[ab]', '[^c]', '.', r'\d', 'é', '[a-c0-9]']

def random_pattern(rng:random.Random, depth:int) -> str:
	if depth == 0: return rng.choice(ATOMS)
	kind = rng.randrange(5)
	if kind == 0: return random_pattern(rng, depth-1) + random_pattern(rng, depth-1)
	if kind == 1: return '(%s|%s)'%(random_pattern(rng, depth-1), random_pattern(rng, depth-1))
	if kind == 2: return '(%s)%s'%(random_pattern(rng, depth-1), rng.choice('*+?'))
	return random_pattern(rng, depth-1)

def corpus(size=30, seed=1234):
	rng = random.Random(seed)
	return [random_pattern(rng, rng.randrange(1, 5)) for _ in range(size)]

def parse_ranges(text:str):
	for part in text.split(', '):
		lo, _, hi = part.partition('-')
		yield int(lo), int(hi or lo)

def parse_dot(text:str):
	""" Returns (initial, {state: priority-or-None}, [(source, target, label)]) """
	lines = text.splitlines()
	assert lines[0].startswith('digraph ') and lines[-1] == '}', text
	initial, nodes, edges = None, {}, []
	for line in lines[1:-1]:
		if line == '\t__start__ [shape=point];': continue
		m = START.match(line)
		if m:
			initial = int(m.group(1))
			continue
		m = NODE.match(line)
		if m:
			q, label, shape = int(m.group(1)), m.group(2), m.group(3)
			number, _, priority = label.partition(':')
			assert int(number) == q
			assert (shape == 'doublecircle') == bool(priority)
			nodes[q] = int(priority) if priority else None
			continue
		m = EDGE.match(line)
		assert m, line
		edges.append((int(m.group(1)), int(m.group(2)), m.group(3)))
	return initial, nodes, edges

def rebuild_dfa(text:str) -> DFA:
	initial, nodes, edges = parse_dot(text)
	states = [[-1] * 256 for _ in nodes]
	for src, dst, label in edges:
		for lo, hi in parse_ranges(label):
			for byte in range(lo, hi + 1):
				assert states[src][byte] == -1, "Edges overlap"
				states[src][byte] = dst
	final = {q: p for q, p in nodes.items() if p is not None}
	return DFA(initial=initial, final=final, states=[tuple(row) for row in states])

class TestDot(unittest.TestCase):
	def test_dfa_round_trip(self):
		for pattern in corpus():
			for minimize in (False, True):
				with self.subTest(pattern=pattern, minimize=minimize):
					dfa = compile_regex(pattern).subset_construction()
					if minimize: dfa = dfa.minimize_states()
					again = rebuild_dfa(dfa.to_dot())
					self.assertEqual(dfa.initial, again.initial)
					self.assertEqual(dfa.final, again.final)
					self.assertEqual(dfa.states, again.states)

	def test_lexer_round_trip(self):
		rules = [Rule(p, None, discard=True) for p in corpus(5, seed=99)]
		dfa = Lexer(rules).dfa
		again = rebuild_dfa(dfa.to_dot('Lexer'))
		self.assertEqual(dfa.states, again.states)
		self.assertEqual(dfa.final, again.final)

	def test_nfa_dump(self):
		nfa = combined_nfa(rank_rules([Rule('ab*', None), Rule('[0-9]', None)]))
		text = nfa.to_dot()
		self.assertTrue(text.startswith('digraph NFA {\n'))
		initial, nodes, edges = parse_dot(text)
		self.assertEqual(nfa.initial, initial)
		self.assertEqual(len(nfa.states), len(nodes))
		self.assertEqual({q: p for q, p in nodes.items() if p is not None}, nfa.final)
		self.assertIn('ε', [label for _, _, label in edges])
		self.assertIn('48-57', [label for _, _, label in edges])
		self.assertEqual(
			sum(len(set(node.epsilons)) for node in nfa.states),
			sum(label == 'ε' for _, _, label in edges),
		)


if __name__ == '__main__':
	unittest.main()
