"""
Finite automata over the byte alphabet: the NFA with its algebra of combinators, and the DFA.

Both are graphs with cycles, so both keep their states in a list and refer to them by index.
An NFA is built bottom-up. The combinators (concat, union, star, plus, optional, and the
complement of a character class) each take their operands by value: the operand's states
move into the result, and the operand is left empty. Using it again is a mistake in the
calling code, and it fails loudly. Call .copy() first if you need the same NFA twice.

Accepting NFA states carry a priority: a small integer where lower values win. When several
rule-NFAs are united into one, the priority identifies the rule, and the subset construction
labels each DFA state with the best priority among the NFA states it contains.
"""
from typing import NamedTuple, Iterable, Optional

from ..support import pretty
from ..support.foundation import allocate, transitive_closure, BreadthFirstTraversal, EquivalenceClassifier
from . import charset
from .charset import ByteRange, Interval
from .interface import FiniteAutomaton, UnsupportedComplement, Priority, StateId
from .minimize import hopcroft

WIDTH = 256
DEFAULT_PRIORITY = 0
CONSUMED = "This NFA was already consumed by a combinator. Use .copy() to combine the same NFA twice."

class NFA:
	class Edge(NamedTuple):
		label: ByteRange
		target: int

	class Node(NamedTuple):
		edges: list
		epsilons: list

	def __init__(self):
		self.states, self.initial, self.final = [], 0, {}

	def new_node(self) -> int: return allocate(self.states, NFA.Node(edges=[], epsilons=[]))
	def link(self, src:int, dst:int, label:ByteRange):
		assert 0 <= label.lo <= label.hi < WIDTH, label
		self.states[src].edges.append(NFA.Edge(ByteRange(*label), dst))
	def link_epsilon(self, src:int, dst:int): self.states[src].epsilons.append(dst)

	# Primitive automata:

	@classmethod
	def nothing(cls) -> "NFA":
		""" Accepts no string at all. This is the identity for union. """
		nfa = cls()
		nfa.initial = nfa.new_node()
		return nfa

	@classmethod
	def empty(cls) -> "NFA":
		""" Accepts just the empty string. This is the identity for concatenation. """
		nfa = cls()
		nfa.initial = nfa.new_node()
		nfa.final[nfa.initial] = DEFAULT_PRIORITY
		return nfa

	@classmethod
	def from_class(cls, ranges:Iterable) -> "NFA":
		""" Two states, and one consuming edge between them per (normalized) byte range. """
		nfa = cls()
		nfa.initial, accept = nfa.new_node(), nfa.new_node()
		nfa.final[accept] = DEFAULT_PRIORITY
		for r in charset.normalize(ranges): nfa.link(nfa.initial, accept, r)
		return nfa

	@classmethod
	def from_range(cls, lo:int, hi:int) -> "NFA": return cls.from_class([Interval(lo, hi)])

	@classmethod
	def literal(cls, data:bytes) -> "NFA":
		nfa = cls()
		q = nfa.initial = nfa.new_node()
		for byte in data:
			nxt = nfa.new_node()
			nfa.link(q, nxt, ByteRange(byte, byte))
			q = nxt
		nfa.final[q] = DEFAULT_PRIORITY
		return nfa

	@classmethod
	def from_codepoints(cls, ranges:Iterable) -> "NFA":
		"""
		Any one character from the given code-point ranges, as UTF-8.
		Each path from the start to the accepting state is a chain of one to four consuming edges.
		"""
		nfa = cls()
		nfa.initial, accept = nfa.new_node(), nfa.new_node()
		nfa.final[accept] = DEFAULT_PRIORITY
		for lo, hi in charset.normalize(ranges):
			for sequence in charset.utf8_sequences(lo, hi):
				src = nfa.initial
				for label in sequence[:-1]:
					dst = nfa.new_node()
					nfa.link(src, dst, label)
					src = dst
				nfa.link(src, accept, sequence[-1])
		return nfa

	# Ownership:

	def __live(self):
		assert self.states is not None, CONSUMED

	def __consume(self):
		self.__live()
		taken = self.states, self.initial, self.final
		self.states = self.final = None
		return taken

	def __moved(self) -> "NFA":
		result = NFA()
		result.states, result.initial, result.final = self.__consume()
		return result

	def __absorb(self, other:"NFA"):
		""" Move the other NFA's states in after our own. Return its initial and final, relocated. """
		states, initial, final = other.__consume()
		bias = len(self.states)
		for node in states:
			edges = [NFA.Edge(e.label, e.target + bias) for e in node.edges]
			self.states.append(NFA.Node(edges, [q + bias for q in node.epsilons]))
		return initial + bias, {q + bias: priority for q, priority in final.items()}

	def copy(self) -> "NFA":
		self.__live()
		result = NFA()
		result.states = [NFA.Node(list(node.edges), list(node.epsilons)) for node in self.states]
		result.initial, result.final = self.initial, dict(self.final)
		return result

	# Combinators:

	def concat(self, other:"NFA") -> "NFA":
		result = self.__moved()
		start, final = result.__absorb(other)
		for q in result.final: result.link_epsilon(q, start)
		result.final = final
		return result

	def union(self, other:"NFA") -> "NFA":
		""" Accepting states of both operands keep their priorities. """
		result = self.__moved()
		start, final = result.__absorb(other)
		q0 = result.new_node()
		result.link_epsilon(q0, result.initial)
		result.link_epsilon(q0, start)
		result.initial = q0
		result.final.update(final)
		return result

	def star(self) -> "NFA":
		result = self.__moved()
		priority = min(result.final.values(), default=DEFAULT_PRIORITY)
		q0 = result.new_node()
		result.link_epsilon(q0, result.initial)
		for q in result.final: result.link_epsilon(q, q0)
		result.initial, result.final = q0, {q0: priority}
		return result

	def plus(self) -> "NFA":
		again = self.copy()
		return self.concat(again.star())

	def optional(self) -> "NFA": return self.union(NFA.empty())

	def complement_of_class(self) -> "NFA":
		"""
		Only a byte class has a complement here: the initial state must be non-accepting,
		and every edge must be consuming and lead from it straight to an accepting state
		which has no way out. Anything else is an UnsupportedComplement.
		"""
		states, initial, final = self.__consume()
		if initial in final: raise UnsupportedComplement()
		labels = []
		for q, node in enumerate(states):
			if node.epsilons: raise UnsupportedComplement()
			for edge in node.edges:
				if q != initial or edge.target not in final: raise UnsupportedComplement()
				labels.append(edge.label)
		return NFA.from_class(charset.complement(labels, charset.BYTES))

	def labelled(self, priority:Priority) -> "NFA":
		""" Every accepting state gets the same priority: normally the rank of a scanner rule. """
		result = self.__moved()
		result.final = {q: priority for q in result.final}
		return result

	# Queries:

	def epsilon_closure(self, roots:Iterable[int]) -> frozenset:
		return frozenset(transitive_closure(roots, lambda q: self.states[q].epsilons))

	def recognize(self, data:bytes) -> Optional[Priority]:
		"""
		Simulate the NFA directly on all of `data`. Return the best priority among
		the accepting states reached, or None if the NFA rejects.
		"""
		self.__live()
		current = self.epsilon_closure([self.initial])
		for byte in data:
			step = [e.target for q in current for e in self.states[q].edges if charset.contains(e.label, byte)]
			if not step: return None
			current = self.epsilon_closure(step)
		return min((self.final[q] for q in current if q in self.final), default=None)

	def subset_construction(self) -> "DFA":
		"""
		The powerset construction. The byte axis is cut at every boundary of every edge
		leaving the current subset, so each cut is a run of bytes with the same set of
		targets. Runs with the same targets as their neighbor share its successor, which
		saves a lot of closure operations.
		"""
		self.__live()
		states, final = [], {}
		def visit(key:frozenset):
			priorities = [self.final[q] for q in key if q in self.final]
			if priorities: final[bft.current] = min(priorities)
			edges = [e for q in key for e in self.states[q].edges]
			bounds = sorted({0, WIDTH}.union(*((e.label.lo, e.label.hi + 1) for e in edges)))
			row, prior, successor = [], None, -1
			for lo, hi in zip(bounds, bounds[1:]):
				register = frozenset(e.target for e in edges if charset.contains(e.label, lo))
				if register != prior:
					prior = register
					successor = bft.lookup(self.epsilon_closure(register)) if register else -1
				row.extend([successor] * (hi - lo))
			states.append(tuple(row))
		bft = BreadthFirstTraversal()
		bft.lookup(self.epsilon_closure([self.initial]))
		bft.execute(visit)
		return DFA(initial=0, final=final, states=states)

	def to_dot(self, name="NFA") -> str:
		self.__live()
		def nodes():
			for q in range(len(self.states)):
				yield q, _state_label(q, self.final.get(q)), q in self.final
		def edges():
			for q, node in enumerate(self.states):
				labels = {}
				for e in node.edges: labels.setdefault(e.target, []).append(e.label)
				for target, ranges in labels.items(): yield q, target, charset.describe(ranges)
				for target in sorted(set(node.epsilons)): yield q, target, 'ε'
		return pretty.digraph(name, initial=self.initial, nodes=nodes(), edges=edges())

	def display(self):
		self.__live()
		print('NFA with %d states; initial state is %d:'%(len(self.states), self.initial))
		head = ['*', '', 'edges', 'ε']
		body = [
			[
				self.final.get(q, ''), q,
				'; '.join('%s -> %d'%(charset.describe([e.label]), e.target) for e in node.edges),
				' '.join(map(str, node.epsilons)),
			]
			for q, node in enumerate(self.states)
		]
		pretty.print_grid([head]+body)


class DFA(FiniteAutomaton):
	"""
	Each state is a row of exactly WIDTH successors, one per byte value.
	The jam state is -1: it is implicit, and it has no row.
	"""
	def __init__(self, *, initial:StateId, final:dict, states:list):
		assert all(len(row) == WIDTH for row in states)
		self.initial = initial
		self.final = final
		self.states = states

	def jam_state(self): return -1
	def get_next_state(self, current_state:StateId, byte:int) -> StateId: return self.states[current_state][byte]
	def get_state_rule_id(self, state_id:StateId) -> Optional[Priority]: return self.final.get(state_id)

	def edges(self, q:StateId) -> list:
		""" The row for state q as a list of (ByteRange, target) with runs of equal targets coalesced. """
		result, row = [], self.states[q]
		lo = 0
		for byte in range(1, WIDTH + 1):
			if byte == WIDTH or row[byte] != row[lo]:
				if row[lo] >= 0: result.append((ByteRange(lo, byte - 1), row[lo]))
				lo = byte
		return result

	def recognize(self, data:bytes) -> Optional[Priority]:
		q = self.initial
		for byte in data:
			q = self.states[q][byte]
			if q < 0: return None
		return self.final.get(q)

	def minimize_states(self) -> "DFA":
		return hopcroft(self)

	def display(self):
		"""
		Print the transition table. Bytes with identical columns are shown together:
		the heading of each column says which bytes it stands for.
		"""
		print('Finite Automaton:')
		ec = EquivalenceClassifier()
		letters = [ec.classify(column) for column in zip(*self.states)]
		members = [[] for _ in ec.exemplars]
		for byte, letter in enumerate(letters): members[letter].append(Interval(byte, byte))
		head = ['*', '', *(charset.describe(m) for m in members)]
		body = [
			[self.final.get(q, ''), q, *(column[q] if column[q] >= 0 else '' for column in ec.exemplars)]
			for q in range(len(self.states))
		]
		pretty.print_grid([head]+body)

	def stats(self):
		Q = len(self.states)
		X = sum(sum(x != -1 for x in row) for row in self.states)
		E = sum(len(self.edges(q)) for q in range(Q))
		print('DFA has %d states (%d accepting) and %d range-edges, using %d cells.'%(Q, len(self.final), E, Q*WIDTH))
		print('%d non-error cells, or %0.2f%%'%(X, 100*X/(Q*WIDTH)))

	def to_dot(self, name="DFA") -> str:
		def nodes():
			for q in range(len(self.states)):
				yield q, _state_label(q, self.final.get(q)), q in self.final
		def edges():
			for q in range(len(self.states)):
				labels = {}
				for label, target in self.edges(q): labels.setdefault(target, []).append(label)
				for target, ranges in labels.items(): yield q, target, charset.describe(ranges)
		return pretty.digraph(name, initial=self.initial, nodes=nodes(), edges=edges())

def _state_label(q:int, priority) -> str:
	return str(q) if priority is None else "%d:%d"%(q, priority)
