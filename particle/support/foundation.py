""" Small is beautiful. These algorithms need no introduction. """

from collections import deque

def allocate(a_list:list, item):
	"""
	Append an item to a list, and return the new item's index in that list.
	Too frequent an idiom not to abbreviate.
	"""
	idx = len(a_list)
	a_list.append(item)
	return idx

def transitive_closure(roots, successors) -> set:
	"""
	Transitive closure is a simple application of graph search.
	(This particular implementation is breadth-first.)

	This function does not expect any particular data structure.
	Rather, it takes the graph's outbound-edge relation as a callable parameter.
	It requires:
		``roots`` is an iterable of nodes;
		each node is hashable;
		and ``successors(aNode)`` returns an iterable of nodes.
	The epsilon-closure of a set of NFA states is exactly this, with
	the epsilon edges as the successor relation.
	"""
	closure = set(roots)
	queue = deque(closure)
	while queue:
		more = successors(queue.popleft())
		if more is not None:
			for item in more:
				if item not in closure:
					closure.add(item)
					queue.append(item)
	return closure

class BreadthFirstTraversal:
	"""
	This object supports more general breadth-first graph traversal (and discovery) algorithms.
	Both the subset construction and the renumbering step of minimization are built on it:
	keys get consecutive integers in the order they are first seen, so the first root is zero.

	Initialize the traversal's roots by calling .lookup(rootKey) as many times as necessary,
	then perform the traversal by calling .execute(visit). The "visit" parameter must be callable:
	it will be called once with each key this object encounters in a .lookup(...) call.
	In the end, the fields will have these meanings:

	current: the index of whichever key is currently being visited; ``None`` before and after processing.
	traversal: the list of keys in the order seen by .lookup(...)
	catalog: the mapping from key to traversal-index
	"""
	def __init__(self):
		self.current, self.traversal, self.catalog = None, [], {}
	def execute(self, visit):
		""" visit(key) should call .lookup(successor_key), which returns an integer. """
		for self.current, key in enumerate(self.traversal):
			visit(key)
		self.current = None
	def lookup(self, key) -> int:
		if key not in self.catalog:
			self.catalog[key] = allocate(self.traversal, key)
		return self.catalog[key]

class EquivalenceClassifier:
	"""
	Assigns small consecutive integers to distinct keys, remembering an exemplar of each.
	Minimization uses it to collapse the 256 byte-columns of a DFA into the few
	"letters" the automaton actually distinguishes.
	"""
	def __init__(self):
		self.catalog = {}
		self.exemplars = []
	def classify(self, key):
		if key not in self.catalog:
			self.catalog[key] = allocate(self.exemplars, key)
		return self.catalog[key]
