"""
Hopcroft's partition-refinement algorithm, for minimizing the states of a DFA.

Moore's algorithm is easier to get right: keep splitting every block until nothing changes.
But it re-scans the whole automaton on every round. Hopcroft's improvement is to keep a
work-list of "splitters": pairs of (block, letter). Taking a splitter off the list, find every
state that goes into that block on that letter, and split each block which those states only
partly cover. Of the two halves, only the smaller needs to go back on the work-list.

Two preliminaries make this practical for a byte alphabet:
	* The DFA's rows are partial, with -1 standing in for the jam state. Here the jam state
	  gets a real row, so every state has a successor on every byte. It goes back to being
	  implicit at the end, along with any other state that can never reach acceptance.
	* The 256 byte values collapse into "letters": bytes with identical columns in the table
	  can never distinguish two states, so one representative per letter suffices.

States accepting different rules must never merge, so the initial partition puts accepting
states in separate blocks according to their priority. Refinement only ever splits blocks,
so a block with mixed labels at the end would mean something is badly broken.

The result is numbered by breadth-first traversal from the initial state, following bytes in
ascending order. That makes it canonical: equal languages give identical tables.
"""
from ..support.foundation import allocate, BreadthFirstTraversal, EquivalenceClassifier

def hopcroft(dfa):
	"""
	Return a new DFA (of the same type as the argument) with the fewest possible states,
	accepting the same strings with the same priorities.
	"""
	width = len(dfa.states[0])
	dead = len(dfa.states)
	rows = [[dead if t < 0 else t for t in row] for row in dfa.states] + [[dead] * width]

	ec = EquivalenceClassifier()
	letter_of = [ec.classify(column) for column in zip(*rows)]
	exemplar = {}
	for byte, letter in enumerate(letter_of): exemplar.setdefault(letter, byte)
	nr_letters = len(ec.exemplars)

	preimage = [{} for _ in rows]
	for q, row in enumerate(rows):
		for letter in range(nr_letters):
			preimage[row[exemplar[letter]]].setdefault(letter, []).append(q)

	blocks, block_of, by_label = [], [], {}
	for q in range(len(rows)):
		label = dfa.final.get(q)
		if label not in by_label: by_label[label] = allocate(blocks, set())
		blocks[by_label[label]].add(q)
		block_of.append(by_label[label])

	work = [(b, letter) for b in range(len(blocks)) for letter in range(nr_letters)]
	while work:
		splitter, letter = work.pop()
		touched = {}
		for t in blocks[splitter]:
			for q in preimage[t].get(letter, ()):
				touched.setdefault(block_of[q], set()).add(q)
		for y, inside in touched.items():
			if len(inside) == len(blocks[y]): continue
			outside = blocks[y] - inside
			small, large = (inside, outside) if len(inside) <= len(outside) else (outside, inside)
			blocks[y] = large
			z = allocate(blocks, small)
			for q in small: block_of[q] = z
			# If (y, letter) is still pending, it now means the large half; either way z must be added.
			work.extend((z, a) for a in range(nr_letters))

	return _interpretation(type(dfa), dfa, rows, blocks, block_of, block_of[dead])

def _interpretation(make, dfa, rows, blocks, block_of, dead_block):
	if block_of[dfa.initial] == dead_block:
		return make(initial=0, final={}, states=[(-1,) * len(rows[0])])
	states, final = [], {}
	def visit(b):
		labels = {dfa.final.get(q) for q in blocks[b]}
		assert len(labels) == 1, "Minimization merged states with different accept labels: %r"%labels
		label = labels.pop()
		if label is not None: final[bft.current] = label
		exemplar = min(blocks[b])
		states.append(tuple(-1 if block_of[t] == dead_block else bft.lookup(block_of[t]) for t in rows[exemplar]))
	bft = BreadthFirstTraversal()
	bft.lookup(block_of[dfa.initial])
	bft.execute(visit)
	return make(initial=0, final=final, states=states)
