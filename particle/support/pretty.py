""" Bits and bobs in support of visualizing data structures. """

def print_grid(grid):
	lens = list(map(len, grid))
	assert len(set(lens)) == 1, lens
	grid = [[str(cell) for cell in row] for row in grid]
	width = [max(map(len, column)) for column in zip(*grid)]
	horizontal = '\u2500'
	vertical = ' \u2502 '
	upper = horizontal + '\u252c' + horizontal
	inner = horizontal + '\u253c' + horizontal
	lower = horizontal + '\u2534' + horizontal
	segments = [horizontal*w for w in width]
	divider = inner.join(segments)
	print(upper.join(segments))
	for r, row in enumerate(grid):
		if r %5 == 1: print(divider)
		print(vertical.join(s.rjust(w,' ') for s,w in zip(row, width)))
	print(lower.join(segments))

def _quote(text:str) -> str:
	return '"%s"'%text.replace('\\', '\\\\').replace('"', r'\"')

def digraph(name:str, *, initial:int, nodes, edges) -> str:
	"""
	Text suitable for the "dot" application from the Graphviz package.
	`nodes` yields (state, label, accepting) and `edges` yields (source, target, label).
	The initial state gets an arrow from an invisible point, as is customary.
	"""
	lines = ["digraph %s {"%name, "\t__start__ [shape=point];", "\t__start__ -> N%d;"%initial]
	for q, label, accepting in nodes:
		lines.append("\tN%d [label=%s, shape=%s];"%(q, _quote(label), "doublecircle" if accepting else "circle"))
	for src, dst, label in edges:
		lines.append("\tN%d -> N%d [label=%s];"%(src, dst, _quote(label)))
	lines.append("}")
	return "\n".join(lines)+"\n"
