""" Sometimes you just need to see what's going on. """

from ..parsing.schema import describe

def tree_lines(node, depth=0):
	""" Yield an indented outline of a parse tree, one node per line. """
	indent = '  '*depth
	if node is None:
		yield indent + '-'
		return
	span = '@%d..%d'%(node.begin, node.end)
	if node.is_leaf:
		yield '%s%s %r %s'%(indent, describe(node.label), node.text(), span)
	else:
		yield '%s%s %s'%(indent, node.label, span)
		for child in node.children: yield from tree_lines(child, depth+1)

def print_tree(node):
	for line in tree_lines(node): print(line)
