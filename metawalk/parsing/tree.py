"""
Parse trees, as produced by the engine.

A node is either a leaf, holding the input elements a terminal matched,
or a composite, holding an ordered tuple of child nodes. Either way it knows
the span of input it covers, as a pair of offsets.

Labels follow the grammar: a leaf carries its terminal pattern; a non-terminal
carries its rule name; groupings, repetitions and options carry their kind.
Alternations add nothing of their own, so the winning alternative's node
appears directly in its parent. An optional that did not match shows up as `None`.
"""

from dataclasses import dataclass
from typing import Optional, Iterator

@dataclass(frozen=True)
class SNode:
	__slots__ = ('label', 'source', 'children', 'begin', 'end')
	label: str
	source: Optional[tuple]   # Matched elements, for a terminal leaf.
	children: Optional[tuple] # Child nodes (or None for an absent option), for a composite.
	begin: int
	end: int

	@classmethod
	def leaf(cls, label:str, source, begin:int, end:int) -> "SNode":
		return cls(label, tuple(source), None, begin, end)

	@classmethod
	def composite(cls, label:str, children, begin:int, end:int) -> "SNode":
		return cls(label, None, tuple(children), begin, end)

	@property
	def is_leaf(self) -> bool: return self.children is None

	def __getitem__(self, index) -> "SNode":
		return self.children[index]

	def text(self) -> str:
		""" Everything this subtree matched, joined back together. """
		if self.is_leaf: return ''.join(map(str, self.source))
		return ''.join(child.text() for child in self.children if child is not None)

	def walk(self) -> Iterator["SNode"]:
		""" Pre-order traversal, skipping absent options. """
		yield self
		for child in self.children or ():
			if child is not None: yield from child.walk()

	def find_all(self, label:str) -> list:
		return [node for node in self.walk() if node.label == label]

	def __str__(self):
		if self.is_leaf: return repr(self.text())
		inside = ' '.join('-' if child is None else str(child) for child in self.children)
		return "(%s %s)"%(self.label, inside) if inside else "(%s)"%self.label
