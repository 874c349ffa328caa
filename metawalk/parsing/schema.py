"""
# Grammar Model

A schema is a dictionary from rule names to rule definitions. A definition is a
tree of grammar nodes, each of which is either:
	* a terminal pattern, represented as a plain string, or
	* a Meta: a tagged composite built by one of the functions below.

There are five kinds of Meta:
	* nonterminal(name): refer to another rule by name.
	* alternation(a, b, ...): ordered choice; the first alternative to succeed wins.
	* optional(x): zero-or-one.
	* repetition(x): zero-or-more.
	* grouping(a, b, ...): a sequence, all of which must match.

Optional and repetition always wrap exactly one node. Given several arguments,
the builders wrap them in a grouping first, so `repetition(a, ',')` means `{ a , "," }`.

Schemas are built once and then only ever read. The parse engine is the sole consumer,
and several parses may share one schema.
"""

from collections.abc import Mapping
from enum import Enum
from typing import NamedTuple, Union, Iterator

from ..support.interfaces import SchemaError

ENTRY = 'ENTRY' # Every schema needs a rule by this name. Parsing starts there.

class MetaType(Enum):
	NONTERMINAL = 'nonterminal'
	ALTERNATION = 'alternation'
	OPTIONAL = 'optional'
	REPETITION = 'repetition'
	GROUPING = 'grouping'

class Meta(NamedTuple):
	type: MetaType
	value: Union[str, tuple] # A rule name for NONTERMINAL; a tuple of MetaVal otherwise.

	def __str__(self): return describe(self)

MetaVal = Union[str, Meta]


def nonterminal(name:str) -> Meta:
	if not name: raise SchemaError("A non-terminal needs a name.")
	return Meta(MetaType.NONTERMINAL, name)

def alternation(*items:MetaVal) -> Meta: return Meta(MetaType.ALTERNATION, _check(items, 'alternation'))

def grouping(*items:MetaVal) -> Meta: return Meta(MetaType.GROUPING, _check(items, 'grouping'))

def optional(*items:MetaVal) -> Meta: return Meta(MetaType.OPTIONAL, _single(items, 'optional'))

def repetition(*items:MetaVal) -> Meta: return Meta(MetaType.REPETITION, _single(items, 'repetition'))

def _check(items, kind) -> tuple:
	if not items: raise SchemaError("An empty %s matches nothing."%kind)
	for item in items:
		if not isinstance(item, (str, Meta)): raise SchemaError("%s: %r is not a grammar node."%(kind, item))
	return tuple(items)

def _single(items, kind) -> tuple:
	items = _check(items, kind)
	return items if len(items) == 1 else (grouping(*items),)


def describe(meta:MetaVal) -> str:
	""" Render a grammar node in something close to the usual EBNF notation. """
	if isinstance(meta, str): return '"%s"'%meta.replace('"', '\\"')
	if meta.type is MetaType.NONTERMINAL: return meta.value
	inside = [describe(m) for m in meta.value]
	if meta.type is MetaType.ALTERNATION: return "( %s )"%" | ".join(inside)
	if meta.type is MetaType.GROUPING: return "( %s )"%" , ".join(inside)
	if meta.type is MetaType.OPTIONAL: return "[ %s ]"%inside[0]
	return "{ %s }"%inside[0]

def each_reference(meta:MetaVal) -> Iterator[str]:
	""" Yield the name of every rule this node mentions, in order of appearance. """
	if isinstance(meta, str): return
	if meta.type is MetaType.NONTERMINAL: yield meta.value
	else:
		for item in meta.value: yield from each_reference(item)


class Schema(Mapping):
	"""
	Read-only mapping from rule name to definition.
	Construct it like a dict: `Schema({'ENTRY': ..., 'x': ...})` or `Schema(ENTRY=..., x=...)`.
	"""
	def __init__(self, rules=(), **more):
		self.__rules = dict(rules, **more)
		for name, definition in self.__rules.items():
			if not isinstance(name, str): raise SchemaError("Rule name %r is not a string."%(name,))
			if not isinstance(definition, (str, Meta)): raise SchemaError("Rule %r: %r is not a grammar node."%(name, definition))

	def __getitem__(self, name) -> MetaVal: return self.__rules[name]
	def __iter__(self): return iter(self.__rules)
	def __len__(self): return len(self.__rules)
	def __repr__(self): return "<Schema of %d rules>"%len(self.__rules)

	def references(self) -> set:
		""" Every rule name mentioned on the right-hand side of any rule. """
		return {name for definition in self.__rules.values() for name in each_reference(definition)}

	def validate(self):
		"""
		Raise SchemaError if the entry rule is missing or anything refers to an undefined rule.
		The parse engine does not require this, but it will halt at the first dangling reference it
		actually reaches, so it's friendlier to find them all up front.
		"""
		if ENTRY not in self.__rules: raise SchemaError('The schema has no %r rule.'%ENTRY)
		undefined = self.references() - self.__rules.keys()
		if undefined: raise SchemaError('Undefined non-terminals: '+', '.join(sorted(undefined)))
		return self

	def display(self):
		for name, definition in self.__rules.items():
			print(name, '=', describe(definition), ';')
