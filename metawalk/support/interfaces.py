"""
This file aggregates the abstract classes and exception types which MetaWalk deals in.

The parse engine never looks at raw input directly. It asks a SourceArray for help:
what element sits at this offset, does this element satisfy that piece of a terminal,
and where (in human terms) is this offset? That leaves the engine free of any opinion
about whether it walks characters, bytes, or somebody's pre-scanned tokens.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Sequence

T = TypeVar('T')

END_OF_INPUT = object() # Fed to the engine once the cursor reaches the end. Matches nothing.

class LanguageError(ValueError):
	""" Base class of all exceptions arising from the language machinery. """

class SchemaError(LanguageError):
	""" The grammar itself is malformed: an empty composite, a missing entry rule, or a dangling reference. """

class GrammarSyntaxError(LanguageError):
	"""
	Raised when the text of a grammar does not parse as EBNF.
	Parameter is the error log from the failed parse.
	"""
	def __init__(self, errors):
		super().__init__(*errors)
		self.errors = list(errors)

class SourceArray(ABC, Generic[T]):
	"""
	A fully-materialized input sequence, as seen by the parse engine.
	Offsets are 0-based and count elements after whatever normalization the implementation applies.
	"""

	@abstractmethod
	def element_at(self, offset:int) -> T:
		""" Return the element at `offset`, which must satisfy 0 <= offset < self.size(). """

	@abstractmethod
	def size(self) -> int:
		""" Total number of elements. """

	@abstractmethod
	def split(self, pattern:str) -> Sequence[str]:
		""" Decompose a terminal pattern into the atomic units that `match` understands, one per element. """

	@abstractmethod
	def match(self, unit:str, element:T) -> bool:
		""" Does `element` satisfy the match-unit `unit`? """

	@abstractmethod
	def position(self, offset:int) -> str:
		""" Return a 1-based "line:column" for use in error messages. """

	def display(self, element:T) -> str:
		""" Render one element for a human. """
		return repr(element)
