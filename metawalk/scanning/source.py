"""
The standard SourceArray for text.

Line breaks are a funny thing. Unix calls for \n. Apple prior to OSx called for \r.
CP/M and its derivatives like Windows call for \r\n. To keep offsets meaningful the
text is normalized once, up front: every \r\n or lone \r becomes a single \n, and only
then are offsets computed. Grammars therefore only ever need to speak of \n.

The line table is a sorted list of the offsets where each line begins. Finding
the line for an offset is a binary search; the column is whatever is left over.
"""

import bisect, functools, re
from typing import Tuple

from ..support.interfaces import SourceArray, END_OF_INPUT
from . import charset

LINE_BREAK = re.compile(r'\r\n?')
NEWLINE = re.compile(r'\n')

@functools.lru_cache(maxsize=None)
def split_pattern(pattern:str) -> Tuple[str, ...]:
	"""
	Break a terminal pattern into match-units, one per input element.
	A unit is a single literal character or a two-character class code.
	Backslash escapes are taken greedily, left to right, without nesting:
		\\\\ and \\" collapse to the literal character;
		class codes (see charset.CLASS_CODES) pass through as-is;
		any other escaped character stands for itself.
	A lone backslash at the very end is just a backslash.
	"""
	units, i, size = [], 0, len(pattern)
	while i < size:
		if pattern[i] == '\\' and i + 1 < size:
			pair = pattern[i:i+2]
			units.append(pair if pair in charset.CLASS_CODES else pair[1])
			i += 2
		else:
			units.append(pattern[i])
			i += 1
	return tuple(units)


class StringArray(SourceArray[str]):
	""" Text, viewed as a sequence of single characters. """

	def __init__(self, text:str, filename:str=None):
		self.__text = LINE_BREAK.sub('\n', text)
		self.filename = filename
		self.__bounds = [0] + [m.end() for m in NEWLINE.finditer(self.__text)]

	@property
	def text(self) -> str: return self.__text

	def element_at(self, offset:int) -> str:
		if not 0 <= offset < len(self.__text): raise IndexError(offset)
		return self.__text[offset]

	def size(self) -> int: return len(self.__text)

	def split(self, pattern:str): return split_pattern(pattern)

	def match(self, unit:str, element) -> bool:
		if element is END_OF_INPUT: return False
		cls = charset.CLASS_CODES.get(unit)
		if cls is None: return unit == element
		return bool(charset.in_class(cls, ord(element)))

	def find_row_col(self, offset:int):
		""" Zero-based line and column. Beyond the last line break, the column just keeps counting. """
		row = bisect.bisect_right(self.__bounds, offset) - 1
		return row, offset - self.__bounds[row]

	def position(self, offset:int) -> str:
		row, col = self.find_row_col(offset)
		return "%d:%d"%(row+1, col+1)
