"""
Character classes for matching terminals one element at a time.

As in a scanner generator, a character class is a sorted list of lower bounds
with implied exclusion below the first listed bound: a character is a member of
the class exactly when an odd number of lower-bounds in the class are less-than-or-equal-to
that character's codepoint value. (See the `in_class(...)` function.)

The grammar notation only ever needs a fixed handful of classes, each named by a
two-character code in a terminal pattern. Lowercase codes name a class; the uppercase
twin names its complement. Those live in the CLASS_CODES table at the bottom.
"""
import bisect, operator

# How to tell if a character (by codepoint) is a member of the class:
def in_class(cls:list, codepoint:int) -> bool: return bisect.bisect_right(cls, codepoint) % 2


# Character class construction and set-operations:
EMPTY = []
UNIVERSAL = [0]

def singleton(codepoint:int) -> list: return [codepoint, codepoint + 1]
def range_class(first, last) -> list: return [first, last+1] if first <= last else [last, first+1]
def complement(cls:list) -> list:
	if not cls: return UNIVERSAL
	if cls[0] <= 0: return cls[1:]
	return [0]+cls
def combine(op, x:list, y:list) -> list:
	""" Arbitrary boolean combination of character classes controlled by 'op :: (bool, bool) -> bool'  """
	result = []
	for b in sorted({0}.union(x, y)): # The zero is included in case op(False, False) == True.
		if len(result) % 2 != bool(op(in_class(x, b), in_class(y, b))):
			result.append(b)
	return result
def union(a:list, b:list) -> list: return combine(operator.or_, a, b)
def union_all(*classes) -> list:
	result = EMPTY
	for cls in classes: result = union(result, cls)
	return result


# ASCII-range building blocks:
DIGIT = range_class(ord('0'), ord('9'))
ALPHA = union(range_class(ord('A'), ord('Z')), range_class(ord('a'), ord('z')))
LEAD = union(ALPHA, singleton(ord('_')))
WORD = union(LEAD, DIGIT)
NEWLINE = singleton(10)
TAB = singleton(9)

# Whitespace reaches beyond ASCII:
SPACE = union_all(
	range_class(9, 13), # TAB LF VT FF CR
	singleton(0x20),
	singleton(0xA0), # NBSP
	singleton(0x1680),
	range_class(0x2000, 0x200A),
	range_class(0x2028, 0x2029), # Line and paragraph separators
	singleton(0x202F),
	singleton(0x205F),
	singleton(0x3000),
	singleton(0xFEFF), # BOM
)

CLASS_CODES = {}
def _init_():
	for code, cls in [
		('a', LEAD),
		('w', WORD),
		('s', SPACE),
		('d', DIGIT),
		('n', NEWLINE),
	]:
		CLASS_CODES['\\'+code] = cls
		CLASS_CODES['\\'+code.upper()] = complement(cls)
	CLASS_CODES['\\t'] = TAB


_init_()
assert all(cls == sorted(cls) for cls in CLASS_CODES.values())
