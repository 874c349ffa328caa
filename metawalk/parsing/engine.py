"""
This file gives the essential backtracking algorithm for interpreting a schema directly against input.
Nothing is compiled: the grammar model is walked as-is, one input element per move.

The natural way to write such a thing is recursive descent: one function per kind of
grammar node, calling each other as the grammar nests. That falls down in two ways.
Grammars refer to themselves (directly or otherwise) and input can be arbitrarily long,
so the host-language stack is at risk. More to the point, a recursive call hides its
ancestors, and the left-recursion guard needs to see them.

So the recursion is made explicit. The machine keeps a stack of frames, one per grammar
node currently under way. Each frame remembers its node, the input offset where it began
(its "entry position"), some node-kind-specific progress, and the outcome of whatever child
it most recently pushed. Every move feeds the element under the cursor to the top frame,
whose handler answers with two things:
	* whether it consumed the element, and
	* a directive: STAY on top, RETURN a node to the parent, or go BACK.

Going BACK pops the frame, puts the cursor right back where that frame began, and
reports failure upward. There is no partial credit: a sequence that matched three
items before failing on the fourth leaves no trace.

A composite frame sequences its children by pushing one, then looking at the outcome
when control comes back around. Only terminals ever consume input.

Once input runs out, the end-of-input sentinel keeps getting fed to whatever frames remain.
Terminals reject it, so the stack unwinds and the root always completes one way or the other.
"""

from enum import Enum
from typing import NamedTuple, Optional, Callable

from ..support.interfaces import SourceArray, END_OF_INPUT
from ..scanning.source import StringArray
from .schema import Schema, Meta, MetaType, MetaVal, ENTRY, describe
from .tree import SNode


class Flow(Enum):
	STAY = 'stay'
	RETURN = 'return'
	BACK = 'back'

class Step(NamedTuple):
	""" What a handler says about the element it was shown. """
	consumed: bool
	flow: Flow
	node: Optional[SNode] = None

DESCEND = Step(False, Flow.STAY) # Having pushed a child, wait for it.
ADVANCE = Step(True, Flow.STAY)
BACKTRACK = Step(False, Flow.BACK)

def produce(node:Optional[SNode]) -> Step: return Step(False, Flow.RETURN, node)

class Outcome(NamedTuple):
	success: bool
	node: Optional[SNode]

FAILURE = Outcome(False, None)

class Frame:
	""" One per grammar node being matched. Lives exactly as long as its push/pop bracket. """
	__slots__ = ('meta', 'entry', 'state', 'outcome')
	def __init__(self, meta:MetaVal, entry:int):
		self.meta = meta
		self.entry = entry
		self.state = None # Progress, as the handler for this kind of node sees fit. `None` until the first visit.
		self.outcome = None # Set when a child completes; taken on the next visit.

class ParseResult(NamedTuple):
	tree: Optional[SNode]
	errors: list

	@property
	def ok(self) -> bool: return not self.errors


class Parser:
	"""
	Interprets `schema` against `source`, starting from the ENTRY rule.

	Call `exec()` to run to completion, or drive it yourself with `step()`, which
	returns True once the run is over. Between steps you may call `stop()`.

	If you pass a `trace` callable, it receives one line of text for every move.
	"""

	def __init__(self, schema:Schema, source:SourceArray, *, trace:Callable[[str], None]=None):
		self.schema = schema
		self.source = source
		self.__trace = trace
		self.__dispatch = {
			MetaType.NONTERMINAL: self.__match_nonterminal,
			MetaType.ALTERNATION: self.__match_alternation,
			MetaType.OPTIONAL: self.__match_optional,
			MetaType.REPETITION: self.__match_repetition,
			MetaType.GROUPING: self.__match_grouping,
		}
		self.reset()

	def reset(self):
		""" Configure the initial stack situation: one frame, for the definition of ENTRY. """
		self.errors = []
		self.tree = None
		self.__cursor = 0
		self.__frontier = -1 # Furthest offset where some terminal was turned down.
		self.__stack = []
		self.__active = set() # (rule name, entry position) for each non-terminal frame on the stack.
		self.__stopped = False
		self.__steps = 0
		try: definition = self.schema[ENTRY]
		except KeyError: self.__schema_error('the schema has no "%s" rule.'%ENTRY)
		else: self.__push(definition)

	@property
	def cursor(self) -> int: return self.__cursor

	@property
	def depth(self) -> int: return len(self.__stack)

	@property
	def steps(self) -> int: return self.__steps

	@property
	def stopped(self) -> bool: return self.__stopped

	def exec(self) -> ParseResult:
		while not self.step(): pass
		return self.result()

	def result(self) -> ParseResult:
		return ParseResult(self.tree, list(self.errors))

	def stop(self):
		""" Cooperative cancellation: the run is over before the next step. """
		if not self.__stopped:
			self.__stopped = True
			if self.__stack: self.__error("parse halted before completion", self.__cursor)

	def step(self) -> bool:
		""" Make one move. Returns True once the run is over. """
		if self.__stopped: return True
		self.__steps += 1
		frame = self.__stack[-1]
		element = self.__element()
		outcome, frame.outcome = frame.outcome, None
		if isinstance(frame.meta, str): step = self.__match_terminal(frame, element)
		else: step = self.__dispatch[frame.meta.type](frame, element, outcome)
		if self.__trace is not None:
			self.__trace("[%d] %d: %s ==> %s : %s"%(self.__steps, self.__cursor, self.__display(element), describe(frame.meta), step.flow.value))
		if self.__stopped: return True
		if step.consumed: self.__cursor += 1
		if step.flow is Flow.RETURN: self.__pop(Outcome(True, step.node))
		elif step.flow is Flow.BACK:
			self.__cursor = frame.entry
			self.__pop(FAILURE)
		return self.__stopped

	### Stack and diagnostics:

	def __element(self):
		if self.__cursor < self.source.size(): return self.source.element_at(self.__cursor)
		return END_OF_INPUT

	def __display(self, element) -> str:
		return 'end of input' if element is END_OF_INPUT else self.source.display(element)

	def __push(self, meta:MetaVal):
		self.__stack.append(Frame(meta, self.__cursor))

	def __descend(self, meta:MetaVal) -> Step:
		self.__push(meta)
		return DESCEND

	def __pop(self, outcome:Outcome):
		frame = self.__stack.pop()
		if isinstance(frame.meta, Meta) and frame.meta.type is MetaType.NONTERMINAL and frame.state is not None:
			self.__active.discard(frame.state)
		if self.__stack: self.__stack[-1].outcome = outcome
		else: self.__conclude(outcome)

	def __conclude(self, outcome:Outcome):
		""" The root frame is done. Decide what, if anything, to complain about. """
		self.__stopped = True
		size = self.source.size()
		if outcome.success:
			self.tree = outcome.node
			if self.__cursor < size:
				got = self.__display(self.source.element_at(self.__cursor))
				self.__error("expected end of input, got: "+got, self.__cursor)
		else:
			offset = max(self.__frontier, self.__cursor)
			if offset < size: self.__error("unexpected "+self.__display(self.source.element_at(offset)), offset)
			else: self.__error("unexpected end of input", offset)

	def __error(self, message:str, offset:int):
		self.errors.append("[error] %s @ %s"%(message, self.source.position(offset)))

	def __schema_error(self, message:str):
		self.errors.append("[schema error] "+message)
		self.__stopped = True

	### Handlers, one per kind of grammar node:

	def __match_terminal(self, frame:Frame, element) -> Step:
		if frame.state is None: frame.state = (self.source.split(frame.meta), [])
		units, taken = frame.state
		if not units: return produce(SNode.leaf(frame.meta, (), frame.entry, frame.entry))
		if not self.source.match(units[len(taken)], element):
			self.__frontier = max(self.__frontier, self.__cursor)
			return BACKTRACK
		taken.append(element)
		if len(taken) < len(units): return ADVANCE
		return Step(True, Flow.RETURN, SNode.leaf(frame.meta, taken, frame.entry, frame.entry + len(taken)))

	def __match_nonterminal(self, frame:Frame, element, outcome:Outcome) -> Step:
		name = frame.meta.value
		if frame.state is None:
			key = name, frame.entry
			if key in self.__active: return BACKTRACK # Left recursion: no progress since this rule last began.
			try: definition = self.schema[name]
			except KeyError:
				self.__schema_error('non-terminal "%s" is not defined.'%name)
				return DESCEND
			frame.state = key
			self.__active.add(key)
			return self.__descend(definition)
		if outcome.success: return produce(SNode.composite(name, (outcome.node,), frame.entry, self.__cursor))
		return BACKTRACK

	def __match_alternation(self, frame:Frame, element, outcome:Outcome) -> Step:
		alternatives = frame.meta.value
		if frame.state is None:
			frame.state = 1
			return self.__descend(alternatives[0])
		if outcome.success: return produce(outcome.node)
		if frame.state < len(alternatives):
			frame.state += 1
			return self.__descend(alternatives[frame.state - 1])
		return BACKTRACK

	def __match_optional(self, frame:Frame, element, outcome:Outcome) -> Step:
		if frame.state is None:
			frame.state = True
			return self.__descend(frame.meta.value[0])
		if outcome.success: return produce(SNode.composite('optional', (outcome.node,), frame.entry, self.__cursor))
		return produce(None)

	def __match_repetition(self, frame:Frame, element, outcome:Outcome) -> Step:
		item = frame.meta.value[0]
		if frame.state is None:
			frame.state = []
			return self.__descend(item)
		children = frame.state
		if outcome.success:
			began = children[-1].end if children else frame.entry
			# An iteration that consumed nothing would only repeat itself forever, so it ends the loop.
			if self.__cursor > began:
				children.append(outcome.node)
				return self.__descend(item)
		return produce(SNode.composite('repetition', children, frame.entry, self.__cursor))

	def __match_grouping(self, frame:Frame, element, outcome:Outcome) -> Step:
		items = frame.meta.value
		if frame.state is None:
			frame.state = []
			return self.__descend(items[0])
		if not outcome.success: return BACKTRACK
		children = frame.state
		children.append(outcome.node)
		if len(children) < len(items): return self.__descend(items[len(children)])
		return produce(SNode.composite('grouping', children, frame.entry, self.__cursor))


def parse_text(schema:Schema, text:str, **kwargs) -> ParseResult:
	""" The common case: run a schema over a string. """
	return Parser(schema, StringArray(text), **kwargs).exec()
