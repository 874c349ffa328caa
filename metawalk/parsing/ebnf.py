"""
EBNF, described to the engine in its own terms.

EBNF_SCHEMA is a schema for (a reasonable dialect of) the ISO-flavoured EBNF notation:

	name = alternative | alternative ... ;

where each alternative is a sequence of items separated by optional commas, and
an item is a rule name, a "quoted terminal", a ( group ), an [ option ], or
a { repetition }. Line comments begin with //.

Terminals keep their backslash escapes exactly as written, since the text between
the quotes becomes a terminal pattern verbatim and the source array knows what to do
with escapes. That means "\\w" in a grammar file means a word character, as it should.
Non-ASCII characters are not (yet) accepted inside quoted terminals.

EBNF_TEXT gives the very same grammar as text, so the notation can read itself.
"""

import string

from ..support.interfaces import SchemaError, GrammarSyntaxError
from ..scanning.source import StringArray
from .schema import Schema, ENTRY, nonterminal, alternation, optional, repetition, grouping
from .engine import Parser
from .tree import SNode

PUNCTUATION = [c for c in string.punctuation if c not in '"\\']

_ = nonterminal('_')

EBNF_SCHEMA = Schema({
	ENTRY: grouping(repetition(nonterminal('rule')), _),
	'_': repetition(alternation('\\s', nonterminal('comment'))),
	'comment': grouping('//', repetition('\\N')),
	'rule': grouping(_, nonterminal('name'), _, '=', nonterminal('alternatives'), _, ';'),
	'alternatives': grouping(nonterminal('sequence'), repetition(_, '|', nonterminal('sequence'))),
	'sequence': grouping(nonterminal('item'), repetition(_, optional(','), nonterminal('item'))),
	'item': grouping(_, alternation(*map(nonterminal, ['name', 'term', 'group', 'option', 'repeat']))),
	'name': grouping('\\a', repetition('\\w')),
	'term': grouping('\\"', repetition(nonterminal('character')), '\\"'),
	'character': alternation(grouping('\\\\', '\\N'), '\\w', ' ', '\\t', *PUNCTUATION),
	'group': grouping('(', nonterminal('alternatives'), _, ')'),
	'option': grouping('[', nonterminal('alternatives'), _, ']'),
	'repeat': grouping('{', nonterminal('alternatives'), _, '}'),
})

EBNF_TEXT = r"""// The notation, described in itself.
ENTRY = { rule } , _ ;
_ = { "\s" | comment } ;
comment = "//" , { "\N" } ;
rule = _ , name , _ , "=" , alternatives , _ , ";" ;
alternatives = sequence , { _ , "|" , sequence } ;
sequence = item , { _ , [ "," ] , item } ;
item = _ , ( name | term | group | option | repeat ) ;
name = "\a" , { "\w" } ;
term = "\"" , { character } , "\"" ;
character = "\\" , "\N" | "\w" | " " | "\t" | """ + " | ".join('"%s"'%c for c in PUNCTUATION) + r""" ;
group = "(" , alternatives , _ , ")" ;
option = "[" , alternatives , _ , "]" ;
repeat = "{" , alternatives , _ , "}" ;
"""


class _Reader:
	"""
	Turns the parse tree of a grammar into grammar nodes, one method per rule of EBNF_SCHEMA.
	The shape of each tree node follows directly from the shape of its rule: a non-terminal
	wraps the grouping that defines it, and so forth.
	"""
	def __call__(self, node:SNode):
		return getattr(self, 'read_'+node.label)(node)

	def __each(self, node:SNode) -> list:
		# Both `alternatives` and `sequence` are "one thing, then { separator, thing }".
		first, more = node[0].children
		return [self(first)] + [self(g[-1]) for g in more.children]

	def read_alternatives(self, node):
		branches = self.__each(node)
		return branches[0] if len(branches) == 1 else alternation(*branches)

	def read_sequence(self, node):
		items = self.__each(node)
		return items[0] if len(items) == 1 else grouping(*items)

	def read_item(self, node): return self(node[0][1])
	def read_name(self, node): return nonterminal(node.text())
	def read_term(self, node): return node.text()[1:-1]
	def read_group(self, node): return self(node[0][1])
	def read_option(self, node): return optional(self(node[0][1]))
	def read_repeat(self, node): return repetition(self(node[0][1]))


def schema_from_tree(tree:SNode, start:str=None) -> Schema:
	"""
	Build a schema from a successful parse against EBNF_SCHEMA.
	If `start` is given, ENTRY is defined as a reference to that rule.
	"""
	read = _Reader()
	rules = {}
	for rule in tree[0].children:
		body = rule[0]
		name = body[1].text()
		if name in rules: raise SchemaError('Rule %r is defined twice.'%name)
		rules[name] = read(body[4])
	if start is not None:
		if ENTRY in rules: raise SchemaError('The grammar defines %s, so it cannot also start at %r.'%(ENTRY, start))
		rules[ENTRY] = nonterminal(start)
	return Schema(rules)

def read_grammar(text:str, start:str=None, *, filename:str=None) -> Schema:
	""" Parse and validate a grammar written in EBNF. Raises a LanguageError if anything is wrong with it. """
	result = Parser(EBNF_SCHEMA, StringArray(text, filename)).exec()
	if not result.ok: raise GrammarSyntaxError(result.errors)
	return schema_from_tree(result.tree, start).validate()
