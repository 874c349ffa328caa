"""
Interpret a grammar written in EBNF directly against a text file.

Given only a grammar, check that it is well-formed EBNF.
Given also an input file, parse that file according to the grammar.
Diagnostics go to STDERR, and the exit status is nonzero if there were any.
"""

import sys, argparse, functools

from metawalk.parsing.ebnf import EBNF_SCHEMA, read_grammar
from metawalk.parsing.engine import Parser
from metawalk.scanning.source import StringArray
from metawalk.support.interfaces import LanguageError
from metawalk.support import pretty

def parse_arguments(argv=None):
	parser = argparse.ArgumentParser(prog='py -m metawalk', description=__doc__,)
	parser.add_argument('grammar_path', help='path to the grammar, in EBNF')
	parser.add_argument('input_path', nargs='?', help='path to a text to parse with the grammar')
	parser.add_argument('-s', '--start', help='begin from this rule, for grammars without an ENTRY rule')
	parser.add_argument('-t', '--tree', action='store_true', help='Display the parse tree on STDOUT.')
	parser.add_argument('--schema', action='store_true', help='Display the schema in use on STDOUT.')
	parser.add_argument('-v', '--verbose', action='store_true', help="Squawk about every step of the parse engine, on STDERR.")
	return parser.parse_args(argv)

def main(args) -> int:
	trace = functools.partial(print, file=sys.stderr) if args.verbose else None
	with open(args.grammar_path) as fh: grammar = fh.read()
	if args.input_path is None:
		schema, source = EBNF_SCHEMA, StringArray(grammar, args.grammar_path)
	else:
		try: schema = read_grammar(grammar, args.start, filename=args.grammar_path)
		except LanguageError as e:
			for message in e.args: print(message, file=sys.stderr)
			return 1
		with open(args.input_path) as fh: source = StringArray(fh.read(), args.input_path)
	if args.schema: schema.display()
	result = Parser(schema, source, trace=trace).exec()
	if args.tree: pretty.print_tree(result.tree)
	for message in result.errors: print(message, file=sys.stderr)
	if not result.ok: return 1
	print('Parsed without error:', source.filename)
	return 0

if __name__ == '__main__': sys.exit(main(parse_arguments()))
