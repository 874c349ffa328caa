""" Exercise the backtracking engine on small schemas, one behavior at a time. """
import unittest
from metawalk.parsing.engine import Parser, ParseResult, parse_text
from metawalk.parsing.schema import Schema, ENTRY, nonterminal, alternation, optional, repetition, grouping
from metawalk.parsing.tree import SNode
from metawalk.scanning.source import StringArray

leaf = SNode.leaf
composite = SNode.composite

SAMPLE = Schema({ENTRY: grouping('a', nonterminal('B')), 'B': alternation('b', 'c')})

def make_parser(text, **rules):
	return Parser(Schema(rules), StringArray(text))


class TestEndToEnd(unittest.TestCase):
	def test_success(self):
		result = parse_text(SAMPLE, "ac")
		expect = composite('grouping', [
			leaf('a', 'a', 0, 1),
			composite('B', [leaf('c', 'c', 1, 2)], 1, 2),
		], 0, 2)
		self.assertEqual(expect, result.tree)
		self.assertEqual([], result.errors)
		self.assertTrue(result.ok)

	def test_failure(self):
		result = parse_text(SAMPLE, "ad")
		self.assertIsNone(result.tree)
		self.assertEqual(["[error] unexpected 'd' @ 1:2"], result.errors)
		self.assertFalse(result.ok)

	def test_schema_is_shared_between_runs(self):
		first = Parser(SAMPLE, StringArray("ab"))
		second = Parser(SAMPLE, StringArray("ax"))
		self.assertTrue(first.exec().ok)
		self.assertFalse(second.exec().ok)
		self.assertEqual('ab', first.tree.text())

	def test_unexpected_end(self):
		result = parse_text(Schema({ENTRY: 'abc'}), "ab")
		self.assertEqual(["[error] unexpected end of input @ 1:3"], result.errors)

	def test_positions_span_lines(self):
		result = parse_text(Schema({ENTRY: grouping('a', '\\n', 'b')}), "a\r\nc")
		self.assertEqual(["[error] unexpected 'c' @ 2:1"], result.errors)


class TestOrderedChoice(unittest.TestCase):
	def test_first_alternative_wins(self):
		result = parse_text(Schema({ENTRY: grouping(alternation('a', 'ab'), optional('b'))}), "ab")
		self.assertTrue(result.ok)
		self.assertEqual(leaf('a', 'a', 0, 1), result.tree[0])
		self.assertEqual(composite('optional', [leaf('b', 'b', 1, 2)], 1, 2), result.tree[1])

	def test_no_second_chance(self):
		# Once 'a' has won, nobody goes back to try 'ab', even though that would have worked.
		result = parse_text(Schema({ENTRY: alternation('a', 'ab')}), "ab")
		self.assertEqual(leaf('a', 'a', 0, 1), result.tree)
		self.assertEqual(["[error] expected end of input, got: 'b' @ 1:2"], result.errors)

	def test_alternation_adds_no_node(self):
		result = parse_text(Schema({ENTRY: alternation('x', nonterminal('y')), 'y': 'y'}), "y")
		self.assertEqual(composite('y', [leaf('y', 'y', 0, 1)], 0, 1), result.tree)


class TestBacktracking(unittest.TestCase):
	def test_sequence_atomicity(self):
		parser = make_parser("ac", ENTRY=grouping('a', 'b'))
		result = parser.exec()
		self.assertIsNone(result.tree)
		self.assertEqual(0, parser.cursor)
		self.assertEqual(["[error] unexpected 'c' @ 1:2"], result.errors)

	def test_failed_sequence_leaves_nothing_behind(self):
		result = parse_text(Schema({ENTRY: alternation(grouping('a', 'b'), grouping('a', 'c'))}), "ac")
		self.assertEqual(composite('grouping', [leaf('a', 'a', 0, 1), leaf('c', 'c', 1, 2)], 0, 2), result.tree)

	def test_terminal_atomicity(self):
		result = parse_text(Schema({ENTRY: alternation('abc', 'abd')}), "abd")
		self.assertEqual(leaf('abd', 'abd', 0, 3), result.tree)

	def test_frontier_is_reported(self):
		# The deepest point of failure is more helpful than where the root began.
		result = parse_text(Schema({ENTRY: alternation(grouping('a', 'b', 'c'), 'x')}), "abd")
		self.assertEqual(["[error] unexpected 'd' @ 1:3"], result.errors)


class TestRepetition(unittest.TestCase):
	def test_accumulation(self):
		parser = make_parser("aaab", ENTRY=repetition('a'))
		result = parser.exec()
		self.assertEqual('repetition', result.tree.label)
		self.assertEqual(3, len(result.tree.children))
		self.assertEqual(3, result.tree.end)
		self.assertEqual(3, parser.cursor)
		self.assertEqual(["[error] expected end of input, got: 'b' @ 1:4"], result.errors)

	def test_followed_by_more(self):
		result = parse_text(Schema({ENTRY: grouping(repetition('a'), 'b')}), "aaab")
		self.assertTrue(result.ok)
		self.assertEqual(3, len(result.tree[0].children))
		self.assertEqual(leaf('b', 'b', 3, 4), result.tree[1])

	def test_zero_times(self):
		result = parse_text(Schema({ENTRY: repetition('a')}), "")
		self.assertEqual(composite('repetition', [], 0, 0), result.tree)
		self.assertTrue(result.ok)

	def test_multi_element_operand(self):
		result = parse_text(Schema({ENTRY: repetition('x', '\\d')}), "x1x2x")
		self.assertEqual(2, len(result.tree.children))
		self.assertEqual(["[error] expected end of input, got: 'x' @ 1:5"], result.errors)

	def test_zero_progress_ends_the_loop(self):
		result = parse_text(Schema({ENTRY: repetition(optional('x'))}), "")
		self.assertEqual(composite('repetition', [], 0, 0), result.tree)
		result = parse_text(Schema({ENTRY: repetition(repetition('a'))}), "aa")
		self.assertTrue(result.ok)
		self.assertEqual(1, len(result.tree.children))
		self.assertEqual(2, len(result.tree[0].children))


class TestOptional(unittest.TestCase):
	def test_absent(self):
		result = parse_text(Schema({ENTRY: grouping(optional('x'), 'a')}), "a")
		self.assertTrue(result.ok)
		self.assertIsNone(result.tree[0])
		self.assertEqual(leaf('a', 'a', 0, 1), result.tree[1])

	def test_absent_consumes_nothing(self):
		parser = make_parser("", ENTRY=optional('x'))
		result = parser.exec()
		self.assertEqual(ParseResult(None, []), result)
		self.assertEqual(0, parser.cursor)

	def test_partial_operand_is_undone(self):
		result = parse_text(Schema({ENTRY: grouping(optional('a', 'b'), 'a', 'c')}), "ac")
		self.assertTrue(result.ok)
		self.assertIsNone(result.tree[0])


class TestLeftRecursion(unittest.TestCase):
	def test_direct(self):
		parser = make_parser("aa", ENTRY=nonterminal('X'), X=grouping(nonterminal('X'), 'a'))
		result = parser.exec()
		self.assertIsNone(result.tree)
		self.assertEqual(["[error] unexpected 'a' @ 1:1"], result.errors)
		self.assertEqual(0, parser.depth)
		self.assertTrue(parser.stopped)

	def test_falls_through_to_another_alternative(self):
		result = parse_text(Schema({
			ENTRY: nonterminal('X'),
			'X': alternation(grouping(nonterminal('X'), '+', 'a'), 'a'),
		}), "a")
		self.assertEqual(composite('X', [leaf('a', 'a', 0, 1)], 0, 1), result.tree)
		self.assertTrue(result.ok)

	def test_indirect(self):
		result = parse_text(Schema({
			ENTRY: nonterminal('A'),
			'A': grouping(nonterminal('B'), 'x'),
			'B': alternation(grouping(nonterminal('A'), 'y'), 'b'),
		}), "bx")
		self.assertTrue(result.ok)
		self.assertEqual('bx', result.tree.text())

	def test_recursion_with_progress_is_fine(self):
		result = parse_text(Schema({
			ENTRY: nonterminal('list'),
			'list': grouping('\\d', optional(',', nonterminal('list'))),
		}), "1,2,3")
		self.assertTrue(result.ok)
		self.assertEqual(3, len(result.tree.find_all('list')))


class TestSchemaErrors(unittest.TestCase):
	def test_undefined_rule_halts(self):
		parser = make_parser("ab", ENTRY=grouping('a', nonterminal('missing')))
		result = parser.exec()
		self.assertIsNone(result.tree)
		self.assertEqual(['[schema error] non-terminal "missing" is not defined.'], result.errors)
		self.assertTrue(parser.stopped)
		self.assertEqual(2, parser.depth)

	def test_undefined_rule_is_not_backtracked(self):
		result = parse_text(Schema({ENTRY: alternation(nonterminal('missing'), 'a')}), "a")
		self.assertIsNone(result.tree)
		self.assertEqual(['[schema error] non-terminal "missing" is not defined.'], result.errors)

	def test_missing_entry(self):
		parser = Parser(Schema({'x': 'a'}), StringArray("a"))
		self.assertTrue(parser.step())
		self.assertEqual(0, parser.steps)
		self.assertEqual(['[schema error] the schema has no "ENTRY" rule.'], parser.exec().errors)


class TestDriving(unittest.TestCase):
	def test_stop_between_steps(self):
		parser = make_parser("aaaa", ENTRY=repetition('a'))
		for _ in range(3): self.assertFalse(parser.step())
		self.assertEqual(1, parser.cursor)
		parser.stop()
		self.assertTrue(parser.step())
		result = parser.result()
		self.assertIsNone(result.tree)
		self.assertEqual(["[error] parse halted before completion @ 1:2"], result.errors)

	def test_reset(self):
		parser = make_parser("ab", ENTRY='ab')
		self.assertTrue(parser.exec().ok)
		parser.reset()
		self.assertIsNone(parser.tree)
		self.assertEqual(0, parser.steps)
		self.assertEqual(leaf('ab', 'ab', 0, 2), parser.exec().tree)

	def test_trace(self):
		lines = []
		parser = Parser(SAMPLE, StringArray("ac"), trace=lines.append)
		parser.exec()
		self.assertEqual(parser.steps, len(lines))
		self.assertTrue(lines[0].startswith("[1] 0: 'a' ==> "), lines[0])
		self.assertTrue(lines[-1].endswith(": return"), lines[-1])

	def test_empty_terminal(self):
		result = parse_text(Schema({ENTRY: grouping('', 'a')}), "a")
		self.assertEqual(leaf('', '', 0, 0), result.tree[0])
		self.assertTrue(result.ok)


if __name__ == '__main__':
	unittest.main()
