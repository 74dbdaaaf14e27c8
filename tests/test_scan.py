""" Statement splitting, comment stripping, sanitizing and bracket-aware splitting. """
import inspect
import unittest

from ebnfkit.errors import UnbalancedBracket, UnterminatedComment, UnterminatedLiteral
from ebnfkit.grammar.scan import (
    bracket_end, find_top_level, iter_statements, sanitize, split_top_level, unescape,
)


def statements(text):
    return [s.strip() for s in iter_statements(text)]


class TestIterStatements(unittest.TestCase):
    def test_00_splits_on_terminator(self):
        self.assertEqual(statements('A = "a"; B = "b";'), ['A = "a"', 'B = "b"'])

    def test_01_terminator_inside_literal_is_inert(self):
        self.assertEqual(statements('A = ";"; B = "b";'), ['A = ";"', 'B = "b"'])

    def test_02_escaped_quote_does_not_close_literal(self):
        self.assertEqual(statements('A = "\\";"; B="b";'), ['A = "\\";"', 'B="b"'])

    def test_03_comments_are_removed(self):
        self.assertEqual(statements('A = "a"; (* x; y *) B = "b";'), ['A = "a"', 'B = "b"'])

    def test_04_comment_marker_inside_literal_is_kept(self):
        self.assertEqual(statements('A = "(* kept *)";'), ['A = "(* kept *)"'])

    def test_05_comment_ends_at_first_close(self):
        self.assertEqual(statements('(* a (* b *) A = "a";'), ['A = "a"'])

    def test_06_blank_statements_are_skipped(self):
        self.assertEqual(statements(';;A="a";  ;\n'), ['A="a"'])

    def test_07_last_terminator_is_optional(self):
        self.assertEqual(statements('A = "a"; B = "b"'), ['A = "a"', 'B = "b"'])

    def test_08_lazy(self):
        it = iter_statements('A="a"; B="b')
        self.assertTrue(inspect.isgenerator(it))
        self.assertEqual(next(it), 'A="a"')
        with self.assertRaises(UnterminatedLiteral):
            next(it)

    def test_09_unterminated_literal(self):
        with self.assertRaises(UnterminatedLiteral) as cm:
            list(iter_statements('A = "abc;'))
        self.assertIsInstance(cm.exception, SyntaxError)
        self.assertIn("1:5", str(cm.exception))

    def test_10_unterminated_comment(self):
        with self.assertRaises(UnterminatedComment):
            list(iter_statements('A = "a"; (* open'))


class TestSanitize(unittest.TestCase):
    def test_00_whitespace_removed_outside_literals(self):
        self.assertEqual(
            sanitize('Signed Number = [ Sign ] ,\n\t"a b"'),
            'SignedNumber=[Sign],"a b"',
        )

    def test_01_escaped_quote_keeps_literal_open(self):
        self.assertEqual(sanitize('X = "a\\" b"'), 'X="a\\" b"')


class TestSplitTopLevel(unittest.TestCase):
    def test_00_alternation_inside_brackets_is_ignored(self):
        self.assertEqual(
            split_top_level('"a"|["b"|"c"]|{"d"|"e"}', '|'),
            ['"a"', '["b"|"c"]', '{"d"|"e"}'],
        )

    def test_01_concatenation_inside_brackets_is_ignored(self):
        self.assertEqual(
            split_top_level('a,[b,c],{d,[e,f]},(g,h)', ','),
            ['a', '[b,c]', '{d,[e,f]}', '(g,h)'],
        )

    def test_02_separator_inside_literal_is_ignored(self):
        self.assertEqual(split_top_level('"|"|"]"', '|'), ['"|"', '"]"'])

    def test_03_empty_pieces_are_kept(self):
        self.assertEqual(split_top_level('a||b', '|'), ['a', '', 'b'])

    def test_04_unbalanced(self):
        for text in ['[a', 'a]', '[a}', '{[a}]']:
            with self.subTest(text=text):
                with self.assertRaises(UnbalancedBracket):
                    split_top_level(text, ',')


class TestHelpers(unittest.TestCase):
    def test_00_find_top_level_skips_literals(self):
        self.assertEqual(find_top_level('"="=x', '='), 3)
        self.assertEqual(find_top_level('abc', '='), -1)

    def test_01_bracket_end(self):
        self.assertEqual(bracket_end('[a,"]",{b}]', 0), 10)
        self.assertEqual(bracket_end('[a][b]', 0), 2)
        self.assertEqual(bracket_end('[a', 0), -1)

    def test_02_unescape(self):
        self.assertEqual(unescape('a\\"b\\\\c\\n'), 'a"b\\c\n')
        self.assertEqual(unescape('a\\qb'), 'a\\qb')


if __name__ == '__main__':
    unittest.main()
