""" The ebnfc command line front end. """
import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from ebnfkit.ebnfc import main

NUMBER = str(Path(__file__).resolve().parent.parent / "examples" / "number.ebnf")


def run(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        status = main(list(argv))
    return status, out.getvalue(), err.getvalue()


class TestCheck(unittest.TestCase):
    def test_00_ok(self):
        status, out, err = run('check', NUMBER)
        self.assertEqual(status, 0)
        self.assertIn('[CHECK OK] rules=4 synthesized=2 start=SignedNumber', out)
        self.assertEqual(err, '')

    def test_01_debug_goes_to_stderr(self):
        status, out, err = run('check', NUMBER, '-D')
        self.assertEqual(status, 0)
        self.assertIn('[DEBUG] statements parsed | statements=4', err)
        self.assertIn('[Rules]', err)
        self.assertIn('WholeNumberSubDef1', err)

    def test_02_bad_grammar(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'bad.ebnf'
            path.write_text('X = Y;', encoding='utf-8')
            status, out, err = run('check', str(path))
        self.assertEqual(status, 2)
        self.assertIn('[SYNTAX ERROR] UnresolvedReference', err)
        self.assertIn("'Y'", err)

    def test_03_missing_file(self):
        status, out, err = run('check', '/nonexistent/grammar.ebnf')
        self.assertEqual(status, 2)
        self.assertIn('[ERROR]', err)

    def test_04_undecodable_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'bad.ebnf'
            path.write_bytes(b'X = "\xff";')
            status, out, err = run('check', str(path))
        self.assertEqual(status, 2)
        self.assertIn('[ERROR] UnicodeDecodeError', err)
        self.assertEqual(out, '')


class TestRules(unittest.TestCase):
    def test_00_top_level_only(self):
        status, out, _ = run('rules', NUMBER)
        self.assertEqual(status, 0)
        self.assertEqual(out.split(), ['SignedNumber', 'WholeNumber', 'Digit', 'Sign'])

    def test_01_all(self):
        status, out, _ = run('rules', NUMBER, '--all')
        self.assertEqual(status, 0)
        self.assertIn('  SignedNumberSubDef1  (optional of SignedNumber)', out.splitlines())
        self.assertIn('  WholeNumberSubDef1  (repetition of WholeNumber)', out.splitlines())


class TestMatch(unittest.TestCase):
    def test_00_match_ok(self):
        status, out, _ = run('match', NUMBER, 'SignedNumber', '--text=-10')
        self.assertEqual(status, 0)
        self.assertIn("[MATCH OK] rule=SignedNumber remainder=''", out)
        self.assertIn("    Digit: '1'", out.splitlines())

    def test_01_no_match(self):
        status, out, _ = run('match', NUMBER, 'SignedNumber', '--text=x')
        self.assertEqual(status, 1)
        self.assertIn('[NO MATCH]', out)

    def test_02_full_requires_everything_consumed(self):
        self.assertEqual(run('match', NUMBER, 'SignedNumber', '--text=10x')[0], 0)
        self.assertEqual(run('match', NUMBER, 'SignedNumber', '--text=10x', '--full')[0], 1)

    def test_03_json(self):
        status, out, _ = run('match', NUMBER, 'WholeNumber', '--text=42', '--json')
        self.assertEqual(status, 0)
        data = json.loads(out)
        self.assertTrue(data['success'])
        self.assertTrue(data['full'])
        self.assertEqual(data['tree']['type'], 'WholeNumber')
        self.assertEqual([c['value'] for c in data['tree']['children']], ['4', '2'])

    def test_04_input_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'in.txt'
            path.write_text('+7', encoding='utf-8')
            status, out, _ = run('match', NUMBER, 'SignedNumber', '--input', str(path))
        self.assertEqual(status, 0)
        self.assertIn("Sign: '+'", out)

    def test_05_unknown_rule(self):
        status, _, err = run('match', NUMBER, 'Nope', '--text=1')
        self.assertEqual(status, 2)
        self.assertIn('UnknownRule', err)

    def test_06_bad_max_depth(self):
        status, _, err = run('match', NUMBER, 'Digit', '--text=1', '--max-depth', '0')
        self.assertEqual(status, 2)
        self.assertIn('ValueError', err)

    def test_07_undecodable_input_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / 'in.txt'
            path.write_bytes(b'\xff')
            status, out, err = run('match', NUMBER, 'SignedNumber', '--input', str(path))
        self.assertEqual(status, 2)
        self.assertIn('[ERROR] UnicodeDecodeError', err)
        self.assertEqual(out, '')


if __name__ == '__main__':
    unittest.main()
