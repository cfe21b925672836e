import unittest

from tinylisp.core.expression import Integer, List, Symbol
from tinylisp.core.parser import parse
from tinylisp.lang.error import ParseError


class ParseTestCase(unittest.TestCase):

    def test_add(self):
        self.assertEqual(List([Symbol("+"), Integer(1), Integer(2)]), parse("(+ 1 2)"))

    def test_area_of_a_circle(self):
        program = """(
                        (define r 10)
                        (define pi 314)
                        (* pi (* r r))
                      )"""
        expected = List([
            List([Symbol("define"), Symbol("r"), Integer(10)]),
            List([Symbol("define"), Symbol("pi"), Integer(314)]),
            List([Symbol("*"), Symbol("pi"), List([Symbol("*"), Symbol("r"), Symbol("r")])]),
        ])
        self.assertEqual(expected, parse(program))

    def test_nesting(self):
        cases = {
            "()": List([]),
            "(())": List([List([])]),
            "((a) b)": List([List([Symbol("a")]), Symbol("b")]),
            "(a (b (c)))": List([Symbol("a"), List([Symbol("b"), List([Symbol("c")])])]),
            "(-1 x)": List([Integer(-1), Symbol("x")]),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_errors(self):
        should_raise = ["", "   ", "(+ 1 2", "((a)", "+ 1 2", ")", "1", "(a))", "(a) (b)", "(a))("]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_roundtrip(self):
        cases = ["(+ 1 2)", "((define r 10) (* r r))", "(a (b ()) -4)"]
        for case in cases:
            self.assertEqual(case, str(parse(case)), case)


if __name__ == '__main__':
    unittest.main()
