import unittest

from tinylisp.core.expression import Bool, Integer, Lambda, List, Symbol, Void


class ExpressionTestCase(unittest.TestCase):

    def test_str(self):
        cases = {
            Void(): "Void",
            Integer(-12): "-12",
            Bool(True): "true",
            Bool(False): "false",
            Symbol("!="): "!=",
            List([]): "()",
            List([Integer(1), List([Symbol("a"), Bool(True)])]): "(1 (a true))",
            Lambda(["r"], [Symbol("*"), Symbol("r"), Symbol("r")]): "(lambda (r) (* r r))",
            Lambda([], [Integer(1)]): "(lambda () (1))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(case), repr(case))

    def test_equality(self):
        self.assertNotEqual(Integer(1), Bool(True))
        self.assertNotEqual(Integer(0), Bool(False))
        self.assertEqual(List([Integer(1)]), List((Integer(1),)))
        self.assertEqual(Void(), Void())
        self.assertEqual(Lambda(["a"], [Symbol("a")]), Lambda(("a",), (Symbol("a"),)))

    def test_immutable(self):
        lst = List([Integer(1)])
        self.assertIsInstance(lst.items, tuple)
        with self.assertRaises(AttributeError):
            lst.items = ()

    def test_is_void(self):
        self.assertTrue(Void().is_void)
        self.assertFalse(List([]).is_void)
        self.assertFalse(Integer(0).is_void)


if __name__ == '__main__':
    unittest.main()
