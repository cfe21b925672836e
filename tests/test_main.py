import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from tinylisp.main import main


class MainTestCase(unittest.TestCase):

    def run_file(self, source):
        """Runs main on a temporary file containing source and returns what it printed."""
        fd, path = tempfile.mkstemp(suffix=".lisp")
        with os.fdopen(fd, "w") as file:
            file.write(source)

        argv = ["tinylisp", path, "--recursion-limit", str(sys.getrecursionlimit())]
        out = io.StringIO()
        try:
            with mock.patch.object(sys, "argv", argv), redirect_stdout(out):
                main()
        finally:
            os.remove(path)
        return out.getvalue()

    def test_prints_results(self):
        source = "(define fact (lambda (n) (if (< n 1) 1 (* n (fact (- n 1))))))\n(fact 5)\n((fact 3) (= 1 2))\n"
        self.assertEqual("120\n(6 false)\n", self.run_file(source))

    def test_errors_are_fatal(self):
        with self.assertRaises(SystemExit) as cm:
            self.run_file("(define x 1)\n(+ x y)\n")
        self.assertEqual(1, cm.exception.code)


if __name__ == '__main__':
    unittest.main()
