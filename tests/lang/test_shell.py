import io
import unittest
from contextlib import redirect_stdout

from tinylisp.lang.error import ErrorHandler
from tinylisp.lang.session import Session
from tinylisp.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True))

    def send(self, *lines):
        """Feeds lines to the shell and returns everything it printed."""
        out = io.StringIO()
        with redirect_stdout(out):
            for line in lines:
                self.shell.onecmd(line)
        return out.getvalue()

    def test_evaluates_statements(self):
        output = self.send("(define sqr (lambda (x) (* x x)))", "(sqr 12)")
        self.assertEqual("144\n", output)

    def test_line_continuation(self):
        self.send("(+ 1")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        output = self.send("2)")
        self.assertEqual("3\n", output)
        self.assertEqual("> ", self.shell.prompt)

    def test_errors_do_not_exit(self):
        output = self.send("(undefined)", "(+ 1 1)")
        self.assertIn("unbound symbol", output)
        self.assertTrue(output.endswith("2\n"))

    def test_comment_only(self):
        self.assertEqual("", self.send(";; nothing here"))

    def test_env(self):
        output = self.send("(define b (< 1 2))", "(define a 5)", "env")
        self.assertEqual("a = 5\nb = true\n", output)

    def test_continuation_lines_are_not_commands(self):
        output = self.send("(define env 3)", "(+ 1", "env)")
        self.assertEqual("4\n", output)
        self.assertEqual("> ", self.shell.prompt)

        self.send("(+ 1")
        with redirect_stdout(io.StringIO()) as out:
            self.assertFalse(self.shell.onecmd("exit)"))
        self.assertIn("unbound symbol", out.getvalue())
        self.assertEqual("> ", self.shell.prompt)

    def test_help_mentions_one_group_per_statement(self):
        self.assertIn("exactly one parenthesized group", self.send("help"))

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        with redirect_stdout(io.StringIO()):
            self.assertTrue(self.shell.onecmd("EOF"))


if __name__ == '__main__':
    unittest.main()
