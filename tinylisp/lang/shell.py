"""Handles interactive/command-line mode for tinylisp interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """tinylisp interpreter shell."""
    intro = "tinylisp interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def onecmd(self, line):
        """While a statement is being continued, every line belongs to it, even one starting with a command name."""
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary tinylisp statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(f"{self._tmp_line} {line}", self.line_num, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return  # only a comment

            self.sess.add(line, self.line_num)
            self.sess.run()

            if self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the tinylisp interpreter!\n\n"
              "tinylisp is a small Lisp with integers, booleans, symbols, lists and lambdas.\n"
              "Special forms are 'define', 'lambda' and 'if', plus the binary operators\n"
              "+ - * / < > = !=. Statements may span lines until their parentheses balance,\n"
              "and each statement is exactly one parenthesized group: wrap several forms in\n"
              "an extra pair of parentheses, e.g. '((define r 10) (* r r))'.\n\n"
              "Try it out by typing '(define sqr (lambda (x) (* x x)))'. This will bind a \n"
              "lambda to the name 'sqr'. Next, try typing '(sqr 12)', giving '144' as the \n"
              "result. Type 'env' to list everything defined so far.")

    def do_env(self, arg):
        """Lists the bindings of the session's root scope."""
        for name, value in sorted(self.sess.env.bindings.items()):
            print(f"{name} = {value}")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
