"""Session control for tinylisp. Splits files/command-line input into statements, parses them, and evaluates them in
order against one shared root environment, either in command line mode or file interpretation mode.
"""

from tinylisp.core.environment import Environment
from tinylisp.core.evaluator import evaluate
from tinylisp.core.expression import List, Symbol
from tinylisp.core.parser import parse
from tinylisp.lang.error import LispError


class Session:
    """Governs a tinylisp session, with control over the root scope that every statement is evaluated in."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, env=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = env if env is not None else Environment()  # defines persist here across statements
        self.to_exec = {}  # dict of line num: (statement, parsed tree) to evaluate
        self.results = []  # non-void values, in evaluation order

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise LispError("'{}' could not be opened", path, diagnosis=False)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise LispError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored (used to keep
        track of file's statements as (statement, first line num) pairs), but add_to_prev will indicate whether a line
        continuation is necessary. Returns updated value of line and add_to_prev. Must be called before calling add.
        """
        if ";;" in line:
            line = line[:line.index(";;")]  # get rid of comments

        line = line.strip()
        if not line:
            return line, add_to_prev

        if exprs is not None:
            if add_to_prev and exprs:
                prev, prev_num = exprs.pop()
                line, line_num = f"{prev} {line}", prev_num
            exprs.append((line, line_num))

        return line, line.count("(") > line.count(")")

    def add(self, expr, line_num):
        """Parses statement expr and queues it for evaluation. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, expr, line_num)  # in case error is raised

        tree = parse(expr)
        self.error_handler.register_step("parse", tree)

        self.to_exec[line_num] = (expr, tree)
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's queued statements in order against self.env. Will raise any errors that are encountered;
        statements before the failing one keep their effects.
        """
        for line_num, (expr, tree) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, expr, line_num)

            for name in self._defined_names(tree):
                if name in self.env.bindings:
                    self.error_handler.warn("'{}' is already defined and will be rebound", name)

            try:
                value = evaluate(tree, self.env)
            finally:
                del self.to_exec[line_num]

            self.error_handler.register_step("eval", value)
            if not value.is_void:
                self.results.append(value)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()

    @staticmethod
    def _defined_names(tree):
        """Names bound by top-level defines in tree, which is either a single form or a sequence of forms."""
        forms = [tree]
        if tree.items and not isinstance(tree[0], Symbol):
            forms = [form for form in tree if isinstance(form, List)]

        for form in forms:
            if len(form) == 3 and form[0] == Symbol("define") and isinstance(form[1], Symbol):
                yield form[1].name
