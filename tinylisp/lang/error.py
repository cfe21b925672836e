"""Error handling for the tinylisp language. Only LispErrors should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue (the exceptions being
recursion depth and division by zero, which are host failures that user programs can trigger).
"""

import sys

from termcolor import colored


class LispError(Exception):
    """Templates an error/warning message so that it can be used to throw a tinylisp error/warning. msg is a format
    string whose fields are filled with the (bolded) exprs.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for LispError or warning."""
        if exprs is None:
            exprs = ""
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]
        exprs = [str(expr) for expr in exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(LispError):
    """Missing or extra parentheses, or input that ends before the program does."""


class EvalError(LispError):
    """Raised while walking an expression tree."""


class UnboundSymbolError(EvalError):
    """A symbol has no binding anywhere in the scope chain."""

    def __init__(self, name):
        super().__init__("unbound symbol '{}'", name)
        self.name = name


class ArityError(EvalError):
    """A form or call received the wrong number of elements."""


class TypeMismatchError(EvalError):
    """A condition, operand, define target, parameter or callee has the wrong kind of value."""


class UnknownOperatorError(EvalError):
    """A symbol was used as a binary operator but isn't one."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom tinylisp errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose  # print parse/eval steps
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, expr):
        """Prints a single interpreter step (e.g. 'parse', 'eval') if running verbosely."""
        if self.verbose:
            print(colored(f"{kind:>5} ", attrs=["dark"]) + str(expr))

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = LispError(*args, **kwargs)

        file, (line, line_num) = next(iter(self.traceback.items()))
        col = max(line.find(error.expr), 0) + error.start if line else 0

        error_msg = colored(f"{file}:{line_num}:{col}: ", attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a LispError, and self.traceback must be a dict of
        file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LispError("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LispError("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is ZeroDivisionError:
            self.throw(LispError("division by zero", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, LispError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LispError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
