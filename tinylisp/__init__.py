"""tinylisp: a small tree-walking interpreter for a parenthesized Lisp subset.

Basic program flow:
    1. Lexer: pads parentheses with whitespace and splits the source into integer, symbol and paren tokens
        - see tinylisp/core/lexer.py
    2. Parser: builds one nested List (by convention, a list of top-level forms) from the tokens
        - see tinylisp/core/parser.py
    3. Evaluator: walks the tree against a chain of Environments, producing a value or raising an EvalError
        - see tinylisp/core/evaluator.py and tinylisp/core/environment.py

Everything under tinylisp/lang (sessions, the shell, error display) is host glue around `parse` and `evaluate`.
"""

from tinylisp.core.environment import Environment
from tinylisp.core.evaluator import evaluate, run
from tinylisp.core.parser import parse
