"""Recursive-descent parser for tinylisp.

```
<program> ::= <list>                 ; exactly one balanced group; by convention a list of top-level forms
<list>    ::= "(" <item>* ")"
<item>    ::= <integer> | <symbol> | <list>
```

The token stream is consumed in a single left-to-right pass with no backtracking: the nesting stack is the Python call
stack.
"""

from tinylisp.core.expression import Integer, List, Symbol
from tinylisp.core.lexer import TokenKind, tokenize
from tinylisp.lang.error import ParseError


class TokenStream:
    """Cursor over the tokens of a single source string. source is kept for error messages."""

    def __init__(self, tokens, source):
        self.tokens = tokens
        self.source = source.strip()
        self.pos = 0

    @property
    def exhausted(self):
        return self.pos >= len(self.tokens)

    def next(self):
        """Consumes and returns the next token, raising a ParseError if there isn't one."""
        if self.exhausted:
            raise ParseError("'{}' is missing a closing ')'", self.source)
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def remaining(self):
        return self.tokens[self.pos:]


def read_list(stream):
    """Reads one parenthesized list from stream (including both parentheses) and returns it as a List."""
    token = stream.next()
    if token.kind is not TokenKind.OPEN_PAREN:
        start = max(stream.source.find(str(token)), 0)
        raise ParseError("expected '(' at start of '{}'", stream.source, start=start, end=start + len(str(token)))

    items = []
    while True:
        token = stream.next()
        if token.kind is TokenKind.CLOSE_PAREN:
            return List(items)
        elif token.kind is TokenKind.OPEN_PAREN:
            stream.pos -= 1  # read_list consumes its own '('
            items.append(read_list(stream))
        elif token.kind is TokenKind.INTEGER:
            items.append(Integer(token.value))
        else:
            items.append(Symbol(token.value))


def parse(source):
    """Parses source into a single root List. Raises a ParseError on empty, unbalanced, or trailing input."""
    stream = TokenStream(tokenize(source), source)
    if stream.exhausted:
        raise ParseError("program cannot be empty")

    root = read_list(stream)

    if not stream.exhausted:
        trailing = " ".join(str(token) for token in stream.remaining())
        raise ParseError("unexpected '{}' after end of program", trailing)
    return root
