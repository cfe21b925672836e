"""Tokenizer for tinylisp source text. Tokenization is total: every word that isn't a parenthesis or an integer is a
symbol, so operators (`+`, `<`, `!=`) and identifiers come out the same way.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto


INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
INTEGER_MIN, INTEGER_MAX = -2 ** 63, 2 ** 63 - 1


class TokenKind(Enum):
    INTEGER = auto()
    SYMBOL = auto()
    OPEN_PAREN = auto()
    CLOSE_PAREN = auto()


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: object = None

    def __str__(self):
        if self.kind is TokenKind.OPEN_PAREN:
            return "("
        elif self.kind is TokenKind.CLOSE_PAREN:
            return ")"
        return str(self.value)


OPEN_PAREN = Token(TokenKind.OPEN_PAREN)
CLOSE_PAREN = Token(TokenKind.CLOSE_PAREN)


def classify(word):
    """Returns the Token for a single whitespace-delimited word. Integers outside the signed 64-bit range are symbols."""
    if word == "(":
        return OPEN_PAREN
    elif word == ")":
        return CLOSE_PAREN

    if INTEGER_PATTERN.fullmatch(word):
        number = int(word)
        if INTEGER_MIN <= number <= INTEGER_MAX:
            return Token(TokenKind.INTEGER, number)
    return Token(TokenKind.SYMBOL, word)


def tokenize(source):
    """Returns the tokens of source in left-to-right order."""
    words = source.replace("(", " ( ").replace(")", " ) ").split()
    return [classify(word) for word in words]
