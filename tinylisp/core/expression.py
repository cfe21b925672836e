"""Expression tree shared by the parser and the evaluator.

A parsed program and the values it evaluates to use the same node types:

```
<expr> ::= Void                          ; result of define and other side-effecting forms
         | Integer                       ; whole number, parsed from digits
         | Bool                          ; only ever produced by comparisons, never parsed
         | Symbol                        ; resolved against an environment when evaluated
         | Lambda <params> <body>        ; parameter names + unevaluated body forms (no captured environment)
         | List <expr>*                  ; program structure, or the non-void results of a sequence
```

All nodes are frozen dataclasses, so trees can be shared freely between scopes without copying.
"""

from abc import ABC
from dataclasses import dataclass


class Expression(ABC):
    """Superclass of every node in a tinylisp expression tree."""

    @property
    def is_void(self):
        return isinstance(self, Void)


@dataclass(frozen=True)
class Void(Expression):

    def __str__(self):
        return "Void"


@dataclass(frozen=True)
class Integer(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Bool(Expression):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class Symbol(Expression):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Lambda(Expression):
    """User-defined procedure. body holds the items of the body list, and is evaluated as a List when called."""
    parameters: tuple
    body: tuple

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "body", tuple(self.body))

    def __str__(self):
        return f"(lambda ({' '.join(self.parameters)}) {List(self.body)})"


@dataclass(frozen=True)
class List(Expression):
    items: tuple

    def __post_init__(self):
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    def __str__(self):
        return "(" + " ".join(str(item) for item in self.items) + ")"
