"""Tree-walking evaluator for tinylisp.

evaluate dispatches on the node type. Self-evaluating nodes (Void, Integer, Bool) come back unchanged, a bare Lambda
value evaluates to Void, Symbols are looked up in the environment, and Lists are classified by their head:

```
(<op> a b)                 ; op in + - * / < > = != ; both operands must be integers
(if cond then else)        ; cond must be a bool, only the taken branch is evaluated
(define name value)        ; binds in the current scope, evaluates to Void
(lambda (params...) body)  ; builds a Lambda, captures nothing
(name args...)             ; call: args are evaluated in the caller's scope
(<non-symbol> ...)         ; sequence: non-void results collected into a List
```

Calls evaluate the body in a new child of the *caller's* scope rather than the scope the lambda was defined in, so
free variables in a body are resolved dynamically through whatever chain the call happens under.
"""

import operator
from enum import Enum, auto

from tinylisp.core.environment import Environment
from tinylisp.core.expression import Bool, Integer, Lambda, List, Symbol, Void
from tinylisp.core.lexer import INTEGER_MAX, INTEGER_MIN
from tinylisp.core.parser import parse
from tinylisp.lang.error import ArityError, EvalError, TypeMismatchError, UnboundSymbolError, UnknownOperatorError


def truncating_div(left, right):
    """Integer division rounding toward zero. Raises ZeroDivisionError if right is 0."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Operator(Enum):
    """The binary operators. Arithmetic operators produce Integers, comparisons produce Bools."""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    LT = "<"
    GT = ">"
    EQ = "="
    NE = "!="

    @classmethod
    def from_symbol(cls, name):
        """Returns the Operator spelled name. Forms only reach this with names Form.classify already accepted, so
        UnknownOperatorError only comes from calling it directly: a form like (% 1 2) is a call, not an operator.
        """
        try:
            return cls(name)
        except ValueError:
            raise UnknownOperatorError("'{}' is not a binary operator", name) from None

    def apply(self, left, right):
        """Applies this operator to two Python ints, returning the result as an Expression. Arithmetic results must
        stay within the signed 64-bit range integer literals are read in.
        """
        func, result_type = OPERATIONS[self]
        result = func(left, right)

        if result_type is Integer and not INTEGER_MIN <= result <= INTEGER_MAX:
            raise EvalError("integer overflow in '{}'", f"({self.value} {left} {right})")
        return result_type(result)


OPERATIONS = {
    Operator.ADD: (operator.add, Integer),
    Operator.SUB: (operator.sub, Integer),
    Operator.MUL: (operator.mul, Integer),
    Operator.DIV: (truncating_div, Integer),
    Operator.LT: (operator.lt, Bool),
    Operator.GT: (operator.gt, Bool),
    Operator.EQ: (operator.eq, Bool),
    Operator.NE: (operator.ne, Bool),
}


class Form(Enum):
    """Every shape a non-empty List can take when evaluated."""
    BINARY = auto()
    IF = auto()
    DEFINE = auto()
    LAMBDA = auto()
    CALL = auto()
    SEQUENCE = auto()

    @classmethod
    def classify(cls, head):
        """Returns the Form of a List whose first item is head."""
        if not isinstance(head, Symbol):
            return cls.SEQUENCE
        elif head.name in KEYWORDS:
            return KEYWORDS[head.name]
        return cls.CALL


KEYWORDS = {
    **{op.value: Form.BINARY for op in Operator},
    "if": Form.IF,
    "define": Form.DEFINE,
    "lambda": Form.LAMBDA,
}


def check_arity(lst, expected):
    if len(lst) != expected:
        msg = f"'{{}}' expects {expected} elements, got {len(lst)}"
        raise ArityError(msg, lst)


def eval_symbol(symbol, env):
    value = env.get(symbol.name)
    if value is None:
        raise UnboundSymbolError(symbol.name)
    return value


def eval_binary(lst, env):
    check_arity(lst, 3)
    op = Operator.from_symbol(lst[0].name)

    operands = []
    for side, expr in zip(("left", "right"), lst[1:]):
        value = evaluate(expr, env)
        if not isinstance(value, Integer):
            raise TypeMismatchError(f"{side} operand of '{{}}' must be an integer, got '{{}}'", (lst, value))
        operands.append(value.value)

    return op.apply(*operands)


def eval_if(lst, env):
    check_arity(lst, 4)
    __, cond, then_branch, else_branch = lst

    value = evaluate(cond, env)
    if not isinstance(value, Bool):
        raise TypeMismatchError("condition '{}' must be a bool, got '{}'", (cond, value))

    return evaluate(then_branch if value.value else else_branch, env)


def eval_define(lst, env):
    """Binds the value of lst[2] to the symbol lst[1] in env (not a parent of env)."""
    check_arity(lst, 3)
    __, target, value_expr = lst

    if not isinstance(target, Symbol):
        raise TypeMismatchError("define target '{}' must be a symbol", target)

    env.set(target.name, evaluate(value_expr, env))
    return Void()


def eval_lambda(lst, env):
    check_arity(lst, 3)
    __, params, body = lst

    if not isinstance(params, List):
        raise TypeMismatchError("lambda parameters '{}' must be a list", params)
    for param in params:
        if not isinstance(param, Symbol):
            raise TypeMismatchError("lambda parameter '{}' must be a symbol", param)

    if not isinstance(body, List):
        raise TypeMismatchError("lambda body '{}' must be a list", body)

    return Lambda([param.name for param in params], body.items)


def eval_call(lst, env):
    """Calls the Lambda bound to lst[0]. Arguments are evaluated in env and bound in a new child of env, in which the
    body is then evaluated.
    """
    name = lst[0].name
    procedure = env.get(name)
    if procedure is None:
        raise UnboundSymbolError(name)
    elif not isinstance(procedure, Lambda):
        raise TypeMismatchError("'{}' is not a lambda, got '{}'", (name, procedure))

    args = lst[1:]
    if len(args) != len(procedure.parameters):
        msg = f"'{{}}' expects {len(procedure.parameters)} arguments, got {len(args)}"
        raise ArityError(msg, lst)

    scope = Environment.extend(env)
    for param, arg in zip(procedure.parameters, args):
        scope.set(param, evaluate(arg, env))

    return evaluate(List(procedure.body), scope)


def eval_sequence(lst, env):
    """Evaluates every item of lst in env, in order, and returns the non-void results."""
    results = []
    for item in lst:
        value = evaluate(item, env)
        if not value.is_void:
            results.append(value)
    return List(results)


HANDLERS = {
    Form.BINARY: eval_binary,
    Form.IF: eval_if,
    Form.DEFINE: eval_define,
    Form.LAMBDA: eval_lambda,
    Form.CALL: eval_call,
    Form.SEQUENCE: eval_sequence,
}


def eval_list(lst, env):
    if not lst.items:
        raise EvalError("cannot evaluate an empty list '{}'", lst)
    return HANDLERS[Form.classify(lst[0])](lst, env)


def evaluate(expr, env):
    """Evaluates expr against env. Raises an EvalError (or a subclass) if expr can't be evaluated; env keeps whatever
    defines completed before the error.
    """
    if isinstance(expr, (Void, Integer, Bool)):
        return expr
    elif isinstance(expr, Lambda):
        return Void()
    elif isinstance(expr, Symbol):
        return eval_symbol(expr, env)
    elif isinstance(expr, List):
        return eval_list(expr, env)
    raise EvalError("'{}' is not a tinylisp expression", repr(expr), internal=True)


def run(source, env):
    """Parses and evaluates source against env."""
    return evaluate(parse(source), env)
