"""
The expression tree: four immutable node types and the operations defined
over them. Every operation matches on the node type and returns a new tree;
nodes are never modified after construction.
"""
import math
from dataclasses import dataclass

import numpy as np

from mathplot.errors import BuildError


OPERATORS = ('+', '-', '*', '/', '^')
FUNCTIONS = ('sin', 'cos', 'exp', 'log')

# values this close to an integer are printed without a fractional part
INTEGER_TOLERANCE = 1e-10

_OPERATOR_IMPLS = {
    '+': np.add,
    '-': np.subtract,
    '*': np.multiply,
    '/': np.divide,
    '^': np.power,
}

_FUNCTION_IMPLS = {
    'sin': np.sin,
    'cos': np.cos,
    'exp': np.exp,
    'log': np.log,
}


class Node():
    """Capabilities shared by every node. Each one delegates to the module-level operation."""

    def eval(self, x: float) -> float:
        return evaluate(self, x)

    def differentiate(self) -> 'Expr':
        return differentiate(self)

    def simplify(self) -> 'Expr':
        return simplify(self)

    def to_infix(self) -> str:
        return to_infix(self)

    def to_postfix(self) -> str:
        return to_postfix(self)

    def __str__(self) -> str:
        return to_infix(self)


@dataclass(frozen=True)
class Var(Node):
    """The free variable x."""
    pass


@dataclass(frozen=True)
class Const(Node):
    """A numeric literal."""
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'value', float(self.value))


@dataclass(frozen=True)
class BinOp(Node):
    """A binary operation (+, -, *, /, ^)."""
    op: str
    left: 'Expr'
    right: 'Expr'

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise BuildError(f'Unknown operator "{self.op}"')


@dataclass(frozen=True)
class Func(Node):
    """A call to one of the built-in unary functions."""
    name: str
    arg: 'Expr'

    def __post_init__(self):
        if self.name not in FUNCTIONS:
            raise BuildError(f'Unknown function "{self.name}"')


Expr = Var | Const | BinOp | Func


def _not_a_node(expr) -> TypeError:
    return TypeError(f'Not an expression node: {expr!r}')


################
## Evaluation ##
################

def evaluate(expr: Expr, x: float) -> float:
    """
    Evaluates the tree at x. Never raises for numeric reasons: division by
    zero, log of a non-positive number and the like come back as inf or nan.
    """
    with np.errstate(all='ignore'):
        return float(_evaluate(expr, np.float64(x)))


def _evaluate(expr: Expr, x: np.float64) -> np.float64:
    match expr:
        case Var():
            return x
        case Const(value):
            return np.float64(value)
        case BinOp(op, left, right):
            return _OPERATOR_IMPLS[op](_evaluate(left, x), _evaluate(right, x))
        case Func(name, arg):
            return _FUNCTION_IMPLS[name](_evaluate(arg, x))
    raise _not_a_node(expr)


#####################
## Differentiation ##
#####################

def differentiate(expr: Expr) -> Expr:
    """
    Returns the derivative with respect to x. The result is not simplified.
    """
    match expr:
        case Var():
            return Const(1)
        case Const():
            return Const(0)
        case BinOp('+', u, v):
            return BinOp('+', differentiate(u), differentiate(v))
        case BinOp('-', u, v):
            return BinOp('-', differentiate(u), differentiate(v))
        case BinOp('*', u, v):
            # (uv)' = u'v + uv'
            return BinOp('+',
                         BinOp('*', differentiate(u), v),
                         BinOp('*', u, differentiate(v)))
        case BinOp('/', u, v):
            # (u/v)' = (u'v - uv') / v^2
            return BinOp('/',
                         BinOp('-',
                               BinOp('*', differentiate(u), v),
                               BinOp('*', u, differentiate(v))),
                         BinOp('^', v, Const(2)))
        case BinOp('^', u, v):
            return _differentiate_power(u, v)
        case Func('sin', u):
            return BinOp('*', Func('cos', u), differentiate(u))
        case Func('cos', u):
            return BinOp('*', Const(-1), BinOp('*', Func('sin', u), differentiate(u)))
        case Func('exp', u):
            return BinOp('*', Func('exp', u), differentiate(u))
        case Func('log', u):
            return BinOp('*', BinOp('/', Const(1), u), differentiate(u))
    raise _not_a_node(expr)


def _differentiate_power(u: Expr, v: Expr) -> Expr:
    du = differentiate(u)

    if isinstance(v, Const):
        # (u^n)' = n * u^(n-1) * u'
        n = v.value
        return BinOp('*', BinOp('*', Const(n), BinOp('^', u, Const(n - 1))), du)

    # (u^v)' = u^v * (v' log(u) + v u'/u), only meaningful for u > 0
    return BinOp('*',
                 BinOp('^', u, v),
                 BinOp('+',
                       BinOp('*', differentiate(v), Func('log', u)),
                       BinOp('*', v, BinOp('/', du, u))))


####################
## Simplification ##
####################

def simplify(expr: Expr) -> Expr:
    """
    One bottom-up reduction pass. Children are simplified first, then the
    node itself is reduced at most once; the result is not revisited, so a
    reduction that exposes a new identity one level up is left alone.
    """
    match expr:
        case Var() | Const():
            return expr
        case BinOp(op, left, right):
            return _simplify_binop(op, simplify(left), simplify(right))
        case Func(name, arg):
            arg = simplify(arg)
            if isinstance(arg, Const):
                return Const(evaluate(Func(name, arg), 0.0))
            return Func(name, arg)
    raise _not_a_node(expr)


def _is_const(expr: Expr, value: float) -> bool:
    return isinstance(expr, Const) and expr.value == value


def _simplify_binop(op: str, left: Expr, right: Expr) -> Expr:
    if isinstance(left, Const) and isinstance(right, Const):
        return Const(evaluate(BinOp(op, left, right), 0.0))

    match op:
        case '+':
            if _is_const(left, 0):
                return right
            if _is_const(right, 0):
                return left
        case '-':
            if _is_const(right, 0):
                return left
        case '*':
            if _is_const(left, 0) or _is_const(right, 0):
                return Const(0)
            if _is_const(left, 1):
                return right
            if _is_const(right, 1):
                return left
        case '/':
            if _is_const(right, 1):
                return left
        case '^':
            if _is_const(right, 1):
                return left
            if _is_const(right, 0):
                return Const(1)

    return BinOp(op, left, right)


###############
## Rendering ##
###############

def format_number(value: float) -> str:
    """Prints integral values (within INTEGER_TOLERANCE) without a fractional part."""
    if math.isfinite(value) and abs(value) < 2 ** 63:
        rounded = round(value)
        if abs(value - rounded) < INTEGER_TOLERANCE:
            return str(rounded)
    return str(value)


def to_infix(expr: Expr) -> str:
    """Fully parenthesized operator notation, e.g. (2 * x)."""
    match expr:
        case Var():
            return 'x'
        case Const(value):
            return format_number(value)
        case BinOp(op, left, right):
            return f'({to_infix(left)} {op} {to_infix(right)})'
        case Func(name, arg):
            return f'{name}({to_infix(arg)})'
    raise _not_a_node(expr)


def to_postfix(expr: Expr) -> str:
    """Reverse Polish notation, e.g. 2 x *."""
    match expr:
        case Var():
            return 'x'
        case Const(value):
            return format_number(value)
        case BinOp(op, left, right):
            return f'{to_postfix(left)} {to_postfix(right)} {op}'
        case Func(name, arg):
            return f'{to_postfix(arg)} {name}'
    raise _not_a_node(expr)
