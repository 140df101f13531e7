"""
Tree builders for the two input notations. Both raise an ExpressionError
subclass on malformed input and never return a partial tree.
"""
import re

from mathplot.errors import BuildError, StackError
from mathplot.expression import BinOp, Const, Expr, FUNCTIONS, Func, OPERATORS, Var
from mathplot.tokenizer import RPNLexer, split_aos


# plain decimal literals only; float() alone would also take nan, inf and 1_0
NUMBER_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?', re.ASCII)


def _parse_float(text: str) -> float | None:
    if NUMBER_RE.fullmatch(text) is None:
        return None
    return float(text)


def build_aos(text: str) -> Expr:
    """
    Builds a tree from fully-parenthesized operator notation, recursing into
    the operand substrings of each split.
    """
    main, left, right = split_aos(text)

    if main.lower() == 'x':
        return Var()

    # function call, e.g. sin(x)
    if right is None and left is not None and main.isalpha():
        name = main.lower()
        if name not in FUNCTIONS:
            raise BuildError(f'Unknown function "{main}"')
        return Func(name, build_aos(left))

    if len(main) == 1 and main in OPERATORS:
        return BinOp(main, build_aos(left), build_aos(right))

    value = _parse_float(main)
    if value is None:
        raise BuildError(f'Unknown token "{main}"')
    return Const(value)


def build_rpn(text: str) -> Expr:
    """
    Builds a tree from reverse Polish notation using an operand stack. The
    most recently pushed operand becomes the right-hand side of an operator.
    """
    stack: list[Expr] = []

    for token in RPNLexer(text).make_tokens():
        token = token.lower()

        if token == 'x':
            stack.append(Var())
            continue

        value = _parse_float(token)
        if value is not None:
            stack.append(Const(value))
        elif token in OPERATORS:
            if len(stack) < 2:
                raise StackError('Invalid RPN expression')
            right = stack.pop()
            left = stack.pop()
            stack.append(BinOp(token, left, right))
        elif token in FUNCTIONS:
            if not stack:
                raise StackError('Invalid RPN expression')
            stack.append(Func(token, stack.pop()))
        else:
            raise BuildError(f'Illegal token "{token}"')

    if len(stack) != 1:
        raise StackError('Invalid RPN expression')
    return stack.pop()
