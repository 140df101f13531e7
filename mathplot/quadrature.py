"""
Numeric definite integrals of a tree. Values that are undefined somewhere in
the interval (nan or inf) are summed like any other value.
"""
import math

from mathplot.expression import Expr, evaluate


def _check_step(h: float):
    if h <= 0:
        raise ValueError(f'Integration step must be positive, got {h}')


def rectangular(expr: Expr, a: float, b: float, h: float) -> float:
    """Left-endpoint rule. x is advanced by repeated addition, so the last
    rectangle may or may not be included depending on rounding near b."""
    _check_step(h)
    total = 0.0
    x = a
    while x < b:
        total += evaluate(expr, x) * h
        x += h
    return total


def trapezoidal(expr: Expr, a: float, b: float, h: float) -> float:
    _check_step(h)
    n = math.floor((b - a) / h)
    if n <= 0:
        return 0.0

    total = 0.0
    f0 = evaluate(expr, a)
    for i in range(n):
        f1 = evaluate(expr, a + (i + 1) * h)
        total += (f0 + f1) / 2 * h
        f0 = f1
    return total
