"""
Restartable point sequences used to draw a tree as a curve.
"""
import math
from typing import NamedTuple

from mathplot.errors import SequenceExhaustedError
from mathplot.expression import Expr, evaluate


# absorbs floating drift so the end of the range is still sampled
END_TOLERANCE = 1e-9


class Point(NamedTuple):
    x: float
    y: float


class CurveSequence():
    """
    A finite sequence of points with a cursor. Use has_next()/next_point()
    directly, or iterate; reset() rewinds to the first point.
    """

    def has_next(self) -> bool:
        return False

    def has_break(self) -> bool:
        """
        Whether the last point drawn starts a new segment. The sequences here
        do not detect discontinuities, so this is always False.
        """
        return False

    def reset(self):
        pass

    def next_point(self) -> Point:
        raise SequenceExhaustedError('Curve sequence is exhausted')

    def __iter__(self) -> 'CurveSequence':
        return self

    def __next__(self) -> Point:
        if not self.has_next():
            raise StopIteration
        return self.next_point()


class EmptyCurve(CurveSequence):
    """Used whenever there is no function to draw."""
    pass


class CartesianCurve(CurveSequence):
    """Samples (t, f(t)) for t from start to end inclusive."""

    def __init__(self, expr: Expr, start: float, end: float, step: float):
        if step <= 0:
            raise ValueError(f'Sampling step must be positive, got {step}')
        self.expr = expr
        self.start = start
        self.end = end
        self.step = step
        self.reset()

    def has_next(self) -> bool:
        return self.current <= self.end + END_TOLERANCE

    def reset(self):
        self.current = self.start

    def next_point(self) -> Point:
        if not self.has_next():
            raise SequenceExhaustedError('Curve sequence is exhausted')
        t = self.current
        point = self._point_at(t)
        self.current += self.step
        return point

    def _point_at(self, t: float) -> Point:
        return Point(t, evaluate(self.expr, t))


class PolarCurve(CartesianCurve):
    """Samples r = f(theta) and converts to (r cos theta, r sin theta)."""

    def _point_at(self, theta: float) -> Point:
        r = evaluate(self.expr, theta)
        return Point(r * math.cos(theta), r * math.sin(theta))
