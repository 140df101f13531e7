import math
import unittest

from mathplot.curves import CartesianCurve, EmptyCurve, Point, PolarCurve
from mathplot.errors import SequenceExhaustedError
from mathplot.expression import BinOp, Const, Func, Var


X = Var()


def draw_all(sequence):
    points = []
    while sequence.has_next():
        points.append(sequence.next_point())
    return points


class TestCartesianCurve(unittest.TestCase):
    def test_samples_inclusive_range(self):
        curve = CartesianCurve(BinOp('*', Const(2), X), 0.0, 1.0, 0.25)
        points = draw_all(curve)
        self.assertEqual(len(points), 5)
        self.assertEqual(points[0], Point(0.0, 0.0))
        self.assertEqual(points[-1], Point(1.0, 2.0))

    def test_end_survives_accumulated_drift(self):
        # 0.1 added ten times falls just short of or beyond 1.0
        points = draw_all(CartesianCurve(X, 0.0, 1.0, 0.1))
        self.assertEqual(len(points), 11)
        self.assertAlmostEqual(points[-1].x, 1.0)

    def test_exhausted(self):
        curve = CartesianCurve(X, 0.0, 0.5, 1.0)
        curve.next_point()
        self.assertFalse(curve.has_next())
        with self.assertRaises(SequenceExhaustedError) as cm:
            curve.next_point()
        self.assertIn('exhausted', str(cm.exception))

    def test_reset_replays_identically(self):
        curve = CartesianCurve(Func('sin', X), -10.0, 10.0, 0.05)
        first = draw_all(curve)
        curve.reset()
        second = draw_all(curve)
        self.assertEqual(len(first), 401)
        self.assertEqual(first, second)

    def test_iteration(self):
        curve = CartesianCurve(X, 0.0, 2.0, 1.0)
        self.assertEqual([p.x for p in curve], [0.0, 1.0, 2.0])
        self.assertEqual(list(curve), [])
        curve.reset()
        self.assertEqual(len(list(curve)), 3)

    def test_undefined_points_are_kept(self):
        points = draw_all(CartesianCurve(BinOp('/', Const(1), X), -1.0, 1.0, 1.0))
        self.assertEqual(len(points), 3)
        self.assertEqual(points[1].y, math.inf)

    def test_never_breaks(self):
        curve = CartesianCurve(BinOp('/', Const(1), X), -1.0, 1.0, 0.5)
        while curve.has_next():
            curve.next_point()
            self.assertFalse(curve.has_break())

    def test_non_positive_step(self):
        with self.assertRaises(ValueError):
            CartesianCurve(X, 0.0, 1.0, 0.0)


class TestPolarCurve(unittest.TestCase):
    def test_unit_circle(self):
        curve = PolarCurve(Const(1), 0.0, 2 * math.pi, 0.05)
        for p in curve:
            self.assertAlmostEqual(math.hypot(p.x, p.y), 1.0)

    def test_converts_radius(self):
        curve = PolarCurve(Const(2), 0.0, math.pi, math.pi / 2)
        points = draw_all(curve)
        self.assertEqual(len(points), 3)
        self.assertAlmostEqual(points[0].x, 2.0)
        self.assertAlmostEqual(points[1].y, 2.0)
        self.assertAlmostEqual(points[2].x, -2.0)

    def test_reset_replays_identically(self):
        curve = PolarCurve(BinOp('+', Const(1), Func('sin', X)), 0.0, 2 * math.pi, 0.05)
        first = draw_all(curve)
        curve.reset()
        self.assertEqual(draw_all(curve), first)


class TestEmptyCurve(unittest.TestCase):
    def test_empty(self):
        curve = EmptyCurve()
        self.assertFalse(curve.has_next())
        self.assertFalse(curve.has_break())
        self.assertEqual(list(curve), [])
        curve.reset()
        with self.assertRaises(SequenceExhaustedError):
            curve.next_point()


if __name__ == '__main__':
    unittest.main()
