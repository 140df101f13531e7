import unittest

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from mathplot.curves import CartesianCurve, EmptyCurve
from mathplot.engine import Engine, ExpressionFormat, PlotType
from mathplot.expression import Var
from mathplot.plotting import DERIVATIVE_COLOR, FUNCTION_COLOR, curve_segments, plot


class BreakingCurve(CartesianCurve):
    """Reports a break at every point where x is a whole number."""

    def has_break(self) -> bool:
        return float(self.current - self.step).is_integer()


class TestCurveSegments(unittest.TestCase):
    def test_single_segment(self):
        segments = curve_segments(CartesianCurve(Var(), 0.0, 1.0, 0.5))
        self.assertEqual(len(segments), 1)
        np.testing.assert_allclose(segments[0], [[0, 0], [0.5, 0.5], [1, 1]])

    def test_restarts_sequence(self):
        curve = CartesianCurve(Var(), 0.0, 1.0, 0.5)
        list(curve)
        self.assertEqual(len(curve_segments(curve)[0]), 3)

    def test_break_starts_new_segment(self):
        segments = curve_segments(BreakingCurve(Var(), 0.0, 2.0, 0.5))
        self.assertEqual([len(s) for s in segments], [2, 2, 1])

    def test_empty(self):
        self.assertEqual(curve_segments(EmptyCurve()), [])


class TestPlot(unittest.TestCase):
    def tearDown(self):
        plt.close('all')

    def _plot(self, text, fmt, plot_type):
        engine = Engine()
        engine.set_expression(text, fmt)
        _, ax = plt.subplots()
        self.assertIs(plot(engine, plot_type, ax), ax)
        return ax

    def _colors(self, ax):
        return [line.get_color() for line in ax.get_lines()]

    def test_cartesian(self):
        ax = self._plot('sin(x)', ExpressionFormat.AOS, PlotType.CARTESIAN)
        self.assertEqual(self._colors(ax)[2:], [FUNCTION_COLOR, DERIVATIVE_COLOR])
        self.assertEqual(ax.get_xlim(), (-10.0, 10.0))

    def test_cartesian_rpn(self):
        ax = self._plot('x 2 ^', ExpressionFormat.RPN, PlotType.CARTESIAN)
        self.assertEqual(len(ax.get_lines()), 4)

    def test_polynomial_with_derivative(self):
        ax = self._plot('x^3 + 2*x - 5', ExpressionFormat.AOS, PlotType.CARTESIAN)
        derivative = ax.get_lines()[3]
        self.assertAlmostEqual(derivative.get_ydata()[0], 3 * 100 + 2)

    def test_polar(self):
        ax = self._plot('1+sin(x)', ExpressionFormat.AOS, PlotType.POLAR)
        function = ax.get_lines()[2]
        self.assertAlmostEqual(function.get_xdata()[0], 1.0)
        self.assertAlmostEqual(function.get_ydata()[0], 0.0)

    def test_axes_only_without_function(self):
        ax = self._plot('foo(x)', ExpressionFormat.AOS, PlotType.POLAR)
        self.assertEqual(len(ax.get_lines()), 2)

    def test_creates_axes(self):
        engine = Engine()
        engine.set_expression('x', ExpressionFormat.AOS)
        ax = plot(engine, PlotType.CARTESIAN)
        self.assertEqual(len(ax.get_lines()), 4)


if __name__ == '__main__':
    unittest.main()
