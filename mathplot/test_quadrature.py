import math
import unittest

from mathplot.builders import build_aos
from mathplot.quadrature import rectangular, trapezoidal


class TestQuadrature(unittest.TestCase):
    def _test_area(self, rule, text, expected, delta, a=-5.0, b=5.0, h=0.01):
        self.assertAlmostEqual(rule(build_aos(text), a, b, h), expected, delta=delta)

    def test_square(self):
        self._test_area(trapezoidal, 'x^2', 250 / 3, 0.5)
        self._test_area(rectangular, 'x^2', 250 / 3, 0.5)

    def test_odd_function(self):
        self._test_area(trapezoidal, 'x', 0.0, 1e-6)
        self._test_area(rectangular, 'x', 0.0, 0.1)

    def test_constant(self):
        self._test_area(trapezoidal, '3', 6.0, 1e-9, a=0.0, b=2.0, h=0.5)
        self._test_area(rectangular, '3', 6.0, 1e-9, a=0.0, b=2.0, h=0.5)

    def test_rules_differ_on_curved_function(self):
        expr = build_aos('exp(x)')
        self.assertNotEqual(rectangular(expr, -5.0, 5.0, 0.01),
                            trapezoidal(expr, -5.0, 5.0, 0.01))

    def test_rectangular_uses_left_endpoints(self):
        # f(x) = x on [0, 2] with h = 1: 0*1 + 1*1
        self.assertEqual(rectangular(build_aos('x'), 0.0, 2.0, 1.0), 1.0)
        self.assertEqual(trapezoidal(build_aos('x'), 0.0, 2.0, 1.0), 2.0)

    def test_singularity(self):
        area = trapezoidal(build_aos('1/x'), -5.0, 5.0, 0.01)
        self.assertTrue(math.isnan(area) or math.isinf(area))

    def test_empty_interval(self):
        self.assertEqual(trapezoidal(build_aos('x'), 1.0, 1.0, 0.1), 0.0)
        self.assertEqual(trapezoidal(build_aos('x'), 1.0, 0.0, 0.1), 0.0)
        self.assertEqual(rectangular(build_aos('x'), 1.0, 0.0, 0.1), 0.0)

    def test_non_positive_step(self):
        with self.assertRaises(ValueError):
            rectangular(build_aos('x'), 0.0, 1.0, 0.0)
        with self.assertRaises(ValueError):
            trapezoidal(build_aos('x'), 0.0, 1.0, -0.1)


if __name__ == '__main__':
    unittest.main()
