import math
import unittest

import numpy as np

from levy_stable_quad import (
    AdaptiveQuadrature,
    ConvergenceError,
    GaussLegendreQuadrature,
)
from levy_stable_quad._numeric import bisect, gauss_laguerre_rule, gauss_legendre_rule


class BisectTest(unittest.TestCase):
    def test_root(self):
        root, val, err = bisect(lambda t: math.cos(t), 0.0, 3.0, 1e-12, 100)
        self.assertIsNone(err)
        np.testing.assert_allclose(root, math.pi / 2, atol=1e-11)
        self.assertLess(abs(val), 1e-10)

    def test_no_sign_change(self):
        root, val, err = bisect(lambda t: t * t + 1.0, -1.0, 3.0, 1e-12, 100)
        self.assertIsInstance(err, ConvergenceError)
        self.assertIn("no sign change", str(err))
        self.assertEqual(root, 1.0)
        self.assertEqual(val, 2.0)

    def test_nan_endpoint(self):
        _, _, err = bisect(lambda t: math.nan if t < 0 else t, -1.0, 1.0, 1e-12, 100)
        self.assertIsInstance(err, ConvergenceError)

    def test_iteration_limit(self):
        root, _, err = bisect(lambda t: t - 0.3, 0.0, 1.0, 1e-12, 3)
        self.assertIsInstance(err, ConvergenceError)
        self.assertEqual(str(err), "Bisection iteration limit exceeded (3)")
        self.assertLess(abs(root - 0.3), 0.25)


class QuadratureTest(unittest.TestCase):
    def test_adaptive(self):
        val, abserr, err = AdaptiveQuadrature().integrate(math.sin, 0.0, math.pi, 1e-10, 50)
        self.assertIsNone(err)
        np.testing.assert_allclose(val, 2.0, rtol=1e-12)
        self.assertLess(abserr, 1e-9)

    def test_adaptive_limit(self):
        val, _, err = AdaptiveQuadrature().integrate(
            lambda t: 1.0 / math.sqrt(t), 0.0, 1.0, 1e-12, 1
        )
        self.assertIsInstance(err, ConvergenceError)
        self.assertIn("Quadrature on [0, 1] did not converge", str(err))
        self.assertTrue(math.isfinite(val))

    def test_gauss_legendre(self):
        val, abserr, err = GaussLegendreQuadrature(order=16).integrate(
            lambda t: t**5, 0.0, 2.0, 0.0, 0
        )
        self.assertIsNone(err)
        np.testing.assert_allclose(val, 64.0 / 6.0, rtol=1e-13)
        self.assertLess(abserr, 1e-10)

    def test_rules_cached(self):
        nodes, weights = gauss_legendre_rule(32)
        self.assertIs(gauss_legendre_rule(32)[0], nodes)
        self.assertFalse(weights.flags.writeable)
        with self.assertRaises(ValueError):
            weights[0] = 1.0

    def test_laguerre(self):
        nodes, weights = gauss_laguerre_rule(64)
        np.testing.assert_allclose(weights.sum(), 1.0, rtol=1e-12)
        # int_0^inf t^2 exp(-t) dt = 2
        np.testing.assert_allclose(np.dot(weights, nodes**2), 2.0, rtol=1e-12)


class ConvergenceErrorTest(unittest.TestCase):
    def test_combine_none(self):
        self.assertIsNone(ConvergenceError.combine())
        self.assertIsNone(ConvergenceError.combine(None, None))

    def test_combine_single(self):
        e = ConvergenceError("a")
        self.assertIs(ConvergenceError.combine(None, e), e)

    def test_combine_many(self):
        e = ConvergenceError.combine(
            ConvergenceError("a"), ConvergenceError("b"), None, ConvergenceError("c")
        )
        self.assertEqual(str(e), "a; b; c")
        self.assertEqual(len(e.causes), 3)
