import math
import unittest

import numpy as np

from levy_stable_quad import BergstromPdf, ConvergenceError, ZolatarevPdf

_zolatarev = ZolatarevPdf()
_bergstrom = BergstromPdf()


def _value(g, x, alpha, beta):
    val, _ = g.scaled_value(x, alpha, beta)
    return val


def _skew_shift(alpha, beta):
    # Distance between the N1 coordinates of the series and the N0 generators.
    return beta * math.tan(math.pi * alpha / 2)


class TailTest(unittest.TestCase):
    def test_symmetric_asymptotic(self):
        for x in [10.0, 20.0, 50.0, -20.0]:
            val, err = _bergstrom.scaled_value(x, 1.5, 0.0)
            self.assertIsNone(err)
            np.testing.assert_allclose(val, _value(_zolatarev, x, 1.5, 0.0), rtol=1e-6)

    def test_symmetric_convergent(self):
        # alpha < 1: the series converges everywhere except at 0.
        for x in [2.0, 5.0, -3.0]:
            val, err = _bergstrom.scaled_value(x, 0.7, 0.0)
            self.assertIsNone(err)
            np.testing.assert_allclose(val, _value(_zolatarev, x, 0.7, 0.0), rtol=1e-7)

    def test_skewed_shifted(self):
        alpha, beta = 0.75, 0.25
        shift = _skew_shift(alpha, beta)
        for x in [3.0, 10.0, -3.0, -10.0]:
            val, err = _bergstrom.scaled_value(x, alpha, beta)
            self.assertIsNone(err)
            np.testing.assert_allclose(
                val, _value(_zolatarev, x - shift, alpha, beta), rtol=1e-7
            )

    def test_skewed_relative_error_decreases(self):
        alpha, beta = 0.75, 0.25
        rel_errs = []
        for x in [10.0, 20.0, 50.0, 100.0, 200.0]:
            exp = _value(_zolatarev, x, alpha, beta)
            val = _value(_bergstrom, x, alpha, beta)
            rel_errs.append(abs(val - exp) / exp)
        self.assertEqual(rel_errs, sorted(rel_errs, reverse=True))
        self.assertLess(rel_errs[-1], 1e-2)

    def test_tail_decays(self):
        vals = [_value(_bergstrom, x, 1.2, 0.3) for x in [10.0, 20.0, 40.0]]
        self.assertEqual(vals, sorted(vals, reverse=True))
        self.assertGreater(vals[-1], 0.0)


class EdgeCaseTest(unittest.TestCase):
    def test_reflection(self):
        self.assertEqual(
            _bergstrom.scaled_value(-10.0, 0.75, 0.25),
            _bergstrom.scaled_value(10.0, 0.75, -0.25),
        )

    def test_zero(self):
        val, err = _bergstrom.scaled_value(0.0, 1.5, 0.3)
        self.assertTrue(math.isnan(val))
        self.assertIsInstance(err, ConvergenceError)

    def test_iteration_limit(self):
        val, err = BergstromPdf(limit=3).scaled_value(10.0, 1.5, 0.0)
        self.assertIsInstance(err, ConvergenceError)
        self.assertIn("Iteration limit in tail approximation exceeded (3)", str(err))
        # The partial sum is still returned.
        np.testing.assert_allclose(val, _value(_bergstrom, 10.0, 1.5, 0.0), rtol=1e-3)

    def test_closed_forms(self):
        np.testing.assert_allclose(
            _value(_bergstrom, 0.0, 2.0, 0.5), 1 / math.sqrt(4 * math.pi), rtol=1e-14
        )
        np.testing.assert_allclose(_value(_bergstrom, 0.0, 1.0, 0.0), 1 / math.pi, rtol=1e-14)
