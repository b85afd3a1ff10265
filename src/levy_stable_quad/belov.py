"""
The Fourier-type representation of the stable density, integrated with the
two-piece fixed-abscissa scheme of I. A. Belov:

    f(x) = 1/pi int_0^inf cos(h(t)) exp(-t^alpha) dt
    h(t) = x t + beta (t - t^alpha) tan(pi alpha / 2)

[0, t0] is integrated with a high order Gauss-Legendre rule, since the
integrand oscillates there, and [t0, inf) with a Gauss-Laguerre rule, suited to
the exponential decay. The split point is fixed: the scheme is fast, but it
degrades when the integrand becomes highly oscillatory (alpha ~ 0.5 or less).
Prefer `ZolatarevPdf` there.
"""

from __future__ import annotations

from dataclasses import dataclass
from math import pi as PI

import numpy as np

from ._base import DensityResult, Pdf, cauchy_density, gaussian_density
from ._numeric import gauss_laguerre_rule, gauss_legendre_rule

DEFAULT_SPLIT: float = 8.0
DEFAULT_LEGENDRE_ORDER: int = 1024
DEFAULT_LAGUERRE_ORDER: int = 64


@dataclass(frozen=True)
class BelovPdf(Pdf):
    """
    Unit stable density (N0 parametrization) from fixed quadrature rules.

    This generator never reports errors: a fixed rule has no way to detect
    that it did not converge.

    Args:
        split: the abscissa t0 that separates the two pieces.
        legendre_order: number of points of the rule on [0, t0].
        laguerre_order: number of points of the rule on [t0, inf).
    """

    split: float = DEFAULT_SPLIT
    legendre_order: int = DEFAULT_LEGENDRE_ORDER
    laguerre_order: int = DEFAULT_LAGUERRE_ORDER

    def scaled_value(self, x: float, alpha: float, beta: float) -> DensityResult:
        if alpha == 2.0:
            return gaussian_density(x), None
        if alpha == 1.0 and beta == 0.0:
            return cauchy_density(x), None

        skew = beta * np.tan(0.5 * PI * alpha)

        def integrand(t: np.ndarray) -> np.ndarray:
            t_alpha = np.power(t, alpha)
            h = x * t + skew * (t - t_alpha)
            return np.cos(h) * np.exp(-t_alpha) / PI

        # [0, t0]
        nodes, weights = gauss_legendre_rule(self.legendre_order)
        half = 0.5 * self.split
        head = half * np.dot(weights, integrand(half * (nodes + 1.0)))

        # [t0, inf): the rule integrates against exp(-u), which is compensated.
        nodes, weights = gauss_laguerre_rule(self.laguerre_order)
        tail = np.dot(weights * np.exp(nodes), integrand(nodes + self.split))

        return float(head + tail), None
