"""
Bergstrom's asymptotic series for the tail of the stable density.

    f(x) = 1 / (pi x) * sum_{n >= 1} (-1)^(n+1) Gamma(n alpha + 1) / n!
           * (1 + zeta^2)^(n/2) * sin(n (pi alpha / 2 + atan(zeta))) * x^(-alpha n)

with zeta = beta tan(pi alpha / 2). The series is expressed in the coordinates of
the N1 parametrization: for beta != 0 it is shifted by beta tan(pi alpha / 2)
with respect to the N0 generators, a difference that vanishes relative to the
density as x grows.

It converges for alpha < 1 and is only asymptotic for alpha > 1: it is cheap
and accurate far in the tails, and useless near the center of the distribution.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from math import pi as PI

import numpy as np
from scipy import special as sp_special  # type: ignore

from ._base import DensityResult, Pdf, cauchy_density, gaussian_density
from ._errors import ConvergenceError

_logger = logging.getLogger(__name__)

DEFAULT_EPS: float = 1e-12
DEFAULT_LIMIT: int = 30


@dataclass(frozen=True)
class BergstromPdf(Pdf):
    """
    Unit stable density from the tail series.

    Args:
        eps: the summation stops when the magnitude of a term (without its
            sine factor) is smaller than eps * pi / x.
        limit: maximum number of terms. Reaching it is reported as a
            `ConvergenceError`, along with the partial sum.
    """

    eps: float = DEFAULT_EPS
    limit: int = DEFAULT_LIMIT

    def scaled_value(self, x: float, alpha: float, beta: float) -> DensityResult:
        if alpha == 2.0:
            return gaussian_density(x), None
        if alpha == 1.0 and beta == 0.0:
            return cauchy_density(x), None
        if x == 0.0:
            return math.nan, ConvergenceError("The tail series is not defined at x = 0")
        if x < 0:
            x, beta = -x, -beta

        zeta = beta * math.tan(0.5 * PI * alpha)
        tol = self.eps / x * PI

        with np.errstate(over="ignore", invalid="ignore"):
            total, num_terms = _tail_series(x, alpha, zeta, tol, self.limit)
        _logger.debug(f"Tail series at x={x:g}: {num_terms} terms, sum={total:g}")
        err = None
        if num_terms > self.limit:
            err = ConvergenceError(
                f"Iteration limit in tail approximation exceeded ({self.limit})"
            )
        return total / (x * PI), err


def _tail_series(x: float, alpha: float, zeta: float, tol: float, limit: int):
    """
    Sums the terms of the series until the magnitude of a term, without its
    sine factor, is smaller than tol.

    Returns the sum and the number of terms used, which is limit + 1 if the
    summation did not stop by itself.
    """
    phase = 0.5 * PI * alpha + math.atan(zeta)
    log_x = math.log(x)
    log_norm = 0.5 * math.log1p(zeta * zeta)
    total = 0.0
    for n in range(1, limit + 1):
        # Gamma(n alpha + 1) overflows long before the whole term does.
        log_mag = (
            sp_special.gammaln(n * alpha + 1.0)
            - sp_special.gammaln(n + 1.0)
            + n * log_norm
            - alpha * n * log_x
        )
        mag = float(np.exp(log_mag))
        sign = 1.0 if n % 2 == 1 else -1.0
        total += sign * math.sin(n * phase) * mag
        # The sine vanishes for some n, only the magnitude decides.
        if mag < tol:
            return total, n
    return total, limit + 1
