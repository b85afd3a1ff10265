"""
The Zolatarev integral representation of the stable density.

All the formulas are based on:

Nolan, J. P. (1997). Numerical calculation of stable densities and
distribution functions.

Borak, S., Haerdle, W., Weron, R. (2005). Stable distributions,
SFB 649 discussion paper 2005-008.

For alpha != 1 and x > zeta, the unit density (N0 parametrization) is

    f(x) = alpha / (pi |alpha - 1| (x - zeta)) * int_{-eps}^{pi/2} g exp(-g) dtheta

with g(theta) = c(theta) * (x - zeta)^(alpha / (alpha - 1)), and a similar form
exists for alpha = 1. The integrand g exp(-g) has a single, possibly very sharp,
peak where g = 1. The peak is located by bisection and the integral is split
there: adaptive quadrature converges much faster on the two monotone halves
than on one interval straddling the peak. Each half is split once more where
the integrand becomes negligible, so that a very narrow peak cannot fall
between the first quadrature nodes.

When x gets close to zeta, the peak moves towards theta = -eps and g decays
like a power of theta + eps on its far side. For alpha != 1 the integral is
therefore computed in the variable u = log(theta + eps): the power law becomes
an exponential, and theta + eps keeps its full relative precision.

g is evaluated through its logarithm: both c and (x - zeta)^(alpha / (alpha - 1))
overflow long before their product does, in particular when alpha is close to 1.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from math import pi as PI
from typing import Callable, List, Optional, Tuple

import numpy as np
from scipy import special as sp_special  # type: ignore

from ._base import DensityResult, Pdf, cauchy_density, close_to, gaussian_density
from ._errors import ConvergenceError
from ._numeric import AdaptiveQuadrature, Integrator, bisect

_logger = logging.getLogger(__name__)

# Relative accuracy requested from the integrator for each piece of the integral.
DEFAULT_EPS_QUAD: float = 1e-12
# Absolute accuracy on the location of the peak, in the integration variable.
DEFAULT_EPS_BISECT: float = 1e-10
# alpha (resp. beta) within this distance of 1 or 2 (resp. 0) uses the special case.
DEFAULT_ALPHA_TOL: float = 1e-6
DEFAULT_BETA_TOL: float = 1e-6
# Maximum number of subintervals for each piece of the integral.
DEFAULT_LIMIT_QUAD: int = 100
DEFAULT_LIMIT_BISECT: int = 50

# Values of log(g) on each side of the peak (log(g) = 0) beyond which g exp(-g)
# is below 1e-13 times its maximum. They are used as extra breakpoints.
_SHOULDER_LOG_G: Tuple[float, ...] = (-30.0, math.log(40.0))

# Lower end of u = log(theta + eps). theta + eps stays a normal float, even
# multiplied by a small alpha.
_LOG_DELTA_MIN: float = -690.0

# Closer than this to zeta, the density is its value at zeta to double
# precision, and the peak would fall below exp(_LOG_DELTA_MIN).
_AT_ZETA: float = 1e-250

# Fractions of the interval by which an endpoint where log(g) is undefined
# gets moved inside.
_ENDPOINT_NUDGES: Tuple[float, ...] = (1e-12, 1e-9, 1e-6)


@dataclass(frozen=True)
class ZolatarevPdf(Pdf):
    """
    Unit stable density through the Zolatarev representation, with the
    integral split at the peak of the integrand.

    This is the most robust generator of the package and the default one.

    Args:
        eps_quad: relative target accuracy of each piece of the integral.
            A failure of the integrator on a piece is only reported when its
            error estimate exceeds this accuracy on the whole integral.
        eps_bisect: accuracy of the location of the peak.
        alpha_tol: closeness to alpha = 1 or alpha = 2 for the special cases.
        beta_tol: closeness to beta = 0 for the Cauchy special case.
        limit_quad: iteration limit of the integrator.
        limit_bisect: iteration limit of the bisection.
        integrator: the quadrature routine, adaptive by default. A fixed rule
            such as `GaussLegendreQuadrature` is faster but less accurate.

    Examples:

    ```py
    >>> value, err = ZolatarevPdf().scaled_value(0.0, 1.5, 0.0)
    >>> round(value, 6), err
    (0.287353, None)

    ```
    """

    eps_quad: float = DEFAULT_EPS_QUAD
    eps_bisect: float = DEFAULT_EPS_BISECT
    alpha_tol: float = DEFAULT_ALPHA_TOL
    beta_tol: float = DEFAULT_BETA_TOL
    limit_quad: int = DEFAULT_LIMIT_QUAD
    limit_bisect: int = DEFAULT_LIMIT_BISECT
    integrator: Integrator = field(default_factory=AdaptiveQuadrature)

    def scaled_value(self, x: float, alpha: float, beta: float) -> DensityResult:
        # inf and nan are expected on the boundaries of the integration domain.
        with np.errstate(all="ignore"):
            p, err = self._scaled_value(
                np.float64(x), np.float64(alpha), np.float64(beta)
            )
        return float(p), err

    def _scaled_value(self, x, alpha, beta) -> DensityResult:
        if close_to(alpha, 2.0, self.alpha_tol):
            # beta has no effect for alpha = 2
            return gaussian_density(x), None
        if close_to(alpha, 1.0, self.alpha_tol):
            if close_to(beta, 0.0, self.beta_tol):
                return cauchy_density(x), None
            return self._value_alpha_one(x, beta)
        return self._value_alpha_not_one(x, alpha, beta)

    def _value_alpha_one(self, x, beta) -> DensityResult:
        log_gamma = -0.5 * PI * x / beta

        def log_g(theta: float) -> float:
            return (
                np.log1p(2.0 * beta * theta / PI)
                + (0.5 * PI / beta + theta) * np.tan(theta)
                - np.log(np.cos(theta))
                + log_gamma
            )

        p, err = self._integrate_split(log_g, -0.5 * PI, 0.5 * PI)
        return p / (2.0 * abs(beta)), err

    def _value_alpha_not_one(self, x, alpha, beta) -> DensityResult:
        zeta = -beta * np.tan(0.5 * PI * alpha)
        if x < zeta:
            # f(x, alpha, beta) = f(-x, alpha, -beta), and -x > -zeta.
            x, beta, zeta = -x, -beta, -zeta
        eps = np.arctan(-zeta) / alpha

        if x - zeta <= _AT_ZETA:
            p = (
                sp_special.gamma(1.0 + 1.0 / alpha)
                * np.cos(eps)
                / (PI * np.power(1.0 + zeta * zeta, 0.5 / alpha))
            )
            return p, None

        # theta + eps runs over [0, span].
        span = 0.5 * PI + eps
        if not span > self.eps_bisect:
            # Edge of the support (alpha < 1, |beta| = 1)
            return 0.0, None

        # cos(alpha * eps) = 1 / sqrt(1 + zeta^2)
        log_cos_alpha_eps = -0.5 * np.log1p(zeta * zeta)
        exponent = alpha / (alpha - 1.0)
        log_gamma = exponent * np.log(x - zeta)
        # cos(theta) = sin(theta + eps + shift). shift is 0 up to rounding for
        # alpha < 1 and beta = 1, and must not go negative.
        shift = max(0.5 * PI - eps, 0.0)

        def log_g(u: float) -> float:
            delta = np.exp(u)
            cos_theta = np.sin(delta + shift)
            return (
                log_cos_alpha_eps / (alpha - 1.0)
                + exponent * np.log(cos_theta / np.sin(alpha * delta))
                + np.log(np.sin(shift + (1.0 - alpha) * delta))
                - np.log(cos_theta)
                + log_gamma
            )

        # dtheta = exp(u) du
        p, err = self._integrate_split(
            log_g, _LOG_DELTA_MIN, np.log(span), log_weight=_identity
        )
        return alpha * p / (PI * abs(alpha - 1.0) * (x - zeta)), err

    def _integrate_split(
        self,
        log_g: Callable[[float], float],
        a: float,
        b: float,
        log_weight: Optional[Callable[[float], float]] = None,
    ) -> Tuple[float, Optional[ConvergenceError]]:
        """
        Integrates g exp(-g) (times exp(log_weight) if given) over [a, b],
        split at the root of log(g) (the peak of the integrand, where g = 1).

        log(g) is monotone. The side of the peak that starts at a is cut at the
        shoulder, where it carries no mass; the other side is integrated up
        to b since the integrand may decay slowly there.
        """
        if not b - a > self.eps_bisect:
            return 0.0, None

        def integrand(t: float) -> float:
            lw = 0.0 if log_weight is None else log_weight(t)
            return _peaked_integrand(log_g(t), lw)

        a, fa = _defined_endpoint(log_g, a, b)
        b, fb = _defined_endpoint(log_g, b, a)
        peak, err_peak = self._peak(log_g, a, fa, b, fb)
        shoulders = self._shoulders(log_g, a, fa, b, fb)
        left = [s for s in shoulders if s < peak]
        lower = min(left) if left else a
        points = sorted(set([lower, peak, b] + [s for s in shoulders if s > lower]))

        total = 0.0
        pieces = []
        for lo, hi in zip(points[:-1], points[1:]):
            val, abserr, err = self.integrator.integrate(
                integrand, lo, hi, self.eps_quad, self.limit_quad
            )
            total += val
            pieces.append((abserr, err))
        _logger.debug(
            f"Split integral over [{a:g}, {b:g}] at peak={peak:g}, points={points}: {total:g}"
        )
        # A failure on a piece does not matter if the error it leaves is
        # within the accuracy requested for the total.
        tol = self.eps_quad * abs(total)
        errs = [err_peak] + [
            err for abserr, err in pieces if err is not None and abserr > tol
        ]
        return total, ConvergenceError.combine(*errs)

    def _peak(
        self, log_g: Callable[[float], float], a: float, fa: float, b: float, fb: float
    ) -> Tuple[float, Optional[ConvergenceError]]:
        if np.isnan(fa) or np.isnan(fb):
            return 0.5 * (a + b), ConvergenceError(
                f"The integrand is undefined at the ends of [{a:g}, {b:g}]"
            )
        if np.sign(fa) * np.sign(fb) > 0:
            # g - 1 keeps its sign: the peak is on the boundary.
            return (a if abs(fa) < abs(fb) else b), None
        peak, _, err = bisect(log_g, a, b, self.eps_bisect, self.limit_bisect)
        return peak, err

    def _shoulders(
        self, log_g: Callable[[float], float], a: float, fa: float, b: float, fb: float
    ) -> List[float]:
        """
        The points on both sides of the peak where the integrand becomes
        negligible.

        When alpha is close to 1 the peak gets so narrow that the first
        quadrature nodes of each half may all miss it: these extra
        breakpoints bound the region that carries the mass.
        """
        points = []
        for level in _SHOULDER_LOG_G:
            if np.sign(fa - level) * np.sign(fb - level) < 0:
                p, _, _ = bisect(
                    lambda t: log_g(t) - level,
                    a,
                    b,
                    self.eps_bisect,
                    self.limit_bisect,
                )
                points.append(p)
        return points


def _defined_endpoint(
    log_g: Callable[[float], float], t: float, towards: float
) -> Tuple[float, float]:
    """
    t and log(g(t)), where t is moved slightly towards the other end of the
    interval if log(g) is undefined (0 / 0) there.
    """
    value = log_g(t)
    for frac in _ENDPOINT_NUDGES:
        if not np.isnan(value):
            break
        moved = t + (towards - t) * frac
        value = log_g(moved)
        if not np.isnan(value):
            t = moved
    return t, value


def _identity(u: float) -> float:
    return u


def _peaked_integrand(log_g: float, log_weight: float = 0.0) -> float:
    """
    g exp(-g), computed as exp(log(g) - g).

    g = +inf (or an undefined value at the boundary of the domain) counts as 0:
    the exponential always wins.
    """
    if np.isnan(log_g) or np.isposinf(log_g):
        return 0.0
    return float(np.exp(log_g - np.exp(log_g) + log_weight))
