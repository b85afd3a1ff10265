"""
Numerical building blocks used by the density generators.

The actual numerics come from scipy (QUADPACK, bisection) and numpy (Gaussian
rules). This module only gives them a uniform contract: integrators and the
root finder never raise on convergence problems, they return the best value
together with a `ConvergenceError`.
"""

from __future__ import annotations

import abc
import functools
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np
from scipy import integrate as sp_integrate  # type: ignore
from scipy import optimize as sp_optimize  # type: ignore

from ._errors import ConvergenceError

ScalarFn = Callable[[float], float]

# QUADPACK refuses relative tolerances below this value when epsabs == 0.
_MIN_EPSREL: float = 50 * float(np.finfo(np.float64).eps)


class Integrator(abc.ABC):
    """
    Evaluates the integral of a scalar function over a finite interval.
    """

    @abc.abstractmethod
    def integrate(
        self, f: ScalarFn, a: float, b: float, eps: float, limit: int
    ) -> Tuple[float, float, Optional[ConvergenceError]]:
        """
        Returns (value, estimated absolute error, error or None).

        eps is the requested relative accuracy and limit the iteration cap;
        fixed rules are free to ignore both.
        """


@dataclass(frozen=True)
class AdaptiveQuadrature(Integrator):
    """
    Adaptive Gauss-Kronrod (21 points) quadrature with extrapolation:
    QUADPACK's QAGS as exposed by `scipy.integrate.quad`.

    `limit` is the maximum number of subintervals.
    """

    epsabs: float = 0.0

    def integrate(self, f, a, b, eps, limit):
        res = sp_integrate.quad(
            f,
            a,
            b,
            full_output=1,
            epsabs=self.epsabs,
            epsrel=max(eps, _MIN_EPSREL),
            limit=limit,
        )
        value, abserr = res[0], res[1]
        # On failure, quad appends a message to the output tuple.
        if len(res) > 3:
            msg = " ".join(str(res[3]).split())
            return (
                value,
                abserr,
                ConvergenceError(f"Quadrature on [{a:g}, {b:g}] did not converge: {msg}"),
            )
        return value, abserr, None


@dataclass(frozen=True)
class GaussLegendreQuadrature(Integrator):
    """
    Fixed-order Gauss-Legendre rule.

    Much cheaper than `AdaptiveQuadrature` and useful for comparisons, but
    it has no way to detect a failure. The error estimate is the difference
    with the rule of half the order.
    """

    order: int = 64

    def integrate(self, f, a, b, eps, limit):
        value = _apply_rule(f, a, b, *gauss_legendre_rule(self.order))
        coarse = _apply_rule(f, a, b, *gauss_legendre_rule(max(self.order // 2, 1)))
        return value, abs(value - coarse), None


def _apply_rule(
    f: ScalarFn, a: float, b: float, nodes: np.ndarray, weights: np.ndarray
) -> float:
    half = 0.5 * (b - a)
    mid = 0.5 * (a + b)
    ys = np.fromiter((f(mid + half * t) for t in nodes), dtype=np.float64, count=len(nodes))
    return float(half * np.dot(weights, ys))


@functools.lru_cache(maxsize=None)
def gauss_legendre_rule(order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Nodes and weights of the Gauss-Legendre rule on [-1, 1].

    >>> nodes, weights = gauss_legendre_rule(3)
    >>> float(weights.sum())  # doctest: +ELLIPSIS
    2.0...

    """
    nodes, weights = np.polynomial.legendre.leggauss(order)
    return _read_only(nodes), _read_only(weights)


@functools.lru_cache(maxsize=None)
def gauss_laguerre_rule(order: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Nodes and weights of the Gauss-Laguerre rule, for the weight exp(-t) on
    [0, inf).
    """
    nodes, weights = np.polynomial.laguerre.laggauss(order)
    return _read_only(nodes), _read_only(weights)


def _read_only(arr: np.ndarray) -> np.ndarray:
    # The rules are cached and shared by every caller.
    arr.setflags(write=False)
    return arr


def bisect(
    f: ScalarFn, a: float, b: float, tol: float, limit: int
) -> Tuple[float, float, Optional[ConvergenceError]]:
    """
    Finds a root of f in [a, b] by bisection.

    Returns (root, f(root), error or None). If [a, b] does not bracket a root,
    the midpoint of the interval is returned together with an error.

    >>> root, _, err = bisect(lambda t: t * t - 2.0, 0.0, 2.0, 1e-12, 100)
    >>> round(root, 9), err
    (1.414213562, None)

    """
    fa, fb = f(a), f(b)
    if not np.sign(fa) * np.sign(fb) <= 0:
        mid = 0.5 * (a + b)
        return (
            mid,
            f(mid),
            ConvergenceError(
                f"Bisection on [{a:g}, {b:g}] has no sign change (f(a)={fa:g}, f(b)={fb:g})"
            ),
        )
    root, res = sp_optimize.bisect(
        f, a, b, xtol=tol, maxiter=limit, full_output=True, disp=False
    )
    root = float(root)
    if not res.converged:
        return (
            root,
            f(root),
            ConvergenceError(f"Bisection iteration limit exceeded ({limit})"),
        )
    return root, f(root), None
