"""
The capability shared by all the density generators, and the closed forms
that every one of them honours.
"""

from __future__ import annotations

import abc
from math import pi as PI
from typing import Optional, Tuple

import numpy as np

from ._errors import ConvergenceError

DensityResult = Tuple[float, Optional[ConvergenceError]]

_SQRT_4PI: float = float(np.sqrt(4.0 * PI))


class Pdf(abc.ABC):
    """
    A generator for the unit Levy-stable density (loc=0, scale=1).

    Implementations hold immutable configuration only, so a single instance
    can be shared and called concurrently.
    """

    @abc.abstractmethod
    def scaled_value(self, x: float, alpha: float, beta: float) -> DensityResult:
        """
        The unit density at x.

        alpha and beta are assumed to be valid. Returns (value, error) where
        error is None or a non-fatal `ConvergenceError`.
        """


def gaussian_density(x: float) -> float:
    """
    The unit density for alpha = 2: a gaussian with variance 2.
    """
    return float(np.exp(-0.25 * x * x) / _SQRT_4PI)


def cauchy_density(x: float) -> float:
    """
    The unit density for alpha = 1, beta = 0.
    """
    return 1.0 / ((1.0 + x * x) * PI)


def close_to(a: float, b: float, tol: float) -> bool:
    """Whether a and b are closer than tol."""
    return abs(a - b) < abs(tol)
