"""
Errors reported by the density generators and the dispatcher.

Invalid parameters are fatal and raised. Convergence problems are not: the
generators return them next to the best value they could compute, and the
caller decides whether the accuracy is acceptable.
"""

from __future__ import annotations

from typing import Optional, Tuple


class LevyStableError(Exception):
    """Base class for all the errors of this package."""


class ParameterRangeError(LevyStableError, ValueError):
    """alpha, beta or scale is outside of its domain."""


class ConvergenceError(LevyStableError):
    """
    An iterative method (quadrature, bisection, series) stopped before reaching
    its target accuracy.

    `causes` holds the individual errors when several of them were merged with
    `combine`.
    """

    def __init__(self, message: str, causes: Tuple["ConvergenceError", ...] = ()):
        super().__init__(message)
        self.causes = causes

    @classmethod
    def combine(cls, *errors: Optional["ConvergenceError"]) -> Optional["ConvergenceError"]:
        """
        Merges several optional errors into one.

        Returns None when there is nothing to report, and the error itself when
        there is only one.

        >>> ConvergenceError.combine(None, None) is None
        True
        >>> e = ConvergenceError.combine(ConvergenceError("a"), None, ConvergenceError("b"))
        >>> str(e), len(e.causes)
        ('a; b', 2)

        """
        errs = tuple(e for e in errors if e is not None)
        if not errs:
            return None
        if len(errs) == 1:
            return errs[0]
        return cls("; ".join(str(e) for e in errs), causes=errs)
