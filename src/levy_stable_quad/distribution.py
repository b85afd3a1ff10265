"""
Density of the Levy-stable distribution.

The density has no closed form in general. It is computed by one of several
interchangeable generators (see `Pdf`), each evaluating the density of the
unit distribution (loc=0, scale=1) in its own way:

- `ZolatarevPdf`: integral representation split at its peak, robust
  everywhere. This is the default.
- `BelovPdf`: Fourier integral with fixed quadrature rules, fast but
  unreliable for small alpha.
- `BergstromPdf`: asymptotic series, only meant for the tails.

This module validates the parameters and performs the affine change of
variables around the generators.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from ._base import DensityResult, Pdf
from ._errors import ParameterRangeError
from ._typing import Param, Params
from ._utils import param_convert
from .zolatarev import ZolatarevPdf

_logger = logging.getLogger(__name__)

# Used by pdf and logpdf when no generator is given.
_DEFAULT_GENERATOR: Pdf = ZolatarevPdf()


def density(
    generator: Pdf,
    x: float,
    alpha: float,
    beta: float,
    loc: float = 0.0,
    scale: float = 1.0,
    param: Param = Params.N0,
) -> DensityResult:
    """
    The probability density function for the Levy-Stable distribution, with
    the error reported by the generator.

    Parameters:

    - generator: the representation used to evaluate the unit density
    - x: the value at which to evaluate the PDF
    - alpha: the alpha parameter of the distribution, in (0, 2]
    - beta: the beta parameter of the distribution, in [-1, 1]
    - loc: the location parameter of the distribution
        (default 0.0, meaning depends on the parametrization)
    - scale: the scale parameter of the distribution (default 1.0, > 0)
    - param: the parametrization of the distribution

    Returns:
    - (value, error): error is None, or a `ConvergenceError` if the generator
        did not reach its target accuracy. The value is still the best estimate.

    Raises:
    - ParameterRangeError if alpha, beta or scale is outside of its domain.

    Examples:

    ```py
    >>> value, err = density(ZolatarevPdf(), 1.0, 2.0, 0.0, loc=1.0, scale=2.0)
    >>> round(value, 6), err
    (0.141047, None)

    ```
    """
    _check_params(alpha, beta, scale)
    loc, scale = param_convert(alpha, beta, loc, scale, param, Params.N0)
    x_unit = (x - loc) / scale
    if math.isnan(x_unit):
        return math.nan, None
    if math.isinf(x_unit):
        return 0.0, None
    val, err = generator.scaled_value(x_unit, alpha, beta)
    return val / scale, err


def pdf(
    x: float,
    alpha: float,
    beta: float,
    loc: float = 0.0,
    scale: float = 1.0,
    param: Param = Params.N0,
    generator: Optional[Pdf] = None,
) -> float:
    """
    The probability density function for the Levy-Stable distribution.

    Same as `density`, but only returns the value. Convergence problems are
    logged as warnings.

    Examples:

    Evaluation of the unit Levy-stable distribution at 0.0, with alpha=1.5, beta=0.0.
    ```py
    >>> pdf(0.0, 1.5, 0.0) # doctest: +ELLIPSIS
    0.28735...
    >>> pdf(0.0, 1.0, 0.0) # doctest: +ELLIPSIS
    0.31830...

    ```
    """
    if generator is None:
        generator = _DEFAULT_GENERATOR
    val, err = density(generator, x, alpha, beta, loc, scale, param)
    if err is not None:
        _logger.warning(
            f"Inaccurate density at x={x} alpha={alpha} beta={beta} loc={loc} scale={scale}: {err}"
        )
    return val


def logpdf(
    x: float,
    alpha: float,
    beta: float,
    loc: float = 0.0,
    scale: float = 1.0,
    param: Param = Params.N0,
    generator: Optional[Pdf] = None,
) -> float:
    """
    The logarithm of the probability density function.

    Parameters: see `pdf`.

    Examples:

    ```py
    >>> logpdf(0.0, 2.0, 0.0) # doctest: +ELLIPSIS
    -1.2655...

    ```
    """
    val = pdf(x, alpha, beta, loc, scale, param, generator)
    if val <= 0:
        return -math.inf
    return math.log(val)


def _check_params(alpha: float, beta: float, scale: float) -> None:
    # Written so that nan fails every check.
    if not 0 < alpha <= 2:
        raise ParameterRangeError(f"alpha ({alpha}) outside allowed range (0, 2]")
    if not -1 <= beta <= 1:
        raise ParameterRangeError(f"beta ({beta}) outside allowed range [-1, 1]")
    if not scale > 0:
        raise ParameterRangeError(f"scale ({scale}) must be positive")
