import math
from contextlib import contextmanager
from typing import Tuple

from scipy.stats import levy_stable as sp_levy_stable  # type: ignore

from ._typing import Params, Param


@contextmanager
def set_stable(p: Param):
    """
    Manages the parametrization of scipy's levy_stable distribution.

    Since the parametrization of scipy is at the module level, this function
    provides a way to temporarily change the parametrization of the distribution.
    It is used to obtain reference values from scipy.

    Example:

    ```python
    >>> with set_stable(Params.N0):
    ...     sp_levy_stable.parameterization
    'S0'

    ```
    """
    curr = sp_levy_stable.parameterization
    if p == Params.N0:
        sp_levy_stable.parameterization = "S0"
    elif p == Params.N1:
        sp_levy_stable.parameterization = "S1"
    else:
        raise ValueError(f"Invalid parametrization {p}")
    try:
        yield
    finally:
        sp_levy_stable.parameterization = curr


def param_convert(
    alpha: float,
    beta: float,
    loc: float,
    scale: float,
    param_from: Param,
    param_to: Param,
) -> Tuple[float, float]:
    """
    Shifts the loc and scale of the alpha-stable distribution from
    one parametrization to another.

    Args:
        alpha: The stability parameter of the stable distribution (0-2.0].
        beta: The skewness parameter of the stable distribution.
        loc: The location parameter of the stable distribution.
        scale: The scale parameter of the stable distribution.
        param_from: The initial parametrization of the stable distribution.
        param_to: The requested parametrization

    Returns:
        (loc, scale) in the requested parametrization.

    Example:

    ```python
    >>> param_convert(1.5, 1.0, 0.0, 2.0, Params.N0, Params.N1)  # doctest: +ELLIPSIS
    (2.0..., 2.0)

    ```
    """

    # The scale is the same in N0 and N1, only the location moves (Nolan 2020, Prop 1.1).
    def _shift() -> float:
        if alpha == 1:
            # scale * log(scale) is 0 for scale == 1, and undefined for scale <= 0.
            return beta * 2 / math.pi * scale * math.log(scale)
        return beta * scale * math.tan(math.pi * alpha / 2)

    if param_from == param_to:
        return (loc, scale)
    if param_from == Params.N0 and param_to == Params.N1:
        return (loc - _shift(), scale)
    if param_from == Params.N1 and param_to == Params.N0:
        return (loc + _shift(), scale)
    raise ValueError(f"Invalid parametrizations {param_from} -> {param_to}")
