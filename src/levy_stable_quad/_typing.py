from typing import Literal


class Params:
    """
    The parametrizations understood by this package:

    - N0: Nolan's "0" parametrization (S0 in scipy). The density is continuous
    in all the parameters, and it is the one used by every density generator.

    - N1: Nolan's "1" parametrization (S1 in scipy, the default there). It is
    the parametrization in which the Chambers-Mallows-Stuck transform produces
    its draws, and the default for sampling.

    The two only differ by a shift of the location parameter,
    see `param_convert`.
    """

    N0: Literal["N0"] = "N0"
    N1: Literal["N1"] = "N1"


Param = Literal["N0", "N1"]
