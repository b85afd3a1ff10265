"""
Random draws from the Levy-stable distribution with the
Chambers-Mallows-Stuck method.

Chambers, J. M., Mallows, C. L., Stuck, B. W. (1976). A method for simulating
stable random variables. JASA 71 (354).

Weron, R. (1996). On the Chambers-Mallows-Stuck method for simulating skewed
stable random variables. Statistics & Probability Letters 28.

Each draw transforms an angle V, uniform on (-pi/2, pi/2), and an independent
W ~ Exp(1). The density is never needed. The randomness comes from an explicit
jax PRNG key, so draws are reproducible.

No range check is performed on the parameters.
"""

from __future__ import annotations

import math
from math import pi as PI
from typing import Sequence

import jax
import jax.numpy as jnp
from jax import Array as JArray

from ._typing import Param, Params
from ._utils import param_convert

Shape = Sequence[int]


def sample(
    alpha: float,
    beta: float,
    prng: JArray,
    loc: float = 0.0,
    scale: float = 1.0,
    shape: Shape = (),
    param: Param = Params.N1,
) -> JArray:
    """
    Generate random samples from the Levy-Stable distribution.

    Args:
        alpha: the alpha parameter of the distribution
        beta: the beta parameter of the distribution
        prng: the pseudo-random number generator key
        loc: the location parameter of the distribution
        scale: the scale parameter of the distribution
        shape: the shape of the output array, a single draw by default
        param: the parametrization of loc. The method natively draws in N1;
            use N0 to draw from the distribution evaluated by `density`.

    Returns:
    - the generated samples

    Examples:

    ```py
    >>> import jax
    >>> prng = jax.random.PRNGKey(1)
    >>> sample(alpha=1.5, beta=0.5, prng=prng, shape=(10,)).shape
    (10,)

    ```
    """
    loc_n1, _ = param_convert(alpha, beta, loc, scale, param, Params.N1)
    if beta == 0.0:
        return _sample_symmetric(alpha, prng, loc_n1, scale, shape)

    k1, k2 = jax.random.split(prng, 2)
    V = _uniform_angle(k1, shape)
    W = _positive_exponential(k2, shape)

    if alpha == 1.0:
        bV = 0.5 * PI + beta * V
        x = (
            bV * jnp.tan(V) - beta * jnp.log(0.5 * PI * W * jnp.cos(V) / bV)
        ) / (0.5 * PI)
        return scale * x + beta * scale * math.log(scale) / (0.5 * PI) + loc_n1

    t = beta * math.tan(0.5 * PI * alpha)
    s = math.pow(1.0 + t * t, 1.0 / (2.0 * alpha))
    b = math.atan(t) / alpha
    x = (
        s
        * jnp.sin(alpha * (V + b))
        * jnp.power(jnp.cos(V - alpha * (V + b)) / W, (1.0 - alpha) / alpha)
        / jnp.power(jnp.cos(V), 1.0 / alpha)
    )
    return scale * x + loc_n1


def gauss_sample(
    prng: JArray, loc: float = 0.0, scale: float = 1.0, shape: Shape = ()
) -> JArray:
    """
    Samples from a gaussian with mean loc and standard deviation scale
    (alpha = 2, beta = 0).
    """
    return _sample_symmetric(2.0, prng, loc, scale / math.sqrt(2.0), shape)


def cauchy_sample(
    prng: JArray, loc: float = 0.0, scale: float = 1.0, shape: Shape = ()
) -> JArray:
    """
    Samples from a Cauchy distribution (alpha = 1, beta = 0).
    """
    return _sample_symmetric(1.0, prng, loc, scale, shape)


def levy_sample(
    prng: JArray, loc: float = 0.0, scale: float = 1.0, shape: Shape = ()
) -> JArray:
    """
    Samples from a Levy distribution (alpha = 0.5, beta = 1).
    """
    return sample(0.5, 1.0, prng, loc, scale, shape)


def _sample_symmetric(
    alpha: float, prng: JArray, loc: float, scale: float, shape: Shape
) -> JArray:
    """
    Samples for beta = 0, with the simpler forms for alpha = 1 and alpha = 2.
    """
    k1, k2 = jax.random.split(prng, 2)
    U = _uniform_angle(k1, shape)
    if alpha == 1.0:
        return scale * jnp.tan(U) + loc

    W = _positive_exponential(k2, shape)
    if alpha == 2.0:
        return 2.0 * jnp.sin(U) * jnp.sqrt(W) * scale + loc

    t = jnp.sin(alpha * U) / jnp.power(jnp.cos(U), 1.0 / alpha)
    s = jnp.power(jnp.cos((1.0 - alpha) * U) / W, (1.0 - alpha) / alpha)
    return scale * t * s + loc


def _uniform_angle(prng: JArray, shape: Shape) -> JArray:
    return (jax.random.uniform(prng, shape=shape) - 0.5) * PI


def _positive_exponential(prng: JArray, shape: Shape) -> JArray:
    """
    Exp(1) draws, where the draws that are exactly 0 get redrawn.
    """
    W = jax.random.exponential(prng, shape=shape)
    while bool(jnp.any(W == 0.0)):
        prng, sub = jax.random.split(prng)
        W = jnp.where(W == 0.0, jax.random.exponential(sub, shape=shape), W)
    return W
