"""
Density and sampling of Levy-stable distributions.

The density is computed by numerical integration (or series expansion) with
one of several interchangeable generators, and samples are drawn with the
Chambers-Mallows-Stuck method.
"""

from ._base import Pdf
from ._errors import LevyStableError, ParameterRangeError, ConvergenceError
from ._numeric import Integrator, AdaptiveQuadrature, GaussLegendreQuadrature
from ._typing import Params, Param
from ._utils import param_convert
from .belov import BelovPdf
from .bergstrom import BergstromPdf
from .distribution import density, pdf, logpdf
from .sampling import sample, gauss_sample, cauchy_sample, levy_sample
from .zolatarev import ZolatarevPdf

__all__ = [
    "Pdf",
    "ZolatarevPdf",
    "BergstromPdf",
    "BelovPdf",
    "Integrator",
    "AdaptiveQuadrature",
    "GaussLegendreQuadrature",
    "LevyStableError",
    "ParameterRangeError",
    "ConvergenceError",
    "Params",
    "Param",
    "density",
    "pdf",
    "logpdf",
    "sample",
    "gauss_sample",
    "cauchy_sample",
    "levy_sample",
    "param_convert",
]
