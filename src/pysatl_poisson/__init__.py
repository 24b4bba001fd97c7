"""
PySATL Poisson
==============

The Poisson distribution as a PySATL parametric family: probability mass,
cumulative distribution and its complement, quantiles, moments, with a
configurable domain-error policy.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .api import *
from .api import __all__ as _api_all
from .errors import *
from .errors import __all__ as _errors_all
from .families import *
from .families import __all__ as _family_all
from .numerics import NumericTraits
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-poisson")
__all__ = [
    "__version__",
    "NumericTraits",
    *_api_all,
    *_errors_all,
    *_family_all,
    *_types_all,
]

del _api_all
del _errors_all
del _family_all
del _types_all
