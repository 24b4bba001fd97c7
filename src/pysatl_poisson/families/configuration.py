"""
Distribution Families Configuration
====================================

This module configures the parametric distribution families of the library:

- :class:`Poisson Family`: Poisson distribution with mean and rate-interval
  parameterizations.

Notes
-----
- All families are registered in the global ParametricFamilyRegister.
- Each family supports multiple parameterizations with automatic conversions.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_poisson.families.builtins import configure_poisson_family
from pysatl_poisson.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.
    """
    configure_poisson_family()
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
