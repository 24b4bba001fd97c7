"""
Built-in distribution families for PySATL Poisson.

This package contains the implementations of the distribution families
that are available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_poisson.families.builtins.discrete import configure_poisson_family

__all__ = [
    "configure_poisson_family",
]
