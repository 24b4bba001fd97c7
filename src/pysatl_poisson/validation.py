"""
Argument checks shared by the Poisson characteristics.

Every check returns ``None`` when the argument is valid. Otherwise the
failure is reported through :func:`~pysatl_poisson.errors.raise_domain_error`
and its outcome (the policy sentinel, unless the policy raises) is returned,
so callers follow the pattern::

    if (error := check_dist_and_k(function, mean, k, policy)) is not None:
        return error
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_poisson.errors import raise_domain_error
from pysatl_poisson.numerics import is_finite

if TYPE_CHECKING:
    from pysatl_poisson.errors import Policy


def check_mean(function: str, mean: float, policy: Policy) -> float | None:
    """Mean must be finite and non-negative."""
    if not is_finite(mean) or mean < 0:
        return raise_domain_error(
            function, "Mean argument is {!r}, but must be >= 0 !", mean, policy
        )
    return None


def check_mean_positive(function: str, mean: float, policy: Policy) -> float | None:
    """Mean must be finite and strictly positive."""
    if not is_finite(mean) or mean <= 0:
        return raise_domain_error(
            function, "Mean argument is {!r}, but must be > 0 !", mean, policy
        )
    return None


def check_k(function: str, k: float, policy: Policy) -> float | None:
    """Number of events must be finite and non-negative, not necessarily integral."""
    if not is_finite(k) or k < 0:
        return raise_domain_error(
            function, "Number of events k argument is {!r}, but must be >= 0 !", k, policy
        )
    return None


def check_probability(function: str, p: float, policy: Policy) -> float | None:
    """Probability must be finite and lie in [0, 1]."""
    if not is_finite(p) or p < 0 or p > 1:
        return raise_domain_error(
            function, "Probability argument is {!r}, but must be >= 0 and <= 1 !", p, policy
        )
    return None


def check_dist_and_k(function: str, mean: float, k: float, policy: Policy) -> float | None:
    """Check the distribution first, then the number of events."""
    error = check_mean(function, mean, policy)
    if error is not None:
        return error
    return check_k(function, k, policy)


def check_dist_and_probability(
    function: str, mean: float, p: float, policy: Policy
) -> float | None:
    """Check the distribution first, then the probability."""
    error = check_mean(function, mean, policy)
    if error is not None:
        return error
    return check_probability(function, p, policy)


__all__ = [
    "check_dist_and_k",
    "check_dist_and_probability",
    "check_k",
    "check_mean",
    "check_mean_positive",
    "check_probability",
]
