"""
Poisson Distribution API
========================

Free functions over Poisson distribution values:

>>> from pysatl_poisson import poisson, pdf, cdf, complement, quantile
>>> dist = poisson(4.0)
>>> float(cdf(dist, 0))  # exp(-4)
0.01831563888873418
>>> float(cdf(complement(dist, 0)))  # 1 - exp(-4)
0.9816843611112658

Every function takes the distribution first and, where relevant, the number
of events ``k`` or a probability. The upper tail is requested either through
the ``*_complement`` functions or by wrapping the arguments with
:func:`complement`. An explicit ``policy=`` overrides the distribution's
policy, which in turn overrides the contextual one
(see :func:`pysatl_poisson.errors.error_policy`).

Notes
-----
``pdf``/``cdf`` accept non-integral ``k``: the distribution is evaluated
through the incomplete gamma function, which is continuous in ``k``. Floor
``k`` before the call if strict discrete semantics are required.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, overload

import numpy as np

from pysatl_poisson.families.configuration import configure_families_register
from pysatl_poisson.types import CharacteristicName, FamilyName

if TYPE_CHECKING:
    from typing import Any

    from numpy.typing import DTypeLike

    from pysatl_poisson.errors import Policy
    from pysatl_poisson.families.distribution import ParametricFamilyDistribution


@dataclass(frozen=True, slots=True)
class Complemented:
    """
    A distribution paired with an argument of an upper-tail query.

    Parameters
    ----------
    dist : ParametricFamilyDistribution
        The distribution.
    param : Any
        Number of events for :func:`cdf`, probability for :func:`quantile`.
    """

    dist: ParametricFamilyDistribution
    param: Any


def complement(dist: ParametricFamilyDistribution, param: Any) -> Complemented:
    """Request the upper tail: ``cdf(complement(d, k)) == cdf_complement(d, k)``."""
    return Complemented(dist, param)


def poisson(
    mean: float = 1.0,
    *,
    policy: Policy | None = None,
    dtype: DTypeLike = np.float64,
) -> ParametricFamilyDistribution:
    """
    Create a Poisson distribution.

    Parameters
    ----------
    mean : float, default=1.0
        Expected number of events λ; finite and non-negative.
    policy : Policy, optional
        Error policy attached to the distribution.
    dtype : DTypeLike, default=numpy.float64
        ``float32`` or ``float64``.

    Returns
    -------
    ParametricFamilyDistribution
        The distribution value.

    Raises
    ------
    DomainError
        If ``mean`` is negative or not finite and the policy raises. Under a
        non-raising policy the value is stored as given.
    """
    family = configure_families_register().get(FamilyName.POISSON)
    return family.distribution(mean=mean, policy=policy, dtype=dtype)


def _evaluate(
    dist: ParametricFamilyDistribution,
    characteristic: CharacteristicName,
    value: Any,
    policy: Policy | None,
) -> Any:
    return dist.calculate_characteristic(characteristic, value, policy=policy)


def pdf(dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None) -> Any:
    """Probability of exactly ``k`` events."""
    return _evaluate(dist, CharacteristicName.PMF, k, policy)


pmf = pdf


def logpmf(dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None) -> Any:
    """Natural logarithm of :func:`pdf`."""
    return _evaluate(dist, CharacteristicName.LOG_PMF, k, policy)


@overload
def cdf(dist: Complemented, k: None = None, *, policy: Policy | None = None) -> Any: ...
@overload
def cdf(dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None) -> Any: ...


def cdf(
    dist: ParametricFamilyDistribution | Complemented,
    k: Any = None,
    *,
    policy: Policy | None = None,
) -> Any:
    """Probability of at most ``k`` events, or of more than ``k`` for a complement."""
    if isinstance(dist, Complemented):
        return cdf_complement(dist.dist, dist.param, policy=policy)
    if k is None:
        raise TypeError("cdf() missing required argument 'k'")
    return _evaluate(dist, CharacteristicName.CDF, k, policy)


def cdf_complement(
    dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None
) -> Any:
    """Probability of more than ``k`` events."""
    return _evaluate(dist, CharacteristicName.SF, k, policy)


@overload
def quantile(dist: Complemented, p: None = None, *, policy: Policy | None = None) -> Any: ...
@overload
def quantile(dist: ParametricFamilyDistribution, p: Any, *, policy: Policy | None = None) -> Any: ...


def quantile(
    dist: ParametricFamilyDistribution | Complemented,
    p: Any = None,
    *,
    policy: Policy | None = None,
) -> Any:
    """Number of events at which the cdf reaches ``p`` (upper tail for a complement)."""
    if isinstance(dist, Complemented):
        return quantile_complement(dist.dist, dist.param, policy=policy)
    if p is None:
        raise TypeError("quantile() missing required argument 'p'")
    return _evaluate(dist, CharacteristicName.PPF, p, policy)


def quantile_complement(
    dist: ParametricFamilyDistribution, q: Any, *, policy: Policy | None = None
) -> Any:
    """Number of events beyond which the upper tail probability is ``q``."""
    return _evaluate(dist, CharacteristicName.ISF, q, policy)


def hazard(dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None) -> Any:
    """Hazard P(X = k) / P(X > k); ``inf`` where the upper tail underflows to zero."""
    return _evaluate(dist, CharacteristicName.HAZARD, k, policy)


def chf(dist: ParametricFamilyDistribution, k: Any, *, policy: Policy | None = None) -> Any:
    """Cumulative hazard ``-ln P(X > k)``."""
    return _evaluate(dist, CharacteristicName.CHF, k, policy)


def characteristic_function(
    dist: ParametricFamilyDistribution, t: Any, *, policy: Policy | None = None
) -> Any:
    """Characteristic function ``exp(mean * (exp(i t) - 1))``; validates only the mean."""
    return _evaluate(dist, CharacteristicName.CF, t, policy)


def mean(dist: ParametricFamilyDistribution) -> Any:
    """Expected number of events. Not validated."""
    return _evaluate(dist, CharacteristicName.MEAN, None, None)


def mode(dist: ParametricFamilyDistribution) -> Any:
    """Most probable number of events, ``floor(mean)``. Not validated."""
    return _evaluate(dist, CharacteristicName.MODE, None, None)


def median(dist: ParametricFamilyDistribution, *, policy: Policy | None = None) -> Any:
    """Quantile at one half; rounding follows ``policy.discrete_quantile``."""
    return _evaluate(dist, CharacteristicName.MEDIAN, None, policy)


def variance(dist: ParametricFamilyDistribution) -> Any:
    """Variance, equal to the mean. Not validated."""
    return _evaluate(dist, CharacteristicName.VAR, None, None)


def standard_deviation(dist: ParametricFamilyDistribution) -> Any:
    """Square root of the mean. Not validated."""
    return _evaluate(dist, CharacteristicName.STD, None, None)


def skewness(dist: ParametricFamilyDistribution) -> Any:
    """``1 / sqrt(mean)``. Not validated; a zero mean gives ``inf``."""
    return _evaluate(dist, CharacteristicName.SKEW, None, None)


def kurtosis(dist: ParametricFamilyDistribution) -> Any:
    """``3 + 1 / mean``. Not validated; a zero mean gives ``inf``."""
    return _evaluate(dist, CharacteristicName.KURT, None, None)


def kurtosis_excess(dist: ParametricFamilyDistribution) -> Any:
    """``1 / mean``. Not validated; a zero mean gives ``inf``."""
    return _evaluate(dist, CharacteristicName.KURT_EXCESS, None, None)


def value_range(dist: ParametricFamilyDistribution) -> tuple[float, float]:
    """Permissible values of ``k``: ``(0, largest finite value of the working type)``."""
    return 0.0, dist.traits.max_value


def support_range(dist: ParametricFamilyDistribution) -> tuple[float, float]:
    """Values of ``k`` over which the cdf rises from 0 to 1."""
    return 0.0, dist.traits.max_value


__all__ = [
    "Complemented",
    "cdf",
    "cdf_complement",
    "characteristic_function",
    "chf",
    "complement",
    "hazard",
    "kurtosis",
    "kurtosis_excess",
    "logpmf",
    "mean",
    "median",
    "mode",
    "pdf",
    "pmf",
    "poisson",
    "quantile",
    "quantile_complement",
    "skewness",
    "standard_deviation",
    "support_range",
    "value_range",
    "variance",
]
