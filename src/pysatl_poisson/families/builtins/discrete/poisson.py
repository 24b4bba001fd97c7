"""
Poisson distribution family implementation.

Contains the Poisson family with mean and rate-interval parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_poisson.errors import QuantileRounding, resolve_policy
from pysatl_poisson.families.parametric_family import ParametricFamily
from pysatl_poisson.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_poisson.families.registry import ParametricFamilyRegister
from pysatl_poisson.numerics import (
    DOUBLE,
    NumericTraits,
    expm1,
    factorial,
    gamma_p,
    gamma_p_inv_a,
    gamma_q,
    gamma_q_inv_a,
    is_finite,
    log_gamma,
)
from pysatl_poisson.support import IntegerLatticeSupport
from pysatl_poisson.types import (
    CharacteristicName,
    ComplexArray,
    FamilyName,
    NumericArray,
    UnivariateDiscrete,
)
from pysatl_poisson.validation import (
    check_dist_and_k,
    check_dist_and_probability,
    check_mean,
    check_mean_positive,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_poisson.errors import Policy


def _elementwise(
    core: Callable[[float], float], x: Any, traits: NumericTraits
) -> np.floating[Any] | NumericArray:
    """
    Apply a scalar characteristic to a scalar or to every element of an array.

    Scalars give a scalar of the working type, array-likes an array of the
    same shape.
    """
    if np.ndim(x) == 0:
        return traits.cast(core(float(x)))

    values = np.asarray(x, dtype=np.float64)
    result = np.empty(values.shape, dtype=traits.dtype)
    for index, value in np.ndenumerate(values):
        result[index] = core(float(value))
    return cast(NumericArray, result)


def _round_up_quantile(
    k: float, reached: Callable[[int], bool]
) -> float:
    """
    Smallest integer ``j >= 0`` for which ``reached(j)`` holds.

    ``reached`` must be monotone, and ``k`` is the real-valued quantile the
    search starts from; the neighbours are probed to absorb rounding of the
    inversion.
    """
    if math.isinf(k):
        return k
    j = max(math.ceil(k), 0)
    while j > 0 and reached(j - 1):
        j -= 1
    while not reached(j):
        j += 1
    return float(j)


def _mass(mean: float, k: float, traits: NumericTraits) -> float:
    """P(X = k) for an already validated mean and k."""
    if mean == 0:
        return 0.0
    if k == 0:
        return math.exp(-mean)
    if k.is_integer() and k < traits.max_factorial:
        try:
            direct = math.exp(-mean) * mean**k / factorial(int(k), traits)
        except OverflowError:
            direct = math.inf
        if math.isfinite(direct) and direct > 0:
            return direct
    return math.exp(-mean + k * math.log(mean) - log_gamma(k + 1))


def _upper_tail(mean: float, k: float) -> float:
    """P(X > k) for an already validated mean and k."""
    if mean == 0:
        return 1.0
    if k == 0:
        return -expm1(-mean)
    return gamma_p(k + 1, mean)


def configure_poisson_family() -> None:
    """
    Configure and register the Poisson distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.POISSON):
        return

    POISSON_DOC = """
    Poisson distribution.

    The Poisson distribution is a discrete probability distribution of the
    number k of events occurring in a fixed interval, assuming the events
    occur independently with a known mean rate λ.

    Probability mass function:
        P(X = k) = λ^k * exp(-λ) / k!  for k = 0, 1, 2, ...

    Cumulative distribution function:
        P(X ≤ k) = Q(k + 1, λ)

    where Q is the regularized upper incomplete gamma function.

    Because the cdf is evaluated through the incomplete gamma function, pmf
    and cdf accept non-integral k, treating the distribution as continuous in
    k. Callers requiring the strict discrete model must floor (or ceil) k
    themselves before evaluating.

    A zero mean is accepted but degenerate: pmf and cdf are 0 everywhere,
    including k = 0, and the complemented cdf is 1.
    """

    def pmf(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Probability mass function of the Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        k : float or array_like
            Number of events, ``k >= 0``, not necessarily integral.
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        float or NumericArray
            Probabilities P(X = k).

        Notes
        -----
        Small integral ``k`` uses the tabulated factorial; large or
        non-integral ``k`` is evaluated in log space,
        ``exp(-λ + k ln λ - ln Γ(k + 1))``.
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.pmf", mean, k, active)) is not None:
                return error
            return _mass(mean, k, traits)

        return _elementwise(core, k, traits)

    def logpmf(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Natural logarithm of the probability mass function.

        ``-inf`` for a zero mean, consistently with ``pmf``.
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.logpmf", mean, k, active)) is not None:
                return error
            if mean == 0:
                return -math.inf
            if k == 0:
                return -mean
            return -mean + k * math.log(mean) - log_gamma(k + 1)

        return _elementwise(core, k, traits)

    def cdf(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Cumulative distribution function of the Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        k : float or array_like
            Number of events, ``k >= 0``.
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        float or NumericArray
            Probabilities P(X ≤ k) = Q(k + 1, λ).
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.cdf", mean, k, active)) is not None:
                return error
            if mean == 0:
                return 0.0
            if k == 0:
                return math.exp(-mean)
            return gamma_q(k + 1, mean)

        return _elementwise(core, k, traits)

    def sf(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Complemented cumulative distribution function (survival function).

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        k : float or array_like
            Number of events, ``k >= 0``.
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        float or NumericArray
            Probabilities P(X > k) = P(k + 1, λ), computed directly rather
            than as ``1 - cdf``.
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.sf", mean, k, active)) is not None:
                return error
            return _upper_tail(mean, k)

        return _elementwise(core, k, traits)

    def ppf(
        parameters: Parametrization,
        p: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Percent point function (quantile) of the Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        p : float or array_like
            Probability from [0, 1].
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        float or NumericArray
            Quantiles corresponding to probabilities p:
            - For p ≤ exp(-λ): returns 0.0
            - For p = 1: returns inf
            - Otherwise: ``a - 1`` where Q(a, λ) = p, rounded up to an
              integer under ``QuantileRounding.INTEGER_ROUND_UP``

        Raises
        ------
        DomainError
            If p is outside [0, 1] or λ is zero, under a raising policy.
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(p: float) -> float:
            fn = "Poisson.ppf"
            if (error := check_dist_and_probability(fn, mean, p, active)) is not None:
                return error
            if mean == 0 and (error := check_mean_positive(fn, mean, active)) is not None:
                return error
            if p <= math.exp(-mean):
                return 0.0
            k = gamma_q_inv_a(mean, p) - 1
            if active.discrete_quantile is QuantileRounding.INTEGER_ROUND_UP:
                return _round_up_quantile(
                    k, lambda j: (math.exp(-mean) if j == 0 else gamma_q(j + 1, mean)) >= p
                )
            return k

        return _elementwise(core, p, traits)

    def isf(
        parameters: Parametrization,
        q: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Inverse survival function (complemented quantile).

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        q : float or array_like
            Upper tail probability from [0, 1].
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        float or NumericArray
            Quantiles k with P(X > k) = q:
            - For q ≥ 1 - exp(-λ): returns 0.0
            - For q = 0: returns inf
            - Otherwise: ``a - 1`` where P(a, λ) = q

        Raises
        ------
        DomainError
            If q is outside [0, 1] or λ is zero, under a raising policy.
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(q: float) -> float:
            fn = "Poisson.isf"
            if (error := check_dist_and_probability(fn, mean, q, active)) is not None:
                return error
            if mean == 0 and (error := check_mean_positive(fn, mean, active)) is not None:
                return error
            if -q <= expm1(-mean):
                return 0.0
            k = gamma_p_inv_a(mean, q) - 1
            if active.discrete_quantile is QuantileRounding.INTEGER_ROUND_UP:
                return _round_up_quantile(
                    k, lambda j: _upper_tail(mean, j) <= q
                )
            return k

        return _elementwise(core, q, traits)

    def hazard(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """Hazard function P(X = k) / P(X > k); inf once the upper tail underflows."""
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.hazard", mean, k, active)) is not None:
                return error
            tail = _upper_tail(mean, k)
            if tail == 0:
                return math.inf
            return _mass(mean, k, DOUBLE) / tail

        return _elementwise(core, k, traits)

    def chf(
        parameters: Parametrization,
        k: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """Cumulative hazard function -ln P(X > k)."""
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        active = resolve_policy(policy)

        def core(k: float) -> float:
            if (error := check_dist_and_k("Poisson.chf", mean, k, active)) is not None:
                return error
            tail = _upper_tail(mean, k)
            if tail == 0:
                return math.inf
            return -math.log(tail)

        return _elementwise(core, k, traits)

    def char_func(
        parameters: Parametrization,
        t: Any,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """
        Characteristic function of the Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        t : float or array_like
            Points at which to evaluate the characteristic function.
        policy : Policy, optional
            Error policy; contextual policy if omitted.
        traits : NumericTraits
            Working floating type.

        Returns
        -------
        complex or ComplexArray
            exp(λ (exp(i t) - 1)).
        """
        parameters = cast(_Mean, parameters)
        mean = parameters.mean
        complex_type = np.result_type(traits.dtype, np.complex64)

        error = check_mean("Poisson.cf", mean, resolve_policy(policy))
        t_arr = np.asarray(t, dtype=np.float64)
        if error is not None:
            result = np.full(t_arr.shape, error, dtype=complex_type)
        else:
            result = np.exp(mean * np.expm1(1j * t_arr)).astype(complex_type)

        if np.ndim(t_arr) == 0:
            return result[()]
        return cast(ComplexArray, result)

    def mean_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Mean of Poisson distribution."""
        parameters = cast(_Mean, parameters)
        return traits.cast(parameters.mean)

    def mode_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Mode of Poisson distribution, floor(λ)."""
        parameters = cast(_Mean, parameters)
        return traits.cast(np.floor(parameters.mean))

    def median_func(
        parameters: Parametrization,
        _: Any = None,
        *,
        policy: Policy | None = None,
        traits: NumericTraits = DOUBLE,
    ) -> Any:
        """Median of Poisson distribution, the quantile at 0.5."""
        return ppf(parameters, 0.5, policy=policy, traits=traits)

    def var_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Variance of Poisson distribution."""
        parameters = cast(_Mean, parameters)
        return traits.cast(parameters.mean)

    def std_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Standard deviation of Poisson distribution."""
        parameters = cast(_Mean, parameters)
        with np.errstate(invalid="ignore"):
            return traits.cast(np.sqrt(np.float64(parameters.mean)))

    def skew_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Skewness of Poisson distribution, 1 / sqrt(λ)."""
        parameters = cast(_Mean, parameters)
        with np.errstate(divide="ignore", invalid="ignore"):
            return traits.cast(1.0 / np.sqrt(np.float64(parameters.mean)))

    def kurt_func(
        parameters: Parametrization,
        _: Any = None,
        excess: bool = False,
        *,
        traits: NumericTraits = DOUBLE,
        **__: Any,
    ) -> Any:
        """Raw or excess kurtosis of Poisson distribution.

        Parameters
        ----------
        parameters : Parametrization
            Distribution parameters object with fields:
            - mean: float (λ)
        excess : bool
            A value defines if there will be raw or excess kurtosis
            default is False

        Returns
        -------
        float
            Kurtosis value, 3 + 1/λ (raw) or 1/λ (excess)
        """
        parameters = cast(_Mean, parameters)
        with np.errstate(divide="ignore", invalid="ignore"):
            kurtosis_excess = 1.0 / np.float64(parameters.mean)
        if excess:
            return traits.cast(kurtosis_excess)
        return traits.cast(3.0 + kurtosis_excess)

    def kurt_excess_func(
        parameters: Parametrization, _: Any = None, *, traits: NumericTraits = DOUBLE, **__: Any
    ) -> Any:
        """Excess kurtosis of Poisson distribution, 1/λ."""
        return kurt_func(parameters, excess=True, traits=traits)

    def _support(_: Parametrization) -> IntegerLatticeSupport:
        """Support of Poisson distribution"""
        return IntegerLatticeSupport(min_k=0)

    Poisson = ParametricFamily(
        name=FamilyName.POISSON,
        distr_type=UnivariateDiscrete,
        distr_parametrizations=["mean", "rate"],
        distr_characteristics={
            CharacteristicName.PMF: pmf,
            CharacteristicName.LOG_PMF: logpmf,
            CharacteristicName.CDF: cdf,
            CharacteristicName.SF: sf,
            CharacteristicName.PPF: ppf,
            CharacteristicName.ISF: isf,
            CharacteristicName.HAZARD: hazard,
            CharacteristicName.CHF: chf,
            CharacteristicName.CF: char_func,
            CharacteristicName.MEAN: mean_func,
            CharacteristicName.MODE: mode_func,
            CharacteristicName.MEDIAN: median_func,
            CharacteristicName.VAR: var_func,
            CharacteristicName.STD: std_func,
            CharacteristicName.SKEW: skew_func,
            CharacteristicName.KURT: kurt_func,
            CharacteristicName.KURT_EXCESS: kurt_excess_func,
        },
        support_by_parametrization=_support,
    )
    Poisson.__doc__ = POISSON_DOC

    @parametrization(family=Poisson, name="mean")
    class _Mean(Parametrization):
        """
        Mean parametrization of Poisson distribution.

        Parameters
        ----------
        mean : float, default=1.0
            Expected number of events (λ) in the interval
        """

        mean: float = 1.0

        @constraint(description="mean is finite and mean >= 0", parameter="mean")
        def check_mean_non_negative(self) -> bool:
            """Check that the mean is finite and non-negative."""
            return is_finite(self.mean) and self.mean >= 0

    @parametrization(family=Poisson, name="rate")
    class _Rate(Parametrization):
        """
        Rate parametrization of Poisson distribution.

        Parameters
        ----------
        rate : float
            Mean number of events per unit of time
        interval : float, default=1.0
            Length of the observed interval, λ = rate * interval
        """

        rate: float
        interval: float = 1.0

        @constraint(description="rate is finite and rate >= 0", parameter="rate")
        def check_rate_non_negative(self) -> bool:
            """Check that the rate is finite and non-negative."""
            return is_finite(self.rate) and self.rate >= 0

        @constraint(description="interval is finite and interval > 0", parameter="interval")
        def check_interval_positive(self) -> bool:
            """Check that the interval length is finite and positive."""
            return is_finite(self.interval) and self.interval > 0

        def transform_to_base_parametrization(self) -> Parametrization:
            """
            Transform to Mean parametrization.

            Returns
            -------
            Parametrization
                Mean parametrization instance
            """
            return _Mean(mean=self.rate * self.interval)  # type: ignore[call-arg]

    ParametricFamilyRegister.register(Poisson)
