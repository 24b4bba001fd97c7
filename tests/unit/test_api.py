from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy.stats import poisson as scipy_poisson

import pysatl_poisson as pp
from pysatl_poisson import (
    DomainError,
    ErrorAction,
    Policy,
    PoissonDomainWarning,
    QuantileRounding,
    cdf,
    cdf_complement,
    complement,
    error_policy,
    pdf,
    poisson,
    quantile,
    quantile_complement,
)

IGNORE = Policy(domain_error=ErrorAction.IGNORE)
ROUND_UP = Policy(discrete_quantile=QuantileRounding.INTEGER_ROUND_UP)


class TestConstruction:
    def test_default_mean(self):
        assert pp.mean(poisson()) == 1.0

    def test_mean_is_kept(self):
        dist = poisson(3.5)
        assert pp.mean(dist) == 3.5
        assert dist.parameters.mean == 3.5

    @pytest.mark.parametrize("mean", [-1.0, math.inf, math.nan])
    def test_invalid_mean_raises(self, mean):
        with pytest.raises(DomainError, match="Poisson.distribution"):
            poisson(mean)

    def test_invalid_mean_under_contextual_ignore(self):
        with error_policy(domain_error="ignore"):
            dist = poisson(-1.0)

        assert dist.parameters.mean == -1.0
        # the default policy is back in force outside the block
        with pytest.raises(DomainError):
            pdf(dist, 1)

    @pytest.mark.parametrize("dtype", [np.float16, np.int32, np.complex64])
    def test_unsupported_dtype(self, dtype):
        with pytest.raises(TypeError):
            poisson(1.0, dtype=dtype)

    def test_distributions_are_values(self):
        assert poisson(2.0) == poisson(2.0)
        assert poisson(2.0) != poisson(3.0)


class TestEvaluation:
    def test_documented_example(self):
        dist = poisson(4.0)
        assert cdf(dist, 0) == math.exp(-4.0)
        assert cdf(complement(dist, 0)) == pytest.approx(1 - math.exp(-4.0), rel=1e-15)

    def test_pmf_alias(self):
        assert pp.pmf is pdf

    @pytest.mark.parametrize("mean", [0.3, 2.0, 25.0])
    def test_pmf_is_cdf_increment(self, mean):
        dist = poisson(mean)
        k = np.arange(1.0, 60.0)

        np.testing.assert_allclose(pdf(dist, k), cdf(dist, k) - cdf(dist, k - 1), atol=1e-14)

    @pytest.mark.parametrize("mean", [0.3, 2.0, 25.0])
    def test_cdf_and_complement_sum_to_one(self, mean):
        dist = poisson(mean)
        k = np.array([0.0, 0.5, 1.0, 3.0, 10.0, 40.0])

        np.testing.assert_allclose(cdf(dist, k) + cdf_complement(dist, k), 1.0, rtol=1e-14)

    def test_complement_dispatch(self):
        dist = poisson(6.0)

        assert cdf(complement(dist, 4)) == cdf_complement(dist, 4)
        assert quantile(complement(dist, 0.2)) == quantile_complement(dist, 0.2)

    def test_missing_argument(self):
        dist = poisson(6.0)
        with pytest.raises(TypeError):
            cdf(dist)
        with pytest.raises(TypeError):
            quantile(dist)

    @pytest.mark.parametrize("mean", [0.8, 6.0, 55.0])
    @pytest.mark.parametrize("p", [0.05, 0.5, 0.95])
    def test_rounded_quantile_is_left_continuous_inverse(self, mean, p):
        dist = poisson(mean, policy=ROUND_UP)

        k = quantile(dist, p)

        assert cdf(dist, k) >= p
        if k > 0:
            assert cdf(dist, k - 1) < p

    def test_real_quantile_inverts_cdf(self):
        dist = poisson(6.0)

        k = quantile(dist, 0.8)

        assert not float(k).is_integer()
        assert cdf(dist, k) == pytest.approx(0.8, abs=1e-10)

    def test_moments(self):
        dist = poisson(4.0)

        assert pp.mean(dist) == 4.0
        assert pp.variance(dist) == 4.0
        assert pp.standard_deviation(dist) == 2.0
        assert pp.mode(dist) == 4.0
        assert pp.skewness(dist) == 0.5
        assert pp.kurtosis(dist) == 3.25
        assert pp.kurtosis_excess(dist) == 0.25
        assert pp.median(dist, policy=ROUND_UP) == scipy_poisson.median(4.0)

    def test_tail_functions(self):
        dist = poisson(4.0)

        assert pp.hazard(dist, 2) == pytest.approx(
            scipy_poisson.pmf(2, 4.0) / scipy_poisson.sf(2, 4.0), rel=1e-12
        )
        assert pp.chf(dist, 2) == pytest.approx(-math.log(scipy_poisson.sf(2, 4.0)), rel=1e-12)
        assert pp.logpmf(dist, 2) == pytest.approx(scipy_poisson.logpmf(2, 4.0), rel=1e-12)
        assert pp.characteristic_function(dist, 0.0) == 1.0

    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_ranges(self, dtype):
        dist = poisson(4.0, dtype=dtype)
        largest = float(np.finfo(dtype).max)

        assert pp.value_range(dist) == (0.0, largest)
        assert pp.support_range(dist) == (0.0, largest)


class TestZeroMean:
    def test_degenerate_values(self):
        dist = poisson(0.0)

        assert pdf(dist, 0) == 0.0
        assert cdf(dist, 0) == 0.0
        assert cdf_complement(dist, 0) == 1.0
        assert cdf(complement(dist, 5)) == 1.0

    def test_quantile_is_undefined(self):
        dist = poisson(0.0)

        with pytest.raises(DomainError):
            quantile(dist, 0.5)
        with pytest.raises(DomainError):
            quantile(complement(dist, 0.5))


class TestPolicyResolution:
    def test_call_policy_overrides_distribution_policy(self):
        dist = poisson(-1.0, policy=IGNORE)

        assert math.isnan(pdf(dist, 1))
        with pytest.raises(DomainError, match="Mean argument is -1.0"):
            pdf(dist, 1, policy=Policy())

    def test_distribution_policy_overrides_context(self):
        dist = poisson(2.0, policy=IGNORE)

        with error_policy(domain_error="raise"):
            assert math.isnan(cdf(dist, -1))

    def test_contextual_policy(self):
        dist = poisson(2.0)

        with error_policy(domain_error="ignore", sentinel=-1.0):
            assert pdf(dist, -1) == -1.0
            assert quantile(dist, 1.5) == -1.0

        with error_policy(domain_error=ErrorAction.WARN):
            with pytest.warns(PoissonDomainWarning, match="Poisson.ppf"):
                assert math.isnan(quantile(dist, 1.5))

    def test_contextual_rounding(self):
        dist = poisson(6.0)

        with error_policy(discrete_quantile="integer_round_up"):
            k = quantile(dist, 0.8)

        assert k == scipy_poisson.ppf(0.8, 6.0)

    def test_with_policy(self):
        dist = poisson(2.0)
        relaxed = dist.with_policy(IGNORE)

        assert relaxed.policy is IGNORE
        assert dist.policy is None
        assert math.isnan(cdf(relaxed, -1))

    def test_tail_functions_report_the_sentinel(self):
        dist = poisson(2.0, policy=Policy(domain_error="ignore", sentinel=-1.0))

        assert pp.hazard(dist, -3.0) == -1.0
        assert pp.chf(dist, -3.0) == -1.0
