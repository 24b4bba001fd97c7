from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings

import pytest

from pysatl_poisson.errors import (
    DEFAULT_POLICY,
    DomainError,
    ErrorAction,
    Policy,
    PoissonDomainWarning,
    QuantileRounding,
    error_policy,
    get_policy,
    raise_domain_error,
    resolve_policy,
)


class TestDomainError:
    def test_message(self):
        error = DomainError("Poisson.pmf", "Mean argument is {!r}, but must be >= 0 !", -1.0)

        assert str(error) == (
            "Error in function Poisson.pmf: Mean argument is -1.0, but must be >= 0 !"
        )
        assert error.function == "Poisson.pmf"
        assert error.value == -1.0

    def test_is_value_error(self):
        assert issubclass(DomainError, ValueError)


class TestPolicy:
    def test_defaults(self):
        policy = Policy()
        assert policy.domain_error is ErrorAction.RAISE
        assert math.isnan(policy.sentinel)
        assert policy.discrete_quantile is QuantileRounding.REAL

    def test_strings_are_coerced(self):
        policy = Policy(domain_error="warn", discrete_quantile="integer_round_up")
        assert policy.domain_error is ErrorAction.WARN
        assert policy.discrete_quantile is QuantileRounding.INTEGER_ROUND_UP

    def test_unknown_action(self):
        with pytest.raises(ValueError):
            Policy(domain_error="explode")

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_POLICY.sentinel = 0.0  # type: ignore[misc]


class TestRaiseDomainError:
    def test_raise(self):
        with pytest.raises(DomainError, match="Error in function f: bad 3"):
            raise_domain_error("f", "bad {!r}", 3, Policy())

    def test_warn(self):
        with pytest.warns(PoissonDomainWarning, match="bad 3"):
            result = raise_domain_error("f", "bad {!r}", 3, Policy(domain_error=ErrorAction.WARN))
        assert math.isnan(result)

    def test_ignore_is_silent(self):
        policy = Policy(domain_error=ErrorAction.IGNORE, sentinel=-7.0)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert raise_domain_error("f", "bad {!r}", 3, policy) == -7.0


class TestContextualPolicy:
    def test_default(self):
        assert get_policy() is DEFAULT_POLICY

    def test_error_policy_installs_and_restores(self):
        ignore = Policy(domain_error=ErrorAction.IGNORE)

        with error_policy(ignore) as installed:
            assert installed is ignore
            assert get_policy() is ignore

        assert get_policy() is DEFAULT_POLICY

    def test_overrides_are_applied_to_active_policy(self):
        with error_policy(domain_error="warn"):
            with error_policy(sentinel=0.0) as inner:
                assert inner.domain_error is ErrorAction.WARN
                assert inner.sentinel == 0.0
            assert math.isnan(get_policy().sentinel)

    def test_restored_after_exception(self):
        with pytest.raises(RuntimeError):
            with error_policy(domain_error="ignore"):
                raise RuntimeError
        assert get_policy() is DEFAULT_POLICY

    def test_resolution_order(self):
        per_call = Policy(sentinel=1.0)
        per_distribution = Policy(sentinel=2.0)

        with error_policy(sentinel=3.0):
            assert resolve_policy(per_call, per_distribution) is per_call
            assert resolve_policy(None, per_distribution) is per_distribution
            assert resolve_policy(None, None).sentinel == 3.0
            assert resolve_policy().sentinel == 3.0
