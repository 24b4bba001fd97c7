"""
Domain Errors and Evaluation Policies
=====================================

Every characteristic of the Poisson family validates its arguments before
doing any numeric work. A failed check produces a domain error descriptor
(function name, message template, offending value); the active
:class:`Policy` then decides what happens with it:

- :attr:`ErrorAction.RAISE` raises :class:`DomainError` (default);
- :attr:`ErrorAction.WARN` emits :class:`PoissonDomainWarning` and returns
  :attr:`Policy.sentinel`;
- :attr:`ErrorAction.IGNORE` silently returns :attr:`Policy.sentinel`.

Policies are plain immutable values. They can be attached to a distribution,
passed to a single call, or installed for a block of code with
:func:`error_policy`, which is backed by a :class:`contextvars.ContextVar`
and is therefore local to the current thread or task.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any


class ErrorAction(StrEnum):
    """
    What to do when an argument violates its domain.

    Attributes
    ----------
    RAISE : str
        Raise :class:`DomainError`.
    WARN : str
        Warn with :class:`PoissonDomainWarning` and return the sentinel.
    IGNORE : str
        Return the sentinel without any diagnostics.
    """

    RAISE = "raise"
    WARN = "warn"
    IGNORE = "ignore"


class QuantileRounding(StrEnum):
    """
    How quantiles of the discrete distribution are reported.

    Attributes
    ----------
    REAL : str
        Return the real-valued inverse of the continuous relaxation of the cdf.
    INTEGER_ROUND_UP : str
        Return the smallest integer ``k`` whose cdf reaches the requested
        probability (the left-continuous inverse of the discrete cdf).
    """

    REAL = "real"
    INTEGER_ROUND_UP = "integer_round_up"


class DomainError(ValueError):
    """
    An argument lies outside the domain of the evaluated function.

    Parameters
    ----------
    function : str
        Qualified name of the function that rejected the argument.
    message : str
        Message template with a single ``{!r}`` placeholder for the value.
    value : Any
        The offending value.
    """

    def __init__(self, function: str, message: str, value: Any) -> None:
        self.function = function
        self.message = message
        self.value = value
        super().__init__(f"Error in function {function}: {message.format(value)}")


class PoissonDomainWarning(RuntimeWarning):
    """Warning issued for domain errors under :attr:`ErrorAction.WARN`."""


@dataclass(frozen=True, slots=True)
class Policy:
    """
    Evaluation policy of the Poisson characteristics.

    Parameters
    ----------
    domain_error : ErrorAction, default=ErrorAction.RAISE
        Reaction to invalid arguments.
    sentinel : float, default=nan
        Value returned instead of a result when the error is not raised.
    discrete_quantile : QuantileRounding, default=QuantileRounding.REAL
        Reporting mode of ``ppf``/``isf``.
    """

    domain_error: ErrorAction = ErrorAction.RAISE
    sentinel: float = math.nan
    discrete_quantile: QuantileRounding = QuantileRounding.REAL

    def __post_init__(self) -> None:
        """Coerce plain strings to the enumerations."""
        object.__setattr__(self, "domain_error", ErrorAction(self.domain_error))
        object.__setattr__(self, "discrete_quantile", QuantileRounding(self.discrete_quantile))


DEFAULT_POLICY = Policy()
"""Raise on domain errors, real-valued quantiles."""

_current_policy: ContextVar[Policy] = ContextVar("pysatl_poisson_policy", default=DEFAULT_POLICY)


def get_policy() -> Policy:
    """Return the policy active in the current context."""
    return _current_policy.get()


def resolve_policy(*candidates: Policy | None) -> Policy:
    """
    Pick the first explicitly given policy, falling back to the context.

    Parameters
    ----------
    *candidates : Policy or None
        Policies in decreasing priority (e.g. per call, then per distribution).

    Returns
    -------
    Policy
        The effective policy.
    """
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return get_policy()


@contextmanager
def error_policy(policy: Policy | None = None, **overrides: Any) -> Iterator[Policy]:
    """
    Install a policy for the duration of a ``with`` block.

    Parameters
    ----------
    policy : Policy, optional
        Policy to install. Defaults to the currently active one.
    **overrides : Any
        Fields of :class:`Policy` to replace, e.g. ``domain_error="ignore"``.

    Yields
    ------
    Policy
        The installed policy.
    """
    base = get_policy() if policy is None else policy
    installed = replace(base, **overrides) if overrides else base

    token = _current_policy.set(installed)
    try:
        yield installed
    finally:
        _current_policy.reset(token)


def raise_domain_error(function: str, message: str, value: Any, policy: Policy) -> float:
    """
    Report a domain error according to ``policy``.

    Parameters
    ----------
    function : str
        Qualified name of the function that rejected the argument.
    message : str
        Message template with a single ``{!r}`` placeholder.
    value : Any
        The offending value.
    policy : Policy
        Active policy.

    Returns
    -------
    float
        ``policy.sentinel`` when the policy does not raise.

    Raises
    ------
    DomainError
        If ``policy.domain_error`` is :attr:`ErrorAction.RAISE`.
    """
    error = DomainError(function, message, value)
    if policy.domain_error is ErrorAction.RAISE:
        raise error
    if policy.domain_error is ErrorAction.WARN:
        warnings.warn(str(error), PoissonDomainWarning, stacklevel=3)
    return policy.sentinel


__all__ = [
    "DEFAULT_POLICY",
    "DomainError",
    "ErrorAction",
    "Policy",
    "PoissonDomainWarning",
    "QuantileRounding",
    "error_policy",
    "get_policy",
    "raise_domain_error",
    "resolve_policy",
]
