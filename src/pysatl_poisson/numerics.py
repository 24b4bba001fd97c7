"""
Numeric Primitives
==================

Floating-point traits and special functions consumed by the Poisson family:

- :class:`NumericTraits` -- per floating type constants (largest exactly
  tabulated factorial, largest finite value, machine epsilon);
- :func:`factorial` -- table lookup of ``n!`` below the overflow ceiling;
- :func:`log_gamma`, :func:`gamma_q`, :func:`gamma_p` -- thin wrappers over
  :mod:`scipy.special`;
- :func:`gamma_q_inv_a`, :func:`gamma_p_inv_a` -- inverses of the regularized
  incomplete gamma functions with respect to the shape parameter, solved
  with :func:`scipy.optimize.brentq`.

Notes
-----
All special functions are evaluated in double precision. ``float32`` traits
only change the factorial ceiling and the type of the reported results.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import numpy as np
from scipy.optimize import brentq
from scipy.special import gammainc, gammaincc, gammaln

if TYPE_CHECKING:
    from collections.abc import Callable

    from numpy.typing import DTypeLike

# Largest n such that n! is finite in the given floating type.
_MAX_FACTORIAL: dict[np.dtype[Any], int] = {
    np.dtype(np.float32): 34,
    np.dtype(np.float64): 170,
}

_MAX_BRACKET_EXPANSIONS = 2048
_SOLVER_MAX_ITERATIONS = 200


@dataclass(frozen=True, slots=True)
class NumericTraits:
    """
    Constants of a floating-point working type.

    Parameters
    ----------
    dtype : numpy.dtype
        The floating type results are reported in.
    max_factorial : int
        Largest ``n`` for which ``n!`` is representable in ``dtype``.
    """

    dtype: np.dtype[Any]
    max_factorial: int

    @classmethod
    def for_dtype(cls, dtype: DTypeLike = np.float64) -> NumericTraits:
        """
        Get traits of a supported floating type.

        Parameters
        ----------
        dtype : DTypeLike, default=numpy.float64
            ``float32`` or ``float64``.

        Returns
        -------
        NumericTraits
            Cached traits instance.

        Raises
        ------
        TypeError
            If the dtype is not a supported floating type.
        """
        return _traits_for(np.dtype(dtype))

    @property
    def max_value(self) -> float:
        """Largest finite value of the type."""
        return float(np.finfo(self.dtype).max)

    @property
    def epsilon(self) -> float:
        """Machine epsilon of the type."""
        return float(np.finfo(self.dtype).eps)

    def cast(self, value: Any) -> np.floating[Any]:
        """Convert a scalar to the working type."""
        return self.dtype.type(value)


@lru_cache(maxsize=None)
def _traits_for(dtype: np.dtype[Any]) -> NumericTraits:
    try:
        max_factorial = _MAX_FACTORIAL[dtype]
    except KeyError as exc:
        supported = ", ".join(str(d) for d in _MAX_FACTORIAL)
        raise TypeError(f"Unsupported floating type {dtype}; expected one of: {supported}") from exc
    return NumericTraits(dtype=dtype, max_factorial=max_factorial)


DOUBLE = NumericTraits.for_dtype(np.float64)
"""Traits of ``float64``, the default working type."""


def is_finite(x: Any) -> bool:
    """True iff ``x`` is a finite real number."""
    return math.isfinite(x)


@lru_cache(maxsize=None)
def _factorial_table(dtype: np.dtype[Any], size: int) -> np.ndarray[Any, Any]:
    table = np.ones(size + 1, dtype=np.float64)
    table[1:] = np.cumprod(np.arange(1, size + 1, dtype=np.float64))
    table = table.astype(dtype)
    table.setflags(write=False)
    return table


def factorial(n: int, traits: NumericTraits = DOUBLE) -> float:
    """
    Tabulated ``n!`` for ``0 <= n <= traits.max_factorial``.

    Raises
    ------
    ValueError
        If ``n`` is outside the table.
    """
    if not 0 <= n <= traits.max_factorial:
        raise ValueError(
            f"{n}! is not representable in {traits.dtype} "
            f"(largest tabulated factorial is {traits.max_factorial}!)"
        )
    return float(_factorial_table(traits.dtype, traits.max_factorial)[n])


def log_gamma(x: float) -> float:
    """Natural logarithm of the gamma function for ``x > 0``."""
    return float(gammaln(x))


def gamma_q(a: float, x: float) -> float:
    """Regularized upper incomplete gamma function ``Γ(a, x) / Γ(a)``."""
    return float(gammaincc(a, x))


def gamma_p(a: float, x: float) -> float:
    """Regularized lower incomplete gamma function ``1 - Q(a, x)``."""
    return float(gammainc(a, x))


def expm1(x: float) -> float:
    """``exp(x) - 1`` accurate near zero."""
    return math.expm1(x)


def _solve_shape(residual: Callable[[float], float]) -> float:
    """
    Find the root of a residual that is increasing in the shape parameter.

    The root is bracketed starting from ``[0.5, 2]`` and expanding the
    bracket geometrically on the side where the sign does not change yet.
    Returns ``inf`` if the residual stays negative up to the largest double.
    """
    lo, hi = 0.5, 2.0
    tiny = float(np.finfo(np.float64).tiny)
    huge = float(np.finfo(np.float64).max)

    for _ in range(_MAX_BRACKET_EXPANSIONS):
        if residual(lo) <= 0 or lo <= tiny:
            break
        hi = lo
        lo /= 2.0

    for _ in range(_MAX_BRACKET_EXPANSIONS):
        if residual(hi) >= 0:
            break
        if hi >= huge / 2.0:
            return math.inf
        lo = hi
        hi *= 2.0

    if residual(lo) == 0:
        return lo
    return float(
        brentq(
            residual,
            lo,
            hi,
            xtol=1e-300,
            rtol=4 * float(np.finfo(np.float64).eps),
            maxiter=_SOLVER_MAX_ITERATIONS,
        )
    )


def gamma_q_inv_a(x: float, q: float) -> float:
    """
    Shape parameter ``a`` such that ``gamma_q(a, x) == q``.

    Parameters
    ----------
    x : float
        Positive argument of the incomplete gamma function.
    q : float
        Target probability in ``[0, 1]``.

    Returns
    -------
    float
        The shape parameter; ``0`` for ``q == 0`` and ``inf`` for ``q == 1``.

    Raises
    ------
    ValueError
        If ``x`` is not positive or ``q`` is outside ``[0, 1]``.
    """
    if not x > 0:
        raise ValueError(f"Argument x must be positive, got {x!r}")
    if not 0 <= q <= 1:
        raise ValueError(f"Probability must be in [0, 1], got {q!r}")
    if q == 0:
        return 0.0
    if q == 1:
        return math.inf
    # Q(a, x) grows with a
    return _solve_shape(lambda a: gamma_q(a, x) - q)


def gamma_p_inv_a(x: float, p: float) -> float:
    """
    Shape parameter ``a`` such that ``gamma_p(a, x) == p``.

    Parameters
    ----------
    x : float
        Positive argument of the incomplete gamma function.
    p : float
        Target probability in ``[0, 1]``.

    Returns
    -------
    float
        The shape parameter; ``inf`` for ``p == 0`` and ``0`` for ``p == 1``.

    Raises
    ------
    ValueError
        If ``x`` is not positive or ``p`` is outside ``[0, 1]``.
    """
    if not x > 0:
        raise ValueError(f"Argument x must be positive, got {x!r}")
    if not 0 <= p <= 1:
        raise ValueError(f"Probability must be in [0, 1], got {p!r}")
    if p == 0:
        return math.inf
    if p == 1:
        return 0.0
    # P(a, x) decreases with a
    return _solve_shape(lambda a: p - gamma_p(a, x))


__all__ = [
    "DOUBLE",
    "NumericTraits",
    "expm1",
    "factorial",
    "gamma_p",
    "gamma_p_inv_a",
    "gamma_q",
    "gamma_q_inv_a",
    "is_finite",
    "log_gamma",
]
