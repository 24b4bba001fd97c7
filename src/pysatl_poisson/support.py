"""
Supports of discrete distributions.

The Poisson distribution is supported on the non-negative integers. Its
characteristics nevertheless accept real ``k`` (continuous relaxation through
the incomplete gamma function), so membership in :class:`IntegerLatticeSupport`
is informative only and is never enforced by ``pmf`` or ``cdf``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_poisson.types import BoolArray, Number, NumericArray


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


@dataclass(frozen=True, slots=True)
class IntegerLatticeSupport(Support):
    """
    Consecutive integers ``min_k, min_k + 1, ...`` up to an optional ``max_k``.

    Parameters
    ----------
    min_k : int, default=0
        Smallest point of the support.
    max_k : int or None, default=None
        Largest point of the support; ``None`` means unbounded.
    """

    min_k: int = 0
    max_k: int | None = None

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        xf = np.asarray(x, dtype=float)
        with np.errstate(invalid="ignore"):
            mask = np.isfinite(xf) & (np.floor(xf) == xf) & (xf >= self.min_k)
            if self.max_k is not None:
                mask &= xf <= self.max_k

        if np.ndim(xf) == 0:
            return bool(mask)
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))


__all__ = [
    "Support",
    "IntegerLatticeSupport",
]
