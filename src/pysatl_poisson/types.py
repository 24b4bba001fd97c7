"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout PySATL Poisson.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution.
    CONTINUOUS : str
        Continuous probability distribution.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """
    Base class for distribution type descriptors.
    """

    __slots__ = ()

    @property
    def features(self) -> Mapping[str, Any]:
        """
        Get the public fields of the descriptor.

        Returns
        -------
        Mapping[str, Any]
            Dictionary of field names to values.
        """
        data: dict[str, Any] = {}

        fields = getattr(self, "__dataclass_fields__", None)
        if fields is not None:
            for name in fields:
                data[name] = getattr(self, name)

        return data


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution type for Euclidean space distributions.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Spatial dimension (e.g., 1 for univariate).
    """

    kind: Kind
    dimension: int


UnivariateDiscrete = EuclideanDistributionType(kind=Kind.DISCRETE, dimension=1)
"""Type for univariate discrete distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

ComplexArray = NDArray[np.complexfloating[Any]]
"""Type alias for complex arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


GenericCharacteristicName: TypeAlias = str
"""Type alias for characteristic names (e.g., 'pmf', 'cdf')."""

ParametrizationName: TypeAlias = str
"""Type alias for parametrization names."""


class CharacteristicName(StrEnum):
    """
    Enumeration of statistical distribution characteristics.

    Names of the distribution functions and moments a family may provide
    through :meth:`ParametricFamilyDistribution.query_method`.
    """

    PMF = "pmf"
    LOG_PMF = "logpmf"
    CDF = "cdf"
    SF = "sf"
    PPF = "ppf"
    ISF = "isf"
    CF = "cf"
    HAZARD = "hazard"
    CHF = "chf"
    MEAN = "mean"
    MODE = "mode"
    MEDIAN = "median"
    VAR = "var"
    STD = "std"
    SKEW = "skewness"
    KURT = "kurtosis"
    KURT_EXCESS = "kurtosis_excess"


class FamilyName(StrEnum):
    POISSON = "Poisson"


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "UnivariateDiscrete",
    "GenericCharacteristicName",
    "ParametrizationName",
    "DistributionType",
    "BoolArray",
    "ComplexArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
