"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions, including support for multiple parameterizations, the table
of analytical characteristics and the factory of distribution values.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from typing import TYPE_CHECKING, dataclass_transform

import numpy as np

from pysatl_poisson.families.distribution import ParametricFamilyDistribution
from pysatl_poisson.numerics import NumericTraits
from pysatl_poisson.types import DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, TypeAlias

    from numpy.typing import DTypeLike

    from pysatl_poisson.errors import Policy
    from pysatl_poisson.families.parametrizations import Parametrization
    from pysatl_poisson.support import Support
    from pysatl_poisson.types import (
        GenericCharacteristicName,
        ParametrizationName,
    )

    Characteristic: TypeAlias = Callable[..., Any]
    SupportResolver: TypeAlias = Callable[[Parametrization], Support | None]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Manages parametrizations, the analytical characteristics (all defined on
    the base parametrization) and provides the factory for distribution
    values.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType
        Type of every distribution of the family.
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is base parametrization).
    distr_characteristics : dict[str, Callable]
        Mapping from characteristic names to functions of the base parameters.
        Every function is called as ``func(parameters, x, policy=..., traits=...)``.
    support_by_parametrization : Callable or None, optional
        Function that returns support for given parameters.
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType,
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[GenericCharacteristicName, Characteristic],
        support_by_parametrization: SupportResolver | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError("At least one parametrization name is required.")

        self._name = name
        self._distr_type = distr_type
        self._support_resolver: SupportResolver = (
            (lambda _params: None)
            if support_by_parametrization is None
            else support_by_parametrization
        )

        # Ordered names; the first one is the base parametrization name
        self.parametrization_names: list[ParametrizationName] = distr_parametrizations
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}
        self.distr_characteristics: dict[GenericCharacteristicName, Characteristic] = dict(
            distr_characteristics
        )

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def distribution_type(self) -> DistributionType:
        """Get the type shared by the family's distributions."""
        return self._distr_type

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Get the base parametrization class.

        Raises
        ------
        ValueError
            If base parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    @property
    def support_resolver(self) -> SupportResolver:
        """Get the support resolver function."""
        return self._support_resolver

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        Raises
        ------
        ValueError
            If name is unknown to the family or already registered.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family {self.name}.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")
        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def to_base(self, parameters: Parametrization) -> Parametrization:
        """
        Convert parameters to the base parametrization.

        Parameters
        ----------
        parameters : Parametrization
            Parameters in any parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in base parametrization.
        """
        if parameters.name == self.base_parametrization_name:
            return parameters
        return parameters.transform_to_base_parametrization()

    def characteristic(self, name: GenericCharacteristicName) -> Characteristic:
        """
        Fetch the analytical function of a characteristic.

        Raises
        ------
        KeyError
            If the family does not provide the characteristic.
        """
        try:
            return self.distr_characteristics[name]
        except KeyError:
            raise KeyError(f"Family {self.name} has no characteristic '{name}'") from None

    def distribution(
        self,
        parametrization_name: str | None = None,
        *,
        policy: Policy | None = None,
        dtype: DTypeLike = np.float64,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (defaults to base).
        policy : Policy, optional
            Error policy attached to the distribution. If omitted, the
            contextual policy is used, both here and at evaluation time.
        dtype : DTypeLike, default=numpy.float64
            Floating type of the computed characteristics.
        **parameters_values
            Parameter values for the distribution.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        KeyError
            If parametrization name is not registered.
        DomainError
            If parameters don't satisfy constraints and the policy raises.
            Otherwise the violation is reported and the values are kept.
        TypeError
            If ``dtype`` is not a supported floating type.
        """
        if parametrization_name is None:
            parametrization_class = self.base
        else:
            parametrization_class = self._parametrizations[parametrization_name]

        traits = NumericTraits.for_dtype(dtype)
        parameters = parametrization_class(**parameters_values)
        parameters.validate(function=f"{self.name}.distribution", policy=policy)
        return ParametricFamilyDistribution(
            family_name=self.name,
            distribution_type=self._distr_type,
            parameters=parameters,
            support=self._support_resolver(parameters),
            traits=traits,
            policy=policy,
        )

    @dataclass_transform()
    def parametrization(
        self, *, name: str
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        Parameters
        ----------
        name : str
            Name of the parametrization.

        Returns
        -------
        Callable[[type[Parametrization]], type[Parametrization]]
            Class decorator for registering parametrizations.
        """
        from pysatl_poisson.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name)

    __call__ = distribution
