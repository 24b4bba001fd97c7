"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass, field, replace
from functools import partial
from typing import TYPE_CHECKING

from pysatl_poisson.families.registry import ParametricFamilyRegister
from pysatl_poisson.numerics import DOUBLE, NumericTraits

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any

    from pysatl_poisson.errors import Policy
    from pysatl_poisson.families.parametric_family import ParametricFamily
    from pysatl_poisson.families.parametrizations import Parametrization
    from pysatl_poisson.support import Support
    from pysatl_poisson.types import (
        DistributionType,
        GenericCharacteristicName,
    )


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution:
    """
    A specific distribution instance from a parametric family.

    An immutable value: parameters, working type and policy are fixed at
    construction. Characteristics are evaluated through :meth:`query_method`.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    support : Support or None
        Support of this distribution.
    traits : NumericTraits
        Floating type of the computed characteristics.
    policy : Policy or None
        Error policy; ``None`` defers to the contextual policy at call time.
    """

    family_name: str
    distribution_type: DistributionType
    parameters: Parametrization
    support: Support | None = None
    traits: NumericTraits = field(default=DOUBLE)
    policy: Policy | None = None

    @property
    def family(self) -> ParametricFamily:
        """
        Get the parametric family this distribution belongs to.

        Returns
        -------
        ParametricFamily
            The parametric family of this distribution.
        """
        return ParametricFamilyRegister.get(self.family_name)

    @property
    def base_parameters(self) -> Parametrization:
        """Parameters converted to the family's base parametrization."""
        return self.family.to_base(self.parameters)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, Callable[[Any], Any]]:
        """Every characteristic of the family bound to this distribution."""
        return {name: self.query_method(name) for name in self.family.distr_characteristics}

    def query_method(
        self, characteristic_name: GenericCharacteristicName, *, policy: Policy | None = None
    ) -> Callable[..., Any]:
        """
        Bind a characteristic to this distribution.

        Parameters
        ----------
        characteristic_name : str
            Name of the characteristic, e.g. ``CharacteristicName.CDF``.
        policy : Policy, optional
            Overrides the distribution's policy for the returned callable.

        Returns
        -------
        Callable
            Function of the characteristic's argument.

        Raises
        ------
        KeyError
            If the family does not provide the characteristic.
        """
        func = self.family.characteristic(characteristic_name)
        return partial(
            func,
            self.base_parameters,
            policy=self.policy if policy is None else policy,
            traits=self.traits,
        )

    def calculate_characteristic(
        self,
        characteristic_name: GenericCharacteristicName,
        value: Any = None,
        *,
        policy: Policy | None = None,
    ) -> Any:
        """Evaluate a characteristic at ``value``."""
        return self.query_method(characteristic_name, policy=policy)(value)

    def with_policy(self, policy: Policy | None) -> ParametricFamilyDistribution:
        """Copy of this distribution with another error policy."""
        return replace(self, policy=policy)
