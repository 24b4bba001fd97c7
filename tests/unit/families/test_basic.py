from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_poisson.families import ParametricFamily, Parametrization
from pysatl_poisson.types import (
    GenericCharacteristicName,
    UnivariateDiscrete,
)


class TestBaseFamily:
    PMF: GenericCharacteristicName = "pmf"
    CDF: GenericCharacteristicName = "cdf"
    MEAN: GenericCharacteristicName = "mean"

    def make_default_family(
        self,
        distr_characteristics: dict[GenericCharacteristicName, object] | None = None,
    ) -> ParametricFamily:
        if distr_characteristics is None:
            distr_characteristics = {
                self.PMF: lambda p, x, **_: x,
                self.CDF: lambda p, x, **_: x,
                self.MEAN: lambda p, x, **_: p.value,
            }
        fam = ParametricFamily(
            name="Default",
            distr_type=UnivariateDiscrete,
            distr_parametrizations=["base", "alt"],
            distr_characteristics=distr_characteristics,  # type: ignore[arg-type]
        )

        @fam.parametrization(name="base")
        class Base(Parametrization):
            value: float

        @fam.parametrization(name="alt")
        class Alt(Parametrization):
            value: float

            def transform_to_base_parametrization(self) -> Parametrization:
                return Base(value=2 * self.value)  # type: ignore[call-arg]

        return fam
