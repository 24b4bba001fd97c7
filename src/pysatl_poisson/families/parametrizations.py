"""
Parameterization classes and specifications for distribution families.

This module provides the core abstractions for defining different parameterizations
of statistical distributions, including constraints validation and conversion
between parameterization formats.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_poisson.errors import raise_domain_error, resolve_policy
from pysatl_poisson.types import ParametrizationName

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar

    from pysatl_poisson.errors import Policy
    from pysatl_poisson.families.parametric_family import ParametricFamily


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    parameter : str or None, default=None
        Name of the checked field, reported with the offending value.
    """

    description: str
    check: Callable[[Any], bool]
    parameter: str | None = None


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    This class defines the interface for parametrizations, including
    parameter validation and conversion to base parametrization format.
    Instances are frozen dataclasses, so parameter values never change
    after construction.
    """

    # These attributes are set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        fields = getattr(self, "__dataclass_fields__", None)
        if fields:
            return {f: getattr(self, f) for f in fields}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self, function: str | None = None, policy: Policy | None = None) -> bool:
        """
        Validate all constraints for this parametrization.

        Parameters
        ----------
        function : str, optional
            Name reported with the error. Defaults to the class name.
        policy : Policy, optional
            Error policy; the contextual policy is used if omitted.

        Returns
        -------
        bool
            True if every constraint holds. Under a non-raising policy a
            violated constraint is reported and False is returned; the
            parameter values are kept as given.

        Raises
        ------
        DomainError
            If a constraint is violated and the policy raises.
        """
        policy = resolve_policy(policy)
        function = function or f"{type(self).__qualname__}.validate"
        valid = True
        for constraint in self._constraints:
            if constraint.check(self):
                continue
            valid = False
            value = None if constraint.parameter is None else getattr(self, constraint.parameter)
            raise_domain_error(
                function,
                f'Constraint "{constraint.description}" does not hold for {{!r}}',
                value,
                policy,
            )
        return valid

    def transform_to_base_parametrization(self) -> Parametrization:
        """
        Convert this parametrization to the base parametrization.

        Returns
        -------
        Parametrization
            Equivalent parameters in the base parametrization.

        Notes
        -----
        Base implementation returns self. Subclasses should override
        if conversion to a different parametrization is needed.
        """
        return self


P = ParamSpec("P")


def constraint(
    description: str, parameter: str | None = None
) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    parameter : str, optional
        Name of the checked field.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        setattr(wrapper, "__constraint_parameter", parameter)
        return wrapper

    return decorator


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to register a class as a parametrization for a family.

    Parameters
    ----------
    family : ParametricFamily
        Family to register the parametrization with.
    name : str
        Name of the parametrization.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator that registers the parametrization.

    Notes
    -----
    Automatically converts the class to a frozen dataclass if not already one.
    Collects and registers constraint methods marked with @constraint.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        constraints: list[ParametrizationConstraint] = []
        for attr_name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod | classmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(f"@constraint '{attr_name}' must be an instance method")
                continue

            func = attr if callable(attr) and isfunction(attr) else None
            if not func:
                continue
            if getattr(func, "__is_constraint", False):
                constraints.append(
                    ParametrizationConstraint(
                        description=getattr(func, "__constraint_description", func.__name__),
                        check=func,
                        parameter=getattr(func, "__constraint_parameter", None),
                    )
                )
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__family__ = family
        cls.__param_name__ = name
        cls._constraints = _collect_constraints(cls)

        family.register_parametrization(name, cls)
        return cls

    return decorator
