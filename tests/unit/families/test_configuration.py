"""
Tests for Distribution Families Configuration

This module tests the configuration and registration of distribution families
in the global ParametricFamilyRegister.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_poisson.families.configuration import (
    configure_families_register,
    reset_families_register,
)
from pysatl_poisson.families.registry import ParametricFamilyRegister
from pysatl_poisson.types import FamilyName


class TestConfiguration:
    """Test suite for configuration functionality."""

    def setup_method(self):
        """Setup before each test method."""
        self.registry = configure_families_register()

    def test_configure_families_register_returns_registry(self):
        """Test that configure_families_register returns a ParametricFamilyRegister."""
        assert isinstance(self.registry, ParametricFamilyRegister)

    def test_configure_families_register_is_singleton(self):
        """Test that configure_families_register returns the same instance."""
        registry2 = configure_families_register()
        assert self.registry is registry2

    def test_families_registered(self):
        """Test that the Poisson family is registered."""
        assert FamilyName.POISSON in ParametricFamilyRegister.list_registered_families()
        assert ParametricFamilyRegister.contains(FamilyName.POISSON)

    def test_reset_families_register(self):
        """Test that reset_families_register clears the cache."""
        registry1 = configure_families_register()
        reset_families_register()
        assert not ParametricFamilyRegister.contains(FamilyName.POISSON)

        registry2 = configure_families_register()
        assert registry1 is not registry2
        assert ParametricFamilyRegister.contains(FamilyName.POISSON)

    def test_registry_get_family_method(self):
        """Test the get method of ParametricFamilyRegister."""
        poisson_family = self.registry.get(FamilyName.POISSON)
        assert poisson_family.name == FamilyName.POISSON

        with pytest.raises(ValueError):
            self.registry.get("NonExistentFamily")

    def test_duplicate_registration(self):
        """Registering the same family twice is an error."""
        poisson_family = self.registry.get(FamilyName.POISSON)
        with pytest.raises(ValueError, match="already found"):
            ParametricFamilyRegister.register(poisson_family)
