# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for the rigid-body integrator boundary.

The integrator owns body state and time stepping. It reads atmosphere
and field values through ``EnvironmentQuery`` and hands bodies to the
field engine as ``ForceReceiver`` objects for force application.
"""
from typing import Protocol, runtime_checkable

from atmosfield.domain.charged_body import ForceReceiver
from atmosfield.domain.vector import Vector2

__all__ = ["EnvironmentQuery", "ForceReceiver"]


@runtime_checkable
class EnvironmentQuery(Protocol):
    """Per-tick environment values at a position."""

    def density_at(self, position: Vector2) -> float:
        """Medium density (kg/m³, >= 0)."""
        ...

    def pressure_at(self, position: Vector2) -> float:
        """Medium pressure (Pa, >= 0)."""
        ...

    def temperature_at(self, position: Vector2) -> float:
        """Medium temperature (K, >= 2)."""
        ...

    def viscosity_at(self, position: Vector2) -> float:
        """Dynamic viscosity (Pa·s, > 0)."""
        ...

    def electric_field_at(self, position: Vector2) -> Vector2:
        """Net electric field."""
        ...

    def magnetic_field_at(self, position: Vector2) -> Vector2:
        """Net magnetic field."""
        ...

    def ionization_at(self, position: Vector2) -> float:
        """Ionization fraction in [0, 1]."""
        ...
