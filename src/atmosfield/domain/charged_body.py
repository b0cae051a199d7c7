# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Charged bodies and the planar Lorentz force.

F = q·E + q·(v × B)

In the plane v × B reduces to the scalar vx·By − vy·Bx. That scalar is
applied along the unit vector perpendicular to the current velocity and
scaled by the body's magnetic susceptibility.

No external dependencies: only stdlib dataclasses/typing + domain imports.
"""
from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from atmosfield.domain.vector import (
    EPSILON,
    ZERO,
    Vector2,
    vec_add,
    vec_cross,
    vec_norm,
    vec_perp,
    vec_scale,
)


@runtime_checkable
class ForceReceiver(Protocol):
    """Body that can accumulate electromagnetic forces."""

    position: Vector2
    velocity: Vector2
    charge: float
    magnetic_susceptibility: float
    plasma_interaction_factor: float
    is_charged: bool

    def apply_force(self, force: Vector2) -> None:
        """Add a force to the body's accumulator."""
        ...


def lorentz_force(
    charge: float,
    velocity: Vector2,
    electric_field: Vector2,
    magnetic_field: Vector2,
    magnetic_susceptibility: float = 1.0,
) -> Vector2:
    """Planar Lorentz force on a point charge.

    Args:
        charge: Electric charge (C).
        velocity: Velocity (m/s).
        electric_field: Net electric field at the body.
        magnetic_field: Net magnetic field at the body.
        magnetic_susceptibility: Scale applied to the magnetic term.

    Returns:
        Force vector (N). Zero for a neutral body; the magnetic term is
        dropped when the body is (nearly) at rest.
    """
    if charge == 0.0:
        return ZERO
    electric = vec_scale(electric_field, charge)
    perp = vec_perp(velocity)
    speed = vec_norm(perp)
    if speed < EPSILON:
        return electric
    magnitude = charge * vec_cross(velocity, magnetic_field) * magnetic_susceptibility
    return vec_add(electric, vec_scale(perp, magnitude / speed))


@dataclass
class ChargedBody:
    """Rigid body state seen by the field engine.

    ``is_charged`` is the capability flag consulted before any
    electromagnetic force is applied; it is fixed at construction.
    Forces accumulate in ``force`` until the integrator clears them.
    """
    mass: float
    position: Vector2
    charge: float = 0.0
    velocity: Vector2 = ZERO
    volume: float = 1.0
    magnetic_susceptibility: float = 1.0
    plasma_interaction_factor: float = 0.5
    is_charged: bool = True
    force: Vector2 = field(default=ZERO)

    def __post_init__(self) -> None:
        if self.mass <= 0:
            raise ValueError(f"mass must be positive, got {self.mass}")
        if self.volume <= 0:
            raise ValueError(f"volume must be positive, got {self.volume}")

    @property
    def density(self) -> float:
        return self.mass / self.volume

    @property
    def is_positively_charged(self) -> bool:
        return self.charge > 0.0

    @property
    def is_negatively_charged(self) -> bool:
        return self.charge < 0.0

    @property
    def is_neutral(self) -> bool:
        return self.charge == 0.0

    def apply_force(self, force: Vector2) -> None:
        self.force = vec_add(self.force, force)

    def clear_forces(self) -> None:
        self.force = ZERO

    def lorentz_force(self, electric_field: Vector2, magnetic_field: Vector2) -> Vector2:
        """Lorentz force for this body's charge, velocity and susceptibility."""
        return lorentz_force(
            self.charge,
            self.velocity,
            electric_field,
            magnetic_field,
            self.magnetic_susceptibility,
        )


def neutral_body(mass: float, position: Vector2, velocity: Vector2 = ZERO) -> ChargedBody:
    """Body that never receives electromagnetic forces."""
    return ChargedBody(
        mass=mass, position=position, velocity=velocity, is_charged=False,
    )
