# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Standard electromagnetic model and lightning strike construction.

Factories for the background fields of the standard world (global
magnetic field, deep central electric source, firmament barrier), the
aurora plasma region, and randomized cloud-to-ground lightning strikes.
All randomness comes from an injected ``numpy.random.Generator``.

External dependency: numpy (random Generator).
"""
from dataclasses import dataclass

import numpy as np

from atmosfield.domain.composite import FieldComposite
from atmosfield.domain.fields import (
    DischargeKind,
    FieldType,
    LightningField,
    PlasmaRegion,
    PointSourceField,
    UniformField,
)
from atmosfield.domain.vector import Vector2


@dataclass(frozen=True)
class LightningConfig:
    """Parameters for randomized lightning generation.

    generation_probability: chance per tick of a spontaneous strike
    min_x, max_x: horizontal range for spontaneous ground points (m)
    ground_level: height of spontaneous ground points (m)
    cloud_height_range: height of the cloud point above the ground point (m)
    offset_range: horizontal offset of the cloud point (m)
    strength_range: initial strike strength
    duration_range: strike lifetime (s)
    """
    generation_probability: float = 0.002
    min_x: float = -10_000.0
    max_x: float = 10_000.0
    ground_level: float = 0.0
    cloud_height_range: tuple[float, float] = (5_000.0, 10_000.0)
    offset_range: tuple[float, float] = (-1_000.0, 1_000.0)
    strength_range: tuple[float, float] = (8_000.0, 15_000.0)
    duration_range: tuple[float, float] = (0.3, 1.2)

    def __post_init__(self) -> None:
        if not 0.0 <= self.generation_probability <= 1.0:
            raise ValueError(
                f"generation_probability must be in [0, 1], "
                f"got {self.generation_probability}"
            )
        if self.min_x > self.max_x:
            raise ValueError(f"min_x ({self.min_x}) exceeds max_x ({self.max_x})")
        for name in ("cloud_height_range", "offset_range", "strength_range", "duration_range"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} is inverted: ({lo}, {hi})")
        if self.duration_range[0] <= 0:
            raise ValueError(
                f"duration_range must be positive, got {self.duration_range}"
            )
        if self.strength_range[0] < 0:
            raise ValueError(
                f"strength_range must be non-negative, got {self.strength_range}"
            )


def _uniform(rng: np.random.Generator, bounds: tuple[float, float]) -> float:
    return float(rng.uniform(bounds[0], bounds[1]))


def create_lightning_strike(
    ground_point: Vector2,
    rng: np.random.Generator,
    config: LightningConfig = LightningConfig(),
) -> LightningField:
    """Cloud-to-ground strike anchored at ``ground_point``.

    The cloud point sits a random height above the ground point with a
    small random horizontal offset. Draw order: height, offset,
    strength, duration.
    """
    height = _uniform(rng, config.cloud_height_range)
    offset = _uniform(rng, config.offset_range)
    strength = _uniform(rng, config.strength_range)
    duration = _uniform(rng, config.duration_range)
    cloud = (ground_point[0] + offset, ground_point[1] + height)
    return LightningField(
        strength=strength,
        start=cloud,
        end=(float(ground_point[0]), float(ground_point[1])),
        duration=duration,
    )


def create_global_field() -> UniformField:
    """Uniform upward magnetic background field."""
    return UniformField(FieldType.MAGNETIC, 50.0, (0.0, 1.0))


def create_central_field() -> PointSourceField:
    """Strong electric point source deep below the surface."""
    return PointSourceField(FieldType.ELECTRIC, 10_000.0, (0.0, -100_000.0))


def create_firmament_barrier() -> UniformField:
    """Very strong downward electric field repelling charges from the dome."""
    return UniformField(FieldType.ELECTRIC, 2_000_000.0, (0.0, -1.0))


def create_aurora_field(rng: np.random.Generator) -> PlasmaRegion:
    """Aurora plasma region at a random spot in the upper atmosphere."""
    x = float(rng.uniform(-100_000.0, 100_000.0))
    y = float(rng.uniform(90_000.0, 120_000.0))
    return PlasmaRegion(
        strength=1000.0,
        center=(x, y),
        radius=20_000.0,
        discharge=DischargeKind.AURORA_EFFECT,
        ionization_level=0.7,
        temperature=3000.0,
    )


def setup_standard_model(composite: FieldComposite) -> None:
    """Install the global, central and firmament fields into a composite."""
    composite.add_field(create_global_field())
    composite.add_field(create_central_field())
    composite.add_field(create_firmament_barrier())
