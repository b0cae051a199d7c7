# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ionosphere band with plasma regions and stochastic lightning.

The band [lower_boundary, upper_boundary] carries a parabolic
ionization profile peaking mid-band:

    t = (h − lower) / thickness,   level = base · 4·t·(1 − t)

Each tick the ionosphere advances its plasma regions and lightning,
prunes expired strikes, and draws one uniform number; a draw below the
generation probability spawns a new cloud-to-ground strike. When the
ionosphere is attached to a FieldComposite new strikes are handed to the
composite, which then owns their lifecycle. Otherwise the ionosphere
keeps them itself.

External dependency: numpy (random Generator).
"""
import logging

import numpy as np

from atmosfield.domain.composite import FieldComposite
from atmosfield.domain.electromagnetism import LightningConfig, create_lightning_strike
from atmosfield.domain.fields import LightningField, PlasmaDecay, PlasmaRegion
from atmosfield.domain.vector import ZERO, Vector2, vec_sum

logger = logging.getLogger(__name__)


class Ionosphere:
    """Electrically active altitude band.

    Args:
        lower_boundary: Bottom of the band (m).
        upper_boundary: Top of the band (m).
        ionization_level: Peak ionization fraction in [0, 1].
        field_strength: Horizontal background field inside the band.
        lightning: Stochastic strike parameters.
        rng: Random source for strike generation and plasma fluctuation.
            None creates an unseeded generator.
        composite: Optional composite that receives generated strikes.
    """

    def __init__(
        self,
        lower_boundary: float,
        upper_boundary: float,
        ionization_level: float = 0.5,
        field_strength: float = 0.5,
        lightning: LightningConfig = LightningConfig(),
        rng: np.random.Generator | None = None,
        composite: FieldComposite | None = None,
    ) -> None:
        if upper_boundary <= lower_boundary:
            raise ValueError(
                f"Ionosphere thickness must be positive: lower={lower_boundary}, "
                f"upper={upper_boundary}"
            )
        if not 0.0 <= ionization_level <= 1.0:
            raise ValueError(
                f"ionization_level must be in [0, 1], got {ionization_level}"
            )
        self.lower_boundary = lower_boundary
        self.upper_boundary = upper_boundary
        self.ionization_level = ionization_level
        self.field_strength = field_strength
        self.lightning = lightning
        self.rng = rng if rng is not None else np.random.default_rng()
        self.composite = composite
        self._plasma_regions: list[PlasmaRegion] = []
        self._lightning_fields: list[LightningField] = []

    @property
    def thickness(self) -> float:
        return self.upper_boundary - self.lower_boundary

    @property
    def plasma_regions(self) -> tuple[PlasmaRegion, ...]:
        return tuple(self._plasma_regions)

    @property
    def lightning_fields(self) -> tuple[LightningField, ...]:
        """Strikes owned by the ionosphere itself (not handed to a composite)."""
        return tuple(self._lightning_fields)

    def add_plasma_region(self, region: PlasmaRegion) -> None:
        self._plasma_regions.append(region)

    def contains_position(self, position: Vector2) -> bool:
        """True iff lower <= y <= lower + thickness."""
        return self.lower_boundary <= position[1] <= self.lower_boundary + self.thickness

    def ionization_level_at(self, height: float) -> float:
        """Parabolic profile: zero at both edges, peak at mid-band."""
        t = (height - self.lower_boundary) / self.thickness
        if t < 0.0 or t > 1.0:
            return 0.0
        return self.ionization_level * 4.0 * t * (1.0 - t)

    def ionization_at(self, position: Vector2) -> float:
        """Band ionization at the position's height, in [0, 1]."""
        return self.ionization_level_at(position[1])

    def field_vector_at(self, position: Vector2) -> Vector2:
        """Horizontal background field inside the band, zero outside."""
        if not self.contains_position(position):
            return ZERO
        return (self.field_strength, 0.0)

    def plasma_field_at(self, position: Vector2) -> Vector2:
        """Net field of the owned plasma regions (linear decay)."""
        return vec_sum(r.field_vector_at(position) for r in self._plasma_regions)

    def plasma_strength_at(self, position: Vector2) -> float:
        """Summed plasma strength using quadratic decay 1 − (d/r)²."""
        return sum(
            r.field_strength_at(position, PlasmaDecay.QUADRATIC)
            for r in self._plasma_regions
        )

    def plasma_ionization_at(self, position: Vector2) -> float:
        """Strongest plasma-region ionization covering the position."""
        return max(
            (r.ionization_at(position) for r in self._plasma_regions),
            default=0.0,
        )

    def lightning_field_at(self, position: Vector2) -> Vector2:
        """Net field of strikes held by the ionosphere."""
        return vec_sum(l.field_vector_at(position) for l in self._lightning_fields)

    def generate_lightning_strike(self, position: Vector2) -> LightningField:
        """Create a strike grounded at ``position`` and hand it off.

        The strike goes to the attached composite if there is one,
        otherwise to the ionosphere's own list.
        """
        strike = create_lightning_strike(position, self.rng, self.lightning)
        if self.composite is not None:
            self.composite.add_field(strike)
        else:
            self._lightning_fields.append(strike)
        return strike

    def update(self, dt: float) -> LightningField | None:
        """Advance one tick.

        Returns:
            The spontaneously generated strike, or None.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        for region in self._plasma_regions:
            region.update(dt, self.rng)
        for strike in self._lightning_fields:
            strike.update(dt)
        self._lightning_fields = [l for l in self._lightning_fields if l.is_active]

        cfg = self.lightning
        if float(self.rng.random()) >= cfg.generation_probability:
            return None
        x = float(self.rng.uniform(cfg.min_x, cfg.max_x))
        strike = self.generate_lightning_strike((x, cfg.ground_level))
        logger.debug(
            "Spontaneous lightning at x=%.1f m: strength=%.1f duration=%.2f s",
            x, strike.strength, strike.duration,
        )
        return strike
