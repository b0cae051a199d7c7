# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Simulation environment facade.

Bundles the layered atmosphere, the field composite and an optional
ionosphere behind the per-tick interface the rigid-body integrator
uses. ``update(dt)`` advances all transient state before any query for
the same tick is answered, so every query within a tick sees one
consistent snapshot.

External dependency: numpy (random Generator).
"""
from dataclasses import dataclass

import numpy as np

from atmosfield.domain.atmosphere import (
    AtmosphereLayer,
    LayeredAtmosphere,
    Medium,
    standard_layers,
)
from atmosfield.domain.charged_body import ForceReceiver, lorentz_force
from atmosfield.domain.composite import FieldComposite
from atmosfield.domain.electromagnetism import (
    LightningConfig,
    create_lightning_strike,
    setup_standard_model,
)
from atmosfield.domain.fields import FieldType, LightningField
from atmosfield.domain.ionosphere import Ionosphere
from atmosfield.domain.vector import ZERO, Vector2, vec_add, vec_scale


@dataclass(frozen=True)
class IonosphereConfig:
    """Geometry and strength of the ionosphere band."""
    lower_boundary: float = 80_000.0
    upper_boundary: float = 580_000.0
    ionization_level: float = 0.5
    field_strength: float = 0.5


@dataclass(frozen=True)
class EnvironmentConfig:
    """Everything needed to assemble an Environment.

    layers: atmosphere layers (any order)
    medium: fallback medium for heights between layers
    ionosphere: band configuration, or None for no ionosphere
    lightning: stochastic strike parameters
    standard_fields: install the global/central/firmament fields
    seed: seed for the shared random generator, None for unseeded
    """
    layers: tuple[AtmosphereLayer, ...] = ()
    medium: Medium = Medium()
    ionosphere: IonosphereConfig | None = IonosphereConfig()
    lightning: LightningConfig = LightningConfig()
    standard_fields: bool = True
    seed: int | None = None


class Environment:
    """Atmosphere + fields + ionosphere, queried by position.

    Positions are (x, y) with y the height above ground in metres.

    Args:
        atmosphere: Layered atmosphere answering the medium queries.
        fields: Field composite. None creates an empty one.
        ionosphere: Optional ionosphere band.
        lightning: Strike parameters for manual strikes without an ionosphere.
        rng: Random source for manual strikes. None reuses the composite's
            generator, then the ionosphere's, and otherwise creates an
            unseeded one.
    """

    def __init__(
        self,
        atmosphere: LayeredAtmosphere,
        fields: FieldComposite | None = None,
        ionosphere: Ionosphere | None = None,
        lightning: LightningConfig = LightningConfig(),
        rng: np.random.Generator | None = None,
    ) -> None:
        self.atmosphere = atmosphere
        self.fields = fields if fields is not None else FieldComposite()
        self.ionosphere = ionosphere
        self.lightning = lightning
        if rng is None:
            rng = self.fields.rng
        if rng is None and ionosphere is not None:
            rng = ionosphere.rng
        self.rng = rng if rng is not None else np.random.default_rng()

    # --- Tick ---

    def update(self, dt: float) -> LightningField | None:
        """Advance fields, then the ionosphere.

        Returns:
            A spontaneously generated strike, or None.
        """
        self.fields.update(dt)
        if self.ionosphere is None:
            return None
        return self.ionosphere.update(dt)

    def trigger_lightning(self, position: Vector2) -> LightningField:
        """Manually strike at a ground position."""
        if self.ionosphere is not None:
            return self.ionosphere.generate_lightning_strike(position)
        strike = create_lightning_strike(position, self.rng, self.lightning)
        self.fields.add_field(strike)
        return strike

    # --- Atmosphere queries ---

    def density_at(self, position: Vector2) -> float:
        return self.atmosphere.density_at(position[1])

    def pressure_at(self, position: Vector2) -> float:
        return self.atmosphere.pressure_at(position[1])

    def temperature_at(self, position: Vector2) -> float:
        return self.atmosphere.temperature_at(position[1])

    def viscosity_at(self, position: Vector2) -> float:
        return self.atmosphere.viscosity_at(position[1])

    # --- Field queries ---

    def electric_field_at(self, position: Vector2) -> Vector2:
        field = self.fields.net_field_vector(position, FieldType.ELECTRIC)
        if self.ionosphere is not None:
            field = vec_add(field, self.ionosphere.lightning_field_at(position))
        return field

    def magnetic_field_at(self, position: Vector2) -> Vector2:
        return self.fields.net_field_vector(position, FieldType.MAGNETIC)

    def plasma_field_at(self, position: Vector2) -> Vector2:
        field = self.fields.net_field_vector(position, FieldType.PLASMA)
        if self.ionosphere is not None:
            field = vec_add(field, self.ionosphere.plasma_field_at(position))
            field = vec_add(field, self.ionosphere.field_vector_at(position))
        return field

    def ionization_at(self, position: Vector2) -> float:
        if self.ionosphere is None:
            return 0.0
        return self.ionosphere.ionization_at(position)

    # --- Forces ---

    def apply_electromagnetic_forces(self, body: ForceReceiver) -> Vector2:
        """Apply Lorentz and plasma-coupling forces to a charged body.

        Inside the ionosphere the plasma field, weighted by ionization
        and the body's plasma interaction factor, acts as an additional
        electric field.

        Returns:
            Total force applied.
        """
        if not body.is_charged:
            return ZERO
        electric = self.electric_field_at(body.position)
        magnetic = self.magnetic_field_at(body.position)
        total = lorentz_force(
            body.charge, body.velocity, electric, magnetic,
            body.magnetic_susceptibility,
        )
        if self.ionosphere is not None and self.ionosphere.contains_position(body.position):
            weight = self.ionization_at(body.position) * body.plasma_interaction_factor
            plasma = vec_scale(self.plasma_field_at(body.position), weight)
            total = vec_add(total, vec_scale(plasma, body.charge))
        body.apply_force(total)
        return total


def build_environment(config: EnvironmentConfig = EnvironmentConfig()) -> Environment:
    """Assemble an Environment from configuration.

    An empty ``layers`` tuple means the standard six-layer model.
    """
    rng = np.random.default_rng(config.seed)
    layers = config.layers or standard_layers()
    atmosphere = LayeredAtmosphere(layers, medium=config.medium)
    fields = FieldComposite(rng=rng)
    if config.standard_fields:
        setup_standard_model(fields)
    ionosphere = None
    if config.ionosphere is not None:
        ionosphere = Ionosphere(
            config.ionosphere.lower_boundary,
            config.ionosphere.upper_boundary,
            ionization_level=config.ionosphere.ionization_level,
            field_strength=config.ionosphere.field_strength,
            lightning=config.lightning,
            rng=rng,
            composite=fields,
        )
    return Environment(atmosphere, fields, ionosphere, lightning=config.lightning, rng=rng)
