# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Atmosfield

Simulated environment state for tick-driven rigid-body simulations:
a layered barometric atmosphere (density, pressure, temperature,
viscosity by height) and a 2-D electromagnetic/plasma field engine
(uniform, point-source, lightning and plasma-region sources,
superposition, Lorentz force) with a stochastic ionosphere.
"""

from atmosfield.domain.vector import Vector2
from atmosfield.domain.atmosphere import (
    AtmosphereConstants,
    AtmosphereLayer,
    LayeredAtmosphere,
    Medium,
    create_standard_atmosphere,
    create_troposphere,
    create_stratosphere,
    create_mesosphere,
    create_thermosphere,
    create_exosphere,
    create_firmament,
    create_ionosphere_layer,
    standard_layers,
)
from atmosfield.domain.fields import (
    DischargeKind,
    FieldKind,
    FieldPrimitive,
    FieldType,
    LightningField,
    PlasmaDecay,
    PlasmaRegion,
    PointSourceField,
    UniformField,
)
from atmosfield.domain.charged_body import ChargedBody, lorentz_force, neutral_body
from atmosfield.domain.composite import FieldComposite
from atmosfield.domain.electromagnetism import (
    LightningConfig,
    create_aurora_field,
    create_central_field,
    create_firmament_barrier,
    create_global_field,
    create_lightning_strike,
    setup_standard_model,
)
from atmosfield.domain.ionosphere import Ionosphere
from atmosfield.domain.environment import (
    Environment,
    EnvironmentConfig,
    IonosphereConfig,
    build_environment,
)

__version__ = "0.1.0"
