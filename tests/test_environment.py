# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the environment facade and its assembly from configuration."""
import numpy as np
import pytest

from atmosfield.domain.atmosphere import LayeredAtmosphere, create_standard_atmosphere
from atmosfield.domain.charged_body import ChargedBody, neutral_body
from atmosfield.domain.composite import FieldComposite
from atmosfield.domain.electromagnetism import LightningConfig
from atmosfield.domain.environment import (
    Environment,
    EnvironmentConfig,
    IonosphereConfig,
    build_environment,
)
from atmosfield.domain.fields import FieldKind, FieldType, PlasmaRegion, UniformField
from atmosfield.domain.ionosphere import Ionosphere
from atmosfield.ports import EnvironmentQuery

QUIET = LightningConfig(generation_probability=0.0)


def _plasma_env(field_strength=2.0):
    config = EnvironmentConfig(
        ionosphere=IonosphereConfig(0.0, 1000.0, ionization_level=0.5,
                                    field_strength=field_strength),
        lightning=QUIET,
        standard_fields=False,
        seed=1,
    )
    return build_environment(config)


# ── Assembly ────────────────────────────────────────────────────────

class TestBuildEnvironment:

    def test_default_build(self):
        env = build_environment(EnvironmentConfig(seed=0))
        assert len(env.atmosphere) == 6
        assert len(env.fields) == 3
        assert env.ionosphere is not None
        assert env.ionosphere.lower_boundary == 80_000.0
        assert env.ionosphere.composite is env.fields

    def test_shared_rng(self):
        env = build_environment(EnvironmentConfig(seed=0))
        assert env.ionosphere.rng is env.fields.rng

    def test_without_ionosphere(self):
        env = build_environment(EnvironmentConfig(ionosphere=None, standard_fields=False))
        assert env.ionosphere is None
        assert len(env.fields) == 0
        assert env.ionization_at((0.0, 300_000.0)) == 0.0
        assert env.update(0.1) is None

    def test_seeded_builds_reproducible(self):
        cfg = EnvironmentConfig(lightning=LightningConfig(generation_probability=1.0), seed=4)
        a = build_environment(cfg).update(0.1)
        b = build_environment(cfg).update(0.1)
        assert (a.start, a.strength, a.duration) == (b.start, b.strength, b.duration)

    def test_satisfies_environment_query(self):
        assert isinstance(build_environment(), EnvironmentQuery)


# ── Queries ─────────────────────────────────────────────────────────

class TestEnvironmentQueries:

    @pytest.fixture
    def env(self):
        return build_environment(EnvironmentConfig(lightning=QUIET, seed=0))

    def test_atmosphere_by_height(self, env):
        atm = create_standard_atmosphere()
        assert env.density_at((999.0, 5000.0)) == atm.density_at(5000.0)
        assert env.pressure_at((-5.0, 0.0)) == pytest.approx(101325.0)
        assert env.temperature_at((0.0, 0.0)) == pytest.approx(288.15)
        assert env.viscosity_at((0.0, 20_000.0)) == atm.viscosity_at(20_000.0)

    def test_standard_magnetic_field(self, env):
        assert env.magnetic_field_at((0.0, 0.0)) == pytest.approx((0.0, 50.0))

    def test_electric_includes_barrier(self, env):
        e = env.electric_field_at((0.0, 0.0))
        assert e[1] == pytest.approx(-2_000_000.0 + 10_000.0 / 1e10)

    def test_ionization_at_mid_band(self, env):
        assert env.ionization_at((0.0, 330_000.0)) == pytest.approx(0.5)

    def test_plasma_includes_background_band_field(self, env):
        assert env.plasma_field_at((0.0, 100_000.0)) == pytest.approx((0.5, 0.0))
        assert env.plasma_field_at((0.0, 10.0)) == (0.0, 0.0)

    def test_plasma_includes_composite_and_band_regions(self, env):
        env.fields.add_field(PlasmaRegion(10.0, (0.0, 0.0), radius=100.0))
        env.ionosphere.add_plasma_region(PlasmaRegion(20.0, (0.0, 0.0), radius=100.0))
        assert env.plasma_field_at((50.0, 0.0)) == pytest.approx((15.0, 0.0))

    def test_electric_includes_own_ionosphere_lightning(self):
        band = Ionosphere(80_000.0, 580_000.0, lightning=QUIET, rng=np.random.default_rng(0))
        env = Environment(LayeredAtmosphere(), FieldComposite(), band)
        band.generate_lightning_strike((0.0, 0.0))
        assert env.electric_field_at((10.0, 100.0)) != (0.0, 0.0)


# ── Tick ────────────────────────────────────────────────────────────

class TestEnvironmentUpdate:

    def test_triggered_strike_decays_and_is_pruned(self):
        env = build_environment(EnvironmentConfig(lightning=QUIET, standard_fields=False, seed=0))
        strike = env.trigger_lightning((0.0, 0.0))
        assert env.fields.fields_by_kind(FieldKind.LIGHTNING) == (strike,)
        env.update(2.0)
        assert env.fields.fields_by_kind(FieldKind.LIGHTNING) == ()

    def test_trigger_without_ionosphere(self):
        env = Environment(create_standard_atmosphere(),
                          FieldComposite(rng=np.random.default_rng(2)))
        strike = env.trigger_lightning((50.0, 0.0))
        assert strike.end == (50.0, 0.0)
        assert len(env.fields) == 1

    def test_manual_strikes_use_injected_rng(self):
        def env(seed):
            return Environment(create_standard_atmosphere(), FieldComposite(),
                               rng=np.random.default_rng(seed))

        a = env(8).trigger_lightning((0.0, 0.0))
        b = env(8).trigger_lightning((0.0, 0.0))
        assert (a.start, a.strength, a.duration) == (b.start, b.strength, b.duration)

    def test_rng_falls_back_to_composite(self):
        rng = np.random.default_rng(0)
        env = Environment(LayeredAtmosphere(), FieldComposite(rng=rng))
        assert env.rng is rng

    def test_built_environment_shares_rng(self):
        env = build_environment(EnvironmentConfig(ionosphere=None, seed=5))
        assert env.rng is env.fields.rng

    def test_spawned_strike_visible_same_tick(self):
        env = build_environment(EnvironmentConfig(
            lightning=LightningConfig(generation_probability=1.0),
            standard_fields=False, seed=3,
        ))
        strike = env.update(0.1)
        assert strike is not None
        probe = (strike.end[0] + 5.0, 100.0)
        assert env.electric_field_at(probe) == pytest.approx(strike.field_vector_at(probe))

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            build_environment().update(-0.5)


# ── Forces ──────────────────────────────────────────────────────────

class TestElectromagneticForces:

    def test_plasma_coupling_at_rest(self):
        """Ionization 0.5 at mid-band × factor 0.5 × field 2 × charge 1."""
        env = _plasma_env()
        body = ChargedBody(1.0, (0.0, 500.0), charge=1.0)
        force = env.apply_electromagnetic_forces(body)
        assert force == pytest.approx((0.5, 0.0))
        assert body.force == pytest.approx((0.5, 0.0))

    def test_no_coupling_outside_band(self):
        env = _plasma_env()
        body = ChargedBody(1.0, (0.0, 5000.0), charge=1.0)
        assert env.apply_electromagnetic_forces(body) == pytest.approx((0.0, 0.0))

    def test_lorentz_term(self):
        env = Environment(
            LayeredAtmosphere(),
            FieldComposite([
                UniformField(FieldType.ELECTRIC, 10.0, (0.0, 1.0)),
                UniformField(FieldType.MAGNETIC, 2.0, (0.0, 1.0)),
            ]),
        )
        body = ChargedBody(1.0, (0.0, 0.0), charge=2.0, velocity=(3.0, 0.0))
        assert env.apply_electromagnetic_forces(body) == pytest.approx((0.0, 32.0))

    def test_uncharged_body_untouched(self):
        env = _plasma_env()
        body = neutral_body(1.0, (0.0, 500.0))
        body.charge = 5.0
        assert env.apply_electromagnetic_forces(body) == (0.0, 0.0)
        assert body.force == (0.0, 0.0)
