# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the standard electromagnetic model and strike construction."""
import numpy as np
import pytest

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
from atmosfield.domain.fields import DischargeKind, FieldKind, FieldType


# ── LightningConfig ─────────────────────────────────────────────────

class TestLightningConfig:

    def test_defaults(self):
        cfg = LightningConfig()
        assert cfg.generation_probability == 0.002
        assert (cfg.min_x, cfg.max_x) == (-10_000.0, 10_000.0)
        assert cfg.strength_range == (8_000.0, 15_000.0)
        assert cfg.duration_range == (0.3, 1.2)

    def test_probability_out_of_range(self):
        with pytest.raises(ValueError):
            LightningConfig(generation_probability=1.5)
        with pytest.raises(ValueError):
            LightningConfig(generation_probability=-0.1)

    def test_inverted_ranges(self):
        with pytest.raises(ValueError):
            LightningConfig(min_x=10.0, max_x=-10.0)
        with pytest.raises(ValueError):
            LightningConfig(strength_range=(10.0, 5.0))

    def test_non_positive_duration(self):
        with pytest.raises(ValueError):
            LightningConfig(duration_range=(0.0, 1.0))


# ── Strike construction ─────────────────────────────────────────────

class TestCreateLightningStrike:

    def test_geometry_within_ranges(self):
        rng = np.random.default_rng(0)
        for _ in range(200):
            strike = create_lightning_strike((500.0, 0.0), rng)
            assert strike.end == (500.0, 0.0)
            assert -500.0 <= strike.start[0] <= 1500.0
            assert 5_000.0 <= strike.start[1] <= 10_000.0
            assert 8_000.0 <= strike.strength <= 15_000.0
            assert 0.3 <= strike.duration <= 1.2
            assert strike.is_active
            assert strike.elapsed_time == 0.0

    def test_cloud_above_elevated_ground(self):
        rng = np.random.default_rng(1)
        strike = create_lightning_strike((0.0, 2_000.0), rng)
        assert strike.start[1] >= 7_000.0

    def test_seeded_reproducible(self):
        a = create_lightning_strike((0.0, 0.0), np.random.default_rng(99))
        b = create_lightning_strike((0.0, 0.0), np.random.default_rng(99))
        assert (a.start, a.strength, a.duration) == (b.start, b.strength, b.duration)

    def test_custom_config(self):
        cfg = LightningConfig(
            cloud_height_range=(100.0, 100.0),
            offset_range=(0.0, 0.0),
            strength_range=(42.0, 42.0),
            duration_range=(2.0, 2.0),
        )
        strike = create_lightning_strike((10.0, 0.0), np.random.default_rng(), cfg)
        assert strike.start == (10.0, 100.0)
        assert strike.strength == 42.0
        assert strike.duration == 2.0


# ── Standard model ──────────────────────────────────────────────────

class TestStandardModel:

    def test_global_field(self):
        field = create_global_field()
        assert field.field_type is FieldType.MAGNETIC
        assert field.field_vector_at((0.0, 0.0)) == pytest.approx((0.0, 50.0))

    def test_central_field(self):
        field = create_central_field()
        assert field.field_type is FieldType.ELECTRIC
        assert field.source == (0.0, -100_000.0)
        assert field.field_strength_at((0.0, 0.0)) == pytest.approx(10_000.0 / 1e10)

    def test_firmament_barrier_points_down(self):
        field = create_firmament_barrier()
        assert field.field_vector_at((0.0, 1e7)) == pytest.approx((0.0, -2_000_000.0))

    def test_setup_installs_three_fields(self):
        composite = FieldComposite()
        setup_standard_model(composite)
        assert len(composite) == 3
        assert len(composite.fields_by_type(FieldType.ELECTRIC)) == 2
        assert len(composite.fields_by_type(FieldType.MAGNETIC)) == 1

    def test_aurora_field(self):
        region = create_aurora_field(np.random.default_rng(5))
        assert region.kind is FieldKind.PLASMA_REGION
        assert region.discharge is DischargeKind.AURORA_EFFECT
        assert -100_000.0 <= region.center[0] <= 100_000.0
        assert 90_000.0 <= region.center[1] <= 120_000.0
        assert region.radius == 20_000.0
        assert region.ionization_level == 0.7
