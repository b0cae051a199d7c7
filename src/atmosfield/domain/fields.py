# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Field primitives: the closed set of 2-D field sources.

Four variants make up ``FieldPrimitive``:

    UniformField       constant direction × strength everywhere
    PointSourceField   inverse-square radial field from a source point
    LightningField     time-bounded discharge along a segment
    PlasmaRegion       disc of plasma whose direction depends on its
                       discharge kind (corona, arc, lightning, aurora,
                       solar flare, plasma sheet)

Every variant answers ``field_vector_at`` and ``field_strength_at`` without
side effects and advances its temporal state only in ``update(dt, rng)``.
Each class carries a ``kind`` tag so callers dispatch on the tag instead
of inspecting types at runtime.

External dependency: numpy (random Generator for plasma fluctuation).
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

import numpy as np

from atmosfield.domain.vector import (
    EPSILON,
    ZERO,
    Vector2,
    vec_add,
    vec_distance,
    vec_dot,
    vec_from_angle,
    vec_normalize,
    vec_norm,
    vec_perp,
    vec_scale,
    vec_sub,
)


class FieldType(Enum):
    """Physical category a field contributes to."""
    ELECTRIC = "electric"
    MAGNETIC = "magnetic"
    PLASMA = "plasma"


class FieldKind(Enum):
    """Variant tag of a field primitive."""
    UNIFORM = "uniform"
    POINT_SOURCE = "point_source"
    LIGHTNING = "lightning"
    PLASMA_REGION = "plasma_region"


class DischargeKind(Enum):
    """Directional pattern of a plasma region."""
    CORONA = "corona"                # radial outward from center
    ARC = "arc"                      # rotates with the oscillation phase
    LIGHTNING = "lightning"          # fixed vertical, toward the ground
    AURORA_EFFECT = "aurora_effect"  # swirl: bearing + oscillation phase
    SOLAR_FLARE = "solar_flare"      # radial, expands and burns out
    PLASMA_SHEET = "plasma_sheet"    # fixed horizontal, drifts in x


class PlasmaDecay(Enum):
    """Attenuation law inside a plasma region (d = distance / radius)."""
    LINEAR = "linear"        # 1 − d
    QUADRATIC = "quadratic"  # 1 − d²


# Inverse-square decay is clamped below this distance (m).
MIN_DECAY_DISTANCE: float = 0.1


def inverse_square_decay(distance: float) -> float:
    """1 / max(distance, 0.1)²."""
    d = max(distance, MIN_DECAY_DISTANCE)
    return 1.0 / (d * d)


def plasma_decay(normalized_distance: float, law: PlasmaDecay) -> float:
    """Attenuation factor for a normalized distance in [0, 1]."""
    if law is PlasmaDecay.QUADRATIC:
        return 1.0 - normalized_distance * normalized_distance
    return 1.0 - normalized_distance


# --- Long-lived sources ---

@dataclass(frozen=True)
class UniformField:
    """Same vector at every position: direction (normalized) × strength.

    A zero-length direction is replaced by straight up (0, 1).
    """
    field_type: FieldType
    strength: float
    direction: Vector2 = (0.0, 1.0)

    kind: ClassVar[FieldKind] = FieldKind.UNIFORM

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "direction", vec_normalize(self.direction, fallback=(0.0, 1.0)),
        )

    @property
    def is_active(self) -> bool:
        return True

    def field_vector_at(self, position: Vector2) -> Vector2:
        return vec_scale(self.direction, self.strength)

    def field_strength_at(self, position: Vector2) -> float:
        return self.strength

    def update(self, dt: float, rng: np.random.Generator | None = None) -> None:
        pass


@dataclass(frozen=True)
class PointSourceField:
    """Radial field from a source point with inverse-square decay.

    radius: optional radius of influence (m); beyond it the field is
        exactly zero. None means unbounded.
    """
    field_type: FieldType
    strength: float
    source: Vector2
    radius: float | None = None

    kind: ClassVar[FieldKind] = FieldKind.POINT_SOURCE

    def __post_init__(self) -> None:
        if self.radius is not None and self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")

    @property
    def is_active(self) -> bool:
        return True

    def _outside(self, distance: float) -> bool:
        return self.radius is not None and distance > self.radius

    def field_vector_at(self, position: Vector2) -> Vector2:
        offset = vec_sub(position, self.source)
        distance = vec_norm(offset)
        if distance < EPSILON or self._outside(distance):
            return ZERO
        magnitude = self.strength * inverse_square_decay(distance)
        return vec_scale(offset, magnitude / distance)

    def field_strength_at(self, position: Vector2) -> float:
        distance = vec_distance(position, self.source)
        if self._outside(distance):
            return 0.0
        return self.strength * inverse_square_decay(distance)

    def update(self, dt: float, rng: np.random.Generator | None = None) -> None:
        pass


# --- Transient discharge ---

@dataclass
class LightningField:
    """Electric discharge along the segment start → end.

    Strength decays quadratically over the strike's lifetime:

        strength = initial_strength · max(0, 1 − elapsed / duration)²

    Created (elapsed = 0) → Active (elapsed < duration) → Expired
    (elapsed >= duration, strength = 0). The transition is one-way.
    """
    strength: float
    start: Vector2
    end: Vector2
    duration: float
    elapsed_time: float = field(default=0.0, init=False)
    initial_strength: float = field(init=False)

    kind: ClassVar[FieldKind] = FieldKind.LIGHTNING
    field_type: ClassVar[FieldType] = FieldType.ELECTRIC

    def __post_init__(self) -> None:
        if self.duration <= 0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if self.strength < 0:
            raise ValueError(f"strength must be non-negative, got {self.strength}")
        self.initial_strength = self.strength

    @property
    def is_active(self) -> bool:
        return self.elapsed_time < self.duration

    @property
    def remaining_ratio(self) -> float:
        return max(0.0, 1.0 - self.elapsed_time / self.duration)

    def update(self, dt: float, rng: np.random.Generator | None = None) -> None:
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        self.elapsed_time += dt
        if self.is_active:
            self.strength = self.initial_strength * self.remaining_ratio ** 2
        else:
            self.strength = 0.0

    def _closest_point(self, position: Vector2) -> tuple[Vector2, Vector2 | None]:
        """Closest point on the bolt and the bolt's unit axis.

        The axis is None for a degenerate (zero-length) bolt.
        """
        bolt = vec_sub(self.end, self.start)
        length = vec_norm(bolt)
        if length < EPSILON:
            return self.start, None
        axis = vec_scale(bolt, 1.0 / length)
        projection = vec_dot(vec_sub(position, self.start), axis)
        projection = max(0.0, min(projection, length))
        return vec_add(self.start, vec_scale(axis, projection)), axis

    def field_vector_at(self, position: Vector2) -> Vector2:
        if not self.is_active:
            return ZERO
        closest, axis = self._closest_point(position)
        distance = vec_distance(position, closest)
        decay = inverse_square_decay(distance)
        if axis is None:
            # Degenerate bolt behaves as a point source at start.
            if distance < EPSILON:
                return ZERO
            offset = vec_sub(position, self.start)
            return vec_scale(offset, self.strength * decay / distance)
        return vec_scale(vec_perp(axis), self.strength * decay)

    def field_strength_at(self, position: Vector2) -> float:
        if not self.is_active:
            return 0.0
        closest, _ = self._closest_point(position)
        return self.strength * inverse_square_decay(vec_distance(position, closest))


# --- Plasma ---

@dataclass(frozen=True)
class _PlasmaDynamics:
    """Rates and bounds governing plasma evolution."""
    ANGULAR_RATE: float = 2.0              # rad/s, oscillation phase advance
    FLUCTUATION: float = 0.1               # max fractional strength change per second
    STRENGTH_BAND: float = 0.1             # strength stays within ±10% of its base
    IONIZATION_MIN: float = 0.1
    IONIZATION_MAX: float = 0.9
    IONIZATION_DRIFT: float = 0.01         # per second, sinusoidal
    IONIZATION_DRIFT_FREQ: float = 0.5     # rad/s
    TEMPERATURE_MIN: float = 1000.0        # K
    TEMPERATURE_MAX: float = 20000.0       # K
    TEMPERATURE_DRIFT: float = 50.0        # K per second, sinusoidal
    TEMPERATURE_DRIFT_FREQ: float = 0.3    # rad/s
    IONIZATION_REFERENCE_T: float = 10000.0  # K, full thermal ionization
    FLARE_EXPANSION: float = 10.0          # m/s radius growth
    FLARE_BURN_RATE: float = 0.1           # strength lost per second
    SHEET_DRIFT: float = 10.0              # m/s along +x


PlasmaDynamics: _PlasmaDynamics = _PlasmaDynamics()

_TWO_PI = 2.0 * math.pi


@dataclass
class PlasmaRegion:
    """Disc of plasma centered at ``center`` with radius ``radius``.

    Inside the disc the field magnitude is strength × decay, where decay
    is linear (1 − d/r) by default; quadratic (1 − (d/r)²) is available
    per region or per query. Outside the disc the field is zero.

    duration: optional lifetime (s); None means indefinite.
    """
    strength: float
    center: Vector2
    radius: float = 1000.0
    discharge: DischargeKind = DischargeKind.CORONA
    ionization_level: float = 0.5
    temperature: float = 5000.0
    decay: PlasmaDecay = PlasmaDecay.LINEAR
    duration: float | None = None
    oscillation_phase: float = 0.0
    elapsed_time: float = 0.0
    active: bool = True
    base_strength: float = field(init=False)

    kind: ClassVar[FieldKind] = FieldKind.PLASMA_REGION
    field_type: ClassVar[FieldType] = FieldType.PLASMA

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"radius must be positive, got {self.radius}")
        if self.duration is not None and self.duration <= 0:
            raise ValueError(f"duration must be positive, got {self.duration}")
        if not 0.0 <= self.ionization_level <= 1.0:
            raise ValueError(
                f"ionization_level must be in [0, 1], got {self.ionization_level}"
            )
        self.base_strength = self.strength

    @property
    def is_active(self) -> bool:
        return self.active

    def _direction(self, offset: Vector2, distance: float) -> Vector2:
        kind = self.discharge
        if kind is DischargeKind.CORONA or kind is DischargeKind.SOLAR_FLARE:
            if distance < EPSILON:
                return ZERO
            return vec_scale(offset, 1.0 / distance)
        if kind is DischargeKind.ARC:
            return vec_from_angle(self.oscillation_phase)
        if kind is DischargeKind.LIGHTNING:
            return (0.0, -1.0)
        if kind is DischargeKind.AURORA_EFFECT:
            bearing = math.atan2(offset[1], offset[0])
            return vec_from_angle(bearing + self.oscillation_phase)
        if kind is DischargeKind.PLASMA_SHEET:
            return (1.0, 0.0)
        raise ValueError(f"Unknown discharge kind: {kind}")

    def _attenuation(self, position: Vector2, law: PlasmaDecay | None) -> float | None:
        """Decay factor at position, or None when outside the disc."""
        distance = vec_distance(position, self.center)
        if distance > self.radius:
            return None
        return plasma_decay(distance / self.radius, law or self.decay)

    def field_vector_at(self, position: Vector2, decay: PlasmaDecay | None = None) -> Vector2:
        if not self.active:
            return ZERO
        attenuation = self._attenuation(position, decay)
        if attenuation is None:
            return ZERO
        offset = vec_sub(position, self.center)
        direction = self._direction(offset, vec_norm(offset))
        return vec_scale(direction, self.strength * attenuation)

    def field_strength_at(self, position: Vector2, decay: PlasmaDecay | None = None) -> float:
        if not self.active:
            return 0.0
        attenuation = self._attenuation(position, decay)
        if attenuation is None:
            return 0.0
        return self.strength * attenuation

    def ionization_at(self, position: Vector2) -> float:
        """ionization_level × (1 − d/r) × min(T / 10000 K, 1); zero outside."""
        distance = vec_distance(position, self.center)
        if distance > self.radius:
            return 0.0
        thermal = min(self.temperature / PlasmaDynamics.IONIZATION_REFERENCE_T, 1.0)
        return self.ionization_level * (1.0 - distance / self.radius) * thermal

    def update(self, dt: float, rng: np.random.Generator | None = None) -> None:
        """Advance phase, lifetime, strength and thermal state by dt seconds.

        Strength fluctuation needs ``rng``; without one the strength is
        left unchanged so the update stays deterministic.
        """
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if not self.active:
            return
        pd = PlasmaDynamics
        self.elapsed_time += dt
        if self.duration is not None and self.elapsed_time >= self.duration:
            self.active = False

        self.oscillation_phase = (self.oscillation_phase + pd.ANGULAR_RATE * dt) % _TWO_PI

        if self.discharge is DischargeKind.SOLAR_FLARE:
            self.radius += pd.FLARE_EXPANSION * dt
            self.strength -= pd.FLARE_BURN_RATE * dt
            if self.strength <= 0.0:
                self.strength = 0.0
                self.active = False
        elif self.discharge is DischargeKind.PLASMA_SHEET:
            self.center = (self.center[0] + pd.SHEET_DRIFT * dt, self.center[1])

        if rng is not None and self.discharge is not DischargeKind.SOLAR_FLARE:
            fluctuation = float(rng.uniform(-pd.FLUCTUATION, pd.FLUCTUATION))
            self.strength *= 1.0 + fluctuation * dt
            lo = self.base_strength * (1.0 - pd.STRENGTH_BAND)
            hi = self.base_strength * (1.0 + pd.STRENGTH_BAND)
            self.strength = min(max(self.strength, lo), hi)

        t = self.elapsed_time
        self.ionization_level += (
            pd.IONIZATION_DRIFT * math.sin(pd.IONIZATION_DRIFT_FREQ * t) * dt
        )
        self.ionization_level = min(max(self.ionization_level, pd.IONIZATION_MIN), pd.IONIZATION_MAX)
        self.temperature += pd.TEMPERATURE_DRIFT * math.sin(pd.TEMPERATURE_DRIFT_FREQ * t) * dt
        self.temperature = min(max(self.temperature, pd.TEMPERATURE_MIN), pd.TEMPERATURE_MAX)


FieldPrimitive = Union[UniformField, PointSourceField, LightningField, PlasmaRegion]
