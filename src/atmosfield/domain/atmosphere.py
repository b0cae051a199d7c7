# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Layered barometric atmosphere.

Each AtmosphereLayer is a closed-form barometric model for one altitude
band: linear temperature lapse, barometric pressure, ideal-gas density
and Sutherland viscosity. LayeredAtmosphere stacks layers, resolves a
height to a layer and falls back to the standard sea-level medium for
heights that land in a gap between non-contiguous layers.

No external dependencies: only stdlib math/dataclasses/logging.
"""
import bisect
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _AtmosphereConstants:
    """Physical constants and standard-medium fallback values."""
    G: float = 9.8                        # m/s², gravity used by the barometric formula
    R_AIR: float = 287.05                 # J/(kg·K), specific gas constant, dry air
    LAPSE_RATE: float = 0.0065            # K/m, default temperature lapse rate
    ISOTHERMAL_LAPSE_THRESHOLD: float = 1e-4
    MIN_TEMPERATURE_K: float = 2.0        # absolute floor for layer temperatures
    MIN_GAS_TEMPERATURE_K: float = 0.1    # below this density/viscosity are degenerate
    # Sutherland's law for air
    SUTHERLAND_S: float = 110.4           # K
    SUTHERLAND_T_REF: float = 273.15      # K
    SUTHERLAND_MU_REF: float = 1.715e-5   # Pa·s
    # Standard sea-level medium, used when a height resolves to no layer
    STANDARD_DENSITY: float = 1.2         # kg/m³
    STANDARD_PRESSURE: float = 101325.0   # Pa
    STANDARD_TEMPERATURE: float = 288.15  # K
    STANDARD_VISCOSITY: float = 1.81e-5   # Pa·s


AtmosphereConstants: _AtmosphereConstants = _AtmosphereConstants()

_G = AtmosphereConstants.G
_R = AtmosphereConstants.R_AIR


@dataclass(frozen=True)
class Medium:
    """Homogeneous fluid medium: one density and one viscosity everywhere."""
    density: float = AtmosphereConstants.STANDARD_DENSITY        # kg/m³
    viscosity: float = AtmosphereConstants.STANDARD_VISCOSITY    # Pa·s

    def __post_init__(self) -> None:
        if self.density < 0:
            raise ValueError(f"density must be non-negative, got {self.density}")
        if self.viscosity < 0:
            raise ValueError(f"viscosity must be non-negative, got {self.viscosity}")


@dataclass(frozen=True)
class AtmosphereLayer:
    """Barometric model for a single altitude band [lower, upper).

    name: layer name
    base_density: reference density (kg/m³)
    base_temperature: temperature at the lower boundary (K)
    lower_boundary: bottom of the band (m)
    upper_boundary: top of the band (m), exclusive
    pressure_at_lower_boundary: pressure at the lower boundary (Pa)
    lapse_rate: temperature decrease per metre (K/m); 0 for isothermal
    """
    name: str
    base_density: float
    base_temperature: float
    lower_boundary: float
    upper_boundary: float
    pressure_at_lower_boundary: float
    lapse_rate: float = AtmosphereConstants.LAPSE_RATE

    def __post_init__(self) -> None:
        if self.lower_boundary >= self.upper_boundary:
            raise ValueError(
                f"Layer '{self.name}': lower_boundary ({self.lower_boundary}) "
                f"must be below upper_boundary ({self.upper_boundary})"
            )
        if self.base_density < 0:
            raise ValueError(
                f"Layer '{self.name}': base_density must be non-negative, "
                f"got {self.base_density}"
            )
        if self.base_temperature <= 0:
            raise ValueError(
                f"Layer '{self.name}': base_temperature must be positive, "
                f"got {self.base_temperature}"
            )
        if self.pressure_at_lower_boundary < 0:
            raise ValueError(
                f"Layer '{self.name}': pressure_at_lower_boundary must be "
                f"non-negative, got {self.pressure_at_lower_boundary}"
            )

    @property
    def thickness(self) -> float:
        """Vertical extent of the layer (m)."""
        return self.upper_boundary - self.lower_boundary

    @property
    def is_isothermal(self) -> bool:
        return abs(self.lapse_rate) < AtmosphereConstants.ISOTHERMAL_LAPSE_THRESHOLD

    def contains_height(self, height: float) -> bool:
        """True iff lower_boundary <= height < upper_boundary."""
        return self.lower_boundary <= height < self.upper_boundary

    def temperature_at(self, height: float) -> float:
        """Linear lapse temperature, floored at 2 K.

        T = T0 − L·(h − h0)
        """
        temperature = self.base_temperature - self.lapse_rate * (height - self.lower_boundary)
        return max(temperature, AtmosphereConstants.MIN_TEMPERATURE_K)

    def pressure_at(self, height: float) -> float:
        """Barometric pressure in Pa.

        The height is clamped into [lower, upper − 1] first.

        Isothermal:     P = P0 · exp(−g·Δh / (R·T0))
        Lapse-rate:     P = P0 · (T/T0)^(g / (R·L))
        """
        clamped = min(height, self.upper_boundary - 1.0)
        clamped = max(clamped, self.lower_boundary)
        dh = clamped - self.lower_boundary
        p0 = self.pressure_at_lower_boundary
        t0 = self.base_temperature

        if self.is_isothermal:
            pressure = p0 * math.exp(-_G * dh / (_R * t0))
            return max(pressure, 0.0)

        ratio = self.temperature_at(clamped) / t0
        if ratio <= 0:
            return 0.0
        pressure = p0 * ratio ** (_G / (_R * self.lapse_rate))
        return max(pressure, 0.0)

    def density_at(self, height: float) -> float:
        """Ideal-gas density ρ = P / (R·T) in kg/m³."""
        temperature = self.temperature_at(height)
        if temperature < AtmosphereConstants.MIN_GAS_TEMPERATURE_K:
            return 0.0
        density = self.pressure_at(height) / (_R * temperature)
        return max(density, 0.0)

    def viscosity_at(self, height: float) -> float:
        """Dynamic viscosity from Sutherland's law in Pa·s.

        μ = μ_ref · (T/T_ref)^1.5 · (T_ref + S) / (T + S)
        """
        temperature = self.temperature_at(height)
        mu_ref = AtmosphereConstants.SUTHERLAND_MU_REF
        if temperature < AtmosphereConstants.MIN_GAS_TEMPERATURE_K:
            return 0.01 * mu_ref
        t_ref = AtmosphereConstants.SUTHERLAND_T_REF
        s = AtmosphereConstants.SUTHERLAND_S
        return mu_ref * (temperature / t_ref) ** 1.5 * (t_ref + s) / (temperature + s)


class LayeredAtmosphere:
    """Ordered stack of atmosphere layers with total (never-failing) queries.

    Layers are kept sorted by lower boundary. Lookup returns the first
    layer containing the height; heights above the stack use the top
    layer and heights below it use the bottom layer. A height that falls
    between two non-contiguous layers resolves to no layer and the query
    answers with the base ``Medium`` / standard-atmosphere values.
    """

    def __init__(self, layers=(), medium: Medium | None = None) -> None:
        self._layers: list[AtmosphereLayer] = []
        self._medium = medium if medium is not None else Medium()
        for layer in layers:
            self.add_layer(layer)

    def add_layer(self, layer: AtmosphereLayer) -> None:
        """Insert a layer, keeping the stack sorted by lower boundary."""
        keys = [l.lower_boundary for l in self._layers]
        idx = bisect.bisect_left(keys, layer.lower_boundary)
        self._layers.insert(idx, layer)

    @property
    def layers(self) -> tuple[AtmosphereLayer, ...]:
        return tuple(self._layers)

    @property
    def medium(self) -> Medium:
        return self._medium

    @property
    def density(self) -> float:
        """Density at height 0."""
        return self.density_at(0.0)

    @property
    def viscosity(self) -> float:
        """Viscosity at height 0."""
        return self.viscosity_at(0.0)

    def __len__(self) -> int:
        return len(self._layers)

    def is_contiguous(self) -> bool:
        """True when every layer's top equals the next layer's bottom."""
        return all(
            lower.upper_boundary == upper.lower_boundary
            for lower, upper in zip(self._layers, self._layers[1:])
        )

    def layer_at(self, height: float) -> AtmosphereLayer | None:
        """Layer governing a height, or None for a gap between layers."""
        if not self._layers:
            return None
        for layer in self._layers:
            if layer.contains_height(height):
                return layer
        if height >= self._layers[-1].upper_boundary:
            return self._layers[-1]
        if height < self._layers[0].lower_boundary:
            return self._layers[0]
        logger.debug("Height %.1f m falls between layers, using standard medium", height)
        return None

    def density_at(self, height: float) -> float:
        layer = self.layer_at(height)
        if layer is None:
            return self._medium.density
        return layer.density_at(height)

    def pressure_at(self, height: float) -> float:
        layer = self.layer_at(height)
        if layer is None:
            return AtmosphereConstants.STANDARD_PRESSURE
        return layer.pressure_at(height)

    def temperature_at(self, height: float) -> float:
        layer = self.layer_at(height)
        if layer is None:
            return AtmosphereConstants.STANDARD_TEMPERATURE
        return layer.temperature_at(height)

    def viscosity_at(self, height: float) -> float:
        layer = self.layer_at(height)
        if layer is None:
            return self._medium.viscosity
        return layer.viscosity_at(height)


# --- Standard model ---

# (name, density kg/m³, temperature K, lower m, upper m, pressure Pa)
_STANDARD_LAYERS: tuple[tuple[str, float, float, float, float, float], ...] = (
    ("Troposphere", 1.225, 288.15, 0.0, 12_000.0, 101325.0),
    ("Stratosphere", 0.36, 216.65, 12_000.0, 50_000.0, 19399.0),
    ("Mesosphere", 0.001, 270.65, 50_000.0, 85_000.0, 75.65),
    ("Thermosphere", 1e-5, 186.87, 85_000.0, 600_000.0, 0.3734),
    ("Exosphere", 1e-9, 1000.0, 600_000.0, 10_000_000.0, 0.0002),
    ("Firmament", 2.5, 4.0, 10_000_000.0, 10_001_000.0, 0.0),
)

# Electrified band overlapping the mesosphere/thermosphere; not stacked
# into the standard model.
_IONOSPHERE_LAYER = ("Ionosphere", 1e-6, 1500.0, 60_000.0, 1_000_000.0, 0.1)

_STANDARD_BY_NAME = {row[0]: row for row in _STANDARD_LAYERS}


def _layer_from_row(row: tuple[str, float, float, float, float, float]) -> AtmosphereLayer:
    name, density, temperature, lower, upper, pressure = row
    return AtmosphereLayer(
        name=name,
        base_density=density,
        base_temperature=temperature,
        lower_boundary=lower,
        upper_boundary=upper,
        pressure_at_lower_boundary=pressure,
    )


def create_troposphere() -> AtmosphereLayer:
    """Troposphere: 0–12 km, where weather occurs."""
    return _layer_from_row(_STANDARD_BY_NAME["Troposphere"])


def create_stratosphere() -> AtmosphereLayer:
    """Stratosphere: 12–50 km, contains the ozone layer."""
    return _layer_from_row(_STANDARD_BY_NAME["Stratosphere"])


def create_mesosphere() -> AtmosphereLayer:
    """Mesosphere: 50–85 km, where meteors burn up."""
    return _layer_from_row(_STANDARD_BY_NAME["Mesosphere"])


def create_thermosphere() -> AtmosphereLayer:
    """Thermosphere: 85–600 km, where aurora occurs."""
    return _layer_from_row(_STANDARD_BY_NAME["Thermosphere"])


def create_exosphere() -> AtmosphereLayer:
    """Exosphere: 600–10,000 km, transition to vacuum."""
    return _layer_from_row(_STANDARD_BY_NAME["Exosphere"])


def create_firmament() -> AtmosphereLayer:
    """Firmament: 10,000–10,001 km, the dome capping the model."""
    return _layer_from_row(_STANDARD_BY_NAME["Firmament"])


def create_ionosphere_layer() -> AtmosphereLayer:
    """Ionosphere: 60–1000 km electrically charged band (overlaps others)."""
    return _layer_from_row(_IONOSPHERE_LAYER)


def standard_layers() -> tuple[AtmosphereLayer, ...]:
    """The six contiguous layers of the standard model, bottom to top."""
    return tuple(_layer_from_row(row) for row in _STANDARD_LAYERS)


def create_standard_atmosphere() -> LayeredAtmosphere:
    """Standard six-layer atmosphere from the ground to the firmament."""
    return LayeredAtmosphere(standard_layers())
