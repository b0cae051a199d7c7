# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON environment configuration adapter.

Reads and writes EnvironmentConfig documents:

    {
      "seed": 42,
      "standard_fields": true,
      "medium": {"density": 1.2, "viscosity": 1.81e-5},
      "layers": [
        {"name": "Troposphere", "base_density": 1.225,
         "base_temperature": 288.15, "lower_boundary": 0,
         "upper_boundary": 12000, "pressure_at_lower_boundary": 101325}
      ],
      "ionosphere": {"lower_boundary": 80000, "upper_boundary": 580000},
      "lightning": {"generation_probability": 0.002,
                    "strength_range": [8000, 15000]}
    }

Every section is optional; missing sections take the domain defaults.
Unknown keys at any level raise ValueError.
File I/O is confined to this adapter.
"""
import json
import logging
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any

from atmosfield.domain.atmosphere import AtmosphereLayer, Medium
from atmosfield.domain.electromagnetism import LightningConfig
from atmosfield.domain.environment import EnvironmentConfig, IonosphereConfig

logger = logging.getLogger(__name__)

_KNOWN_KEYS = frozenset({
    "seed", "standard_fields", "medium", "layers", "ionosphere", "lightning",
})

_LAYER_REQUIRED = (
    "name", "base_density", "base_temperature",
    "lower_boundary", "upper_boundary", "pressure_at_lower_boundary",
)


def _reject_unknown(section: str, data: dict[str, Any], allowed) -> None:
    unknown = set(data) - set(allowed)
    if unknown:
        raise ValueError(f"Unknown {section} keys: {', '.join(sorted(unknown))}")


def _field_names(cls) -> frozenset[str]:
    return frozenset(f.name for f in fields(cls))


def _parse_layer(data: dict[str, Any]) -> AtmosphereLayer:
    _reject_unknown("layer", data, _field_names(AtmosphereLayer))
    missing = [key for key in _LAYER_REQUIRED if key not in data]
    if missing:
        raise ValueError(
            f"Layer '{data.get('name', '?')}' is missing required keys: {', '.join(missing)}"
        )
    kwargs = {key: data[key] for key in _LAYER_REQUIRED}
    if "lapse_rate" in data:
        kwargs["lapse_rate"] = float(data["lapse_rate"])
    return AtmosphereLayer(**kwargs)


def _parse_lightning(data: dict[str, Any]) -> LightningConfig:
    _reject_unknown("lightning", data, _field_names(LightningConfig))
    kwargs = {
        key: tuple(value) if isinstance(value, list) else value
        for key, value in data.items()
    }
    return LightningConfig(**kwargs)


def _parse_medium(data: dict[str, Any]) -> Medium:
    _reject_unknown("medium", data, _field_names(Medium))
    return Medium(**data)


def _parse_ionosphere(data: dict[str, Any]) -> IonosphereConfig:
    _reject_unknown("ionosphere", data, _field_names(IonosphereConfig))
    return IonosphereConfig(**data)


def parse_environment_config(data: dict[str, Any]) -> EnvironmentConfig:
    """Build an EnvironmentConfig from a decoded JSON document."""
    _reject_unknown("configuration", data, _KNOWN_KEYS)

    layers = tuple(_parse_layer(layer) for layer in data.get("layers", ()))
    medium = _parse_medium(data["medium"]) if "medium" in data else Medium()

    if "ionosphere" not in data:
        ionosphere = IonosphereConfig()
    elif data["ionosphere"] is None:
        ionosphere = None
    else:
        ionosphere = _parse_ionosphere(data["ionosphere"])

    lightning = _parse_lightning(data.get("lightning", {}))
    seed = data.get("seed")
    return EnvironmentConfig(
        layers=layers,
        medium=medium,
        ionosphere=ionosphere,
        lightning=lightning,
        standard_fields=bool(data.get("standard_fields", True)),
        seed=int(seed) if seed is not None else None,
    )


def environment_config_to_dict(config: EnvironmentConfig) -> dict[str, Any]:
    """Plain-JSON representation of an EnvironmentConfig."""
    return {
        "seed": config.seed,
        "standard_fields": config.standard_fields,
        "medium": asdict(config.medium),
        "layers": [asdict(layer) for layer in config.layers],
        "ionosphere": asdict(config.ionosphere) if config.ionosphere is not None else None,
        "lightning": {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in asdict(config.lightning).items()
        },
    }


def load_environment_config(path: str | Path) -> EnvironmentConfig:
    """Read an EnvironmentConfig from a JSON file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Configuration root must be an object, got {type(data).__name__}")
    config = parse_environment_config(data)
    logger.info(
        "Loaded environment config from %s (%d layer(s), ionosphere=%s)",
        path, len(config.layers), config.ionosphere is not None,
    )
    return config


def save_environment_config(config: EnvironmentConfig, path: str | Path) -> None:
    """Write an EnvironmentConfig to a JSON file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(environment_config_to_dict(config), f, indent=2, ensure_ascii=False)
