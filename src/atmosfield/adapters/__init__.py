# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for environment configuration I/O.

External dependencies (json, file I/O) are confined to this layer.
"""
from atmosfield.adapters.json_config import (
    environment_config_to_dict,
    load_environment_config,
    parse_environment_config,
    save_environment_config,
)

__all__ = [
    "environment_config_to_dict",
    "load_environment_config",
    "parse_environment_config",
    "save_environment_config",
]
