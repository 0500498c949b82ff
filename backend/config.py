# backend/config.py

import os
from typing import Any, Dict, List

import yaml

from .grid import Difficulty

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config.yaml")


class UnknownDifficulty(KeyError):
    """No difficulty preset with the requested name."""


def load_config(path: str = None) -> Dict[str, Any]:
    """
    Load the YAML configuration. Falls back to the bundled config.yaml.
    """
    config_path = path or os.environ.get("MINESWEEPER_CONFIG", DEFAULT_CONFIG_PATH)
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def list_difficulties(config: Dict[str, Any] = None) -> List[Difficulty]:
    config = config if config is not None else load_config()
    return [
        get_difficulty(name, config)
        for name in config.get("difficulties", {})
    ]


def get_difficulty(name: str = None, config: Dict[str, Any] = None) -> Difficulty:
    """
    Build a validated Difficulty from a named preset.
    Without a name, the config's default_difficulty is used.
    """
    config = config if config is not None else load_config()
    presets = config.get("difficulties", {})
    name = name or config.get("default_difficulty")

    if name not in presets:
        raise UnknownDifficulty(f"Unknown difficulty '{name}'. Available: {sorted(presets)}")

    preset = presets[name]
    return Difficulty(
        name=name,
        rows=int(preset["rows"]),
        cols=int(preset["cols"]),
        mine_count=int(preset["mine_count"]),
    ).validate()
