"""
Configuration for creatures and the viewer.

Defaults give the stock creatures. A JSON file can override any field:

    {
        "width": 1600,
        "fish": {"head_speed": 20},
        "limbs": {"step_threshold": 150}
    }
"""

import json
import math
from dataclasses import dataclass, field, fields, replace, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

Color = Tuple[int, int, int]


@dataclass
class CreatureConfig:
    """Spine and appearance settings shared by every creature."""
    link_size: float = 64.0
    angle_constraint: float = math.pi / 8
    head_speed: float = 8.0  # Distance the head moves toward the pointer per tick
    body_color: Color = (58, 124, 165)
    fin_color: Color = (129, 195, 215)


@dataclass
class LimbConfig:
    """Settings for FABRIK-driven limbs and their foot planting."""
    joint_count: int = 3
    front_link_size: float = 52.0
    back_link_size: float = 36.0
    step_threshold: float = 200.0  # Foot re-plants once its ideal spot drifts this far
    step_ease: float = 0.4  # Fraction of the way the foot moves toward its spot per tick


@dataclass
class AppConfig:
    """Top-level configuration."""
    width: int = 1280
    height: int = 800
    fps: int = 60
    background: Color = (40, 44, 52)
    outline_color: Color = (255, 255, 255)
    fish: CreatureConfig = field(default_factory=lambda: CreatureConfig(
        head_speed=16.0, body_color=(58, 124, 165), fin_color=(129, 195, 215)))
    snake: CreatureConfig = field(default_factory=lambda: CreatureConfig(
        head_speed=8.0, body_color=(172, 57, 49), fin_color=(172, 57, 49)))
    lizard: CreatureConfig = field(default_factory=lambda: CreatureConfig(
        head_speed=12.0, body_color=(82, 121, 111), fin_color=(82, 121, 111)))
    limbs: LimbConfig = field(default_factory=LimbConfig)

    def creature(self, name: str) -> CreatureConfig:
        """Config section for a creature by name."""
        if name not in ('fish', 'snake', 'lizard'):
            raise ValueError(f"Unknown creature: {name}")
        return getattr(self, name)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return asdict(self)


def to_mpl_color(color: Color) -> Tuple[float, float, float]:
    """Convert 0-255 RGB to a matplotlib 0-1 tuple."""
    return tuple(c / 255.0 for c in color)


def _apply_overrides(section, overrides: Dict[str, Any], path: str):
    """Return a copy of dataclass `section` with `overrides` applied."""
    known = {f.name: f for f in fields(section)}
    updates = {}

    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown config key: {path}{key}")

        current = getattr(section, key)
        if hasattr(current, '__dataclass_fields__'):
            if not isinstance(value, dict):
                raise ValueError(f"Config section {path}{key} must be an object, got {type(value).__name__}")
            updates[key] = _apply_overrides(current, value, f"{path}{key}.")
        elif isinstance(current, tuple):
            if len(value) != len(current):
                raise ValueError(f"Config key {path}{key} needs {len(current)} values, got {len(value)}")
            updates[key] = tuple(value)
        else:
            updates[key] = type(current)(value)

    return replace(section, **updates)


def load_config(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
    """
    Build an AppConfig from defaults, a JSON file and explicit overrides.

    Args:
        path: Optional path to a JSON config file
        overrides: Optional dictionary applied after the file

    Returns:
        AppConfig instance
    """
    config = AppConfig()

    if path is not None:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = json.loads(config_path.read_text())
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_path}")
        config = _apply_overrides(config, data, '')

    if overrides:
        config = _apply_overrides(config, overrides, '')

    if config.width <= 0 or config.height <= 0:
        raise ValueError(f"Canvas size must be positive, got {config.width}x{config.height}")
    if config.fps <= 0:
        raise ValueError(f"fps must be positive, got {config.fps}")

    return config
