"""Models package for pointer-following creatures."""

from typing import Optional
import numpy as np

from procanim.config import AppConfig
from procanim.models.base import BaseCreature
from procanim.models.fish import Fish
from procanim.models.snake import Snake
from procanim.models.lizard import Lizard
from procanim.models.limb import FootPlant, next_desired

CREATURES = {
    'fish': Fish,
    'snake': Snake,
    'lizard': Lizard,
}


def create_creature(name: str, origin: np.ndarray, config: Optional[AppConfig] = None) -> BaseCreature:
    """
    Build a creature by name.

    Args:
        name: One of 'fish', 'snake', 'lizard'
        origin: Starting head position
        config: Application config (defaults used if None)
    """
    if name not in CREATURES:
        raise ValueError(f"Unknown creature: {name} (choose from {', '.join(CREATURES)})")

    config = config if config is not None else AppConfig()
    if name == 'lizard':
        return Lizard(origin, config.lizard, config.limbs)
    return CREATURES[name](origin, config.creature(name))


__all__ = ['BaseCreature', 'Fish', 'Snake', 'Lizard', 'FootPlant', 'next_desired',
           'CREATURES', 'create_creature']
