"""
procanim: Procedural Creature Animation

Fish, snakes and lizards that follow the pointer, built on 2-D kinematic
chains of rigid links.
"""

__version__ = "0.1.0"
__author__ = "kularos"

from procanim.kinematics.chain import Chain
from procanim.models.base import BaseCreature
from procanim.models.fish import Fish
from procanim.models.snake import Snake
from procanim.models.lizard import Lizard
from procanim.scene.state import SceneState
from procanim.config import AppConfig, load_config

__all__ = [
    "Chain",
    "BaseCreature",
    "Fish",
    "Snake",
    "Lizard",
    "SceneState",
    "AppConfig",
    "load_config",
]
