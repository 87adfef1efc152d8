"""
Scene state: which creature is on screen, ticking it, and recording frames.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Dict, List, Any
import numpy as np

from procanim.config import AppConfig, load_config
from procanim.models import CREATURES, BaseCreature, create_creature

logger = logging.getLogger(__name__)


class SceneState:
    """
    Holds one instance of every creature and tracks which one is active.

    Creatures that are not shown keep their last pose, so switching back
    resumes where they left off.
    """

    def __init__(self, width: float, height: float, config: Optional[AppConfig] = None,
                 names: Optional[List[str]] = None):
        """
        Initialize scene state.

        Args:
            width: Canvas width
            height: Canvas height
            config: Application config
            names: Creatures to include, in cycling order (default: all)
        """
        self.width = width
        self.height = height
        self.config = config if config is not None else AppConfig()
        self.names = list(names) if names is not None else list(CREATURES)

        if not self.names:
            raise ValueError("Scene needs at least one creature")

        center = np.array([width / 2, height / 2], dtype=np.float64)
        self.creatures: Dict[str, BaseCreature] = {
            name: create_creature(name, center, self.config) for name in self.names
        }
        self.current_index = 0

        self.frame_count = 0
        self.skipped_count = 0
        self.recording = False
        self.frames: List[Dict[str, Any]] = []

    @property
    def current_name(self) -> str:
        return self.names[self.current_index]

    @property
    def current(self) -> BaseCreature:
        """Creature currently on screen."""
        return self.creatures[self.current_name]

    def select(self, name: str) -> BaseCreature:
        """Switch to a creature by name."""
        if name not in self.creatures:
            raise ValueError(f"Creature {name} not in scene")

        self.current_index = self.names.index(name)
        logger.debug("Switched to %s", name)
        return self.current

    def cycle(self) -> BaseCreature:
        """Switch to the next creature in order."""
        self.current_index = (self.current_index + 1) % len(self.names)
        logger.debug("Switched to %s", self.current_name)
        return self.current

    def tick(self, pointer: Optional[np.ndarray]) -> bool:
        """
        Advance the current creature one frame.

        Args:
            pointer: Pointer position, or None if unknown (tick skipped)

        Returns:
            True if the creature moved
        """
        if pointer is None:
            self.skipped_count += 1
            return False

        pointer = np.asarray(pointer, dtype=np.float64)
        self.current.resolve(pointer)
        self.frame_count += 1

        if self.recording:
            self.frames.append({
                'frame_idx': self.frame_count,
                'creature': self.current_name,
                'pointer': pointer.tolist(),
                'state': self.current.to_dict(),
            })

        return True

    def start_recording(self):
        """Start keeping a snapshot of every tick."""
        self.recording = True

    def stop_recording(self):
        self.recording = False

    def export_frames(self) -> List[Dict[str, Any]]:
        """Recorded snapshots, oldest first."""
        return list(self.frames)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get scene statistics.

        Returns:
            Dictionary with counters and the current head position
        """
        head = self.current.spine.joints[0]
        stats = {
            'creature': self.current_name,
            'n_frames': self.frame_count,
            'n_skipped': self.skipped_count,
            'n_recorded': len(self.frames),
            'head': [float(head[0]), float(head[1])],
        }

        feet = getattr(self.current, 'feet', None)
        if feet:
            stats['n_steps'] = sum(foot.step_count for foot in feet)

        return stats

    def print_stats(self):
        """Print scene statistics."""
        stats = self.get_stats()

        print("\n=== Scene ===")
        print(f"Creature: {stats['creature']}")
        print(f"Frames: {stats['n_frames']} ({stats['n_skipped']} skipped)")
        print(f"Head: ({stats['head'][0]:.1f}, {stats['head'][1]:.1f})")
        if 'n_steps' in stats:
            print(f"Steps taken: {stats['n_steps']}")
        if stats['n_recorded']:
            print(f"Recorded frames: {stats['n_recorded']}")

    def save_to_file(self, filepath: str):
        """
        Save creature states and recorded frames to a JSON file.

        Args:
            filepath: Path to output file
        """
        data = {
            'width': self.width,
            'height': self.height,
            'current': self.current_name,
            'config': self.config.to_dict(),
            'creatures': {name: creature.to_dict() for name, creature in self.creatures.items()},
            'frames': self.export_frames(),
            'stats': self.get_stats(),
        }

        Path(filepath).write_text(json.dumps(data, indent=2))
        logger.info("Scene saved to %s", filepath)

    @classmethod
    def load_from_file(cls, filepath: str, config: Optional[AppConfig] = None) -> 'SceneState':
        """
        Load a scene saved by `save_to_file`.

        Args:
            filepath: Path to input file
            config: Application config for the rebuilt creatures (default:
                the config saved with the scene)

        Returns:
            SceneState instance
        """
        data = json.loads(Path(filepath).read_text())
        if config is None and 'config' in data:
            config = load_config(overrides=data['config'])

        state = cls(
            width=data['width'],
            height=data['height'],
            config=config,
            names=list(data['creatures']),
        )

        for name, creature_data in data['creatures'].items():
            state.creatures[name].restore(creature_data)

        state.select(data['current'])
        state.frames = data.get('frames', [])
        stats = data.get('stats', {})
        state.frame_count = stats.get('n_frames', 0)
        state.skipped_count = stats.get('n_skipped', 0)

        logger.info("Scene loaded from %s", filepath)
        return state
