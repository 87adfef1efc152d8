"""
Snake: a long, slowly tapering spine.
"""

import math
from typing import Optional
import numpy as np

from procanim.config import CreatureConfig
from .base import BaseCreature

HALF_PI = math.pi / 2


class Snake(BaseCreature):
    """48-joint snake."""

    JOINT_COUNT = 48

    def __init__(self, origin: np.ndarray, config: Optional[CreatureConfig] = None):
        if config is None:
            config = CreatureConfig(head_speed=8.0, body_color=(172, 57, 49))
        super().__init__(origin, config)

    def body_width(self, i: int) -> float:
        if i == 0:
            return 76
        if i == 1:
            return 80
        return 64 - i

    def body_outline(self) -> np.ndarray:
        last = self.JOINT_COUNT - 1
        points = [self.get_pos(i, HALF_PI, 0) for i in range(self.JOINT_COUNT)]
        points.append(self.get_pos(last, math.pi, 0))
        points.extend(self.get_pos(i, -HALF_PI, 0) for i in range(last, -1, -1))
        points.append(self.get_pos(0, -math.pi / 6, 0))
        points.append(self.get_pos(0, 0, 0))
        points.append(self.get_pos(0, math.pi / 6, 0))
        return np.array(points)

    def eye_positions(self) -> np.ndarray:
        return np.array([self.get_pos(0, HALF_PI, -18), self.get_pos(0, -HALF_PI, -18)])

    def render(self, ax, outline_color=(255, 255, 255), debug: bool = False):
        self._draw_body(ax, self.config.body_color, outline_color)
        self._draw_eyes(ax)

        if debug:
            self.render_skeleton(ax)
