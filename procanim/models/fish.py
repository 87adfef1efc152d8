"""
Fish: 12-joint spine, the first 10 joints carry the body and the last two
the caudal fin.
"""

import math
from typing import Dict, Optional
import numpy as np

from procanim.config import CreatureConfig, to_mpl_color
from procanim.kinematics.angles import relative_angle_diff, from_angle
from .base import BaseCreature, smooth_closed_curve, cubic_bezier, data_to_points

HALF_PI = math.pi / 2


class Fish(BaseCreature):
    """Fish with pectoral, ventral, dorsal and caudal fins."""

    JOINT_COUNT = 12

    # Width of the fish at each vertebra
    BODY_WIDTH = [68, 81, 84, 83, 77, 64, 51, 38, 32, 19]

    def __init__(self, origin: np.ndarray, config: Optional[CreatureConfig] = None):
        if config is None:
            config = CreatureConfig(head_speed=16.0)
        super().__init__(origin, config)

    def body_width(self, i: int) -> float:
        return self.BODY_WIDTH[i]

    def bend(self) -> Dict[str, float]:
        """
        How far the body curves, measured from the head backwards.

        The head-to-tail bend can exceed pi with 12 joints at pi/8 each, which
        would flip the sign of a single relative difference, so it is summed
        over two halves.
        """
        angles = self.spine.angles
        head_to_mid1 = relative_angle_diff(angles[6], angles[0])
        head_to_mid2 = relative_angle_diff(angles[7], angles[0])
        head_to_tail = head_to_mid1 + relative_angle_diff(angles[11], angles[6])
        return {
            'head_to_mid1': head_to_mid1,
            'head_to_mid2': head_to_mid2,
            'head_to_tail': head_to_tail,
        }

    def body_outline(self) -> np.ndarray:
        points = [self.get_pos(i, HALF_PI, 0) for i in range(10)]
        points.append(self.get_pos(9, math.pi, 0))
        points.extend(self.get_pos(i, -HALF_PI, 0) for i in range(9, -1, -1))
        # Top of the head
        points.append(self.get_pos(0, -math.pi / 6, 0))
        points.append(self.get_pos(0, 0, 4))
        points.append(self.get_pos(0, math.pi / 6, 0))
        return np.array(points)

    def eye_positions(self) -> np.ndarray:
        return np.array([self.get_pos(0, HALF_PI, -18), self.get_pos(0, -HALF_PI, -18)])

    def paired_fins(self):
        """
        Pectoral and ventral fins as (centre, width, height, angle) ellipses.
        """
        angles = self.spine.angles
        return [
            (self.get_pos(3, math.pi / 3, 0), 160, 64, angles[2] - math.pi / 4),
            (self.get_pos(3, -math.pi / 3, 0), 160, 64, angles[2] + math.pi / 4),
            (self.get_pos(7, HALF_PI, 0), 96, 32, angles[6] - math.pi / 4),
            (self.get_pos(7, -HALF_PI, 0), 96, 32, angles[6] + math.pi / 4),
        ]

    def caudal_fin(self) -> np.ndarray:
        """Tail fin outline; spreads wider the more the body bends."""
        joints, angles = self.spine.joints, self.spine.angles
        head_to_tail = self.bend()['head_to_tail']

        points = []
        for i in range(8, 12):
            tail_width = 1.5 * head_to_tail * (i - 8) ** 2
            points.append(joints[i] + from_angle(angles[i] - HALF_PI, tail_width))

        top_width = max(-13.0, min(13.0, head_to_tail * 6))
        for i in range(11, 7, -1):
            points.append(joints[i] + from_angle(angles[i] + HALF_PI, top_width))

        return np.array(points)

    def dorsal_fin(self) -> np.ndarray:
        """Dorsal fin outline: along the spine from joint 4 to 7 and back."""
        joints, angles = self.spine.joints, self.spine.angles
        bend = self.bend()

        forward = cubic_bezier(joints[4], joints[5], joints[6], joints[7])
        back = cubic_bezier(
            joints[7],
            joints[6] + from_angle(angles[6] + HALF_PI, bend['head_to_mid2'] * 16),
            joints[5] + from_angle(angles[5] + HALF_PI, bend['head_to_mid1'] * 16),
            joints[4],
        )
        return np.vstack([forward, back[1:]])

    def render(self, ax, outline_color=(255, 255, 255), debug: bool = False):
        from matplotlib.patches import Ellipse, Polygon

        edge = to_mpl_color(outline_color)
        fin = to_mpl_color(self.config.fin_color)
        lw = data_to_points(ax, 4)

        for centre, width, height, angle in self.paired_fins():
            ax.add_patch(Ellipse(centre, width, height, angle=math.degrees(angle),
                                 facecolor=fin, edgecolor=edge, linewidth=lw))

        ax.add_patch(Polygon(smooth_closed_curve(self.caudal_fin()), closed=True,
                             facecolor=fin, edgecolor=edge, linewidth=lw))

        self._draw_body(ax, self.config.body_color, outline_color)

        ax.add_patch(Polygon(self.dorsal_fin(), closed=True,
                             facecolor=fin, edgecolor=edge, linewidth=lw))

        self._draw_eyes(ax)

        if debug:
            self.render_skeleton(ax)
