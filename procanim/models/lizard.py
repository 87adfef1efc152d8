"""
Lizard: spine plus four FABRIK limbs with foot planting.
"""

import logging
import math
from typing import Any, Dict, List, Optional
import numpy as np

from procanim.config import CreatureConfig, LimbConfig, to_mpl_color
from procanim.kinematics.chain import Chain
from .base import BaseCreature, cubic_bezier, data_to_points
from .limb import FootPlant

logger = logging.getLogger(__name__)

HALF_PI = math.pi / 2


class Lizard(BaseCreature):
    """
    14-joint lizard with two front and two back legs.

    Legs 0 and 1 are the front pair (attached at spine joint 3), legs 2 and 3
    the back pair (spine joint 7). Even legs are on the right side.
    """

    JOINT_COUNT = 14

    # Width of the lizard at each vertebra
    BODY_WIDTH = [52, 58, 40, 60, 68, 71, 65, 50, 28, 15, 11, 9, 7, 7]

    LIMB_COUNT = 4

    def __init__(self, origin: np.ndarray, config: Optional[CreatureConfig] = None,
                 limb_config: Optional[LimbConfig] = None):
        """
        Initialize lizard.

        Args:
            origin: Starting head position
            config: Spine and appearance settings
            limb_config: Leg chain and foot planting settings
        """
        if config is None:
            config = CreatureConfig(head_speed=12.0, body_color=(82, 121, 111))
        super().__init__(origin, config)

        self.limb_config = limb_config if limb_config is not None else LimbConfig()
        self.arms: List[Chain] = []
        self.feet: List[FootPlant] = []

        for i in range(self.LIMB_COUNT):
            link_size = (self.limb_config.front_link_size if self.is_front(i)
                         else self.limb_config.back_link_size)
            self.arms.append(Chain(origin, self.limb_config.joint_count, link_size))
            self.feet.append(FootPlant(threshold=self.limb_config.step_threshold,
                                       ease=self.limb_config.step_ease))

    def body_width(self, i: int) -> float:
        return self.BODY_WIDTH[i]

    @staticmethod
    def is_front(i: int) -> bool:
        return i < 2

    @staticmethod
    def side(i: int) -> int:
        """+1 for right-side legs, -1 for left."""
        return 1 if i % 2 == 0 else -1

    def limb_attachment(self, i: int) -> int:
        """Spine joint a leg hangs from."""
        return 3 if self.is_front(i) else 7

    def desired_foot(self, i: int) -> np.ndarray:
        """Ideal foot spot for leg i given the current spine pose."""
        angle = (math.pi / 4 if self.is_front(i) else math.pi / 3) * self.side(i)
        return self.get_pos(self.limb_attachment(i), angle, 80)

    def shoulder(self, i: int) -> np.ndarray:
        """Where leg i joins the body; the leg chain's tail is pinned here."""
        return self.get_pos(self.limb_attachment(i), HALF_PI * self.side(i), -20)

    def resolve(self, pointer: np.ndarray):
        super().resolve(pointer)

        for i, (arm, foot) in enumerate(zip(self.arms, self.feet)):
            if foot.update(self.desired_foot(i)):
                logger.debug("Leg %d steps to (%.1f, %.1f)", i, *foot.position)
            arm.fabrik_resolve(foot.target(arm.joints[0]), self.shoulder(i))

    def body_outline(self) -> np.ndarray:
        n = self.JOINT_COUNT
        points = [self.get_pos(i, HALF_PI, 0) for i in range(n)]
        points.extend(self.get_pos(i, -HALF_PI, 0) for i in range(n - 1, -1, -1))
        points.append(self.get_pos(0, -math.pi / 6, -8))
        points.append(self.get_pos(0, 0, -6))
        points.append(self.get_pos(0, math.pi / 6, -8))
        return np.array(points)

    def eye_positions(self) -> np.ndarray:
        return np.array([self.get_pos(0, 3 * math.pi / 5, -7), self.get_pos(0, -3 * math.pi / 5, -7)])

    def limb_curve(self, i: int) -> np.ndarray:
        """
        Leg i as a curve from shoulder through elbow to foot.

        Back legs bend their elbow outward so the knee points the right way.
        """
        foot, elbow, shoulder = self.arms[i].joints[0], self.arms[i].joints[1], self.arms[i].joints[-1]

        para = foot - shoulder
        length = float(np.hypot(*para))
        corrected_elbow = elbow.copy()
        if length > 0 and not self.is_front(i):
            perp = np.array([-para[1], para[0]]) * (30 / length)
            corrected_elbow = elbow - perp if i == 2 else elbow + perp

        return cubic_bezier(shoulder, corrected_elbow, corrected_elbow, foot)

    def render(self, ax, outline_color=(255, 255, 255), debug: bool = False):
        body = to_mpl_color(self.config.body_color)
        edge = to_mpl_color(outline_color)

        for i in range(self.LIMB_COUNT):
            curve = self.limb_curve(i)
            ax.plot(curve[:, 0], curve[:, 1], color=edge, linewidth=data_to_points(ax, 40),
                    solid_capstyle='round')
            ax.plot(curve[:, 0], curve[:, 1], color=body, linewidth=data_to_points(ax, 32),
                    solid_capstyle='round')

        self._draw_body(ax, self.config.body_color, outline_color)
        self._draw_eyes(ax)

        if debug:
            self.render_skeleton(ax)

    def get_skeleton(self) -> List[Chain]:
        return [self.spine] + self.arms

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['arms'] = [arm.to_dict() for arm in self.arms]
        data['feet'] = [foot.to_dict() for foot in self.feet]
        return data

    def restore(self, data: Dict[str, Any]):
        arms = [Chain.from_dict(arm) for arm in data.get('arms', [])]
        if len(arms) != self.LIMB_COUNT:
            raise ValueError(f"Lizard needs {self.LIMB_COUNT} arms, got {len(arms)}")
        for i, arm in enumerate(arms):
            link_size = (self.limb_config.front_link_size if self.is_front(i)
                         else self.limb_config.back_link_size)
            if arm.joint_count != self.limb_config.joint_count or arm.link_size != link_size:
                raise ValueError(f"Arm {i} must have {self.limb_config.joint_count} joints of "
                                 f"{link_size}, got {arm.joint_count} of {arm.link_size}")

        feet = data.get('feet', [])
        if len(feet) != self.LIMB_COUNT:
            raise ValueError(f"Lizard needs {self.LIMB_COUNT} feet, got {len(feet)}")
        positions = [np.array(foot['position'], dtype=np.float64) for foot in feet]
        if any(position.shape != (2,) for position in positions):
            raise ValueError("Foot positions must be (2,)")

        super().restore(data)
        self.arms = arms
        for foot, position, foot_data in zip(self.feet, positions, feet):
            foot.position = position
            foot.step_count = int(foot_data.get('step_count', 0))
