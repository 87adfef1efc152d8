"""
Base class for all pointer-following creatures.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
import numpy as np
from scipy.interpolate import splprep, splev

from procanim.config import CreatureConfig, to_mpl_color
from procanim.kinematics.angles import from_angle, step_toward
from procanim.kinematics.chain import Chain

logger = logging.getLogger(__name__)


def smooth_closed_curve(points: np.ndarray, n_eval: int = 200) -> np.ndarray:
    """
    Fit a closed periodic B-spline through outline points.

    Args:
        points: Array of shape (N, 2), the outline in drawing order
        n_eval: Number of samples on the returned curve

    Returns:
        Array of shape (n_eval, 2), or the de-duplicated input polygon if
        the spline cannot be fitted
    """
    points = np.asarray(points, dtype=np.float64)

    # splprep rejects zero-length steps between consecutive points
    steps = np.hypot(*np.diff(points, axis=0).T)
    keep = np.concatenate([[True], steps > 1e-9])
    unique = points[keep]
    if len(unique) > 1 and np.hypot(*(unique[-1] - unique[0])) <= 1e-9:
        unique = unique[:-1]

    if len(unique) < 4:
        return unique

    closed = np.vstack([unique, unique[:1]])
    try:
        tck, _ = splprep([closed[:, 0], closed[:, 1]], s=0, k=3, per=1)
    except (ValueError, TypeError) as e:
        logger.warning("Outline spline fitting failed (%s), drawing raw polygon", e)
        return unique

    x, y = splev(np.linspace(0, 1, n_eval), tck)
    return np.column_stack([x, y])


def cubic_bezier(p0, p1, p2, p3, n_eval: int = 24) -> np.ndarray:
    """Sample a cubic Bezier curve, shape (n_eval, 2)."""
    t = np.linspace(0, 1, n_eval)[:, np.newaxis]
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3))
    return ((1 - t) ** 3 * p0 + 3 * (1 - t) ** 2 * t * p1
            + 3 * (1 - t) * t ** 2 * p2 + t ** 3 * p3)


def data_to_points(ax, length: float) -> float:
    """Convert a length in data units to a matplotlib linewidth in points."""
    origin, offset = ax.transData.transform([(0, 0), (length, 0)])
    pixels = abs(offset[0] - origin[0])
    return pixels * 72.0 / ax.figure.dpi


class BaseCreature(ABC):
    """
    A creature whose body is a spine Chain following the pointer.

    Subclasses provide the body width table and the drawing.
    """

    JOINT_COUNT = 1

    def __init__(self, origin: np.ndarray, config: Optional[CreatureConfig] = None):
        """
        Initialize creature.

        Args:
            origin: Starting head position (x, y)
            config: Spine and appearance settings
        """
        self.config = config if config is not None else CreatureConfig()
        self.spine = Chain(origin, self.JOINT_COUNT, self.config.link_size,
                           self.config.angle_constraint)
        self.creature_type = self.__class__.__name__

    @abstractmethod
    def body_width(self, i: int) -> float:
        """Half-width of the body at spine joint i."""
        pass

    @abstractmethod
    def body_outline(self) -> np.ndarray:
        """Outline points of the body, shape (N, 2), in drawing order."""
        pass

    @abstractmethod
    def eye_positions(self) -> np.ndarray:
        """Eye centres, shape (2, 2)."""
        pass

    @abstractmethod
    def render(self, ax, outline_color=(255, 255, 255), debug: bool = False):
        """
        Draw the creature on matplotlib axes.

        Args:
            ax: Matplotlib axes (screen orientation, y pointing down)
            outline_color: 0-255 RGB stroke color
            debug: Also draw the bare spine
        """
        pass

    def head_target(self, pointer: np.ndarray) -> np.ndarray:
        """Where the head goes this tick: `head_speed` toward the pointer."""
        return step_toward(self.spine.joints[0], pointer, self.config.head_speed)

    def resolve(self, pointer: np.ndarray):
        """
        Advance one tick toward the pointer.

        Args:
            pointer: Pointer position (x, y)
        """
        self.spine.resolve(self.head_target(pointer))

    def get_pos(self, i: int, angle_offset: float, length_offset: float) -> np.ndarray:
        """
        Point on the body edge around spine joint i.

        Args:
            i: Spine joint index
            angle_offset: Rotation from the joint heading (pi/2 = right side)
            length_offset: Added to the body width at that joint
        """
        return self.spine.joints[i] + from_angle(
            self.spine.angles[i] + angle_offset, self.body_width(i) + length_offset)

    def _draw_body(self, ax, color, outline_color):
        from matplotlib.patches import Polygon

        outline = smooth_closed_curve(self.body_outline())
        ax.add_patch(Polygon(outline, closed=True, facecolor=to_mpl_color(color),
                             edgecolor=to_mpl_color(outline_color),
                             linewidth=data_to_points(ax, 4)))

    def _draw_eyes(self, ax, radius: float = 12.0):
        from matplotlib.patches import Circle

        for eye in self.eye_positions():
            ax.add_patch(Circle(eye, radius, facecolor='white', edgecolor='white'))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize creature state to dictionary."""
        return {
            'creature_type': self.creature_type,
            'spine': self.spine.to_dict(),
        }

    def restore(self, data: Dict[str, Any]):
        """Restore state written by `to_dict`."""
        if data.get('creature_type') != self.creature_type:
            raise ValueError(f"Cannot restore {self.creature_type} from {data.get('creature_type')}")

        spine = Chain.from_dict(data['spine'])
        if spine.joint_count != self.JOINT_COUNT:
            raise ValueError(f"{self.creature_type} needs {self.JOINT_COUNT} spine joints, got {spine.joint_count}")
        self.spine = spine

    def get_skeleton(self) -> List[Chain]:
        """All chains owned by this creature, spine first."""
        return [self.spine]

    def render_skeleton(self, ax):
        """Debug view: draw every chain."""
        for chain in self.get_skeleton():
            chain.render(ax)

    def __repr__(self) -> str:
        head = self.spine.joints[0]
        return f"{self.creature_type}(head=({head[0]:.1f}, {head[1]:.1f}))"
