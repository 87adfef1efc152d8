"""
Kinematic chain of rigid, equal-length links.

Two resolution modes, picked per chain by the owning creature:
- resolve: head follows a target, angles constrained joint to joint (spines)
- fabrik_resolve: head reaches a target, tail pinned to an anchor (limbs)
"""

from typing import Dict, Any
import numpy as np

from .angles import (
    TWO_PI,
    MIN_DIRECTION_LENGTH,
    normalize,
    constrain_angle,
    constrain_distance,
    heading,
    from_angle,
)


def _as_point(value, name: str) -> np.ndarray:
    """Validate a finite (x, y) position."""
    point = np.array(value, dtype=np.float64)
    if point.shape != (2,):
        raise ValueError(f"{name} must be (2,), got {point.shape}")
    if not np.all(np.isfinite(point)):
        raise ValueError(f"{name} must be finite, got {point.tolist()}")
    return point


def _direction_or(vector: np.ndarray, default) -> np.ndarray:
    """Unit vector along `vector`, or `default` when it has no direction."""
    length = np.hypot(vector[0], vector[1])
    if length >= MIN_DIRECTION_LENGTH:
        return vector / length
    return np.asarray(default, dtype=np.float64)


def _place(pos: np.ndarray, anchor: np.ndarray, distance: float, fallback: np.ndarray) -> np.ndarray:
    """Like constrain_distance, but coincident points follow `fallback`."""
    if np.hypot(*(pos - anchor)) < MIN_DIRECTION_LENGTH:
        pos = anchor + fallback
    return constrain_distance(pos, anchor, distance)


class Chain:
    """
    Ordered joints connected by links of length `link_size`.

    Index 0 is the head. `angles[i]` is the heading of the link running from
    joint i toward joint i-1 and is only maintained by `resolve`.
    """

    def __init__(self, origin: np.ndarray, joint_count: int, link_size: float,
                 angle_constraint: float = TWO_PI):
        """
        Initialize a straight chain hanging from `origin`.

        Args:
            origin: Head position (x, y)
            joint_count: Number of joints (>= 1)
            link_size: Distance between adjacent joints (> 0)
            angle_constraint: Max angle between adjacent links, in (0, 2pi].
                Lower is stiffer; the default leaves the chain unconstrained.
        """
        if int(joint_count) != joint_count or joint_count < 1:
            raise ValueError(f"joint_count must be a positive integer, got {joint_count}")
        if not link_size > 0:
            raise ValueError(f"link_size must be positive, got {link_size}")
        if not 0 < angle_constraint <= TWO_PI:
            raise ValueError(f"angle_constraint must be in (0, 2pi], got {angle_constraint}")

        origin = np.asarray(origin, dtype=np.float64)
        if origin.shape != (2,):
            raise ValueError(f"Origin must be (2,), got {origin.shape}")

        self.link_size = float(link_size)
        self.angle_constraint = float(angle_constraint)

        offsets = np.arange(int(joint_count), dtype=np.float64) * self.link_size
        self.joints = np.tile(origin, (int(joint_count), 1))
        self.joints[:, 1] += offsets
        self.angles = np.zeros(int(joint_count), dtype=np.float64)

    @property
    def joint_count(self) -> int:
        return len(self.joints)

    @property
    def max_reach(self) -> float:
        """Longest head-to-tail distance the chain can span."""
        return self.link_size * (self.joint_count - 1)

    def resolve(self, target: np.ndarray):
        """
        Move the head to `target` and drag the body along behind it.

        Each joint is placed exactly `link_size` behind its predecessor, at
        the heading it already had clamped to `angle_constraint` of the
        predecessor's heading. The chain is left untouched if `target` is
        rejected.

        Args:
            target: New head position (x, y)
        """
        target = _as_point(target, 'Target')
        joints = self.joints.copy()
        angles = self.angles.copy()

        # A zero-length move has no heading; keep the previous one
        move = target - joints[0]
        if np.hypot(move[0], move[1]) >= MIN_DIRECTION_LENGTH:
            angles[0] = normalize(heading(move))
        joints[0] = target

        for i in range(1, self.joint_count):
            cur_angle = heading(joints[i - 1] - joints[i])
            angles[i] = constrain_angle(cur_angle, angles[i - 1], self.angle_constraint)
            joints[i] = joints[i - 1] - from_angle(angles[i], self.link_size)

        self.joints, self.angles = joints, angles

    def fabrik_resolve(self, target: np.ndarray, anchor: np.ndarray):
        """
        One forward and one backward FABRIK sweep.

        The head is set to `target`, then the tail to `anchor`. A single
        sweep is not iterated to convergence, so when `anchor` is farther
        than `max_reach` from `target` the head ends short of the target.
        Link lengths are exact either way. A joint landing on its neighbour
        keeps the direction its link had before the sweep.

        Args:
            target: Position the head reaches for
            anchor: Position the tail is pinned to
        """
        target = _as_point(target, 'Target')
        anchor = _as_point(anchor, 'Anchor')
        previous = self.joints
        joints = previous.copy()

        # Forward pass
        joints[0] = target
        for i in range(1, self.joint_count):
            fallback = _direction_or(previous[i] - previous[i - 1], (0.0, 1.0))
            joints[i] = _place(joints[i], joints[i - 1], self.link_size, fallback)

        # Backward pass
        joints[-1] = anchor
        for i in range(self.joint_count - 2, -1, -1):
            fallback = _direction_or(previous[i] - previous[i + 1], (0.0, -1.0))
            joints[i] = _place(joints[i], joints[i + 1], self.link_size, fallback)

        self.joints = joints

    def link_lengths(self) -> np.ndarray:
        """Distances between each adjacent pair of joints."""
        diffs = np.diff(self.joints, axis=0)
        return np.sqrt((diffs ** 2).sum(axis=1))

    def render(self, ax, color='white', joint_color='#2a2c35', linewidth=3, joint_size=12, **kwargs):
        """
        Draw the bare skeleton on matplotlib axes (debug view).

        Args:
            ax: Matplotlib axes
            color: Color of the links
            joint_color: Fill color of the joint discs
            linewidth: Width of the links
            joint_size: Marker size of the joints
        """
        ax.plot(self.joints[:, 0], self.joints[:, 1], color=color, linewidth=linewidth,
                marker='o', markersize=joint_size, markerfacecolor=joint_color,
                markeredgecolor=color, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            'joints': self.joints.tolist(),
            'angles': self.angles.tolist(),
            'link_size': self.link_size,
            'angle_constraint': self.angle_constraint,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Chain':
        """Deserialize from dictionary."""
        joints = np.array(data['joints'], dtype=np.float64)
        if joints.ndim != 2 or joints.shape[1] != 2:
            raise ValueError(f"Joints must be (N, 2), got {joints.shape}")

        chain = cls(joints[0], len(joints), data['link_size'],
                    data.get('angle_constraint', TWO_PI))
        chain.joints = joints
        angles = data.get('angles')
        if angles is not None:
            if len(angles) != len(joints):
                raise ValueError(f"Got {len(angles)} angles for {len(joints)} joints")
            chain.angles = np.array(angles, dtype=np.float64)
        return chain

    def __repr__(self) -> str:
        return (f"Chain(joint_count={self.joint_count}, link_size={self.link_size}, "
                f"angle_constraint={self.angle_constraint:.4f})")
