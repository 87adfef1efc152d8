"""
Foot planting for limbs.

A limb's foot holds a cached spot and only moves to a new one once the
body has carried the ideal spot far enough away. Between steps the foot
eases toward the cached spot, which gives discrete stepping instead of
sliding.
"""

from typing import Optional, Tuple
import numpy as np

from procanim.kinematics.angles import lerp


def next_desired(cached: np.ndarray, candidate: np.ndarray, threshold: float) -> Tuple[np.ndarray, bool]:
    """
    Decide the foot spot for this tick.

    Args:
        cached: Current planted spot
        candidate: Ideal spot given the body's current pose
        threshold: Distance beyond which the foot steps

    Returns:
        (spot, stepped): the candidate if it is farther than `threshold`
        from the cached spot, else the cached spot unchanged
    """
    cached = np.asarray(cached, dtype=np.float64)
    candidate = np.asarray(candidate, dtype=np.float64)

    if np.hypot(*(candidate - cached)) > threshold:
        return candidate.copy(), True
    return cached, False


class FootPlant:
    """Hysteresis state for one limb."""

    def __init__(self, position: Optional[np.ndarray] = None, threshold: float = 200.0,
                 ease: float = 0.4):
        """
        Args:
            position: Initial planted spot (defaults to the origin)
            threshold: Step distance threshold
            ease: Interpolation factor from the foot toward the spot per tick
        """
        if threshold < 0:
            raise ValueError(f"threshold must be non-negative, got {threshold}")
        if not 0 < ease <= 1:
            raise ValueError(f"ease must be in (0, 1], got {ease}")

        self.position = (np.zeros(2) if position is None
                         else np.array(position, dtype=np.float64))
        self.threshold = float(threshold)
        self.ease = float(ease)
        self.step_count = 0

    def update(self, candidate: np.ndarray) -> bool:
        """
        Feed this tick's ideal spot.

        Returns:
            True if the foot picked a new spot
        """
        self.position, stepped = next_desired(self.position, candidate, self.threshold)
        if stepped:
            self.step_count += 1
        return stepped

    def target(self, foot: np.ndarray) -> np.ndarray:
        """Head target for the limb chain: part way from `foot` to the spot."""
        return lerp(foot, self.position, self.ease)

    def to_dict(self):
        return {'position': self.position.tolist(), 'step_count': self.step_count}

    def __repr__(self) -> str:
        return f"FootPlant(position=({self.position[0]:.1f}, {self.position[1]:.1f}), steps={self.step_count})"
