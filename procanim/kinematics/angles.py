"""
Angle arithmetic for kinematic chains.

Angles are radians in the canonical range [0, 2pi). All handling of the
0/2pi seam lives in this module; callers never subtract two angles directly.
"""

import math
import numpy as np

TWO_PI = 2 * math.pi

# Below this length a direction vector has no usable heading
MIN_DIRECTION_LENGTH = 1e-12


def normalize(angle: float) -> float:
    """
    Map any finite angle into [0, 2pi).

    Args:
        angle: Angle in radians

    Returns:
        Equivalent angle in [0, 2pi)
    """
    if not math.isfinite(angle):
        raise ValueError(f"Cannot normalize non-finite angle: {angle}")

    result = float(angle) % TWO_PI
    # Tiny negative inputs round up to exactly 2pi
    if result >= TWO_PI:
        result -= TWO_PI
    return result


def relative_angle_diff(angle: float, anchor: float) -> float:
    """
    Signed shortest rotation that turns `anchor` into `angle`.

    The angle is re-expressed in a frame where the anchor sits at pi, so
    small differences never cross the seam. The result lies in (-pi, pi];
    which sign an exact half-turn gets is not meaningful.

    Args:
        angle: Angle being measured
        anchor: Reference angle

    Returns:
        Difference in (-pi, pi], positive when `angle` is counter-clockwise
        of `anchor`
    """
    return math.pi - normalize(anchor - angle + math.pi)


def constrain_angle(angle: float, anchor: float, constraint: float) -> float:
    """
    Clamp an angle to within `constraint` radians of `anchor`.

    Args:
        angle: Angle to constrain
        anchor: Reference angle
        constraint: Maximum permitted absolute difference

    Returns:
        Normalized angle, unchanged if already within the constraint
    """
    diff = relative_angle_diff(angle, anchor)

    if abs(diff) <= constraint:
        return normalize(angle)

    if diff > constraint:
        return normalize(anchor + constraint)

    return normalize(anchor - constraint)


def heading(vector: np.ndarray) -> float:
    """Heading of a 2-D vector, atan2 convention."""
    return math.atan2(float(vector[1]), float(vector[0]))


def from_angle(angle: float, length: float = 1.0) -> np.ndarray:
    """Vector of the given length pointing along `angle`."""
    return np.array([math.cos(angle) * length, math.sin(angle) * length], dtype=np.float64)


def lerp(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation between two points (t=0 gives a, t=1 gives b)."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    return (1 - t) * a + t * b


def constrain_distance(pos: np.ndarray, anchor: np.ndarray, distance: float) -> np.ndarray:
    """
    Point on the ray from `anchor` through `pos`, exactly `distance` from `anchor`.

    Args:
        pos: Point giving the direction
        anchor: Origin of the ray
        distance: Distance of the result from the anchor

    Returns:
        New (2,) float64 array

    Raises:
        ValueError: If `pos` and `anchor` coincide (no direction)
    """
    pos = np.asarray(pos, dtype=np.float64)
    anchor = np.asarray(anchor, dtype=np.float64)

    direction = pos - anchor
    length = float(np.hypot(direction[0], direction[1]))
    if length < MIN_DIRECTION_LENGTH:
        raise ValueError(f"Cannot constrain distance: point {pos.tolist()} coincides with anchor")

    return anchor + direction * (distance / length)


def step_toward(origin: np.ndarray, target: np.ndarray, step: float) -> np.ndarray:
    """
    Point exactly `step` away from `origin` in the direction of `target`.

    Overshoots when the target is closer than `step`. Returns a copy of
    `origin` when the two points coincide.
    """
    origin = np.asarray(origin, dtype=np.float64)
    target = np.asarray(target, dtype=np.float64)

    if np.hypot(*(target - origin)) < MIN_DIRECTION_LENGTH:
        return origin.copy()

    return constrain_distance(target, origin, step)
