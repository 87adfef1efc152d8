"""Kinematics package: angle arithmetic and link chains."""

from procanim.kinematics.angles import (
    TWO_PI,
    normalize,
    relative_angle_diff,
    constrain_angle,
    constrain_distance,
)
from procanim.kinematics.chain import Chain

__all__ = ['TWO_PI', 'normalize', 'relative_angle_diff', 'constrain_angle',
           'constrain_distance', 'Chain']
