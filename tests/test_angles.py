"""Tests for angle arithmetic."""

import math

import numpy as np
import pytest

from procanim.kinematics.angles import (
    TWO_PI,
    normalize,
    relative_angle_diff,
    constrain_angle,
    constrain_distance,
    heading,
    from_angle,
    lerp,
    step_toward,
)


def test_normalize_keeps_canonical_range():
    assert normalize(0) == 0
    assert normalize(math.pi) == pytest.approx(math.pi)
    assert normalize(TWO_PI) == pytest.approx(0)
    assert normalize(3 * math.pi) == pytest.approx(math.pi)


def test_normalize_negative_angles():
    assert normalize(-math.pi) == pytest.approx(math.pi)
    assert normalize(-TWO_PI) == pytest.approx(0)
    assert normalize(-math.pi / 2) == pytest.approx(1.5 * math.pi)


def test_normalize_large_angles():
    assert normalize(5 * math.pi) == pytest.approx(math.pi)
    result = normalize(10 * math.pi)
    assert min(result, TWO_PI - result) == pytest.approx(0, abs=1e-9)
    assert 0 <= normalize(1e6) < TWO_PI


def test_normalize_tiny_negative_does_not_return_two_pi():
    result = normalize(-1e-17)
    assert 0 <= result < TWO_PI


def test_normalize_idempotent():
    for x in np.linspace(-50, 50, 1001):
        once = normalize(x)
        assert 0 <= once < TWO_PI
        assert normalize(once) == once


def test_normalize_rejects_non_finite():
    with pytest.raises(ValueError):
        normalize(float('nan'))
    with pytest.raises(ValueError):
        normalize(float('inf'))


def test_relative_angle_diff_identical_is_zero():
    for a in [0, math.pi, math.pi / 2, 6.2, -3.0, 100.0]:
        assert relative_angle_diff(a, a) == 0


def test_relative_angle_diff_direction():
    assert relative_angle_diff(math.pi / 2, 0) == pytest.approx(math.pi / 2)
    assert relative_angle_diff(0, math.pi / 2) == pytest.approx(-math.pi / 2)


def test_relative_angle_diff_across_seam():
    assert relative_angle_diff(0.1, TWO_PI - 0.1) == pytest.approx(0.2)
    assert relative_angle_diff(TWO_PI - 0.1, 0.1) == pytest.approx(-0.2)


def test_relative_angle_diff_recovers_offset():
    for anchor in [0.0, 0.05, 1.0, math.pi, 5.0, TWO_PI - 0.05]:
        for d in np.linspace(-math.pi + 0.01, math.pi - 0.01, 41):
            assert relative_angle_diff(anchor + d, anchor) == pytest.approx(d, abs=1e-9)


def test_relative_angle_diff_antisymmetric():
    for a in np.linspace(0, TWO_PI, 17):
        for b in np.linspace(0.3, 7.0, 13):
            assert relative_angle_diff(a, b) == pytest.approx(-relative_angle_diff(b, a), abs=1e-9)


def test_relative_angle_diff_range():
    for a in np.linspace(-10, 10, 97):
        diff = relative_angle_diff(a, 1.3)
        assert -math.pi < diff <= math.pi


def test_constrain_angle_within_constraint_unchanged():
    assert constrain_angle(math.pi / 4, 0, math.pi / 2) == pytest.approx(math.pi / 4)


def test_constrain_angle_positive_overshoot():
    assert constrain_angle(math.pi / 2, 0, math.pi / 4) == pytest.approx(math.pi / 4)


def test_constrain_angle_negative_overshoot():
    assert constrain_angle(-math.pi / 2, 0, math.pi / 4) == pytest.approx(TWO_PI - math.pi / 4)


def test_constrain_angle_across_seam():
    # 0.5 is 0.6 counter-clockwise of 2pi-0.1, clamp to 0.2 past the anchor
    assert constrain_angle(0.5, TWO_PI - 0.1, 0.2) == pytest.approx(0.1)


def test_constrain_angle_no_op_returns_normalized():
    rng = np.random.default_rng(3)
    for angle, anchor in rng.uniform(-20, 20, size=(200, 2)):
        constraint = math.pi / 8
        if abs(relative_angle_diff(angle, anchor)) <= constraint:
            assert constrain_angle(angle, anchor, constraint) == normalize(angle)
        else:
            result = constrain_angle(angle, anchor, constraint)
            assert abs(relative_angle_diff(result, anchor)) == pytest.approx(constraint)


def test_constrain_angle_full_circle_is_unconstrained():
    for angle in np.linspace(-7, 7, 29):
        assert constrain_angle(angle, 2.0, TWO_PI) == normalize(angle)


def test_constrain_distance_exact_distance():
    result = constrain_distance(np.array([10.0, 0.0]), np.array([0.0, 0.0]), 5)
    np.testing.assert_allclose(result, [5.0, 0.0])


def test_constrain_distance_non_zero_anchor():
    anchor = np.array([10.0, 10.0])
    result = constrain_distance(np.array([20.0, 10.0]), anchor, 5)
    assert np.hypot(*(result - anchor)) == pytest.approx(5)


def test_constrain_distance_preserves_direction():
    anchor = np.array([3.0, -2.0])
    pos = np.array([13.0, 8.0])
    result = constrain_distance(pos, anchor, 5)

    expected_dir = (pos - anchor) / np.hypot(*(pos - anchor))
    actual_dir = (result - anchor) / np.hypot(*(result - anchor))
    np.testing.assert_allclose(actual_dir, expected_dir)
    assert np.hypot(*(result - anchor)) == pytest.approx(5, rel=1e-12)


def test_constrain_distance_extends_short_vectors():
    result = constrain_distance(np.array([0.0, 1.0]), np.array([0.0, 0.0]), 50)
    np.testing.assert_allclose(result, [0.0, 50.0])


def test_constrain_distance_coincident_points_raise():
    with pytest.raises(ValueError):
        constrain_distance(np.array([4.0, 4.0]), np.array([4.0, 4.0]), 10)


def test_heading_and_from_angle():
    assert heading(np.array([1.0, 0.0])) == 0
    assert heading(np.array([0.0, 2.0])) == pytest.approx(math.pi / 2)
    np.testing.assert_allclose(from_angle(math.pi / 2, 3), [0.0, 3.0], atol=1e-12)


def test_lerp():
    np.testing.assert_allclose(lerp([0, 0], [10, 20], 0.4), [4, 8])
    np.testing.assert_allclose(lerp([1, 1], [5, 5], 0), [1, 1])


def test_step_toward_moves_fixed_distance():
    result = step_toward(np.array([0.0, 0.0]), np.array([300.0, 400.0]), 16)
    assert np.hypot(*result) == pytest.approx(16)
    np.testing.assert_allclose(result / 16, [0.6, 0.8])


def test_step_toward_overshoots_close_target():
    result = step_toward(np.array([0.0, 0.0]), np.array([1.0, 0.0]), 8)
    np.testing.assert_allclose(result, [8.0, 0.0])


def test_step_toward_coincident_returns_origin():
    origin = np.array([7.0, 7.0])
    result = step_toward(origin, origin.copy(), 8)
    np.testing.assert_array_equal(result, origin)
    assert result is not origin
