"""Tests for creature bodies and drawing."""

import math

import numpy as np
import pytest

from procanim.config import AppConfig
from procanim.kinematics import relative_angle_diff
from procanim.models import Fish, Snake, Lizard, create_creature, CREATURES
from procanim.models.base import smooth_closed_curve, cubic_bezier, data_to_points


def _walk(creature, ticks=40):
    t = np.linspace(0, math.pi, ticks)
    for x, y in zip(640 + 300 * np.cos(t), 400 + 200 * np.sin(t)):
        creature.resolve(np.array([x, y]))
    return creature


@pytest.mark.parametrize("name,joints,speed", [
    ('fish', 12, 16.0),
    ('snake', 48, 8.0),
    ('lizard', 14, 12.0),
])
def test_create_creature_defaults(name, joints, speed, center):
    creature = create_creature(name, center)

    assert isinstance(creature, CREATURES[name])
    assert creature.spine.joint_count == joints
    assert creature.spine.link_size == 64
    assert creature.spine.angle_constraint == pytest.approx(math.pi / 8)
    assert creature.config.head_speed == speed


def test_create_creature_unknown_name(center):
    with pytest.raises(ValueError):
        create_creature('dragon', center)


def test_head_moves_by_head_speed(center):
    fish = Fish(center)
    fish.resolve(center + np.array([0.0, -500.0]))

    np.testing.assert_allclose(fish.spine.joints[0], center + [0.0, -16.0])


def test_pointer_on_head_does_not_move(center):
    snake = _walk(Snake(center), 10)
    head = snake.spine.joints[0].copy()
    heading = snake.spine.angles[0]

    snake.resolve(head.copy())

    np.testing.assert_array_equal(snake.spine.joints[0], head)
    assert snake.spine.angles[0] == heading


def test_snake_body_width():
    snake = Snake(np.array([0.0, 0.0]))
    assert snake.body_width(0) == 76
    assert snake.body_width(1) == 80
    assert snake.body_width(2) == 62
    assert snake.body_width(47) == 17


def test_outline_shapes(center):
    fish = _walk(Fish(center))
    snake = _walk(Snake(center))
    lizard = _walk(Lizard(center))

    assert fish.body_outline().shape == (24, 2)
    assert snake.body_outline().shape == (100, 2)
    assert lizard.body_outline().shape == (31, 2)
    for creature in (fish, snake, lizard):
        assert creature.eye_positions().shape == (2, 2)


def test_get_pos_offsets_from_joint(center):
    fish = Fish(center)
    fish.resolve(center + np.array([100.0, 0.0]))

    # Heading 0, so a quarter turn points down the screen
    np.testing.assert_allclose(fish.get_pos(0, math.pi / 2, 0), fish.spine.joints[0] + [0, 68])
    np.testing.assert_allclose(fish.get_pos(0, 0, -18), fish.spine.joints[0] + [50, 0])


def test_fish_bend_follows_turn(center):
    fish = Fish(center)
    for _ in range(300):
        fish.resolve(fish.spine.joints[0] + np.array([2000.0, 0.0]))
    straight = fish.bend()
    assert abs(straight['head_to_tail']) < 1e-4

    # The tail lags behind a turn toward +y
    for _ in range(8):
        fish.resolve(fish.spine.joints[0] + np.array([0.0, 2000.0]))
    bend = fish.bend()
    assert bend['head_to_mid1'] == pytest.approx(relative_angle_diff(fish.spine.angles[6], fish.spine.angles[0]))
    assert bend['head_to_tail'] < 0


def test_fish_fins(center):
    fish = _walk(Fish(center))

    fins = fish.paired_fins()
    assert len(fins) == 4
    assert [(w, h) for _, w, h, _ in fins] == [(160, 64), (160, 64), (96, 32), (96, 32)]
    assert fish.caudal_fin().shape == (8, 2)
    assert fish.dorsal_fin().shape == (47, 2)


def test_lizard_limb_curves(center):
    lizard = _walk(Lizard(center))
    for i in range(Lizard.LIMB_COUNT):
        curve = lizard.limb_curve(i)
        np.testing.assert_allclose(curve[0], lizard.arms[i].joints[-1])
        np.testing.assert_allclose(curve[-1], lizard.arms[i].joints[0])


@pytest.mark.parametrize("name", list(CREATURES))
@pytest.mark.parametrize("debug", [False, True])
def test_render(name, debug, center, screen_axes):
    creature = _walk(create_creature(name, center))
    creature.render(screen_axes, debug=debug)

    assert len(screen_axes.patches) >= 3
    if debug:
        assert len(screen_axes.lines) >= len(creature.get_skeleton())


@pytest.mark.parametrize("name", list(CREATURES))
def test_to_dict_restore(name, center):
    config = AppConfig()
    creature = _walk(create_creature(name, center, config))
    fresh = create_creature(name, center, config)

    fresh.restore(creature.to_dict())

    for restored, original in zip(fresh.get_skeleton(), creature.get_skeleton()):
        np.testing.assert_array_equal(restored.joints, original.joints)
        np.testing.assert_array_equal(restored.angles, original.angles)


def test_restore_rejects_other_creature(center):
    fish = Fish(center)
    with pytest.raises(ValueError):
        Snake(center).restore(fish.to_dict())


def test_restore_rejects_wrong_joint_count(center):
    data = Fish(center).to_dict()
    data['spine']['joints'] = data['spine']['joints'][:5]
    data['spine']['angles'] = data['spine']['angles'][:5]
    with pytest.raises(ValueError):
        Fish(center).restore(data)


def test_smooth_closed_curve_is_closed():
    t = np.linspace(0, 2 * math.pi, 8, endpoint=False)
    octagon = np.column_stack([10 * np.cos(t), 10 * np.sin(t)])
    curve = smooth_closed_curve(octagon, n_eval=50)

    assert curve.shape == (50, 2)
    np.testing.assert_allclose(curve[0], curve[-1], atol=1e-6)


def test_smooth_closed_curve_short_input_passthrough():
    tri = np.array([[0, 0], [10, 0], [10, 0], [5, 5]], dtype=float)
    np.testing.assert_array_equal(smooth_closed_curve(tri), [[0, 0], [10, 0], [5, 5]])


def test_cubic_bezier_endpoints():
    curve = cubic_bezier([0, 0], [0, 10], [10, 10], [10, 0], n_eval=11)

    assert curve.shape == (11, 2)
    np.testing.assert_allclose(curve[0], [0, 0])
    np.testing.assert_allclose(curve[-1], [10, 0])
    np.testing.assert_allclose(curve[5], [5, 7.5])


def test_data_to_points_scales_with_axes(screen_axes):
    assert data_to_points(screen_axes, 4) > 0
    assert data_to_points(screen_axes, 8) == pytest.approx(2 * data_to_points(screen_axes, 4))


@pytest.mark.parametrize("key,edit", [
    ('arms', lambda arms: arms[:3]),
    ('arms', lambda arms: [dict(arm, link_size=99) for arm in arms]),
    ('arms', lambda arms: [dict(arm, joints=arm['joints'][:2], angles=arm['angles'][:2]) for arm in arms]),
    ('feet', lambda feet: []),
])
def test_lizard_restore_validates_legs(key, edit, center):
    source = _walk(Lizard(center))
    data = source.to_dict()
    data[key] = edit(data[key])

    lizard = Lizard(center)
    head = lizard.spine.joints[0].copy()
    with pytest.raises(ValueError):
        lizard.restore(data)

    np.testing.assert_array_equal(lizard.spine.joints[0], head)


def test_lizard_restore_feet(center):
    source = _walk(Lizard(center))
    lizard = Lizard(center)
    lizard.restore(source.to_dict())

    for restored, original in zip(lizard.feet, source.feet):
        np.testing.assert_array_equal(restored.position, original.position)
        assert restored.step_count == original.step_count
