import math
import random

import pytest

from lowballtable.animation import (
    AnimationEngine,
    AnimationTransform,
    CardAnimation,
    ChipAnimation,
    ease_in_cubic,
    ease_in_elastic,
    ease_in_out_cubic,
    ease_in_out_quad,
    ease_in_quad,
    ease_linear,
    ease_out_back,
    ease_out_bounce,
    ease_out_cubic,
    ease_out_elastic,
    ease_out_quad,
    frame_progress,
    frames_for_duration,
    is_complete,
)


def test_easing_endpoints():
    endpoints = [
        (ease_linear(0.0), ease_linear(1.0)),
        (ease_in_quad(0.0), ease_in_quad(1.0)),
        (ease_out_quad(0.0), ease_out_quad(1.0)),
        (ease_in_out_quad(0.0), ease_in_out_quad(1.0)),
        (ease_in_cubic(0.0), ease_in_cubic(1.0)),
        (ease_out_cubic(0.0), ease_out_cubic(1.0)),
        (ease_in_out_cubic(0.0), ease_in_out_cubic(1.0)),
        (ease_in_elastic(0.0), ease_in_elastic(1.0)),
        (ease_out_elastic(0.0), ease_out_elastic(1.0)),
        (ease_out_bounce(0.0), ease_out_bounce(1.0)),
        (ease_out_back(0.0), ease_out_back(1.0)),
    ]
    for start, end in endpoints:
        assert start == pytest.approx(0.0, abs=1e-9)
        assert end == pytest.approx(1.0, abs=1e-9)


@pytest.mark.parametrize("t", [0.1, 0.25, 0.4, 0.6, 0.9])
def test_out_quad_mirrors_in_quad(t):
    assert ease_out_quad(t) == pytest.approx(1 - ease_in_quad(1 - t))


@pytest.mark.parametrize("t", [0.1, 0.25, 0.4, 0.6, 0.9])
def test_out_cubic_mirrors_in_cubic(t):
    assert ease_out_cubic(t) == pytest.approx(1 - ease_in_cubic(1 - t))


def test_in_out_midpoint():
    assert ease_in_out_quad(0.5) == pytest.approx(0.5)
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)


def test_bounce_is_monotone_within_segments():
    values = [ease_out_bounce(i / 100) for i in range(0, 36)]
    assert values == sorted(values)


def test_transform_linear_steps():
    tr = AnimationTransform(0, 0, 10, 20, 0.5)
    assert (tr.x, tr.y) == (0, 0)
    assert tr.update() is False
    assert (tr.x, tr.y) == pytest.approx((5, 10))
    assert tr.update() is True
    assert (tr.x, tr.y) == pytest.approx((10, 20))
    assert tr.update() is True
    assert tr.progress == 1.0


def test_transform_uses_easing():
    tr = AnimationTransform(0, 0, 10, 0, 0.5)
    tr.update(ease_in_quad)
    assert tr.x == pytest.approx(10 * ease_in_quad(0.5))


def test_transform_position_rounds_half_away_from_zero():
    tr = AnimationTransform(2.5, -2.5, 0, 0, 0.1)
    assert tr.position() == (3, -3)


def test_spawn_respects_limit_and_newest_first():
    engine = AnimationEngine(max_particles=3)
    spawned = [engine.spawn_particle(i, 0, 0, 0, 0xFFFFFF, "*") for i in range(5)]
    assert len(engine.particles) == 3
    assert spawned[3] is None and spawned[4] is None
    assert engine.particles[0].x == 2
    assert engine.particles[0].life == 1.0


def test_burst_particles_have_given_speed():
    engine = AnimationEngine()
    engine.particle_burst(10, 5, 8, 2.0, 0xFFD700)
    assert len(engine.particles) == 8
    for p in engine.particles:
        assert math.hypot(p.vx, p.vy) == pytest.approx(2.0)
        assert (p.x, p.y) == (10, 5)
    assert sorted(p.symbol for p in engine.particles) == sorted(["*", ".", "o", "°"] * 2)


def test_particle_update_moves_and_applies_gravity():
    engine = AnimationEngine()
    engine.spawn_particle(0, 0, 1.0, -1.0, 0, "*")
    engine.update_particles()
    p = engine.particles[0]
    assert p.x == pytest.approx(1.0)
    assert p.y == pytest.approx(-1.0)
    assert p.vy == pytest.approx(-0.9)
    assert p.life < 1.0


def test_particles_die_eventually():
    engine = AnimationEngine()
    engine.spawn_particle(0, 0, 0, 0, 0, "*")
    for _ in range(10):
        engine.update()
    assert len(engine.particles) == 1
    for _ in range(50):
        engine.update()
    assert engine.particles == []
    assert engine.frame_count == 60


def test_zero_time_scale_freezes_particles():
    engine = AnimationEngine(time_scale=0.0)
    engine.spawn_particle(3, 4, 1, 1, 0, "*")
    engine.update_particles()
    p = engine.particles[0]
    assert (p.x, p.y, p.life) == (3, 4, 1.0)


def test_screen_shake_expires():
    engine = AnimationEngine()
    engine.screen_shake(2.0, 3)
    for _ in range(3):
        engine.update()
    assert engine.shake_duration == 0
    assert engine.shake_intensity == 0
    assert engine.apply_shake(10, 20) == (10, 20)


def test_apply_shake_at_start():
    engine = AnimationEngine()
    engine.screen_shake(2.0, 5)
    # counter 0: sin term is 0, cos term is full intensity
    assert engine.apply_shake(10, 20) == (10, 22)


def test_winner_celebration_spawns_burst_and_sparkles():
    engine = AnimationEngine()
    engine.winner_celebration(40, 12, random.Random(7))
    assert len(engine.particles) == 30
    sparkles = [p for p in engine.particles if p.symbol == "✨"]
    assert len(sparkles) == 10
    for p in sparkles:
        assert 30 <= p.x < 50
        assert 7 <= p.y < 17
        assert p.vy == -0.5 and p.vx == 0
        assert p.color == 0xFFFFFF


def test_fold_effect_spreads_fragments():
    engine = AnimationEngine()
    engine.fold_effect(4, 9, random.Random(1))
    assert len(engine.particles) == 5
    assert sorted(p.x for p in engine.particles) == [4, 10, 16, 22, 28]
    for p in engine.particles:
        assert p.symbol == "▒"
        assert -0.5 - 1e-9 <= p.vx <= 0.4 + 1e-9
        assert p.vy == 0.5


def test_card_animation_arrives_and_flips():
    card = CardAnimation(0, 0, 12, 6, 0.25)
    assert card.face_up is False
    results = [card.update() for _ in range(4)]
    assert results[-1] is True
    assert card.transform.position() == (12, 6)
    card.flip(True)
    assert card.face_up is True
    assert card.flip_progress == 0.0
    card.update()
    assert card.flip_progress == 1.0


def test_card_rotation_decays():
    card = CardAnimation(0, 0, 1, 1, 0.1)
    card.rotation = 1.0
    card.update()
    assert card.rotation == pytest.approx(0.95)


@pytest.mark.parametrize(
    "value,color",
    [(100, 0x000000), (25, 0x00FF00), (5, 0xFF0000), (1, 0xFFFFFF)],
)
def test_chip_colors(value, color):
    assert ChipAnimation(0, 0, 1, 1, value).color == color


def test_chip_arcs_then_lands():
    chip = ChipAnimation(0, 10, 0, 10, 25)
    chip.update()
    assert chip.transform.y < 10
    done = False
    for _ in range(30):
        done = chip.update()
        if done:
            break
    assert done is True
    assert chip.transform.progress == 1.0
    assert chip.transform.y == pytest.approx(10)


def test_timing_helpers():
    assert frame_progress(5, 0) == 1.0
    assert frame_progress(5, 10) == pytest.approx(0.5)
    assert frames_for_duration(1000, 60) == 60
    assert frames_for_duration(500, 30) == 15
    assert frames_for_duration(-500, 30) == -15
    assert is_complete(1.0) is True
    assert is_complete(0.99) is False