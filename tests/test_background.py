import random

import pytest

from tiles2048.background import (
    CYCLE_SECONDS,
    GRADIENTS,
    MAX_PARTICLES,
    ParticleField,
    gradient_colors,
)
from tiles2048.layout import SCREEN_HEIGHT, SCREEN_WIDTH
from tiles2048.theme import Theme


@pytest.mark.parametrize("theme", list(Theme))
def test_gradient_starts_at_first_stop(theme):
    assert gradient_colors(theme, 0.0) == GRADIENTS[theme][0]


@pytest.mark.parametrize("theme", list(Theme))
def test_gradient_is_periodic(theme):
    assert gradient_colors(theme, 5.0) == gradient_colors(theme, 5.0 + CYCLE_SECONDS)


@pytest.mark.parametrize("theme", list(Theme))
def test_gradient_between_neighbouring_stops(theme):
    stops = GRADIENTS[theme]
    seconds = CYCLE_SECONDS * 1.5 / len(stops)
    top, bottom = gradient_colors(theme, seconds)
    assert top.a == 255 and bottom.a == 255
    for blended, (a, b) in ((top, (stops[1][0], stops[2][0])), (bottom, (stops[1][1], stops[2][1]))):
        for value, x, y in zip(blended[:3], a[:3], b[:3]):
            assert min(x, y) <= value <= max(x, y)


def test_field_starts_empty():
    field = ParticleField(random.Random(1))
    assert len(field.particles) == MAX_PARTICLES
    assert field.alive() == []


def test_spawn_waits_for_interval():
    field = ParticleField(random.Random(1))
    field.update(0.01, Theme.CLASSIC)
    assert field.alive() == []
    field.update(0.015, Theme.CLASSIC)
    assert len(field.alive()) == 1


@pytest.mark.parametrize("theme", list(Theme))
def test_spawned_particle_properties(theme):
    field = ParticleField(random.Random(3))
    field.update(0.03, theme)
    (particle,) = field.alive()
    assert 0 <= particle.x <= SCREEN_WIDTH
    assert 0 <= particle.y <= SCREEN_HEIGHT
    assert 1.3 <= particle.max_life < 2.3
    assert particle.life == pytest.approx(particle.max_life - 0.03)
    assert particle.color.a == 255
    assert all(0 <= c <= 255 for c in particle.color)


def test_one_spawn_per_update():
    field = ParticleField(random.Random(5))
    for _ in range(10):
        field.update(0.03, Theme.DARK)
    assert len(field.alive()) == 10


def test_large_step_kills_new_particle():
    field = ParticleField(random.Random(2))
    field.update(5.0, Theme.FOREST)
    assert field.alive() == []


def test_reset_clears_particles():
    field = ParticleField(random.Random(2))
    field.update(0.03, Theme.WARM)
    field.reset()
    assert field.alive() == []
    field.update(0.01, Theme.WARM)
    assert field.alive() == []


def test_wrap_right_edge():
    field = ParticleField(random.Random(0))
    particle = field.particles[0]
    particle.life = particle.max_life = 1.0
    particle.x, particle.y, particle.vx, particle.vy = SCREEN_WIDTH - 1, 50.0, 200.0, 0.0
    field.update(0.01, Theme.CLASSIC)
    assert particle.x == 0
    assert particle.y == 50.0


def test_wrap_top_edge():
    field = ParticleField(random.Random(0))
    particle = field.particles[0]
    particle.life = particle.max_life = 1.0
    particle.x, particle.y, particle.vx, particle.vy = 50.0, 1.0, 0.0, -200.0
    field.update(0.01, Theme.CLASSIC)
    assert particle.y == SCREEN_HEIGHT
    assert particle.life == pytest.approx(0.99)


def test_same_seed_same_particles():
    a = ParticleField(random.Random(42))
    b = ParticleField(random.Random(42))
    for _ in range(5):
        a.update(0.03, Theme.DARK)
        b.update(0.03, Theme.DARK)
    assert a.alive() == b.alive()