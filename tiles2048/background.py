"""Animated gradient background and drifting particles."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from .layout import SCREEN_HEIGHT, SCREEN_WIDTH
from .theme import Color, Theme

CYCLE_SECONDS = 24.0
MAX_PARTICLES = 500
SPAWN_INTERVAL = 0.02


def _stops(*pairs):
    return tuple((Color(*top), Color(*bottom)) for top, bottom in pairs)


GRADIENTS: dict[Theme, tuple[tuple[Color, Color], ...]] = {
    Theme.CLASSIC: _stops(
        ((238, 228, 218), (250, 240, 230)),
        ((245, 225, 195), (255, 235, 205)),
        ((250, 210, 170), (255, 220, 180)),
        ((240, 220, 200), (250, 230, 210)),
        ((238, 228, 218), (250, 240, 230)),
    ),
    Theme.DARK: _stops(
        ((40, 44, 52), (60, 64, 72)),
        ((70, 70, 90), (90, 90, 110)),
        ((80, 80, 105), (100, 100, 125)),
        ((55, 58, 72), (75, 78, 92)),
        ((40, 44, 52), (60, 64, 72)),
    ),
    Theme.FOREST: _stops(
        ((95, 115, 73), (135, 155, 93)),
        ((135, 165, 95), (175, 205, 115)),
        ((145, 185, 100), (185, 225, 120)),
        ((115, 145, 85), (155, 185, 105)),
        ((95, 115, 73), (135, 155, 93)),
    ),
    Theme.WARM: _stops(
        ((230, 150, 90), (255, 200, 140)),
        ((255, 180, 100), (255, 220, 150)),
        ((255, 200, 120), (255, 230, 170)),
        ((245, 170, 105), (255, 210, 155)),
        ((230, 150, 90), (255, 200, 140)),
    ),
}

_PRIMARY_HUES = {Theme.CLASSIC: 210.0, Theme.DARK: 45.0, Theme.FOREST: 60.0, Theme.WARM: 180.0}
_SECONDARY_HUES = {Theme.CLASSIC: 35.0, Theme.DARK: 260.0, Theme.FOREST: 85.0, Theme.WARM: 45.0}


def _blend(a: Color, b: Color, amount: float) -> Color:
    return Color(*(int(x + (y - x) * amount) for x, y in zip(a[:3], b[:3])), 255)


def gradient_colors(theme: Theme | int, seconds: float) -> tuple[Color, Color]:
    """Top and bottom colours of the background at a moment in time."""
    stops = GRADIENTS[Theme(theme)]
    count = len(stops)
    t = math.fmod(seconds, CYCLE_SECONDS) / CYCLE_SECONDS
    first = int(t * count) % count
    second = (first + 1) % count
    amount = t * count - first
    (top1, bottom1), (top2, bottom2) = stops[first], stops[second]
    return _blend(top1, top2, amount), _blend(bottom1, bottom2, amount)


def _hsv_color(hue: float, saturation: float, value: float) -> Color:
    def channel(offset: float) -> int:
        k = math.fmod(offset + hue / 60.0, 6.0)
        k = max(0.0, min(k, 4.0 - k, 1.0))
        return int((value - value * saturation * k) * 255.0)

    return Color(channel(5.0), channel(3.0), channel(1.0))


@dataclass
class Particle:
    """A drifting dot; it is alive while life is positive."""

    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    color: Color = Color(0, 0, 0)
    life: float = 0.0
    max_life: float = 0.0


class ParticleField:
    """A fixed pool of particles that spawn one at a time and wrap around the screen."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random
        self.particles = [Particle() for _ in range(MAX_PARTICLES)]
        self._timer = 0.0

    def reset(self) -> None:
        for particle in self.particles:
            particle.life = 0.0
        self._timer = 0.0

    def _spawn(self, particle: Particle, theme: Theme) -> None:
        rng = self._rng
        particle.x = float(rng.randrange(SCREEN_WIDTH))
        particle.y = float(rng.randrange(SCREEN_HEIGHT))
        particle.vx = (rng.randrange(100) - 50) * 0.5
        particle.vy = (rng.randrange(100) - 50) * 0.5
        pick = rng.randrange(100)
        if pick < 40:
            base_hue = _PRIMARY_HUES[theme]
        elif pick < 80:
            base_hue = _SECONDARY_HUES[theme]
        else:
            base_hue = float(rng.randrange(360))
        hue = base_hue + (rng.randrange(120) - 60)
        if hue < 0:
            hue += 360
        if hue >= 360:
            hue -= 360
        saturation = 0.6 + rng.randrange(40) / 100.0
        brightness = 0.7 + rng.randrange(30) / 100.0
        particle.color = _hsv_color(hue, saturation, brightness)
        particle.max_life = 1.3 + rng.randrange(100) / 100.0
        particle.life = particle.max_life

    def update(self, dt: float, theme: Theme | int) -> None:
        """Maybe spawn a particle, then move and age the living ones."""
        self._timer += dt
        if self._timer > SPAWN_INTERVAL:
            self._timer = 0.0
            dead = next((p for p in self.particles if p.life <= 0.0), None)
            if dead is not None:
                self._spawn(dead, Theme(theme))
        for p in self.alive():
            p.x += p.vx * dt
            p.y += p.vy * dt
            p.life -= dt
            if p.x < 0:
                p.x = SCREEN_WIDTH
            if p.x > SCREEN_WIDTH:
                p.x = 0
            if p.y < 0:
                p.y = SCREEN_HEIGHT
            if p.y > SCREEN_HEIGHT:
                p.y = 0

    def alive(self) -> list[Particle]:
        return [p for p in self.particles if p.life > 0.0]