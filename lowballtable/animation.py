"""Frame-based animation helpers: easing curves, transforms, particles and effects."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

Easing = Callable[[float], float]

_PARTICLE_GRAVITY = 0.1
_PARTICLE_DECAY = 0.02
_BURST_SYMBOLS = ("*", ".", "o", "°")


# --------------------------------------------------------------------------
# Easing functions
# --------------------------------------------------------------------------


def ease_linear(t: float) -> float:
    return t


def ease_in_quad(t: float) -> float:
    return t * t


def ease_out_quad(t: float) -> float:
    return t * (2 - t)


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_in_cubic(t: float) -> float:
    return t * t * t


def ease_out_cubic(t: float) -> float:
    t -= 1
    return 1 + t * t * t


def ease_in_out_cubic(t: float) -> float:
    if t < 0.5:
        return 4 * t * t * t
    return (t - 1) * (2 * t - 2) * (2 * t - 2) + 1


def ease_in_elastic(t: float) -> float:
    if t in (0, 1):
        return t
    period = 0.3
    return -math.pow(2, 10 * (t - 1)) * math.sin((t - 1.1) * 2 * math.pi / period)


def ease_out_elastic(t: float) -> float:
    if t in (0, 1):
        return t
    period = 0.3
    return math.pow(2, -10 * t) * math.sin((t - 0.1) * 2 * math.pi / period) + 1


def ease_out_bounce(t: float) -> float:
    if t < 1 / 2.75:
        return 7.5625 * t * t
    if t < 2 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def ease_out_back(t: float) -> float:
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * math.pow(t - 1, 3) + c1 * math.pow(t - 1, 2)


def _round_half_away(value: float) -> int:
    """Round to nearest integer, halves away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


# --------------------------------------------------------------------------
# Transforms
# --------------------------------------------------------------------------


@dataclass
class AnimationTransform:
    """Movement from a start point to an end point, advanced a step per frame."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float
    speed: float
    x: float = field(init=False)
    y: float = field(init=False)
    progress: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.x = self.start_x
        self.y = self.start_y
        self.progress = 0.0

    def update(self, easing: Optional[Easing] = None) -> bool:
        """Advance one frame; return True once the end is reached."""
        if self.progress >= 1.0:
            return True
        self.progress = min(self.progress + self.speed, 1.0)
        eased = easing(self.progress) if easing else self.progress
        self.x = self.start_x + (self.end_x - self.start_x) * eased
        self.y = self.start_y + (self.end_y - self.start_y) * eased
        return self.progress >= 1.0

    def position(self) -> Tuple[int, int]:
        """Current position as whole cells, ``(x, y)``."""
        return _round_half_away(self.x), _round_half_away(self.y)


# --------------------------------------------------------------------------
# Particles and the engine
# --------------------------------------------------------------------------


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    color: int
    symbol: str
    life: float = 1.0


class AnimationEngine:
    """Particle system, screen shake and a global frame counter."""

    def __init__(self, max_particles: int = 1000, time_scale: float = 1.0) -> None:
        self.particles: List[Particle] = []  # newest first
        self.max_particles = max_particles
        self.shake_intensity = 0.0
        self.shake_duration = 0
        self.shake_counter = 0
        self.frame_count = 0
        self.time_scale = time_scale

    def update(self) -> None:
        """Advance the engine by one frame."""
        self.frame_count += 1
        self.update_particles()
        if self.shake_duration > 0:
            self.shake_counter += 1
            self.shake_duration -= 1
            if self.shake_duration == 0:
                self.shake_intensity = 0.0

    def spawn_particle(
        self, x: float, y: float, vx: float, vy: float, color: int, symbol: str
    ) -> Optional[Particle]:
        """Add a particle unless the limit is reached; return it or None."""
        if len(self.particles) >= self.max_particles:
            return None
        particle = Particle(x=x, y=y, vx=vx, vy=vy, color=color, symbol=symbol)
        self.particles.insert(0, particle)
        return particle

    def particle_burst(
        self, x: float, y: float, count: int, speed: float, color: int
    ) -> None:
        """Spawn ``count`` particles moving outward evenly around a circle."""
        for i in range(count):
            angle = i / count * 2 * math.pi
            self.spawn_particle(
                x,
                y,
                math.cos(angle) * speed,
                math.sin(angle) * speed,
                color,
                _BURST_SYMBOLS[i % len(_BURST_SYMBOLS)],
            )

    def update_particles(self) -> None:
        """Move particles, apply gravity, age them and drop the dead ones."""
        scale = self.time_scale
        alive: List[Particle] = []
        for p in self.particles:
            p.x += p.vx * scale
            p.y += p.vy * scale
            p.vy += _PARTICLE_GRAVITY * scale
            p.life -= _PARTICLE_DECAY * scale
            if p.life > 0:
                alive.append(p)
        self.particles = alive

    def screen_shake(self, intensity: float, duration: int) -> None:
        self.shake_intensity = intensity
        self.shake_duration = duration
        self.shake_counter = 0

    def apply_shake(self, x: int, y: int) -> Tuple[int, int]:
        """Return ``(x, y)`` displaced by the current shake."""
        if self.shake_intensity <= 0:
            return x, y
        shake_x = math.sin(self.shake_counter * 0.5) * self.shake_intensity
        shake_y = math.cos(self.shake_counter * 0.7) * self.shake_intensity
        return x + int(shake_x), y + int(shake_y)

    def winner_celebration(
        self, x: int, y: int, rng: Optional[random.Random] = None
    ) -> None:
        """Golden burst plus sparkles scattered around the winner."""
        rng = rng or random.Random()
        self.particle_burst(x, y, 20, 2.0, 0xFFD700)
        for _ in range(10):
            offset_x = rng.randrange(20) - 10
            offset_y = rng.randrange(10) - 5
            self.spawn_particle(x + offset_x, y + offset_y, 0, -0.5, 0xFFFFFF, "✨")

    def fold_effect(self, x: int, y: int, rng: Optional[random.Random] = None) -> None:
        """Five card fragments drifting down from a folded hand."""
        rng = rng or random.Random()
        for i in range(5):
            vx = (rng.randrange(10) - 5) * 0.1
            self.spawn_particle(x + i * 6, y, vx, 0.5, 0x808080, "▒")


# --------------------------------------------------------------------------
# Card and chip animations
# --------------------------------------------------------------------------


class CardAnimation:
    """A card dealt from one point to another, with flip and spin state."""

    def __init__(
        self, start_x: int, start_y: int, end_x: int, end_y: int, speed: float
    ) -> None:
        self.transform = AnimationTransform(start_x, start_y, end_x, end_y, speed)
        self.rotation = 0.0
        self.scale = 1.0
        self.flip_progress = 0.0
        self.face_up = False

    def flip(self, to_face_up: bool) -> None:
        self.face_up = to_face_up
        self.flip_progress = 0.0

    def update(self) -> bool:
        """Advance one frame; return True once the card has arrived."""
        arrived = self.transform.update(ease_out_cubic)
        # The flip is tracked as a flag: any progress completes it.
        if self.flip_progress < 1.0:
            self.flip_progress = 1.0
        if self.rotation != 0:
            self.rotation *= 0.95
        return arrived


class ChipAnimation:
    """A chip tossed in an arc towards the pot."""

    def __init__(
        self, start_x: int, start_y: int, end_x: int, end_y: int, value: int
    ) -> None:
        self.transform = AnimationTransform(start_x, start_y, end_x, end_y, 0.05)
        self.value = value
        self.arc_height = 5.0
        if value >= 100:
            self.color = 0x000000
        elif value >= 25:
            self.color = 0x00FF00
        elif value >= 5:
            self.color = 0xFF0000
        else:
            self.color = 0xFFFFFF

    def update(self) -> bool:
        """Advance one frame; return True once the chip has landed."""
        complete = self.transform.update(ease_out_quad)
        if not complete and self.arc_height > 0:
            self.transform.y -= math.sin(self.transform.progress * math.pi) * self.arc_height
        return complete


# --------------------------------------------------------------------------
# Timing
# --------------------------------------------------------------------------


def frame_progress(current_frame: int, total_frames: int) -> float:
    if total_frames <= 0:
        return 1.0
    return current_frame / total_frames


def frames_for_duration(duration_ms: int, fps: int) -> int:
    """Whole frames in ``duration_ms`` at ``fps``, truncated toward zero."""
    product = duration_ms * fps
    frames = abs(product) // 1000
    return frames if product >= 0 else -frames


def is_complete(progress: float) -> bool:
    return progress >= 1.0