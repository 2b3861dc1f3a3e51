# flappy/game/actor.py
from __future__ import annotations
import math
import pygame
from dataclasses import dataclass
from .config import (
    ACTOR_X_RATIO, READY_Y_RATIO, FLOAT_AMPLITUDE, FLOAT_SPEED, FLOAT_TILT,
    FLOAT_TILT_SPEED, DYING_TILT_OFFSET, DYING_TILT_RATE
)
from .metrics import Metrics, PhysicsConfig


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


@dataclass
class Actor:
    """
    The controlled character.
    - (x, y) is the TOP-LEFT corner, y grows downward
    - velocity > 0 means falling
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    velocity: float = 0.0
    rotation: float = 0.0

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), int(self.width), int(self.height))

    def fit(self, metrics: Metrics):
        """Resize to the current metrics and re-anchor horizontally."""
        self.width = metrics.actor_width
        self.height = metrics.actor_height
        self.x = metrics.width * ACTOR_X_RATIO - self.width / 2

    def reset(self, y: float):
        self.y = y
        self.velocity = 0.0
        self.rotation = 0.0

    def apply_gravity(self, dt: float, physics: PhysicsConfig):
        """Accelerate downward, clamped to the terminal fall speed."""
        self.velocity += physics.gravity * dt
        if self.velocity > physics.max_fall_speed:
            self.velocity = physics.max_fall_speed

    def integrate(self, dt: float):
        self.y += self.velocity * dt

    def jump(self, physics: PhysicsConfig):
        # impulse, no easing on the tilt
        self.velocity = physics.jump_velocity
        self.rotation = physics.rotation_up

    def fall_ratio(self, physics: PhysicsConfig) -> float:
        if physics.max_fall_speed <= 0:
            return 0.0
        return min(1.0, max(0.0, self.velocity / physics.max_fall_speed))

    def update_tilt(self, physics: PhysicsConfig):
        """Nose follows the fall speed: up tilt at rest/rising, down tilt at terminal speed."""
        self.rotation = lerp(physics.rotation_up, physics.rotation_down, self.fall_ratio(physics))

    def update_dying_tilt(self, dt: float, physics: PhysicsConfig):
        target = physics.rotation_down + DYING_TILT_OFFSET
        self.rotation = lerp(self.rotation, target, min(1.0, dt * DYING_TILT_RATE))

    def clamp_ceiling(self) -> bool:
        """Stop at the top of the screen. Returns True on contact."""
        if self.y < 0.0:
            self.y = 0.0
            self.velocity = 0.0
            return True
        return False

    def touches_ground(self, ground_y: float) -> bool:
        return self.bottom >= ground_y

    def rest_on_ground(self, ground_y: float):
        self.y = ground_y - self.height

    def idle_float(self, ready_time: float, metrics: Metrics):
        """Sinusoidal bob used while waiting for the first input."""
        h = metrics.height
        self.y = h * READY_Y_RATIO + math.sin(ready_time * FLOAT_SPEED) * h * FLOAT_AMPLITUDE
        self.rotation = math.sin(ready_time * FLOAT_TILT_SPEED) * FLOAT_TILT
