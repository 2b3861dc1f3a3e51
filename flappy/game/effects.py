# flappy/game/effects.py
from __future__ import annotations
import math
import random
from dataclasses import dataclass
from typing import Tuple


@dataclass
class ShakeState:
    """Camera shake after impacts. Presentation only: never moves simulation state."""
    strength: float = 0.0
    duration: float = 0.0
    time: float = 0.0

    @property
    def active(self) -> bool:
        return self.duration > 0.0

    def clear(self):
        self.strength = 0.0
        self.duration = 0.0
        self.time = 0.0

    def trigger(self, strength: float, duration: float = 0.3):
        if strength <= 0 or duration <= 0:
            self.clear()
            return
        if self.active:
            # keep the bigger hit
            self.strength = max(strength, self.strength)
            self.duration = max(duration, self.duration - self.time)
        else:
            self.strength = strength
            self.duration = duration
        self.time = 0.0

    def offset(self, dt: float, rng: random.Random) -> Tuple[float, float]:
        """Advance the shake and return this frame's (dx, dy)."""
        if not self.active:
            return 0.0, 0.0
        self.time += dt
        if self.time >= self.duration:
            self.clear()
            return 0.0, 0.0
        magnitude = self.strength * (1.0 - self.time / self.duration)
        angle = rng.random() * math.pi * 2
        return math.cos(angle) * magnitude, math.sin(angle) * magnitude
