# flappy/game/obstacles.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import List, Tuple
import pygame
from .config import (
    GAP_JITTER, GAP_CLAMP, GAP_TOP_MARGIN, GAP_BOTTOM_MARGIN,
    WIDTH_JITTER, WIDTH_CLAMP
)
from .metrics import Metrics

logger = logging.getLogger(__name__)


def clamp(v: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, v))


@dataclass
class Obstacle:
    """A gated column: solid above gap_top and below gap_bottom."""
    x: float
    width: float
    gap_top: float        # height of the upper block
    gap_bottom: float     # y where the lower block starts
    scored: bool = False

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def gap_height(self) -> float:
        return self.gap_bottom - self.gap_top

    def rects(self, ground_y: float) -> Tuple[pygame.Rect, pygame.Rect]:
        """(upper, lower) blocks in screen space, for drawing."""
        top = pygame.Rect(int(self.x), 0, int(self.width), int(self.gap_top))
        bot = pygame.Rect(int(self.x), int(self.gap_bottom),
                          int(self.width), max(0, int(ground_y - self.gap_bottom)))
        return top, bot


class ObstacleManager:
    """
    Spawns obstacles at the right edge, scrolls them left, scores and prunes them.
    Obstacles stay ordered oldest-first (left to right).
    """
    def __init__(self, seed: int | None = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.obstacles: List[Obstacle] = []

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self):
        return iter(self.obstacles)

    def clear(self):
        self.obstacles = []

    def spawn(self, metrics: Metrics) -> Obstacle:
        """Append one obstacle just past the right edge with a randomised gap."""
        h = metrics.height
        gap = clamp(metrics.gap * self.rng.uniform(*GAP_JITTER),
                    h * GAP_CLAMP[0], h * GAP_CLAMP[1])
        min_top = h * GAP_TOP_MARGIN
        max_top = max(min_top + 40, metrics.ground_y - gap - h * GAP_BOTTOM_MARGIN)
        gap_top = self.rng.uniform(min_top, max_top)

        nominal = metrics.obstacle_width
        width = clamp(nominal * self.rng.uniform(*WIDTH_JITTER),
                      nominal * WIDTH_CLAMP[0], nominal * WIDTH_CLAMP[1])

        obstacle = Obstacle(
            x=metrics.width + width,
            width=width,
            gap_top=gap_top,
            gap_bottom=gap_top + gap,
        )
        self.obstacles.append(obstacle)
        logger.debug("spawned obstacle gap=[%.1f, %.1f] w=%.1f",
                     obstacle.gap_top, obstacle.gap_bottom, width)
        return obstacle

    def advance(self, dt: float, speed: float):
        dx = speed * dt
        for obstacle in self.obstacles:
            obstacle.x -= dx

    def score_and_prune(self, actor_x: float) -> int:
        """
        Mark obstacles whose trailing edge passed the actor's leading edge.
        Returns how many were newly scored; drops those fully off-screen.
        """
        gained = 0
        for obstacle in self.obstacles:
            if not obstacle.scored and obstacle.right < actor_x:
                obstacle.scored = True
                gained += 1
        self.obstacles = [o for o in self.obstacles if o.right >= -o.width]
        return gained
