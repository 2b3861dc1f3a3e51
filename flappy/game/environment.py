# flappy/game/environment.py
from __future__ import annotations
import colorsys
import random
from dataclasses import dataclass, field
from typing import List, Tuple
from .config import PARALLAX_FAR, PARALLAX_MID, CLOUD_SPACING_PX, MIN_CLOUDS
from .metrics import Metrics

RGB = Tuple[int, int, int]


def hsl(h: float, s: float, l: float) -> RGB:
    """CSS-style hsl(deg, %, %) to an RGB tuple."""
    r, g, b = colorsys.hls_to_rgb((h % 360) / 360.0,
                                  min(100.0, max(0.0, l)) / 100.0,
                                  min(100.0, max(0.0, s)) / 100.0)
    return int(round(r * 255)), int(round(g * 255)), int(round(b * 255))


@dataclass
class CloudLump:
    offset_x: float
    offset_y: float
    radius_x: float
    radius_y: float


@dataclass
class Cloud:
    x: float
    y: float
    width: float
    height: float
    speed: float
    opacity: float
    lumps: List[CloudLump] = field(default_factory=list)


@dataclass
class Sun:
    x: float = 0.0
    y: float = 0.0
    radius: float = 0.0
    glow: RGB = (255, 221, 140)


@dataclass
class Background:
    sky_stops: List[Tuple[float, RGB]] = field(default_factory=lambda: [
        (0.0, (79, 202, 254)), (0.55, (103, 213, 255)), (1.0, (164, 232, 255))
    ])
    sun: Sun = field(default_factory=Sun)
    far_color: RGB = (127, 187, 255)
    mid_color: RGB = (111, 213, 129)
    parallax_far: float = 0.0
    parallax_mid: float = 0.0
    ground_offset: float = 0.0
    clouds: List[Cloud] = field(default_factory=list)


class EnvironmentGen:
    """
    Randomised sky theme and drifting clouds. Cosmetic only: it draws from its
    own random stream so gameplay stays reproducible.
    """
    def __init__(self, rng: random.Random):
        self.rng = rng
        self.background = Background()

    def _r(self, lo: float, hi: float) -> float:
        return self.rng.uniform(lo, hi)

    def randomize(self, metrics: Metrics) -> Background:
        """New palette, sun and cloud field; parallax and ground offsets restart at 0."""
        w, h = metrics.width, metrics.height
        base_hue = self._r(185, 225)
        variance = self._r(-8, 10)
        sat = self._r(60, 78)

        bg = Background(
            sky_stops=[
                (0.0, hsl(base_hue + variance, sat, 78)),
                (0.45, hsl(base_hue, sat + 5, 72)),
                (0.8, hsl(base_hue - 6, sat + 3, 68)),
                (1.0, hsl(base_hue - 12, sat + 2, 82)),
            ],
            sun=Sun(
                x=w * self._r(0.62, 0.88),
                y=h * self._r(0.12, 0.22),
                radius=min(w, h) * self._r(0.07, 0.11),
                glow=hsl(base_hue + 120, 95, 85),
            ),
            far_color=hsl(base_hue - 22, max(40, sat - 20), 74),
            mid_color=hsl(base_hue - 48, max(38, sat - 18), 58),
        )

        count = max(MIN_CLOUDS, round(w / CLOUD_SPACING_PX))
        clouds = sorted((self.create_cloud(metrics) for _ in range(count)), key=lambda c: c.x)
        # spread them out so they don't start in one clump
        spacing = w / len(clouds)
        for i, cloud in enumerate(clouds):
            jitter = self._r(-spacing * 0.35, spacing * 0.35)
            cloud.x = (spacing * i + jitter + w) % w
        bg.clouds = clouds

        self.background = bg
        return bg

    def create_cloud(self, metrics: Metrics) -> Cloud:
        w, h = metrics.width, metrics.height
        cw = max(120, w * 0.13) * self._r(0.55, 1.4)
        ch = cw * self._r(0.32, 0.5)
        return Cloud(
            x=self.rng.random() * w,
            y=h * self._r(0.05, 0.32),
            width=cw,
            height=ch,
            speed=max(22.0, metrics.obstacle_speed * self._r(0.045, 0.095)),
            opacity=self._r(0.18, 0.42),
            lumps=[
                CloudLump(-cw * self._r(0.2, 0.35), ch * self._r(-0.05, 0.1),
                          cw * self._r(0.35, 0.48), ch * self._r(0.52, 0.7)),
                CloudLump(0.0, -ch * self._r(0.05, 0.18),
                          cw * self._r(0.4, 0.55), ch * self._r(0.5, 0.68)),
                CloudLump(cw * self._r(0.18, 0.32), ch * self._r(-0.02, 0.15),
                          cw * self._r(0.28, 0.4), ch * self._r(0.48, 0.65)),
            ],
        )

    def update_clouds(self, dt: float, metrics: Metrics):
        """Drift left; a cloud leaving the screen is recycled past the right edge."""
        for cloud in self.background.clouds:
            cloud.x -= cloud.speed * dt
            if cloud.x < -cloud.width * 1.2:
                fresh = self.create_cloud(metrics)
                cloud.width, cloud.height = fresh.width, fresh.height
                cloud.lumps = fresh.lumps
                cloud.speed, cloud.opacity = fresh.speed, fresh.opacity
                cloud.x = metrics.width + cloud.width * self._r(0.1, 0.6)
                cloud.y = metrics.height * self._r(0.05, 0.35)

    def update_parallax(self, dt: float, metrics: Metrics):
        bg = self.background
        w = metrics.width
        speed = metrics.obstacle_speed
        bg.parallax_far = (bg.parallax_far + speed * PARALLAX_FAR * dt) % w
        bg.parallax_mid = (bg.parallax_mid + speed * PARALLAX_MID * dt) % w
        bg.ground_offset = (bg.ground_offset + speed * dt) % w
