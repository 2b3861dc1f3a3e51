# flappy/game/render.py
from __future__ import annotations
import math
from typing import List, Sequence, Tuple
import pygame
from .config import (
    COLOR_FG, COLOR_SHADOW, COLOR_OBSTACLE, COLOR_OBSTACLE_LIP, COLOR_OBSTACLE_SHADE,
    COLOR_GROUND_TOP, COLOR_GROUND_BOT, COLOR_ACTOR, COLOR_ACTOR_WING, COLOR_ACTOR_BEAK,
    COLOR_EYE, COLOR_PANEL, COLOR_PANEL_EDGE
)
from .environment import RGB, Background
from .phase import Phase
from .simulation import Snapshot

LIP_H = 18


def _mix(a: RGB, b: RGB, t: float) -> RGB:
    return tuple(int(a[i] + (b[i] - a[i]) * t) for i in range(3))


def _quad(p0, p1, p2, steps: int = 16) -> List[Tuple[float, float]]:
    """Sample a quadratic Bezier (p0 excluded)."""
    pts = []
    for i in range(1, steps + 1):
        t = i / steps
        u = 1 - t
        pts.append((u * u * p0[0] + 2 * u * t * p1[0] + t * t * p2[0],
                    u * u * p0[1] + 2 * u * t * p1[1] + t * t * p2[1]))
    return pts


class Renderer:
    """
    Paints a Snapshot. Read-only with respect to the simulation:
    everything it needs comes from the snapshot.
    """
    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.canvas = pygame.Surface(screen.get_size())
        self.font = pygame.font.SysFont("jetbrainsmono", 18)
        self.font_big = pygame.font.SysFont("jetbrainsmono", 48, bold=True)

    def resize(self, screen: pygame.Surface):
        self.screen = screen
        self.canvas = pygame.Surface(screen.get_size())

    def draw(self, snap: Snapshot):
        if self.canvas.get_size() != self.screen.get_size():
            self.canvas = pygame.Surface(self.screen.get_size())
        c = self.canvas
        self._draw_background(c, snap)
        self._draw_obstacles(c, snap)
        self._draw_ground(c, snap)
        self._draw_actor(c, snap)

        dx, dy = snap.shake_offset
        self.screen.fill(COLOR_SHADOW)
        self.screen.blit(c, (int(dx), int(dy)))
        # HUD and panels do not shake
        self._draw_hud(self.screen, snap)

    # -------------------- Scene --------------------

    def _draw_background(self, surf: pygame.Surface, snap: Snapshot):
        m, bg = snap.metrics, snap.background
        w, ground_y = int(m.width), int(m.ground_y)
        self._sky(surf, bg.sky_stops, w, ground_y)

        sun = bg.sun
        if sun.radius > 0:
            glow = pygame.Surface((w, ground_y), pygame.SRCALPHA)
            for k, alpha in ((1.4, 40), (1.0, 90), (0.6, 200)):
                color = (255, 255, 240) if k < 1.0 else sun.glow
                pygame.draw.circle(glow, (*color, alpha), (int(sun.x), int(sun.y)), int(sun.radius * k))
            surf.blit(glow, (0, 0))

        for i in (-1, 0, 1):
            self._far_range(surf, bg.far_color, i * m.width - bg.parallax_far, m)
        self._clouds(surf, bg)
        for i in (-1, 0, 1):
            self._near_hills(surf, bg.mid_color, i * m.width - bg.parallax_mid, m)

    @staticmethod
    def _sky(surf: pygame.Surface, stops: Sequence[Tuple[float, RGB]], w: int, ground_y: int):
        if not stops:
            surf.fill((79, 202, 254))
            return
        for y in range(max(1, ground_y)):
            t = y / max(1, ground_y - 1)
            color = stops[-1][1]
            for (o0, c0), (o1, c1) in zip(stops, stops[1:]):
                if o0 <= t <= o1:
                    color = _mix(c0, c1, (t - o0) / max(1e-6, o1 - o0))
                    break
            pygame.draw.line(surf, color, (0, y), (w, y))

    @staticmethod
    def _far_range(surf, color: RGB, base_x: float, m):
        w, h, gy = m.width, m.height, m.ground_y
        horizon = gy - m.ground_height * 0.82
        pts = [
            (base_x, gy),
            (base_x + w * 0.08, horizon + h * 0.09),
            (base_x + w * 0.24, horizon - h * 0.08),
            (base_x + w * 0.46, horizon + h * 0.03),
            (base_x + w * 0.68, horizon - h * 0.1),
            (base_x + w * 0.88, horizon + h * 0.06),
            (base_x + w, gy),
        ]
        pygame.draw.polygon(surf, color, pts)

    @staticmethod
    def _near_hills(surf, color: RGB, base_x: float, m):
        w, h, gy = m.width, m.height, m.ground_y
        hill = gy - m.ground_height * 0.48
        start = (base_x, gy)
        mid = (base_x + w * 0.34, hill + h * 0.02)
        end = (base_x + w * 0.82, hill + h * 0.05)
        pts = [start]
        pts += _quad(start, (base_x + w * 0.16, hill - h * 0.08), mid)
        pts += _quad(mid, (base_x + w * 0.58, hill - h * 0.1), end)
        pts.append((base_x + w, gy))
        pygame.draw.polygon(surf, color, pts)

    @staticmethod
    def _clouds(surf: pygame.Surface, bg: Background):
        for cloud in bg.clouds:
            layer = pygame.Surface((int(cloud.width * 2), int(cloud.height * 3)), pygame.SRCALPHA)
            ox, oy = layer.get_width() / 2, layer.get_height() / 2
            for lump in cloud.lumps:
                r = pygame.Rect(0, 0, int(lump.radius_x * 2), int(lump.radius_y * 2))
                r.center = (int(ox + lump.offset_x), int(oy + lump.offset_y))
                pygame.draw.ellipse(layer, (255, 255, 255), r)
            layer.set_alpha(int(255 * cloud.opacity))
            surf.blit(layer, (int(cloud.x - ox), int(cloud.y - oy)))

    @staticmethod
    def _draw_obstacles(surf: pygame.Surface, snap: Snapshot):
        gy = snap.metrics.ground_y
        for o in snap.obstacles:
            top, bot = o.rects(gy)
            pygame.draw.rect(surf, COLOR_OBSTACLE, top)
            pygame.draw.rect(surf, COLOR_OBSTACLE, bot)
            pygame.draw.rect(surf, COLOR_OBSTACLE_LIP,
                             (int(o.x - 4), int(o.gap_top - LIP_H), int(o.width + 8), LIP_H))
            pygame.draw.rect(surf, COLOR_OBSTACLE_LIP,
                             (int(o.x - 4), int(o.gap_bottom), int(o.width + 8), LIP_H))
            sx, sw = int(o.x + o.width * 0.18), max(1, int(o.width * 0.1))
            pygame.draw.rect(surf, COLOR_OBSTACLE_SHADE, (sx, 0, sw, top.height))
            pygame.draw.rect(surf, COLOR_OBSTACLE_SHADE, (sx, bot.top, sw, bot.height))

    @staticmethod
    def _draw_ground(surf: pygame.Surface, snap: Snapshot):
        m = snap.metrics
        w, gy, gh = int(m.width), int(m.ground_y), int(m.ground_height)
        for i in range(gh):
            pygame.draw.line(surf, _mix(COLOR_GROUND_TOP, COLOR_GROUND_BOT, i / max(1, gh - 1)),
                             (0, gy + i), (w, gy + i))
        tile = max(24.0, m.width * 0.06)
        x = -tile + (snap.background.ground_offset % tile)
        while x < m.width + tile:
            pygame.draw.rect(surf, COLOR_GROUND_BOT,
                             (int(x), int(gy + gh * 0.55), int(tile * 0.5), int(tile * 0.35)))
            x += tile
        pygame.draw.line(surf, COLOR_SHADOW, (0, gy - 1), (w, gy - 1), 2)

    @staticmethod
    def _draw_actor(surf: pygame.Surface, snap: Snapshot):
        a = snap.actor
        w, h = max(1, int(a.width)), max(1, int(a.height))
        body = pygame.Surface((w * 2, h * 2), pygame.SRCALPHA)
        cx, cy = w, h

        def ellipse(color, ox, oy, rx, ry):
            r = pygame.Rect(0, 0, int(rx * 2), int(ry * 2))
            r.center = (int(cx + ox), int(cy + oy))
            pygame.draw.ellipse(body, color, r)

        ellipse(COLOR_ACTOR, 0, 0, w * 0.55, h * 0.58)
        ellipse(COLOR_ACTOR_WING, -w * 0.1, h * 0.05, w * 0.35, h * 0.25)
        ellipse((255, 255, 255), w * 0.18, -h * 0.18, w * 0.22, h * 0.22)
        ellipse(COLOR_EYE, w * 0.24, -h * 0.2, w * 0.08, h * 0.08)
        pygame.draw.polygon(body, COLOR_ACTOR_BEAK, [
            (cx + w * 0.45, cy - h * 0.05), (cx + w * 0.75, cy), (cx + w * 0.45, cy + h * 0.08)
        ])

        rotated = pygame.transform.rotate(body, -math.degrees(a.rotation))
        rect = rotated.get_rect(center=a.rect.center)
        surf.blit(rotated, rect)

    # -------------------- Overlay --------------------

    def _text(self, surf, msg: str, font, center: Tuple[int, int], color=COLOR_FG):
        shadow = font.render(msg, True, COLOR_SHADOW)
        img = font.render(msg, True, color)
        r = img.get_rect(center=center)
        surf.blit(shadow, r.move(2, 2))
        surf.blit(img, r)

    def _panel(self, surf, lines: Sequence[str]):
        w, h = surf.get_size()
        rect = pygame.Rect(0, 0, min(w - 40, 320), 40 + 28 * len(lines))
        rect.center = (w // 2, h // 2)
        panel = pygame.Surface(rect.size, pygame.SRCALPHA)
        panel.fill((*COLOR_PANEL, 200))
        surf.blit(panel, rect)
        pygame.draw.rect(surf, COLOR_PANEL_EDGE, rect, width=2, border_radius=10)
        for i, line in enumerate(lines):
            self._text(surf, line, self.font, (rect.centerx, rect.top + 32 + 28 * i))

    def _draw_hud(self, surf: pygame.Surface, snap: Snapshot):
        w = surf.get_width()
        if snap.phase in (Phase.PLAYING, Phase.DYING):
            self._text(surf, str(snap.score), self.font_big, (w // 2, 60))
        self._text(surf, f"Best: {snap.best}", self.font, (w - 70, 20))

        if snap.phase is Phase.READY:
            self._panel(surf, ["Get ready", "SPACE / click to flap"])
        elif snap.phase is Phase.OVER:
            self._panel(surf, ["Game over", f"Score: {snap.score}   Best: {snap.best}",
                               "SPACE / click to restart"])
