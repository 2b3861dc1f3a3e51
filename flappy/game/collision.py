# flappy/game/collision.py
from __future__ import annotations
from .actor import Actor
from .obstacles import Obstacle


def overlaps(actor: Actor, obstacle: Obstacle) -> bool:
    """AABB test: actor overlaps the column horizontally and pokes out of the gap."""
    within_x = (actor.x + actor.width > obstacle.x) and (actor.x < obstacle.x + obstacle.width)
    if not within_x:
        return False
    hits_top = actor.y < obstacle.gap_top
    hits_bottom = actor.y + actor.height > obstacle.gap_bottom
    return hits_top or hits_bottom
