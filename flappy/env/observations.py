# flappy/env/observations.py
from __future__ import annotations
from typing import List, Sequence
import numpy as np

from flappy.game.actor import Actor
from flappy.game.obstacles import Obstacle
from flappy.game.metrics import Metrics, PhysicsConfig

OBS_SIZE = 8
LOOKAHEAD = 2   # obstacles described ahead of the actor

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _ahead(actor: Actor, obstacles: Sequence[Obstacle]) -> List[Obstacle]:
    """Obstacles whose trailing edge is not yet behind the actor, nearest first."""
    return [o for o in obstacles if o.x + o.width >= actor.x][:LOOKAHEAD]

def build_observation(
    actor: Actor,
    obstacles: Sequence[Obstacle],
    metrics: Metrics,
    physics: PhysicsConfig,
) -> np.ndarray:
    """
    Returns a fixed (8,) float32 vector:
      [ y_norm, vy_norm,
        dx@1, gapTop@1, gapBottom@1,
        dx@2, gapTop@2, gapBottom@2 ]
    - y_norm: actor top / viewport height, in [0,1] (same scale as the gaps)
    - vy_norm: velocity / max_fall_speed, clipped to [-1,1]
    - dx: (obstacle.x - actor.x) / width, clipped to [0,1]
    - gap edges normalised by viewport height
    Sentinel for a missing obstacle: dx=1, gapTop=0, gapBottom=1 (wide open).
    """
    y_norm = _clamp01(actor.y / metrics.height)
    vmax = max(1.0, physics.max_fall_speed)
    vy_norm = max(-1.0, min(1.0, actor.velocity / vmax))

    feats: List[float] = [y_norm, vy_norm]
    upcoming = _ahead(actor, obstacles)
    for i in range(LOOKAHEAD):
        if i < len(upcoming):
            o = upcoming[i]
            feats.extend([
                _clamp01((o.x - actor.x) / metrics.width),
                _clamp01(o.gap_top / metrics.height),
                _clamp01(o.gap_bottom / metrics.height),
            ])
        else:
            feats.extend([1.0, 0.0, 1.0])

    return np.asarray(feats, dtype=np.float32)
