# flappy/game/metrics.py
from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple
from .config import (
    DEFAULT_WIDTH, DEFAULT_HEIGHT, MIN_WIDTH, MIN_HEIGHT,
    GROUND_MIN_H, GROUND_RATIO, GAP_MIN, GAP_RATIO,
    OBSTACLE_MIN_W, OBSTACLE_W_RATIO, OBSTACLE_MIN_SPEED, OBSTACLE_SPEED_RATIO,
    SPAWN_INTERVAL_S, ACTOR_MIN_H, ACTOR_H_RATIO, ACTOR_ASPECT,
    GRAVITY_RATIO, JUMP_RATIO, MAX_FALL_RATIO, ROTATION_UP, ROTATION_DOWN
)


@dataclass(frozen=True)
class Metrics:
    """Layout constants derived from the viewport. Recomputed on resize."""
    width: float
    height: float
    ground_height: float
    ground_y: float
    gap: float
    obstacle_width: float
    obstacle_speed: float
    spawn_interval: float
    actor_width: float
    actor_height: float


@dataclass(frozen=True)
class PhysicsConfig:
    gravity: float
    jump_velocity: float      # negative = up
    max_fall_speed: float
    rotation_up: float = ROTATION_UP
    rotation_down: float = ROTATION_DOWN


def _floored(value, floor: float, default: float) -> float:
    """Coerce a viewport dimension; junk falls back to the default, small values to the floor."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = default
    if not math.isfinite(v):
        v = default
    return max(floor, v)


def resolve_metrics(width=None, height=None) -> Tuple[Metrics, PhysicsConfig]:
    """
    Derive every size/speed constant from the viewport.
    Physics scales with height so the feel is resolution-independent.
    """
    w = _floored(width, MIN_WIDTH, DEFAULT_WIDTH)
    h = _floored(height, MIN_HEIGHT, DEFAULT_HEIGHT)

    ground_h = max(GROUND_MIN_H, h * GROUND_RATIO)
    actor_h = max(ACTOR_MIN_H, h * ACTOR_H_RATIO)

    metrics = Metrics(
        width=w,
        height=h,
        ground_height=ground_h,
        ground_y=h - ground_h,
        gap=max(GAP_MIN, h * GAP_RATIO),
        obstacle_width=max(OBSTACLE_MIN_W, w * OBSTACLE_W_RATIO),
        obstacle_speed=max(OBSTACLE_MIN_SPEED, w * OBSTACLE_SPEED_RATIO),
        spawn_interval=SPAWN_INTERVAL_S,
        actor_width=actor_h * ACTOR_ASPECT,
        actor_height=actor_h,
    )
    physics = PhysicsConfig(
        gravity=h * GRAVITY_RATIO,
        jump_velocity=-h * JUMP_RATIO,
        max_fall_speed=h * MAX_FALL_RATIO,
    )
    return metrics, physics
