# flappy/game/simulation.py
"""
Simulation driver: owns every piece of game state and advances it once per frame.

    sim = Simulation(width, height, seed=7, store=BestScoreStore())
    sim.handle_primary_action()      # edge-triggered, applied on the next tick
    sim.tick(dt)
    renderer.draw(sim.snapshot())

Phases: READY -> PLAYING -> DYING -> OVER -> PLAYING ...
"""
from __future__ import annotations
import copy
import logging
import math
import random
from dataclasses import dataclass, replace
from typing import Callable, List, Tuple
from .config import (
    MAX_STEP_S, READY_Y_RATIO, START_Y_RATIO, FIRST_SPAWN_S, GRACE_S,
    DYING_MIN_FALL, SHAKE_OBSTACLE, SHAKE_GROUND_HIT, SHAKE_LANDING
)
from .metrics import Metrics, resolve_metrics
from .actor import Actor
from .obstacles import Obstacle, ObstacleManager
from .collision import overlaps
from .effects import ShakeState
from .environment import Background, EnvironmentGen
from .phase import Phase, can_transition
from .storage import MemoryBestStore

logger = logging.getLogger(__name__)

PhaseListener = Callable[[Phase, Phase], None]


@dataclass(frozen=True)
class Snapshot:
    """Detached per-frame view of the simulation for renderers."""
    phase: Phase
    actor: Actor
    obstacles: Tuple[Obstacle, ...]
    score: int
    best: int
    shake_offset: Tuple[float, float]
    background: Background
    metrics: Metrics


def sanitize_dt(dt) -> float:
    """Frame delta clamped to [0, MAX_STEP_S]; junk becomes 0."""
    try:
        dt = float(dt)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(dt) or dt < 0.0:
        return 0.0
    return min(dt, MAX_STEP_S)


class Simulation:
    def __init__(self, width=None, height=None, seed: int | None = None, store=None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        # gameplay and cosmetics draw from separate streams
        self.obstacles = ObstacleManager(seed)
        self.fx_rng = random.Random(seed + 1)
        self.env = EnvironmentGen(self.fx_rng)

        self.store = store if store is not None else MemoryBestStore()
        self.best = self._load_best()
        self.score = 0

        self.metrics, self.physics = resolve_metrics(width, height)
        self.actor = Actor()
        self.actor.fit(self.metrics)

        self.phase = Phase.READY
        self.spawn_timer = 0.0
        self.grace_timer = 0.0
        self.ready_time = 0.0
        self.shake = ShakeState()
        self.shake_offset: Tuple[float, float] = (0.0, 0.0)

        self._pending_action = False
        self._listeners: List[PhaseListener] = []
        self.reset()

    # -------------------- External entry points --------------------

    def handle_primary_action(self):
        """Record one press. Several presses before the next tick count once."""
        self._pending_action = True

    def on_resize(self, width, height):
        """Recompute metrics; a run in progress is abandoned back to READY."""
        self.metrics, self.physics = resolve_metrics(width, height)
        self.actor.fit(self.metrics)
        logger.info("viewport resized to %dx%d", self.metrics.width, self.metrics.height)

        if self.phase in (Phase.PLAYING, Phase.DYING):
            self._set_phase(Phase.READY)

        if self.phase is Phase.OVER:
            # keep the final score on the panel, only refit the scene
            self.obstacles.clear()
            self.env.randomize(self.metrics)
            self.shake.clear()
            self.shake_offset = (0.0, 0.0)
        else:
            self.reset()

    def add_phase_listener(self, callback: PhaseListener):
        self._listeners.append(callback)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            phase=self.phase,
            actor=replace(self.actor),
            obstacles=tuple(replace(o) for o in self.obstacles),
            score=self.score,
            best=self.best,
            shake_offset=self.shake_offset,
            background=copy.deepcopy(self.env.background),
            metrics=self.metrics,
        )

    # -------------------- Run lifecycle --------------------

    def reset(self):
        """Fresh entities for a new run. Best score survives."""
        self.env.randomize(self.metrics)
        self.obstacles.clear()
        self.score = 0
        self.spawn_timer = 0.0
        self.grace_timer = 0.0
        self.actor.reset(self.metrics.height * READY_Y_RATIO)
        self.shake.clear()
        self.shake_offset = (0.0, 0.0)

    def start_run(self):
        """READY/OVER -> PLAYING with the opening jump."""
        if not can_transition(self.phase, Phase.PLAYING):
            return
        self.reset()
        self._set_phase(Phase.PLAYING)
        self.spawn_timer = FIRST_SPAWN_S
        self.actor.y = self.metrics.height * START_Y_RATIO
        self.actor.jump(self.physics)
        self.grace_timer = GRACE_S

    def _start_dying(self, impact: Tuple[float, float]):
        if self.phase is not Phase.PLAYING:
            return
        self._set_phase(Phase.DYING)
        self.spawn_timer = 0.0
        self.grace_timer = 0.0
        self.actor.velocity = max(self.actor.velocity,
                                  self.physics.max_fall_speed * DYING_MIN_FALL)
        self.shake.trigger(*impact)

    def _finalize_game_over(self):
        if self.phase is not Phase.DYING:
            return
        self._set_phase(Phase.OVER)
        if self.score > self.best:
            self.best = self.score
            self._save_best()
        logger.info("run over: score=%d best=%d", self.score, self.best)

    def _set_phase(self, nxt: Phase) -> bool:
        old = self.phase
        if not can_transition(old, nxt):
            logger.error("rejected phase transition %s -> %s", old.value, nxt.value)
            return False
        self.phase = nxt
        if nxt is Phase.READY:
            self.ready_time = 0.0
            self.actor.velocity = 0.0
            self.actor.rotation = 0.0
        logger.info("phase %s -> %s", old.value, nxt.value)
        for callback in self._listeners:
            callback(old, nxt)
        return True

    def _apply_primary_action(self):
        if self.phase in (Phase.READY, Phase.OVER):
            self.start_run()
        elif self.phase is Phase.PLAYING:
            self.actor.jump(self.physics)
        # DYING: ignored

    # -------------------- Persistence --------------------

    def _load_best(self) -> int:
        try:
            return max(0, int(self.store.load_best()))
        except Exception as e:  # any store backend; the game runs without it
            logger.warning("best score unavailable, starting at 0: %s", e)
            return 0

    def _save_best(self):
        try:
            self.store.save_best(self.best)
        except Exception as e:
            logger.warning("best score not persisted: %s", e)

    # -------------------- Frame update --------------------

    def tick(self, dt) -> Phase:
        """Advance one frame. Returns the phase after the update."""
        dt = sanitize_dt(dt)

        if self._pending_action:
            self._pending_action = False
            self._apply_primary_action()

        self.shake_offset = self.shake.offset(dt, self.fx_rng)
        self.env.update_clouds(dt, self.metrics)
        if self.phase is Phase.PLAYING:
            self.env.update_parallax(dt, self.metrics)

        if self.phase is Phase.READY:
            self._update_ready(dt)
        elif self.phase is Phase.PLAYING:
            self._update_playing(dt)
        elif self.phase is Phase.DYING:
            self._update_dying(dt)
        return self.phase

    def _update_ready(self, dt: float):
        self.ready_time += dt
        self.actor.idle_float(self.ready_time, self.metrics)

    def _update_playing(self, dt: float):
        m, actor = self.metrics, self.actor

        if self.grace_timer > 0.0:
            self.grace_timer = max(0.0, self.grace_timer - dt)

        self.spawn_timer -= dt
        if self.spawn_timer <= 0.0:
            self.obstacles.spawn(m)
            self.spawn_timer = m.spawn_interval

        self.obstacles.advance(dt, m.obstacle_speed)
        gained = self.obstacles.score_and_prune(actor.x)
        if gained:
            self.score += gained
            logger.debug("score %d", self.score)

        if self.grace_timer <= 0.0:
            for obstacle in self.obstacles:
                if overlaps(actor, obstacle):
                    self._start_dying(SHAKE_OBSTACLE)
                    return

        actor.apply_gravity(dt, self.physics)
        actor.integrate(dt)
        actor.clamp_ceiling()

        if actor.touches_ground(m.ground_y):
            actor.rest_on_ground(m.ground_y)
            if self.grace_timer <= 0.0:
                self._start_dying(SHAKE_GROUND_HIT)
            else:
                actor.velocity = min(actor.velocity, 0.0)
            return

        actor.update_tilt(self.physics)

    def _update_dying(self, dt: float):
        m, actor = self.metrics, self.actor

        actor.apply_gravity(dt, self.physics)
        actor.integrate(dt)
        if actor.touches_ground(m.ground_y):
            actor.rest_on_ground(m.ground_y)
            self.shake.trigger(*SHAKE_LANDING)
            self._finalize_game_over()

        actor.update_dying_tilt(dt, self.physics)
        # keep the scene scrolling, no spawn, no scoring
        self.obstacles.advance(dt, m.obstacle_speed)
