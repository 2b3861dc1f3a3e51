# flappy/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy.game.config import DEFAULT_WIDTH, DEFAULT_HEIGHT, FPS
from flappy.game.phase import Phase
from flappy.game.render import Renderer
from flappy.game.simulation import Simulation
from flappy.game.storage import MemoryBestStore
from flappy.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Gates Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal), fixed dt.
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Episode = one run; it terminates as soon as the actor dies.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 60.0,
                 width: int = DEFAULT_WIDTH,
                 height: int = DEFAULT_HEIGHT,
                 score_reward: float = 5.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.width, self.height = width, height
        self.score_reward = float(score_reward)

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        # Observations: (8,) float32, see observations.build_observation
        low = np.array([0.0, -1.0] + [0.0, 0.0, 0.0] * 2, dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None
        self.death_cause: Optional[str] = None

        # Rendering
        self.screen = None
        self.clock = None
        self.renderer = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeded reset -> that exact layout; otherwise draw from the env RNG
        sim_seed = int(seed) if seed is not None else int(self.np_random.integers(0, 2**31 - 1))

        self.sim = Simulation(self.width, self.height, seed=sim_seed, store=MemoryBestStore())
        self.sim.start_run()

        self.timestep = 0
        self.current_seed = sim_seed
        self.death_cause = None

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None

        if int(action) == 1:
            self.sim.handle_primary_action()

        score_before = self.sim.score
        for _ in range(self.frame_skip):
            self.sim.tick(self.dt)
            if self.sim.phase is not Phase.PLAYING:
                self.death_cause = "ground" if self._on_ground() else "obstacle"
                break

        alive = self.sim.phase is Phase.PLAYING
        gained = self.sim.score - score_before
        reward = (1.0 if alive else -1.0) + self.score_reward * gained

        self.timestep += 1
        terminated = not alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.sim.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "phase": self.sim.phase.value,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim.actor, self.sim.obstacles.obstacles,
                                 self.sim.metrics, self.sim.physics)

    def _on_ground(self) -> bool:
        assert self.sim is not None
        return self.sim.actor.touches_ground(self.sim.metrics.ground_y)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return

        if self.screen is None:
            pygame.init()
            size = (int(self.sim.metrics.width), int(self.sim.metrics.height))
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("Flappy Gates — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(size)
            self.renderer = Renderer(self.screen)

        if self.render_mode == "human":
            # Pump the event queue so the OS doesn't think we're hung
            pygame.event.pump()

        self.renderer.draw(self.sim.snapshot())

        if self.render_mode == "human":
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", 60))
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
