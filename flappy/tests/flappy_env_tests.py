# flappy/tests/flappy_env_tests.py
"""
Quick tests for FlappyEnv (Gymnasium environment) and its observation vector.

Usage (from repo root):
  python -m flappy.tests.flappy_env_tests
  python -m flappy.tests.flappy_env_tests --render
  python -m flappy.tests.flappy_env_tests --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Tuple

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
from gymnasium.utils.env_checker import check_env

from flappy.env.flappy_env import FlappyEnv
from flappy.env.observations import build_observation, OBS_SIZE
from flappy.game.actor import Actor
from flappy.game.metrics import resolve_metrics
from flappy.game.obstacles import Obstacle

SEED = 123
STEPS = 300
FRAME_SKIP = 4


def test_api_check(frame_skip: int = FRAME_SKIP) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=frame_skip)
    env.action_space.seed(seed)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term:
                assert info["phase"] == "dying"
                assert info["death_cause"] in ("ground", "obstacle")
                assert r <= -1.0 + 5.0 * info["score"]
            if term or trunc:
                break
    finally:
        env.close()


def test_noop_episode_ends_on_ground(seed: int = SEED) -> None:
    """Never flapping: the actor drops onto the ground once the grace period is over."""
    env = FlappyEnv(frame_skip=1)
    try:
        env.reset(seed=seed)
        for _ in range(10 * 60):
            _, r, term, trunc, info = env.step(0)
            if term:
                break
        assert term, "a NOOP run must end"
        assert r == -1.0
        assert info["death_cause"] == "ground"
        assert info["score"] == 0
    finally:
        env.close()


def test_determinism(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.2) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")


def test_rgb_array_render(seed: int = SEED) -> None:
    env = FlappyEnv(render_mode="rgb_array", width=320, height=480)
    try:
        env.reset(seed=seed)
        env.step(1)
        frame = env.render()
        assert isinstance(frame, np.ndarray)
        assert frame.shape == (480, 320, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def test_observation_layout() -> None:
    m, p = resolve_metrics(480, 720)
    actor = Actor(x=93.0, y=360.0, width=54.0, height=43.2, velocity=p.max_fall_speed * 2)
    behind = Obstacle(x=0.0, width=44.0, gap_top=100.0, gap_bottom=300.0)
    near = Obstacle(x=189.0, width=44.0, gap_top=144.0, gap_bottom=432.0)
    far = Obstacle(x=429.0, width=44.0, gap_top=72.0, gap_bottom=288.0)

    obs = build_observation(actor, [behind, near, far], m, p)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert np.isclose(obs[0], 0.5)
    assert obs[1] == 1.0, "vy clipped to 1"
    assert np.allclose(obs[2:5], [96 / 480, 0.2, 0.6]), "first block describes the nearest obstacle ahead"
    assert np.allclose(obs[5:8], [336 / 480, 0.1, 0.4])

    empty = build_observation(actor, [], m, p)
    assert np.allclose(empty[2:], [1.0, 0.0, 1.0, 1.0, 0.0, 1.0]), "sentinels when nothing is ahead"


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    os.environ.pop("SDL_VIDEODRIVER", None)
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _, _, term, trunc, _ = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=SEED, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=STEPS, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=FRAME_SKIP, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        test_observation_layout()
        print("✓ Observation layout ok")
        if not args.no_api_check:
            test_api_check(frame_skip=args.frame_skip)
            print("✓ API check ok")
        if not args.no_smoke:
            test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            test_noop_episode_ends_on_ground(seed=args.seed)
            print("✓ Smoke test ok")
        if not args.no_determinism:
            test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Determinism ok")
        test_rgb_array_render(seed=args.seed)
        print("✓ rgb_array render ok")
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
