# flappy/tests/obstacles_tests.py
"""
Obstacle spawning, scrolling, scoring and pruning.

Usage (from repo root):
  python -m flappy.tests.obstacles_tests
"""
from __future__ import annotations
import sys

from flappy.game.metrics import resolve_metrics
from flappy.game.obstacles import Obstacle, ObstacleManager

SIZES = [(320, 480), (480, 720), (1280, 720), (1920, 1080)]


def test_spawn_gap_bounds_hold():
    for w, h in SIZES:
        m, _ = resolve_metrics(w, h)
        mgr = ObstacleManager(seed=2024)
        for _ in range(300):
            o = mgr.spawn(m)
            assert 0.26 * h - 1e-9 <= o.gap_height <= 0.44 * h + 1e-9, f"gap {o.gap_height} at {w}x{h}"
            assert o.gap_top >= 0.08 * h - 1e-9, "gap too close to the top"
            assert o.gap_bottom <= m.ground_y - 0.09 * h + 1e-9, "gap too close to the ground"
            nominal = m.obstacle_width
            assert 0.85 * nominal - 1e-9 <= o.width <= 1.12 * nominal + 1e-9
            assert o.x == m.width + o.width, "spawns just past the right edge"
            assert not o.scored
        assert len(mgr) == 300


def test_spawn_is_deterministic_for_a_seed():
    m, _ = resolve_metrics(480, 720)
    a, b, c = ObstacleManager(seed=7), ObstacleManager(seed=7), ObstacleManager(seed=8)
    seq_a = [(o.gap_top, o.gap_bottom, o.width) for o in (a.spawn(m) for _ in range(20))]
    seq_b = [(o.gap_top, o.gap_bottom, o.width) for o in (b.spawn(m) for _ in range(20))]
    seq_c = [(o.gap_top, o.gap_bottom, o.width) for o in (c.spawn(m) for _ in range(20))]
    assert seq_a == seq_b
    assert seq_a != seq_c


def test_advance_shifts_left():
    mgr = ObstacleManager(seed=1)
    mgr.obstacles = [Obstacle(x=300.0, width=40.0, gap_top=100.0, gap_bottom=300.0),
                     Obstacle(x=500.0, width=40.0, gap_top=100.0, gap_bottom=300.0)]
    mgr.advance(0.5, 200.0)
    assert [o.x for o in mgr] == [200.0, 400.0]


def test_scores_once_per_obstacle():
    mgr = ObstacleManager(seed=1)
    mgr.obstacles = [Obstacle(x=100.0, width=50.0, gap_top=100.0, gap_bottom=300.0)]
    actor_x = 120.0

    assert mgr.score_and_prune(actor_x) == 0, "trailing edge not past the actor yet"
    mgr.advance(0.1, 400.0)                 # right edge -> 110
    assert mgr.score_and_prune(actor_x) == 1
    assert mgr.obstacles[0].scored
    for _ in range(5):
        assert mgr.score_and_prune(actor_x) == 0, "never scored twice"
        mgr.advance(0.01, 400.0)


def test_prunes_off_screen_and_keeps_order():
    mgr = ObstacleManager(seed=1)
    mgr.obstacles = [
        Obstacle(x=-101.0, width=50.0, gap_top=0.0, gap_bottom=1.0, scored=True),   # right = -51
        Obstacle(x=-100.0, width=50.0, gap_top=0.0, gap_bottom=1.0, scored=True),   # right = -50, kept
        Obstacle(x=200.0, width=50.0, gap_top=0.0, gap_bottom=1.0),
        Obstacle(x=400.0, width=50.0, gap_top=0.0, gap_bottom=1.0),
    ]
    gained = mgr.score_and_prune(actor_x=100.0)
    assert gained == 0
    assert [o.x for o in mgr] == [-100.0, 200.0, 400.0]


def test_pruned_obstacle_scores_before_leaving():
    mgr = ObstacleManager(seed=1)
    mgr.obstacles = [Obstacle(x=0.0, width=50.0, gap_top=0.0, gap_bottom=1.0)]
    # one huge jump past the actor and off-screen: still counted once
    mgr.advance(1.0, 500.0)
    assert mgr.score_and_prune(actor_x=100.0) == 1
    assert len(mgr) == 0


def test_clear_empties():
    m, _ = resolve_metrics(480, 720)
    mgr = ObstacleManager(seed=5)
    for _ in range(3):
        mgr.spawn(m)
    mgr.clear()
    assert len(mgr) == 0


TESTS = [
    test_spawn_gap_bounds_hold,
    test_spawn_is_deterministic_for_a_seed,
    test_advance_shifts_left,
    test_scores_once_per_obstacle,
    test_prunes_off_screen_and_keeps_order,
    test_pruned_obstacle_scores_before_leaving,
    test_clear_empties,
]


def main():
    try:
        for t in TESTS:
            t()
            print(f"✓ {t.__name__}")
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    print("🎉 obstacle checks passed")


if __name__ == "__main__":
    main()
