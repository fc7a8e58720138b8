# flappy/tests/flappy_env_tests.py
"""
Quick tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  python -m flappy.tests.flappy_env_tests
  python -m flappy.tests.flappy_env_tests --render
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from flappy.env.flappy_env import FlappyEnv
from flappy.env.observations import build_observation, next_pair, _norm_vy
from flappy.game.pipes import Pipe
from flappy.game.player import Player
from flappy.game.config import BOARD_HEIGHT, PLAYER_H


def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv()
    try:
        check_env(env.unwrapped, skip_render_check=True)
    finally:
        env.close()


def test_reset_starts_playing():
    env = FlappyEnv()
    try:
        obs, info = env.reset(seed=5)
        assert env.observation_space.contains(obs)
        assert info["seed"] == 5 and info["score"] == 0.0
        assert info["outcome"] == "none"
        assert obs[1] < 0.0, "Reset should begin with the opening flap"
    finally:
        env.close()


def test_smoke(steps: int = 400, seed: int = 123):
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=2)
    env.action_space.seed(seed)
    try:
        obs, info = env.reset(seed=seed)
        for t in range(steps):
            obs, r, term, trunc, info = env.step(env.action_space.sample())
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_noop_falls_and_terminates():
    env = FlappyEnv(frame_skip=4)
    try:
        env.reset(seed=1)
        term = False
        for _ in range(50):
            _, r, term, trunc, info = env.step(0)
            if term:
                break
        assert term, "Never flapping must end the episode"
        assert r == -1.0 and info["death_cause"] == "floor"
    finally:
        env.close()


def test_time_limit_truncates():
    env = FlappyEnv(frame_skip=1, time_limit_seconds=0.1)   # 6 decisions
    try:
        env.reset(seed=1)
        for i in range(6):
            _, _, term, trunc, _ = env.step(0)
        assert trunc and not term
    finally:
        env.close()


def test_determinism(steps: int = 300, seed: int = 7):
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=2)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.1) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.allclose(o1, o2), f"Determinism: obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"Determinism: transition mismatch at step {i}"


def test_observation_without_pipes():
    player = Player(y=BOARD_HEIGHT - PLAYER_H, vy=50.0)
    obs = build_observation(player, [], score=0.0)
    assert obs.dtype == np.float32 and obs.shape == (6,), "Shape/dtype mismatch"
    assert obs[0] == 1.0 and obs[1] == 1.0
    assert (obs[2], obs[3], obs[4]) == (1.0, 0.0, 1.0), "No-pair sentinels"


def test_observation_tracks_next_unpassed_pair():
    player = Player(x=70, y=100, vy=0.0)
    passed_top = Pipe(x=0, y=-300, lane="top", passed=True)
    passed_bot = Pipe(x=0, y=372, lane="bot", passed=True)
    top = Pipe(x=300, y=-192, lane="top")     # bottom edge at 320
    bot = Pipe(x=300, y=480, lane="bot")
    pipes = [passed_top, passed_bot, top, bot]

    assert next_pair(pipes) == (top, bot)
    obs = build_observation(player, pipes, score=5.0)
    assert np.isclose(obs[2], (364 - 70) / 560)
    assert np.isclose(obs[3], 320 / 640) and np.isclose(obs[4], 480 / 640)
    assert np.isclose(obs[5], 0.5)


def test_vy_normalization_is_plain_float():
    assert type(_norm_vy(5.0)) is float
    assert _norm_vy(-100.0) == -1.0 and _norm_vy(10.0) == 0.5


def render_demo(steps: int, seed: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = FlappyEnv(render_mode="human")
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
    ap.add_argument("--seed", type=int, default=123, help="Episode seed for tests")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    args = ap.parse_args()

    try:
        test_api_check()
        print("✓ API check ok")
        test_reset_starts_playing()
        test_smoke(seed=args.seed)
        print("✓ Smoke test ok")
        test_noop_falls_and_terminates()
        test_time_limit_truncates()
        test_determinism(seed=args.seed)
        print("✓ Determinism ok")
        test_observation_without_pipes()
        test_observation_tracks_next_unpassed_pair()
        test_vy_normalization_is_plain_float()
        print("✓ Observation checks ok")
        if args.render:
            render_demo(steps=300, seed=args.seed)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
