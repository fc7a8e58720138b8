# /experiments/sanity_rollout.py
"""
Baseline rollouts for FlappyEnv: a coin-flip flapper and a "stay above the
lower lip" rule, played over fixed seeds. One CSV row per episode.

Usage (from repo root):
  python -m experiments.sanity_rollout                       # both policies, seeds 101..120
  python -m experiments.sanity_rollout --policies heuristic --seeds 7,8,9
  python -m experiments.sanity_rollout --save-traces         # also dump <seed>_actions.npy
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import Callable, Dict, List

import numpy as np

from flappy.env.flappy_env import FlappyEnv
from flappy.game.config import BOARD_HEIGHT, PLAYER_H

Policy = Callable[[np.ndarray], int]

CSV_FIELDS = ["policy", "seed", "frame_skip", "decisions", "return",
              "score", "outcome", "death_cause", "truncated"]


# ------------------------ Policies ------------------------

def coin_flip_policy(seed: int, flap_prob: float = 0.08) -> Policy:
    rng = np.random.RandomState(10_000 + seed)
    return lambda _obs: int(rng.random_sample() < flap_prob)

def lower_lip_policy(seed: int, margin_px: float = 12.0) -> Policy:
    """Flap while falling once the bird's bottom edge is within `margin_px`
    of the next opening's lower edge (the floor when no pair is ahead)."""
    def act(obs: np.ndarray) -> int:
        bird_bottom = float(obs[0]) * (BOARD_HEIGHT - PLAYER_H) + PLAYER_H
        lip = float(obs[4]) * BOARD_HEIGHT
        return int(obs[1] >= 0.0 and bird_bottom > lip - margin_px)
    return act

POLICIES: Dict[str, Callable[[int], Policy]] = {
    "random": coin_flip_policy,
    "heuristic": lower_lip_policy,
}


# ------------------------ Rollout ------------------------

def play_episode(policy_name: str, seed: int, frame_skip: int, max_decisions: int,
                 trace_dir: Path | None = None) -> Dict:
    policy = POLICIES[policy_name](seed)
    env = FlappyEnv(frame_skip=frame_skip)
    actions: List[int] = []
    total = 0.0
    trunc = False
    try:
        obs, info = env.reset(seed=seed)
        while len(actions) < max_decisions:
            a = policy(obs)
            actions.append(a)
            obs, r, term, trunc, info = env.step(a)
            total += r
            if term or trunc:
                break
    finally:
        env.close()

    if trace_dir is not None:
        trace_dir.mkdir(parents=True, exist_ok=True)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))

    return {
        "policy": policy_name, "seed": seed, "frame_skip": frame_skip,
        "decisions": len(actions), "return": round(total, 1),
        "score": info["score"], "outcome": info["outcome"],
        "death_cause": info["death_cause"] or "", "truncated": int(trunc),
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", default="both", choices=[*POLICIES, "both"])
    ap.add_argument("--seeds", default="", help="Comma-separated; default 101..120")
    ap.add_argument("--frame-skip", type=int, default=2)
    ap.add_argument("--steps", type=int, default=10_000, help="Cap on decisions per episode")
    ap.add_argument("--out-dir", default="experiments/runs")
    ap.add_argument("--save-traces", action="store_true")
    args = ap.parse_args()

    seeds = [int(s) for s in args.seeds.split(",") if s.strip()] or list(range(101, 121))
    names = list(POLICIES) if args.policies == "both" else [args.policies]
    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    csv_path = out_dir / "episodes.csv"

    with csv_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for name in names:
            wins = 0
            for seed in seeds:
                trace_dir = out_dir / "traces" / name if args.save_traces else None
                row = play_episode(name, seed, args.frame_skip, args.steps, trace_dir)
                writer.writerow(row)
                wins += row["outcome"] == "won"
                print(f"[{name}] seed={seed} score={row['score']:.1f} "
                      f"outcome={row['outcome']} decisions={row['decisions']}")
            print(f"[{name}] won {wins}/{len(seeds)}")

    print(f"✓ Wrote {csv_path}")


if __name__ == "__main__":
    main()
