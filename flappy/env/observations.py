# flappy/env/observations.py
from __future__ import annotations
from typing import Iterable, Optional, Tuple
import numpy as np

from flappy.game.config import (
    BOARD_WIDTH, BOARD_HEIGHT, PLAYER_H, WIN_SCORE
)

OBS_SIZE: int = 6
# |vy| that maps to 1.0; a fall from the flap apex reaches this in ~20 ticks
VY_NORM_PX: float = 20.0

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_top_y(y_top: float) -> float:
    """Normalize a top coordinate into [0,1] using [0, BOARD_HEIGHT-PLAYER_H]."""
    denom = max(1, BOARD_HEIGHT - PLAYER_H)
    return _clamp01(y_top / denom)

def _norm_vy(vy: float, vy_max: float = VY_NORM_PX) -> float:
    """Clip vy to [-vy_max, vy_max] and scale to [-1,1]."""
    vy_max = float(max(1.0, vy_max))
    vv = max(-vy_max, min(vy, vy_max))
    return vv / vy_max

def next_pair(pipes: Iterable) -> Tuple[Optional[object], Optional[object]]:
    """
    (top, bottom) of the first pair not yet passed, in spawn order.
    Either member may be None if nothing is ahead.
    """
    top = bot = None
    for p in pipes:
        if p.passed:
            continue
        if p.lane == "top" and top is None:
            top = p
        elif p.lane == "bot" and bot is None:
            bot = p
        if top is not None and bot is not None:
            break
    return top, bot

def build_observation(player, pipes: Iterable, score: float = 0.0) -> np.ndarray:
    """
    Returns a fixed (6,) float32 vector:
      [ y_top_norm, vy_norm, dx_next_norm, gap_top_norm, gap_bottom_norm, score_norm ]
    - y_top_norm, dx, gap edges, score in [0,1]; vy_norm in [-1,1]
    - dx_next_norm: distance from player's left edge to the next pair's right edge
    - sentinels with no pair ahead: dx=1.0, gap_top=0.0, gap_bottom=1.0
    """
    y_top_norm = np.float32(_norm_top_y(float(player.y)))
    vy_norm = np.float32(_norm_vy(float(player.vy)))

    top, bot = next_pair(pipes)
    ref = top if top is not None else bot
    if ref is None:
        dx_norm = 1.0
    else:
        dx_norm = _clamp01((ref.x + ref.w - player.x) / float(BOARD_WIDTH))

    gap_top = 0.0 if top is None else _clamp01((top.y + top.h) / float(BOARD_HEIGHT))
    gap_bot = 1.0 if bot is None else _clamp01(bot.y / float(BOARD_HEIGHT))

    score_norm = _clamp01(float(score) / WIN_SCORE)

    feats = [y_top_norm, vy_norm, dx_norm, gap_top, gap_bot, score_norm]
    return np.asarray(feats, dtype=np.float32)
