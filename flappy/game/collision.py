# flappy/game/collision.py
from __future__ import annotations
from .config import BOARD_HEIGHT


def boxes_overlap(ax, ay, aw, ah, bx, by, bw, bh) -> bool:
    """Strict AABB overlap; touching edges do not count."""
    return (ax < bx + bw and ax + aw > bx and
            ay < by + bh and ay + ah > by)


def check_collision(player, pipe) -> bool:
    return boxes_overlap(player.x, player.y, player.w, player.h,
                         pipe.x, pipe.y, pipe.w, pipe.h)


def check_passed(player, pipe) -> bool:
    """True once per pipe, the first time the player is fully past its right edge.
    Marks the pipe as passed; the caller awards the score."""
    if not pipe.passed and player.x > pipe.x + pipe.w:
        pipe.passed = True
        return True
    return False


def out_of_bounds(player, board_height: int = BOARD_HEIGHT) -> bool:
    # floor only; flying above the board is allowed
    return player.y > board_height - player.h
