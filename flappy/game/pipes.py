# flappy/game/pipes.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Tuple
import pygame
from .config import (
    BOARD_WIDTH, BOARD_HEIGHT, PIPE_W, PIPE_H, PIPE_VX, PIPE_SPAWN_MS
)

@dataclass
class Pipe:
    x: float
    y: float            # fixed at spawn
    w: int = PIPE_W
    h: int = PIPE_H
    vx: float = PIPE_VX
    lane: str = "top"   # "top" or "bot"
    passed: bool = False

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.w, self.h)

    @property
    def right(self) -> float:
        return self.x + self.w

    def move(self):
        self.x += self.vx


def opening_space_for(board_height: int) -> int:
    return board_height // 4


class PipeStream:
    """
    Spawns top/bottom pipe pairs on a fixed timer and scrolls them left.
    Pipes whose right edge has left the board are retired in advance().

    `rng` only needs `.uniform(a, b)`; pass one to force the vertical offset.
    """
    def __init__(self, seed: int | None = None, rng=None,
                 interval_ms: float = PIPE_SPAWN_MS,
                 pipe_w: int = PIPE_W, pipe_h: int = PIPE_H, pipe_vx: float = PIPE_VX):
        self._owns_rng = rng is None
        if rng is None:
            if seed is None:
                seed = random.randrange(0, 2**32 - 1)
            rng = random.Random(seed)
        self.seed = seed
        self.rng = rng
        self.interval_ms = float(interval_ms)
        self.pipe_w = pipe_w
        self.pipe_h = pipe_h
        self.pipe_vx = pipe_vx
        self.pipes: List[Pipe] = []

    def __len__(self) -> int:
        return len(self.pipes)

    def __iter__(self):
        return iter(self.pipes)

    def random_top_y(self) -> int:
        # top pipe hangs above the board; its bottom edge lands in a random band
        return int(-self.pipe_h / 4 - self.rng.uniform(0, self.pipe_h / 2))

    def spawn_pair(self, x: float, top_y: float, board_height: int = BOARD_HEIGHT) -> Tuple[Pipe, Pipe]:
        """Append a (top, bottom) pair at x; bottom.y = top.y + pipe_h + opening."""
        opening = opening_space_for(board_height)
        top = Pipe(x=x, y=top_y, w=self.pipe_w, h=self.pipe_h, vx=self.pipe_vx, lane="top")
        bot = Pipe(x=x, y=top.y + self.pipe_h + opening,
                   w=self.pipe_w, h=self.pipe_h, vx=self.pipe_vx, lane="bot")
        self.pipes.append(top)
        self.pipes.append(bot)
        return top, bot

    def try_spawn(self, elapsed_ms: float,
                  board_width: int = BOARD_WIDTH, board_height: int = BOARD_HEIGHT) -> bool:
        """Spawn a pair at the right edge if the spawn interval has elapsed."""
        if elapsed_ms < self.interval_ms:
            return False
        self.spawn_pair(board_width, self.random_top_y(), board_height)
        return True

    def advance(self):
        """Scroll every pipe one tick, then drop the ones fully off the left edge."""
        for pipe in self.pipes:
            pipe.move()
        self.pipes = [p for p in self.pipes if p.right >= 0]

    def clear(self):
        self.pipes.clear()

    def reset(self):
        """Drop all pipes and rewind our own generator to `seed`."""
        self.clear()
        if self._owns_rng:
            self.rng = random.Random(self.seed)
