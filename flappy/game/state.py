# flappy/game/state.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import pygame
from .config import (
    BOARD_WIDTH, BOARD_HEIGHT, FPS, PLAYER_X, PLAYER_START_Y,
    SCORE_PER_PIPE, WIN_SCORE
)
from .player import Player
from .pipes import PipeStream
from .collision import check_collision, check_passed, out_of_bounds


class Phase(Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    OVER = "over"


class Outcome(Enum):
    NONE = "none"
    LOST = "lost"
    WON = "won"


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    w: int
    h: int

    def to_rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.w, self.h)


@dataclass(frozen=True)
class RenderSnapshot:
    """Read-only view of one frame for whoever draws it."""
    player: Box
    pipes: Tuple[Box, ...]
    score: float
    phase: Phase
    outcome: Outcome
    seed: Optional[int] = None

    @property
    def message(self) -> str:
        if self.phase is Phase.NOT_STARTED:
            return "Start the Game"
        if self.phase is Phase.OVER:
            if self.outcome is Outcome.WON:
                return "Congratulations! **Winner**"
            return f"Game Over: {int(self.score)}"
        return str(int(self.score))


class FlappyGame:
    """
    Fixed-timestep simulation driven from outside:
      - tick()       once per frame (FPS Hz)
      - on_impulse() on the single input button
      - snapshot()   to draw
    Both entry points must be called from the same thread.
    """
    def __init__(self, seed: int | None = None, rng=None,
                 board_width: int = BOARD_WIDTH, board_height: int = BOARD_HEIGHT,
                 fps: int = FPS, win_score: float = WIN_SCORE,
                 score_per_pipe: float = SCORE_PER_PIPE):
        self.board_width = board_width
        self.board_height = board_height
        self.fps = fps
        self.win_score = win_score
        self.score_per_pipe = score_per_pipe

        self.player = Player(x=float(PLAYER_X), y=float(PLAYER_START_Y))
        self.stream = PipeStream(seed=seed, rng=rng)

        self.score: float = 0.0
        self.phase = Phase.NOT_STARTED
        self.outcome = Outcome.NONE
        self.death_cause: Optional[str] = None   # "pipe" | "floor" | None
        self.ticks: int = 0                      # ticks played since start
        self._ticks_since_spawn: int = 0

    @property
    def seed(self) -> Optional[int]:
        return self.stream.seed

    @property
    def pipes(self):
        return self.stream.pipes

    # -------------------- External API --------------------

    def on_impulse(self):
        if self.phase is Phase.NOT_STARTED:
            self.phase = Phase.PLAYING
            self.player.flap()
        elif self.phase is Phase.PLAYING:
            self.player.flap()
        else:
            self.restart()

    def tick(self):
        if self.phase is not Phase.PLAYING:
            return
        self.ticks += 1

        self.player.update_physics()
        self.stream.advance()

        self._ticks_since_spawn += 1
        elapsed_ms = self._ticks_since_spawn * 1000.0 / self.fps
        if self.stream.try_spawn(elapsed_ms, self.board_width, self.board_height):
            self._ticks_since_spawn = 0

        for pipe in self.stream:
            if check_collision(self.player, pipe):
                self._end(Outcome.LOST, "pipe")
                return
            if check_passed(self.player, pipe):
                self.score += self.score_per_pipe

        if out_of_bounds(self.player, self.board_height):
            self._end(Outcome.LOST, "floor")
            return

        if self.score >= self.win_score:
            self._end(Outcome.WON)

    def restart(self):
        self.player.reset(PLAYER_START_Y)
        self.stream.reset()
        self.score = 0.0
        self.phase = Phase.NOT_STARTED
        self.outcome = Outcome.NONE
        self.death_cause = None
        self.ticks = 0
        self._ticks_since_spawn = 0

    def snapshot(self) -> RenderSnapshot:
        p = self.player
        return RenderSnapshot(
            player=Box(p.x, p.y, p.w, p.h),
            pipes=tuple(Box(q.x, q.y, q.w, q.h) for q in self.stream),
            score=self.score,
            phase=self.phase,
            outcome=self.outcome,
            seed=self.seed,
        )

    # -------------------- Helpers --------------------

    def _end(self, outcome: Outcome, cause: Optional[str] = None):
        self.phase = Phase.OVER
        self.outcome = outcome
        self.death_cause = cause
