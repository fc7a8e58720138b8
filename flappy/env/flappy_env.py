# flappy/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy.game.config import BOARD_WIDTH, BOARD_HEIGHT, FPS
from flappy.game.state import FlappyGame, Phase, Outcome
from flappy.game.game import draw
from flappy.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Bird Gymnasium environment (vector observations).
    - Simulation at 60 Hz (FlappyGame ticks).
    - Agent acts every `frame_skip` frames (default 2) -> 30 decisions/sec.
    - Observation: shape (6,), float32 (see observations.build_observation).
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 2,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.sim_fps = FPS

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        # [y_top_norm, vy_norm, dx_next, gap_top, gap_bottom, score_norm]
        low = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.game: Optional[FlappyGame] = None
        self.timestep: int = 0          # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None

        # Rendering
        self.screen = None
        self.clock = None
        self._fonts = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Explicit seed -> pipe layout seed as-is; otherwise draw one from np_random
        if seed is not None:
            pipe_seed = int(seed)
        else:
            pipe_seed = int(self.np_random.integers(0, 2**31 - 1))

        self.game = FlappyGame(seed=pipe_seed)
        self.game.on_impulse()          # NotStarted -> Playing (with the opening flap)
        self.timestep = 0
        self.current_seed = pipe_seed

        if self.render_mode == "human":
            self.render()
        return self._get_obs(), self._info()

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.game is not None, "Call reset() before step()"
        game = self.game

        if action == 1 and game.phase is Phase.PLAYING:
            game.on_impulse()

        score_before = game.score
        for _ in range(self.frame_skip):
            game.tick()
            if game.phase is not Phase.PLAYING:
                break

        # +1 for surviving the decision, bonus per pipe scored, -1 on loss
        if game.outcome is Outcome.LOST:
            reward = -1.0
        else:
            reward = 1.0 + float(game.score - score_before)

        self.timestep += 1
        terminated = game.phase is Phase.OVER
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = not terminated

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._info()

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.game is not None
        return build_observation(self.game.player, self.game.pipes, self.game.score)

    def _info(self) -> Dict[str, Any]:
        g = self.game
        return {
            "seed": self.current_seed,
            "score": g.score,
            "ticks": g.ticks,
            "timestep": self.timestep,
            "outcome": g.outcome.value,
            "death_cause": g.death_cause,
        }

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.game is None:
            return

        if self._fonts is None:
            pygame.init()
            self._fonts = (pygame.font.SysFont("arial", 16), pygame.font.SysFont("arial", 32))

        if self.render_mode == "human":
            if self.screen is None:
                self.screen = pygame.display.set_mode((BOARD_WIDTH, BOARD_HEIGHT))
                pygame.display.set_caption("Flappy Bird — Gym Env")
                self.clock = pygame.time.Clock()
            # keep the OS from flagging the window as hung
            pygame.event.pump()
        elif self.screen is None:
            self.screen = pygame.Surface((BOARD_WIDTH, BOARD_HEIGHT))

        draw(self.screen, self.game.snapshot(), *self._fonts)

        if self.render_mode == "human":
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self._fonts is not None:
            pygame.display.quit()
            pygame.quit()
        self.screen = None
        self.clock = None
        self._fonts = None
