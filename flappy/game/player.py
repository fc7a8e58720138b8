# flappy/game/player.py
from __future__ import annotations
import pygame
from dataclasses import dataclass
from .config import (
    PLAYER_X, PLAYER_START_Y, PLAYER_W, PLAYER_H, GRAVITY, FLAP_VELOCITY
)

@dataclass
class Player:
    """
    The bird. Only y and vy ever change; x stays where it was spawned.
    y is TOP-based (screen coords, +y is down).
    """
    x: float = PLAYER_X
    y: float = PLAYER_START_Y
    vy: float = 0.0
    w: int = PLAYER_W
    h: int = PLAYER_H

    @property
    def rect(self) -> pygame.Rect:
        return pygame.Rect(int(self.x), int(self.y), self.w, self.h)

    def update_physics(self, gravity: float = GRAVITY):
        """One fixed step: vy += g, then y += vy. No clamping here."""
        self.vy += gravity
        self.y += self.vy

    def flap(self, flap_velocity: float = FLAP_VELOCITY):
        """Overwrite vy with the upward impulse (not additive)."""
        self.vy = flap_velocity

    def reset(self, y: float = PLAYER_START_Y):
        self.y = y
        self.vy = 0.0
