"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from .constants import (
    BIRD_X, RESPAWN_Y, BIRD_RADIUS, PIPE_WIDTH, PIPE_GAP, FLOOR_Y,
    STYLE_TOP, STYLE_BOTTOM, PARALLAX_SPEEDS
)


class GameState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


@dataclass
class Strawberry:
    """The player-controlled avatar."""
    x: float = BIRD_X
    y: float = RESPAWN_Y
    velocity: float = 0.0
    radius: float = BIRD_RADIUS
    rotation: float = 0.0

    pending_flap: bool = False             # Did the player flap since the last tick?

    def reset(self):
        """Returns the avatar to its spawn position, at rest."""
        self.y = RESPAWN_Y
        self.velocity = 0.0
        self.rotation = 0.0
        self.pending_flap = False

    def to_client_state(self):
        """Prepares a minimal state dictionary for the renderer."""
        return {
            "x": self.x,
            "y": round(self.y, 2),
            "v": round(self.velocity, 2),
            "radius": self.radius,
            "rotation": round(self.rotation, 4),
        }


@dataclass
class Pipe:
    """One top + bottom obstacle pair with a fixed gap."""
    x: float
    top_height: int
    width: float = PIPE_WIDTH
    gap: float = PIPE_GAP
    floor_y: float = FLOOR_Y
    passed: bool = False                   # Scoring latch
    style_top: str = STYLE_TOP
    style_bottom: str = STYLE_BOTTOM

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom_y(self) -> float:
        return self.top_height + self.gap

    @property
    def bottom_height(self) -> float:
        return self.floor_y - self.bottom_y

    def to_client_state(self):
        return {
            "x": round(self.x, 2),
            "width": self.width,
            "top_height": self.top_height,
            "gap": self.gap,
            "bottom_y": self.bottom_y,
            "bottom_height": self.bottom_height,
            "style_top": self.style_top,
            "style_bottom": self.style_bottom,
        }


@dataclass
class ParallaxOffsets:
    """Background scroll offsets. Advanced by the engine, wrapped by the renderer."""
    offsets: Dict[str, float] = field(
        default_factory=lambda: {layer: 0.0 for layer in PARALLAX_SPEEDS})

    def advance(self, dt: float, speeds: Dict[str, float] = PARALLAX_SPEEDS):
        for layer, speed in speeds.items():
            self.offsets[layer] = self.offsets.get(layer, 0.0) + speed * dt

    def __getitem__(self, layer: str) -> float:
        return self.offsets[layer]
