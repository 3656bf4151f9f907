"""
pipe_generator.py: Procedural pipe pairs with a randomized gap position.
"""

import math
import random
from dataclasses import dataclass, field

from .constants import GAME_HEIGHT, GROUND_HEIGHT, PIPE_GAP, PIPE_MARGIN, PIPE_WIDTH
from .data_models import Pipe


@dataclass
class PipeGenerator:
    """
    Builds pipes at a given x. The random source is injected so runs can be
    replayed from a seed.
    """
    rng: random.Random = field(default_factory=random.Random)
    playfield_height: float = GAME_HEIGHT
    ground_height: float = GROUND_HEIGHT
    gap: float = PIPE_GAP
    margin: float = PIPE_MARGIN
    width: float = PIPE_WIDTH

    @property
    def floor_y(self) -> float:
        return self.playfield_height - self.ground_height

    def generate(self, x: float) -> Pipe:
        """Creates a new pipe pair at world position x."""
        span = self.floor_y - self.gap - self.margin * 2
        top_height = math.floor(self.margin + self.rng.random() * span)
        return Pipe(x=x, top_height=top_height, width=self.width,
                    gap=self.gap, floor_y=self.floor_y)
