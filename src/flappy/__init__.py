"""
Flappy Strawberry: a gravity-driven arcade game.
"""

from .data_models import GameState, Strawberry, Pipe
from .game_engine import GameEngine
from .pipe_generator import PipeGenerator
from .score_db import ScoreDatabase, PersistenceError

__all__ = [
    "GameEngine", "GameState", "Pipe", "PipeGenerator", "PersistenceError",
    "ScoreDatabase", "Strawberry",
]
