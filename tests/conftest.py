import random

import pytest

from flappy.game_engine import GameEngine
from flappy.pipe_generator import PipeGenerator
from flappy.score_db import ScoreDatabase


@pytest.fixture
def store():
    db = ScoreDatabase(":memory:")
    yield db
    db.close()


@pytest.fixture
def generator():
    return PipeGenerator(rng=random.Random(1234))


@pytest.fixture
def engine(store, generator):
    return GameEngine(store=store, generator=generator)
