import random

import pytest

from flappy.constants import FLOOR_Y, PIPE_GAP, PIPE_MARGIN, PIPE_WIDTH
from flappy.pipe_generator import PipeGenerator


class FixedRandom(random.Random):
    """Returns a fixed draw so the extremes of the range can be checked."""

    def __init__(self, value):
        super().__init__()
        self.value = value

    def random(self):
        return self.value


@pytest.mark.parametrize("seed", range(25))
def test_segments_respect_margins(seed):
    generator = PipeGenerator(rng=random.Random(seed))
    for i in range(40):
        pipe = generator.generate(i * 240.0)
        assert pipe.top_height >= PIPE_MARGIN
        assert pipe.bottom_height >= PIPE_MARGIN
        assert pipe.top_height + pipe.gap + pipe.bottom_height == FLOOR_Y


@pytest.mark.parametrize("draw", [0.0, 0.5, 0.999999])
def test_extreme_draws_stay_in_bounds(draw):
    pipe = PipeGenerator(rng=FixedRandom(draw)).generate(100.0)
    assert PIPE_MARGIN <= pipe.top_height
    assert pipe.bottom_height >= PIPE_MARGIN


def test_top_height_formula_is_floored():
    pipe = PipeGenerator(rng=FixedRandom(0.5)).generate(0.0)
    span = FLOOR_Y - PIPE_GAP - 2 * PIPE_MARGIN
    assert pipe.top_height == int(PIPE_MARGIN + 0.5 * span)
    assert isinstance(pipe.top_height, int)


def test_new_pipe_fields():
    pipe = PipeGenerator().generate(-42.5)
    assert pipe.x == -42.5
    assert pipe.width == PIPE_WIDTH
    assert pipe.gap == PIPE_GAP
    assert pipe.passed is False
    assert pipe.right == pytest.approx(-42.5 + PIPE_WIDTH)


def test_same_seed_replays_same_pipes():
    first = PipeGenerator(rng=random.Random(7))
    second = PipeGenerator(rng=random.Random(7))
    assert [first.generate(0).top_height for _ in range(10)] == \
        [second.generate(0).top_height for _ in range(10)]
