"""
game_engine.py: The single-player world simulation and game state machine.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional

from .constants import (
    GAME_WIDTH, PIPE_SPEED_PPS, PIPE_SPACING, PIPE_FIRST_OFFSET, INITIAL_PIPES,
    RETIRE_MARGIN, MAX_FRAME_MS, BEST_SCORE_KEY
)
from .data_models import GameState, Strawberry, Pipe, ParallaxOffsets
from .physics_core import PhysicsCore
from .pipe_generator import PipeGenerator
from .score_db import ScoreDatabase, PersistenceError

logger = logging.getLogger(__name__)


@dataclass
class GameEngine(PhysicsCore):
    """
    Owns the whole game session: avatar, pipes, score and state.
    Inherits avatar physics and collision from PhysicsCore.

    The harness calls flap() on input and tick(dt_ms) once per frame, then
    reads the state between ticks.
    """
    store: Optional[ScoreDatabase] = None
    generator: PipeGenerator = field(default_factory=PipeGenerator)
    avatar: Strawberry = field(default_factory=Strawberry)
    pipes: Deque[Pipe] = field(default_factory=deque)
    parallax: ParallaxOffsets = field(default_factory=ParallaxOffsets)
    state: GameState = GameState.IDLE
    score: int = 0
    best: int = 0
    new_best: bool = False                 # This run has beaten the stored best
    tick_count: int = 0

    def __post_init__(self):
        self.best = self._load_best()

    # -------- Persistence --------

    def _load_best(self) -> int:
        if self.store is None:
            return 0
        try:
            return self.store.read_best(BEST_SCORE_KEY)
        except PersistenceError as e:
            logger.warning("Best score unavailable, starting from 0: %s", e)
            return 0

    def _save_best(self):
        if self.store is None:
            return
        try:
            self.store.write_best(BEST_SCORE_KEY, self.best)
        except PersistenceError as e:
            logger.warning("Could not save best score %d: %s", self.best, e)

    # -------- State machine --------

    def flap(self):
        """The single input event. Its effect depends on the current state."""
        if self.state is GameState.IDLE:
            self.start()
        elif self.state is GameState.ENDED:
            self.reset()
            self.start()
        else:
            self.avatar.pending_flap = True

    def start(self):
        """Begins a new run and seeds the first pipes to the right."""
        self.state = GameState.RUNNING
        self.score = 0
        self.tick_count = 0
        self.avatar.reset()
        self.pipes.clear()
        x = GAME_WIDTH + PIPE_FIRST_OFFSET
        for _ in range(INITIAL_PIPES):
            self.pipes.append(self.generator.generate(x))
            x += PIPE_SPACING
        logger.info("Run started (best %d)", self.best)

    def reset(self):
        """Returns to the idle pre-start state."""
        self.state = GameState.IDLE
        self.score = 0
        self.new_best = False
        self.avatar.reset()
        self.pipes.clear()

    def die(self):
        """Flags the current run as over."""
        if self.state is not GameState.RUNNING:
            return
        self.state = GameState.ENDED
        logger.info("Game over: score %d, best %d", self.score, self.best)

    # -------- Simulation --------

    def step_pipes(self, dt: float):
        """Scrolls pipes, retires the head once off-screen and tops up the tail."""
        for pipe in self.pipes:
            pipe.x -= PIPE_SPEED_PPS * dt

        if self.pipes and self.pipes[0].right < -RETIRE_MARGIN:
            retired = self.pipes.popleft()
            logger.debug("Retired pipe at x=%.1f", retired.x)

        if self.pipes and self.pipes[-1].x < GAME_WIDTH - PIPE_SPACING:
            pipe = self.generator.generate(self.pipes[-1].x + PIPE_SPACING)
            self.pipes.append(pipe)
            logger.debug("Spawned pipe at x=%.1f top=%d", pipe.x, pipe.top_height)

    def _score_pipe(self, pipe: Pipe):
        if pipe.passed or self.avatar.x <= pipe.right:
            return
        pipe.passed = True
        self.score += 1
        if self.score > self.best:
            if not self.new_best:
                logger.info("New best score")
            self.new_best = True
            self.best = self.score
            self._save_best()

    def _score_and_collide(self, pipe: Pipe) -> bool:
        """Applies scoring for one pipe, then returns True on collision."""
        self._score_pipe(pipe)
        return self.check_collision(self.avatar, pipe)

    def tick(self, dt_ms: float):
        """Advances the simulation by dt_ms milliseconds. No-op unless running."""
        if self.state is not GameState.RUNNING:
            return

        dt = max(0.0, min(dt_ms, MAX_FRAME_MS)) / 1000.0
        self.tick_count += 1

        flap = self.avatar.pending_flap
        self.avatar.pending_flap = False
        if self.integrate(self.avatar, dt, flap):
            self.die()
            return

        self.step_pipes(dt)
        self.parallax.advance(dt)

        for pipe in self.pipes:
            if self._score_and_collide(pipe):
                self.die()
                return

    # -------- Renderer surface --------

    def to_client_state(self):
        """Read-only snapshot for the renderer."""
        return {
            "state": self.state.value,
            "score": self.score,
            "best": self.best,
            "new_best": self.new_best,
            "avatar": self.avatar.to_client_state(),
            "pipes": [pipe.to_client_state() for pipe in self.pipes],
            "parallax": dict(self.parallax.offsets),
        }
