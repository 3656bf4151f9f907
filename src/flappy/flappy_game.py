#!/usr/bin/env python3
"""
flappy_game.py

Single-player harness: pygame window, input wiring, frame timing and rendering.
All game rules live in GameEngine; this module only feeds it events and draws
the state it exposes.
"""

import logging
import math
import random
from typing import Optional

import pygame

from .constants import (
    GAME_WIDTH, GAME_HEIGHT, GROUND_HEIGHT, FLOOR_Y, RENDER_FPS, MAX_FRAME_MS,
    DB_FILE, STYLE_TOP
)
from .data_models import GameState, Pipe
from .game_engine import GameEngine
from .pipe_generator import PipeGenerator
from .score_db import ScoreDatabase, PersistenceError

logger = logging.getLogger(__name__)

FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP, pygame.K_w)

# -------- Palette --------
WHITE = (231, 232, 234)
GREY = (154, 160, 166)
GOLD = (250, 204, 21)
STAR = (203, 213, 225)
HILL = (15, 43, 43)
CLOUD = (31, 41, 55)
GROUND = (12, 15, 24)
BUSH = (6, 78, 59)
HORIZON = (15, 18, 32)
COPILOT = {"body": (29, 17, 71), "stripe": (76, 29, 149), "cap": (109, 40, 217), "edge": (42, 21, 102)}
SONNET = {"body": (58, 29, 9), "stripe": (217, 119, 6), "cap": (180, 83, 9), "edge": (74, 36, 12)}
BERRY = (255, 47, 103)
BERRY_OUTLINE = (11, 13, 18)
SEED = (255, 224, 138)
LEAF = (34, 197, 94)


def is_flap_event(event: pygame.event.Event) -> bool:
    """Pointer-down or one of the flap keys. Every such event is one flap."""
    if event.type == pygame.MOUSEBUTTONDOWN:
        return True
    return event.type == pygame.KEYDOWN and event.key in FLAP_KEYS


def open_store(db_file: str) -> Optional[ScoreDatabase]:
    """Opens the score database, or runs without persistence if it is unavailable."""
    try:
        return ScoreDatabase(db_file)
    except PersistenceError as e:
        logger.warning("Running without a saved best score: %s", e)
        return None


class FlappyGame:
    def __init__(self, engine: GameEngine):
        pygame.init()
        self.engine = engine
        self.screen = pygame.display.set_mode((GAME_WIDTH, GAME_HEIGHT))
        pygame.display.set_caption("Flappy Strawberry")
        self.clock = pygame.time.Clock()

        self.score_font = pygame.font.Font(None, 48)
        self.small_font = pygame.font.Font(None, 26)
        self.label_font = pygame.font.Font(None, 14)

    def run(self):
        """The main loop: input, tick, draw."""
        running = True
        while running:
            dt_ms = min(MAX_FRAME_MS, self.clock.tick(RENDER_FPS))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif is_flap_event(event):
                    self.engine.flap()

            self.engine.tick(dt_ms)
            self._draw_game()

        pygame.quit()

    # -------- Drawing --------

    def _draw_background(self):
        screen = self.screen
        parallax = self.engine.parallax

        # Sky banding
        for y in range(0, FLOOR_Y, 8):
            shade = 16 + int((y / FLOOR_Y) * 8)
            screen.fill((shade, shade + 1, shade + 6), (0, y, GAME_WIDTH, 8))

        step = 32
        offset = round(parallax["stars"] % step)
        for x in range(-GAME_WIDTH, GAME_WIDTH * 2, step):
            py = 8 + ((x * 17) % (FLOOR_Y - 120))
            if py < FLOOR_Y - 120:
                screen.fill(STAR, (x - offset, py, 2, 2))

        step = 80
        offset = round(parallax["hills"] % step)
        for x in range(-GAME_WIDTH, GAME_WIDTH * 2, step):
            screen.fill(HILL, (x - offset, FLOOR_Y - 40, 60, 40))

        step = 120
        offset = round(parallax["clouds"] % step)
        for x in range(-GAME_WIDTH, GAME_WIDTH * 2, step):
            px = x - offset
            base = 60 + ((x * 13) % 60)
            screen.fill(CLOUD, (px, base, 40, 10))
            screen.fill(CLOUD, (px + 16, base - 8, 32, 10))
            screen.fill(CLOUD, (px + 28, base + 8, 28, 10))

        screen.fill(GROUND, (0, FLOOR_Y, GAME_WIDTH, GROUND_HEIGHT))

        step = 64
        offset = round(parallax["bushes"] % step)
        for x in range(-GAME_WIDTH, GAME_WIDTH * 2, step):
            px = x - offset
            by = FLOOR_Y - 12
            screen.fill(BUSH, (px, by, 24, 12))
            screen.fill(BUSH, (px + 12, by - 8, 24, 12))
            screen.fill(BUSH, (px + 24, by, 24, 12))

        screen.fill(HORIZON, (0, FLOOR_Y - 2, GAME_WIDTH, 2))

    def _draw_block(self, style: str, x: int, y: int, w: int, h: int, cap_on_top: bool):
        if h <= 0:
            return
        colors = COPILOT if style == STYLE_TOP else SONNET
        screen = self.screen
        screen.fill(colors["body"], (x, y, w, h))
        for yy in range(y + 10, y + h - 6, 12):
            screen.fill(colors["stripe"], (x + 4, yy, w - 8, 3))
        cap_y = y if cap_on_top else y + h - 8
        screen.fill(colors["cap"], (x, cap_y, w, 8))
        label = self.label_font.render(style.upper(), True, WHITE)
        label_y = y + min(h - 10, 14) if cap_on_top else y + h - 14
        screen.blit(label, (x + w // 2 - label.get_width() // 2, label_y - label.get_height() // 2))
        screen.fill(colors["edge"], (x, y, 2, h))
        screen.fill(colors["edge"], (x + w - 2, y, 2, h))

    def _draw_pipe(self, pipe: Pipe):
        px = round(pipe.x)
        w = int(pipe.width)
        self._draw_block(pipe.style_top, px, 0, w, int(pipe.top_height), cap_on_top=True)
        self._draw_block(pipe.style_bottom, px, int(pipe.bottom_y), w, int(pipe.bottom_height),
                         cap_on_top=False)

    def _draw_strawberry(self):
        avatar = self.engine.avatar
        r = int(avatar.radius)
        size = r * 3
        sprite = pygame.Surface((size, size), pygame.SRCALPHA)
        c = size // 2

        body = [(c, c - r), (c + r, c - r // 3), (c + r // 2, c + r // 2), (c, c + r),
                (c - r // 2, c + r // 2), (c - r, c - r // 3)]
        pygame.draw.polygon(sprite, BERRY, body)
        pygame.draw.polygon(sprite, BERRY_OUTLINE, body, max(2, int(r * 0.12)))

        seed = max(2, round(r * 0.18))
        for i in range(-1, 2):
            for j in range(-1, 2):
                sx = c + round(i * r * 0.36 + (r * 0.16 if j % 2 == 0 else 0))
                sy = c + round(j * r * 0.34 + r * 0.12)
                sprite.fill(SEED, (sx - seed // 2, sy - seed // 2, seed, seed))

        for k in range(4):
            angle = k * math.pi / 2
            lx = c + round(math.cos(angle) * r * 0.4)
            ly = c - r + round(math.sin(angle) * r * 0.2 - r * 0.2)
            leaf = r * 0.9
            pygame.draw.polygon(sprite, LEAF, [
                (lx, ly),
                (lx + math.cos(angle) * leaf * 0.5, ly + math.sin(angle) * leaf * 0.5),
                (lx + math.cos(angle + 0.6) * leaf * 0.3, ly + math.sin(angle + 0.6) * leaf * 0.3),
            ])

        rotated = pygame.transform.rotate(sprite, -math.degrees(avatar.rotation))
        rect = rotated.get_rect(center=(round(avatar.x), round(avatar.y)))
        self.screen.blit(rotated, rect)

    def _draw_center_message(self, lines):
        rendered = [self.small_font.render(line, True, WHITE) for line in lines]
        line_height = 22
        w = max(s.get_width() for s in rendered) + 32
        h = len(rendered) * line_height + 24
        x = (GAME_WIDTH - w) // 2
        y = round(GAME_HEIGHT * 0.28)

        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 115))
        self.screen.blit(panel, (x, y))
        for i, surf in enumerate(rendered):
            cy = y + 12 + i * line_height + line_height // 2
            self.screen.blit(surf, (GAME_WIDTH // 2 - surf.get_width() // 2, cy - surf.get_height() // 2))

    def _draw_hud(self):
        engine = self.engine
        score = self.score_font.render(str(engine.score), True, GOLD if engine.new_best else WHITE)
        slash = self.small_font.render("/", True, GREY)
        best = self.small_font.render(str(engine.best), True, GREY)

        gap = 6
        total_w = score.get_width() + slash.get_width() + best.get_width() + gap * 2 + 32
        rect_x = GAME_WIDTH // 2 - total_w // 2
        plate = pygame.Surface((total_w, 54), pygame.SRCALPHA)
        plate.fill((0, 0, 0, 140))
        self.screen.blit(plate, (rect_x, 24))

        cursor = rect_x + 16
        self.screen.blit(score, (cursor, 30))
        cursor += score.get_width() + gap
        self.screen.blit(slash, (cursor, 42))
        cursor += slash.get_width() + gap
        self.screen.blit(best, (cursor, 42))

        if engine.state is GameState.IDLE:
            self._draw_center_message(["Tap to start"])
        elif engine.state is GameState.ENDED:
            self._draw_center_message(["GAME OVER", "Tap to restart"])

    def _draw_game(self):
        """Renders the engine state. Reads only; never mutates the engine."""
        self._draw_background()
        for pipe in self.engine.pipes:
            self._draw_pipe(pipe)
        self._draw_strawberry()
        self._draw_hud()
        pygame.display.flip()


def main(db_file: str = DB_FILE, seed: Optional[int] = None):
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    store = open_store(db_file)
    engine = GameEngine(store=store, generator=PipeGenerator(rng=random.Random(seed)))
    print(f"Flappy Strawberry. Best score: {engine.best}. Space / Up / W / Click = Flap | Esc = Quit")

    try:
        FlappyGame(engine).run()
    finally:
        if store is not None:
            store.close()
    print(f"Goodbye. Best score: {engine.best}")


if __name__ == "__main__":
    main()
