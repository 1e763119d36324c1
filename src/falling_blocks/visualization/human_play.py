from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Command, FallingBlockGame, GameConfig
from falling_blocks.utils.logging import setup_logger
from .renderer import Renderer

logger = logging.getLogger("falling_blocks.play")


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_a: Command.MOVE_LEFT,
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_d: Command.MOVE_RIGHT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_s: Command.SOFT_DROP,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_w: Command.ROTATE_CW,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_h: Command.HARD_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.PAUSE,
    pygame.K_r: Command.RESUME,
    pygame.K_g: Command.HOLD,
    pygame.K_q: Command.QUIT,
    pygame.K_ESCAPE: Command.QUIT,
}


def command_for_event(event: pygame.event.Event) -> Optional[Command]:
    if event.type == pygame.QUIT:
        return Command.QUIT
    if event.type == pygame.KEYDOWN:
        return KEY_TO_COMMAND.get(event.key)
    return None


def _wait_for_key(clock: pygame.time.Clock) -> None:
    while True:
        for event in pygame.event.get():
            if event.type in (pygame.QUIT, pygame.KEYDOWN):
                return
        clock.tick(30)


def run(config: Optional[GameConfig] = None) -> int:
    """Drive the engine from the keyboard until quit or game over. Returns the final score."""
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlockGame(config)
        renderer = Renderer()

        screen = pygame.display.set_mode(renderer.window_size(game.grid.width, game.grid.height))
        pygame.display.set_caption("Falling Blocks")

        tick_ms = game.config.tick_interval_ms
        last_tick = pygame.time.get_ticks()

        while not game.quit_requested and not game.game_over:
            for event in pygame.event.get():
                command = command_for_event(event)
                if command is not None:
                    game.handle_command(command)

            now = pygame.time.get_ticks()
            if now - last_tick >= tick_ms:
                game.tick()
                last_tick = now

            renderer.draw(screen, game.snapshot())
            clock.tick(60)

        if game.game_over:
            renderer.draw(screen, game.snapshot())
            _wait_for_key(clock)
        logger.info("Final score: %d (%s)", game.score, game.get_game_stats())
        return game.score
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=200, help="Gravity interval in milliseconds")
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="falling_blocks", level=args.log_level)
    run(GameConfig(random_seed=args.seed, tick_interval_ms=args.tick_ms))


if __name__ == "__main__":  # pragma: no cover
    main()
