"""Command-line entry point: opens the window and runs the game loop."""

from __future__ import annotations

import argparse
import sys

import pygame

from .game import DEFAULT_SCREEN_SIZE, DEFAULT_WINDOW_SIZE, Game, Key, MouseButton
from .gamemath import DeltaClock
from .render import Assets, Renderer

WINDOW_TITLE = "WIP viddy game :)"

_KEYS = {
    pygame.K_w: Key.W,
    pygame.K_a: Key.A,
    pygame.K_s: Key.S,
    pygame.K_d: Key.D,
    pygame.K_LSHIFT: Key.SHIFT,
    pygame.K_RSHIFT: Key.SHIFT,
    pygame.K_ESCAPE: Key.ESCAPE,
    pygame.K_F6: Key.F6,
    pygame.K_F7: Key.F7,
    pygame.K_F8: Key.F8,
    pygame.K_F9: Key.F9,
    pygame.K_F11: Key.F11,
}

_MOUSE_BUTTONS = {int(b) for b in MouseButton}


def translate_key(pygame_key):
    """Map a pygame key code to a game key, or None if the game ignores it."""
    return _KEYS.get(pygame_key)


def _positive(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return value


def _parse(argv):
    parser = argparse.ArgumentParser(prog="wildgrid", description="Run the game.")
    parser.add_argument("--assets", default="images", help="directory holding the images")
    parser.add_argument(
        "--placeholder", action="store_true", help="draw plain colours instead of images"
    )
    parser.add_argument("--frames", type=_positive, help="stop after this many frames")
    return parser.parse_args(argv)


def _screen_size() -> tuple[int, int]:
    info = pygame.display.Info()
    if info.current_w <= 0 or info.current_h <= 0:
        return DEFAULT_SCREEN_SIZE
    return info.current_w, info.current_h


def _set_mode(game: Game) -> pygame.Surface:
    if game.fullscreen:
        surface = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        surface = pygame.display.set_mode(DEFAULT_WINDOW_SIZE, pygame.RESIZABLE)
    game.resize(*surface.get_size())
    return surface


def main(argv=None) -> int:
    """Open the game window and run until it is closed."""
    args = _parse(argv)
    pygame.init()
    try:
        game = Game(_screen_size())
        try:
            if args.placeholder:
                assets = Assets.placeholder(game.side_len)
            else:
                assets = Assets.load(args.assets)
        except (FileNotFoundError, pygame.error) as exc:
            print(f"wildgrid: {exc}", file=sys.stderr)
            return 1

        surface = pygame.display.set_mode(game.window_size, pygame.RESIZABLE)
        pygame.display.set_caption(WINDOW_TITLE)
        game.resize(*surface.get_size())
        renderer = Renderer(game, assets)
        clock = DeltaClock()
        fullscreen = game.fullscreen
        frames = 0

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    surface = pygame.display.get_surface()
                    game.resize(event.w, event.h)
                elif event.type == pygame.KEYDOWN:
                    key = translate_key(event.key)
                    if key is not None:
                        game.key_down(key)
                elif event.type == pygame.KEYUP:
                    key = translate_key(event.key)
                    if key is not None:
                        game.key_up(key)
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button in _MOUSE_BUTTONS:
                    game.click(event.pos[0], event.pos[1], event.button)
            if not running:
                break
            if game.fullscreen != fullscreen:
                surface = _set_mode(game)
                fullscreen = game.fullscreen

            game.step(clock.tick())
            renderer.draw(surface)
            pygame.display.flip()

            frames += 1
            if args.frames is not None and frames >= args.frames:
                break
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())