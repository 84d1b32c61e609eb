import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from wildgrid.entities import Facing
from wildgrid.game import Game, Key
from wildgrid.inventory import DEFAULT_HOTBAR_SIZE
from wildgrid.render import RED, WHITE, Assets, Renderer
from wildgrid.world import CellObject


@pytest.fixture
def game():
    return Game()


@pytest.fixture
def assets(game):
    return Assets.placeholder(game.side_len)


@pytest.fixture
def renderer(game, assets):
    return Renderer(game, assets)


def _cell_pixel(game, x, y):
    side = int(game.side_len)
    return (x * side + 5, y * side + 5)


def test_placeholder_sizes(game, assets):
    side = int(game.side_len)
    assert assets.empty.get_size() == (side, side)
    assert assets.water.get_size() == (side, side)
    assert assets.hotbar.get_size() == DEFAULT_HOTBAR_SIZE
    assert set(assets.player_frames) == set(Facing)


def test_load_round_trip(tmp_path, assets):
    names = {
        "Log.png": assets.log,
        "Bridge.png": assets.bridge,
        "Water.png": assets.water,
        "EmptyTile.png": assets.empty,
        "Hotbar.png": assets.hotbar,
        "Tree.png": assets.tree,
        "Wolf.png": assets.wolf,
    }
    for name, surface in names.items():
        pygame.image.save(surface, str(tmp_path / name))
    for facing, folder in ((Facing.FRONT, "front"), (Facing.BACK, "back"),
                           (Facing.LEFT, "left"), (Facing.RIGHT, "right")):
        directory = tmp_path / "Player" / folder
        directory.mkdir(parents=True)
        for i in range(12):
            pygame.image.save(assets.player_frames[facing][0], str(directory / f"{i}.png"))

    loaded = Assets.load(tmp_path)
    assert loaded.water.get_size() == assets.water.get_size()
    assert loaded.tree.get_size() == assets.tree.get_size()
    assert loaded.water.get_at((1, 1)) == assets.water.get_at((1, 1))
    assert len(loaded.player_frames[Facing.LEFT]) == 12


def test_load_missing_directory_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Assets.load(tmp_path / "nowhere")


def test_background_matches_cell_kinds(game, assets, renderer):
    assert renderer.background.get_at(_cell_pixel(game, 0, 7)) == assets.water.get_at((0, 0))
    assert renderer.background.get_at(_cell_pixel(game, 0, 0)) == assets.empty.get_at((0, 0))


def test_placed_log_is_drawn(game, assets, renderer):
    assert game.place_object_in_cell((0, 0), CellObject.LOG)
    renderer.draw(pygame.Surface(game.window_size))
    assert renderer.background.get_at(_cell_pixel(game, 0, 0)) == assets.log.get_at((0, 0))
    assert not game.dirty_cells


def test_removed_tree_leaves_overlay(game, renderer):
    side = int(game.side_len)
    pixel = (side + 5, 5 * side + 5)
    assert renderer.overlay.get_at(pixel).a == 255
    game.place_object_in_cell((2, 14), CellObject.EMPTY)
    renderer.draw(pygame.Surface(game.window_size))
    assert renderer.overlay.get_at(pixel).a == 0
    assert game.overlay_dirty is False


def test_renderer_attaches_player_frames(game, assets, renderer):
    frames = game.player.animations.frames(Facing.FRONT)
    assert frames == assets.player_frames[Facing.FRONT]


def test_debug_lines_header(renderer):
    lines = renderer.debug_lines(60)
    assert lines[0] == ("60 FPS", WHITE)
    assert lines[1] == ("press F9 to toggle debug menu", WHITE)
    assert ("position: (425.000000, 225.000000)", WHITE) in lines


def test_debug_lines_follow_toggles(game, renderer):
    game.key_down(Key.F8)
    speed = [c for t, c in renderer.debug_lines(30) if "F8" in t]
    assert speed == [RED]
    game.key_down(Key.F7)
    noclip = [c for t, c in renderer.debug_lines(30) if "F7" in t]
    assert noclip == [RED]
    game.key_down(Key.F9)
    assert len(renderer.debug_lines(30)) == 2


def test_pause_darkens_frame(game, renderer):
    surface = pygame.Surface(game.window_size)
    renderer.draw(surface)
    before = surface.get_at((800, 100))
    game.key_down(Key.ESCAPE)
    renderer.draw(surface)
    after = surface.get_at((800, 100))
    assert sum(after[:3]) < sum(before[:3])