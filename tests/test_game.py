import pytest

from wildgrid.entities import Facing, InputKeys
from wildgrid.game import DebugTools, Game, Key, MouseButton
from wildgrid.gamemath import Point2, Vector2
from wildgrid.inventory import ButtonPress
from wildgrid.world import CellFlag, CellObject


@pytest.fixture
def game():
    return Game((900, 600))


def _map_cell(game, x, y):
    world = game.camera.world_position(Point2(x, y), game.player.pos)
    return game.grid.find_cell(world)


def test_initial_overlay_counts_trees(game):
    trees = game.tree_cells()
    assert Point2(2, 14) in trees
    assert game.overlay_objects == len(trees)


def test_side_len_follows_player_size(game):
    assert game.grid.side_len == max(game.player.size.x, game.player.size.y) + 2


def test_place_log_uses_a_log(game):
    before = game.hotbar.slots[0].count
    assert game.place_object_in_cell(Point2(0, 0), CellObject.LOG) is True
    assert game.grid[Point2(0, 0)] == CellObject.LOG
    assert game.hotbar.slots[0].count == before - 1
    assert Point2(0, 0) in game.dirty_cells


def test_place_log_on_occupied_cell_fails(game):
    game.place_object_in_cell(Point2(0, 0), CellObject.LOG)
    before = game.hotbar.slots[0].count
    assert game.place_object_in_cell(Point2(0, 0), CellObject.LOG) is False
    assert game.hotbar.slots[0].count == before


def test_place_log_without_stock_fails(game):
    game.hotbar.slots[0].count = 0
    assert game.place_object_in_cell(Point2(0, 0), CellObject.LOG) is False
    assert game.grid[Point2(0, 0)] == CellObject.EMPTY


def test_place_outside_grid_fails(game):
    assert game.place_object_in_cell(Point2(-1, 0), CellObject.LOG) is False
    nx, ny = game.grid.size
    assert game.place_object_in_cell(Point2(nx, 0), CellObject.LOG) is False


def test_bridge_clears_barrier_and_removal_restores_it(game):
    cell = Point2(0, 7)
    assert game.grid[cell] & CellFlag.BARRIER
    before = game.hotbar.slots[1].count
    assert game.place_object_in_cell(cell, CellObject.BRIDGE)
    assert not game.grid[cell] & CellFlag.BARRIER
    assert game.grid[cell] & CellFlag.WATER
    assert game.hotbar.slots[1].count == before - 1
    assert game.place_object_in_cell(cell, CellObject.EMPTY)
    assert game.grid[cell] == CellFlag.WATER | CellFlag.BARRIER
    assert game.hotbar.slots[1].count == before


def test_removing_tree_gives_wood(game):
    cell = Point2(2, 14)
    before = game.hotbar.slots[0].count
    assert game.place_object_in_cell(cell, CellObject.EMPTY)
    assert game.hotbar.slots[0].count == before + 5
    assert cell not in game.tree_cells()
    assert game.grid[cell] == CellObject.EMPTY
    assert game.overlay_objects == len(game.tree_cells())


def test_placing_tree_adds_to_overlay(game):
    before = game.overlay_objects
    assert game.place_object_in_cell(Point2(0, 0), CellObject.TREE)
    assert Point2(0, 0) in game.tree_cells()
    assert game.overlay_objects == before + 1


def test_indestructible_cell_is_kept(game):
    value = CellFlag.INDESTRUCTIBLE | CellObject.LOG
    game.grid[Point2(0, 0)] = value
    assert game.place_object_in_cell(Point2(0, 0), CellObject.EMPTY) is False
    assert game.grid[Point2(0, 0)] == value


def test_movement_keys_set_and_clear(game):
    game.key_down(Key.W)
    game.key_down(Key.SHIFT)
    assert game.input_keys == InputKeys.W | InputKeys.SHIFT
    game.key_up(Key.W)
    game.key_up(Key.SHIFT)
    assert game.input_keys == InputKeys(0)


def test_step_moves_player_up(game):
    game.key_down(Key.W)
    game.step(0.1)
    assert game.player.pos.x == pytest.approx(400.0)
    assert game.player.pos.y < 200.0
    assert game.player.animations.facing == Facing.BACK


def test_speed_boost_doubles_distance():
    plain, boosted = Game((900, 600)), Game((900, 600))
    boosted.key_down(Key.F8)
    assert boosted.debug_tools & DebugTools.SPEED_BOOST
    for g in (plain, boosted):
        g.key_down(Key.D)
        g.step(0.1)
    moved = plain.player.pos.x - 400.0
    assert moved > 0
    assert boosted.player.pos.x - 400.0 == pytest.approx(2 * moved)


def test_pause_freezes_world_and_ignores_clicks(game):
    game.key_down(Key.ESCAPE)
    assert game.paused is True
    game.key_down(Key.W)
    game.step(0.1)
    assert game.player.pos == Vector2(400.0, 200.0)
    assert game.click(450, 300, MouseButton.LEFT) is None


def test_debug_toggles(game):
    assert game.debug_tools == DebugTools.SHOW_INFO | DebugTools.HITBOXES
    game.key_down(Key.F9)
    game.key_down(Key.F6)
    assert game.debug_tools == DebugTools(0)
    game.key_down(Key.F7)
    assert game.player.has_collision is False
    game.key_down(Key.F11)
    assert game.fullscreen is True


def test_hotbar_click_selects_bridge(game):
    bounds = game.hotbar.layout(game.window_size, game.ui_scale).bounds
    slot = game.hotbar.slots[1].rect
    press = game.click(bounds.x + slot.x + 5, bounds.y + slot.y + 5, MouseButton.LEFT)
    assert press is ButtonPress.HOTBAR_2
    assert game.selected_obj is CellObject.BRIDGE


def test_map_clicks_place_and_remove(game):
    cell = _map_cell(game, 450, 300)
    before = game.hotbar.slots[0].count
    assert game.click(450, 300, MouseButton.LEFT) is ButtonPress.NONE
    assert game.grid[cell] == CellObject.LOG
    game.click(450, 300, MouseButton.RIGHT)
    assert not game.grid[cell] & CellFlag.OCCUPIED
    assert game.hotbar.slots[0].count == before


def test_unknown_mouse_button_rejected(game):
    with pytest.raises(ValueError):
        game.click(10, 10, 2)


def test_resize_updates_scale_and_camera(game):
    game.resize(450, 300)
    assert game.ui_scale == pytest.approx(0.5)
    assert game.camera.window_width == 450
    assert game.window_size == (450, 300)