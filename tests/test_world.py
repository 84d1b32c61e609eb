import pytest

from wildgrid.gamemath import Point2, Vector2
from wildgrid.world import (
    Camera,
    CellFlag,
    CellObject,
    Grid,
    ViewState,
    default_grid,
)


def test_cell_values_in_grid_carry_their_flags():
    grid = Grid([[CellObject.LOG, CellObject.BRIDGE, CellObject.EMPTY]])
    assert grid[0, 0] & CellFlag.OCCUPIED
    assert grid[0, 0] & CellFlag.BARRIER
    assert not grid[0, 1] & CellFlag.BARRIER
    assert grid[0, 2] == 0


def test_default_grid_size():
    assert default_grid().size == (40, 20)


def test_default_grid_river_and_trees():
    grid = default_grid()
    assert grid[0, 7] == CellFlag.WATER | CellFlag.BARRIER
    assert grid[39, 12] == CellFlag.WATER | CellFlag.BARRIER
    assert grid[0, 6] == CellObject.EMPTY
    assert grid[3, 3] == CellObject.TREE
    trees = [cell for cell, value in default_grid().cells() if value == CellObject.TREE]
    assert len(trees) == 20


def test_cells_visits_every_cell_once():
    grid = default_grid()
    nx, ny = grid.size
    cells = [cell for cell, _ in grid.cells()]
    assert len(cells) == nx * ny
    assert len(set(cells)) == nx * ny


def test_setitem_round_trip_with_point():
    grid = Grid([[0, 0], [0, 0]])
    grid[Point2(1, 0)] = CellObject.BRIDGE
    assert grid[1, 0] == CellObject.BRIDGE


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (2, 0), (0, 3)])
def test_out_of_range_raises(cell):
    grid = Grid([[0, 0, 0], [0, 0, 0]])
    assert not grid.contains(cell)
    with pytest.raises(IndexError):
        grid[cell]
    with pytest.raises(IndexError):
        grid[cell] = 1


@pytest.mark.parametrize("columns", [[], [[]], [[0, 0], [0]]])
def test_bad_shapes_raise(columns):
    with pytest.raises(ValueError):
        Grid(columns)


def test_find_cell_round_trip():
    grid = default_grid()
    for cell, _ in grid.cells():
        pos = Vector2(cell.x * grid.side_len + 1.0, cell.y * grid.side_len + 1.0)
        assert grid.find_cell(pos) == cell


def test_find_cell_caps_at_far_edge():
    grid = default_grid()
    nx, ny = grid.size
    far = Vector2(grid.pixel_width * 10.0, grid.pixel_height * 10.0)
    assert grid.find_cell(far) == Point2(nx - 1, ny - 1)


def test_pixel_size_follows_side_len():
    grid = default_grid()
    nx, ny = grid.size
    assert grid.pixel_width == int(grid.side_len * nx)
    assert grid.pixel_height == int(grid.side_len * ny)


def _camera():
    grid = default_grid()
    return Camera(900, 600, grid.pixel_width, grid.pixel_height)


def test_update_small_background_pins_left_top():
    cam = Camera(900, 600, 400, 300)
    assert cam.update(Vector2(200.0, 150.0)) == ViewState.LEFT | ViewState.TOP


def test_update_far_corner_pins_right_bottom():
    cam = _camera()
    player = Vector2(cam.background_width - 10.0, cam.background_height - 10.0)
    assert cam.update(player) == ViewState.RIGHT | ViewState.BOTTOM


def test_update_middle_is_centre():
    cam = _camera()
    player = Vector2(cam.background_width / 2, cam.background_height / 2)
    assert cam.update(player) == ViewState.CENTRE


@pytest.mark.parametrize(
    "player",
    [Vector2(10.0, 10.0), Vector2(1000.0, 500.0), Vector2(2000.0, 1000.0)],
)
@pytest.mark.parametrize("window_pos", [Point2(0, 0), Point2(123, 456), Point2(899, 599)])
def test_world_and_screen_positions_are_inverse(player, window_pos):
    cam = _camera()
    cam.update(player)
    world = cam.world_position(window_pos, player)
    assert cam.screen_position(world, player) == window_pos


@pytest.mark.parametrize(
    "player",
    [Vector2(10.0, 10.0), Vector2(1000.0, 500.0), Vector2(2000.0, 1000.0)],
)
def test_background_offset_is_screen_position_of_origin(player):
    cam = _camera()
    cam.update(player)
    assert cam.background_offset(player) == cam.screen_position(Vector2(0.0, 0.0), player)


def test_small_background_is_centred_in_window():
    cam = Camera(900, 600, 400, 300)
    player = Vector2(50.0, 50.0)
    cam.update(player)
    offset = cam.background_offset(player)
    assert offset.x * 2 + cam.background_width == cam.window_width
    assert offset.y * 2 + cam.background_height == cam.window_height