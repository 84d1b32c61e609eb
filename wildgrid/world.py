"""The cell grid, its cell flags and the camera that maps world to screen."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

from .gamemath import Point2, Vector2

DEFAULT_SIDE_LEN = 52.0
TREE_WIDTH = 3
TREE_HEIGHT = 10


class CellFlag(enum.IntFlag):
    """Bits of a cell value that describe its properties."""

    WATER = 0x1000
    BARRIER = 0x2000
    OCCUPIED = 0x4000
    INDESTRUCTIBLE = 0x8000


# Bits kept when a building is removed: indestructible, water and shorelines.
PRESERVED_BITS = 0xFF9000
KIND_MASK = 0xFF


class CellObject(enum.IntEnum):
    """Objects that can be placed into a cell."""

    EMPTY = 0x0000
    LOG = 0x6001
    BRIDGE = 0x4002
    TREE = 0x6003


class Grid:
    """A rectangular grid of integer cell values, indexed as grid[x, y]."""

    def __init__(self, columns: Iterable[Sequence[int]]):
        cols = [[int(v) for v in column] for column in columns]
        if not cols or not cols[0]:
            raise ValueError("grid must have at least one cell")
        height = len(cols[0])
        if any(len(column) != height for column in cols):
            raise ValueError("all grid columns must have the same length")
        self._columns = cols
        self.side_len: float = DEFAULT_SIDE_LEN

    @property
    def size(self) -> tuple[int, int]:
        """Number of cells along x and along y."""
        return len(self._columns), len(self._columns[0])

    @property
    def pixel_width(self) -> int:
        return int(self.side_len * len(self._columns))

    @property
    def pixel_height(self) -> int:
        return int(self.side_len * len(self._columns[0]))

    def contains(self, cell) -> bool:
        x, y = cell
        nx, ny = self.size
        return 0 <= x < nx and 0 <= y < ny

    def __getitem__(self, cell) -> int:
        if not self.contains(cell):
            raise IndexError(f"cell {tuple(cell)} is outside the grid")
        x, y = cell
        return self._columns[x][y]

    def __setitem__(self, cell, value: int) -> None:
        if not self.contains(cell):
            raise IndexError(f"cell {tuple(cell)} is outside the grid")
        x, y = cell
        self._columns[x][y] = int(value)

    def find_cell(self, pos: Vector2) -> Point2:
        """Return the cell containing a world position, capped at the far edges."""
        nx, ny = self.size
        x = min(int(pos.x / self.side_len), nx - 1)
        y = min(int(pos.y / self.side_len), ny - 1)
        return Point2(x, y)

    def cells(self) -> Iterator[tuple[Point2, int]]:
        """Yield every cell and its value, column by column."""
        for x, column in enumerate(self._columns):
            for y, value in enumerate(column):
                yield Point2(x, y), value


_RIVER = int(CellFlag.WATER | CellFlag.BARRIER)
_TREES = {
    2: (14,),
    3: (3, 15),
    4: (3,),
    5: (3, 16),
    6: (15,),
    10: (1, 3, 4, 15),
    11: (1, 3, 4),
    12: (1, 3, 4),
    13: (1, 3, 4),
}


def default_grid() -> Grid:
    """Build the starting level: a river band with scattered trees."""
    columns = []
    for x in range(40):
        column = [_RIVER if 7 <= y <= 12 else 0 for y in range(20)]
        for y in _TREES.get(x, ()):
            column[y] = int(CellObject.TREE)
        columns.append(column)
    return Grid(columns)


class ViewState(enum.IntFlag):
    """Which edges of the background the view is pinned to; 0 means centred."""

    CENTRE = 0
    LEFT = 1
    RIGHT = 2
    TOP = 4
    BOTTOM = 8


_HORIZONTAL = ViewState.LEFT | ViewState.RIGHT
_VERTICAL = ViewState.TOP | ViewState.BOTTOM


@dataclass
class Camera:
    """Tracks the player and converts between window and world coordinates."""

    window_width: int
    window_height: int
    background_width: int
    background_height: int
    state: ViewState = ViewState.CENTRE

    def update(self, player_pos: Vector2) -> ViewState:
        """Recompute which edges the view is pinned to and return the state."""
        half_w, half_h = self.window_width // 2, self.window_height // 2
        state = ViewState.CENTRE
        if self.background_width < self.window_width or player_pos.x < half_w:
            state |= ViewState.LEFT
        elif player_pos.x > self.background_width - half_w:
            state |= ViewState.RIGHT
        if self.background_height < self.window_height or player_pos.y < half_h:
            state |= ViewState.TOP
        elif player_pos.y > self.background_height - half_h:
            state |= ViewState.BOTTOM
        self.state = state
        return state

    def world_position(self, window_pos: Point2, player_pos: Vector2) -> Vector2:
        """Convert a window pixel to a world position."""
        x, y = float(window_pos.x), float(window_pos.y)
        horizontal = self.state & _HORIZONTAL
        if horizontal == ViewState.CENTRE:
            x += player_pos.x - self.window_width // 2
        elif horizontal == ViewState.LEFT:
            if self.background_width < self.window_width:
                x -= (self.window_width - self.background_width) // 2
        elif horizontal == ViewState.RIGHT:
            x += self.background_width - self.window_width
        vertical = self.state & _VERTICAL
        if vertical == ViewState.CENTRE:
            y += player_pos.y - self.window_height // 2
        elif vertical == ViewState.TOP:
            if self.background_height < self.window_height:
                y -= (self.window_height - self.background_height) // 2
        elif vertical == ViewState.BOTTOM:
            y += self.background_height - self.window_height
        return Vector2(x, y)

    def screen_position(self, world_pos: Vector2, player_pos: Vector2) -> Point2:
        """Convert a world position to a window pixel."""
        x, y = int(world_pos.x), int(world_pos.y)
        horizontal = self.state & _HORIZONTAL
        if horizontal == ViewState.CENTRE:
            x = int(x + self.window_width // 2 - player_pos.x)
        elif horizontal == ViewState.LEFT:
            if self.background_width < self.window_width:
                x += (self.window_width - self.background_width) // 2
        elif horizontal == ViewState.RIGHT:
            x += self.window_width - self.background_width
        vertical = self.state & _VERTICAL
        if vertical == ViewState.CENTRE:
            y = int(y + self.window_height // 2 - player_pos.y)
        elif vertical == ViewState.TOP:
            if self.background_height < self.window_height:
                y += (self.window_height - self.background_height) // 2
        elif vertical == ViewState.BOTTOM:
            y += self.window_height - self.background_height
        return Point2(x, y)

    def background_offset(self, player_pos: Vector2) -> Point2:
        """Window pixel at which the background's top-left corner is drawn."""
        x = y = 0
        horizontal = self.state & _HORIZONTAL
        if horizontal == ViewState.CENTRE:
            x = int(self.window_width // 2 - player_pos.x)
        elif horizontal == ViewState.LEFT:
            if self.background_width < self.window_width:
                x = (self.window_width - self.background_width) // 2
        elif horizontal == ViewState.RIGHT:
            x = self.window_width - self.background_width
        vertical = self.state & _VERTICAL
        if vertical == ViewState.CENTRE:
            y = int(self.window_height // 2 - player_pos.y)
        elif vertical == ViewState.TOP:
            if self.background_height < self.window_height:
                y = (self.window_height - self.background_height) // 2
        elif vertical == ViewState.BOTTOM:
            y = self.window_height - self.background_height
        return Point2(x, y)