"""Game state and rules: placing objects, input handling and the update loop."""

from __future__ import annotations

import enum
from typing import Optional

from .entities import EntityType, GameObject, InputKeys, WorldState
from .gamemath import Point2, Vector2
from .inventory import ButtonPress, Hotbar, compute_ui_scale
from .world import (
    KIND_MASK,
    PRESERVED_BITS,
    Camera,
    CellFlag,
    CellObject,
    default_grid,
)

DEFAULT_WINDOW_SIZE = (900, 600)
DEFAULT_SCREEN_SIZE = (900, 600)
PLAYER_START = Vector2(400.0, 200.0)
PLAYER_SIZE = Point2(50, 50)
PLAYER_SPEED = 100.0
WOLF_START = Vector2(500.0, 300.0)
WOLF_SIZE = Point2(50, 50)
WOLF_SPEED = 80.0
START_HP = 5
WOOD_PER_TREE = 5
# Extra room around the player's hitbox so it fits through one-cell gaps.
CELL_PADDING = 2.0

_LOG_KIND = int(CellObject.LOG) & KIND_MASK
_BRIDGE_KIND = int(CellObject.BRIDGE) & KIND_MASK
_TREE_KIND = int(CellObject.TREE) & KIND_MASK


class DebugTools(enum.IntFlag):
    """Developer tools that can be toggled while playing."""

    SHOW_INFO = 1
    SPEED_BOOST = 2
    HITBOXES = 4


class Key(enum.Enum):
    """Keys the game reacts to."""

    W = "w"
    A = "a"
    S = "s"
    D = "d"
    SHIFT = "shift"
    ESCAPE = "escape"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F11 = "f11"


class MouseButton(enum.IntEnum):
    LEFT = 1
    RIGHT = 3


_MOVEMENT_KEYS = {
    Key.W: InputKeys.W,
    Key.A: InputKeys.A,
    Key.S: InputKeys.S,
    Key.D: InputKeys.D,
    Key.SHIFT: InputKeys.SHIFT,
}


class Game:
    """The whole game world: grid, entities, hotbar, camera and toggles."""

    def __init__(self, screen_size=DEFAULT_SCREEN_SIZE):
        self.screen_size = (int(screen_size[0]), int(screen_size[1]))
        self.window_size = DEFAULT_WINDOW_SIZE
        self.paused = False
        self.fullscreen = False
        self.debug_tools = DebugTools.SHOW_INFO | DebugTools.HITBOXES
        self.input_keys = InputKeys(0)
        self.selected_obj = CellObject.LOG
        self.hotbar = Hotbar.default()
        self.overlay_objects = 0
        self.overlay_dirty = True
        self.dirty_cells: set[Point2] = set()

        self.player = GameObject(
            PLAYER_START, Vector2(), EntityType.PLAYER, PLAYER_SIZE, PLAYER_SPEED, START_HP, 1.0
        )
        self.grid = default_grid()
        self.grid.side_len = max(self.player.size.x, self.player.size.y) + CELL_PADDING
        wolf = GameObject(
            WOLF_START,
            Vector2(),
            EntityType.WOLF,
            WOLF_SIZE,
            WOLF_SPEED,
            START_HP,
            self.grid.side_len,
        )
        self.objects: list[GameObject] = [self.player, wolf]

        self.camera = Camera(
            self.window_size[0],
            self.window_size[1],
            self.grid.pixel_width,
            self.grid.pixel_height,
        )
        self.ui_scale = compute_ui_scale(self.window_size, self.screen_size)
        self.state = WorldState(
            grid=self.grid, objects=self.objects, player=self.player, camera=self.camera
        )

        for cell, value in list(self.grid.cells()):
            self.place_object_in_cell(cell, value)
        self.dirty_cells.clear()
        self.overlay_dirty = True

    @property
    def side_len(self) -> float:
        return self.grid.side_len

    def tree_cells(self) -> list[Point2]:
        """Cells whose value is exactly a tree."""
        return [cell for cell, value in self.grid.cells() if value == CellObject.TREE]

    def _add_tree_to_overlay(self) -> None:
        self.overlay_objects += 1
        self.overlay_dirty = True

    def _remove_tree(self, cell: Point2) -> None:
        self.grid[cell] = self.grid[cell] & PRESERVED_BITS
        self.overlay_objects = len(self.tree_cells())
        self.overlay_dirty = True

    def place_object_in_cell(self, cell, obj_type) -> bool:
        """Place (or with EMPTY, remove) an object in a cell; return whether it changed."""
        cell = Point2(*cell)
        if not self.grid.contains(cell):
            return False
        value = self.grid[cell]
        obj = int(obj_type)
        logs, bridges = self.hotbar.slots[0], self.hotbar.slots[1]

        if obj == CellObject.TREE:
            self._add_tree_to_overlay()
            self.grid[cell] = value | CellObject.TREE
        elif obj == CellObject.LOG:
            if value & CellFlag.OCCUPIED or not logs.count:
                return False
            self.grid[cell] = value | CellObject.LOG
            logs.count -= 1
        elif obj == CellObject.BRIDGE:
            if value & CellFlag.OCCUPIED or not bridges.count:
                return False
            self.grid[cell] = (value | CellObject.BRIDGE) & ~CellFlag.BARRIER
            bridges.count -= 1
        elif obj == CellObject.EMPTY:
            if value & CellFlag.INDESTRUCTIBLE:
                return False
            kind = value & KIND_MASK
            if kind == _LOG_KIND:
                logs.count += 1
            elif kind == _BRIDGE_KIND:
                bridges.count += 1
            elif kind == _TREE_KIND:
                logs.count += WOOD_PER_TREE
                self._remove_tree(cell)
            remaining = self.grid[cell] & PRESERVED_BITS
            if remaining & CellFlag.WATER:
                remaining |= CellFlag.BARRIER
            else:
                remaining &= ~CellFlag.BARRIER
            self.grid[cell] = remaining
        self.dirty_cells.add(cell)
        return True

    def key_down(self, key: Key) -> None:
        key = Key(key)
        if key in _MOVEMENT_KEYS:
            self.input_keys |= _MOVEMENT_KEYS[key]
        elif key is Key.ESCAPE:
            self.paused = not self.paused
        elif key is Key.F11:
            self.fullscreen = not self.fullscreen
        elif key is Key.F9:
            self.debug_tools ^= DebugTools.SHOW_INFO
        elif key is Key.F8:
            self.debug_tools ^= DebugTools.SPEED_BOOST
        elif key is Key.F7:
            self.player.has_collision = not self.player.has_collision
        elif key is Key.F6:
            self.debug_tools ^= DebugTools.HITBOXES

    def key_up(self, key: Key) -> None:
        key = Key(key)
        if key in _MOVEMENT_KEYS:
            self.input_keys &= ~_MOVEMENT_KEYS[key]

    def click(self, x: int, y: int, button) -> Optional[ButtonPress]:
        """Handle a mouse click; return what was hit, or None while paused."""
        button = MouseButton(button)
        if self.paused:
            return None
        press = self.hotbar.button_press(x, y, self.window_size, self.ui_scale)
        if press is ButtonPress.NONE:
            world = self.camera.world_position(Point2(x, y), self.player.pos)
            cell = self.grid.find_cell(world)
            target = self.selected_obj if button is MouseButton.LEFT else CellObject.EMPTY
            self.place_object_in_cell(cell, target)
        elif button is MouseButton.LEFT:
            if press is ButtonPress.HOTBAR_1:
                self.selected_obj = CellObject.LOG
            elif press is ButtonPress.HOTBAR_2:
                self.selected_obj = CellObject.BRIDGE
        return press

    def resize(self, width: int, height: int) -> None:
        self.window_size = (int(width), int(height))
        self.camera.window_width, self.camera.window_height = self.window_size
        self.ui_scale = compute_ui_scale(self.window_size, self.screen_size)

    def step(self, delta_time: float) -> None:
        """Advance every entity by delta_time seconds."""
        state = self.state
        state.delta_time = delta_time
        state.paused = self.paused
        state.input_keys = self.input_keys
        state.speed_boost = bool(self.debug_tools & DebugTools.SPEED_BOOST)
        for obj in list(self.objects):
            obj.update(state)