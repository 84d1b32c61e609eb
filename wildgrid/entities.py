"""Moving entities: movement rules, animation frames and collision handling."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Sequence

from .gamemath import ONE2, ZERO2, Point2, Vector2, get_unit_vector
from .world import Camera, CellFlag, Grid


class EntityType(enum.IntEnum):
    PLAYER = 0
    WOLF = 1


class Facing(enum.IntEnum):
    FRONT = 0
    BACK = 1
    LEFT = 2
    RIGHT = 3


class InputKeys(enum.IntFlag):
    """Held movement keys."""

    D = 1  # right
    S = 2  # down
    A = 4  # left
    W = 8  # up
    SHIFT = 16  # run


class Animations:
    """Walking frames for each facing, cycled by elapsed time."""

    def __init__(
        self,
        front: Sequence[Any] = (),
        back: Sequence[Any] = (),
        left: Sequence[Any] = (),
        right: Sequence[Any] = (),
        front_time: float = 1.0,
        back_time: float = 1.0,
        left_time: float = 1.0,
        right_time: float = 1.0,
    ):
        self._frames = {
            Facing.FRONT: list(front),
            Facing.BACK: list(back),
            Facing.LEFT: list(left),
            Facing.RIGHT: list(right),
        }
        times = {
            Facing.FRONT: front_time,
            Facing.BACK: back_time,
            Facing.LEFT: left_time,
            Facing.RIGHT: right_time,
        }
        self._interval = {f: (len(self._frames[f]) - 1) / times[f] for f in Facing}
        self.facing = Facing.FRONT
        self.stage = 0.0

    def frames(self, facing: Facing) -> list:
        return self._frames[facing]

    def frame(self, delta_time: float, paused: bool):
        """Return the frame to show now, then advance the animation unless paused."""
        frames = self._frames[self.facing]
        if not frames:
            raise IndexError(f"no animation frames for facing {self.facing.name}")
        index = int(self.stage * self._interval[self.facing])
        if index >= len(frames):
            index = 0
            self.stage = 0.0
        elif not paused:
            self.stage += delta_time
        return frames[index]


@dataclass
class WorldState:
    """Everything an entity needs to see while it updates."""

    grid: Grid
    objects: list = field(default_factory=list)
    player: Optional["GameObject"] = None
    delta_time: float = 0.0
    paused: bool = False
    input_keys: InputKeys = InputKeys(0)
    speed_boost: bool = False
    camera: Optional[Camera] = None


class CollisionLattice(NamedTuple):
    """Number of cells an entity spans and the spacing of its wall-probe points."""

    count_x: int
    count_y: int
    step_x: int
    step_y: int


class GameObject:
    """A moving entity in the world."""

    def __init__(self, pos, velocity, kind, size, speed, hp, side_len):
        self.kind = EntityType(kind)
        self.pos = Vector2(*pos)
        self.velocity = Vector2(*velocity)
        self.size = Point2(*size)
        self.speed = float(speed)
        self.hp = int(hp)
        self.has_collision = True
        self.centre_pos = self._centre()
        if self.kind == EntityType.PLAYER:
            self.animations: Optional[Animations] = Animations()
            self.collision_lattice = CollisionLattice(1, 1, self.size.x, self.size.y)
        else:
            self.animations = None
            num_x = int(self.size.x / side_len + 1)
            num_y = int(self.size.y / side_len + 1)
            self.collision_lattice = CollisionLattice(
                num_x, num_y, int(self.size.x / num_x), int(self.size.y / num_y)
            )
        self.radius = float(max(self.size.x // 2, self.size.y // 2))

    @property
    def has_animation(self) -> bool:
        return self.animations is not None

    def _centre(self) -> Vector2:
        return self.pos + Vector2(self.size.x // 2, self.size.y // 2)

    def update(self, state: WorldState) -> None:
        if state.paused:
            return
        self.update_velocity(state)
        self.update_position(state.delta_time)
        self.handle_collisions(state)
        if self is state.player and state.camera is not None:
            state.camera.update(self.pos)

    def update_velocity(self, state: WorldState) -> None:
        if self.kind == EntityType.PLAYER:
            player_velocity(self, state)
        elif self.kind == EntityType.WOLF:
            wolf_velocity(self, state)
        else:
            raise ValueError(f"unknown entity {self.kind!r}")

    def update_position(self, delta_time: float) -> None:
        self.pos = self.pos + self.velocity * delta_time
        self.centre_pos = self._centre()

    def handle_collisions(self, state: WorldState) -> None:
        """Push apart from other entities, then keep inside the world and out of walls."""
        if not self.has_collision:
            return
        self._collide_with_objects(state.objects)

        grid = state.grid
        width, height = grid.pixel_width, grid.pixel_height
        x, y = self.pos
        if x < 0.0:
            x = 0.0
        elif x > width - self.size.x:
            x = width - self.size.x - 1.0
        if y < 0.0:
            y = 0.0
        elif y > height - self.size.y:
            y = height - self.size.y - 1.0
        self.pos = Vector2(x, y)

        self._collide_sides(grid)
        self._collide_corners(grid)

    def _collide_with_objects(self, objects) -> None:
        for other in objects:
            if other is self or not other.has_collision:
                continue
            disp = other.centre_pos - self.centre_pos
            if disp == ZERO2:
                disp = ONE2
            distance = disp.length()
            reach = self.radius + other.radius
            if distance < reach:
                push = disp.normalised() * (reach - distance) / 2
                self.pos = self.pos - push
                other.pos = other.pos + push

    def _collide_sides(self, grid: Grid) -> None:
        side = grid.side_len
        lattice = self.collision_lattice

        def blocked(node: Vector2) -> Optional[Point2]:
            cell = grid.find_cell(node)
            return cell if grid[cell] & CellFlag.BARRIER else None

        for i in range(1, lattice.count_x):  # top side, move down
            cell = blocked(Vector2(self.pos.x + lattice.step_x * i, self.pos.y))
            if cell:
                self.pos = Vector2(self.pos.x, (cell.y + 1) * side)
        for i in range(1, lattice.count_x):  # bottom side, move up
            cell = blocked(Vector2(self.pos.x + lattice.step_x * i, self.pos.y + self.size.y))
            if cell:
                self.pos = Vector2(self.pos.x, cell.y * side - self.size.y)
        for i in range(1, lattice.count_x):  # left side, move right
            cell = blocked(Vector2(self.pos.x, self.pos.y + lattice.step_y * i))
            if cell:
                self.pos = Vector2((cell.x + 1) * side, self.pos.y)
        for i in range(1, lattice.count_x):  # right side, move left
            cell = blocked(Vector2(self.pos.x + self.size.y, self.pos.y + lattice.step_y * i))
            if cell:
                self.pos = Vector2(cell.x * side - self.size.x, self.pos.y)

    def _collide_corners(self, grid: Grid) -> None:
        side = grid.side_len
        sx, sy = self.size.x, self.size.y
        corners = (
            (Vector2(0.0, 0.0), Vector2(1.0, 1.0)),  # top left
            (Vector2(sx, 0.0), Vector2(0.0, 1.0)),  # top right
            (Vector2(0.0, sy), Vector2(1.0, 0.0)),  # bottom left
            (Vector2(sx, sy), Vector2(0.0, 0.0)),  # bottom right
        )
        for offset, edge in corners:
            corner = self.pos + offset
            cell = grid.find_cell(corner)
            disp = ZERO2
            if grid[cell] & CellFlag.BARRIER:
                disp = (Vector2(cell.x, cell.y) + edge) * side - corner
            if abs(disp.x) < abs(disp.y):
                self.pos = Vector2(self.pos.x + disp.x, self.pos.y)
            else:
                self.pos = Vector2(self.pos.x, self.pos.y + disp.y)


def player_velocity(obj: GameObject, state: WorldState) -> None:
    """Set the player's velocity and facing from the held keys."""
    keys = state.input_keys
    speed = obj.speed
    if keys & InputKeys.SHIFT:
        speed *= 2.0
    if state.speed_boost:
        speed *= 2.0
    direction = Vector2(
        bool(keys & InputKeys.D) - bool(keys & InputKeys.A),
        bool(keys & InputKeys.S) - bool(keys & InputKeys.W),
    )
    obj.velocity = direction.normalised() * speed
    anim = obj.animations
    if anim is None:
        return
    if obj.velocity.y > 0.0:
        anim.facing = Facing.FRONT
    elif obj.velocity.y < 0.0:
        anim.facing = Facing.BACK
    elif obj.velocity.x > 0.0:
        anim.facing = Facing.RIGHT
    elif obj.velocity.x < 0.0:
        anim.facing = Facing.LEFT
    else:
        anim.stage = 0.0


def wolf_velocity(obj: GameObject, state: WorldState) -> None:
    """Point a wolf straight at the player."""
    if state.player is None:
        raise ValueError("a wolf needs a player to chase")
    obj.velocity = get_unit_vector(obj.centre_pos, state.player.centre_pos) * obj.speed