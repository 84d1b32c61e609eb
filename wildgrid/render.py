"""Drawing the game with pygame: tiles, trees, entities, hotbar and debug text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygame

from .entities import Animations, Facing, GameObject
from .game import DebugTools, Game
from .inventory import DEFAULT_HOTBAR_SIZE
from .world import KIND_MASK, TREE_HEIGHT, TREE_WIDTH, CellFlag, CellObject

WHITE = (255, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
BLACK = (0, 0, 0)

PAUSE_SHADE = (0, 0, 0, 180)
TEXT_SIZE = 14
LINE_SPACING = 15
TEXT_ORIGIN = (10, 10)
HITBOX_DOT_SIZE = 6
PLAYER_FRAME_COUNT = 12
PLAYER_FRAME_SIZE = (25, 25)
TREE_IMAGE_SIZE = (75, 250)
WOLF_IMAGE_SIZE = (50, 50)

_FACING_DIRS = {
    Facing.FRONT: "front",
    Facing.BACK: "back",
    Facing.LEFT: "left",
    Facing.RIGHT: "right",
}

_LOG_KIND = int(CellObject.LOG) & KIND_MASK
_BRIDGE_KIND = int(CellObject.BRIDGE) & KIND_MASK
_TREE_KIND = int(CellObject.TREE) & KIND_MASK


def _solid(size, colour) -> pygame.Surface:
    surface = pygame.Surface(size, pygame.SRCALPHA)
    surface.fill(colour)
    return surface


@dataclass
class Assets:
    """Every image the renderer draws."""

    log: pygame.Surface
    bridge: pygame.Surface
    water: pygame.Surface
    empty: pygame.Surface
    hotbar: pygame.Surface
    tree: pygame.Surface
    wolf: pygame.Surface
    player_frames: dict

    @classmethod
    def load(cls, directory) -> Assets:
        """Load the images from a directory laid out like the game's images folder."""
        root = Path(directory)

        def image(*parts: str) -> pygame.Surface:
            path = root.joinpath(*parts)
            if not path.is_file():
                raise FileNotFoundError(f"missing image {path}")
            return pygame.image.load(str(path))

        frames = {
            facing: [image("Player", name, f"{i}.png") for i in range(PLAYER_FRAME_COUNT)]
            for facing, name in _FACING_DIRS.items()
        }
        return cls(
            log=image("Log.png"),
            bridge=image("Bridge.png"),
            water=image("Water.png"),
            empty=image("EmptyTile.png"),
            hotbar=image("Hotbar.png"),
            tree=image("Tree.png"),
            wolf=image("Wolf.png"),
            player_frames=frames,
        )

    @classmethod
    def placeholder(cls, side_len) -> Assets:
        """Plain coloured images, for running without an images folder."""
        side = max(1, int(side_len))
        tile = (side, side)
        facing_colours = {
            Facing.FRONT: (230, 200, 160, 255),
            Facing.BACK: (200, 170, 130, 255),
            Facing.LEFT: (210, 180, 140, 255),
            Facing.RIGHT: (220, 190, 150, 255),
        }
        frames = {
            facing: [_solid(PLAYER_FRAME_SIZE, colour) for _ in range(2)]
            for facing, colour in facing_colours.items()
        }
        return cls(
            log=_solid(tile, (120, 80, 40, 255)),
            bridge=_solid(tile, (150, 110, 70, 255)),
            water=_solid(tile, (40, 90, 200, 255)),
            empty=_solid(tile, (60, 160, 60, 255)),
            hotbar=_solid(DEFAULT_HOTBAR_SIZE, (50, 50, 50, 255)),
            tree=_solid(TREE_IMAGE_SIZE, (20, 100, 30, 255)),
            wolf=_solid(WOLF_IMAGE_SIZE, (130, 130, 130, 255)),
            player_frames=frames,
        )


class Renderer:
    """Keeps the pre-drawn background and tree overlay, and draws whole frames."""

    def __init__(self, game: Game, assets: Assets):
        pygame.font.init()
        self.game = game
        self.assets = assets
        game.hotbar.image_size = assets.hotbar.get_size()
        frames = assets.player_frames
        for obj in game.objects:
            if obj.has_animation:
                previous = obj.animations
                animations = Animations(
                    frames[Facing.FRONT],
                    frames[Facing.BACK],
                    frames[Facing.LEFT],
                    frames[Facing.RIGHT],
                    1.0,
                    1.0,
                    1.0,
                    1.0,
                )
                animations.facing = previous.facing
                animations.stage = previous.stage
                obj.animations = animations
        self._fonts: dict[int, pygame.font.Font] = {}
        self._scaled: dict[tuple[int, tuple[int, int]], pygame.Surface] = {}
        self._prev_fps = 0
        size = (game.grid.pixel_width, game.grid.pixel_height)
        self.background = pygame.Surface(size)
        self.overlay = pygame.Surface(size, pygame.SRCALPHA)
        self.rebuild_background()
        self.rebuild_overlay()

    def _scale(self, surface: pygame.Surface, size) -> pygame.Surface:
        target = (max(1, int(size[0])), max(1, int(size[1])))
        if surface.get_size() == target:
            return surface
        key = (id(surface), target)
        if key not in self._scaled:
            self._scaled[key] = pygame.transform.scale(surface, target)
        return self._scaled[key]

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, max(1, size))
        return self._fonts[size]

    def _cell_images(self, value: int) -> list[pygame.Surface]:
        kind = value & KIND_MASK
        if kind == _TREE_KIND:
            return [self.assets.empty]
        base = self.assets.water if value & CellFlag.WATER else self.assets.empty
        if kind == _LOG_KIND:
            return [base, self.assets.log]
        if kind == _BRIDGE_KIND:
            return [base, self.assets.bridge]
        return [base]

    def _draw_cell(self, cell, value: int) -> None:
        side = self.game.side_len
        tile = (int(side), int(side))
        origin = (int(cell.x * side), int(cell.y * side))
        for image in self._cell_images(value):
            self.background.blit(self._scale(image, tile), origin)

    def rebuild_background(self) -> None:
        """Redraw every cell of the background."""
        for cell, value in self.game.grid.cells():
            self._draw_cell(cell, value)
        self.game.dirty_cells.clear()

    def rebuild_overlay(self) -> None:
        """Clear the overlay and draw every standing tree onto it."""
        self.overlay.fill((0, 0, 0, 0))
        side = self.game.side_len
        tree = self._scale(self.assets.tree, (side * TREE_WIDTH, side * TREE_HEIGHT))
        for cell in self.game.tree_cells():
            x = int((cell.x - TREE_WIDTH // 2) * side)
            y = int((cell.y - (TREE_HEIGHT - 1)) * side)
            self.overlay.blit(tree, (x, y))
        self.game.overlay_dirty = False

    def _refresh(self) -> None:
        grid = self.game.grid
        for cell in list(self.game.dirty_cells):
            self._draw_cell(cell, grid[cell])
        self.game.dirty_cells.clear()
        if self.game.overlay_dirty:
            self.rebuild_overlay()

    def _fps(self, delta_time: float) -> int:
        if delta_time <= 0.0:
            return self._prev_fps
        self._prev_fps = int(1.0 / delta_time)
        return self._prev_fps

    def debug_lines(self, fps: int) -> list[tuple[str, tuple[int, int, int]]]:
        """The debug text lines, top to bottom, with their colours."""
        game = self.game
        lines = [
            (f"{fps} FPS", WHITE),
            ("press F9 to toggle debug menu", WHITE),
        ]
        if not game.debug_tools & DebugTools.SHOW_INFO:
            return lines
        centre = game.player.centre_pos
        side = game.side_len
        tools = game.debug_tools
        lines += [
            (f"position: ({centre.x:.6f}, {centre.y:.6f})", WHITE),
            (f"cell: ({int(centre.x / side)}, {int(centre.y / side)})", WHITE),
            (f"num entities: {len(game.objects)}", WHITE),
            (f"num objects in overlay: {game.overlay_objects}", WHITE),
            (
                "press F8 to toggle speed boost",
                RED if tools & DebugTools.SPEED_BOOST else WHITE,
            ),
            (
                "press F7 to toggle noclip",
                WHITE if game.player.has_collision else RED,
            ),
            (
                "press F6 to toggle hitboxes",
                RED if tools & DebugTools.HITBOXES else WHITE,
            ),
        ]
        return lines

    def _draw_entity(self, surface: pygame.Surface, obj: GameObject) -> None:
        game = self.game
        pos = game.camera.screen_position(obj.pos, game.player.pos)
        width, height = game.window_size
        if pos.x < -obj.size.x or pos.x > width or pos.y < -obj.size.y or pos.y > height:
            return
        if obj.has_animation:
            image = obj.animations.frame(game.state.delta_time, game.paused)
        else:
            image = self.assets.wolf
        surface.blit(self._scale(image, (obj.size.x, obj.size.y)), (pos.x, pos.y))
        wanted = DebugTools.SHOW_INFO | DebugTools.HITBOXES
        if game.debug_tools & wanted == wanted:
            self._draw_hitbox(surface, obj, pos)

    def _draw_hitbox(self, surface: pygame.Surface, obj: GameObject, pos) -> None:
        dot = HITBOX_DOT_SIZE
        d = dot // 2
        cx, cy = pos.x + obj.size.x // 2, pos.y + obj.size.y // 2
        radius = int(obj.radius)
        lattice = obj.collision_lattice

        pygame.draw.rect(surface, BLUE, pygame.Rect(pos.x, pos.y, obj.size.x, obj.size.y), 1)
        if radius > 0:
            circle = pygame.Rect(cx - radius, cy - radius, 2 * radius, 2 * radius)
            pygame.draw.ellipse(surface, GREEN, circle, 1)

        points = []
        for i in range(lattice.count_x + 1):
            x = pos.x + lattice.step_x * i
            points.append((x, pos.y))
            points.append((x, pos.y + obj.size.y))
        for i in range(1, lattice.count_y + 1):
            y = pos.y + lattice.step_y * i
            points.append((pos.x, y))
            points.append((pos.x + obj.size.x, y))
        for x, y in points:
            pygame.draw.ellipse(surface, RED, pygame.Rect(x - d, y - d, dot, dot))
        pygame.draw.ellipse(surface, BLUE, pygame.Rect(cx - d, cy - d, dot, dot))

        tip = (cx + obj.velocity.x / 2.5, cy + obj.velocity.y / 2.5)
        pygame.draw.line(surface, GREEN, (cx, cy), tip)

    def _draw_hotbar(self, surface: pygame.Surface) -> None:
        game = self.game
        layout = game.hotbar.layout(game.window_size, game.ui_scale)
        bounds = layout.bounds
        if bounds.width > 0 and bounds.height > 0:
            hotbar = self._scale(self.assets.hotbar, (bounds.width, bounds.height))
            surface.blit(hotbar, (bounds.x, bounds.y))
        for entry in layout.slots:
            image = self.assets.log if entry.slot.obj_type == CellObject.LOG else self.assets.bridge
            rect = entry.image_rect
            if rect.width > 0 and rect.height > 0:
                surface.blit(self._scale(image, (rect.width, rect.height)), (rect.x, rect.y))
            text = self._font(entry.font_size).render(entry.label, True, WHITE)
            surface.blit(text, (int(entry.label_pos[0]), int(entry.label_pos[1])))

    def draw(self, surface: pygame.Surface) -> None:
        """Draw one whole frame onto surface."""
        self._refresh()
        game = self.game
        surface.fill(BLACK)
        offset = game.camera.background_offset(game.player.pos)
        surface.blit(self.background, (offset.x, offset.y))
        for obj in game.objects:
            self._draw_entity(surface, obj)
        surface.blit(self.overlay, (offset.x, offset.y))
        self._draw_hotbar(surface)

        if game.paused:
            shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            shade.fill(PAUSE_SHADE)
            surface.blit(shade, (0, 0))

        font = self._font(TEXT_SIZE)
        x, y = TEXT_ORIGIN
        for text, colour in self.debug_lines(self._fps(game.state.delta_time)):
            surface.blit(font.render(text, True, colour), (x, y))
            y += LINE_SPACING