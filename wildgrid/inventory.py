"""The hotbar: its slots, on-screen layout and click hit-testing."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable

from .gamemath import clamp
from .world import CellObject

DEFAULT_HOTBAR_SIZE = (600, 150)
SLOT_MARGIN = 15.0
FONT_SIZE = 20
DRAWN_SLOTS = 5
CLICKABLE_SLOTS = 6


@dataclass(frozen=True)
class Rect:
    """An integer rectangle: top-left corner plus size."""

    x: int
    y: int
    width: int
    height: int

    def scaled(self, k: float) -> Rect:
        return Rect(int(self.x * k), int(self.y * k), int(self.width * k), int(self.height * k))


class ButtonPress(enum.IntEnum):
    """What a click at a window position landed on."""

    NONE = 0  # not on the hotbar: the map
    HOTBAR_1 = 1
    HOTBAR_2 = 2
    HOTBAR_3 = 3
    HOTBAR_4 = 4
    HOTBAR_5 = 5
    INVENTORY = 6
    PANEL = 7  # on the hotbar, but not on a button


_SLOT_TYPES = frozenset({CellObject.EMPTY, CellObject.LOG, CellObject.BRIDGE})


@dataclass
class HotbarSlot:
    """One hotbar button: where it sits in the hotbar, what it holds, how many."""

    rect: Rect
    obj_type: CellObject = CellObject.EMPTY
    count: int = 0

    def __post_init__(self) -> None:
        obj = CellObject(self.obj_type)
        if obj not in _SLOT_TYPES:
            raise ValueError(f"a hotbar slot cannot hold {obj.name}")
        self.obj_type = obj

    @property
    def has_item(self) -> bool:
        return self.obj_type != CellObject.EMPTY


@dataclass(frozen=True)
class SlotLayout:
    """Where a slot's item image and count label are drawn on screen."""

    slot: HotbarSlot
    image_rect: Rect
    label: str
    label_pos: tuple[float, float]
    font_size: int


@dataclass(frozen=True)
class HotbarLayout:
    """The hotbar's screen rectangle and the drawable slots within it."""

    bounds: Rect
    slots: list[SlotLayout]


def default_slots() -> list[HotbarSlot]:
    """The starting hotbar: logs, bridges, three empty slots and the inventory button."""
    return [
        HotbarSlot(Rect(10, 25, 100, 100), CellObject.LOG, 100),
        HotbarSlot(Rect(120, 25, 100, 100), CellObject.BRIDGE, 100),
        HotbarSlot(Rect(230, 25, 100, 100), CellObject.EMPTY, 20),
        HotbarSlot(Rect(340, 25, 100, 100), CellObject.EMPTY, 20),
        HotbarSlot(Rect(450, 25, 100, 100), CellObject.EMPTY, 20),
        HotbarSlot(Rect(560, 58, 30, 67), CellObject.EMPTY, 20),
    ]


def compute_ui_scale(window_size, screen_size, ui_scale: float = 1.0) -> float:
    """UI scale for a window: its share of the screen, kept within [0.5, 1], times ui_scale."""
    ww, wh = window_size
    sw, sh = screen_size
    return clamp(0.5, 1.0, min(ww / sw, wh / sh)) * ui_scale


class Hotbar:
    """The hotbar drawn at the bottom centre of the window."""

    def __init__(self, image_size, slots: Iterable[HotbarSlot]):
        width, height = image_size
        if width <= 0 or height <= 0:
            raise ValueError("hotbar image size must be positive")
        self.image_size = (int(width), int(height))
        self.slots = list(slots)

    @classmethod
    def default(cls) -> Hotbar:
        return cls(DEFAULT_HOTBAR_SIZE, default_slots())

    def _bounds(self, window_size, ui_scale: float) -> Rect:
        ww, wh = window_size
        width = int(self.image_size[0] * ui_scale)
        height = int(self.image_size[1] * ui_scale)
        return Rect(int((ww - width) / 2), wh - height, width, height)

    def layout(self, window_size, ui_scale: float) -> HotbarLayout:
        """Compute where the hotbar and its item images and counts are drawn."""
        bounds = self._bounds(window_size, ui_scale)
        margin = SLOT_MARGIN * ui_scale
        font_size = int(FONT_SIZE * ui_scale)
        entries = []
        for slot in self.slots[:DRAWN_SLOTS]:
            if not slot.has_item or not slot.count:
                continue
            r = slot.rect.scaled(ui_scale)
            image_rect = Rect(
                int(bounds.x + r.x + margin),
                int(bounds.y + r.y + margin),
                int(r.width - 2 * margin),
                int(r.height - 2 * margin),
            )
            label = str(slot.count)
            disp = int(len(str(abs(slot.count))) * (font_size // 2) + 2 * margin)
            label_pos = (
                float(bounds.x + r.x + r.width - disp),
                bounds.y + r.y + r.height - font_size // 2 - 2 * margin,
            )
            entries.append(SlotLayout(slot, image_rect, label, label_pos, font_size))
        return HotbarLayout(bounds, entries)

    def button_press(self, x: int, y: int, window_size, ui_scale: float) -> ButtonPress:
        """Determine which button, if any, lies under a window position."""
        bounds = self._bounds(window_size, ui_scale)
        dx, dy = x - bounds.x, y - bounds.y
        if not (0 <= dx <= bounds.width and 0 <= dy <= bounds.height):
            return ButtonPress.NONE
        for index, slot in enumerate(self.slots[:CLICKABLE_SLOTS], start=1):
            sx = int(dx - slot.rect.x * ui_scale)
            sy = int(dy - slot.rect.y * ui_scale)
            if 0 <= sx <= slot.rect.width * ui_scale and 0 <= sy <= slot.rect.height * ui_scale:
                return ButtonPress(index)
        return ButtonPress.PANEL