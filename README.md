# wildgrid

A small top-down game played on a grid. You walk around a world split by a
river, chop down trees for wood, lay logs, build bridges across the water and
keep clear of the wolf that follows you around.

## Installing

```
pip install .
```

This installs the `wildgrid` command. It needs `pygame`.

## Playing

```
wildgrid
```

By default the game loads its images from an `images/` directory in the
current working directory: `Log.png`, `Bridge.png`, `Water.png`,
`EmptyTile.png`, `Hotbar.png`, `Tree.png`, `Wolf.png`, and twelve player frames
per direction in `Player/front/`, `Player/back/`, `Player/left/` and
`Player/right/` (named `0.png` to `11.png`). If an image is missing or cannot
be loaded, the command prints the error and exits with status 1.

Options:

| Option            | Meaning                                                  |
|-------------------|----------------------------------------------------------|
| `--assets DIR`    | Load images from `DIR` instead of `images`               |
| `--placeholder`   | Draw plain coloured tiles instead of loading any images  |
| `--frames N`      | Stop after `N` frames (a positive integer)               |

To try the game without any images:

```
wildgrid --placeholder
```

### Controls

| Input              | Action                                          |
|--------------------|-------------------------------------------------|
| W / A / S / D      | Move                                            |
| Shift (held)       | Move at double speed                            |
| Left click (map)   | Place the selected item in the clicked cell     |
| Right click (map)  | Clear the clicked cell and get its items back   |
| Left click hotbar 1 / 2 | Select logs / bridges                      |
| Escape             | Pause or resume (clicks are ignored while paused) |
| F11                | Toggle fullscreen                               |
| F9                 | Toggle the debug panel                          |
| F8                 | Toggle the debug speed boost (double speed)     |
| F7                 | Toggle noclip for the player                    |
| F6                 | Toggle hitbox drawing (shown with the debug panel) |

Logs and bridges start at 100 each and can only go into cells that are not
already occupied. Clearing a log gives back one log, clearing a bridge gives
back one bridge, and cutting a tree down gives five logs. A bridge clears the
barrier on a water cell, so the player can walk across it; clearing it makes
the water a barrier again.

## Using it as a library

Game state does not need a window. `wildgrid.game.Game` holds the world and
takes input as plain method calls:

```python
from wildgrid.game import Game, Key, MouseButton

game = Game((1920, 1080))
game.resize(900, 600)
game.key_down(Key.D)
game.step(0.5)                      # advance half a second
game.key_up(Key.D)
game.click(100, 100, MouseButton.LEFT)
print(game.tree_cells())
```

`Game.place_object_in_cell(cell, obj_type)` places or clears an object
directly and returns whether the cell changed. `Game.click` returns the
`ButtonPress` that was hit, or `None` while paused.

The rest of the package:

- `wildgrid.gamemath`: `Vector2`, `Point2`, `DeltaClock`, `get_unit_vector`, `clamp`.
- `wildgrid.world`: `Grid`, `CellFlag`, `CellObject`, `default_grid`, and the
  `Camera` with its `ViewState`.
- `wildgrid.inventory`: `Hotbar`, `HotbarSlot`, `Rect`, `ButtonPress`,
  `default_slots`, `compute_ui_scale`.
- `wildgrid.entities`: `GameObject`, `EntityType`, `Animations`, `WorldState`,
  `InputKeys`, `Facing`, `player_velocity`, `wolf_velocity`.
- `wildgrid.render`: `Assets` (`load`, `placeholder`) and `Renderer`, which
  draws a `Game` onto a pygame surface.
- `wildgrid.app`: `main`, the `wildgrid` command, and `translate_key`.

## What it does not do

There is a single built-in level and no way to save or load a game. The wolf
chases and pushes against the player but does no damage: entities carry hit
points that nothing uses. Hotbar slots 3 to 5 and the inventory button can be
clicked but hold nothing and do nothing.

## Running the tests

```
pip install .[test]
pytest
```