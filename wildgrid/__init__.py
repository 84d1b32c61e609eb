"""A small top-down grid game of gathering wood, building logs and bridges, and a chasing wolf."""

__version__ = "0.0.2"
__all__ = ["app", "entities", "game", "gamemath", "inventory", "render", "world"]