"""Tile map generation for the play area."""

from __future__ import annotations

import math
import random
from typing import Sequence

from isoloot.sim.contracts import TileKind

TileGrid = tuple[tuple[TileKind, ...], ...]

# Cumulative upper bounds of one uniform draw per cell.
TILE_WEIGHTS: list[tuple[float, TileKind]] = [
    (0.60, TileKind.GRASS),
    (0.75, TileKind.SAND),
    (0.88, TileKind.STONE),
]
FALLBACK_TILE = TileKind.WATER


def pick_tile(roll: float) -> TileKind:
    for bound, kind in TILE_WEIGHTS:
        if roll < bound:
            return kind
    return FALLBACK_TILE


def generate_tiles(
    width: int, height: int, *, rng: random.Random | None = None
) -> TileGrid:
    rng = rng or random.Random()
    return tuple(
        tuple(pick_tile(rng.random()) for _ in range(width)) for _ in range(height)
    )


def tile_at(tiles: Sequence[Sequence[TileKind]], x: int, y: int) -> TileKind | None:
    if y < 0 or x < 0 or y >= len(tiles) or x >= len(tiles[y]):
        return None
    return tiles[y][x]


def round_half_up(value: float) -> int:
    """Snap a coordinate to its tile index, rounding halves up (2.5 -> 3)."""
    return math.floor(value + 0.5)
