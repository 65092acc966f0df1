"""Shared helpers for rendering the tile map with agents on top."""

from __future__ import annotations

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

from isoloot.sim.contracts import AgentSnapshot, TileKind
from isoloot.sim.world_tiles import round_half_up, tile_at

TILE_GLYPHS = {
    TileKind.GRASS: ",",
    TileKind.SAND: ".",
    TileKind.STONE: "^",
    TileKind.WATER: "~",
}

TILE_STYLES = {
    TileKind.GRASS: "green3",
    TileKind.SAND: "yellow",
    TileKind.STONE: "grey50",
    TileKind.WATER: "blue",
}

AGENT_FALLBACK_STYLE = "bright_cyan"


def agent_cell(agent: AgentSnapshot) -> tuple[int, int]:
    return round_half_up(agent.x), round_half_up(agent.y)


def agent_tile(
    tiles: list[list[TileKind]], agent: AgentSnapshot
) -> TileKind | None:
    x, y = agent_cell(agent)
    return tile_at(tiles, x, y)


def render_map_lines(
    tiles: list[list[TileKind]],
    *,
    agents: list[AgentSnapshot],
) -> list[Text]:
    grid = [[TILE_GLYPHS.get(tile, "?") for tile in row] for row in tiles]
    styles = [[TILE_STYLES.get(tile, "grey70") for tile in row] for row in tiles]

    height = len(grid)
    for agent in agents:
        x, y = agent_cell(agent)
        if 0 <= y < height and 0 <= x < len(grid[y]):
            grid[y][x] = agent.name[:1].upper() or "@"
            styles[y][x] = agent_style(agent.color)

    lines: list[Text] = []
    for row, row_styles in zip(grid, styles):
        line = Text()
        for glyph, style in zip(row, row_styles):
            line.append(glyph, style=style)
        lines.append(line)
    return lines


def agent_style(color: str) -> str:
    try:
        Style.parse(color)
    except StyleSyntaxError:
        color = AGENT_FALLBACK_STYLE
    return f"bold {color}"
