"""Rich viewer rendering for TickPayload."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from isoloot.render.world_map import agent_style, agent_tile, render_map_lines
from isoloot.sim.contracts import AgentSnapshot, RunHeader, TickPayload


def render_tick(payload: TickPayload, *, max_messages: int = 8) -> RenderableType:
    header = Text(f"Tick {payload.tick}", style="bold")
    agents = _render_agents(payload)
    messages = _render_messages(payload, max_messages=max_messages)
    world = _render_world(payload)

    left = Group(header, agents, messages)
    return Columns([Panel(left, title="Simulation"), world])


def _render_agents(payload: TickPayload) -> RenderableType:
    table = Table(title="Agents", show_header=True, header_style="bold")
    table.add_column("Agent")
    table.add_column("State")
    table.add_column("Position")
    table.add_column("Tile")
    table.add_column("Inventory")
    table.add_column("Says")

    for agent in payload.state.agents:
        table.add_row(
            Text(agent.name, style=agent_style(agent.color)),
            agent.state.value,
            f"({agent.x:.1f}, {agent.y:.1f})",
            _tile_name(payload, agent),
            ", ".join(agent.inventory) or "empty",
            agent.last_message or "-",
        )
    if not payload.state.agents:
        table.add_row("-", "None", "", "", "", "")
    return table


def _tile_name(payload: TickPayload, agent: AgentSnapshot) -> str:
    tile = agent_tile(payload.state.tiles, agent)
    return tile.value if tile is not None else "-"


def _render_messages(payload: TickPayload, *, max_messages: int) -> RenderableType:
    table = Table(title="Messages", show_header=False)
    table.add_column("Text")
    messages = payload.state.messages[-max_messages:]
    for entry in messages:
        table.add_row(entry.text)
    if not messages:
        table.add_row("None")
    return table


def _render_world(payload: TickPayload) -> RenderableType:
    if not payload.state.tiles:
        return Panel(Text("No map generated."), title="World")
    lines = render_map_lines(payload.state.tiles, agents=payload.state.agents)
    return Panel(Group(*lines), title="World", expand=False)


def render_run_header(header: RunHeader) -> RenderableType:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Run", header.run_id)
    table.add_row("Created", header.created_at)
    table.add_row("Ticks", str(header.ticks) if header.ticks else "unbounded")
    table.add_row("dt", f"{header.dt:.4f}s")
    table.add_row("Seed", "random" if header.seed is None else str(header.seed))
    table.add_row("Map", f"{header.map_width}x{header.map_height}")
    table.add_row("World", header.world or "default")
    table.add_row("Script", header.script or "none")
    table.add_row("Agents", ", ".join(header.agents) or "none")
    return Panel(table, title="Replay", expand=False)
