"""Interactive Textual screen: world map, agent sidebar and prompt bar."""

from __future__ import annotations

import time

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Input, Static

from isoloot.render.world_map import agent_style, agent_tile, render_map_lines
from isoloot.sim.contracts import TickPayload
from isoloot.sim.dispatcher import handle_prompt
from isoloot.sim.tick_loop import clamp_frame_delta
from isoloot.sim.world_state import WorldState

FRAME_INTERVAL = 1 / 30
SIDEBAR_WIDTH = 40
# Sidebar text is rebuilt every this many ticks, plus after every prompt.
UI_REFRESH_TICKS = 15
PROMPT_PLACEHOLDER = "e.g. Atlas move to 5,3 | all explore | Nova say hi"


class PlayScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        layout: horizontal;
        height: 1fr;
    }
    #world-map {
        width: 1fr;
    }
    #sidebar {
        layout: vertical;
    }
    #prompt {
        dock: bottom;
    }
    """

    BINDINGS = [
        ("escape", "quit", "Quit"),
        ("ctrl+p", "toggle_pause", "Pause"),
    ]

    def __init__(self, state: WorldState) -> None:
        super().__init__()
        self.state = state
        self._paused = False
        self._last_frame: float | None = None
        self._map_view: Static | None = None
        self._agents_view: Static | None = None
        self._messages_view: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            with Horizontal(id="main"):
                yield Static(id="world-map")
                with Vertical(id="sidebar"):
                    yield Static(id="agent-status")
                    yield Static(id="message-log")
            yield Input(placeholder=PROMPT_PLACEHOLDER, id="prompt")

    def on_mount(self) -> None:
        self._map_view = self.query_one("#world-map", Static)
        self._agents_view = self.query_one("#agent-status", Static)
        self._messages_view = self.query_one("#message-log", Static)
        self.query_one("#sidebar").styles.width = SIDEBAR_WIDTH
        self.query_one("#prompt", Input).focus()
        self._last_frame = time.monotonic()
        self.set_interval(FRAME_INTERVAL, self._on_frame)
        self._refresh_ui(self.state.snapshot())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        text = event.value.strip()
        event.input.value = ""
        if text:
            handle_prompt(text, self.state)
            self._refresh_ui(self.state.snapshot())

    def action_quit(self) -> None:
        self.app.exit()

    def action_toggle_pause(self) -> None:
        self._paused = not self._paused
        self._last_frame = time.monotonic()

    def _on_frame(self) -> None:
        now = time.monotonic()
        elapsed = now - (self._last_frame or now)
        self._last_frame = now
        if self._paused:
            return
        self.state.update(clamp_frame_delta(elapsed))
        payload = self.state.snapshot()
        if payload.tick % UI_REFRESH_TICKS == 0:
            self._refresh_ui(payload)
        elif self._map_view:
            self._map_view.update(render_world_panel(payload))

    def _refresh_ui(self, payload: TickPayload) -> None:
        if self._map_view:
            self._map_view.update(render_world_panel(payload, paused=self._paused))
        if self._agents_view:
            self._agents_view.update(render_agent_cards(payload))
        if self._messages_view:
            self._messages_view.update(render_message_log(payload))


def render_world_panel(payload: TickPayload, *, paused: bool = False) -> RenderableType:
    title = f"World (tick {payload.tick}{', paused' if paused else ''})"
    if not payload.state.tiles:
        return Panel(Text("No map generated."), title=title)
    lines = render_map_lines(payload.state.tiles, agents=payload.state.agents)
    return Panel(Group(*lines), title=title)


def render_agent_cards(payload: TickPayload) -> RenderableType:
    table = Table(show_header=False, expand=True)
    table.add_column("Agent")
    for agent in payload.state.agents:
        inventory = ", ".join(agent.inventory) if agent.inventory else "empty"
        tile = agent_tile(payload.state.tiles, agent)
        card = Group(
            Text(agent.name, style=agent_style(agent.color)),
            Text(agent.status),
            Text(f"Inventory: {inventory}"),
            Text(f"Standing on: {tile.value if tile else 'unknown'}"),
        )
        table.add_row(card)
    if not payload.state.agents:
        table.add_row(Text("No agents."))
    return Panel(table, title="Agents")


def render_message_log(payload: TickPayload, *, limit: int = 12) -> RenderableType:
    entries = payload.state.messages[-limit:]
    body = Text("\n".join(entry.text for entry in entries) or "No messages yet.")
    return Panel(body, title="Log")


class PlayApp(App):
    TITLE = "ISO Loot"

    def __init__(self, state: WorldState) -> None:
        super().__init__()
        self._world = state

    def on_mount(self) -> None:
        self.push_screen(PlayScreen(self._world))


def run_play_screen(state: WorldState) -> None:
    PlayApp(state).run()
