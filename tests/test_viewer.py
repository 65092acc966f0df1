from rich.console import Console

from isoloot.render.play_screen import (
    render_agent_cards,
    render_message_log,
    render_world_panel,
)
from isoloot.render.viewer import render_run_header, render_tick
from isoloot.render.world_map import agent_style, render_map_lines
from isoloot.sim.contracts import AgentSnapshot, AgentState, RunHeader, TileKind
from isoloot.sim.tick_loop import run_ticks
from isoloot.sim.world_loader import build_world


def _render(renderable, width: int = 120) -> str:
    console = Console(width=width, record=True)
    console.print(renderable)
    return console.export_text()


def test_render_tick_contains_expected_sections() -> None:
    state = build_world(seed=4)
    payloads = list(run_ticks(state, ticks=3, commands={1: ["Nova gather wood"]}))

    output = _render(render_tick(payloads[-1]))

    assert "Tick 3" in output
    assert "Agents" in output
    assert "Messages" in output
    assert "World" in output
    assert "Atlas" in output
    assert "gathering" in output
    assert "Nova → gathering wood" in output


def test_render_tick_without_map_or_agents() -> None:
    state = build_world(seed=4)
    state.tiles = ()
    for agent in state.get_all_agents():
        state.remove_agent(agent.name)

    output = _render(render_tick(state.snapshot()))

    assert "No map generated." in output
    assert "None" in output


def test_map_lines_place_agent_initials() -> None:
    tiles = [[TileKind.GRASS, TileKind.WATER], [TileKind.SAND, TileKind.STONE]]
    agent = AgentSnapshot(
        id=1, name="nova", x=0.6, y=1.2, color="#3498db", state=AgentState.IDLE
    )

    lines = render_map_lines(tiles, agents=[agent])

    assert [line.plain for line in lines] == [",~", ".N"]


def test_agent_style_falls_back_for_bad_colors() -> None:
    assert agent_style("#e74c3c") == "bold #e74c3c"
    assert agent_style("notacolour") == "bold bright_cyan"


def test_play_screen_panels_render() -> None:
    state = build_world(seed=4)
    payload = next(iter(run_ticks(state, ticks=1, commands={1: ["Echo build hut"]})))

    world = _render(render_world_panel(payload, paused=True))
    cards = _render(render_agent_cards(payload))
    log = _render(render_message_log(payload))

    assert "tick 1, paused" in world
    assert "Echo is building hut" in cards
    assert "Inventory: empty" in cards
    assert "Welcome to ISO Loot!" in log
    assert "> Echo build hut" in log


def test_agents_show_the_tile_they_stand_on() -> None:
    state = build_world(seed=4)
    state.tiles = tuple(tuple([TileKind.STONE] * 12) for _ in range(12))
    state.add_agent("Drift", 20, 20, "#ffffff")
    payload = state.snapshot()

    cards = _render(render_agent_cards(payload))
    table = _render(render_tick(payload), width=160)

    assert "Standing on: stone" in cards
    assert "Standing on: unknown" in cards
    assert "Tile" in table
    assert "stone" in table


def test_run_header_lists_run_settings() -> None:
    header = RunHeader(
        run_id="2026-01-31T15-50-00Z",
        created_at="2026-01-31T15:50:00+00:00",
        ticks=None,
        dt=0.05,
        seed=None,
        script="world/demo_commands.txt",
        agents=["Atlas", "Nova"],
        map_width=8,
        map_height=6,
    )

    output = _render(render_run_header(header))

    assert "2026-01-31T15-50-00Z" in output
    assert "unbounded" in output
    assert "random" in output
    assert "8x6" in output
    assert "world/demo_commands.txt" in output
    assert "Atlas, Nova" in output
