import random

from isoloot.sim.contracts import AgentState, TileKind
from isoloot.sim.world_state import MAX_MESSAGES, WorldState
from isoloot.sim.world_tiles import pick_tile, round_half_up, tile_at


def test_add_agent_assigns_increasing_ids() -> None:
    state = WorldState()
    atlas = state.add_agent("Atlas", 1, 2, "#f00")
    nova = state.add_agent("Nova", 0, 0, "#0f0")

    assert (atlas.agent_id, nova.agent_id) == (1, 2)
    assert atlas.name == "Atlas"
    assert (atlas.x, atlas.y) == (1.0, 2.0)
    assert len(state.agents) == 2


def test_lookup_is_case_insensitive() -> None:
    state = WorldState()
    state.add_agent("Nova", 0, 0, "#0f0")

    agent = state.get_agent("nova")
    assert agent is not None
    assert agent.name == "Nova"
    assert state.get_agent("NOVA") is agent
    assert state.get_agent("nobody") is None


def test_same_name_overwrites_previous_agent() -> None:
    state = WorldState()
    state.add_agent("Echo", 0, 0, "#000")
    replacement = state.add_agent("ECHO", 3, 3, "#fff")

    assert len(state.agents) == 1
    assert state.get_agent("echo") is replacement
    assert replacement.agent_id == 2


def test_remove_agent() -> None:
    state = WorldState()
    state.add_agent("Atlas", 0, 0, "#f00")

    state.remove_agent("ATLAS")
    state.remove_agent("missing")

    assert state.get_agent("atlas") is None
    assert state.get_all_agents() == []


def test_get_all_agents_returns_a_copy() -> None:
    state = WorldState()
    state.add_agent("Atlas", 0, 0, "#f00")
    state.add_agent("Nova", 0, 0, "#0f0")

    agents = state.get_all_agents()
    agents.clear()

    assert [agent.name for agent in state.get_all_agents()] == ["Atlas", "Nova"]


def test_message_log_is_bounded() -> None:
    state = WorldState(clock=lambda: 42.0)
    for index in range(60):
        state.add_message(f"message {index}")

    messages = state.messages
    assert len(messages) == MAX_MESSAGES == 50
    assert messages[0].text == "message 10"
    assert messages[-1].text == "message 59"
    assert messages[0].timestamp == 42.0


def test_generate_map_dimensions_and_kinds() -> None:
    state = WorldState(rng=random.Random(3))
    tiles = state.generate_map(12, 8)

    assert len(tiles) == 8
    assert all(len(row) == 12 for row in tiles)
    assert {tile for row in tiles for tile in row} <= set(TileKind)
    assert (state.map_width, state.map_height) == (12, 8)


def test_generate_map_is_reproducible_with_seed() -> None:
    first = WorldState(rng=random.Random(11)).generate_map(6, 6)
    second = WorldState(rng=random.Random(11)).generate_map(6, 6)

    assert first == second


def test_tile_distribution_boundaries() -> None:
    assert pick_tile(0.0) == TileKind.GRASS
    assert pick_tile(0.5999) == TileKind.GRASS
    assert pick_tile(0.60) == TileKind.SAND
    assert pick_tile(0.7499) == TileKind.SAND
    assert pick_tile(0.75) == TileKind.STONE
    assert pick_tile(0.8799) == TileKind.STONE
    assert pick_tile(0.88) == TileKind.WATER
    assert pick_tile(0.9999) == TileKind.WATER


def test_tile_at_bounds() -> None:
    tiles = WorldState(rng=random.Random(1)).generate_map(3, 2)

    assert tile_at(tiles, 2, 1) == tiles[1][2]
    assert tile_at(tiles, 3, 0) is None
    assert tile_at(tiles, 0, -1) is None


def test_round_half_up_matches_tile_snapping() -> None:
    values = (2.5, 3.5, 2.49, -2.5, -0.6)
    assert [round_half_up(value) for value in values] == [3, 4, 2, -2, -1]


def test_agents_bind_current_map_bounds() -> None:
    state = WorldState()
    state.generate_map(5, 4)
    agent = state.add_agent("Atlas", 4, 3, "#f00")

    assert (agent.map_width, agent.map_height) == (5, 4)
    for _ in range(20):
        action = agent.enqueue_explore()
        assert 0 <= action.x <= 4
        assert 0 <= action.y <= 3


def test_update_increments_tick_and_advances_agents() -> None:
    state = WorldState()
    atlas = state.add_agent("Atlas", 0, 0, "#f00")
    nova = state.add_agent("Nova", 0, 0, "#0f0")
    atlas.enqueue_gather("wood")
    nova.enqueue_move(3, 0)

    state.update(0.016)
    state.update(0.5)

    assert state.tick == 2
    assert atlas.state == AgentState.GATHERING
    assert nova.state == AgentState.MOVING
    assert nova.x > 0


def test_snapshot_reflects_state() -> None:
    state = WorldState(rng=random.Random(5), clock=lambda: 1.5)
    state.generate_map(4, 3)
    state.add_agent("Atlas", 1, 1, "#f00")
    state.add_message("hello")
    state.update(0.016)

    payload = state.snapshot()

    assert payload.tick == 1
    assert [agent.name for agent in payload.state.agents] == ["Atlas"]
    assert len(payload.state.tiles) == 3
    assert payload.state.messages[0].text == "hello"
    payload.state.agents[0].inventory.append("gold")
    assert state.get_agent("atlas").inventory == []
