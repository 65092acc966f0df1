"""Simulation core: grammar, agents, world integrator and dispatcher."""

from isoloot.sim.agent import Agent
from isoloot.sim.contracts import (
    Action,
    ActionKind,
    AgentSnapshot,
    AgentState,
    BuildAction,
    Command,
    ExploreAction,
    GatherAction,
    MessageEntry,
    MoveAction,
    SayAction,
    StateSnapshot,
    TickPayload,
    TileKind,
)
from isoloot.sim.dispatcher import dispatch_command, handle_prompt
from isoloot.sim.grammar import parse_command
from isoloot.sim.tick_loop import clamp_frame_delta, run_ticks
from isoloot.sim.world_loader import build_world, load_world_config
from isoloot.sim.world_state import WorldState

__all__ = [
    "Action",
    "ActionKind",
    "Agent",
    "AgentSnapshot",
    "AgentState",
    "BuildAction",
    "Command",
    "ExploreAction",
    "GatherAction",
    "MessageEntry",
    "MoveAction",
    "SayAction",
    "StateSnapshot",
    "TickPayload",
    "TileKind",
    "WorldState",
    "build_world",
    "clamp_frame_delta",
    "dispatch_command",
    "handle_prompt",
    "load_world_config",
    "parse_command",
    "run_ticks",
]
