"""Resolve parsed commands to agents and queue the matching actions."""

from __future__ import annotations

import logging

from isoloot.sim.agent import Agent
from isoloot.sim.contracts import ActionKind, Command
from isoloot.sim.grammar import COMMAND_HELP, parse_command
from isoloot.sim.world_state import WorldState

logger = logging.getLogger(__name__)


def resolve_targets(command: Command, world: WorldState) -> list[Agent]:
    if command.is_broadcast:
        return world.get_all_agents()
    agent = world.get_agent(command.target)
    return [agent] if agent is not None else []


def dispatch_command(command: Command, world: WorldState) -> list[Agent]:
    """Queue the command on every resolved agent and log one line per agent.

    Returns the agents that received the command; an empty list means the
    target was not found and only a warning was logged.
    """
    targets = resolve_targets(command, world)
    if not targets:
        logger.info("No agent matches %r", command.target)
        world.add_message(f'⚠ Agent "{command.target}" not found.')
        return []

    for agent in targets:
        text = _apply(command, agent)
        if text is None:
            logger.debug("Ignoring unsupported command kind %r", command.kind)
            continue
        logger.debug("Dispatched %s to %s", command.kind.value, agent.name)
        world.add_message(text)
    return targets


def handle_prompt(text: str, world: WorldState) -> Command | None:
    line = text.strip()
    if not line:
        return None
    world.add_message(f"> {line}")
    command = parse_command(line)
    if command is None:
        world.add_message(f"⚠ Unknown command. Try: {COMMAND_HELP}")
        return None
    dispatch_command(command, world)
    return command


def _apply(command: Command, agent: Agent) -> str | None:
    if command.kind == ActionKind.MOVE and command.move is not None:
        agent.enqueue_move(command.move.x, command.move.y)
        return f"{agent.name} → moving to ({command.move.x}, {command.move.y})"
    if command.kind == ActionKind.EXPLORE:
        agent.enqueue_explore()
        return f"{agent.name} → exploring"
    if command.kind == ActionKind.GATHER and command.gather is not None:
        agent.enqueue_gather(command.gather.resource)
        return f"{agent.name} → gathering {command.gather.resource}"
    if command.kind == ActionKind.BUILD and command.build is not None:
        agent.enqueue_build(command.build.structure)
        return f"{agent.name} → building {command.build.structure}"
    if command.kind == ActionKind.SAY and command.say is not None:
        agent.enqueue_say(command.say.message)
        return f'{agent.name} says: "{command.say.message}"'
    return None
