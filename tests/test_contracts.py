import pytest
from pydantic import TypeAdapter, ValidationError

from isoloot.sim.contracts import (
    Action,
    ActionKind,
    Command,
    GatherAction,
    MoveAction,
    MoveArgs,
    SayArgs,
    TickPayload,
)


def test_command_requires_matching_args() -> None:
    command = Command(target="Atlas", kind=ActionKind.MOVE, move=MoveArgs(x=1, y=2))
    assert command.move is not None

    with pytest.raises(ValidationError):
        Command(target="Atlas", kind=ActionKind.MOVE)
    with pytest.raises(ValidationError):
        Command(target="Atlas", kind=ActionKind.EXPLORE, say=SayArgs(message="hi"))
    with pytest.raises(ValidationError):
        Command(
            target="Atlas",
            kind=ActionKind.SAY,
            say=SayArgs(message="hi"),
            move=MoveArgs(x=1, y=2),
        )


def test_broadcast_target_is_case_insensitive() -> None:
    assert Command(target="ALL", kind=ActionKind.EXPLORE).is_broadcast
    assert not Command(target="Allie", kind=ActionKind.EXPLORE).is_broadcast


def test_action_union_discriminates_on_kind() -> None:
    adapter = TypeAdapter(Action)

    move = adapter.validate_python({"kind": "move", "x": 1, "y": 2})
    gather = adapter.validate_python({"kind": "gather", "resource": "wood"})

    assert isinstance(move, MoveAction)
    assert isinstance(gather, GatherAction)
    with pytest.raises(ValidationError):
        adapter.validate_python({"kind": "dance"})


def test_queued_actions_are_frozen() -> None:
    action = GatherAction(resource="wood")

    with pytest.raises(ValidationError):
        action.resource = "stone"


def test_tick_payload_round_trips_through_json() -> None:
    payload = TickPayload.model_validate(
        {
            "tick": 4,
            "state": {
                "agents": [
                    {
                        "id": 1,
                        "name": "Atlas",
                        "x": 1.5,
                        "y": 2.0,
                        "color": "#e74c3c",
                        "state": "moving",
                        "current_action": {"kind": "move", "x": 3, "y": 2},
                    }
                ],
                "tiles": [["grass", "water"]],
                "messages": [{"text": "hi", "timestamp": 1.0}],
            },
        }
    )

    restored = TickPayload.model_validate_json(payload.model_dump_json())
    assert restored == payload
    assert isinstance(restored.state.agents[0].current_action, MoveAction)
