from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from match3.components.game_config import GameConfig
from match3.components.grid import Grid
from match3.components.move_list import MoveList
from match3.components.score import Score
from match3.components.selection import Selection
from match3.components.turn_state import TurnPhase, TurnState
from match3.events.bus import EVENT_PHASE_CHANGED, EventBus

C = TypeVar("C")


def session_component(world: World, component_type: Type[C]) -> C:
    """Return the single instance of a session-level component."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found")


def get_grid(world: World) -> Grid:
    return session_component(world, Grid)


def get_config(world: World) -> GameConfig:
    return session_component(world, GameConfig)


def get_score(world: World) -> Score:
    return session_component(world, Score)


def get_move_list(world: World) -> MoveList:
    return session_component(world, MoveList)


def get_selection(world: World) -> Selection:
    return session_component(world, Selection)


def get_turn_state(world: World) -> TurnState:
    return session_component(world, TurnState)


def set_turn_phase(world: World, event_bus: EventBus, phase: TurnPhase) -> None:
    """Move the turn state machine to ``phase`` and emit a change event when it differs."""
    state = get_turn_state(world)
    previous = state.phase
    if previous == phase:
        return
    state.phase = phase
    event_bus.emit(EVENT_PHASE_CHANGED, previous=previous, phase=phase)
