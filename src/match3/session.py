"""Public entry points for driving a match-three session.

A presentation layer creates a session with ``new_game``, feeds player input
through ``attempt_swap`` / ``Session.click_tile`` and polls ``snapshot``,
``current_moves`` and ``is_game_over`` between calls. Subscribing to
``session.event_bus`` gives a step-by-step account of each resolution for
animation.
"""
from __future__ import annotations

import random
from typing import Optional, Tuple

from match3.components.board_snapshot import BoardSnapshot
from match3.components.game_config import GameConfig
from match3.components.move import Move
from match3.components.swap_result import SwapResult
from match3.constants import GRID_COLUMNS, GRID_ROWS, MAX_BOARD_ATTEMPTS, PALETTE_SIZE
from match3.events.bus import EventBus
from match3.systems.board import BoardSystem
from match3.systems.match import MatchSystem
from match3.systems.match_resolution import MatchResolutionSystem
from match3.systems.random_ai_system import RandomAISystem
from match3.systems.state_utils import (
    get_config,
    get_grid,
    get_move_list,
    get_score,
    get_selection,
    get_turn_state,
)
from match3.systems.turn_system import TurnSystem
from match3.world import create_world


class Session:
    """One puzzle: the ECS world, its event bus and the systems acting on it."""

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
        bot_seed: int | None = None,
    ):
        self.event_bus = event_bus or EventBus()
        self.world = create_world(config, rng=rng, bot_seed=bot_seed)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.turn_system = TurnSystem(
            self.world,
            self.event_bus,
            self.board_system,
            self.match_system,
            self.resolution_system,
        )
        self.ai_system = RandomAISystem(self.world, self.event_bus)

    @property
    def config(self) -> GameConfig:
        return get_config(self.world)

    @property
    def score(self) -> int:
        return get_score(self.world).points

    @property
    def game_over(self) -> bool:
        return get_turn_state(self.world).game_over

    @property
    def moves(self) -> Tuple[Move, ...]:
        return get_move_list(self.world).moves

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return get_selection(self.world).position

    def new_game(self) -> None:
        self.turn_system.new_game()

    def attempt_swap(self, c1: int, r1: int, c2: int, r2: int) -> SwapResult:
        return self.turn_system.attempt_swap(c1, r1, c2, r2)

    def click_tile(self, column: int, row: int) -> Optional[SwapResult]:
        """Select/deselect or swap, as a click on the tile would; returns the swap result if one ran."""
        if self.board_system.on_tile_click(column, row):
            return get_turn_state(self.world).last_result
        return None

    def drag_to(self, column: int, row: int) -> Optional[SwapResult]:
        if self.board_system.on_tile_drag(column, row):
            return get_turn_state(self.world).last_result
        return None

    def deselect(self) -> None:
        self.board_system.deselect()

    def play_random_move(self) -> Optional[SwapResult]:
        return self.ai_system.play_move()

    def hint(self) -> Optional[Move]:
        moves = self.moves
        return moves[0] if moves else None

    def snapshot(self) -> BoardSnapshot:
        grid = get_grid(self.world)
        score = get_score(self.world)
        state = get_turn_state(self.world)
        return BoardSnapshot(
            columns=grid.columns,
            rows=grid.rows,
            tiles=grid.as_tuple(),
            score=score.points,
            swaps=score.swaps,
            game_over=state.game_over,
            phase=state.phase,
            selection=self.selected,
        )


def new_game(
    columns: int = GRID_COLUMNS,
    rows: int = GRID_ROWS,
    palette_size: int = PALETTE_SIZE,
    rng_seed: int | None = None,
    *,
    rng: random.Random | None = None,
    event_bus: EventBus | None = None,
    max_board_attempts: int = MAX_BOARD_ATTEMPTS,
    bot_seed: int | None = None,
) -> Session:
    """Create a session and deal its first board.

    ``rng`` wins over ``rng_seed`` when both are given.
    """
    config = GameConfig(
        columns=columns,
        rows=rows,
        palette_size=palette_size,
        max_board_attempts=max_board_attempts,
    )
    session = Session(
        config,
        rng=rng or random.Random(rng_seed),
        event_bus=event_bus,
        bot_seed=bot_seed,
    )
    session.new_game()
    return session


def attempt_swap(session: Session, c1: int, r1: int, c2: int, r2: int) -> SwapResult:
    return session.attempt_swap(c1, r1, c2, r2)


def current_moves(session: Session) -> Tuple[Move, ...]:
    return session.moves


def is_game_over(session: Session) -> bool:
    return session.game_over


def snapshot(session: Session) -> BoardSnapshot:
    return session.snapshot()


def play_random_move(session: Session) -> Optional[SwapResult]:
    return session.play_random_move()


def hint(session: Session) -> Optional[Move]:
    return session.hint()
