from __future__ import annotations

import random
from typing import Optional

from esper import World

from match3.components.move import Move
from match3.components.random_agent import RandomAgent
from match3.components.swap_result import SwapResult
from match3.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST
from match3.systems.state_utils import get_move_list, get_turn_state


class RandomAISystem:
    """Plays uniformly random legal moves.

    A RandomAgent with a seed gets its own generator so bot choices do not
    disturb the tile stream; otherwise the session generator is shared.
    """

    def __init__(self, world: World, event_bus: EventBus, rng: Optional[random.Random] = None):
        self.world = world
        self.event_bus = event_bus
        self._rng = rng

    def _random(self) -> random.Random:
        if self._rng is None:
            for _, agent in self.world.get_component(RandomAgent):
                if agent.seed is not None:
                    self._rng = random.Random(agent.seed)
                break
        return self._rng or getattr(self.world, "random")

    def choose_move(self) -> Optional[Move]:
        moves = get_move_list(self.world).moves
        if not moves:
            return None
        return self._random().choice(moves)

    def play_move(self) -> Optional[SwapResult]:
        """Swap a random legal move; None when there is nothing to play."""
        state = get_turn_state(self.world)
        if state.phase.busy:
            return None
        move = self.choose_move()
        if move is None:
            return None
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=move.src, dst=move.dst, world=self.world)
        return state.last_result
