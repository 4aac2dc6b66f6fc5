from typing import Tuple

from esper import World

from match3.components.cluster import Cluster
from match3.components.turn_state import TurnPhase
from match3.errors import IllegalSwap
from match3.events.bus import (
    EventBus,
    EVENT_TILE_SWAP_REWOUND,
    EVENT_TILE_SWAP_VALID,
)
from match3.systems.board_ops import find_clusters, is_adjacent
from match3.systems.state_utils import get_grid, get_turn_state, set_turn_phase

Position = Tuple[int, int]


class MatchSystem:
    """Applies a player swap and keeps it only if it forms a cluster."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def apply_swap(self, src: Position, dst: Position) -> Tuple[Cluster, ...]:
        """Swap two tiles and return the clusters formed.

        Raises IllegalSwap when the engine is busy, the cells are not
        neighbours, or the swap forms nothing; in the last case the swap is
        rewound before raising, so the board is always left as it was.
        """
        state = get_turn_state(self.world)
        if state.phase.busy:
            raise IllegalSwap(src, dst, IllegalSwap.BUSY)
        if not is_adjacent(*src, *dst):
            raise IllegalSwap(src, dst, IllegalSwap.NOT_ADJACENT)
        grid = get_grid(self.world)
        state.current_move = (src, dst)
        set_turn_phase(self.world, self.event_bus, TurnPhase.SWAP_ANIMATING)
        grid.swap(*src, *dst)
        clusters = tuple(find_clusters(grid))
        if clusters:
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, clusters=clusters)
            return clusters
        set_turn_phase(self.world, self.event_bus, TurnPhase.SWAP_REWINDING)
        grid.swap(*src, *dst)
        self.event_bus.emit(EVENT_TILE_SWAP_REWOUND, src=src, dst=dst)
        state.current_move = None
        set_turn_phase(self.world, self.event_bus, TurnPhase.READY)
        raise IllegalSwap(src, dst, IllegalSwap.NO_CLUSTER)
