import logging
from typing import Tuple

from esper import World

from match3.components.turn_state import TurnPhase
from match3.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_CLUSTERS_FOUND,
    EVENT_CLUSTERS_REMOVED,
    EVENT_SCORE_CHANGED,
    EVENT_TILES_SHIFTED,
)
from match3.systems.board_ops import apply_shift, compute_shift, find_clusters, resolve_once
from match3.systems.state_utils import (
    get_config,
    get_grid,
    get_score,
    get_turn_state,
    set_turn_phase,
)

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the remove -> shift -> rescan cycle after an accepted swap.

    Each pass moves the turn state through RESOLVING_REMOVAL and
    RESOLVING_SHIFT and reports what happened on the bus, so a presentation
    layer can animate the cascade after the fact. Score is awarded per
    cluster as it is removed.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def resolve(self) -> Tuple[int, int]:
        """Resolve until the board is stable; return (points, passes)."""
        grid = get_grid(self.world)
        state = get_turn_state(self.world)
        palette_size = get_config(self.world).palette_size
        rng = getattr(self.world, "random")
        points = 0
        depth = 0
        clusters = find_clusters(grid)
        while clusters:
            depth += 1
            state.cascade_depth = depth
            set_turn_phase(self.world, self.event_bus, TurnPhase.RESOLVING_REMOVAL)
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth)
            self.event_bus.emit(EVENT_CLUSTERS_FOUND, clusters=tuple(clusters), depth=depth)
            # Deterministic ordering for events/tests
            positions = sorted({pos for cluster in clusters for pos in cluster.positions()})
            gained = sum(cluster.points for cluster in clusters)
            removed, _ = resolve_once(grid, clusters)
            self.event_bus.emit(EVENT_CLUSTERS_REMOVED, positions=positions, removed=removed, points=gained)
            self._award(gained)
            points += gained

            set_turn_phase(self.world, self.event_bus, TurnPhase.RESOLVING_SHIFT)
            compute_shift(grid)
            falls, refilled = apply_shift(grid, rng, palette_size)
            self.event_bus.emit(EVENT_TILES_SHIFTED, falls=falls, refilled=refilled)
            clusters = find_clusters(grid)
        if depth:
            logger.debug("cascade settled after %d passes for %d points", depth, points)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, points=points)
        return points, depth

    def _award(self, points: int) -> None:
        if points <= 0:
            return
        score = get_score(self.world)
        score.points += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.points, delta=points)
