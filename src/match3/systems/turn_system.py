import logging

from esper import World

from match3.components.swap_result import SwapResult
from match3.components.turn_state import TurnPhase
from match3.errors import IllegalSwap, InvalidCoordinate, Match3Error
from match3.events.bus import (
    EventBus,
    EVENT_GAME_OVER,
    EVENT_MOVES_UPDATED,
    EVENT_NEW_GAME,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
)
from match3.systems.board import BoardSystem
from match3.systems.board_ops import find_moves
from match3.systems.match import MatchSystem
from match3.systems.match_resolution import MatchResolutionSystem
from match3.systems.state_utils import (
    get_config,
    get_grid,
    get_move_list,
    get_score,
    get_selection,
    get_turn_state,
    set_turn_phase,
)

logger = logging.getLogger(__name__)


class TurnSystem:
    """Owns the only mutating entry points of a session.

    Flow for a swap:
      - MatchSystem applies the swap, or rewinds it and rejects it.
      - MatchResolutionSystem clears clusters and refills until stable.
      - The legal move list is rebuilt; an empty list flags game over.
    Every path ends back in READY, including one where a bus subscriber
    raised; the exception still propagates to the caller and any clusters
    left on the board stay until the next swap or new game.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        board_system: BoardSystem,
        match_system: MatchSystem,
        resolution_system: MatchResolutionSystem,
    ):
        self.world = world
        self.event_bus = event_bus
        self.board_system = board_system
        self.match_system = match_system
        self.resolution_system = resolution_system
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        """Run a requested swap; requests tagged with another session's world are ignored."""
        world = kwargs.get('world')
        if world is not None and world is not self.world:
            return
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.attempt_swap(src[0], src[1], dst[0], dst[1])

    def new_game(self) -> None:
        state = get_turn_state(self.world)
        if state.phase.busy:
            raise Match3Error("cannot start a new game while a swap is resolving")
        config = get_config(self.world)
        selection = get_selection(self.world)
        if selection.position is not None:
            prev = selection.position
            selection.position = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='new_game', prev=prev)
        self.board_system.generate()
        score = get_score(self.world)
        previous_points = score.points
        score.points = 0
        score.swaps = 0
        if previous_points:
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=-previous_points)
        state.game_over = False
        state.cascade_depth = 0
        state.current_move = None
        state.last_result = None
        self.refresh_moves()
        self.event_bus.emit(
            EVENT_NEW_GAME,
            columns=config.columns,
            rows=config.rows,
            palette_size=config.palette_size,
        )

    def attempt_swap(self, c1: int, r1: int, c2: int, r2: int) -> SwapResult:
        grid = get_grid(self.world)
        for column, row in ((c1, r1), (c2, r2)):
            if not grid.in_bounds(column, row):
                raise InvalidCoordinate(column, row, grid.columns, grid.rows)
        src, dst = (c1, r1), (c2, r2)
        state = get_turn_state(self.world)
        try:
            clusters = self.match_system.apply_swap(src, dst)
        except IllegalSwap as exc:
            logger.debug("swap %s -> %s rejected: %s", src, dst, exc.reason)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=exc.reason)
            result = SwapResult(accepted=False)
            # A busy rejection comes from a re-entrant call; leave the outer swap's state alone.
            if exc.reason != IllegalSwap.BUSY:
                state.last_result = result
            return result
        except Exception:
            self._end_turn()
            raise

        try:
            get_score(self.world).swaps += 1
            points, depth = self.resolution_system.resolve()
            self.refresh_moves()
        finally:
            self._end_turn()
        result = SwapResult(
            accepted=True,
            score_delta=points,
            clusters_formed=clusters,
            cascade_depth=depth,
        )
        state.last_result = result
        return result

    def _end_turn(self) -> None:
        """Return to READY; also runs when a subscriber raised mid-swap."""
        get_turn_state(self.world).current_move = None
        set_turn_phase(self.world, self.event_bus, TurnPhase.READY)

    def refresh_moves(self) -> None:
        """Rebuild the move list and update the game-over flag from it."""
        grid = get_grid(self.world)
        moves = tuple(find_moves(grid))
        get_move_list(self.world).moves = moves
        self.event_bus.emit(EVENT_MOVES_UPDATED, moves=moves)
        state = get_turn_state(self.world)
        state.game_over = not moves
        if state.game_over:
            score = get_score(self.world)
            logger.info("game over: %d points in %d swaps", score.points, score.swaps)
            self.event_bus.emit(EVENT_GAME_OVER, score=score.points, swaps=score.swaps)
