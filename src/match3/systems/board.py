from typing import Optional, Tuple

from esper import World

from match3.events.bus import (
    EventBus,
    EVENT_BOARD_GENERATED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from match3.systems.board_ops import generate_board, is_adjacent
from match3.systems.state_utils import (
    get_config,
    get_grid,
    get_selection,
    get_turn_state,
)

Position = Tuple[int, int]


class BoardSystem:
    """Board generation and tile selection.

    Selection follows click semantics: clicking the armed tile disarms it,
    clicking a neighbour of the armed tile requests a swap, and clicking
    anywhere else moves the selection there.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def generate(self) -> int:
        config = get_config(self.world)
        grid = get_grid(self.world)
        attempts = generate_board(
            grid,
            getattr(self.world, "random"),
            config.palette_size,
            config.max_board_attempts,
        )
        self.event_bus.emit(EVENT_BOARD_GENERATED, attempts=attempts)
        return attempts

    @property
    def selected(self) -> Optional[Position]:
        return get_selection(self.world).position

    def on_tile_click(self, column: int, row: int) -> bool:
        """Handle a click; return True if it requested a swap."""
        grid = get_grid(self.world)
        if not grid.in_bounds(column, row):
            self.deselect('out_of_bounds')
            return False
        if get_turn_state(self.world).phase.busy:
            return False
        selected = self.selected
        if selected == (column, row):
            self.deselect('same_tile')
            return False
        if selected is not None and is_adjacent(*selected, column, row):
            self._request_swap(selected, (column, row))
            return True
        self.select(column, row)
        return False

    def on_tile_drag(self, column: int, row: int) -> bool:
        """Dragging the armed tile onto a neighbour swaps them."""
        selected = self.selected
        if selected is None:
            return False
        if not get_grid(self.world).in_bounds(column, row):
            return False
        if get_turn_state(self.world).phase.busy:
            return False
        if not is_adjacent(*selected, column, row):
            return False
        self._request_swap(selected, (column, row))
        return True

    def select(self, column: int, row: int) -> None:
        get_selection(self.world).position = (column, row)
        self.event_bus.emit(EVENT_TILE_SELECTED, column=column, row=row)

    def deselect(self, reason: str = 'cleared') -> None:
        selection = get_selection(self.world)
        prev = selection.position
        if prev is None:
            return
        selection.position = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev=prev)

    def _request_swap(self, src: Position, dst: Position) -> None:
        self.deselect('swap')
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst, world=self.world)
