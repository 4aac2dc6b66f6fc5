from __future__ import annotations

import itertools
import random
from typing import Dict, Iterable, List, Sequence, Tuple

from match3.components.game_config import GameConfig
from match3.components.grid import Grid
from match3.session import Session
from match3.systems.state_utils import get_grid

Position = Tuple[int, int]


def filler(column: int, row: int) -> int:
    """Tile type that never equals its orthogonal neighbours (types 2..6)."""
    return (column + 3 * row) % 5 + 2


def layout_rows(columns: int, rows: int, overrides: Dict[Position, int] | None = None) -> List[List[int]]:
    """Row-major layout of filler tiles with (column, row) overrides applied."""
    layout = [[filler(c, r) for c in range(columns)] for r in range(rows)]
    for (column, row), value in (overrides or {}).items():
        layout[row][column] = value
    return layout


def stalemate_rows(size: int = 5) -> List[List[int]]:
    """Diagonal stripes of three types: no clusters and no legal moves."""
    return [[(r + c) % 3 for c in range(size)] for r in range(size)]


def load_layout(session: Session, layout: Sequence[Sequence[int]]) -> None:
    get_grid(session.world).load(Grid.from_rows(layout).as_tuple())
    session.turn_system.refresh_moves()


def make_session(layout: Sequence[Sequence[int]], palette_size: int = 7, rng=None, event_bus=None) -> Session:
    rows = len(layout)
    columns = len(layout[0])
    session = Session(
        GameConfig(columns=columns, rows=rows, palette_size=palette_size),
        rng=rng or random.Random(0),
        event_bus=event_bus,
    )
    load_layout(session, layout)
    return session


class SequenceRandom:
    """Stand-in generator handing out a fixed cycle of values."""

    def __init__(self, values: Iterable[int]):
        self._values = itertools.cycle(list(values))

    def randrange(self, stop: int) -> int:
        return next(self._values) % stop

    def choice(self, seq):
        return seq[next(self._values) % len(seq)]


def capture(bus, *names):
    """Subscribe to the given events and collect (name, payload) pairs."""
    received: list[tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: received.append((_name, payload)))
    return received
