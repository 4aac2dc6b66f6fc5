from dataclasses import dataclass
from typing import Optional, Tuple

from match3.components.turn_state import TurnPhase


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Read-only view of a session for presentation layers.

    ``tiles`` is column-major: ``tiles[column][row]``.
    """
    columns: int
    rows: int
    tiles: Tuple[Tuple[int, ...], ...]
    score: int
    swaps: int
    game_over: bool
    phase: TurnPhase
    selection: Optional[Tuple[int, int]] = None

    def type_at(self, column: int, row: int) -> int:
        return self.tiles[column][row]
