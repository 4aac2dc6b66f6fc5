from dataclasses import dataclass
from typing import Tuple

from match3.components.move import Move


@dataclass(slots=True)
class MoveList:
    """Legal moves for the current board, replaced wholesale after every change."""
    moves: Tuple[Move, ...] = ()
