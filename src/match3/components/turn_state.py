from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from match3.components.swap_result import SwapResult

Position = Tuple[int, int]


class TurnPhase(Enum):
    """Turn state machine phases.

    Only READY accepts input; the other four are the busy states a swap
    passes through while it is validated and resolved.
    """
    READY = auto()
    SWAP_ANIMATING = auto()
    SWAP_REWINDING = auto()
    RESOLVING_REMOVAL = auto()
    RESOLVING_SHIFT = auto()

    @property
    def busy(self) -> bool:
        return self is not TurnPhase.READY


@dataclass(slots=True)
class TurnState:
    """Tracks current turn-level state shared across systems."""

    phase: TurnPhase = TurnPhase.READY
    game_over: bool = False
    cascade_depth: int = 0
    current_move: Optional[Tuple[Position, Position]] = None
    last_result: Optional[SwapResult] = None
