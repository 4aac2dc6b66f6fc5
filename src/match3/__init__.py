"""Match-three puzzle engine: grid, clusters, moves and turn resolution."""
from match3.components.board_snapshot import BoardSnapshot
from match3.components.cluster import Cluster, Orientation
from match3.components.game_config import GameConfig
from match3.components.grid import Grid
from match3.components.move import Move
from match3.components.swap_result import SwapResult
from match3.components.turn_state import TurnPhase
from match3.constants import EMPTY
from match3.errors import (
    BoardGenerationExhausted,
    IllegalSwap,
    InvalidConfiguration,
    InvalidCoordinate,
    Match3Error,
)
from match3.session import (
    Session,
    attempt_swap,
    current_moves,
    hint,
    is_game_over,
    new_game,
    play_random_move,
    snapshot,
)
from match3.systems.board_ops import (
    apply_shift,
    compute_shift,
    find_clusters,
    find_moves,
    generate_board,
    is_adjacent,
    resolve_once,
    resolve_until_stable,
)

__all__ = [
    "EMPTY",
    "BoardGenerationExhausted",
    "BoardSnapshot",
    "Cluster",
    "GameConfig",
    "Grid",
    "IllegalSwap",
    "InvalidConfiguration",
    "InvalidCoordinate",
    "Match3Error",
    "Move",
    "Orientation",
    "Session",
    "SwapResult",
    "TurnPhase",
    "apply_shift",
    "attempt_swap",
    "compute_shift",
    "current_moves",
    "find_clusters",
    "find_moves",
    "generate_board",
    "hint",
    "is_adjacent",
    "is_game_over",
    "new_game",
    "play_random_move",
    "resolve_once",
    "resolve_until_stable",
    "snapshot",
]
