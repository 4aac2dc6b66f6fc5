from dataclasses import dataclass

from match3.constants import GRID_COLUMNS, GRID_ROWS, MAX_BOARD_ATTEMPTS, PALETTE_SIZE
from match3.errors import InvalidConfiguration


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board dimensions and palette for a session."""
    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS
    palette_size: int = PALETTE_SIZE
    max_board_attempts: int = MAX_BOARD_ATTEMPTS

    def __post_init__(self) -> None:
        if self.columns < 1 or self.rows < 1:
            raise InvalidConfiguration(f"grid must be at least 1x1, got {self.columns}x{self.rows}")
        if self.palette_size < 2:
            # A single type can never settle once a line of three fits.
            raise InvalidConfiguration(f"palette_size must be at least 2, got {self.palette_size}")
        if self.max_board_attempts < 1:
            raise InvalidConfiguration("max_board_attempts must be positive")
