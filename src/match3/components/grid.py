from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from match3.components.tile import Tile
from match3.constants import EMPTY
from match3.errors import InvalidCoordinate

Position = Tuple[int, int]


@dataclass(slots=True)
class Grid:
    """Fixed columns x rows storage of tiles, indexed (column, row).

    Row 0 is the top of the board; tiles fall towards ``rows - 1``. Every
    in-range cell always holds exactly one Tile. Nothing outside this class
    touches ``tiles`` directly.
    """
    columns: int
    rows: int
    tiles: List[List[Tile]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.tiles:
            self.tiles = [[Tile() for _ in range(self.rows)] for _ in range(self.columns)]

    @classmethod
    def from_rows(cls, layout: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from row-major literal data (``layout[row][column]``)."""
        rows = len(layout)
        columns = len(layout[0]) if rows else 0
        grid = cls(columns=columns, rows=rows)
        for row, values in enumerate(layout):
            if len(values) != columns:
                raise ValueError("ragged layout")
            for column, value in enumerate(values):
                grid.set(column, row, value)
        return grid

    def in_bounds(self, column: int, row: int) -> bool:
        return 0 <= column < self.columns and 0 <= row < self.rows

    def _check(self, column: int, row: int) -> None:
        if not self.in_bounds(column, row):
            raise InvalidCoordinate(column, row, self.columns, self.rows)

    def cell(self, column: int, row: int) -> Tile:
        self._check(column, row)
        return self.tiles[column][row]

    def get(self, column: int, row: int) -> int:
        return self.cell(column, row).type

    def set(self, column: int, row: int, tile_type: int) -> None:
        self.cell(column, row).type = tile_type

    def clear(self, column: int, row: int) -> None:
        self.set(column, row, EMPTY)

    def swap(self, c1: int, r1: int, c2: int, r2: int) -> None:
        """Exchange the types of two cells; calling it twice restores both."""
        first = self.cell(c1, r1)
        second = self.cell(c2, r2)
        first.type, second.type = second.type, first.type

    def positions(self) -> Iterator[Position]:
        for column in range(self.columns):
            for row in range(self.rows):
                yield column, row

    def empty_positions(self) -> List[Position]:
        return [(c, r) for c, r in self.positions() if self.tiles[c][r].is_empty]

    def as_tuple(self) -> Tuple[Tuple[int, ...], ...]:
        """Immutable column-major copy of the tile types."""
        return tuple(tuple(tile.type for tile in column) for column in self.tiles)

    def load(self, data: Sequence[Sequence[int]]) -> None:
        """Overwrite every type from column-major data of matching shape."""
        if len(data) != self.columns or any(len(column) != self.rows for column in data):
            raise ValueError("layout does not match grid dimensions")
        for column, values in enumerate(data):
            for row, value in enumerate(values):
                tile = self.tiles[column][row]
                tile.type = value
                tile.shift = 0
