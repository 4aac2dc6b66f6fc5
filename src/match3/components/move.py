from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Move:
    """Adjacent pair whose swap forms at least one cluster."""
    column_a: int
    row_a: int
    column_b: int
    row_b: int

    @property
    def src(self) -> Position:
        return self.column_a, self.row_a

    @property
    def dst(self) -> Position:
        return self.column_b, self.row_b
