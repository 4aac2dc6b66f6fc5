from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from match3.constants import CLUSTER_BASE_POINTS

Position = Tuple[int, int]


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True, slots=True)
class Cluster:
    """A maximal straight run of three or more equal tiles."""
    column: int
    row: int
    length: int
    orientation: Orientation

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def points(self) -> int:
        return CLUSTER_BASE_POINTS * (self.length - 2)

    def positions(self) -> List[Position]:
        if self.horizontal:
            return [(self.column + offset, self.row) for offset in range(self.length)]
        return [(self.column, self.row + offset) for offset in range(self.length)]
