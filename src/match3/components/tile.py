from dataclasses import dataclass

from match3.constants import EMPTY


@dataclass(slots=True)
class Tile:
    """Single grid cell.

    ``type`` is a palette index or EMPTY while the cell waits for refill.
    ``shift`` is the number of rows the tile still has to fall; it is only
    meaningful between compute_shift and apply_shift.
    """
    type: int = EMPTY
    shift: int = 0

    @property
    def is_empty(self) -> bool:
        return self.type == EMPTY
