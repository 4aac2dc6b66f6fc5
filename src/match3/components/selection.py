from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(slots=True)
class Selection:
    """Tile the player has armed for a swap, if any."""
    position: Optional[Tuple[int, int]] = None
