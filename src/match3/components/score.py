from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    points: int = 0
    # Accepted swaps this game.
    swaps: int = 0
