from dataclasses import dataclass


@dataclass(slots=True)
class RandomAgent:
    """Marker component for the random-move bot driving a session."""

    seed: int | None = None
