"""Engine error taxonomy.

Only ``BoardGenerationExhausted`` is fatal; everything else is raised for a
single rejected request and leaves the session untouched.
"""
from __future__ import annotations

from typing import Tuple

Position = Tuple[int, int]


class Match3Error(Exception):
    """Base class for all engine errors."""


class InvalidConfiguration(Match3Error, ValueError):
    pass


class InvalidCoordinate(Match3Error, IndexError):
    def __init__(self, column: int, row: int, columns: int, rows: int):
        super().__init__(f"({column}, {row}) is outside the {columns}x{rows} grid")
        self.column = column
        self.row = row


class IllegalSwap(Match3Error, ValueError):
    NOT_ADJACENT = "not_adjacent"
    BUSY = "busy"
    NO_CLUSTER = "no_cluster"

    def __init__(self, src: Position, dst: Position, reason: str):
        super().__init__(f"cannot swap {src} with {dst}: {reason}")
        self.src = src
        self.dst = dst
        self.reason = reason


class BoardGenerationExhausted(Match3Error, RuntimeError):
    def __init__(self, attempts: int, message: str | None = None):
        super().__init__(message or f"no playable board after {attempts} attempts")
        self.attempts = attempts
