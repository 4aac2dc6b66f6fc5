from __future__ import annotations

import logging
import random
from typing import Iterator, List, Sequence, Tuple

from match3.components.cluster import Cluster, Orientation
from match3.components.grid import Grid
from match3.components.move import Move
from match3.constants import EMPTY, MAX_BOARD_ATTEMPTS, MAX_RESOLVE_PASSES, MIN_CLUSTER_LENGTH
from match3.errors import BoardGenerationExhausted

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Fall = Tuple[Position, Position]


def is_adjacent(c1: int, r1: int, c2: int, r2: int) -> bool:
    """True when the two cells are orthogonal neighbours."""
    return (abs(c1 - c2) == 1 and r1 == r2) or (abs(r1 - r2) == 1 and c1 == c2)


def random_tile(rng: random.Random, palette_size: int) -> int:
    return rng.randrange(palette_size)


def _runs(values: Sequence[int]) -> Iterator[Tuple[int, int]]:
    """Yield (start, length) for every run of equal non-empty values long enough to count."""
    run_length = 1
    for index, value in enumerate(values):
        extends = (
            index + 1 < len(values)
            and value != EMPTY
            and values[index + 1] == value
        )
        if extends:
            run_length += 1
            continue
        if run_length >= MIN_CLUSTER_LENGTH:
            yield index + 1 - run_length, run_length
        run_length = 1


def find_clusters(grid: Grid) -> List[Cluster]:
    """Detect all maximal horizontal and vertical runs of length >= 3.

    Horizontal clusters come first in row-major order, then vertical clusters
    in column-major order. A tile at a crossing belongs to both clusters.
    """
    clusters: List[Cluster] = []
    # Horizontal runs
    for row in range(grid.rows):
        values = [grid.get(column, row) for column in range(grid.columns)]
        for start, length in _runs(values):
            clusters.append(Cluster(start, row, length, Orientation.HORIZONTAL))
    # Vertical runs
    for column in range(grid.columns):
        values = [grid.get(column, row) for row in range(grid.rows)]
        for start, length in _runs(values):
            clusters.append(Cluster(column, start, length, Orientation.VERTICAL))
    return clusters


def swap_forms_cluster(grid: Grid, c1: int, r1: int, c2: int, r2: int) -> bool:
    """Trial-swap two cells and report whether any cluster results.

    The grid is always swapped back, so its net state is unchanged.
    """
    grid.swap(c1, r1, c2, r2)
    try:
        return bool(find_clusters(grid))
    finally:
        grid.swap(c1, r1, c2, r2)


def find_moves(grid: Grid) -> List[Move]:
    """Enumerate adjacent swaps that would produce a cluster.

    Horizontal pairs are tried row by row, then vertical pairs column by column.
    """
    moves: List[Move] = []
    for row in range(grid.rows):
        for column in range(grid.columns - 1):
            if swap_forms_cluster(grid, column, row, column + 1, row):
                moves.append(Move(column, row, column + 1, row))
    for column in range(grid.columns):
        for row in range(grid.rows - 1):
            if swap_forms_cluster(grid, column, row, column, row + 1):
                moves.append(Move(column, row, column, row + 1))
    return moves


def resolve_once(grid: Grid, clusters: Sequence[Cluster] | None = None) -> Tuple[int, bool]:
    """Mark every clustered cell EMPTY.

    Returns the number of cells that were actually cleared; cells shared by
    two clusters, or already empty, are only counted once.
    """
    if clusters is None:
        clusters = find_clusters(grid)
    removed = 0
    for cluster in clusters:
        for column, row in cluster.positions():
            if grid.get(column, row) == EMPTY:
                continue
            grid.clear(column, row)
            removed += 1
    return removed, removed > 0


def compute_shift(grid: Grid) -> None:
    """Record on each filled tile how many empty cells lie below it."""
    for column in range(grid.columns):
        shift = 0
        for row in range(grid.rows - 1, -1, -1):
            tile = grid.cell(column, row)
            if tile.is_empty:
                shift += 1
                tile.shift = 0
            else:
                tile.shift = shift


def apply_shift(grid: Grid, rng: random.Random, palette_size: int) -> Tuple[List[Fall], List[Position]]:
    """Drop tiles by their recorded shift and refill empty cells.

    Columns are walked bottom to top. Empty cells get a fresh random type;
    a filled tile swaps with the cell ``shift`` rows below it, so the fresh
    tiles bubble up to the top of the column.
    Returns the falls (source, target) and the cells that were refilled.
    """
    falls: List[Fall] = []
    refilled: List[Position] = []
    for column in range(grid.columns):
        for row in range(grid.rows - 1, -1, -1):
            tile = grid.cell(column, row)
            if tile.is_empty:
                tile.type = random_tile(rng, palette_size)
                refilled.append((column, row))
            elif tile.shift > 0:
                target = row + tile.shift
                grid.swap(column, row, column, target)
                falls.append(((column, row), (column, target)))
            tile.shift = 0
    return falls, refilled


def resolve_until_stable(
    grid: Grid,
    rng: random.Random,
    palette_size: int,
    *,
    max_passes: int | None = None,
) -> int:
    """Remove, shift and rescan until no cluster remains; return points earned.

    Every cluster scores on its own, so a tile at a crossing counts towards
    both of its clusters.
    """
    total = 0
    passes = 0
    while True:
        clusters = find_clusters(grid)
        if not clusters:
            return total
        if max_passes is not None and passes >= max_passes:
            raise BoardGenerationExhausted(
                passes, f"board still had clusters after {passes} resolve passes"
            )
        passes += 1
        total += sum(cluster.points for cluster in clusters)
        resolve_once(grid, clusters)
        compute_shift(grid)
        apply_shift(grid, rng, palette_size)


def generate_board(
    grid: Grid,
    rng: random.Random,
    palette_size: int,
    max_attempts: int = MAX_BOARD_ATTEMPTS,
) -> int:
    """Fill the grid with a stable board that has at least one legal move.

    Each attempt fills every cell at random, resolves accidental clusters and
    checks for moves; boards without moves are thrown away. Returns the
    number of attempts used.
    """
    for attempt in range(1, max_attempts + 1):
        for column, row in grid.positions():
            grid.set(column, row, random_tile(rng, palette_size))
        try:
            resolve_until_stable(grid, rng, palette_size, max_passes=MAX_RESOLVE_PASSES)
        except BoardGenerationExhausted:
            logger.debug("attempt %d never settled; regenerating", attempt)
            continue
        if find_moves(grid):
            if attempt > 1:
                logger.debug("playable board found after %d attempts", attempt)
            return attempt
        logger.debug("attempt %d has no legal moves; regenerating", attempt)
    logger.error(
        "board generation exhausted: %dx%d grid, palette %d, %d attempts",
        grid.columns,
        grid.rows,
        palette_size,
        max_attempts,
    )
    raise BoardGenerationExhausted(max_attempts)
