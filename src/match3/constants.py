GRID_COLUMNS = 8
GRID_ROWS = 8
PALETTE_SIZE = 7

# Runs shorter than this never form a cluster.
MIN_CLUSTER_LENGTH = 3
# Each cluster is worth CLUSTER_BASE_POINTS * (length - 2).
CLUSTER_BASE_POINTS = 100

# Full regenerations allowed before board generation gives up.
MAX_BOARD_ATTEMPTS = 1000
# Remove/shift passes allowed in a single resolve cycle during generation.
MAX_RESOLVE_PASSES = 100

# Tile type value of a removed cell awaiting refill.
EMPTY = -1
