from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# GAME LIFECYCLE
# ============================================================================
EVENT_NEW_GAME = "new_game"                    # payload: columns=int, rows=int, palette_size=int
EVENT_BOARD_GENERATED = "board_generated"      # payload: attempts=int, moves=int
EVENT_GAME_OVER = "game_over"                  # payload: score=int, swaps=int


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"          # payload: column, row
EVENT_TILE_DESELECTED = "tile_deselected"      # payload: reason=str, prev=(c,r)|None


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"  # payload: src=(c,r), dst=(c,r), world=World|None
EVENT_TILE_SWAP_VALID = "tile_swap_valid"      # payload: src=(c,r), dst=(c,r), clusters=tuple[Cluster]
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"  # payload: src=(c,r), dst=(c,r), reason=str
EVENT_TILE_SWAP_REWOUND = "tile_swap_rewound"  # payload: src=(c,r), dst=(c,r)


# ============================================================================
# RESOLUTION
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"          # payload: previous=TurnPhase, phase=TurnPhase
EVENT_CLUSTERS_FOUND = "clusters_found"        # payload: clusters=tuple[Cluster], depth=int
EVENT_CLUSTERS_REMOVED = "clusters_removed"    # payload: positions=list[(c,r)], removed=int, points=int
EVENT_TILES_SHIFTED = "tiles_shifted"          # payload: falls=list[((c,r),(c,r))], refilled=list[(c,r)]
EVENT_CASCADE_STEP = "cascade_step"            # payload: depth=int
EVENT_CASCADE_COMPLETE = "cascade_complete"    # payload: depth=int, points=int


# ============================================================================
# SCORE & MOVES
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"          # payload: score=int, delta=int
EVENT_MOVES_UPDATED = "moves_updated"          # payload: moves=tuple[Move]
