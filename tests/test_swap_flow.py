import random

import pytest

from match3.components.cluster import Cluster, Orientation
from match3.components.turn_state import TurnPhase
from match3.errors import IllegalSwap, InvalidCoordinate
from match3.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CLUSTERS_FOUND,
    EVENT_CLUSTERS_REMOVED,
    EVENT_PHASE_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REWOUND,
    EVENT_TILE_SWAP_VALID,
    EVENT_TILES_SHIFTED,
)
from match3.session import attempt_swap, current_moves, is_game_over, snapshot
from match3.systems.board_ops import find_clusters, find_moves
from match3.systems.state_utils import get_grid, get_turn_state
from tests.helpers import SequenceRandom, capture, layout_rows, make_session, stalemate_rows

# Swapping (2,0) with (2,1) lines up four 0s along the top row.
FOUR_RUN = {(0, 0): 0, (1, 0): 0, (2, 0): 5, (3, 0): 0, (2, 1): 0}


def _four_run_session():
    # Refills alternate 0/1 so the top row cannot re-form a cluster.
    return make_session(layout_rows(8, 8, FOUR_RUN), rng=SequenceRandom([0, 1]))


def test_four_run_awards_two_hundred_points():
    session = _four_run_session()
    phases = []
    session.event_bus.subscribe(EVENT_PHASE_CHANGED, lambda sender, **k: phases.append(k["phase"]))
    events = capture(
        session.event_bus,
        EVENT_TILE_SWAP_VALID,
        EVENT_CLUSTERS_FOUND,
        EVENT_CLUSTERS_REMOVED,
        EVENT_SCORE_CHANGED,
        EVENT_TILES_SHIFTED,
        EVENT_CASCADE_COMPLETE,
    )
    result = attempt_swap(session, 2, 0, 2, 1)
    assert result.accepted
    assert result.score_delta == 200
    assert result.clusters_formed == (Cluster(0, 0, 4, Orientation.HORIZONTAL),)
    assert result.cascade_depth == 1
    assert session.score == 200
    assert snapshot(session).swaps == 1
    assert phases == [
        TurnPhase.SWAP_ANIMATING,
        TurnPhase.RESOLVING_REMOVAL,
        TurnPhase.RESOLVING_SHIFT,
        TurnPhase.READY,
    ]
    names = [name for name, _ in events]
    assert names == [
        EVENT_TILE_SWAP_VALID,
        EVENT_CLUSTERS_FOUND,
        EVENT_CLUSTERS_REMOVED,
        EVENT_SCORE_CHANGED,
        EVENT_TILES_SHIFTED,
        EVENT_CASCADE_COMPLETE,
    ]
    removed = dict(events)[EVENT_CLUSTERS_REMOVED]
    assert removed["positions"] == [(0, 0), (1, 0), (2, 0), (3, 0)]
    assert removed["removed"] == 4
    shifted = dict(events)[EVENT_TILES_SHIFTED]
    assert shifted["falls"] == []
    assert shifted["refilled"] == [(0, 0), (1, 0), (2, 0), (3, 0)]
    grid = get_grid(session.world)
    assert [grid.get(c, 0) for c in range(4)] == [0, 1, 0, 1]
    assert find_clusters(grid) == []


def test_adjacent_swap_without_cluster_rewinds():
    session = _four_run_session()
    before = snapshot(session)
    moves_before = current_moves(session)
    phases = []
    session.event_bus.subscribe(EVENT_PHASE_CHANGED, lambda sender, **k: phases.append(k["phase"]))
    events = capture(session.event_bus, EVENT_TILE_SWAP_REWOUND, EVENT_TILE_SWAP_INVALID)
    result = attempt_swap(session, 5, 5, 6, 5)
    assert not result.accepted
    assert result.score_delta == 0
    assert result.clusters_formed == ()
    assert phases == [TurnPhase.SWAP_ANIMATING, TurnPhase.SWAP_REWINDING, TurnPhase.READY]
    assert [name for name, _ in events] == [EVENT_TILE_SWAP_REWOUND, EVENT_TILE_SWAP_INVALID]
    assert events[1][1]["reason"] == IllegalSwap.NO_CLUSTER
    assert snapshot(session) == before
    assert current_moves(session) == moves_before


def test_non_adjacent_swap_is_rejected_without_changes():
    session = _four_run_session()
    session.click_tile(4, 4)
    before = snapshot(session)
    moves_before = current_moves(session)
    events = capture(session.event_bus, EVENT_TILE_SWAP_INVALID, EVENT_PHASE_CHANGED)
    result = attempt_swap(session, 0, 0, 2, 0)
    assert not result.accepted
    assert events == [(EVENT_TILE_SWAP_INVALID, {"src": (0, 0), "dst": (2, 0), "reason": IllegalSwap.NOT_ADJACENT})]
    assert snapshot(session) == before
    assert snapshot(session).selection == (4, 4)
    assert current_moves(session) == moves_before
    assert session.score == 0


def test_out_of_bounds_swap_raises_invalid_coordinate():
    session = _four_run_session()
    before = snapshot(session)
    with pytest.raises(InvalidCoordinate):
        attempt_swap(session, 7, 7, 8, 7)
    with pytest.raises(InvalidCoordinate):
        attempt_swap(session, -1, 0, 0, 0)
    assert snapshot(session) == before


def test_reentrant_swap_during_resolution_is_rejected_as_busy():
    session = _four_run_session()
    inner_results = []
    reasons = []

    def on_clusters(sender, **payload):
        inner_results.append(session.attempt_swap(5, 5, 6, 5))

    session.event_bus.subscribe(EVENT_CLUSTERS_FOUND, on_clusters)
    session.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, lambda sender, **k: reasons.append(k["reason"]))
    result = session.attempt_swap(2, 0, 2, 1)
    assert result.accepted
    assert result.score_delta == 200
    assert [r.accepted for r in inner_results] == [False]
    assert reasons == [IllegalSwap.BUSY]
    assert snapshot(session).phase is TurnPhase.READY


def test_raising_subscriber_still_returns_to_ready():
    session = make_session(layout_rows(8, 8, FOUR_RUN), rng=random.Random(2))

    def crash(sender, **payload):
        raise RuntimeError("renderer failed")

    session.event_bus.subscribe(EVENT_CLUSTERS_FOUND, crash)
    with pytest.raises(RuntimeError):
        session.attempt_swap(2, 0, 2, 1)
    assert snapshot(session).phase is TurnPhase.READY
    assert get_turn_state(session.world).current_move is None

    session.event_bus.unsubscribe(EVENT_CLUSTERS_FOUND, crash)
    session.new_game()
    view = snapshot(session)
    assert view.phase is TurnPhase.READY
    assert view.score == 0
    assert current_moves(session)
    assert find_clusters(get_grid(session.world)) == []


def test_board_without_moves_is_game_over():
    session = make_session(stalemate_rows(5), palette_size=3)
    assert current_moves(session) == ()
    assert is_game_over(session)
    assert session.hint() is None


def test_moves_refreshed_after_accepted_swap():
    session = _four_run_session()
    session.attempt_swap(2, 0, 2, 1)
    assert current_moves(session) == tuple(find_moves(get_grid(session.world)))
    assert is_game_over(session) == (not current_moves(session))
