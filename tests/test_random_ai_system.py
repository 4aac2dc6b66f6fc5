import random

from match3.components.cluster import Cluster, Orientation
from match3.components.game_config import GameConfig
from match3.session import Session, new_game, play_random_move
from match3.systems.board_ops import find_clusters
from match3.systems.state_utils import get_grid
from tests.helpers import load_layout, make_session, stalemate_rows

SINGLE_MOVE = [
    [0, 1, 2],
    [3, 2, 4],
    [4, 2, 3],
]


def test_random_ai_plays_the_only_move():
    session = make_session(SINGLE_MOVE, palette_size=5)
    result = play_random_move(session)
    assert result is not None
    assert result.accepted
    assert result.clusters_formed[0] == Cluster(1, 0, 3, Orientation.VERTICAL)
    assert result.score_delta >= 100


def test_random_ai_returns_none_without_moves():
    session = make_session(stalemate_rows(5), palette_size=3)
    assert play_random_move(session) is None
    assert session.score == 0


def test_bot_seed_makes_choices_repeatable():
    choices = []
    for _ in range(2):
        session = Session(GameConfig(), rng=random.Random(8), bot_seed=99)
        session.new_game()
        choices.append(session.ai_system.choose_move())
    assert choices[0] == choices[1]
    assert choices[0] in session.moves


def test_random_play_keeps_board_stable():
    session = new_game(rng_seed=3)
    last_score = 0
    for _ in range(25):
        result = session.play_random_move()
        if result is None:
            assert session.game_over
            break
        assert result.accepted
        assert result.score_delta >= 100
        assert session.score >= last_score
        last_score = session.score
        grid = get_grid(session.world)
        assert find_clusters(grid) == []
        assert not grid.empty_positions()
    assert session.snapshot().swaps >= 1


def test_hint_is_first_listed_move():
    session = make_session(SINGLE_MOVE, palette_size=5)
    assert session.hint() == session.moves[0]
    load_layout(session, stalemate_rows(3))
    assert session.hint() is None
