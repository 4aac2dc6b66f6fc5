import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import logging

from match3.events.bus import (EventBus, EVENT_PHASE_CHANGED, EVENT_CLUSTERS_FOUND, EVENT_TILES_SHIFTED,
                               EVENT_SCORE_CHANGED, EVENT_GAME_OVER)
from match3.session import new_game


def dump(view):
    for row in range(view.rows):
        print(' '.join('.' if view.type_at(c, row) < 0 else str(view.type_at(c, row)) for c in range(view.columns)))


logging.basicConfig(level=logging.DEBUG)
bus = EventBus()
bus.subscribe(EVENT_PHASE_CHANGED, lambda s, **k: print('phase', k['previous'].name, '->', k['phase'].name))
bus.subscribe(EVENT_CLUSTERS_FOUND, lambda s, **k: print('depth', k['depth'], 'clusters', list(k['clusters'])))
bus.subscribe(EVENT_TILES_SHIFTED, lambda s, **k: print('falls', len(k['falls']), 'refilled', len(k['refilled'])))
bus.subscribe(EVENT_SCORE_CHANGED, lambda s, **k: print('score', k['score'], '(+%d)' % k['delta']))
bus.subscribe(EVENT_GAME_OVER, lambda s, **k: print('game over', k))

seed = int(sys.argv[1]) if len(sys.argv) > 1 else 1
turns = int(sys.argv[2]) if len(sys.argv) > 2 else 5
session = new_game(rng_seed=seed, event_bus=bus, bot_seed=seed)
dump(session.snapshot())
for turn in range(turns):
    move = session.hint()
    print('turn', turn, 'moves available', len(session.moves), 'hint', move)
    result = session.play_random_move()
    if result is None:
        break
    print('result', result.accepted, result.score_delta, 'depth', result.cascade_depth)
    dump(session.snapshot())
print('final score', session.score, 'swaps', session.snapshot().swaps)
