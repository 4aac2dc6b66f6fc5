import random

from esper import World

from match3.components.game_config import GameConfig
from match3.components.grid import Grid
from match3.components.move_list import MoveList
from match3.components.random_agent import RandomAgent
from match3.components.score import Score
from match3.components.selection import Selection
from match3.components.turn_state import TurnState


def create_world(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
    bot_seed: int | None = None,
) -> World:
    """Build the ECS world holding one session entity.

    The grid starts out empty; BoardSystem.generate fills it.
    """
    config = config or GameConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    session_entity = world.create_entity(
        config,
        Grid(columns=config.columns, rows=config.rows),
        TurnState(),
        Score(),
        MoveList(),
        Selection(),
    )
    if bot_seed is not None:
        world.add_component(session_entity, RandomAgent(seed=bot_seed))
    return world
