import random

from esper import World

from ballsort.constants import MIN_LEVEL
from ballsort.utils.game_session import new_game
from ballsort.utils.game_state import store_game_state


def create_world(
    level: int = MIN_LEVEL,
    *,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the game state resource with a freshly shuffled board.
    store_game_state(world, new_game(level, world.random))
    return world
