from __future__ import annotations

from esper import World

from ballsort.components.game_state import GameState


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def store_game_state(world: World, state: GameState) -> int:
    """Replace the singleton GameState component, creating its entity if needed."""
    for entity, _ in world.get_component(GameState):
        world.add_component(entity, state)
        return entity
    return world.create_entity(state)
