import random

from esper import World

from .events.bus import EventBus
from minefield.components.game_state import GameMode, GameState
from minefield.components.game_timer import GameTimer


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.PLAYING,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the world with its singleton resources.

    The board itself is created by ``BoardSystem``; the event bus is accepted
    so callers wire every factory the same way.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    state_entity = world.create_entity()
    world.add_component(state_entity, GameState(mode=initial_mode))
    world.add_component(state_entity, GameTimer())
    return world
