import random

from esper import World
from .events.bus import EventBus
from tileblast.components.engine_state import EngineState, EngineMode


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create the ECS world shared by the engine and its collaborators.

    The world carries a ``random`` attribute so every system draws from the same
    seedable generator. The board itself is created by ``BoardEngine.initialize``.
    """
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the engine state resource; the board arrives with the session.
    state_entity = world.create_entity()
    world.add_component(state_entity, EngineState(mode=EngineMode.UNINITIALIZED))
    return world
