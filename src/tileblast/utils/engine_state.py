from __future__ import annotations

from esper import World

from tileblast.components.engine_state import EngineMode, EngineState
from tileblast.events.bus import EVENT_ENGINE_MODE_CHANGED, EventBus


def get_or_create_engine_state(world: World) -> EngineState:
    """Return the shared EngineState component, creating it if absent."""
    existing = list(world.get_component(EngineState))
    if existing:
        return existing[0][1]
    world.create_entity(EngineState())
    return list(world.get_component(EngineState))[0][1]


def set_engine_mode(world: World, event_bus: EventBus, mode: EngineMode) -> None:
    """Update the engine mode and emit a change event when it differs."""

    state = get_or_create_engine_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(EVENT_ENGINE_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
