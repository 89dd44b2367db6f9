from __future__ import annotations

import random
from typing import Any, Dict, Iterable, List, Tuple

from tileblast.components.board_config import BoardConfig
from tileblast.components.palette import ColorSet
from tileblast.events.bus import EventBus
from tileblast.systems.board_engine import BoardEngine
from tileblast.world import create_world


def make_config(palette_size: int = 2, active: int | None = None, thresholds=(3,), cluster_chance: float = 0.4) -> BoardConfig:
    """Small validated config with single-letter color names."""
    return BoardConfig(
        rows=3,
        cols=3,
        colors=[ColorSet(name=chr(ord("a") + i), tier_count=len(thresholds) + 1) for i in range(palette_size)],
        thresholds=list(thresholds),
        active_color_count=palette_size if active is None else active,
        cluster_chance=cluster_chance,
    ).validate()


def make_engine(seed: int = 1234) -> Tuple[EventBus, BoardEngine]:
    """Build a bus, a seeded world and an engine bound to both."""
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    engine = BoardEngine(world, bus)
    return bus, engine


def record_events(bus: EventBus, names: Iterable[str]) -> List[Tuple[str, Dict[str, Any]]]:
    """Subscribe to each event name and collect (name, payload) pairs in order."""
    received: List[Tuple[str, Dict[str, Any]]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: received.append((_name, payload)))
    return received
