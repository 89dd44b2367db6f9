"""Engine state resource describing where the board is in its lifecycle."""
from dataclasses import dataclass
from enum import Enum, auto


class EngineMode(Enum):
    """Lifecycle of a board session; only READY accepts blasts."""
    UNINITIALIZED = auto()
    READY = auto()
    RESOLVING = auto()
    TORN_DOWN = auto()


@dataclass
class EngineState:
    """Singleton component storing the engine mode and session counters."""
    mode: EngineMode = EngineMode.UNINITIALIZED
    blasts_resolved: int = 0
    reshuffles: int = 0
