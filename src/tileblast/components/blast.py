from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:
    from tileblast.systems.board_ops import GravityMove


class BlastOutcome(Enum):
    ACCEPTED = auto()
    NOT_READY = auto()
    BUSY = auto()
    OUT_OF_BOUNDS = auto()
    EMPTY_CELL = auto()
    GROUP_TOO_SMALL = auto()


@dataclass(slots=True)
class BlastResult:
    """What a blast request did.

    Rejected requests carry only the outcome; accepted ones list the cleared
    positions, the gravity moves and the freshly spawned cells.
    """
    outcome: BlastOutcome
    positions: List[Tuple[int, int]] = field(default_factory=list)
    moves: List["GravityMove"] = field(default_factory=list)
    new_tiles: List[Tuple[int, int]] = field(default_factory=list)
    reshuffled: bool = False

    @property
    def accepted(self) -> bool:
        return self.outcome is BlastOutcome.ACCEPTED
