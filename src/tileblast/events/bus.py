from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT
# ============================================================================
EVENT_BLAST_REQUEST = "blast_request"              # payload: row, col
EVENT_BLAST_REJECTED = "blast_rejected"            # payload: row, col, reason=BlastOutcome


# ============================================================================
# BOARD MECHANICS
# ============================================================================
EVENT_BOARD_INITIALIZED = "board_initialized"      # payload: rows=int, cols=int
EVENT_GROUP_CLEARED = "group_cleared"              # payload: positions=[(r,c),...], color=int, size=int, tier=int
EVENT_CELL_MOVED = "cell_moved"                    # payload: from_row, from_col, to_row, to_col, color=int
EVENT_CELL_SPAWNED = "cell_spawned"                # payload: row, col, color=int
EVENT_BLAST_RESOLVED = "blast_resolved"            # payload: positions=[(r,c),...], moves=[GravityMove], new_tiles=[(r,c),...], reshuffled=bool


# ============================================================================
# VISUAL STATE
# ============================================================================
EVENT_CELL_VISUAL_UPDATE = "cell_visual_update"    # payload: row, col, color=int, tier=int


# ============================================================================
# DEADLOCK
# ============================================================================
EVENT_DEADLOCK_RESHUFFLED = "deadlock_reshuffled"  # payload: None
EVENT_BOARD_UNSOLVABLE = "board_unsolvable"        # payload: None


# ============================================================================
# ENGINE STATE
# ============================================================================
EVENT_ENGINE_MODE_CHANGED = "engine_mode_changed"  # payload: previous_mode=EngineMode|None, new_mode=EngineMode
