from __future__ import annotations

import dataclasses
import logging
import random
from typing import Dict, List, Optional, Sequence, Set, Tuple

from esper import World

from tileblast.components.blast import BlastOutcome, BlastResult
from tileblast.components.board import EMPTY, Board, Cell, Position
from tileblast.components.board_config import BoardConfig, check_dimensions
from tileblast.components.engine_state import EngineMode, EngineState
from tileblast.constants import MAX_RESHUFFLE_ATTEMPTS, MIN_BREAKABLE_GROUP
from tileblast.errors import InvalidConfiguration
from tileblast.events.bus import (
    EventBus,
    EVENT_BLAST_REQUEST,
    EVENT_BLAST_REJECTED,
    EVENT_BLAST_RESOLVED,
    EVENT_BOARD_INITIALIZED,
    EVENT_BOARD_UNSOLVABLE,
    EVENT_CELL_MOVED,
    EVENT_CELL_SPAWNED,
    EVENT_CELL_VISUAL_UPDATE,
    EVENT_DEADLOCK_RESHUFFLED,
    EVENT_GROUP_CLEARED,
)
from tileblast.systems.board_ops import (
    GravityMove,
    clear_group,
    compact_column,
    fill_board,
    first_empty_row,
    get_board,
    get_board_config,
    refill_column,
)
from tileblast.systems.color_generator import initial_color, random_color
from tileblast.systems.deadlock import can_recover, force_breakable_pair, is_deadlocked, reshuffle_board
from tileblast.systems.group_finder import ScanResult, group_at, scan_all, tier_for_size
from tileblast.utils.engine_state import get_or_create_engine_state, set_engine_mode

logger = logging.getLogger(__name__)

Visual = Tuple[Cell, int]


class BoardEngine:
    """Owns the board session and turns blast requests into board changes.

    All state changes are computed eagerly; the renderer learns about them
    through events on the bus and animates at its own pace.
    """

    def __init__(self, world: World, event_bus: EventBus, rng: random.Random | None = None):
        self.world = world
        self.event_bus = event_bus
        candidate_rng = rng or getattr(world, "random", None)
        if isinstance(candidate_rng, random.Random):
            self.rng = candidate_rng
        else:
            self.rng = random.Random()
        self.board_entity: Optional[int] = None
        self._tiers: Dict[Position, int] = {}
        self.event_bus.subscribe(EVENT_BLAST_REQUEST, self.on_blast_request)

    # ------------------------------------------------------------------
    # Session lifecycle

    @property
    def state(self) -> EngineState:
        return get_or_create_engine_state(self.world)

    @property
    def mode(self) -> EngineMode:
        return self.state.mode

    def initialize(
        self,
        config: BoardConfig,
        rows: int | None = None,
        cols: int | None = None,
        layout: Sequence[Sequence[Cell]] | None = None,
    ) -> None:
        """Start a session: fill the board, recover from deadlock, report every cell.

        ``rows``/``cols`` override the config's dimensions. ``layout`` is an
        author-time board (row 0 first) used instead of random generation; it
        may hold reserve colors beyond ``active_color_count``. Without explicit
        dimensions the board takes the layout's shape.
        """
        mode = self.mode
        if mode is EngineMode.RESOLVING:
            raise RuntimeError("Cannot initialize while a blast is resolving")
        if mode is EngineMode.TORN_DOWN:
            raise RuntimeError("Engine has been torn down")
        if layout is not None:
            # A fixed layout defines its own shape unless dimensions are given.
            rows = len(layout) if rows is None else rows
            cols = (len(layout[0]) if layout else 0) if cols is None else cols
        rows = config.rows if rows is None else rows
        cols = config.cols if cols is None else cols
        check_dimensions(rows, cols)
        session_config = dataclasses.replace(
            config,
            rows=rows,
            cols=cols,
            colors=list(config.colors),
            thresholds=list(config.thresholds),
        ).validate()
        if layout is not None:
            board = _board_from_layout(layout, session_config)
        else:
            board = Board(rows=rows, cols=cols)
            fill_board(board, lambda pos, b: initial_color(pos, b, session_config, self.rng))

        if self.board_entity is not None:
            # Restarting a session: no blasts until the new board is reported.
            set_engine_mode(self.world, self.event_bus, EngineMode.UNINITIALIZED)
            self.world.delete_entity(self.board_entity, immediate=True)
        self.board_entity = self.world.create_entity(board, session_config)
        state = self.state
        state.blasts_resolved = 0
        state.reshuffles = 0

        scan = scan_all(board, session_config.thresholds)
        scan, reshuffled = self._recover_from_deadlock(board, session_config, scan)
        self._tiers = dict(scan.tiers)
        logger.info(
            "Board initialized %dx%d with %d blocks in %d groups%s",
            rows, cols, board.occupied_count(), scan.group_count, " after reshuffle" if reshuffled else "",
        )
        self.event_bus.emit(EVENT_BOARD_INITIALIZED, rows=rows, cols=cols)
        for row, col in board.occupied():
            self._emit_visual(board, row, col)
        set_engine_mode(self.world, self.event_bus, EngineMode.READY)

    def teardown(self) -> None:
        if self.mode is EngineMode.RESOLVING:
            raise RuntimeError("Cannot tear down while a blast is resolving")
        if self.board_entity is not None:
            self.world.delete_entity(self.board_entity, immediate=True)
            self.board_entity = None
        self._tiers = {}
        self.event_bus.unsubscribe(EVENT_BLAST_REQUEST, self.on_blast_request)
        set_engine_mode(self.world, self.event_bus, EngineMode.TORN_DOWN)

    # ------------------------------------------------------------------
    # Queries

    def _require_board(self) -> Board:
        board = get_board(self.world)
        if board is None or self.board_entity is None:
            raise RuntimeError("Board has not been initialized")
        return board

    def cell(self, row: int, col: int) -> Cell:
        return self._require_board().get(row, col)

    def tier_at(self, row: int, col: int) -> int:
        return self._tiers.get((row, col), 0)

    def snapshot(self) -> Tuple[Tuple[Cell, ...], ...]:
        return self._require_board().snapshot()

    # ------------------------------------------------------------------
    # Blasts

    def on_blast_request(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if not (_is_cell_index(row) and _is_cell_index(col)):
            logger.debug("Ignoring blast request with payload row=%r col=%r", row, col)
            return
        result = self.request_blast(row, col)
        if not result.accepted:
            self.event_bus.emit(EVENT_BLAST_REJECTED, row=row, col=col, reason=result.outcome)

    def request_blast(self, row: int, col: int) -> BlastResult:
        """Blast the group at (row, col) if it is a legal move.

        Illegal requests change nothing and emit nothing; the outcome says why.
        """
        mode = self.mode
        if mode is EngineMode.RESOLVING:
            return self._reject(row, col, BlastOutcome.BUSY)
        if mode is not EngineMode.READY:
            return self._reject(row, col, BlastOutcome.NOT_READY)
        board = self._require_board()
        if not board.in_bounds(row, col):
            return self._reject(row, col, BlastOutcome.OUT_OF_BOUNDS)
        if board.is_empty(row, col):
            return self._reject(row, col, BlastOutcome.EMPTY_CELL)
        group = group_at(board, (row, col))
        if len(group) < MIN_BREAKABLE_GROUP:
            return self._reject(row, col, BlastOutcome.GROUP_TOO_SMALL)

        set_engine_mode(self.world, self.event_bus, EngineMode.RESOLVING)
        try:
            return self._resolve(board, get_board_config(self.world), (row, col), group)
        finally:
            set_engine_mode(self.world, self.event_bus, EngineMode.READY)

    def _reject(self, row: int, col: int, outcome: BlastOutcome) -> BlastResult:
        logger.debug("Blast at %s rejected: %s", (row, col), outcome.name)
        return BlastResult(outcome=outcome)

    def _resolve(
        self,
        board: Board,
        config: BoardConfig,
        origin: Position,
        group: Set[Position],
    ) -> BlastResult:
        before = self._visual_map(board)
        positions = sorted(group)
        color = board.get(*origin)
        tier = self._tiers.get(origin, tier_for_size(len(positions), config.thresholds))

        clear_group(board, positions)
        columns = sorted({col for _, col in positions})
        moves: List[GravityMove] = []
        for col in columns:
            moves.extend(compact_column(board, col))

        # Gravity refill is not pool-preserving: new blocks are drawn uniformly.
        targets = [(col, first_empty_row(board, col)) for col in columns]
        needed = sum(board.rows - start for _, start in targets)
        fresh = iter([random_color(config, self.rng) for _ in range(needed)])
        new_tiles: List[Position] = []
        for col, start in targets:
            new_tiles.extend(refill_column(board, col, start, board.rows, lambda pos, b: next(fresh)))

        logger.debug(
            "Blasted %d cells of color %s at %s: %d moves, %d new",
            len(positions), color, origin, len(moves), len(new_tiles),
        )
        self.event_bus.emit(EVENT_GROUP_CLEARED, positions=positions, color=color, size=len(positions), tier=tier)
        for move in moves:
            self.event_bus.emit(
                EVENT_CELL_MOVED,
                from_row=move.source[0],
                from_col=move.source[1],
                to_row=move.target[0],
                to_col=move.target[1],
                color=move.color,
            )
        for row, col in new_tiles:
            self.event_bus.emit(EVENT_CELL_SPAWNED, row=row, col=col, color=board.get(row, col))

        scan = scan_all(board, config.thresholds)
        scan, reshuffled = self._recover_from_deadlock(board, config, scan)
        self._tiers = dict(scan.tiers)

        after = self._visual_map(board)
        changed = {pos for pos in after if before.get(pos) != after[pos]}
        changed.update(move.target for move in moves)
        changed.update(new_tiles)
        for row, col in sorted(changed):
            if not board.is_empty(row, col):
                self._emit_visual(board, row, col)

        self.state.blasts_resolved += 1
        self.event_bus.emit(
            EVENT_BLAST_RESOLVED,
            positions=positions,
            moves=moves,
            new_tiles=new_tiles,
            reshuffled=reshuffled,
        )
        return BlastResult(
            outcome=BlastOutcome.ACCEPTED,
            positions=positions,
            moves=moves,
            new_tiles=new_tiles,
            reshuffled=reshuffled,
        )

    # ------------------------------------------------------------------
    # Deadlock recovery

    def _recover_from_deadlock(self, board: Board, config: BoardConfig, scan: ScanResult) -> Tuple[ScanResult, bool]:
        """Reshuffle until a breakable group exists, then force one if needed.

        Returns the final scan and whether the board was rearranged.
        """
        if not is_deadlocked(scan):
            return scan, False
        if not can_recover(board):
            logger.warning("Deadlocked board cannot be recovered by reshuffling")
            self.event_bus.emit(EVENT_BOARD_UNSOLVABLE)
            return scan, False
        state = self.state
        for attempt in range(1, MAX_RESHUFFLE_ATTEMPTS + 1):
            reshuffle_board(board, config, self.rng)
            state.reshuffles += 1
            scan = scan_all(board, config.thresholds)
            if not is_deadlocked(scan):
                logger.info("Deadlock broken after %d reshuffle(s)", attempt)
                break
        else:
            force_breakable_pair(board)
            scan = scan_all(board, config.thresholds)
        self.event_bus.emit(EVENT_DEADLOCK_RESHUFFLED)
        return scan, True

    # ------------------------------------------------------------------
    # Notifications

    def _visual_map(self, board: Board) -> Dict[Position, Visual]:
        return {
            (row, col): (board.get(row, col), self._tiers.get((row, col), 0))
            for row, col in board.occupied()
        }

    def _emit_visual(self, board: Board, row: int, col: int) -> None:
        self.event_bus.emit(
            EVENT_CELL_VISUAL_UPDATE,
            row=row,
            col=col,
            color=board.get(row, col),
            tier=self._tiers.get((row, col), 0),
        )


def _is_cell_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _board_from_layout(layout: Sequence[Sequence[Cell]], config: BoardConfig) -> Board:
    if len(layout) != config.rows or any(len(row) != config.cols for row in layout):
        raise InvalidConfiguration(f"Layout must be {config.rows}x{config.cols}")
    for row in layout:
        for value in row:
            if value is EMPTY:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < config.palette_size:
                raise InvalidConfiguration(f"Layout color {value!r} outside palette of {config.palette_size}")
    return Board.from_rows(layout)
