"""Entry point for the headless tileblast board simulation.

Sets up the ECS world, event bus and board engine, then plays random legal
blasts and prints the board after each one.
"""
import argparse
import logging
import random

from tileblast.world import create_world
from tileblast.events.bus import EventBus, EVENT_DEADLOCK_RESHUFFLED, EVENT_GROUP_CLEARED
from tileblast.components.board_config import BoardConfig, load_board_config
from tileblast.systems.board_engine import BoardEngine
from tileblast.systems.board_ops import get_board
from tileblast.systems.group_finder import group_at
from tileblast.constants import MIN_BREAKABLE_GROUP


def render_board(engine: BoardEngine, config: BoardConfig) -> str:
    lines = []
    for row in reversed(engine.snapshot()):
        cells = []
        for color in row:
            cells.append("." if color is None else config.color_name(color)[0].upper())
        lines.append(" ".join(cells))
    return "\n".join(lines)


def legal_moves(engine: BoardEngine, rows: int, cols: int) -> list[tuple[int, int]]:
    board_rows = engine.snapshot()
    seen: set[tuple[int, int]] = set()
    moves = []
    for r in range(rows):
        for c in range(cols):
            if (r, c) in seen or board_rows[r][c] is None:
                continue
            group = group_at(get_board(engine.world), (r, c))
            seen |= group
            if len(group) >= MIN_BREAKABLE_GROUP:
                moves.append((r, c))
    return moves


def main():
    parser = argparse.ArgumentParser(description="Play random blasts on a tileblast board")
    parser.add_argument("--config", help="JSON board config file")
    parser.add_argument("--rows", type=int)
    parser.add_argument("--cols", type=int)
    parser.add_argument("--moves", type=int, default=5)
    parser.add_argument("--seed", type=int)
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    config = load_board_config(args.config) if args.config else BoardConfig()
    rng = random.Random(args.seed)
    event_bus = EventBus()
    world = create_world(event_bus, rng=rng)
    engine = BoardEngine(world, event_bus)
    event_bus.subscribe(EVENT_GROUP_CLEARED, lambda s, **k: print(f"cleared {k['size']} cells (tier {k['tier']})"))
    event_bus.subscribe(EVENT_DEADLOCK_RESHUFFLED, lambda s, **k: print("deadlock: board reshuffled"))
    engine.initialize(config, rows=args.rows, cols=args.cols)
    rows, cols = len(engine.snapshot()), len(engine.snapshot()[0])
    print(render_board(engine, config))

    for _ in range(args.moves):
        moves = legal_moves(engine, rows, cols)
        if not moves:
            print("no legal moves left")
            break
        row, col = rng.choice(moves)
        print(f"\nblast ({row}, {col})")
        engine.request_blast(row, col)
        print(render_board(engine, config))


if __name__ == "__main__":
    main()
