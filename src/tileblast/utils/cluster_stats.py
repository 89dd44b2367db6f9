"""Sampling helpers for tuning ``cluster_chance``.

Fills fresh boards the way a session starts and measures how clustered they
come out, before any deadlock recovery runs.
"""
from __future__ import annotations

import dataclasses
import random
from typing import Dict, Sequence

import numpy as np

from tileblast.components.board import Board
from tileblast.components.board_config import BoardConfig
from tileblast.systems.board_ops import fill_board
from tileblast.systems.color_generator import initial_color
from tileblast.systems.group_finder import scan_all


def sample_cluster_statistics(
    config: BoardConfig,
    chances: Sequence[float],
    trials: int = 50,
    seed: int = 0,
) -> Dict[str, np.ndarray]:
    """Return per-chance means of largest group, group count and deadlock rate."""
    rng = random.Random(seed)
    chance_values = np.asarray(chances, dtype=float)
    largest = np.zeros((len(chance_values), trials))
    groups = np.zeros((len(chance_values), trials))
    deadlocks = np.zeros((len(chance_values), trials))
    for i, chance in enumerate(chance_values):
        trial_config = dataclasses.replace(config, cluster_chance=float(chance)).validate()
        for t in range(trials):
            board = Board(rows=trial_config.rows, cols=trial_config.cols)
            fill_board(board, lambda pos, b: initial_color(pos, b, trial_config, rng))
            scan = scan_all(board, trial_config.thresholds)
            largest[i, t] = scan.largest_group
            groups[i, t] = scan.group_count
            deadlocks[i, t] = 0.0 if scan.has_breakable_group else 1.0
    return {
        "chances": chance_values,
        "mean_largest_group": largest.mean(axis=1),
        "mean_group_count": groups.mean(axis=1),
        "deadlock_rate": deadlocks.mean(axis=1),
    }
