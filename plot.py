import sys
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.append(str(SRC_PATH))

from tileblast.components.board_config import BoardConfig  # type: ignore
from tileblast.utils.cluster_stats import sample_cluster_statistics  # type: ignore


# Sweep cluster chance across its whole range on the default board.
config = BoardConfig().validate()
chances = np.linspace(0.0, 1.0, 21)
stats = sample_cluster_statistics(config, chances, trials=200, seed=7)

fig, (ax_groups, ax_deadlock) = plt.subplots(1, 2, figsize=(11, 4))
ax_groups.plot(stats["chances"], stats["mean_largest_group"], label="Largest group")
ax_groups.plot(stats["chances"], stats["mean_group_count"], label="Group count")
for threshold in config.thresholds:
    ax_groups.axhline(threshold, color="gray", linestyle=":")
ax_groups.axvline(config.cluster_chance, color="gray", linestyle="--", label="Default chance")
ax_groups.set_xlabel("Cluster chance")
ax_groups.set_ylabel("Cells / groups")
ax_groups.set_title(f"{config.rows}x{config.cols} board, {config.active_color_count} colors")
ax_groups.legend()
ax_groups.grid(True)

ax_deadlock.plot(stats["chances"], stats["deadlock_rate"], color="crimson")
ax_deadlock.set_xlabel("Cluster chance")
ax_deadlock.set_ylabel("Deadlocked fills")
ax_deadlock.set_title("Boards needing a reshuffle")
ax_deadlock.grid(True)

plt.tight_layout()
plt.show()
