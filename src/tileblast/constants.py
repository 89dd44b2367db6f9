DEFAULT_ROWS = 8
DEFAULT_COLS = 8

# Probability that a generated color copies an already placed neighbor.
DEFAULT_CLUSTER_CHANCE = 0.4

# Group sizes above 4, 7 and 9 unlock visual tiers 1, 2 and 3.
DEFAULT_THRESHOLDS = (4, 7, 9)

# Colors drawn by the generator; the rest of the palette stays in reserve.
DEFAULT_ACTIVE_COLORS = 4
DEFAULT_PALETTE = (
    "red",
    "green",
    "blue",
    "yellow",
    "purple",
    "pink",
)

# A blast needs at least this many connected cells.
MIN_BREAKABLE_GROUP = 2

# Probabilistic reshuffles tried before the deterministic pair repair.
MAX_RESHUFFLE_ATTEMPTS = 8
