class InvalidConfiguration(ValueError):
    """Board configuration or author-time layout rejected at load time."""


class PoolExhausted(RuntimeError):
    """A pool-preserving refill was asked for a color after the pool ran dry.

    Callers size the pool to the exact number of cells being refilled, so this
    signals a broken invariant rather than a player-facing condition.
    """
