from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

from tileblast.components.palette import ColorSet, palette_from_entries
from tileblast.constants import (
    DEFAULT_ACTIVE_COLORS,
    DEFAULT_CLUSTER_CHANCE,
    DEFAULT_COLS,
    DEFAULT_PALETTE,
    DEFAULT_ROWS,
    DEFAULT_THRESHOLDS,
)
from tileblast.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoardConfig:
    """Theme-like data the engine needs for one session.

    colors: ordered palette; the first ``active_color_count`` entries are the
        only ones the generator draws.
    thresholds: strictly increasing group sizes; a group larger than
        ``thresholds[i]`` reaches tier ``i + 1``.
    cluster_chance: probability of copying a placed neighbor's color.
    """
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    colors: List[ColorSet] = field(default_factory=lambda: [ColorSet(name) for name in DEFAULT_PALETTE])
    thresholds: List[int] = field(default_factory=lambda: list(DEFAULT_THRESHOLDS))
    active_color_count: int = DEFAULT_ACTIVE_COLORS
    cluster_chance: float = DEFAULT_CLUSTER_CHANCE

    @property
    def palette_size(self) -> int:
        return len(self.colors)

    @property
    def tier_range(self) -> int:
        """Number of distinct tiers the thresholds can produce."""
        return len(self.thresholds) + 1

    def color_name(self, index: int) -> str:
        return self.colors[index].name

    def active_colors(self) -> List[int]:
        return list(range(self.active_color_count))

    def validate(self) -> "BoardConfig":
        if not self.colors:
            raise InvalidConfiguration("Palette must contain at least one color")
        if not _is_int(self.active_color_count) or not 1 <= self.active_color_count <= len(self.colors):
            raise InvalidConfiguration(
                f"active_color_count must be within [1, {len(self.colors)}], got {self.active_color_count}"
            )
        check_dimensions(self.rows, self.cols)
        for value in self.thresholds:
            if not _is_int(value):
                raise InvalidConfiguration(f"Thresholds must be integers, got {value!r}")
        for lower, upper in zip(self.thresholds, self.thresholds[1:]):
            if lower >= upper:
                raise InvalidConfiguration(f"Thresholds must be strictly increasing: {self.thresholds}")
        chance = self.cluster_chance
        if isinstance(chance, bool) or not isinstance(chance, (int, float)) or not 0.0 <= chance <= 1.0:
            raise InvalidConfiguration(f"cluster_chance must be within [0, 1], got {self.cluster_chance}")
        for color in self.colors:
            if 0 < color.tier_count < self.tier_range:
                logger.warning(
                    "Color '%s' declares %d tiers but thresholds produce %d",
                    color.name, color.tier_count, self.tier_range,
                )
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BoardConfig":
        """Build and validate a config from plain data (e.g. parsed JSON)."""
        if not isinstance(data, Mapping):
            raise InvalidConfiguration(f"Board config must be a mapping, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        try:
            if "rows" in data:
                kwargs["rows"] = int(data["rows"])
            if "cols" in data:
                kwargs["cols"] = int(data["cols"])
            if "colors" in data:
                kwargs["colors"] = palette_from_entries(data["colors"])
            if "thresholds" in data:
                kwargs["thresholds"] = list(data["thresholds"])
            if "active_color_count" in data:
                kwargs["active_color_count"] = int(data["active_color_count"])
            if "cluster_chance" in data:
                kwargs["cluster_chance"] = float(data["cluster_chance"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"Malformed board config: {exc}") from exc
        return cls(**kwargs).validate()


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_dimensions(rows: int, cols: int) -> None:
    if not (_is_int(rows) and _is_int(cols)):
        raise InvalidConfiguration(f"Board dimensions must be integers, got {rows!r}x{cols!r}")
    if rows <= 0 or cols <= 0:
        raise InvalidConfiguration(f"Board dimensions must be positive, got {rows}x{cols}")


def load_board_config(path: str | Path) -> BoardConfig:
    try:
        data = json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise InvalidConfiguration(f"Board config {path} is not valid JSON: {exc}") from exc
    return BoardConfig.from_dict(data)
