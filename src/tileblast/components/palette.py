import logging
from dataclasses import dataclass
from typing import Any, List, Sequence

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ColorSet:
    """One palette entry.

    Only the name and the number of visual tiers matter to the engine; sprite
    payloads belong to the renderer. ``tier_count`` of 0 means the renderer
    did not declare how many variants it ships.
    """
    name: str
    tier_count: int = 0

    def clamp_tier(self, tier: int) -> int:
        """Return a tier the renderer can draw, falling back to the default one."""
        if self.tier_count <= 0:
            return tier
        if 0 <= tier < self.tier_count:
            return tier
        logger.warning("Tier %s out of range for color '%s', using default", tier, self.name)
        return 0


def palette_from_entries(entries: Sequence[Any]) -> List[ColorSet]:
    """Accept plain names, ``{"name": ..., "tiers": ...}`` mappings or ColorSets."""
    colors: List[ColorSet] = []
    for entry in entries:
        if isinstance(entry, ColorSet):
            colors.append(entry)
        elif isinstance(entry, str):
            colors.append(ColorSet(name=entry))
        elif isinstance(entry, dict):
            colors.append(ColorSet(name=str(entry["name"]), tier_count=int(entry.get("tiers", 0))))
        else:
            raise TypeError(f"Unsupported palette entry {entry!r}")
    return colors
