# --- rmap_lib/analysis/color.py ---
import logging
from typing import Dict, List, Optional, Sequence

from rmap_lib.errors import ValidationError
from rmap_lib.schema import RGB, Region

log = logging.getLogger("rmap.config")


def _format_group(regions: List[Region]) -> str:
    return "[ " + ", ".join(f'"{r.editorID}"' for r in regions) + " ]"


def validate_regions(regions: Sequence[Region]) -> None:
    """
    Checks that no two regions share a color or a map name.

    Every pair is compared before anything is reported, so a single failure
    lists all of the conflicting groups at once.

    Raises:
        ValidationError: if at least one color or map name is shared.
    """
    color_errors: Dict[RGB, List[Region]] = {}
    name_errors: Dict[str, List[Region]] = {}

    for i, here in enumerate(regions):
        for other in regions[i + 1 :]:
            if here.color == other.color:
                group = color_errors.setdefault(here.color, [])
                for r in (here, other):
                    if r not in group:
                        group.append(r)
            if here.mapName == other.mapName:
                group = name_errors.setdefault(here.mapName, [])
                for r in (here, other):
                    if r not in group:
                        group.append(r)

    if not color_errors and not name_errors:
        return

    for color, group in color_errors.items():
        log.error(
            "Color '%s' is assigned to multiple regions! %s", color.hex, _format_group(group)
        )
    for name, group in name_errors.items():
        log.error("Map Name '%s' is assigned to multiple regions! %s", name, _format_group(group))

    raise ValidationError(
        "One or more regions have identical mapping data, the generator cannot continue!",
        color_conflicts=color_errors,
        name_conflicts=name_errors,
    )


class ColorClassifier:
    """Exact-match lookup from a pixel color to its configured region."""

    def __init__(self, regions: Sequence[Region]):
        validate_regions(regions)
        self._color_map: Dict[RGB, Region] = {r.color: r for r in regions}
        self.regions: List[Region] = sorted(regions, key=lambda r: r.id)

    def lookup(self, color) -> Optional[Region]:
        """Returns the region whose color equals `color` exactly, if any."""
        return self._color_map.get(RGB(*color))

    def __len__(self) -> int:
        return len(self._color_map)
