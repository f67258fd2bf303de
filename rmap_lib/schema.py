# --- rmap_lib/schema.py ---
import json
import string
from dataclasses import asdict, dataclass, field
from typing import Dict, List, NamedTuple, Optional, Tuple

# A point in cell-coordinate space (or a raw grid index), always integral.
Point = Tuple[int, int]

DEFAULT_PRIORITY = 56


class RGB(NamedTuple):
    """An 8-bit-per-channel color in canonical red-green-blue order."""

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, hexstr: str) -> "RGB":
        """Parses a 'RRGGBB' string (a leading '#' is tolerated)."""
        value = hexstr.strip().lstrip("#")
        if len(value) != 6 or any(c not in string.hexdigits for c in value):
            raise ValueError(f"'{hexstr}' isn't a valid 3-channel hexadecimal color value")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @classmethod
    def from_bgr(cls, pixel) -> "RGB":
        """Builds a color from an OpenCV pixel, whose channels are ordered B, G, R."""
        return cls(int(pixel[2]), int(pixel[1]), int(pixel[0]))

    @property
    def hex(self) -> str:
        return f"{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_bgr(self) -> Tuple[int, int, int]:
        return (self.b, self.g, self.r)


@dataclass(frozen=True)
class Region:
    """A named, colored classification target loaded from the region config."""

    id: int
    editorID: str
    mapName: str
    color: RGB
    priority: int = DEFAULT_PRIORITY

    def __str__(self) -> str:
        return self.editorID


# The ordered cell coordinates matched to one region, in scan order.
RegionStats = List[Point]
RegionStatsMap = Dict[Region, RegionStats]


@dataclass
class HoldEntry:
    """One scanned cell that had at least one region above the threshold."""

    cell: Point
    regions: List[Region]
    index: Point = (0, 0)


HoldMap = List[HoldEntry]


@dataclass
class ScanResult:
    """Everything produced by a single pass of the grid scanner."""

    region_stats: RegionStatsMap = field(default_factory=dict)
    hold_map: HoldMap = field(default_factory=list)
    cells_processed: int = 0
    columns: int = 0
    rows: int = 0
    cell_size: Tuple[int, int] = (0, 0)
    threshold: float = 0.0
    missing: List[Region] = field(default_factory=list)
    elapsed: float = 0.0


# --- JSON export model ---


@dataclass
class BoundingBox:
    """Axis-aligned bounds of a region outline, in cell coordinates."""

    minX: float
    minY: float
    maxX: float
    maxY: float


@dataclass
class Meta:
    sourceImage: str
    cellSize: List[int]
    threshold: float
    columns: int
    rows: int
    cellsProcessed: int


@dataclass
class RegionArea:
    """Serialized view of one region and the cells it covers."""

    id: int
    editorID: str
    mapName: str
    color: str
    priority: int
    cells: List[List[int]]
    outline: List[List[int]]
    bounds: Optional[BoundingBox] = None


@dataclass
class HoldCell:
    cell: List[int]
    regions: List[str]


@dataclass
class MapData:
    """The root object of a serialized region map."""

    rmapVersion: str
    meta: Meta
    regions: List[RegionArea]
    holdMap: List[HoldCell]


def save_json(map_data: MapData, output_path: str) -> None:
    """
    Serializes a MapData object to a JSON file.

    Args:
        map_data: The MapData object to serialize.
        output_path: The path to the output .json file.
    """
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(asdict(map_data), f, indent=2)


def load_json(input_path: str) -> MapData:
    """
    Deserializes a JSON file into a MapData object.

    Args:
        input_path: The path to the input .json file.

    Returns:
        A MapData object representing the content of the JSON file.
    """
    with open(input_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    regions = []
    for region_data in data.get("regions", []):
        if region_data.get("bounds"):
            region_data["bounds"] = BoundingBox(**region_data["bounds"])
        regions.append(RegionArea(**region_data))

    hold_map = [HoldCell(**h) for h in data.get("holdMap", [])]
    return MapData(
        rmapVersion=data["rmapVersion"],
        meta=Meta(**data["meta"]),
        regions=regions,
        holdMap=hold_map,
    )
