# --- rmap_lib/output.py ---
import logging
import os
from typing import Dict, List, Optional

from shapely.geometry import Polygon

from rmap_lib import schema
from rmap_lib.analysis.boundary import extract_boundary

log = logging.getLogger("rmap.output")

RMAP_VERSION = "1.0.0"


def compute_outlines(result: schema.ScanResult) -> Dict[schema.Region, List[schema.Point]]:
    """Extracts the boundary of every observed region, ordered by region ID."""
    outlines = {}
    for region in sorted(result.region_stats, key=lambda r: r.id):
        outlines[region] = extract_boundary(result.region_stats[region])
        log.debug(
            "Region '%s': %d cells -> %d outline points.",
            region.editorID,
            len(result.region_stats[region]),
            len(outlines[region]),
        )
    return outlines


def format_point_list(points: List[schema.Point]) -> str:
    return "[" + ", ".join(f"({x},{y})" for x, y in points) + "]"


def format_region_list(regions: List[schema.Region]) -> str:
    return "[ " + ", ".join(f'"{r.editorID}"' for r in regions) + " ]"


def format_map_text(
    result: schema.ScanResult,
    outlines: Optional[Dict[schema.Region, List[schema.Point]]] = None,
) -> str:
    """Renders the '[RegionAreas]' / '[HoldMap]' lookup file contents."""
    if outlines is None:
        outlines = compute_outlines(result)
    lines = ["[RegionAreas]"]
    for region, outline in outlines.items():
        lines.append(f"{region.editorID} = {format_point_list(outline)}")
    lines.append("")
    lines.append("[HoldMap]")
    for entry in result.hold_map:
        x, y = entry.cell
        lines.append(f"({x},{y}) = {format_region_list(entry.regions)}")
    return "\n".join(lines) + "\n"


def outline_bounds(outline: List[schema.Point]) -> Optional[schema.BoundingBox]:
    """Bounding box of a closed outline, or None when it cannot form a polygon."""
    if len(outline) < 3:
        return None
    min_x, min_y, max_x, max_y = Polygon(outline).bounds
    return schema.BoundingBox(minX=min_x, minY=min_y, maxX=max_x, maxY=max_y)


def build_map_data(
    result: schema.ScanResult,
    source_image: str,
    outlines: Optional[Dict[schema.Region, List[schema.Point]]] = None,
) -> schema.MapData:
    """Converts a ScanResult into the serializable MapData model."""
    if outlines is None:
        outlines = compute_outlines(result)
    regions = [
        schema.RegionArea(
            id=region.id,
            editorID=region.editorID,
            mapName=region.mapName,
            color=region.color.hex,
            priority=region.priority,
            cells=[list(p) for p in result.region_stats[region]],
            outline=[list(p) for p in outline],
            bounds=outline_bounds(outline),
        )
        for region, outline in outlines.items()
    ]
    hold_map = [
        schema.HoldCell(cell=list(e.cell), regions=[r.editorID for r in e.regions])
        for e in result.hold_map
    ]
    meta = schema.Meta(
        sourceImage=source_image,
        cellSize=list(result.cell_size),
        threshold=result.threshold,
        columns=result.columns,
        rows=result.rows,
        cellsProcessed=result.cells_processed,
    )
    return schema.MapData(rmapVersion=RMAP_VERSION, meta=meta, regions=regions, holdMap=hold_map)


def write_outputs(
    result: schema.ScanResult, out_dir: str, worldspace: str, source_image: str
) -> Dict[str, str]:
    """
    Writes '<worldspace>.map.txt' and '<worldspace>.json' into `out_dir`.

    Outlines are computed before anything is written, so a region whose cells
    cannot be outlined aborts the export instead of leaving a partial file.
    """
    outlines = compute_outlines(result)
    map_path = os.path.join(out_dir, f"{worldspace}.map.txt")
    json_path = os.path.join(out_dir, f"{worldspace}.json")

    with open(map_path, "w", encoding="utf-8") as f:
        f.write(format_map_text(result, outlines))
    log.info("Successfully saved the lookup matrix to '%s'", map_path)

    schema.save_json(build_map_data(result, source_image, outlines), json_path)
    log.info("Successfully saved map data to '%s'", json_path)
    return {"map": map_path, "json": json_path}
