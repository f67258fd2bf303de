# --- rmap_lib/analysis/scanner.py ---
import logging
import time
from typing import Optional, Tuple

import numpy as np

from rmap_lib.errors import InvalidInput, PartitionError
from rmap_lib.schema import HoldEntry, ScanResult
from .color import ColorClassifier
from .coords import CellTransform
from .partition import PartitionStats

log = logging.getLogger("rmap.scan")


class GridScanner:
    """Divides an image into fixed-size cells and records which regions each cell holds."""

    def __init__(
        self,
        classifier: ColorClassifier,
        cell_size: Tuple[int, int],
        threshold: float = 0.0,
        transform: Optional[CellTransform] = None,
    ):
        width, height = cell_size
        if width <= 0 or height <= 0:
            raise InvalidInput(f"Partition size must be positive, got [ {width} x {height} ]")
        if not 0.0 <= threshold <= 1.0:
            raise InvalidInput(
                f"Invalid threshold value '{threshold}' is out-of-range: ( 0.0 - 1.0 )!"
            )
        self.classifier = classifier
        self.cell_size = (int(width), int(height))
        self.threshold = threshold
        self.transform = transform or CellTransform()

    def grid_shape(self, image: np.ndarray) -> Tuple[int, int]:
        """Returns (columns, rows); a partial trailing cell on either axis is dropped."""
        h, w = image.shape[:2]
        return w // self.cell_size[0], h // self.cell_size[1]

    def scan(self, image: np.ndarray) -> ScanResult:
        """
        Scans the image row by row, left to right.

        Once at least one region has been found, the first row without any
        match ends the scan: the rest of the image is assumed to be a blank
        margin. Regions below such a row are not reported.

        Raises:
            PartitionError: if the image is smaller than a single cell.
        """
        cw, ch = self.cell_size
        cols, rows = self.grid_shape(image)
        log.info("Partition Size:  [ %d x %d ] -> %d columns, %d rows", cw, ch, cols, rows)

        result = ScanResult(columns=cols, rows=rows, cell_size=self.cell_size, threshold=self.threshold)
        t_start = time.perf_counter()
        i = 0

        for y in range(rows):
            row_count = 0
            for x in range(cols):
                part = image[y * ch : (y + 1) * ch, x * cw : (x + 1) * cw]
                cell_pos = self.transform.apply((x, y))
                i += 1

                stats = PartitionStats.parse(part, self.classifier)
                if not stats.valid() or stats.empty():
                    continue
                regions = stats.regions_above_threshold(self.threshold)
                if not regions:
                    log.debug("(%d, %d) -> %s: no regions above threshold.", x, y, cell_pos)
                    continue

                log.debug(
                    "(%d, %d) -> %s: %s", x, y, cell_pos, ", ".join(r.editorID for r in regions)
                )
                for region in regions:
                    result.region_stats.setdefault(region, []).append(cell_pos)
                result.hold_map.append(HoldEntry(cell=cell_pos, regions=regions, index=(x, y)))
                row_count += 1

            if row_count == 0 and result.region_stats:
                log.info(
                    "Breaking early because row with index %d didn't contain anything, "
                    "and it is unlikely that anything else exists.",
                    y,
                )
                break

        result.elapsed = time.perf_counter() - t_start
        result.cells_processed = i

        if i == 0:
            raise PartitionError("Failed to partition the image!")

        log.info("Finished processing image partitions after %.2fs", result.elapsed)
        log.info(
            "%d / %d partitions had valid color map data.", len(result.hold_map), i
        )

        for region in self.classifier.regions:
            if region not in result.region_stats:
                result.missing.append(region)
                log.warning(
                    "No cells found for Region:\n"
                    "  Editor ID:  '%s'\n"
                    "  Map Name:   '%s'\n"
                    "  Color:      '%s'",
                    region.editorID,
                    region.mapName,
                    region.color.hex,
                )

        return result
