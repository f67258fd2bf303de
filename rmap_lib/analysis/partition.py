# --- rmap_lib/analysis/partition.py ---
from typing import Dict, Iterator, List, Tuple

import numpy as np

from rmap_lib.errors import InvalidInput
from rmap_lib.schema import RGB, Region
from .color import ColorClassifier


class PartitionStats:
    """Per-region pixel tallies for a single grid cell."""

    def __init__(self, block: np.ndarray = None, classifier: ColorClassifier = None):
        self.width = 0
        self.height = 0
        self.px_count: Dict[Region, int] = {}
        self.is_valid = False
        if block is not None and classifier is not None:
            parsed = PartitionStats.parse(block, classifier)
            self.__dict__.update(parsed.__dict__)

    @staticmethod
    def parse(block: np.ndarray, classifier: ColorClassifier) -> "PartitionStats":
        """
        Tallies every pixel of `block` whose color matches a configured region.

        The block is expected in OpenCV's native BGR channel order. A block with
        a zero dimension yields an invalid, empty result rather than an error.

        Raises:
            InvalidInput: if the block does not have exactly 3 color channels.
        """
        stats = PartitionStats()
        stats.height, stats.width = block.shape[:2]
        if stats.width <= 0 or stats.height <= 0:
            return stats
        stats.is_valid = True

        if block.ndim != 3 or block.shape[2] != 3:
            channels = 1 if block.ndim == 2 else block.shape[2]
            raise InvalidInput(
                f"Loaded image with an incorrect number of color channels! ({channels})"
            )

        # Identical pixels are grouped so each distinct color is looked up once.
        pixels = block.reshape(-1, 3)
        colors, counts = np.unique(pixels, axis=0, return_counts=True)
        tallies: Dict[Region, int] = {}
        for bgr, count in zip(colors, counts):
            region = classifier.lookup(RGB.from_bgr(bgr))
            if region is None:
                continue
            tallies[region] = tallies.get(region, 0) + int(count)

        stats.px_count = {r: tallies[r] for r in sorted(tallies, key=lambda r: r.id)}
        return stats

    @property
    def area(self) -> int:
        return self.width * self.height

    def valid(self) -> bool:
        return self.is_valid

    def empty(self) -> bool:
        """True when no pixel matched a region. Always true for an invalid cell."""
        return not self.px_count

    def contains(self, region: Region) -> bool:
        return region in self.px_count

    def __iter__(self) -> Iterator[Tuple[Region, int]]:
        return iter(self.px_count.items())

    def count(self, region: Region) -> int:
        return self.px_count.get(region, 0)

    def percentage(self, region: Region) -> float:
        """Fraction of the cell's pixels (0.0 - 1.0) that match `region`."""
        if self.area <= 0:
            return 0.0
        return self.count(region) / self.area

    def regions_above_threshold(self, threshold: float = 0.0) -> List[Region]:
        """
        Returns the regions whose pixel fraction is at least `threshold`.

        Raises:
            InvalidInput: if `threshold` lies outside 0.0 - 1.0.
        """
        if not 0.0 <= threshold <= 1.0:
            raise InvalidInput(
                f"Invalid threshold value '{threshold}' is out-of-range: ( 0.0 - 1.0 )!"
            )
        return [r for r in self.px_count if self.percentage(r) >= threshold]

    def all_matched_regions(self) -> List[Region]:
        return list(self.px_count)
