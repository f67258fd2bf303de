# --- rmap_lib/errors.py ---
from typing import Dict, List


class RegionMapError(Exception):
    """Base class for every error raised by the region map pipeline."""

    pass


class ValidationError(RegionMapError):
    """Raised when two or more configured regions share a color or a map name."""

    def __init__(self, message: str, color_conflicts: Dict = None, name_conflicts: Dict = None):
        super().__init__(message)
        self.color_conflicts: Dict[tuple, List] = color_conflicts or {}
        self.name_conflicts: Dict[str, List] = name_conflicts or {}


class InvalidInput(RegionMapError, ValueError):
    """Raised for out-of-range thresholds, bad channel counts and degenerate ranges."""

    pass


class NotFound(RegionMapError, LookupError):
    """Raised when a region's cells leave a gap along the Y axis."""

    pass


class PartitionError(RegionMapError):
    """Raised when the image cannot be divided into a single cell."""

    pass


class ConfigError(RegionMapError):
    """Raised for unusable region INI files or command-line values."""

    pass
