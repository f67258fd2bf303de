# --- rmap_lib/config.py ---
import configparser
import logging
import os
import re
from typing import List, Sequence, Tuple

from rmap_lib.errors import ConfigError
from rmap_lib.schema import DEFAULT_PRIORITY, RGB, Region

log = logging.getLogger("rmap.config")

DEFAULT_CONFIG_NAME = "regions.ini"


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    # Keys such as 'mapName' are case-sensitive.
    parser.optionxform = str
    return parser


def default_map_name(editor_id: str) -> str:
    """Splits a CamelCase editor ID into words: 'WhiterunHold' -> 'Whiterun Hold'."""
    return re.sub(r"([A-Z])", r" \1", editor_id).strip()


class RegionConfig:
    """Reads the region INI files and turns their sections into Region objects."""

    def __init__(self, paths: Sequence[str] = ()):
        self.parser = _new_parser()
        self.paths: List[str] = []
        for path in paths:
            self.read(path)

    def read(self, path: str):
        """Merges an INI file into the configuration; later files win."""
        if not os.path.isfile(path):
            raise ConfigError(f"Filepath '{path}' doesn't exist!")
        log.info("Reading region config at '%s'.", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                self.parser.read_file(f, source=path)
        except configparser.Error as e:
            raise ConfigError(f"Failed to parse region config '{path}': {e}") from e
        self.paths.append(path)

    def empty(self) -> bool:
        return not self.parser.sections()

    def get_regions(self, default_priority: int = DEFAULT_PRIORITY) -> List[Region]:
        """
        Builds the region list, one region per INI section.

        Sections without a usable color are skipped with a logged message.
        Region IDs are assigned from their position in the returned list.
        """
        regions: List[Region] = []
        for edid in self.parser.sections():
            sect = self.parser[edid]
            hexstr = sect.get("color")
            if hexstr is None:
                log.warning("Skipping region '%s' because it doesn't specify a color!", edid)
                continue
            try:
                color = RGB.from_hex(hexstr)
            except ValueError:
                log.error(
                    "Skipping region '%s' because '%s' isn't a valid 3-channel "
                    "hexadecimal color value!",
                    edid,
                    hexstr,
                )
                continue

            try:
                priority = sect.getint("priority", fallback=default_priority)
            except ValueError as e:
                raise ConfigError(f"Region '{edid}' has an invalid priority: {e}") from e

            regions.append(
                Region(
                    id=len(regions),
                    editorID=edid,
                    mapName=sect.get("mapName", default_map_name(edid)),
                    color=color,
                    priority=priority,
                )
            )
            log.debug("Loaded region '%s' (%s).", edid, color.hex)
        return regions

    def write(self, path: str) -> bool:
        """Writes the merged configuration back out, returning False on I/O failure."""
        try:
            with open(path, "w", encoding="utf-8") as f:
                self.parser.write(f)
        except IOError as e:
            log.error("Failed to write region data to '%s': %s", path, e)
            return False
        return True


def load_regions(paths: Sequence[str]) -> Tuple[RegionConfig, List[Region]]:
    """
    Loads the region config from `paths`, falling back to ./regions.ini.

    Raises:
        ConfigError: if no file yields a single valid region.
    """
    paths = list(paths)
    if not paths and os.path.isfile(DEFAULT_CONFIG_NAME):
        paths = [DEFAULT_CONFIG_NAME]
    config = RegionConfig(paths)
    if config.empty():
        raise ConfigError("Failed to retrieve any valid data from the provided INI config files!")
    regions = config.get_regions()
    if not regions:
        raise ConfigError("The region config doesn't define any region with a valid color!")
    return config, regions


def parse_dimensions(s: str, separators: str = ":,") -> Tuple[int, int]:
    """Parses a 'X:Y' (or 'X,Y') string into a pair of integers."""
    parts = re.split(f"[{re.escape(separators)}]", s.strip(), maxsplit=1)
    if len(parts) == 2 and all(p.isdecimal() for p in parts):
        return int(parts[0]), int(parts[1])
    raise ConfigError(f"Cannot parse string '{s}' into a valid pair of integrals!")


def parse_threshold(s: str) -> float:
    """Converts a whole percentage ('0' - '100') into a fraction."""
    if not s.isdecimal():
        raise ConfigError(
            f"Invalid threshold value '{s}' contains invalid characters! (Only digits are allowed)"
        )
    value = int(s)
    if value > 100:
        raise ConfigError(f"Invalid threshold value '{s}' is out-of-range: ( 0 - 100 )!")
    return value / 100.0
