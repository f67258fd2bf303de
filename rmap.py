# --- rmap.py ---
import argparse
import logging
import os
import sys

from rmap_lib import config
from rmap_lib.analysis.analyzer import analyze_image
from rmap_lib.errors import ConfigError, RegionMapError
from rmap_lib.log_utils import setup_logging
from rmap_lib.output import write_outputs


def get_cli_args(argv=None):
    """Configures and parses command-line arguments."""
    p = argparse.ArgumentParser(
        description="Converts a colored region map image into a cell lookup matrix."
    )
    p.add_argument("-i", "--input", required=True, help="Path to the input image.")
    p.add_argument(
        "-c",
        "--config",
        action="append",
        default=[],
        metavar="INI",
        help="Region config file; may be repeated (default: ./regions.ini).",
    )
    p.add_argument(
        "-s",
        "--dim",
        required=True,
        metavar="X:Y",
        help="Dimensions of the partitions that the input image is divided into.",
    )
    p.add_argument(
        "-t",
        "--threshold",
        default="0",
        metavar="PERCENT",
        help="Minimum percentage (0 - 100) of matching pixels for a partition to be "
        "considered part of a region. A region still needs at least 1 pixel.",
    )
    p.add_argument(
        "-o", "--out", default=".", metavar="DIR", help="Directory to export the results to."
    )
    p.add_argument(
        "-w",
        "--worldspace",
        default="worldspace",
        metavar="NAME",
        help="Filename (without extension) of the output files.",
    )
    # Logging arguments
    g_log = p.add_argument_group("Logging & Output")
    g_log.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO logging."
    )
    g_log.add_argument(
        "--save-intermediate",
        metavar="DIR",
        help="Save a debug image of the matched cells to a directory.",
    )
    g_log.add_argument(
        "--color-logs", action="store_true", help="Enable colored logging."
    )
    g_log.add_argument(
        "--log-file", metavar="FILE", help="Redirect log output to a file."
    )
    g_log.add_argument(
        "-d",
        "--debug",
        nargs="?",
        const="all",
        dest="debug_topics",
        metavar="TOPICS",
        help="Enable DEBUG logging (all,main,config,scan,boundary,output).",
    )
    return p.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point for the rmap CLI."""
    args = get_cli_args(argv)
    log_level = logging.INFO if args.verbose else logging.WARNING
    if args.debug_topics:
        log_level = logging.DEBUG

    setup_logging(log_level, args.color_logs, args.debug_topics, args.log_file)
    log = logging.getLogger("rmap.main")

    log.info("--- RMAP CLI Initialized ---")
    log.debug("Arguments received: %s", vars(args))

    try:
        if not os.path.isdir(args.out):
            raise ConfigError(f"Invalid directory name: '{args.out}'")
        if args.save_intermediate:
            try:
                os.makedirs(args.save_intermediate, exist_ok=True)
                log.info("Will save intermediate images to: %s", args.save_intermediate)
            except OSError as e:
                log.error("Could not create intermediate image directory: %s", e)
                args.save_intermediate = None

        region_config, regions = config.load_regions(args.config)
        cell_size = config.parse_dimensions(args.dim)
        threshold = config.parse_threshold(args.threshold)
        log.info("Pixel Threshold:  %.2f / 1.0  ( %d%% )", threshold, round(threshold * 100))

        result = analyze_image(
            args.input,
            regions,
            cell_size,
            threshold,
            save_intermediate_path=args.save_intermediate,
        )

        # The region config goes last: a failed outline must leave no output behind.
        write_outputs(result, args.out, args.worldspace, os.path.basename(args.input))
        region_path = os.path.join(args.out, f"{args.worldspace}.region.txt")
        if region_config.write(region_path):
            log.info("Successfully saved region data to '%s'", region_path)

    except (RegionMapError, FileNotFoundError) as e:
        log.critical("%s", e)
        return 1
    except Exception as e:
        log.critical("An unexpected error occurred during analysis: %s", e, exc_info=True)
        return 1

    log.info("--- Processing complete. ---")
    return 0


if __name__ == "__main__":
    sys.exit(main())
