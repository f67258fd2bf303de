# --- rmap_lib/analysis/analyzer.py ---
import logging
import os
from typing import Optional, Sequence, Tuple

import cv2
import numpy as np

from rmap_lib import schema
from .color import ColorClassifier
from .scanner import GridScanner

log = logging.getLogger("rmap.scan")


def _save_cell_debug_image(
    img: np.ndarray,
    result: schema.ScanResult,
    save_path: str,
    name: str,
):
    """Saves a debug image showing the scanned grid and the matched cells."""
    h, w = img.shape[:2]
    cw, ch = result.cell_size
    overlay = img.copy()
    cv2.rectangle(overlay, (0, 0), (w, h), (0, 0, 0), -1)
    debug_img = cv2.addWeighted(overlay, 0.4, img, 0.6, 0)

    fill = debug_img.copy()
    for entry in result.hold_map:
        gx, gy = entry.index
        x1, y1 = gx * cw, gy * ch
        cv2.rectangle(fill, (x1, y1), (x1 + cw - 1, y1 + ch - 1), entry.regions[0].color.to_bgr(), -1)
    cv2.addWeighted(fill, 0.6, debug_img, 0.4, 0, debug_img)

    grid_color = (255, 255, 0)
    for gx in range(result.columns + 1):
        cv2.line(debug_img, (gx * cw, 0), (gx * cw, result.rows * ch), grid_color, 1)
    for gy in range(result.rows + 1):
        cv2.line(debug_img, (0, gy * ch), (result.columns * cw, gy * ch), grid_color, 1)

    filename = os.path.join(save_path, f"{name}_cells.png")
    cv2.imwrite(filename, debug_img)
    log.info("Saved cell debug image to %s", filename)


def analyze_array(
    img: np.ndarray,
    regions: Sequence[schema.Region],
    cell_size: Tuple[int, int],
    threshold: float = 0.0,
) -> schema.ScanResult:
    """Validates the regions, then scans an already-decoded BGR image."""
    classifier = ColorClassifier(regions)
    log.info("Successfully validated the region config (%d regions).", len(classifier))
    scanner = GridScanner(classifier, cell_size, threshold)
    return scanner.scan(img)


def analyze_image(
    image_path: str,
    regions: Sequence[schema.Region],
    cell_size: Tuple[int, int],
    threshold: float = 0.0,
    save_intermediate_path: Optional[str] = None,
) -> schema.ScanResult:
    """
    Top-level orchestrator: loads the image, then scans it against the
    configured regions.
    """
    log.info("Starting analysis of image: '%s'", image_path)
    img = cv2.imread(image_path, cv2.IMREAD_COLOR)
    if img is None:
        raise FileNotFoundError(f"Could not read image at {image_path}")
    log.info("Successfully loaded image file '%s' [ %d x %d ]", image_path, img.shape[1], img.shape[0])

    result = analyze_array(img, regions, cell_size, threshold)

    if save_intermediate_path:
        name = os.path.splitext(os.path.basename(image_path))[0]
        _save_cell_debug_image(img, result, save_intermediate_path, name)

    return result
