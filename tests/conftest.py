import numpy as np
import pytest

from rmap_lib.schema import RGB, Region

RED = RGB(255, 0, 0)
GREEN = RGB(0, 255, 0)
BLUE = RGB(0, 0, 255)


def paint(img, x, y, w, h, rgb):
    """Fills a pixel rectangle of a BGR image with an RGB color."""
    img[y : y + h, x : x + w] = (rgb.b, rgb.g, rgb.r)
    return img


def blank(width, height):
    return np.zeros((height, width, 3), dtype=np.uint8)


@pytest.fixture
def region_a():
    return Region(id=0, editorID="RegionA", mapName="Region A", color=RED)


@pytest.fixture
def region_b():
    return Region(id=1, editorID="RegionB", mapName="Region B", color=GREEN)


@pytest.fixture
def regions(region_a, region_b):
    return [region_a, region_b]
