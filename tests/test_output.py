import os

import pytest

from rmap_lib import schema
from rmap_lib.errors import NotFound
from rmap_lib.output import build_map_data, format_map_text, write_outputs
from rmap_lib.schema import HoldEntry, ScanResult


@pytest.fixture
def scan_result(region_a, region_b):
    square = [(x, y) for y in range(3) for x in range(3)]
    return ScanResult(
        region_stats={region_b: [(5, 0)], region_a: square},
        hold_map=[
            HoldEntry(cell=(0, 0), regions=[region_a]),
            HoldEntry(cell=(5, 0), regions=[region_a, region_b]),
        ],
        cells_processed=12,
        columns=4,
        rows=3,
        cell_size=(16, 16),
        threshold=0.25,
    )


def test_map_text_layout(scan_result):
    text = format_map_text(scan_result)

    assert text == (
        "[RegionAreas]\n"
        "RegionA = [(-1,-1), (-1,3), (3,3), (3,-1)]\n"
        "RegionB = [(4,1), (6,-1)]\n"
        "\n"
        "[HoldMap]\n"
        '(0,0) = [ "RegionA" ]\n'
        '(5,0) = [ "RegionA", "RegionB" ]\n'
    )


def test_map_data_model(scan_result):
    map_data = build_map_data(scan_result, "skyrim.png")

    assert map_data.meta.sourceImage == "skyrim.png"
    assert map_data.meta.cellSize == [16, 16]
    assert [r.editorID for r in map_data.regions] == ["RegionA", "RegionB"]
    region_a = map_data.regions[0]
    assert region_a.color == "ff0000"
    assert region_a.bounds == schema.BoundingBox(minX=-1, minY=-1, maxX=3, maxY=3)
    assert map_data.regions[1].bounds is None
    assert map_data.holdMap[1] == schema.HoldCell(cell=[5, 0], regions=["RegionA", "RegionB"])


def test_write_outputs(scan_result, tmp_path):
    paths = write_outputs(scan_result, str(tmp_path), "tamriel", "skyrim.png")

    assert paths["map"] == os.path.join(str(tmp_path), "tamriel.map.txt")
    with open(paths["map"], encoding="utf-8") as f:
        assert f.read() == format_map_text(scan_result)
    assert schema.load_json(paths["json"]) == build_map_data(scan_result, "skyrim.png")


def test_region_with_gap_aborts_export(scan_result, region_b, tmp_path):
    scan_result.region_stats[region_b] = [(5, 0), (5, 2)]

    with pytest.raises(NotFound):
        write_outputs(scan_result, str(tmp_path), "tamriel", "skyrim.png")

    assert os.listdir(tmp_path) == []
