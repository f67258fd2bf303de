import pytest

from rmap_lib.config import (
    RegionConfig,
    default_map_name,
    load_regions,
    parse_dimensions,
    parse_threshold,
)
from rmap_lib.errors import ConfigError
from rmap_lib.schema import DEFAULT_PRIORITY, RGB

REGIONS_INI = """\
[WhiterunHold]
color = ff0000

[TheRift]
color = #00FF00
mapName = The Rift
priority = 3

[NoColor]
mapName = Nothing

[BadColor]
color = 12345z

[Falkreath]
color = 0000ff
"""


@pytest.fixture
def ini_path(tmp_path):
    path = tmp_path / "regions.ini"
    path.write_text(REGIONS_INI, encoding="utf-8")
    return str(path)


def test_regions_are_read_in_section_order(ini_path):
    regions = RegionConfig([ini_path]).get_regions()

    assert [r.editorID for r in regions] == ["WhiterunHold", "TheRift", "Falkreath"]
    assert [r.id for r in regions] == [0, 1, 2]
    assert regions[0].mapName == "Whiterun Hold"
    assert regions[0].priority == DEFAULT_PRIORITY
    assert regions[1].color == RGB(0, 255, 0)
    assert regions[1].mapName == "The Rift"
    assert regions[1].priority == 3


def test_skipped_sections_are_logged(ini_path, caplog):
    RegionConfig([ini_path]).get_regions()

    assert "'NoColor' because it doesn't specify a color" in caplog.text
    assert "'BadColor' because '12345z'" in caplog.text


def test_later_files_override_earlier_ones(ini_path, tmp_path):
    override = tmp_path / "override.ini"
    override.write_text("[Falkreath]\ncolor = 010203\n", encoding="utf-8")

    regions = RegionConfig([ini_path, str(override)]).get_regions()

    assert regions[-1].color == RGB(1, 2, 3)


def test_invalid_priority(tmp_path):
    path = tmp_path / "bad.ini"
    path.write_text("[A]\ncolor = 000001\npriority = high\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        RegionConfig([str(path)]).get_regions()


def test_missing_file():
    with pytest.raises(ConfigError):
        RegionConfig(["/nonexistent/regions.ini"])


def test_load_regions_requires_data(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ConfigError):
        load_regions([])

    (tmp_path / "regions.ini").write_text("[A]\nmapName = x\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_regions([])

    (tmp_path / "regions.ini").write_text("[A]\ncolor = 000001\n", encoding="utf-8")
    _, regions = load_regions([])
    assert [r.editorID for r in regions] == ["A"]


def test_write_round_trip(ini_path, tmp_path):
    out = tmp_path / "out.region.txt"
    config = RegionConfig([ini_path])

    assert config.write(str(out))
    assert RegionConfig([str(out)]).get_regions() == config.get_regions()


def test_default_map_name():
    assert default_map_name("WhiterunHold") == "Whiterun Hold"
    assert default_map_name("pale") == "pale"


@pytest.mark.parametrize("s, expected", [("16:16", (16, 16)), ("8,4", (8, 4)), (" 3:5 ", (3, 5))])
def test_parse_dimensions(s, expected):
    assert parse_dimensions(s) == expected


@pytest.mark.parametrize("s", ["16", "16x16", "a:b", "-1:4", "4:"])
def test_parse_dimensions_rejects(s):
    with pytest.raises(ConfigError):
        parse_dimensions(s)


def test_parse_threshold():
    assert parse_threshold("0") == 0.0
    assert parse_threshold("25") == pytest.approx(0.25)
    assert parse_threshold("100") == 1.0
    for bad in ("0.5", "-3", "101", "half"):
        with pytest.raises(ConfigError):
            parse_threshold(bad)
