import importlib

import pytest

from worldview import config
from worldview.errors import ConfigurationError
from worldview.models import BoundingBox, Region
from worldview.regions import DEFAULT_LAYER, DEFAULT_REGION, get_layer, get_region, list_layers, list_regions


def test_catalog():
    assert [r.id for r in list_regions()] == ["global", "usa", "europe", "tokyo"]
    assert [layer.id for layer in list_layers()] == ["flights", "satellites", "traffic", "weather"]
    assert get_region(DEFAULT_REGION).label == "Global"
    assert get_layer(DEFAULT_LAYER).provider == "OpenSky Network"


def test_boxes_are_well_formed():
    for region in list_regions():
        box = region.bbox
        assert box.min_lon < box.max_lon
        assert box.min_lat < box.max_lat
        lat, lon = region.center
        assert box.contains(lat, lon)


def test_unknown_ids():
    assert get_region("atlantis") is None
    assert get_layer("sonar") is None


def test_region_rejects_degenerate_box():
    with pytest.raises(ConfigurationError):
        Region("bad", "Bad", (0, 0), BoundingBox(5, 0, 5, 1))


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("WORLDVIEW_ENTITY_CAP", "42")
    monkeypatch.setenv("WORLDVIEW_FETCH_TIMEOUT", "2.5")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.entity_cap == 42
        assert reloaded.fetch_timeout == 2.5
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_bad_env_value(monkeypatch):
    monkeypatch.setenv("WORLDVIEW_REFRESH_INTERVAL", "soon")
    with pytest.raises(ConfigurationError):
        config._env_float("WORLDVIEW_REFRESH_INTERVAL", 15)
