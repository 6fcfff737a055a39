from worldview.models import BoundingBox, MapLayer, Region

REGIONS = (
    Region("global", "Global", (20.0, 0.0), BoundingBox(-180, -60, 180, 75), zoom_hint=2),
    Region("usa", "USA", (38.5, -97.0), BoundingBox(-130, 24, -65, 50), zoom_hint=4),
    Region("europe", "Europe", (50.0, 10.0), BoundingBox(-10, 35, 30, 60), zoom_hint=4),
    Region("tokyo", "Tokyo", (35.681, 139.767), BoundingBox(139.5, 35.5, 140.0, 35.9), zoom_hint=10),
)

LAYERS = (
    MapLayer("flights", "Live Flights", "OpenSky Network"),
    MapLayer("satellites", "Satellites", "CelesTrak"),
    MapLayer("traffic", "Street Traffic", "OpenStreetMap"),
    MapLayer("weather", "Weather Radar", "Windy"),
)

DEFAULT_REGION = "global"
DEFAULT_LAYER = "flights"

_regions_by_id = {r.id: r for r in REGIONS}
_layers_by_id = {layer.id: layer for layer in LAYERS}


def list_regions():
    return list(REGIONS)


def get_region(region_id):
    """Return the region with this id, or None."""
    return _regions_by_id.get(region_id)


def list_layers():
    return list(LAYERS)


def get_layer(layer_id):
    return _layers_by_id.get(layer_id)
