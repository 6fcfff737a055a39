from worldview.models import BoundingBox, ProjectedEntity, check_bbox

FOCUS_HALF_LON = 0.5
FOCUS_HALF_LAT = 0.3


def _percent(lat, lon, box):
    x = (lon - box.min_lon) / box.lon_span * 100
    y = (box.max_lat - lat) / box.lat_span * 100
    return x, y


def to_screen(lat, lon, bbox):
    """Percent offsets (x, y) of a point within bbox. North is y = 0."""
    return _percent(lat, lon, check_bbox(bbox))


def project(entities, bbox):
    """Project entities into bbox, dropping any that fall outside it on either axis."""
    box = check_bbox(bbox)
    visible = []
    for entity in entities:
        x, y = _percent(*entity.position, box)
        if 0 <= x <= 100 and 0 <= y <= 100:
            visible.append(ProjectedEntity(entity, x, y))
    return visible


def focus_box(entity):
    """small box centred on a locked entity"""
    lat, lon = entity.position
    return check_bbox(BoundingBox(
        lon - FOCUS_HALF_LON,
        lat - FOCUS_HALF_LAT,
        lon + FOCUS_HALF_LON,
        lat + FOCUS_HALF_LAT,
    ))
