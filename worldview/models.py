from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import NamedTuple, Optional

from worldview.errors import ConfigurationError


class BoundingBox(NamedTuple):
    """(min_lon, min_lat, max_lon, max_lat) in degrees."""
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @property
    def lon_span(self) -> float:
        return self.max_lon - self.min_lon

    @property
    def lat_span(self) -> float:
        return self.max_lat - self.min_lat

    @property
    def span(self) -> float:
        return max(self.lon_span, self.lat_span)

    def contains(self, lat, lon) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


def check_bbox(bbox) -> BoundingBox:
    """Coerce to BoundingBox, raising ConfigurationError on degenerate or inverted boxes."""
    try:
        box = BoundingBox(*(float(v) for v in bbox))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"bounding box must be 4 numbers, got {bbox!r}") from e
    if box.min_lon >= box.max_lon or box.min_lat >= box.max_lat:
        raise ConfigurationError(f"degenerate bounding box {tuple(box)}")
    return box


@dataclass(frozen=True)
class Region:
    id: str
    label: str
    center: tuple[float, float]  # (lat, lon)
    bbox: BoundingBox
    zoom_hint: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "bbox", check_bbox(self.bbox))


@dataclass(frozen=True)
class MapLayer:
    id: str
    label: str
    provider: str


@dataclass(frozen=True)
class TrackedEntity:
    id: str
    callsign: str
    country: str
    lat: float
    lon: float
    altitude_m: float
    speed_kts: float
    heading_deg: float

    @property
    def position(self) -> tuple[float, float]:
        return self.lat, self.lon

    @property
    def flight_level(self) -> int:
        return round(self.altitude_m / 30.48)


class OrbitClass(Enum):
    LEO = 5400
    MEO = 43200
    GEO = 86400

    @property
    def period_s(self) -> int:
        return self.value


@dataclass(frozen=True)
class SatelliteEntity:
    id: str
    name: str
    norad_id: int
    orbit_class: OrbitClass
    inclination_deg: float
    altitude_km: float
    lat: float
    lon: float

    @property
    def position(self) -> tuple[float, float]:
        return self.lat, self.lon


@dataclass(frozen=True)
class ProjectedEntity:
    entity: object
    screen_x: float
    screen_y: float

    @property
    def id(self):
        return self.entity.id


class SourceLabel(Enum):
    PRIMARY = "PRIMARY"
    PROXY = "PROXY"
    SIMULATED = "SIMULATED"


@dataclass(frozen=True)
class AcquisitionResult:
    entities: tuple[TrackedEntity, ...]
    total_count: int
    source: SourceLabel
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
