import numpy as np

from worldview.models import TrackedEntity, check_bbox

CALLSIGN_PREFIXES = (
    "UAL", "DAL", "AAL", "SWA", "BAW", "DLH", "AFR", "KLM",
    "RYR", "EZY", "UAE", "QTR", "SIA", "JAL", "ANA", "CPA",
)
COUNTRIES = (
    "United States", "United Kingdom", "Germany", "France", "Netherlands",
    "Ireland", "United Arab Emirates", "Qatar", "Singapore", "Japan",
    "China", "Canada",
)

ALTITUDE_RANGE_M = (5000, 16000)
SPEED_RANGE_KTS = (300, 550)


def traffic_density(bbox):
    """plausible aircraft count for a box of this size"""
    span = check_bbox(bbox).span
    if span > 100:
        return 300
    if span > 30:
        return 100
    return 30


def generate(bbox, seed=None, rng=None):
    """Generate plausible airborne flights inside bbox. Deterministic when seed (or a seeded rng) is given."""
    box = check_bbox(bbox)
    if rng is None:
        rng = np.random.default_rng(seed)
    n = traffic_density(box)

    lats = rng.uniform(box.min_lat, box.max_lat, n)
    lons = rng.uniform(box.min_lon, box.max_lon, n)
    alts = rng.uniform(*ALTITUDE_RANGE_M, n)
    speeds = rng.uniform(*SPEED_RANGE_KTS, n)
    headings = rng.uniform(0.0, 360.0, n)
    prefixes = rng.integers(0, len(CALLSIGN_PREFIXES), n)
    suffixes = rng.integers(100, 10000, n)
    countries = rng.integers(0, len(COUNTRIES), n)

    flights = []
    for i in range(n):
        flights.append(TrackedEntity(
            id=f"{0xA00000 + i:06x}",
            callsign=f"{CALLSIGN_PREFIXES[prefixes[i]]}{suffixes[i]}",
            country=COUNTRIES[countries[i]],
            lat=float(lats[i]),
            lon=float(lons[i]),
            altitude_m=round(float(alts[i])),
            speed_kts=round(float(speeds[i])),
            heading_deg=float(headings[i]) % 360.0,
        ))
    return flights
