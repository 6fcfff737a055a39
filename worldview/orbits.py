"""
Closed-form satellite ground positions.

Each catalog entry circles the globe once per period of its orbit class.
Longitude sweeps linearly, latitude oscillates with the inclination as
amplitude. This is a display approximation, not a propagator.
"""
import numpy as np

from worldview.models import OrbitClass, SatelliteEntity

GOLDEN_ANGLE_DEG = 137.5
MAX_ABS_LAT = 85.0

# (name, norad id, orbit class, inclination deg, altitude km)
CATALOG = (
    ("ISS (ZARYA)", 25544, OrbitClass.LEO, 51.64, 420),
    ("HST", 20580, OrbitClass.LEO, 28.47, 540),
    ("CSS (TIANHE)", 48274, OrbitClass.LEO, 41.47, 390),
    ("NOAA 19", 33591, OrbitClass.LEO, 99.19, 870),
    ("METEOR-M 2", 40069, OrbitClass.LEO, 98.57, 820),
    ("TERRA", 25994, OrbitClass.LEO, 98.21, 705),
    ("SENTINEL-2A", 40697, OrbitClass.LEO, 98.57, 786),
    ("STARLINK-1007", 44713, OrbitClass.LEO, 53.05, 550),
    ("GPS BIIR-2 (PRN 13)", 24876, OrbitClass.MEO, 55.0, 20200),
    ("GSAT0203 (GALILEO 7)", 40544, OrbitClass.MEO, 56.0, 23222),
    ("COSMOS 2425 (GLONASS)", 29672, OrbitClass.MEO, 64.8, 19100),
    ("GOES 16", 41866, OrbitClass.GEO, 0.08, 35786),
    ("HIMAWARI-9", 41836, OrbitClass.GEO, 0.03, 35786),
    ("METEOSAT-11", 40732, OrbitClass.GEO, 0.9, 35786),
)


def positions_at(catalog, timestamp_ms):
    """Return SatelliteEntity records for every catalog entry at timestamp_ms (epoch millis)."""
    if not catalog:
        return []

    elapsed = timestamp_ms / 1000.0
    index = np.arange(len(catalog), dtype=float)
    phase = (index * GOLDEN_ANGLE_DEG) % 360.0
    period = np.array([entry[2].period_s for entry in catalog], dtype=float)
    inclination = np.array([entry[3] for entry in catalog], dtype=float)

    angle = (phase + elapsed * (360.0 / period)) % 360.0
    lons = angle - 180.0
    lats = np.clip(inclination * np.sin(np.radians(angle)), -MAX_ABS_LAT, MAX_ABS_LAT)

    sats = []
    for i, (name, norad_id, orbit_class, incl, alt_km) in enumerate(catalog):
        sats.append(SatelliteEntity(
            id=f"sat-{norad_id}",
            name=name,
            norad_id=norad_id,
            orbit_class=orbit_class,
            inclination_deg=incl,
            altitude_km=alt_km,
            lat=float(lats[i]),
            lon=float(lons[i]),
        ))
    return sats
