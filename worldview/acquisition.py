"""
Flight acquisition with graceful degradation.

Tiers are tried strictly in order: the live state endpoint, the same
query through a relay, and finally the synthetic generator, which never
fails. The label on the result always names the tier that produced it.
"""
import logging
from urllib.parse import quote

import numpy as np
import requests

from worldview import config
from worldview.errors import EmptyResultError, TransportError
from worldview.models import AcquisitionResult, SourceLabel, TrackedEntity, check_bbox
from worldview.synthetic import generate

logger = logging.getLogger(__name__)

MS_TO_KNOTS = 1.944
DEFAULT_ALTITUDE_M = 10000

# positions in a raw state vector
IDX_ID, IDX_CALLSIGN, IDX_COUNTRY = 0, 1, 2
IDX_LON, IDX_LAT, IDX_ALT, IDX_ON_GROUND = 5, 6, 7, 8
IDX_VELOCITY, IDX_TRACK = 9, 10


def _field(state, index):
    return state[index] if index < len(state) else None


def decode_state(state):
    """Decode one raw state vector, or return None if it has no position or is on the ground."""
    lon, lat = _field(state, IDX_LON), _field(state, IDX_LAT)
    if lon is None or lat is None or _field(state, IDX_ON_GROUND):
        return None

    raw_callsign = _field(state, IDX_CALLSIGN)
    callsign = (str(raw_callsign) if raw_callsign is not None else "").strip() or "N/A"
    velocity = _field(state, IDX_VELOCITY)
    return TrackedEntity(
        id=str(_field(state, IDX_ID)),
        callsign=callsign,
        country=_field(state, IDX_COUNTRY) or "Unknown",
        lat=float(lat),
        lon=float(lon),
        altitude_m=float(_field(state, IDX_ALT) or DEFAULT_ALTITUDE_M),
        speed_kts=round(velocity * MS_TO_KNOTS) if velocity else 0,
        heading_deg=float(_field(state, IDX_TRACK) or 0) % 360.0,
    )


def decode_states(payload):
    """Decode a states response body into airborne TrackedEntity records."""
    if not isinstance(payload, dict):
        return []
    states = payload.get("states") or []
    flights = []
    for state in states:
        flight = decode_state(state)
        if flight is not None:
            flights.append(flight)
    return flights


def bbox_params(bbox):
    box = check_bbox(bbox)
    return {"lamin": box.min_lat, "lomin": box.min_lon, "lamax": box.max_lat, "lomax": box.max_lon}


class HttpSource:
    """One live tier. With a relay template the query is routed through it."""

    def __init__(self, label, states_url=None, relay=None, session=None, timeout=None):
        self.label = label
        self.states_url = states_url or config.states_url
        self.relay = relay
        self.session = session or requests.Session()
        self.timeout = config.fetch_timeout if timeout is None else timeout

    def build_url(self, bbox):
        url = requests.Request("GET", self.states_url, params=bbox_params(bbox)).prepare().url
        if self.relay:
            url = self.relay.format(url=quote(url, safe=""))
        return url

    def fetch(self, bbox):
        url = self.build_url(bbox)
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            raise TransportError(f"{self.label.value}: {e}") from e
        except ValueError as e:
            raise TransportError(f"{self.label.value}: invalid json ({e})") from e

        try:
            flights = decode_states(payload)
        except (TypeError, ValueError, AttributeError, KeyError, IndexError) as e:
            raise TransportError(f"{self.label.value}: malformed state vectors ({e})") from e
        if not flights:
            raise EmptyResultError(f"{self.label.value}: no airborne entities")
        return flights


class SimulatedSource:
    label = SourceLabel.SIMULATED

    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    def fetch(self, bbox):
        return generate(bbox, rng=self.rng)


class AcquisitionPipeline:
    def __init__(self, tiers, fallback=None, cap=None):
        self.tiers = list(tiers)
        self.fallback = fallback or SimulatedSource()
        self.cap = config.entity_cap if cap is None else cap

    def acquire(self, bbox):
        """Run one acquisition cycle for bbox. Never raises for tier failures."""
        box = check_bbox(bbox)
        for tier in self.tiers:
            try:
                flights = tier.fetch(box)
            except (TransportError, EmptyResultError) as e:
                logger.warning("%s tier failed: %s", tier.label.value, e)
                continue
            return self._result(flights, tier.label)

        logger.warning("live sources unavailable, using simulated traffic for %s", tuple(box))
        return self._result(self.fallback.fetch(box), SourceLabel.SIMULATED)

    def _result(self, flights, label):
        total = len(flights)
        if total > self.cap:
            logger.debug("capping %d entities from %s to %d", total, label.value, self.cap)
        logger.info("acquired %d entities from %s", total, label.value)
        return AcquisitionResult(entities=tuple(flights[:self.cap]), total_count=total, source=label)


def default_pipeline(session=None, seed=None):
    """primary -> proxy -> simulated, built from config"""
    session = session or requests.Session()
    return AcquisitionPipeline(
        tiers=[
            HttpSource(SourceLabel.PRIMARY, session=session),
            HttpSource(SourceLabel.PROXY, relay=config.proxy_url, session=session),
        ],
        fallback=SimulatedSource(seed),
    )
