import pytest
import requests

from worldview.models import AcquisitionResult, SourceLabel, TrackedEntity


class FakeResponse:
    def __init__(self, payload=None, status=200):
        self.payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload


class FakeSession:
    """Replays queued responses (or raises queued exceptions) in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


def state(icao="abc123", callsign="UAL123 ", country="United States", lon=-97.0, lat=38.5,
          alt=11000.0, on_ground=False, velocity=230.0, track=90.0):
    return [icao, callsign, country, 0, 0, lon, lat, alt, on_ground, velocity, track]


def flight(id="abc123", lat=38.5, lon=-97.0, callsign="UAL123", heading=90.0):
    return TrackedEntity(id=id, callsign=callsign, country="United States", lat=lat, lon=lon,
                         altitude_m=11000, speed_kts=450, heading_deg=heading)


class StubTier:
    def __init__(self, label, flights=None, error=None, log=None):
        self.label = label
        self.flights = flights
        self.error = error
        self.log = log if log is not None else []

    def fetch(self, bbox):
        self.log.append(self.label)
        if self.error is not None:
            raise self.error
        return list(self.flights)


class RecordingPipeline:
    """Pipeline stand-in that answers with one flight at the centre of the requested box."""

    def __init__(self):
        self.calls = []

    def acquire(self, bbox):
        self.calls.append(bbox)
        lat = (bbox.min_lat + bbox.max_lat) / 2
        lon = (bbox.min_lon + bbox.max_lon) / 2
        return AcquisitionResult(entities=(flight(id=f"at-{lat:.1f}-{lon:.1f}", lat=lat, lon=lon),),
                                 total_count=1, source=SourceLabel.PRIMARY)


@pytest.fixture
def make_state():
    return state


@pytest.fixture
def make_flight():
    return flight


@pytest.fixture
def recording_pipeline():
    return RecordingPipeline()
