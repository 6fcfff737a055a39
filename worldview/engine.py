"""
Orchestrator for the tracking engine.

Owns the active region, the active layer and the selection, and is the
only writer of those. Acquisition cycles are tagged with a generation
number when they start; a result is applied only if no region change
happened in between.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

from worldview import config
from worldview.acquisition import default_pipeline
from worldview.models import AcquisitionResult, BoundingBox, MapLayer, Region
from worldview.orbits import CATALOG, positions_at
from worldview.projection import focus_box, project
from worldview.regions import DEFAULT_LAYER, DEFAULT_REGION, get_layer, get_region
from worldview.selection import SelectionMachine, nearest_entity

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs fn every interval seconds on a daemon thread until cancelled."""

    def __init__(self, interval, fn, name):
        self.interval = interval
        self.fn = fn
        self.name = name
        self._stop = threading.Event()
        self._thread = None

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()

    def _run(self):
        while not self._stop.is_set():
            try:
                self.fn()
            except Exception:
                logger.exception("%s tick failed", self.name)
            self._stop.wait(self.interval)

    def cancel(self, timeout=1.0):
        self._stop.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        self._thread = None


@dataclass(frozen=True)
class AcquisitionTicket:
    generation: int
    bbox: BoundingBox


@dataclass(frozen=True)
class ViewState:
    region: Region
    layer: MapLayer
    mode: str  # "overview" or "focus"
    bbox: BoundingBox
    entities: list
    locked_entity: object = None
    source: Optional[str] = None
    total_count: int = 0


class TrackingEngine:
    def __init__(self, pipeline=None, catalog=CATALOG, region_id=DEFAULT_REGION, layer_id=DEFAULT_LAYER,
                 background=True, clock=time.time, refresh_interval=None, orbit_interval=None):
        self.pipeline = pipeline or default_pipeline()
        self.catalog = catalog
        self.background = background
        self.clock = clock
        self.active_region = get_region(region_id) or get_region(DEFAULT_REGION)
        self.active_layer = get_layer(layer_id) or get_layer(DEFAULT_LAYER)
        self.selection = SelectionMachine()
        self.generation = 0
        self.result: Optional[AcquisitionResult] = None
        self.satellites = []
        self._lock = threading.Lock()
        self._refresh_task = PeriodicTask(
            config.refresh_interval if refresh_interval is None else refresh_interval,
            lambda: self.refresh(background=False), "acquisition")
        self._orbit_task = PeriodicTask(
            config.orbit_interval if orbit_interval is None else orbit_interval,
            self.tick_orbits, "orbits")

    # -- events

    def select_region(self, region_id):
        """Swap the active region. Clears the lock and re-scopes acquisition. Unknown ids are ignored."""
        region = get_region(region_id)
        if region is None:
            logger.warning("unknown region %r ignored", region_id)
            return False

        self.selection.release()
        if region == self.active_region:
            return True
        with self._lock:
            self.generation += 1
            self.active_region = region
            self.result = None
        logger.info("region -> %s", region.label)
        self.refresh()
        return True

    def select_layer(self, layer_id):
        layer = get_layer(layer_id)
        if layer is None:
            logger.warning("unknown layer %r ignored", layer_id)
            return False
        self.selection.release()
        self.active_layer = layer
        logger.info("layer -> %s", layer.label)
        return True

    def select_entity(self, entity):
        self.selection.select(entity)

    def lock_nearest(self, lat=None, lon=None):
        """Lock the visible entity closest to (lat, lon), defaulting to the region center."""
        if lat is None or lon is None:
            lat, lon = self.active_region.center
        candidates = [p.entity for p in project(self._layer_entities(), self.active_region.bbox)]
        entity = nearest_entity(candidates, lat, lon)
        if entity is not None:
            self.selection.select(entity)
        return entity

    def release(self):
        self.selection.release()

    # -- acquisition

    def begin_acquisition(self):
        with self._lock:
            return AcquisitionTicket(self.generation, self.active_region.bbox)

    def complete_acquisition(self, ticket, result):
        """Apply result if ticket is still current. Returns whether it was applied."""
        with self._lock:
            if ticket.generation != self.generation:
                logger.debug("discarding stale result for %s (gen %d, now %d)",
                             tuple(ticket.bbox), ticket.generation, self.generation)
                return False
            self.result = result
        return True

    def _run_acquisition(self, ticket):
        result = self.pipeline.acquire(ticket.bbox)
        self.complete_acquisition(ticket, result)
        return result

    def refresh(self, background=None):
        """Start one acquisition cycle for the active region."""
        if background is None:
            background = self.background
        ticket = self.begin_acquisition()
        if background:
            threading.Thread(target=self._run_acquisition, args=(ticket,), daemon=True).start()
            return ticket
        self._run_acquisition(ticket)
        return ticket

    # -- orbits

    def tick_orbits(self, timestamp_ms=None):
        if timestamp_ms is None:
            timestamp_ms = self.clock() * 1000
        self.satellites = positions_at(self.catalog, timestamp_ms)
        return self.satellites

    # -- output

    def _layer_entities(self):
        if self.active_layer.id == "flights":
            return list(self.result.entities) if self.result else []
        if self.active_layer.id == "satellites":
            return list(self.satellites)
        return []

    def _fresh(self, entity):
        for candidate in self._layer_entities():
            if candidate.id == entity.id:
                return candidate
        return entity

    def view(self):
        region, layer, result = self.active_region, self.active_layer, self.result
        source = result.source.value if result else None
        total = result.total_count if result else 0

        if self.selection.locked:
            entity = self._fresh(self.selection.entity)
            box = focus_box(entity)
            return ViewState(region, layer, "focus", box, project([entity], box),
                             locked_entity=entity, source=source, total_count=total)

        return ViewState(region, layer, "overview", region.bbox,
                         project(self._layer_entities(), region.bbox), source=source, total_count=total)

    def ticker(self, n=6):
        flights = self.result.entities if self.result else ()
        return [f.callsign for f in flights[:n] if f.callsign != "N/A"]

    # -- lifecycle

    def start(self):
        self._orbit_task.start()
        self._refresh_task.start()

    def stop(self):
        self._refresh_task.cancel()
        self._orbit_task.cancel()
        # a fetch still running on a cancelled task must not land after stop
        with self._lock:
            self.generation += 1

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()
        return False
