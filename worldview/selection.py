import logging
from enum import Enum

from geopy.distance import geodesic

logger = logging.getLogger(__name__)


class LockState(Enum):
    UNLOCKED = "UNLOCKED"
    LOCKED = "LOCKED"


class SelectionMachine:
    """Holds at most one locked entity."""

    def __init__(self):
        self.tracking_locked = False
        self.locked_entity = None

    @property
    def state(self):
        return LockState.LOCKED if self.tracking_locked else LockState.UNLOCKED

    @property
    def locked(self):
        return self.tracking_locked

    @property
    def entity(self):
        return self.locked_entity

    def select(self, entity):
        if entity is None:
            raise ValueError("cannot lock onto None, use release()")
        if self.tracking_locked and self.locked_entity is not entity:
            logger.debug("re-lock %s -> %s", self.locked_entity.id, entity.id)
        self.tracking_locked = True
        self.locked_entity = entity

    def release(self):
        if self.tracking_locked:
            logger.debug("release lock on %s", self.locked_entity.id)
        self.tracking_locked = False
        self.locked_entity = None


def nearest_entity(entities, lat, lon):
    """entity with the shortest geodesic distance to (lat, lon), or None"""
    best, best_km = None, None
    for entity in entities:
        km = geodesic((lat, lon), entity.position).km
        if best_km is None or km < best_km:
            best, best_km = entity, km
    return best
