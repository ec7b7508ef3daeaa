from functools import lru_cache

from .domain.occupancy import OccupancyCache
from .infrastructure.repositories import InMemoryReservationRepository


@lru_cache
def _store() -> InMemoryReservationRepository:
    return InMemoryReservationRepository()


@lru_cache
def _occupancy_cache() -> OccupancyCache:
    return OccupancyCache()


async def get_reservation_repo() -> InMemoryReservationRepository:
    return _store()


async def get_occupancy_cache() -> OccupancyCache:
    return _occupancy_cache()

