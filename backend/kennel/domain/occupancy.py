from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Hashable, Iterable, Optional

from ..models import ACTIVE_STATUSES, Reservation, ReservationStatus
from .calendar import iter_days

logger = logging.getLogger(__name__)


class OccupancyMap(Counter):
    """Per-day count of capacity-consuming reservations."""

    def count(self, day: date) -> int:
        return self.get(day, 0)


def build_occupancy_map(
    reservations: Iterable[Reservation],
    *,
    active_statuses: Iterable[ReservationStatus] = ACTIVE_STATUSES,
    exclude_id: Optional[str] = None,
) -> OccupancyMap:
    """
    Count, for every calendar day, the reservations whose inclusive
    [check_in, check_out] covers it. Only statuses in `active_statuses`
    occupy a kennel; `exclude_id` drops one reservation (the one being edited).
    """
    statuses = frozenset(active_statuses)
    occupancy = OccupancyMap()
    for reservation in reservations:
        if reservation.status not in statuses:
            continue
        if exclude_id is not None and reservation.id == exclude_id:
            continue
        check_in, check_out = reservation.check_in, reservation.check_out
        if check_in is None or check_out is None or check_in > check_out:
            logger.warning("reservation %s has no valid date range, skipping", reservation.id)
            continue
        for day in iter_days(check_in, check_out):
            occupancy[day] += 1
    return occupancy


class OccupancyCache:
    """
    Memoizes occupancy maps for one snapshot version. Any lookup with a
    different version drops every cached map.
    """

    def __init__(self) -> None:
        self._version: Optional[Hashable] = None
        self._maps: dict[tuple[frozenset[ReservationStatus], Optional[str]], OccupancyMap] = {}

    def get(
        self,
        version: Hashable,
        reservations: Iterable[Reservation],
        *,
        active_statuses: Iterable[ReservationStatus] = ACTIVE_STATUSES,
        exclude_id: Optional[str] = None,
    ) -> OccupancyMap:
        if version != self._version:
            self._maps.clear()
            self._version = version
        key = (frozenset(active_statuses), exclude_id)
        cached = self._maps.get(key)
        if cached is None:
            cached = build_occupancy_map(reservations, active_statuses=key[0], exclude_id=exclude_id)
            self._maps[key] = cached
        # Callers get a copy so the cached map cannot be mutated.
        return OccupancyMap(cached)

    def invalidate(self) -> None:
        self._maps.clear()
        self._version = None
