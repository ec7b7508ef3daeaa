from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Literal, Optional, Sequence

from ..models import Reservation, ReservationStatus
from .billing import total_cost
from .calendar import iter_days
from .errors import InvalidCapacityError
from .occupancy import OccupancyMap, build_occupancy_map

DEFAULT_CONFLICT_DISPLAY_LIMIT = 3


@dataclass(frozen=True)
class WaitlistMatch:
    reservation: Reservation
    fits: bool
    min_remaining: int
    revenue: float
    conflict_days: tuple[date, ...] = field(default_factory=tuple)
    display_limit: int = DEFAULT_CONFLICT_DISPLAY_LIMIT

    @property
    def displayed_conflicts(self) -> tuple[date, ...]:
        return self.conflict_days[: self.display_limit]

    @property
    def hidden_conflicts(self) -> int:
        return max(len(self.conflict_days) - self.display_limit, 0)


@dataclass(frozen=True)
class GapMatch:
    reservation: Reservation
    revenue: float
    gap_type: Literal["PERFECT", "FIT"] = "PERFECT"


def waitlist_queue(reservations: Iterable[Reservation]) -> list[Reservation]:
    """WAITLIST entries, first created first; equal timestamps fall back to id."""
    queued = [r for r in reservations if r.status == ReservationStatus.WAITLIST]
    return sorted(queued, key=lambda r: (r.created_at, r.id))


def _match_one(
    reservation: Reservation,
    occupancy: OccupancyMap,
    max_capacity: int,
    display_limit: int,
) -> WaitlistMatch:
    revenue = total_cost(reservation)
    if not reservation.has_valid_range:
        return WaitlistMatch(
            reservation=reservation,
            fits=False,
            min_remaining=0,
            revenue=revenue,
            display_limit=display_limit,
        )

    min_remaining = max_capacity
    conflicts: list[date] = []
    for day in iter_days(reservation.check_in, reservation.check_out):  # type: ignore[arg-type]
        remaining = max_capacity - occupancy.count(day)
        min_remaining = min(min_remaining, remaining)
        if remaining <= 0:
            conflicts.append(day)

    return WaitlistMatch(
        reservation=reservation,
        fits=not conflicts,
        min_remaining=max(min_remaining, 0),
        revenue=revenue,
        conflict_days=tuple(conflicts),
        display_limit=display_limit,
    )


def match_waitlist(
    reservations: Sequence[Reservation],
    max_capacity: int,
    *,
    today: Optional[date] = None,
    conflict_display_limit: int = DEFAULT_CONFLICT_DISPLAY_LIMIT,
) -> list[WaitlistMatch]:
    """
    Report, for each waitlisted stay in FIFO order, whether it fits the
    current confirmed occupancy.

    Every entry is checked against the same confirmed snapshot: matching one
    entry does not consume capacity for the next. Two entries that each fit
    alone may still collide with one another; promotions are applied one at a
    time and the report is rebuilt after each. Stays that ended before
    `today` are left out.
    """
    if max_capacity < 1:
        raise InvalidCapacityError("max_capacity must be >= 1")
    occupancy = build_occupancy_map(reservations)
    matches = []
    for reservation in waitlist_queue(reservations):
        if today is not None and reservation.check_out is not None and reservation.check_out < today:
            continue
        matches.append(_match_one(reservation, occupancy, max_capacity, conflict_display_limit))
    return matches


def find_gap_matches(
    reservations: Sequence[Reservation],
    max_capacity: int,
    *,
    today: Optional[date] = None,
) -> list[GapMatch]:
    return [
        GapMatch(reservation=match.reservation, revenue=match.revenue)
        for match in match_waitlist(reservations, max_capacity, today=today)
        if match.fits
    ]
