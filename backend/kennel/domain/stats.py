from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from ..models import ACTIVE_STATUSES, Reservation, ReservationStatus
from .billing import billable_days, extras_total, total_cost
from .occupancy import build_occupancy_map
from .waitlist import WaitlistMatch


@dataclass(frozen=True)
class DashboardStats:
    current_dogs: int
    bookings_next_month: int
    revenue_month: float


@dataclass(frozen=True)
class MonthlyRevenue:
    month: date
    revenue: float
    bookings: int
    days: int


@dataclass(frozen=True)
class WaitlistSummary:
    total: int
    can_confirm_now: int
    potential_revenue: float


def _next_month_bounds(today: date) -> tuple[date, date]:
    first = (today.replace(day=1) + timedelta(days=32)).replace(day=1)
    last = (first + timedelta(days=32)).replace(day=1) - timedelta(days=1)
    return first, last


def dashboard_stats(reservations: Sequence[Reservation], today: date) -> DashboardStats:
    not_cancelled = frozenset(ReservationStatus) - {ReservationStatus.CANCELLED}
    present = build_occupancy_map(reservations, active_statuses=not_cancelled)

    next_first, next_last = _next_month_bounds(today)
    bookings_next_month = sum(
        1 for r in reservations if r.check_in is not None and next_first <= r.check_in <= next_last
    )

    month_start = today.replace(day=1)
    revenue_month = sum(
        total_cost(r)
        for r in reservations
        if r.status in ACTIVE_STATUSES and r.check_in is not None and month_start <= r.check_in <= today
    )
    return DashboardStats(
        current_dogs=present.count(today),
        bookings_next_month=bookings_next_month,
        revenue_month=revenue_month,
    )


def revenue_by_dog(reservations: Iterable[Reservation], limit: int = 10) -> list[tuple[str, float]]:
    totals: dict[str, float] = defaultdict(float)
    for r in reservations:
        if r.status in ACTIVE_STATUSES:
            totals[r.dog_name] += total_cost(r)
    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:limit]


def extras_summary(reservations: Iterable[Reservation]) -> float:
    return sum(extras_total(r) for r in reservations if r.status in ACTIVE_STATUSES)


def revenue_by_month(reservations: Iterable[Reservation]) -> list[MonthlyRevenue]:
    """Active reservations grouped by check-in month, oldest month first."""
    buckets: dict[date, list[Reservation]] = defaultdict(list)
    for r in reservations:
        if r.status in ACTIVE_STATUSES and r.check_in is not None:
            buckets[r.check_in.replace(day=1)].append(r)
    return [
        MonthlyRevenue(
            month=month,
            revenue=sum(total_cost(r) for r in stays),
            bookings=len(stays),
            days=sum(billable_days(r) for r in stays),
        )
        for month, stays in sorted(buckets.items())
    ]


def waitlist_summary(matches: Sequence[WaitlistMatch]) -> WaitlistSummary:
    return WaitlistSummary(
        total=len(matches),
        can_confirm_now=sum(1 for m in matches if m.fits),
        potential_revenue=sum(m.revenue for m in matches),
    )
