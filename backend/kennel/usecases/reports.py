from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..domain.repositories import ReservationRepository
from ..domain.stats import (
    MonthlyRevenue,
    WaitlistSummary,
    extras_summary,
    revenue_by_dog,
    revenue_by_month,
    waitlist_summary,
)
from ..domain.waitlist import match_waitlist


@dataclass(frozen=True)
class Report:
    monthly: list[MonthlyRevenue]
    top_dogs: list[tuple[str, float]]
    extras_total: float
    waitlist: WaitlistSummary


async def build_report(
    res_repo: ReservationRepository,
    *,
    max_capacity: int,
    today: Optional[date] = None,
    top_dogs: int = 10,
) -> Report:
    """Revenue and waitlist figures, all taken from one store snapshot."""
    reservations = await res_repo.list_all()
    return Report(
        monthly=revenue_by_month(reservations),
        top_dogs=revenue_by_dog(reservations, limit=top_dogs),
        extras_total=extras_summary(reservations),
        waitlist=waitlist_summary(match_waitlist(reservations, max_capacity, today=today)),
    )
