from datetime import date
from typing import Optional

from ..domain.availability import AvailabilityResult, check_availability
from ..domain.occupancy import OccupancyCache
from ..domain.repositories import ReservationRepository
from ..domain.stats import DashboardStats, dashboard_stats
from ..domain.waitlist import DEFAULT_CONFLICT_DISPLAY_LIMIT, WaitlistMatch, match_waitlist


async def check_range(
    res_repo: ReservationRepository,
    *,
    check_in: date,
    check_out: date,
    max_capacity: int,
    exclude_id: Optional[str] = None,
    cache: Optional[OccupancyCache] = None,
) -> AvailabilityResult:
    reservations = await res_repo.list_all()
    occupancy = None
    if cache is not None:
        occupancy = cache.get(await res_repo.version(), reservations, exclude_id=exclude_id)
    return check_availability(
        check_in,
        check_out,
        reservations,
        max_capacity,
        exclude_id,
        occupancy=occupancy,
    )


async def waitlist_report(
    res_repo: ReservationRepository,
    *,
    max_capacity: int,
    today: Optional[date] = None,
    conflict_display_limit: int = DEFAULT_CONFLICT_DISPLAY_LIMIT,
) -> list[WaitlistMatch]:
    reservations = await res_repo.list_all()
    return match_waitlist(
        reservations,
        max_capacity,
        today=today,
        conflict_display_limit=conflict_display_limit,
    )


async def dashboard(res_repo: ReservationRepository, *, today: date) -> DashboardStats:
    return dashboard_stats(await res_repo.list_all(), today)
