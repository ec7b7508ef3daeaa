from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config import Settings, get_settings
from ..deps import get_occupancy_cache, get_reservation_repo
from ..domain.errors import InvalidRangeError
from ..domain.occupancy import OccupancyCache
from ..domain.repositories import ReservationRepository
from ..schemas import AvailabilityRead, DashboardRead, ReportRead, WaitlistMatchRead
from ..usecases import availability as availability_usecase
from ..usecases import reports as reports_usecase

router = APIRouter(prefix="", tags=["availability"])


@router.get("/availability", response_model=AvailabilityRead)
async def get_availability(
    check_in: date = Query(..., description="first night (YYYY-MM-DD)"),
    check_out: date = Query(..., description="last day, inclusive (YYYY-MM-DD)"),
    exclude_id: Optional[str] = Query(default=None, description="reservation being edited"),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    cache: OccupancyCache = Depends(get_occupancy_cache),
    settings: Settings = Depends(get_settings),
) -> AvailabilityRead:
    try:
        result = await availability_usecase.check_range(
            res_repo,
            check_in=check_in,
            check_out=check_out,
            max_capacity=settings.max_capacity,
            exclude_id=exclude_id,
            cache=cache,
        )
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    return AvailabilityRead.from_result(check_in=check_in, check_out=check_out, result=result)


@router.get("/waitlist/matches", response_model=List[WaitlistMatchRead])
async def list_waitlist_matches(
    today: Optional[date] = Query(default=None, description="skip stays that ended before this day"),
    fits_only: bool = Query(default=False),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> list[WaitlistMatchRead]:
    matches = await availability_usecase.waitlist_report(
        res_repo,
        max_capacity=settings.max_capacity,
        today=today,
        conflict_display_limit=settings.conflict_display_limit,
    )
    return [WaitlistMatchRead.from_match(match=m) for m in matches if m.fits or not fits_only]


@router.get("/stats/dashboard", response_model=DashboardRead)
async def get_dashboard(
    today: Optional[date] = Query(default=None),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> DashboardRead:
    stats = await availability_usecase.dashboard(res_repo, today=today or date.today())
    return DashboardRead.from_stats(
        hotel_name=settings.hotel_name,
        max_capacity=settings.max_capacity,
        stats=stats,
    )


@router.get("/stats/report", response_model=ReportRead)
async def get_report(
    today: Optional[date] = Query(default=None, description="skip waitlisted stays that ended before this day"),
    top_dogs: int = Query(default=10, ge=1, le=100),
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> ReportRead:
    report = await reports_usecase.build_report(
        res_repo,
        max_capacity=settings.max_capacity,
        today=today,
        top_dogs=top_dogs,
    )
    return ReportRead.from_report(report=report)
