from datetime import date

import pytest
from kennel.domain.occupancy import OccupancyCache
from kennel.infrastructure.repositories import InMemoryReservationRepository
from kennel.models import Reservation, ReservationStatus
from kennel.usecases import availability as uc


def _res(
    res_id: str,
    check_in: str,
    check_out: str,
    status: ReservationStatus = ReservationStatus.CONFIRMED,
) -> Reservation:
    return Reservation(id=res_id, dog_name=res_id, check_in=check_in, check_out=check_out, status=status)


@pytest.mark.asyncio
async def test_check_range_sees_writes_through_cache() -> None:
    repo = InMemoryReservationRepository([_res("a", "2024-01-01", "2024-01-02")])
    cache = OccupancyCache()

    before = await uc.check_range(
        repo, check_in=date(2024, 1, 1), check_out=date(2024, 1, 1), max_capacity=2, cache=cache
    )
    assert before.min_remaining == 1

    await repo.upsert(_res("b", "2024-01-01", "2024-01-01"))
    after = await uc.check_range(
        repo, check_in=date(2024, 1, 1), check_out=date(2024, 1, 1), max_capacity=2, cache=cache
    )
    assert after.available is False
    assert after.min_remaining == 0


@pytest.mark.asyncio
async def test_check_range_with_exclusion() -> None:
    repo = InMemoryReservationRepository([_res("a", "2024-01-01", "2024-01-02")])
    result = await uc.check_range(
        repo, check_in=date(2024, 1, 1), check_out=date(2024, 1, 3), max_capacity=1, exclude_id="a"
    )
    assert result.available is True
    assert result.min_remaining == 1


@pytest.mark.asyncio
async def test_waitlist_report_follows_store_changes() -> None:
    repo = InMemoryReservationRepository(
        [
            _res("A", "2024-01-01", "2024-01-05"),
            _res("B", "2024-01-03", "2024-01-04", ReservationStatus.WAITLIST),
        ]
    )
    [blocked] = await uc.waitlist_report(repo, max_capacity=1)
    assert blocked.fits is False

    cancelled = await repo.get("A")
    assert cancelled is not None
    await repo.upsert(cancelled.model_copy(update={"status": ReservationStatus.CANCELLED}))

    [freed] = await uc.waitlist_report(repo, max_capacity=1)
    assert freed.fits is True
    assert freed.min_remaining == 1


@pytest.mark.asyncio
async def test_dashboard_uses_store_snapshot() -> None:
    repo = InMemoryReservationRepository([_res("A", "2024-01-01", "2024-01-05")])
    stats = await uc.dashboard(repo, today=date(2024, 1, 3))
    assert stats.current_dogs == 1
