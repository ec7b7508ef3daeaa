from datetime import date

from kennel.domain.occupancy import OccupancyCache, build_occupancy_map
from kennel.models import Reservation, ReservationStatus


def _res(
    res_id: str,
    check_in: str,
    check_out: str,
    status: ReservationStatus = ReservationStatus.CONFIRMED,
) -> Reservation:
    return Reservation(id=res_id, dog_name=res_id, check_in=check_in, check_out=check_out, status=status)


def test_counts_inclusive_on_both_ends() -> None:
    occupancy = build_occupancy_map([_res("a", "2024-01-01", "2024-01-03")])
    assert occupancy.count(date(2024, 1, 1)) == 1
    assert occupancy.count(date(2024, 1, 3)) == 1
    assert occupancy.count(date(2023, 12, 31)) == 0
    assert occupancy.count(date(2024, 1, 4)) == 0


def test_only_confirmed_and_completed_occupy_by_default() -> None:
    reservations = [
        _res("c", "2024-01-01", "2024-01-01", ReservationStatus.CONFIRMED),
        _res("d", "2024-01-01", "2024-01-01", ReservationStatus.COMPLETED),
        _res("r", "2024-01-01", "2024-01-01", ReservationStatus.REQUEST),
        _res("w", "2024-01-01", "2024-01-01", ReservationStatus.WAITLIST),
        _res("x", "2024-01-01", "2024-01-01", ReservationStatus.CANCELLED),
    ]
    assert build_occupancy_map(reservations).count(date(2024, 1, 1)) == 2


def test_custom_status_filter() -> None:
    reservations = [
        _res("r", "2024-01-01", "2024-01-01", ReservationStatus.REQUEST),
        _res("w", "2024-01-01", "2024-01-01", ReservationStatus.WAITLIST),
    ]
    occupancy = build_occupancy_map(reservations, active_statuses={ReservationStatus.REQUEST})
    assert occupancy.count(date(2024, 1, 1)) == 1


def test_excluded_reservation_does_not_count() -> None:
    reservations = [_res("a", "2024-01-01", "2024-01-02"), _res("b", "2024-01-02", "2024-01-03")]
    occupancy = build_occupancy_map(reservations, exclude_id="a")
    assert occupancy.count(date(2024, 1, 1)) == 0
    assert occupancy.count(date(2024, 1, 2)) == 1


def test_adding_confirmed_only_raises_days_in_its_range() -> None:
    base = [_res("a", "2024-01-01", "2024-01-05"), _res("b", "2024-01-04", "2024-01-10")]
    before = build_occupancy_map(base)
    added = _res("new", "2024-01-03", "2024-01-06")
    after = build_occupancy_map(base + [added])

    for day in set(before) | set(after):
        if date(2024, 1, 3) <= day <= date(2024, 1, 6):
            assert after.count(day) == before.count(day) + 1
        else:
            assert after.count(day) == before.count(day)


def test_reservation_without_valid_range_contributes_nothing() -> None:
    broken = Reservation(id="bad", check_in="garbage", check_out="2024-01-02", status=ReservationStatus.CONFIRMED)
    inverted = _res("inv", "2024-01-05", "2024-01-01")
    occupancy = build_occupancy_map([broken, inverted])
    assert sum(occupancy.values()) == 0


def test_cache_reuses_map_for_same_version() -> None:
    cache = OccupancyCache()
    reservations = [_res("a", "2024-01-01", "2024-01-01")]
    first = cache.get(1, reservations)
    # Same version: the snapshot argument is not re-read.
    second = cache.get(1, [])
    assert first == second
    assert second.count(date(2024, 1, 1)) == 1


def test_cache_rebuilds_when_version_changes() -> None:
    cache = OccupancyCache()
    cache.get(1, [_res("a", "2024-01-01", "2024-01-01")])
    rebuilt = cache.get(2, [])
    assert rebuilt.count(date(2024, 1, 1)) == 0


def test_cache_keys_on_exclusion_and_returns_copies() -> None:
    cache = OccupancyCache()
    reservations = [_res("a", "2024-01-01", "2024-01-01")]
    excluded = cache.get(1, reservations, exclude_id="a")
    assert excluded.count(date(2024, 1, 1)) == 0
    full = cache.get(1, reservations)
    full[date(2024, 1, 1)] += 5
    assert cache.get(1, reservations).count(date(2024, 1, 1)) == 1


def test_open_ended_stay_up_to_last_representable_day() -> None:
    occupancy = build_occupancy_map([_res("a", "9999-12-30", "9999-12-31")])
    assert occupancy.count(date.max) == 1
    assert sum(occupancy.values()) == 2


def test_cache_invalidate_forces_rebuild_for_same_version() -> None:
    cache = OccupancyCache()
    cache.get(1, [_res("a", "2024-01-01", "2024-01-01")])
    cache.invalidate()
    assert cache.get(1, []).count(date(2024, 1, 1)) == 0
