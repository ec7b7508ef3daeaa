from datetime import date

from kennel.models import Reservation, ReservationStatus, SizeClass


def test_from_record_reads_store_keys() -> None:
    record = {
        "id": "abc123",
        "dogName": "Rex",
        "breed": "Beagle",
        "size": "LARGE",
        "checkIn": "2024-06-01",
        "checkOut": "2024-06-04T00:00:00.000Z",
        "pricePerDay": "2500",
        "expenses": [{"title": "Bath", "amount": "300"}, {"title": "Bad", "amount": "oops"}],
        "diaperCost": 50,
        "damageCost": None,
        "status": "CONFIRMED",
        "createdAt": 1717000000000,
        "tags": ["Puppy"],
        "checklist": ["Leash"],
    }
    r = Reservation.from_record(record)
    assert r.id == "abc123"
    assert r.dog_name == "Rex"
    assert r.size == SizeClass.LARGE
    assert r.check_in == date(2024, 6, 1)
    assert r.check_out == date(2024, 6, 4)
    assert r.price_per_day == 2500
    assert [e.amount for e in r.expenses] == [300, 0]
    assert r.diaper_cost == 50
    assert r.damage_cost == 0
    assert r.status == ReservationStatus.CONFIRMED
    assert r.created_at == 1717000000000
    assert r.tags == ["Puppy"]
    assert r.checklist == ["Leash"]


def test_from_record_fills_defaults() -> None:
    r = Reservation.from_record({"id": 7})
    assert r.id == "7"
    assert r.size == SizeClass.MEDIUM
    assert r.status == ReservationStatus.REQUEST
    assert r.price_per_day == 2000
    assert r.expenses == []
    assert r.check_in is None
    assert r.has_valid_range is False


def test_from_record_tolerates_unknown_enums_and_bad_shapes() -> None:
    r = Reservation.from_record(
        {"id": "x", "size": "HUGE", "status": "ARCHIVED", "tags": "nope", "expenses": {"a": 1}}
    )
    assert r.size == SizeClass.MEDIUM
    assert r.status == ReservationStatus.REQUEST
    assert r.tags == []
    assert r.expenses == []


def test_malformed_dates_become_missing() -> None:
    r = Reservation.from_record({"id": "x", "checkIn": "31/12/2024", "checkOut": "2025-01-02"})
    assert r.check_in is None
    assert r.check_out == date(2025, 1, 2)
    assert r.has_valid_range is False


def test_inverted_range_is_not_valid() -> None:
    r = Reservation(id="x", check_in="2024-01-05", check_out="2024-01-01")
    assert r.has_valid_range is False


def test_infinite_and_overflowing_numbers_fall_back_to_zero() -> None:
    r = Reservation.from_record(
        {
            "id": "x",
            "createdAt": "Infinity",
            "pricePerDay": "1e400",
            "diaperCost": float("-inf"),
            "damageCost": "inf",
            "expenses": [{"title": "Bath", "amount": "Infinity"}],
        }
    )
    assert r.created_at > 0
    assert r.price_per_day == 0
    assert r.diaper_cost == 0
    assert r.damage_cost == 0
    assert [e.amount for e in r.expenses] == [0]
