from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..models import Reservation
from .calendar import ONE_DAY, iter_days
from .errors import InvalidCapacityError, InvalidRangeError
from .occupancy import OccupancyMap, build_occupancy_map


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    min_remaining: int
    overbooked: bool = False


@dataclass(frozen=True)
class ExtensionResult:
    available: bool
    additional_days: int
    conflict_day: Optional[date] = None


def _validate(check_in: date, check_out: date, max_capacity: int) -> None:
    if check_out < check_in:
        raise InvalidRangeError("check_out must not be earlier than check_in")
    if max_capacity < 1:
        raise InvalidCapacityError("max_capacity must be >= 1")


def check_availability(
    check_in: date,
    check_out: date,
    reservations: Iterable[Reservation],
    max_capacity: int,
    exclude_id: Optional[str] = None,
    *,
    occupancy: Optional[OccupancyMap] = None,
) -> AvailabilityResult:
    """
    Pure check: can one more kennel be held for every day of [check_in, check_out]?

    `min_remaining` is the smallest free slot count over the range, clamped
    at zero. When existing bookings already exceed capacity on some day
    (operator override) the result is flagged `overbooked`. Pass the id of the
    reservation being edited as `exclude_id` so it does not collide with
    itself. A prebuilt `occupancy` must have been built with the same exclusion.
    """
    _validate(check_in, check_out, max_capacity)
    if occupancy is None:
        occupancy = build_occupancy_map(reservations, exclude_id=exclude_id)

    min_remaining = max_capacity
    for day in iter_days(check_in, check_out):
        min_remaining = min(min_remaining, max_capacity - occupancy.count(day))

    return AvailabilityResult(
        available=min_remaining > 0,
        min_remaining=max(min_remaining, 0),
        overbooked=min_remaining < 0,
    )


def check_extension(
    reservation: Reservation,
    new_check_out: date,
    reservations: Iterable[Reservation],
    max_capacity: int,
) -> ExtensionResult:
    """Check that a stay can run until `new_check_out`, reporting the first full day."""
    if not reservation.has_valid_range:
        raise InvalidRangeError(f"reservation {reservation.id} has no valid date range")
    current_check_out: date = reservation.check_out  # type: ignore[assignment]
    if new_check_out <= current_check_out:
        raise InvalidRangeError("new check_out must be later than the current one")
    _validate(current_check_out, new_check_out, max_capacity)

    occupancy = build_occupancy_map(reservations, exclude_id=reservation.id)
    additional_days = (new_check_out - current_check_out).days
    for day in iter_days(current_check_out + ONE_DAY, new_check_out):
        if occupancy.count(day) >= max_capacity:
            return ExtensionResult(available=False, additional_days=additional_days, conflict_day=day)
    return ExtensionResult(available=True, additional_days=additional_days)
