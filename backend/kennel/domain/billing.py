from ..models import DEFAULT_DAY_RATES, Reservation, SizeClass
from .calendar import days_between_inclusive


def default_day_rate(size: SizeClass) -> float:
    return DEFAULT_DAY_RATES[size]


def billable_days(reservation: Reservation) -> int:
    if not reservation.has_valid_range:
        return 0
    return days_between_inclusive(reservation.check_in, reservation.check_out)  # type: ignore[arg-type]


def extras_total(reservation: Reservation) -> float:
    """Itemized expenses plus the two legacy flat fees."""
    return sum(item.amount for item in reservation.expenses) + reservation.diaper_cost + reservation.damage_cost


def total_cost(reservation: Reservation) -> float:
    """
    Amount owed for a stay: inclusive days x day rate, plus every extra charge.
    No rounding is applied; formatting is left to the caller.
    """
    return billable_days(reservation) * reservation.price_per_day + extras_total(reservation)
