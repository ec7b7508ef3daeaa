"""
Reservation lifecycle vocabulary.

These helpers describe which transitions are meaningful; none of them refuse
a transition. Whether a move into an active state fits the facility is a
separate, advisory capacity check the caller runs before writing, and an
operator may override it.
"""
from ..models import ACTIVE_STATUSES, ReservationStatus

TERMINAL_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.COMPLETED, ReservationStatus.CANCELLED}
)

MEANINGFUL_TRANSITIONS: dict[ReservationStatus, frozenset[ReservationStatus]] = {
    ReservationStatus.WAITLIST: frozenset(
        {ReservationStatus.REQUEST, ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}
    ),
    ReservationStatus.REQUEST: frozenset({ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED}),
    ReservationStatus.CONFIRMED: frozenset({ReservationStatus.COMPLETED, ReservationStatus.CANCELLED}),
    ReservationStatus.COMPLETED: frozenset(),
    ReservationStatus.CANCELLED: frozenset(),
}


def is_active(status: ReservationStatus) -> bool:
    return status in ACTIVE_STATUSES


def is_terminal(status: ReservationStatus) -> bool:
    return status in TERMINAL_STATUSES


def is_meaningful_transition(source: ReservationStatus, target: ReservationStatus) -> bool:
    return target in MEANINGFUL_TRANSITIONS[source]


def is_promotion(source: ReservationStatus, target: ReservationStatus) -> bool:
    return source == ReservationStatus.WAITLIST and target in (
        ReservationStatus.REQUEST,
        ReservationStatus.CONFIRMED,
    )


def requires_capacity(source: ReservationStatus, target: ReservationStatus) -> bool:
    """True when the move starts occupying a kennel."""
    return is_active(target) and not is_active(source)
