import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..domain.availability import AvailabilityResult, ExtensionResult, check_availability, check_extension
from ..domain.errors import CapacityError, InvalidRangeError, ReservationNotFoundError
from ..domain.repositories import ReservationRepository
from ..domain.states import is_active, is_meaningful_transition, requires_capacity
from ..models import Reservation, ReservationStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusChange:
    reservation: Reservation
    previous_status: ReservationStatus
    availability: Optional[AvailabilityResult] = None

    @property
    def changed(self) -> bool:
        return self.previous_status != self.reservation.status

    @property
    def overbooked(self) -> bool:
        return self.availability is not None and not self.availability.available


async def create_reservation(
    res_repo: ReservationRepository,
    *,
    reservation: Reservation,
    max_capacity: int,
    override: bool = False,
    queue_if_full: bool = False,
) -> tuple[Reservation, AvailabilityResult]:
    """
    Validate against a freshly fetched snapshot, then write.

    Active statuses must fit unless `override` is set. With `queue_if_full`
    a stay that does not fit is stored as WAITLIST instead of being refused.
    """
    if not reservation.has_valid_range:
        raise InvalidRangeError("reservation needs check_in <= check_out")
    if not reservation.id:
        reservation = reservation.model_copy(update={"id": uuid.uuid4().hex[:9]})

    snapshot = await res_repo.list_all()
    availability = check_availability(
        reservation.check_in,  # type: ignore[arg-type]
        reservation.check_out,  # type: ignore[arg-type]
        snapshot,
        max_capacity,
        exclude_id=reservation.id,
    )

    if not availability.available and reservation.status != ReservationStatus.WAITLIST:
        if queue_if_full:
            reservation = reservation.model_copy(update={"status": ReservationStatus.WAITLIST})
        elif is_active(reservation.status) and not override:
            raise CapacityError("no free kennel for the requested dates")

    created = await res_repo.upsert(reservation)
    return created, availability


async def change_status(
    res_repo: ReservationRepository,
    *,
    reservation_id: str,
    status: ReservationStatus,
    max_capacity: int,
    override: bool = False,
) -> StatusChange:
    snapshot = await res_repo.list_all()
    current = next((r for r in snapshot if r.id == reservation_id), None)
    if current is None:
        raise ReservationNotFoundError("reservation not found")
    previous = current.status
    # Idempotent: same status returns as-is
    if previous == status:
        return StatusChange(reservation=current, previous_status=previous)

    if not is_meaningful_transition(previous, status):
        logger.warning("unusual transition %s -> %s for reservation %s", previous, status, reservation_id)

    availability: Optional[AvailabilityResult] = None
    if requires_capacity(previous, status):
        if not current.has_valid_range:
            raise InvalidRangeError(f"reservation {reservation_id} has no valid date range")
        availability = check_availability(
            current.check_in,  # type: ignore[arg-type]
            current.check_out,  # type: ignore[arg-type]
            snapshot,
            max_capacity,
            exclude_id=current.id,
        )
        if not availability.available and not override:
            raise CapacityError("capacity exceeded")

    updated = await res_repo.upsert(current.model_copy(update={"status": status}))
    return StatusChange(reservation=updated, previous_status=previous, availability=availability)


async def extend_stay(
    res_repo: ReservationRepository,
    *,
    reservation_id: str,
    new_check_out: date,
    max_capacity: int,
    override: bool = False,
) -> tuple[Reservation, ExtensionResult]:
    snapshot = await res_repo.list_all()
    current = next((r for r in snapshot if r.id == reservation_id), None)
    if current is None:
        raise ReservationNotFoundError("reservation not found")

    result = check_extension(current, new_check_out, snapshot, max_capacity)
    # Soft holds do not consume capacity, so only active stays are gated.
    if not result.available and is_active(current.status) and not override:
        raise CapacityError(f"no free kennel on {result.conflict_day}")

    updated = await res_repo.upsert(current.model_copy(update={"check_out": new_check_out}))
    return updated, result


async def list_reservations(res_repo: ReservationRepository) -> list[Reservation]:
    reservations = await res_repo.list_all()
    return sorted(reservations, key=lambda r: (r.check_in or date.max, r.created_at, r.id))


async def get_reservation(res_repo: ReservationRepository, *, reservation_id: str) -> Reservation | None:
    return await res_repo.get(reservation_id)
