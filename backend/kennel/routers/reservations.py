from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ..config import Settings, get_settings
from ..deps import get_reservation_repo
from ..domain.errors import CapacityError, InvalidRangeError, ReservationNotFoundError
from ..domain.repositories import ReservationRepository
from ..schemas import (
    AvailabilityRead,
    ExtendStay,
    ExtensionRead,
    ReservationCreate,
    ReservationCreated,
    ReservationRead,
    StatusChangeRead,
    StatusUpdate,
)
from ..usecases import reservations as reservation_usecase
from ..utils.audit_log import emit_audit_log

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.get("", response_model=List[ReservationRead])
async def list_reservations(
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> list[ReservationRead]:
    rows = await reservation_usecase.list_reservations(res_repo)
    return [ReservationRead.from_domain(reservation=r) for r in rows]


@router.get("/{reservation_id}", response_model=ReservationRead)
async def get_reservation(
    reservation_id: str,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
) -> ReservationRead:
    reservation = await reservation_usecase.get_reservation(res_repo, reservation_id=reservation_id)
    if reservation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    return ReservationRead.from_domain(reservation=reservation)


@router.post("", response_model=ReservationCreated, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    payload: ReservationCreate,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> ReservationCreated:
    try:
        reservation, availability = await reservation_usecase.create_reservation(
            res_repo,
            reservation=payload.to_reservation(),
            max_capacity=settings.max_capacity,
            override=payload.override,
            queue_if_full=payload.queue_if_full,
        )
    except CapacityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="capacity exceeded")
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    try:
        emit_audit_log(
            action="reservation.created",
            initiator="operator",
            reservation_id=reservation.id,
            dog_name=reservation.dog_name,
            status_to=reservation.status,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            extra={"min_remaining": availability.min_remaining},
        )
    except RuntimeError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed")

    return ReservationCreated(
        reservation=ReservationRead.from_domain(reservation=reservation),
        availability=AvailabilityRead.from_result(
            check_in=payload.check_in,
            check_out=payload.check_out,
            result=availability,
        ),
    )


@router.post("/{reservation_id}/status", response_model=StatusChangeRead)
async def change_status(
    reservation_id: str,
    payload: StatusUpdate,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> StatusChangeRead:
    try:
        change = await reservation_usecase.change_status(
            res_repo,
            reservation_id=reservation_id,
            status=payload.status,
            max_capacity=settings.max_capacity,
            override=payload.override,
        )
    except ReservationNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    except CapacityError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="capacity exceeded")
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    reservation = change.reservation
    if change.changed:
        try:
            emit_audit_log(
                action="reservation.overbooked" if change.overbooked else "reservation.status_changed",
                initiator="operator",
                reservation_id=reservation.id,
                dog_name=reservation.dog_name,
                status_from=change.previous_status,
                status_to=reservation.status,
                check_in=reservation.check_in,
                check_out=reservation.check_out,
            )
        except RuntimeError:
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed")

    return StatusChangeRead(
        reservation=ReservationRead.from_domain(reservation=reservation),
        status_from=change.previous_status,
        overbooked=change.overbooked,
    )


@router.post("/{reservation_id}/extend", response_model=ExtensionRead)
async def extend_stay(
    reservation_id: str,
    payload: ExtendStay,
    res_repo: ReservationRepository = Depends(get_reservation_repo),
    settings: Settings = Depends(get_settings),
) -> ExtensionRead:
    try:
        reservation, result = await reservation_usecase.extend_stay(
            res_repo,
            reservation_id=reservation_id,
            new_check_out=payload.check_out,
            max_capacity=settings.max_capacity,
            override=payload.override,
        )
    except ReservationNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="reservation not found")
    except CapacityError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except InvalidRangeError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    try:
        emit_audit_log(
            action="reservation.extended",
            initiator="operator",
            reservation_id=reservation.id,
            dog_name=reservation.dog_name,
            status_to=reservation.status,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            extra={"additional_days": result.additional_days, "conflict_day": result.conflict_day},
        )
    except RuntimeError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="audit log failed")

    return ExtensionRead.from_result(reservation=reservation, result=result)
