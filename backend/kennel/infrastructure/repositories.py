from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from ..domain.repositories import ReservationRepository
from ..models import Reservation


class InMemoryReservationRepository(ReservationRepository):
    """Process-local reservation snapshot with a write counter."""

    def __init__(self, reservations: Optional[Iterable[Reservation]] = None) -> None:
        self._items: dict[str, Reservation] = {}
        self._version = 0
        for reservation in reservations or ():
            self._items[reservation.id] = reservation

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "InMemoryReservationRepository":
        return cls(Reservation.from_record(raw) for raw in records)

    async def list_all(self) -> list[Reservation]:
        # Copies, so callers never mutate stored state in place.
        return [r.model_copy(deep=True) for r in self._items.values()]

    async def get(self, reservation_id: str) -> Reservation | None:
        found = self._items.get(reservation_id)
        return found.model_copy(deep=True) if found is not None else None

    async def upsert(self, reservation: Reservation) -> Reservation:
        self._items[reservation.id] = reservation.model_copy(deep=True)
        self._version += 1
        return reservation

    async def delete(self, reservation_id: str) -> bool:
        if self._items.pop(reservation_id, None) is None:
            return False
        self._version += 1
        return True

    async def version(self) -> int:
        return self._version
