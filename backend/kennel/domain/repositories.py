from __future__ import annotations

from typing import Protocol

from ..models import Reservation


class ReservationRepository(Protocol):
    """External store collaborator: an unordered snapshot plus upsert/delete."""

    async def list_all(self) -> list[Reservation]: ...

    async def get(self, reservation_id: str) -> Reservation | None: ...

    async def upsert(self, reservation: Reservation) -> Reservation: ...

    async def delete(self, reservation_id: str) -> bool: ...

    async def version(self) -> int: ...
