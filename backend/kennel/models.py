from __future__ import annotations

import logging
import math
import time
from datetime import date
from enum import StrEnum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.calendar import parse_date

logger = logging.getLogger(__name__)


class SizeClass(StrEnum):
    SMALL = "SMALL"
    MEDIUM = "MEDIUM"
    LARGE = "LARGE"


class ReservationStatus(StrEnum):
    WAITLIST = "WAITLIST"
    REQUEST = "REQUEST"
    CONFIRMED = "CONFIRMED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


ACTIVE_STATUSES: frozenset[ReservationStatus] = frozenset(
    {ReservationStatus.CONFIRMED, ReservationStatus.COMPLETED}
)

DEFAULT_DAY_RATES: dict[SizeClass, float] = {
    SizeClass.SMALL: 1500,
    SizeClass.MEDIUM: 2000,
    SizeClass.LARGE: 3000,
}


def _now_ms() -> int:
    return int(time.time() * 1000)


def _number(value: Any) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(result):
        return 0
    return int(result) if result.is_integer() else result


class Expense(BaseModel):
    title: str = ""
    amount: float = Field(default=0, ge=0)


class Reservation(BaseModel):
    id: str
    dog_name: str = ""
    breed: str = ""
    size: SizeClass = SizeClass.MEDIUM
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    price_per_day: float = Field(default=0, ge=0)
    expenses: list[Expense] = Field(default_factory=list)
    diaper_cost: float = Field(default=0, ge=0)
    damage_cost: float = Field(default=0, ge=0)
    status: ReservationStatus = ReservationStatus.REQUEST
    created_at: int = Field(default_factory=_now_ms)
    tags: list[str] = Field(default_factory=list)
    checklist: list[str] = Field(default_factory=list)
    comment: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_day_rate(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("price_per_day") is None:
            try:
                size = SizeClass(data.get("size") or SizeClass.MEDIUM)
            except ValueError:
                return data
            data = {**data, "price_per_day": DEFAULT_DAY_RATES[size]}
        return data

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> Optional[date]:
        parsed = parse_date(value)
        if parsed is None and value not in (None, ""):
            logger.warning("unparseable reservation date %r, treating as missing", value)
        return parsed

    @property
    def has_valid_range(self) -> bool:
        return (
            self.check_in is not None
            and self.check_out is not None
            and self.check_in <= self.check_out
        )

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> "Reservation":
        """Build a reservation from a loosely-typed store record.

        Accepts both camelCase store keys and snake_case names. Missing or
        malformed fields fall back to defaults instead of raising.
        """

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in raw and raw[key] is not None:
                    return raw[key]
            return None

        size_raw = pick("size")
        try:
            size = SizeClass(str(size_raw)) if size_raw else SizeClass.MEDIUM
        except ValueError:
            size = SizeClass.MEDIUM

        status_raw = pick("status")
        try:
            status = ReservationStatus(str(status_raw)) if status_raw else ReservationStatus.REQUEST
        except ValueError:
            logger.warning("unknown reservation status %r, defaulting to REQUEST", status_raw)
            status = ReservationStatus.REQUEST

        expenses_raw = pick("expenses")
        expenses = [
            Expense(title=str(item.get("title") or ""), amount=max(_number(item.get("amount")), 0))
            for item in (expenses_raw if isinstance(expenses_raw, list) else [])
            if isinstance(item, Mapping)
        ]

        price_raw = pick("price_per_day", "pricePerDay")
        price = max(_number(price_raw), 0) if price_raw is not None else None

        tags_raw = pick("tags")
        checklist_raw = pick("checklist")
        created_raw = _number(pick("created_at", "createdAt"))

        return cls(
            id=str(pick("id") or ""),
            dog_name=str(pick("dog_name", "dogName") or ""),
            breed=str(pick("breed") or ""),
            size=size,
            check_in=pick("check_in", "checkIn"),
            check_out=pick("check_out", "checkOut"),
            price_per_day=price,
            expenses=expenses,
            diaper_cost=max(_number(pick("diaper_cost", "diaperCost")), 0),
            damage_cost=max(_number(pick("damage_cost", "damageCost")), 0),
            status=status,
            created_at=int(created_raw) if created_raw else _now_ms(),
            tags=[str(t) for t in tags_raw] if isinstance(tags_raw, list) else [],
            checklist=[str(c) for c in checklist_raw] if isinstance(checklist_raw, list) else [],
            comment=str(pick("comment") or ""),
        )
