from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .domain.availability import AvailabilityResult, ExtensionResult
from .domain.billing import billable_days, extras_total, total_cost
from .domain.stats import DashboardStats, MonthlyRevenue
from .domain.waitlist import WaitlistMatch
from .models import Expense, Reservation, ReservationStatus, SizeClass
from .usecases.reports import Report


class AvailabilityRead(BaseModel):
    check_in: date
    check_out: date
    available: bool
    min_remaining: int
    overbooked: bool
    last_slot: bool

    @classmethod
    def from_result(cls, *, check_in: date, check_out: date, result: AvailabilityResult) -> "AvailabilityRead":
        return cls(
            check_in=check_in,
            check_out=check_out,
            available=result.available,
            min_remaining=result.min_remaining,
            overbooked=result.overbooked,
            last_slot=result.available and result.min_remaining <= 1,
        )


class ReservationCreate(BaseModel):
    dog_name: str = Field(min_length=1)
    breed: str = ""
    size: SizeClass = SizeClass.MEDIUM
    check_in: date
    check_out: date
    price_per_day: Optional[float] = Field(default=None, ge=0)
    expenses: list[Expense] = Field(default_factory=list)
    diaper_cost: float = Field(default=0, ge=0)
    damage_cost: float = Field(default=0, ge=0)
    status: ReservationStatus = ReservationStatus.REQUEST
    tags: list[str] = Field(default_factory=list)
    checklist: list[str] = Field(default_factory=list)
    comment: str = ""
    override: bool = False
    queue_if_full: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> "ReservationCreate":
        if self.check_out < self.check_in:
            raise ValueError("check_out must not be earlier than check_in")
        return self

    def to_reservation(self) -> Reservation:
        data = self.model_dump(exclude={"override", "queue_if_full"})
        return Reservation(id="", **data)


class StatusUpdate(BaseModel):
    status: ReservationStatus
    override: bool = False


class ExtendStay(BaseModel):
    check_out: date
    override: bool = False


class ReservationRead(BaseModel):
    reservation_id: str
    dog_name: str
    breed: str
    size: SizeClass
    check_in: Optional[date]
    check_out: Optional[date]
    days: int
    price_per_day: float
    expenses: list[Expense]
    diaper_cost: float
    damage_cost: float
    extras_total: float
    total_cost: float
    status: ReservationStatus
    created_at: int
    tags: list[str]
    checklist: list[str]
    comment: str

    @classmethod
    def from_domain(cls, *, reservation: Reservation) -> "ReservationRead":
        return cls(
            reservation_id=reservation.id,
            dog_name=reservation.dog_name,
            breed=reservation.breed,
            size=reservation.size,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            days=billable_days(reservation),
            price_per_day=reservation.price_per_day,
            expenses=reservation.expenses,
            diaper_cost=reservation.diaper_cost,
            damage_cost=reservation.damage_cost,
            extras_total=extras_total(reservation),
            total_cost=total_cost(reservation),
            status=reservation.status,
            created_at=reservation.created_at,
            tags=reservation.tags,
            checklist=reservation.checklist,
            comment=reservation.comment,
        )


class ReservationCreated(BaseModel):
    reservation: ReservationRead
    availability: AvailabilityRead


class StatusChangeRead(BaseModel):
    reservation: ReservationRead
    status_from: ReservationStatus
    overbooked: bool


class ExtensionRead(BaseModel):
    reservation: ReservationRead
    additional_days: int
    conflict_day: Optional[date]
    overbooked: bool

    @classmethod
    def from_result(cls, *, reservation: Reservation, result: ExtensionResult) -> "ExtensionRead":
        return cls(
            reservation=ReservationRead.from_domain(reservation=reservation),
            additional_days=result.additional_days,
            conflict_day=result.conflict_day,
            overbooked=not result.available,
        )


class WaitlistMatchRead(BaseModel):
    reservation_id: str
    dog_name: str
    check_in: Optional[date]
    check_out: Optional[date]
    fits: bool
    min_remaining: int
    revenue: float
    conflict_days: list[date]
    hidden_conflicts: int

    @classmethod
    def from_match(cls, *, match: WaitlistMatch) -> "WaitlistMatchRead":
        return cls(
            reservation_id=match.reservation.id,
            dog_name=match.reservation.dog_name,
            check_in=match.reservation.check_in,
            check_out=match.reservation.check_out,
            fits=match.fits,
            min_remaining=match.min_remaining,
            revenue=match.revenue,
            conflict_days=list(match.displayed_conflicts),
            hidden_conflicts=match.hidden_conflicts,
        )


class DashboardRead(BaseModel):
    hotel_name: str
    max_capacity: int
    current_dogs: int
    bookings_next_month: int
    revenue_month: float

    @classmethod
    def from_stats(cls, *, hotel_name: str, max_capacity: int, stats: DashboardStats) -> "DashboardRead":
        return cls(
            hotel_name=hotel_name,
            max_capacity=max_capacity,
            current_dogs=stats.current_dogs,
            bookings_next_month=stats.bookings_next_month,
            revenue_month=stats.revenue_month,
        )


class MonthlyRevenueRead(BaseModel):
    month: str
    revenue: float
    bookings: int
    days: int

    @classmethod
    def from_stats(cls, *, item: MonthlyRevenue) -> "MonthlyRevenueRead":
        return cls(
            month=item.month.strftime("%Y-%m"),
            revenue=item.revenue,
            bookings=item.bookings,
            days=item.days,
        )


class DogRevenueRead(BaseModel):
    dog_name: str
    revenue: float


class WaitlistSummaryRead(BaseModel):
    total: int
    can_confirm_now: int
    potential_revenue: float


class ReportRead(BaseModel):
    monthly: list[MonthlyRevenueRead]
    top_dogs: list[DogRevenueRead]
    extras_total: float
    waitlist: WaitlistSummaryRead

    @classmethod
    def from_report(cls, *, report: Report) -> "ReportRead":
        return cls(
            monthly=[MonthlyRevenueRead.from_stats(item=m) for m in report.monthly],
            top_dogs=[DogRevenueRead(dog_name=name, revenue=revenue) for name, revenue in report.top_dogs],
            extras_total=report.extras_total,
            waitlist=WaitlistSummaryRead(
                total=report.waitlist.total,
                can_confirm_now=report.waitlist.can_confirm_now,
                potential_revenue=report.waitlist.potential_revenue,
            ),
        )
