import asyncio
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Awaitable, Callable, Iterable, List, Optional
from zoneinfo import ZoneInfo

from loguru import logger

from parking_analytics.application.repositories import AbstractParkingLotRepository, AbstractBookingRepository
from parking_analytics.application.services.owner_resolver import OwnerResolver
from parking_analytics.config.settings_env import settings
from parking_analytics.domain.common import UNKNOWN_VEHICLE_TYPE
from parking_analytics.domain.entities import (
    Booking,
    BookingFeedEntry,
    ParkingLot,
    RevenueEntry,
    RevenueSummary,
    UtilizationSnapshot,
    VehicleTypeCount,
)
from parking_analytics.domain.exceptions import InvalidArgument
from parking_analytics.shared.custom_types import as_utc


async def gather_or_cancel(*aws: Awaitable) -> list:
    """Run ``aws`` concurrently; if one fails, cancel and drain the rest before re-raising."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def default_clock() -> datetime:
    return datetime.now(ZoneInfo(settings.REPORT_TIMEZONE))


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_feed_entry(booking: Booking) -> BookingFeedEntry:
    return BookingFeedEntry(
        id=str(booking.id) if booking.id is not None else "",
        user_name=booking.user.full_name if booking.user else "",
        vehicle_number=(booking.vehicle.registration_number or "") if booking.vehicle else "",
        vehicle_type=booking.vehicle_type or "",
        parking_name=(booking.lot.name or "") if booking.lot else "",
        start_time=booking.start_time,
        end_time=booking.end_time,
    )


def summarize_revenue(bookings: Iterable[Booking], month_start: datetime) -> RevenueSummary:
    month_start = as_utc(month_start)
    summary = RevenueSummary()
    for booking in bookings:
        amount = booking.amount
        summary.total += amount
        started = as_utc(booking.start_time)
        if started is not None and started >= month_start:
            summary.monthly += amount
        summary.bookings.append(RevenueEntry(id=str(booking.id), amount=amount, date=booking.start_time))
    return summary


def count_vehicle_types(bookings: Iterable[Booking]) -> List[VehicleTypeCount]:
    # dicts keep first-insertion order, which is the order reported
    counts = {}
    for booking in bookings:
        vehicle_type = booking.vehicle_type or UNKNOWN_VEHICLE_TYPE
        counts[vehicle_type] = counts.get(vehicle_type, 0) + 1
    return [VehicleTypeCount(vehicle_type=t, count=c) for t, c in counts.items()]


def compute_utilization(lots: Iterable[ParkingLot], active_bookings: int) -> UtilizationSnapshot:
    total_capacity = sum(lot.total_capacity for lot in lots)
    utilization = active_bookings / total_capacity * 100 if total_capacity > 0 else 0
    return UtilizationSnapshot(
        current=round_half_up(utilization),
        total=total_capacity,
        active_bookings=active_bookings,
    )


class AnalyticsService:
    """Owner-facing reports computed from the bookings of the owner's lots.

    ``clock`` supplies "now" for the monthly revenue cutoff and the
    utilization window; the time-dependent reports also accept an explicit
    ``now``.
    """

    def __init__(
        self,
        parking_lot_repo: AbstractParkingLotRepository,
        booking_repo: AbstractBookingRepository,
        clock: Optional[Callable[[], datetime]] = None,
        recent_limit: Optional[int] = None,
    ):
        self.parking_lot_repo = parking_lot_repo
        self.booking_repo = booking_repo
        self.owner_resolver = OwnerResolver(parking_lot_repo)
        self.clock = clock or default_clock
        self.recent_limit = settings.RECENT_BOOKINGS_LIMIT if recent_limit is None else recent_limit

    async def get_booking_feed(self, owner_id: Optional[str]) -> List[BookingFeedEntry]:
        if not owner_id:
            return []

        lot_ids = await self.owner_resolver.resolve_lot_ids(owner_id)
        bookings = await self.booking_repo.get_recent_by_lots(lot_ids, self.recent_limit)
        return [to_feed_entry(booking) for booking in bookings or []]

    async def get_revenue_summary(self, owner_id: Optional[str], now: Optional[datetime] = None) -> RevenueSummary:
        if not owner_id:
            return RevenueSummary()

        lot_ids = await self.owner_resolver.resolve_lot_ids(owner_id)
        month_start = start_of_month(now or self.clock())
        bookings = await self.booking_repo.get_by_lots(lot_ids)
        summary = summarize_revenue(bookings or [], month_start)
        logger.debug(f"Revenue for owner {owner_id}: total={summary.total} monthly={summary.monthly}")
        return summary

    async def get_vehicle_type_histogram(self, owner_id: Optional[str]) -> List[VehicleTypeCount]:
        if not owner_id:
            return []

        lot_ids = await self.owner_resolver.resolve_lot_ids(owner_id)
        bookings = await self.booking_repo.get_by_lots(lot_ids)
        return count_vehicle_types(bookings or [])

    async def get_utilization(self, owner_id: Optional[str], now: Optional[datetime] = None) -> UtilizationSnapshot:
        if not owner_id:
            raise InvalidArgument("Owner ID is required")

        lot_ids = await self.owner_resolver.resolve_lot_ids(owner_id)
        now = now or self.clock()

        lots, active_bookings = await gather_or_cancel(
            self.parking_lot_repo.get_by_ids(lot_ids),
            self.booking_repo.count_active_by_lots(lot_ids, now),
        )

        snapshot = compute_utilization(lots or [], active_bookings or 0)
        logger.debug(
            f"Utilization for owner {owner_id}: {snapshot.current}% "
            f"({snapshot.active_bookings}/{snapshot.total})"
        )
        return snapshot
