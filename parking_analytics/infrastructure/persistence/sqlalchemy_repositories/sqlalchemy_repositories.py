import functools
from datetime import datetime
from typing import List, Sequence

from loguru import logger
from sqlalchemy import select, func, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from parking_analytics.domain.entities import ParkingLot, Booking, User, Vehicle
from parking_analytics.domain.exceptions import DependencyError
from parking_analytics.infrastructure.persistence.models.models import (
    ParkingLot as ORMParkingLot,
    Booking as ORMBooking,
    User as ORMUser,
    Vehicle as ORMVehicle,
)
from parking_analytics.application.repositories import AbstractParkingLotRepository, AbstractBookingRepository


def store_operation(description: str):
    """Re-raise driver failures of the wrapped query as DependencyError."""
    def decorator(method):
        @functools.wraps(method)
        async def wrapper(*args, **kwargs):
            try:
                return await method(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.warning(f"{description} failed: {e}")
                raise DependencyError(f"{description} failed: {e}") from e
        return wrapper
    return decorator


def _to_lot(orm_lot: ORMParkingLot) -> ParkingLot:
    return ParkingLot(
        id=orm_lot.id,
        owner_id=orm_lot.owner_id,
        name=orm_lot.name,
        two_wheeler_capacity=orm_lot.two_wheeler_capacity,
        four_wheeler_capacity=orm_lot.four_wheeler_capacity,
    )


def _to_user(orm_user: ORMUser) -> User:
    return User(
        id=orm_user.id,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        email=orm_user.email,
    )


def _to_vehicle(orm_vehicle: ORMVehicle) -> Vehicle:
    return Vehicle(
        id=orm_vehicle.id,
        registration_number=orm_vehicle.registration_number,
        vehicle_type=orm_vehicle.vehicle_type,
    )


def _to_booking(orm_booking: ORMBooking, with_relations: bool = False) -> Booking:
    booking = Booking(
        id=orm_booking.id,
        lot_id=orm_booking.lot_id,
        user_id=orm_booking.user_id,
        vehicle_id=orm_booking.vehicle_id,
        start_time=orm_booking.start_time,
        end_time=orm_booking.end_time,
        hourly_rate=orm_booking.hourly_rate,
        vehicle_type=orm_booking.vehicle_type,
    )
    if with_relations:
        booking.user = _to_user(orm_booking.user) if orm_booking.user else None
        booking.vehicle = _to_vehicle(orm_booking.vehicle) if orm_booking.vehicle else None
        booking.lot = _to_lot(orm_booking.lot) if orm_booking.lot else None
    return booking


class SQLAlchemyParkingLotRepository(AbstractParkingLotRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @store_operation("Parking lot lookup by owner")
    async def get_by_owner(self, owner_id: str) -> List[ParkingLot]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ORMParkingLot).where(ORMParkingLot.owner_id == owner_id)
            )
            return [_to_lot(lot) for lot in result.scalars().all()]

    @store_operation("Parking lot capacity lookup")
    async def get_by_ids(self, lot_ids: Sequence[str]) -> List[ParkingLot]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ORMParkingLot).where(ORMParkingLot.id.in_(list(lot_ids)))
            )
            return [_to_lot(lot) for lot in result.scalars().all()]


class SQLAlchemyBookingRepository(AbstractBookingRepository):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    @store_operation("Recent booking query")
    async def get_recent_by_lots(self, lot_ids: Sequence[str], limit: int) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ORMBooking).where(ORMBooking.lot_id.in_(list(lot_ids)))
                .options(
                    selectinload(ORMBooking.user),
                    selectinload(ORMBooking.vehicle),
                    selectinload(ORMBooking.lot),
                )
                .order_by(ORMBooking.start_time.desc())
                .limit(limit)
            )
            return [_to_booking(b, with_relations=True) for b in result.scalars().all()]

    @store_operation("Booking query")
    async def get_by_lots(self, lot_ids: Sequence[str]) -> List[Booking]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(ORMBooking).where(ORMBooking.lot_id.in_(list(lot_ids)))
            )
            return [_to_booking(b) for b in result.scalars().all()]

    @store_operation("Active booking count")
    async def count_active_by_lots(self, lot_ids: Sequence[str], now: datetime) -> int:
        async with self.session_factory() as session:
            result = await session.execute(
                select(func.count(ORMBooking.id)).where(
                    and_(
                        ORMBooking.lot_id.in_(list(lot_ids)),
                        ORMBooking.start_time <= now,
                        ORMBooking.end_time > now,
                    )
                )
            )
            return result.scalar() or 0
