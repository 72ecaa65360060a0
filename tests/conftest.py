import pytest
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
import tempfile
import os
from datetime import datetime, timezone

from parking_analytics.infrastructure.persistence.models.models import Base, Owner, ParkingLot, User, Vehicle, Booking
from parking_analytics.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyParkingLotRepository,
    SQLAlchemyBookingRepository,
)
from parking_analytics.application.services.analytics_service import AnalyticsService
from parking_analytics.config.settings_env import Settings


# Wednesday noon, mid-month
FIXED_NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def at(day: int, hour: int = 0, minute: int = 0, month: int = 5) -> datetime:
    return datetime(2024, month, day, hour, minute, tzinfo=timezone.utc)


async def _make_session_factory(create_tables: bool = True):
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp_file:
        db_path = tmp_file.name

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{db_path}",
        poolclass=NullPool,
        echo=False
    )

    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    return engine, session_maker, db_path


@pytest.fixture(scope="function")
async def test_db():
    """Create a test database for each test function and yield its session factory."""
    engine, session_maker, db_path = await _make_session_factory()

    yield session_maker

    await engine.dispose()
    os.unlink(db_path)


@pytest.fixture(scope="function")
async def broken_db():
    """A session factory for a database whose tables were never created."""
    engine, session_maker, db_path = await _make_session_factory(create_tables=False)

    yield session_maker

    await engine.dispose()
    os.unlink(db_path)


@pytest.fixture
async def db_session(test_db):
    """Create a database session for seeding a test."""
    async with test_db() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_settings():
    """Provide test settings."""
    return Settings(
        DATABASE_URL="sqlite:///:memory:",
        ASYNC_DATABASE_URL="sqlite+aiosqlite:///:memory:",
        RECENT_BOOKINGS_LIMIT=10,
    )


@pytest.fixture
def lot_repo(test_db):
    return SQLAlchemyParkingLotRepository(test_db)


@pytest.fixture
def booking_repo(test_db):
    return SQLAlchemyBookingRepository(test_db)


@pytest.fixture
def analytics_service(lot_repo, booking_repo):
    """Create an AnalyticsService over the test database with the clock pinned to FIXED_NOW."""
    return AnalyticsService(
        parking_lot_repo=lot_repo,
        booking_repo=booking_repo,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
async def owner(db_session: AsyncSession):
    owner = Owner(name="Lot Owner")
    db_session.add(owner)
    await db_session.commit()
    await db_session.refresh(owner)
    return owner


@pytest.fixture
async def owner_lots(db_session: AsyncSession, owner):
    """Two lots: 10 two-wheeler spaces, and 5 + 5 spaces. Total capacity 20."""
    central = ParkingLot(owner_id=owner.id, name="Central", two_wheeler_capacity=10, four_wheeler_capacity=0)
    riverside = ParkingLot(owner_id=owner.id, name="Riverside", two_wheeler_capacity=5, four_wheeler_capacity=5)
    db_session.add_all([central, riverside])
    await db_session.commit()
    return central, riverside


@pytest.fixture
async def other_owner_lot(db_session: AsyncSession):
    """A lot belonging to somebody else, with an active booking that must never be counted."""
    other = Owner(name="Someone Else")
    db_session.add(other)
    await db_session.flush()

    lot = ParkingLot(owner_id=other.id, name="Elsewhere", two_wheeler_capacity=50, four_wheeler_capacity=50)
    db_session.add(lot)
    await db_session.flush()

    db_session.add(Booking(
        lot_id=lot.id, start_time=at(15, 8), end_time=at(15, 18), hourly_rate=1000.0, vehicle_type="Truck"
    ))
    await db_session.commit()
    return lot


@pytest.fixture
async def seeded_bookings(db_session: AsyncSession, owner_lots, other_owner_lot):
    """Bookings around FIXED_NOW.

    Active now: "active-car", "active-bike", "starts-now" (3 of 20 spaces).
    Revenue: total 57.5, this month 52.5.
    """
    central, riverside = owner_lots

    jane = User(first_name="Jane", last_name="Doe", email="jane@example.com")
    sam = User(first_name="Sam", last_name=None)
    car = Vehicle(registration_number="KA01AB1234", vehicle_type="Car")
    bike = Vehicle(registration_number="KA02CD5678", vehicle_type="Bike")
    db_session.add_all([jane, sam, car, bike])
    await db_session.flush()

    bookings = {
        "active-car": Booking(
            lot_id=central.id, user_id=jane.id, vehicle_id=car.id,
            start_time=at(15, 11), end_time=at(15, 13), hourly_rate=20.0, vehicle_type="Car",
        ),
        "active-bike": Booking(
            lot_id=riverside.id, user_id=sam.id, vehicle_id=bike.id,
            start_time=at(15, 10), end_time=at(15, 14), hourly_rate=15.0, vehicle_type="Bike",
        ),
        "month-start": Booking(
            lot_id=central.id,
            start_time=at(1, 0), end_time=at(1, 2), hourly_rate=10.0, vehicle_type="Car",
        ),
        "last-month": Booking(
            lot_id=riverside.id, user_id=jane.id, vehicle_id=car.id,
            start_time=at(30, 23, month=4), end_time=at(1, 1), hourly_rate=5.0, vehicle_type=None,
        ),
        "starts-now": Booking(
            lot_id=central.id, user_id=jane.id, vehicle_id=car.id,
            start_time=at(15, 12), end_time=at(15, 15), hourly_rate=None, vehicle_type="",
        ),
        "ended-now": Booking(
            lot_id=central.id, user_id=sam.id, vehicle_id=car.id,
            start_time=at(15, 9), end_time=at(15, 12), hourly_rate=7.5, vehicle_type="Car",
        ),
    }
    db_session.add_all(bookings.values())
    await db_session.commit()
    return bookings
