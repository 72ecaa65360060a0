from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, ForeignKey
from sqlalchemy.orm import declarative_base, relationship

from parking_analytics.domain.common import new_object_id
from parking_analytics.shared.custom_types import UTCDateTime

Base = declarative_base()


def _object_id_column(**kwargs):
    return Column(String(24), primary_key=True, default=new_object_id, **kwargs)


class Owner(Base):
    __tablename__ = "owners"

    id = _object_id_column()
    name = Column(String, nullable=True)
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))

    parking_lots = relationship("ParkingLot", back_populates="owner")


class ParkingLot(Base):
    __tablename__ = "parking_lots"

    id = _object_id_column()
    owner_id = Column(String(24), ForeignKey("owners.id"), index=True, nullable=False)
    name = Column(String, nullable=False, default="")
    two_wheeler_capacity = Column(Integer, nullable=True)
    four_wheeler_capacity = Column(Integer, nullable=True)

    owner = relationship("Owner", back_populates="parking_lots")
    bookings = relationship("Booking", back_populates="lot")


class User(Base):
    __tablename__ = "users"

    id = _object_id_column()
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    email = Column(String, nullable=True)

    bookings = relationship("Booking", back_populates="user")


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = _object_id_column()
    registration_number = Column(String, index=True, nullable=False)
    vehicle_type = Column(String, nullable=True)

    bookings = relationship("Booking", back_populates="vehicle")


class Booking(Base):
    __tablename__ = "bookings"

    id = _object_id_column()
    lot_id = Column(String(24), ForeignKey("parking_lots.id"), index=True, nullable=False)
    user_id = Column(String(24), ForeignKey("users.id"), nullable=True)
    vehicle_id = Column(String(24), ForeignKey("vehicles.id"), nullable=True)
    start_time = Column(UTCDateTime, index=True, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    hourly_rate = Column(Float, nullable=True)
    vehicle_type = Column(String, nullable=True)  # copied from the vehicle at booking time
    created_at = Column(UTCDateTime, default=lambda: datetime.now(timezone.utc))

    lot = relationship("ParkingLot", back_populates="bookings")
    user = relationship("User", back_populates="bookings")
    vehicle = relationship("Vehicle", back_populates="bookings")
