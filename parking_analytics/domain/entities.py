from datetime import datetime
from typing import List, Optional


class ParkingLot:
    def __init__(
        self,
        owner_id: str,
        name: str = "",
        two_wheeler_capacity: Optional[int] = None,
        four_wheeler_capacity: Optional[int] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.owner_id = owner_id
        self.name = name
        self.two_wheeler_capacity = two_wheeler_capacity
        self.four_wheeler_capacity = four_wheeler_capacity

    @property
    def total_capacity(self) -> int:
        return (self.two_wheeler_capacity or 0) + (self.four_wheeler_capacity or 0)


class User:
    def __init__(
        self,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
        email: Optional[str] = None,
        id: Optional[str] = None,
    ):
        self.id = id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class Vehicle:
    def __init__(self, registration_number: str, vehicle_type: Optional[str] = None, id: Optional[str] = None):
        self.id = id
        self.registration_number = registration_number
        self.vehicle_type = vehicle_type


class Booking:
    def __init__(
        self,
        lot_id: str,
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        user_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
        hourly_rate: Optional[float] = None,
        vehicle_type: Optional[str] = None,
        id: Optional[str] = None,
        user: Optional[User] = None,
        vehicle: Optional[Vehicle] = None,
        lot: Optional[ParkingLot] = None,
    ):
        self.id = id
        self.lot_id = lot_id
        self.user_id = user_id
        self.vehicle_id = vehicle_id
        self.start_time = start_time
        self.end_time = end_time
        self.hourly_rate = hourly_rate
        self.vehicle_type = vehicle_type
        # Related records, only set when the query joined them
        self.user = user
        self.vehicle = vehicle
        self.lot = lot

    @property
    def amount(self) -> float:
        return self.hourly_rate or 0


class BookingFeedEntry:
    def __init__(
        self,
        id: str,
        user_name: str,
        vehicle_number: str,
        vehicle_type: str,
        parking_name: str,
        start_time: Optional[datetime],
        end_time: Optional[datetime],
    ):
        self.id = id
        self.user_name = user_name
        self.vehicle_number = vehicle_number
        self.vehicle_type = vehicle_type
        self.parking_name = parking_name
        self.start_time = start_time
        self.end_time = end_time


class RevenueEntry:
    def __init__(self, id: str, amount: float, date: Optional[datetime]):
        self.id = id
        self.amount = amount
        self.date = date


class RevenueSummary:
    def __init__(self, total: float = 0, monthly: float = 0, bookings: Optional[List[RevenueEntry]] = None):
        self.total = total
        self.monthly = monthly
        self.bookings = bookings if bookings is not None else []


class VehicleTypeCount:
    def __init__(self, vehicle_type: str, count: int):
        self.vehicle_type = vehicle_type
        self.count = count


class UtilizationSnapshot:
    def __init__(self, current: float, total: int, active_bookings: int):
        self.current = current
        self.total = total
        self.active_bookings = active_bookings
