from datetime import datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class AnalyticsModel(BaseModel):
    """Report payloads are read from domain objects and serialized with camelCase keys."""

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class BookingFeedItem(AnalyticsModel):
    id: str
    user_name: str = ""
    vehicle_number: str = ""
    vehicle_type: str = ""
    parking_name: str = ""
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator('start_time', 'end_time')
    @classmethod
    def make_datetime_aware(cls, dt: Optional[datetime]) -> Optional[datetime]:
        if dt is None:
            return dt
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt


# Amounts keep whichever numeric type the store returned, so zero stays 0 and not 0.0.
class RevenueBooking(AnalyticsModel):
    id: str
    amount: Union[int, float] = 0
    date: Optional[datetime] = None


class RevenueSummaryResponse(AnalyticsModel):
    total: Union[int, float] = 0
    monthly: Union[int, float] = 0
    bookings: List[RevenueBooking] = []


class VehicleTypeCountResponse(AnalyticsModel):
    vehicle_type: str
    count: int


class UtilizationResponse(AnalyticsModel):
    current: float
    total: int
    active_bookings: int


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
