from .abstract_repositories import (
    AbstractParkingLotRepository,
    AbstractBookingRepository,
)

__all__ = [
    "AbstractParkingLotRepository",
    "AbstractBookingRepository",
]
