from .sqlalchemy_repositories import (
    SQLAlchemyParkingLotRepository,
    SQLAlchemyBookingRepository,
)

__all__ = [
    "SQLAlchemyParkingLotRepository",
    "SQLAlchemyBookingRepository",
]
