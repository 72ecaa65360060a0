from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Sequence

from parking_analytics.domain.entities import ParkingLot, Booking


class AbstractParkingLotRepository(ABC):
    @abstractmethod
    async def get_by_owner(self, owner_id: str) -> List[ParkingLot]:
        pass

    @abstractmethod
    async def get_by_ids(self, lot_ids: Sequence[str]) -> List[ParkingLot]:
        pass


class AbstractBookingRepository(ABC):
    @abstractmethod
    async def get_recent_by_lots(self, lot_ids: Sequence[str], limit: int) -> List[Booking]:
        """Newest bookings first, with user, vehicle and lot attached."""
        pass

    @abstractmethod
    async def get_by_lots(self, lot_ids: Sequence[str]) -> List[Booking]:
        pass

    @abstractmethod
    async def count_active_by_lots(self, lot_ids: Sequence[str], now: datetime) -> int:
        pass
