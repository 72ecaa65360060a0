from typing import Iterable, List

from loguru import logger

from parking_analytics.application.repositories import AbstractParkingLotRepository
from parking_analytics.domain.common import is_valid_object_id
from parking_analytics.domain.entities import ParkingLot
from parking_analytics.domain.exceptions import InvalidArgument, DependencyError


def lot_ids_for_owner(lots: Iterable[ParkingLot], owner_id: str) -> List[str]:
    """Ids of the lots in ``lots`` that belong to ``owner_id``, in the order given."""
    return [lot.id for lot in lots if lot.owner_id == owner_id]


class OwnerResolver:
    def __init__(self, parking_lot_repo: AbstractParkingLotRepository):
        self.parking_lot_repo = parking_lot_repo

    async def resolve_lot_ids(self, owner_id: str) -> List[str]:
        if not is_valid_object_id(owner_id):
            raise InvalidArgument("Invalid owner ID format")

        try:
            lots = await self.parking_lot_repo.get_by_owner(owner_id)
        except Exception as e:
            raise DependencyError(f"Error validating owner parkings: {e}") from e

        lot_ids = lot_ids_for_owner(lots or [], owner_id)
        logger.debug(f"Owner {owner_id} owns {len(lot_ids)} parking lot(s)")
        return lot_ids
