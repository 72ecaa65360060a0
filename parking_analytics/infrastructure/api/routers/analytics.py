from fastapi import APIRouter, Depends
from typing import Optional

from parking_analytics.application.services.analytics_service import AnalyticsService
from parking_analytics.infrastructure.api.responses import success_response, error_response, bad_request_response
from parking_analytics.infrastructure.api.schemas.analytics import (
    BookingFeedItem,
    RevenueSummaryResponse,
    VehicleTypeCountResponse,
    UtilizationResponse,
)
from parking_analytics.infrastructure.persistence.database import AsyncSessionLocal
from parking_analytics.infrastructure.persistence.sqlalchemy_repositories import (
    SQLAlchemyParkingLotRepository,
    SQLAlchemyBookingRepository,
)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def get_analytics_service() -> AnalyticsService:
    return AnalyticsService(
        parking_lot_repo=SQLAlchemyParkingLotRepository(AsyncSessionLocal),
        booking_repo=SQLAlchemyBookingRepository(AsyncSessionLocal),
    )


async def _booking_analytics(analytics: AnalyticsService, owner_id: Optional[str]):
    try:
        entries = await analytics.get_booking_feed(owner_id)
        return success_response([BookingFeedItem.model_validate(e) for e in entries])
    except Exception as e:
        return error_response(e, "Failed to fetch booking analytics")


async def _revenue_analytics(analytics: AnalyticsService, owner_id: Optional[str]):
    try:
        summary = await analytics.get_revenue_summary(owner_id)
        return success_response(RevenueSummaryResponse.model_validate(summary))
    except Exception as e:
        return error_response(e, "Failed to fetch revenue analytics")


async def _vehicle_types(analytics: AnalyticsService, owner_id: Optional[str]):
    try:
        counts = await analytics.get_vehicle_type_histogram(owner_id)
        return success_response([VehicleTypeCountResponse.model_validate(c) for c in counts])
    except Exception as e:
        return error_response(e, "Failed to fetch vehicle types")


async def _utilization(analytics: AnalyticsService, owner_id: Optional[str]):
    if not owner_id:
        return bad_request_response("Owner ID is required")
    try:
        snapshot = await analytics.get_utilization(owner_id)
        return success_response(
            UtilizationResponse.model_validate(snapshot),
            message="Utilization data fetched successfully",
        )
    except Exception as e:
        return error_response(e, "Failed to fetch utilization data")


# The routes without an owner segment take no owner at all, not even from the query string.

@router.get("/bookings")
async def get_booking_analytics_without_owner(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _booking_analytics(analytics, None)


@router.get("/bookings/{owner_id}")
async def get_booking_analytics(owner_id: str, analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _booking_analytics(analytics, owner_id)


@router.get("/revenue")
async def get_revenue_analytics_without_owner(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _revenue_analytics(analytics, None)


@router.get("/revenue/{owner_id}")
async def get_revenue_analytics(owner_id: str, analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _revenue_analytics(analytics, owner_id)


@router.get("/vehicle-types")
async def get_vehicle_types_without_owner(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _vehicle_types(analytics, None)


@router.get("/vehicle-types/{owner_id}")
async def get_vehicle_types(owner_id: str, analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _vehicle_types(analytics, owner_id)


@router.get("/utilization")
async def get_utilization_without_owner(analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _utilization(analytics, None)


@router.get("/utilization/{owner_id}")
async def get_utilization(owner_id: str, analytics: AnalyticsService = Depends(get_analytics_service)):
    return await _utilization(analytics, owner_id)
