import uvicorn
from fastapi import FastAPI

from parking_analytics.config.settings_env import settings
from parking_analytics.infrastructure.api.routers import analytics
from parking_analytics.shared.utils import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title="Parking Owner Analytics",
        description="Booking, revenue, vehicle type and utilization reports for parking lot owners",
    )
    app.include_router(analytics.router)
    logger.debug("Analytics routes registered")
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "parking_analytics.main:app",
        host=settings.FASTAPI_HOST,
        port=settings.FASTAPI_PORT,
        reload=settings.DEV_MODE,
    )
