from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Development
    DEV_MODE: bool = Field(default=True, description="Enable debug mode")

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./parking_analytics.db", description="Database connection URL")
    ASYNC_DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./parking_analytics.db", description="Async database URL"
    )

    # FastAPI
    FASTAPI_HOST: str = Field(default="localhost", description="FastAPI host")
    FASTAPI_PORT: int = Field(default=8080, description="FastAPI port")

    # Reports
    RECENT_BOOKINGS_LIMIT: int = Field(default=10, ge=1, description="Number of bookings in the booking feed")
    REPORT_TIMEZONE: str = Field(default="UTC", description="Time zone used for the reporting clock")


# Create settings instance
settings = Settings()
