from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger

from parking_analytics.infrastructure.api.schemas.analytics import ErrorEnvelope


def success_response(data: Any, message: Optional[str] = None) -> JSONResponse:
    content = {"success": True}
    if message:
        content["message"] = message
    content["data"] = jsonable_encoder(data, by_alias=True)
    return JSONResponse(status_code=200, content=content)


def error_response(error: Exception, message: str = "An error occurred") -> JSONResponse:
    logger.error(f"Error: {message}: {error}")
    envelope = ErrorEnvelope(message=message, error=str(error))
    return JSONResponse(status_code=500, content=envelope.model_dump())


def bad_request_response(message: str) -> JSONResponse:
    envelope = ErrorEnvelope(message=message)
    return JSONResponse(status_code=400, content=envelope.model_dump(exclude_none=True))
