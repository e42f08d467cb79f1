"""
HTTP interface

Two routes:
  POST /track-user-location  -> initialized / updated / trigger quiz
  POST /generate-quiz        -> parsed questions plus raw model output

Every response body is JSON; errors carry ``error`` and usually ``details``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from .providers.base import ProviderError
from .service import ProximityQuizService

logger = logging.getLogger(__name__)


class TrackLocationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GenerateQuizRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location_keyword: str = Field(..., alias="locationKeyword", min_length=1)


def error_response(error: str, details: Optional[str] = None, status_code: int = 500) -> JSONResponse:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


def create_app(service: Optional[ProximityQuizService] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        service: Service instance (defaults to one built from config)
    """
    service = service or ProximityQuizService()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await service.close()

    app = FastAPI(title="Proximity Quiz Service", lifespan=lifespan)
    app.state.service = service

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return error_response("Invalid JSON payload", _describe_validation_errors(exc), 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and wrong methods both read as "not found"
        if exc.status_code in (404, 405):
            return error_response("Not Found", status_code=404)
        return error_response(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.url.path}")
        return error_response("Internal Server Error", str(exc), 500)

    @app.post("/track-user-location")
    def track_user_location(payload: TrackLocationRequest):
        try:
            result = service.track_location(payload.user_id, payload.latitude, payload.longitude)
        except Exception as e:
            logger.exception(f"Failed to track location for user {payload.user_id}")
            return error_response("Failed to track user location", str(e), 500)
        return result.to_dict()

    @app.post("/generate-quiz")
    async def generate_quiz(payload: GenerateQuizRequest):
        try:
            quiz = await service.generate_quiz(payload.location_keyword)
        except ProviderError as e:
            logger.warning(f"Quiz generation failed for {payload.location_keyword!r}: {e}")
            return error_response("Quiz generation failed", str(e), 502)
        except Exception as e:
            logger.exception(f"Quiz generation failed for {payload.location_keyword!r}")
            return error_response("Quiz generation failed", str(e), 500)
        return quiz.to_dict()

    return app
