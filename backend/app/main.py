"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import CORS_ALLOW_ORIGINS, LOG_FORMAT, LOG_LEVEL
from app.core.analyzer import analyze_feed
from app.core.errors import FeedAnalysisError, SimulatedFailureError
from app.schemas import (
    CUSTOM_ERROR_TYPES,
    AnalyzeFeedRequest,
    AnalyzeFeedResponse,
    ErrorResponse,
    FeedAnalysisOut,
)
from app.utils import now_utc
from config import settings

# Configure logging
logging.basicConfig(level=LOG_LEVEL.upper(), format=LOG_FORMAT)
logger = logging.getLogger("uvicorn")

FIELD_ERROR_MESSAGES = {
    "user_id": "Invalid user_id",
    "content": "Invalid content",
    "timestamp": "Invalid timestamp",
    "hashtags": "Invalid hashtags",
    "reactions": "Invalid reactions",
    "shares": "Invalid shares",
    "views": "Invalid views",
}


def get_now() -> datetime:
    """Reference instant for a request; overridden in tests."""
    return now_utc()


def error_response(status_code: int, message: str, details: Optional[Any] = None) -> JSONResponse:
    """
    Build a JSON error body of the form {"message": ..., "details": ...}.

    Args:
        status_code: HTTP status code
        message: Short human-readable message
        details: Optional structured details, omitted when None

    Returns:
        JSONResponse ready to be returned from a route or handler
    """
    body = ErrorResponse(message=message, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def describe_validation_error(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Reduce pydantic validation errors to one client-facing message.

    Payload-level problems win over per-message ones; among per-message
    errors the first reported is used.
    """
    if not errors:
        return "Invalid request payload"

    for error in errors:
        loc = tuple(error.get("loc", ()))
        if error.get("type") == "json_invalid":
            return "Invalid JSON body"
        if loc == ("body",):
            return "Missing request body" if error.get("type") == "missing" else "Invalid request payload"
        if len(loc) <= 2 or loc[1] != "messages":
            return "Invalid request payload"

    error = errors[0]
    loc = tuple(error["loc"])
    if error.get("type") in CUSTOM_ERROR_TYPES:
        return error["msg"]
    if len(loc) == 3:
        return "Invalid message object"
    return FIELD_ERROR_MESSAGES.get(loc[3], "Invalid message object")


# Initialize FastAPI app
app = FastAPI(
    title="Feed Analysis API",
    version="0.1.0",
    description="API for scoring social-feed batches: sentiment, trending topics, anomalies and engagement"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    message = describe_validation_error(exc.errors())
    logger.warning("Rejected %s payload: %s", request.url.path, message)
    return error_response(400, message)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": settings.SERVICE_NAME
    }


@app.post("/analyze-feed", response_model=AnalyzeFeedResponse, response_model_exclude_none=True)
async def analyze_feed_endpoint(
    payload: AnalyzeFeedRequest,
    now: datetime = Depends(get_now),
):
    """
    Analyze a batch of feed messages inside a time window.

    Args:
        payload: Messages and the look-back window in minutes
        now: Reference instant

    Returns:
        AnalyzeFeedResponse with the aggregate analysis
    """
    messages = [item.to_message() for item in payload.messages]

    try:
        logger.info(f"Analyzing {len(messages)} messages over {payload.time_window_minutes} minutes")
        analysis = await asyncio.to_thread(analyze_feed, messages, payload.time_window_minutes, now)
    except SimulatedFailureError as e:
        logger.warning("Business rule violation: %s", e.message)
        return error_response(422, "Business rule violation", {"code": "UNSUPPORTED_TIME_WINDOW"})
    except FeedAnalysisError as e:
        logger.warning("Analysis rejected: %s", e.message)
        return error_response(400, e.message)
    except Exception as e:
        logger.error(f"Error analyzing feed: {e}", exc_info=True)
        return error_response(500, "An error occurred")

    return AnalyzeFeedResponse(data=FeedAnalysisOut.from_analysis(analysis))


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.RELOAD)
