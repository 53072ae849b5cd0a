"""ProTech API — location resolution and service-area gating for site pages.

Run:
    uvicorn protech.api.main:app --reload
    # or
    protech-api
"""

import logging
import uuid
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from protech.api.routes import router
from protech.api.schemas import HealthResponse
from protech.config import settings
from protech.locations.catalog import CATALOG
from protech.locations.matcher import USER_LOCATION_HEADER, resolve_from_headers
from protech.observability.logging import correlation_id, setup_logging

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(json_format=settings.log_json, level=settings.log_level)
    logger.info(
        "ProTech API ready: %d core and %d expanded locations",
        len(CATALOG.core), len(CATALOG.expanded),
    )
    yield
    logger.info("ProTech API stopped")


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Tag every log line of a request with its X-Request-ID (generated when absent)."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = correlation_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id.reset(token)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class UserLocationMiddleware(BaseHTTPMiddleware):
    """Resolve the visitor's market from request headers once per request."""

    async def dispatch(self, request: Request, call_next):
        request.state.service_location = resolve_from_headers(request.headers)
        response = await call_next(request)
        response.headers[USER_LOCATION_HEADER] = request.state.service_location.label
        return response


app = FastAPI(
    title="ProTech Locations",
    description="Service-area resolution for ProTech Heating & Cooling across Northeast Ohio.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(UserLocationMiddleware)
app.add_middleware(CorrelationIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        status="ok",
        core_locations=len(CATALOG.core),
        expanded_locations=len(CATALOG.expanded),
    )


def run() -> None:
    """Entry point for protech-api command."""
    uvicorn.run("protech.api.main:app", host="0.0.0.0", port=8000, reload=False)
