"""Locations API — FastAPI backend."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from utils.config import CORS_ORIGINS, LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

from db import SessionLocal, init_db
from api.locations import router as locations_router
from api.routes import router
from locations_core import LocationService, LocationServiceError
from locations_core.identity import DatabaseIdentityResolver
from schemas.errors import ErrorResponse

LOG = logging.getLogger(__name__)

app = FastAPI(
    title="Locations API",
    description="Per-user location records: list, create, update, delete",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One service for the app lifetime; it holds the session factory, never a session.
app.state.location_service = LocationService(SessionLocal, DatabaseIdentityResolver())

app.include_router(router, prefix="/api")
app.include_router(locations_router, prefix="/api")


@app.exception_handler(LocationServiceError)
async def location_error_handler(request: Request, exc: LocationServiceError) -> JSONResponse:
    """Typed service failures -> their status code."""
    if exc.status_code >= 500:
        LOG.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body or query -> 400."""
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(detail="; ".join(messages) or "Invalid request.").model_dump(),
    )


@app.on_event("startup")
def startup() -> None:
    """Create tables if missing."""
    init_db()


@app.get("/")
def root() -> dict:
    """Root redirect/info."""
    return {"service": "locations-api", "docs": "/docs", "health": "/api/health"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
