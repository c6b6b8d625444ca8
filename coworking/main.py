import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from coworking.db import init_database
from coworking.errors import (
    BookingError,
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from coworking.routers import bookings, resources

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    "lifespan for initing database"
    init_database()
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Coworking booker",
    description="Booking of workspaces and conference rooms without double-booking.",
    version="0.1.0",
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT",
    },
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    logger.error(f"{request.method} {request.url.path} refused ({exc.kind}): {exc.message}")
    return JSONResponse(
        status_code=ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST),
        content={"detail": exc.message, "kind": exc.kind},
    )


app.include_router(resources.router)
app.include_router(bookings.router)
