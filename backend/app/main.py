# backend/app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import api_booking, api_contact, api_helper, api_review, api_user, auth
from .core.config import settings
from .core.observability import setup_logging
from .database import Database
from .utils.errors import DomainError
from .utils.status_logger import register_status_listeners

# Configure logging before creating any loggers
setup_logging()
logger = logging.getLogger(__name__)

register_status_listeners()


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.SQLALCHEMY_DATABASE_URL).connect()
    if settings.AUTO_CREATE_SCHEMA:
        database.create_schema()
    app.state.database = database
    logger.info("startup.complete")
    try:
        yield
    finally:
        database.close()
        logger.info("shutdown.complete")


app = FastAPI(title="SilverConnect API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Render engine errors as ``{"detail": {"message", "field_errors"}}``."""
    logger.warning(
        "%s at %s: %s %s",
        type(exc).__name__,
        request.url.path,
        exc.message,
        exc.field_errors,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"message": exc.message, "field_errors": exc.field_errors}},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return validation errors with details and log them for debugging."""
    errors = exc.errors()
    logger.warning("Validation error at %s: %s", request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(errors)},
    )


def jsonable_errors(errors):
    # ctx may carry exception instances that are not JSON serializable
    return [{k: v for k, v in err.items() if k != "ctx"} for err in errors]


api_prefix = settings.API_PREFIX
app.include_router(auth.router, prefix=api_prefix)
app.include_router(api_user.router, prefix=api_prefix)
app.include_router(api_helper.router, prefix=api_prefix)
app.include_router(api_booking.router, prefix=api_prefix)
app.include_router(api_review.router, prefix=api_prefix)
app.include_router(api_contact.router, prefix=api_prefix)


@app.get("/")
def read_root():
    return {"message": "SilverConnect API is running"}
