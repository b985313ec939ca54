from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from contextlib import asynccontextmanager

from enquiry_tracker_svc import config
from enquiry_tracker_svc.errors import AppError
from enquiry_tracker_svc.models import init_db
from enquiry_tracker_svc.schemas.common import ErrorEnvelope
from enquiry_tracker_svc.utils.security import using_default_secret

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create tables and warn about development fallbacks."""
    try:
        init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(e, exc_info=True)
        # re-raise so startup fails visibly
        raise
    if using_default_secret():
        logger.warning("SECRET_KEY is not set; tokens are signed with the insecure development default")
    yield


def _error_body(message: str, errors=None) -> dict:
    envelope = ErrorEnvelope(message=message, errors=jsonable_encoder(errors) if errors is not None else None)
    return envelope.model_dump(exclude_none=True)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.message, exc.errors))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_body("Validation failed", exc.errors()))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(exc, exc_info=exc)
    errors = repr(exc) if config.is_development() else None
    return JSONResponse(status_code=500, content=_error_body("Internal server error", errors))


def create_app() -> FastAPI:
    app = FastAPI(debug=False, title="enquiry_tracker_svc", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Import and register routers directly. Keep app file minimal.
    from enquiry_tracker_svc.routers import auth_router, users_router, enquiries_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users_router, prefix="/api/users", tags=["users"])
    app.include_router(enquiries_router, prefix="/api/enquiries", tags=["enquiries"])

    @app.get("/", include_in_schema=False)
    def root() -> str:
        return "Backend running"

    @app.get("/api/health", tags=["health"])
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
