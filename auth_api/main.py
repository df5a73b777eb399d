"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth_api.api import auth
from auth_api.config import Settings, get_settings
from auth_api.database import create_engine_from_settings, create_session_factory
from auth_api.exceptions import AuthError, StoreFailureError, ValidationError
from auth_api.schemas.response import ErrorResponse
from auth_api.services.passwords import PasswordHasher
from auth_api.services.tokens import TokenService

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )
    for _noisy in ("passlib", "httpx"):
        logging.getLogger(_noisy).setLevel(logging.WARNING)
    if not settings.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def error_response(exc: AuthError) -> JSONResponse:
    errors = exc.errors if isinstance(exc, ValidationError) and exc.errors else None
    body = ErrorResponse(message=exc.message, errors=errors)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=exc.headers,
    )


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    """Map a core failure to its status and safe message."""
    if isinstance(exc, StoreFailureError):
        logger.error("Store failure on %s %s", request.method, request.url.path)
    return error_response(exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation failures as a 400 with the offending fields."""
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    return error_response(ValidationError("Invalid request body", errors=errors))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, answer with the generic 500 envelope."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return error_response(AuthError())


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application and its long-lived components from ``settings``."""
    settings = settings or get_settings()
    configure_logging(settings)

    if settings.uses_insecure_secret:
        logger.warning(
            "JWT_SECRET is not set; using an insecure default (environment=%s)",
            settings.environment,
        )

    engine = create_engine_from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        logger.info("Starting %s (environment=%s)", settings.app_name, settings.environment)
        yield
        await engine.dispose()

    app = FastAPI(
        title=settings.app_name,
        description="User registration and login with signed session tokens",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_service = TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.jwt_expires_in,
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routers
    app.include_router(auth.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("auth_api.main:app", host="0.0.0.0", port=8000)  # noqa: S104
