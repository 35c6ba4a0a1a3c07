"""
Application factory: settings, persistence, validators, routers and the
boundary that turns every failure into a {success, message} envelope.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.api.routes import user, wallet
from app.core.config import Settings, get_settings
from app.core.logging import configure_logging
from app.core.validators import ValidatorFactory
from app.db.session import build_engine, build_session_factory, create_schema
from app.exceptions.http import ServiceError
from app.schemas import ApiResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred, please try again later."


def _envelope(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse(success=False, message=message).model_dump(by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return _envelope(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'] if part != 'body')}: {error['msg']}" for error in exc.errors()
    )
    return _envelope(status.HTTP_400_BAD_REQUEST, f"Invalid request. {details}")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while processing %s %s", request.method, request.url.path)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the application. Fails fast on invalid settings or a wallet scheme
    without a validator.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    validator_factory = ValidatorFactory()
    engine = build_engine(settings.database_url, echo=settings.debug)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_schema(engine)
        logger.info("%s started.", settings.app_name)
        yield
        await engine.dispose()

    app = FastAPI(title=settings.app_name, version="v1", lifespan=lifespan)
    app.state.settings = settings
    app.state.validator_factory = validator_factory
    app.state.session_factory = build_session_factory(engine)

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(user.router)
    app.include_router(wallet.router)
    return app
