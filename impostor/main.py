from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from impostor import __version__
from impostor.api.models import ErrorResponse
from impostor.api.routes import router
from impostor.auth import Authorizer, SharedSecretAuthorizer
from impostor.config import Settings
from impostor.errors import ErrorKind, LobbyError
from impostor.lobby_service import LobbyService
from impostor.lobby_store import LobbyRegistry
from impostor.roles import RoleAssigner
from impostor.websocket_hub import LobbyUpdatesHub

logger = logging.getLogger(__name__)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.auth: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.state_conflict: status.HTTP_400_BAD_REQUEST,
    ErrorKind.internal: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump(by_alias=True))


async def _lobby_error_handler(request: Request, exc: LobbyError) -> JSONResponse:
    if exc.kind == ErrorKind.internal:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return _error(STATUS_BY_KIND[exc.kind], exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    where = ".".join(p for p in first.get("loc", ()) if isinstance(p, str) and p not in ("body", "query"))
    message = first.get("msg", "Invalid request")
    return _error(status.HTTP_400_BAD_REQUEST, f"{where}: {message}" if where else message)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # Anything unmatched under /api/ answers in the API's JSON shape.
    if request.url.path.startswith("/api/") and exc.status_code in (404, 405):
        return _error(status.HTTP_404_NOT_FOUND, "Not found")
    return await http_exception_handler(request, exc)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def build_lobby_service(settings: Settings) -> LobbyService:
    return LobbyService(registry=LobbyRegistry(), roles=RoleAssigner(words=settings.words))


def create_app(
    settings: Settings | None = None,
    *,
    service: LobbyService | None = None,
    authorizer: Authorizer | None = None,
) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="impostor", version=__version__)
    app.state.settings = settings
    app.state.lobby_service = service or build_lobby_service(settings)
    app.state.authorizer = authorizer or SharedSecretAuthorizer(settings.admin_password)
    app.state.hub = LobbyUpdatesHub()

    app.add_exception_handler(LobbyError, _lobby_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(router)

    # Serve the browser front end (no build step) when it ships with the deployment.
    if settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.static_dir), html=True), name="static")
    else:
        logger.info("Static directory %s not found; serving the API only", settings.static_dir)

    return app


def app_from_env() -> FastAPI:
    """Factory for `uvicorn --factory impostor.main:app_from_env`."""

    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    return create_app(settings)
