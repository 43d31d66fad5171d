from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def build_session_cleanup_service(ApplicationConfig, uow_factory):
    from egghunt.app.services.session_cleanup_service import SessionCleanupService

    return SessionCleanupService(
        uow_factory,
        cleanup_interval=timedelta(hours=ApplicationConfig.SESSION_CLEANUP_INTERVAL_HOURS),
        initial_delay=timedelta(seconds=ApplicationConfig.SESSION_CLEANUP_INITIAL_DELAY_SECONDS),
        enabled=ApplicationConfig.SESSION_CLEANUP_ENABLED,
    )


def create_app(ApplicationConfig) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from egghunt.depends import engine, unit_of_work_scope

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        cleanup = build_session_cleanup_service(ApplicationConfig, unit_of_work_scope)
        app.state.session_cleanup = cleanup
        cleanup.start()
        try:
            yield
        finally:
            await cleanup.stop()
            await engine.dispose()

    app = FastAPI(title="Easter Egg Hunt Sessions", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from egghunt.api.routes import health_check, sessions

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(sessions.router, tags=["Sessions"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
