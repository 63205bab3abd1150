import asyncio
from contextlib import asynccontextmanager, suppress

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from projectboard.config import settings
from projectboard.core.exceptions import BoardException
from projectboard.core.logging_config import setup_logging
from projectboard.deps import get_store
from projectboard.routes.admin_routes import router as admin_router
from projectboard.routes.project_routes import router as project_router
from projectboard.routes.reference_routes import router as reference_router
from projectboard.services.admin_service import seed_admin_user
from projectboard.services.maintenance_service import run_periodic_sweep
from projectboard.services.reference_service import seed_reference_data

SERVICE_NAME = "projectboard"
VERSION = "0.1.0"

logger = setup_logging()


def _resolve_store(app: FastAPI):
    # honour dependency overrides so tests and scripts share one store
    return app.dependency_overrides.get(get_store, get_store)()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting project board API...")
    store = _resolve_store(app)
    seed_reference_data(store)
    if settings.BOOTSTRAP_ADMIN_EMAIL:
        seed_admin_user(store, settings.BOOTSTRAP_ADMIN_EMAIL, settings.BOOTSTRAP_ADMIN_NAME)

    sweeper = None
    if settings.SWEEP_INTERVAL_SECONDS > 0:
        logger.info("Expired-project sweep every %ss", settings.SWEEP_INTERVAL_SECONDS)
        sweeper = asyncio.create_task(
            run_periodic_sweep(lambda: _resolve_store(app), settings.SWEEP_INTERVAL_SECONDS)
        )
    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        logger.info("Shutting down project board API...")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Project Board API",
        description="School bulletin board: students post projects, approved admins moderate.",
        version=VERSION,
        lifespan=lifespan,
    )

    allowed_origins = [o.strip() for o in settings.ALLOWED_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins or ["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["Content-Length"],
        max_age=600,
    )

    @app.exception_handler(BoardException)
    async def board_exception_handler(request: Request, exc: BoardException):
        logger.warning(f"{exc.status_code} {exc.detail} - Path: {request.url.path}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get(f"{settings.API_PREFIX}/health", tags=["health"])
    def healthcheck():
        return {"status": "ok", "service": SERVICE_NAME, "version": VERSION}

    app.include_router(project_router, prefix=settings.API_PREFIX)
    app.include_router(admin_router, prefix=settings.API_PREFIX)
    app.include_router(reference_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
