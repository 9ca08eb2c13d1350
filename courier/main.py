"""
Courier Records - Main Application
Pickup & delivery tracking API
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from courier.config import Settings, get_settings
from courier.database import create_db_engine, create_session_factory, init_db
from courier.errors import CourierError
from courier.logging_setup import configure_logging
from courier.api.routes import router
from courier.api.auth_routes import router as auth_router
from courier.api.user_routes import router as user_router
from courier.api.record_routes import router as record_router
from courier.api.upload_routes import router as upload_router
from courier.api.stats_routes import router as stats_router

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store once at start-up, dispose it on shutdown"""
    settings: Settings = app.state.settings
    engine = create_db_engine(settings)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("[Server] Courier Records v%s ready (%s)", VERSION, settings.app_env)

    yield

    engine.dispose()
    logger.info("[Server] Courier Records stopped")


async def handle_courier_error(request: Request, exc: CourierError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request."
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return JSONResponse(status_code=400, content={"error": message})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for ``settings`` (defaults to the environment)"""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Courier Records",
        description="Pickup & delivery records: upload, query and recap",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CourierError, handle_courier_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(router)
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(record_router)
    app.include_router(upload_router)
    app.include_router(stats_router)

    @app.get("/api-info")
    def api_info():
        """API Info endpoint"""
        return {
            "name": "Courier Records",
            "version": VERSION,
            "features": ["Authentication", "Excel Upload", "Pickup & Delivery", "Recap"],
            "docs": "/docs",
        }

    return app


app = create_app()
