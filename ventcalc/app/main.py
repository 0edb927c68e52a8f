import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ventcalc import __version__
from ventcalc.app.config import Settings, get_settings, setup_logging
from ventcalc.app.middleware.error_handler import register_exception_handlers
from ventcalc.app.routes import ventilation

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application"""
    settings = settings or get_settings()
    setup_logging(settings.debug)

    app = FastAPI(
        title="VentCalc API",
        version=__version__,
        description="Natural ventilation sizing for Class I hazardous-area enclosures"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"REQUEST: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code}")
        return response

    register_exception_handlers(app, settings.debug)

    app.include_router(ventilation.router, prefix="/api/v1/ventilation")

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    @app.get("/healthz")
    async def healthz():
        return {
            "status": "ok",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "ventcalc-api",
            "version": __version__
        }

    return app


app = create_app()
