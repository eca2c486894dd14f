"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fluxd_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fluxd_gateway.api.v1 import emi, offers, tracker
from fluxd_gateway.infrastructure.observability.logging import setup_logging
from fluxd_gateway.config import settings

setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FLUXD Gateway",
        description="Loan affordability: EMI calculator, offer comparison and application tracker",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Last added runs first: request ID is set before metrics are taken
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(emi.router, prefix="/v1", tags=["calculator"])
    app.include_router(offers.router, prefix="/v1", tags=["offers"])
    app.include_router(tracker.router, prefix="/v1", tags=["tracker"])

    return app


app = create_app()
