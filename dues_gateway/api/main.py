"""FastAPI application factory"""

from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from dues_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from dues_gateway.api.v1 import billing_config, debt
from dues_gateway.domain.billing_config import default_billing_config
from dues_gateway.domain.config_store import BillingConfigStore
from dues_gateway.infrastructure.observability.logging import setup_logging
from dues_gateway.config import settings

setup_logging(settings.log_level)


def create_app(config_store: Optional[BillingConfigStore] = None) -> FastAPI:
    """
    Build the dues gateway.

    Each app owns its configuration holder; pass one in to share it with the
    component that listens to the association's live configuration.
    """
    app = FastAPI(
        title="Dues Gateway",
        description="Member dues debt and billing configuration service",
        version="0.1.0",
    )
    app.state.config_store = config_store or BillingConfigStore(default_billing_config(settings))

    # last added runs first: request ID is set before metrics are timed
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        current = app.state.config_store.current()
        return {
            "status": "ok",
            "service": settings.service_name,
            "billing_cutoff_date": current.cutoff_date,
        }

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(debt.router, prefix="/v1", tags=["debt"])
    app.include_router(billing_config.router, prefix="/v1", tags=["billing-config"])

    return app


app = create_app()
