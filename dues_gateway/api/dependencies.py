"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from dues_gateway.domain.config_store import BillingConfigStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_config_store(request: Request) -> BillingConfigStore:
    """Provide the application's billing configuration holder"""
    return request.app.state.config_store
