"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from fluxd_gateway.infrastructure.clients.providers import LoanProviderClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_provider_client() -> LoanProviderClient:
    """Provide loan provider feed client instance"""
    return LoanProviderClient()
