"""API routers, one per deployable service."""

from .v1.router import lending_router, notifications_api_router, payments_api_router

__all__ = ["lending_router", "notifications_api_router", "payments_api_router"]
