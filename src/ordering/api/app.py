"""Standalone Order service application."""

from fastapi import FastAPI

from ordering.api.routes import router
from ordering.domain import ordering
from shared.config import ServiceSettings
from shared.discovery import ServiceDirectory
from shared.service import build_service_app

ENDPOINTS = {
    "list": "/api/orders",
    "create": "/api/orders",
    "detail": "/api/orders/{order_id}",
}


def create_app(settings: ServiceSettings, directory: ServiceDirectory | None = None) -> FastAPI:
    return build_service_app(
        settings,
        routers=[router],
        domains={"/api/orders": ordering},
        announcements={"order": ENDPOINTS},
        directory=directory,
        title="Storefront order service",
    )
