"""Standalone Product service application."""

from fastapi import FastAPI

from catalogue.api.routes import router
from catalogue.domain import catalogue
from shared.config import ServiceSettings
from shared.discovery import ServiceDirectory
from shared.service import build_service_app

ENDPOINTS = {
    "list": "/api/products",
    "detail": "/api/products/{product_id}",
}


def create_app(settings: ServiceSettings, directory: ServiceDirectory | None = None) -> FastAPI:
    return build_service_app(
        settings,
        routers=[router],
        domains={"/api/products": catalogue},
        announcements={"product": ENDPOINTS},
        directory=directory,
        title="Storefront product service",
    )
