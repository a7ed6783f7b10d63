"""Standalone Cart service application."""

from fastapi import FastAPI

from shared.config import ServiceSettings
from shared.discovery import ServiceDirectory
from shared.service import build_service_app
from shopping.api.routes import router
from shopping.domain import shopping

ENDPOINTS = {
    "get": "/api/cart/get",
    "add_item": "/api/cart/items",
    "clear": "/api/cart/clear",
}


def create_app(settings: ServiceSettings, directory: ServiceDirectory | None = None) -> FastAPI:
    return build_service_app(
        settings,
        routers=[router],
        domains={"/api/cart": shopping},
        announcements={"cart": ENDPOINTS},
        directory=directory,
        title="Storefront cart service",
    )
