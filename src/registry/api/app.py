"""Standalone Service Registry application."""

from fastapi import FastAPI

from registry.api.routes import router
from registry.domain import registry
from registry.service.proxy import Forwarder
from shared.config import ServiceSettings
from shared.service import build_service_app


def create_app(settings: ServiceSettings, forwarder: Forwarder | None = None) -> FastAPI:
    forwarder = forwarder or Forwarder(timeout=settings.http_timeout)
    app = build_service_app(
        settings,
        routers=[router],
        domains={"/register": registry, "/service": registry, "/proxy": registry},
        closeables=[forwarder],
        title="Storefront service registry",
    )
    app.state.forwarder = forwarder
    return app
