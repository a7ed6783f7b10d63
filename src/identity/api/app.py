"""Standalone Auth service application."""

from fastapi import FastAPI

from identity.api.routes import router
from identity.domain import identity
from shared.config import ServiceSettings
from shared.discovery import ServiceDirectory
from shared.service import build_service_app

ENDPOINTS = {
    "login": "/api/auth/login",
    "register": "/api/auth/register",
    "validate_token": "/api/auth/validate-token",
    "user": "/api/auth/user",
}


def create_app(settings: ServiceSettings, directory: ServiceDirectory | None = None) -> FastAPI:
    return build_service_app(
        settings,
        routers=[router],
        domains={"/api/auth": identity},
        announcements={"auth": ENDPOINTS},
        directory=directory,
        title="Storefront auth service",
    )
