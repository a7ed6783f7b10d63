"""FastAPI application factory shared by every storefront service.

Each request is wrapped in the Protean domain context that owns its URL prefix,
and tagged with a request id for structured logging. The service directory is
created in the lifespan (unless one was injected) and closed on shutdown.
"""

from collections.abc import Callable, Iterable
from contextlib import asynccontextmanager
from uuid import uuid4

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from protean.domain import Domain
from starlette.concurrency import run_in_threadpool

from shared.config import ServiceSettings
from shared.discovery import ServiceDirectory, open_directory
from shared.errors import ServiceUnavailableError, register_error_handlers
from shared.logging import add_context, clear_context

logger = structlog.get_logger(__name__)

Registrar = Callable[[str, str, dict[str, str]], object]


def get_settings(request: Request) -> ServiceSettings:
    return request.app.state.settings


def get_directory(request: Request) -> ServiceDirectory:
    return request.app.state.directory


def announce(registrar: Registrar, base_url: str, announcements: dict[str, dict[str, str]]) -> list[str]:
    """Register every announced service, best-effort. Returns the names that made it."""
    registered = []
    for name, endpoints in announcements.items():
        try:
            registrar(name, base_url, endpoints)
        except ServiceUnavailableError as exc:
            logger.warning("Failed to register with service registry", service=name, error=exc.message)
            continue
        logger.info("Registered with service registry", service=name, url=base_url)
        registered.append(name)
    return registered


def build_service_app(
    settings: ServiceSettings,
    routers: Iterable[APIRouter],
    domains: dict[str, Domain],
    announcements: dict[str, dict[str, str]] | None = None,
    directory: ServiceDirectory | None = None,
    registrar: Registrar | None = None,
    closeables: Iterable = (),
    title: str | None = None,
) -> FastAPI:
    """Assemble a service app.

    ``domains`` maps URL prefixes to the domain whose context requests under
    that prefix run in. Domains must already be initialized. Objects in
    ``closeables`` are closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.directory is None
        if owned:
            app.state.directory = open_directory(settings)

        if announcements:
            register = registrar or app.state.directory.register
            await run_in_threadpool(announce, register, settings.base_url, announcements)

        yield

        if owned:
            app.state.directory.close()
            app.state.directory = None
        for resource in closeables:
            resource.close()

    app = FastAPI(title=title or f"Storefront {settings.name} service", lifespan=lifespan)
    app.state.settings = settings
    app.state.directory = directory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Longest prefix first so nested prefixes resolve to the most specific domain
    prefixes = sorted(domains, key=len, reverse=True)

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the correct Protean domain context for each request."""
        clear_context()
        add_context(request_id=request.headers.get("X-Request-ID") or uuid4().hex, service=settings.name)

        path = request.url.path
        domain = next((domains[p] for p in prefixes if path.startswith(p)), None)
        if domain is not None:
            with domain.domain_context():
                return await call_next(request)
        return await call_next(request)

    for router in routers:
        app.include_router(router)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "service": settings.name,
            "domains": sorted({d.name for d in domains.values()}),
        }

    register_error_handlers(app)
    return app
