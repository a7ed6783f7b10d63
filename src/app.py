"""Storefront all-in-one FastAPI application for local development.

Mounts the registry and every service router in one process. Each request is
wrapped in the correct domain context based on URL prefix. Services announce
themselves straight into the in-process registry. With ``SERVICE_DIRECTORY=memory``
peer calls are dispatched into this app without touching the network; otherwise
lookups go through the registry's HTTP API at ``REGISTRY_URL`` (this process,
by default).

Usage:
    uvicorn app:app --app-dir src --port 5000 --reload
"""

from catalogue.api import router as product_router
from catalogue.api.app import ENDPOINTS as PRODUCT_ENDPOINTS
from catalogue.domain import catalogue
from identity.api import router as auth_router
from identity.api.app import ENDPOINTS as AUTH_ENDPOINTS
from identity.domain import identity
from ordering.api import router as order_router
from ordering.api.app import ENDPOINTS as ORDER_ENDPOINTS
from ordering.domain import ordering
from registry.api import router as registry_router
from registry.domain import registry
from registry.service.local import LocalServiceDirectory
from registry.service.proxy import Forwarder
from shared.config import configure_document_store, load_settings
from shared.service import build_service_app
from shopping.api import router as cart_router
from shopping.api.app import ENDPOINTS as CART_ENDPOINTS
from shopping.domain import shopping

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
settings = load_settings("registry")

for _domain in (registry, identity, catalogue, shopping, ordering):
    configure_document_store(_domain, settings)
    _domain.init()


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
forwarder = Forwarder(timeout=settings.http_timeout)
local_directory = LocalServiceDirectory()

app = build_service_app(
    settings,
    routers=[registry_router, auth_router, product_router, cart_router, order_router],
    domains={
        "/register": registry,
        "/service": registry,
        "/proxy": registry,
        "/api/auth": identity,
        "/api/products": catalogue,
        "/api/cart": shopping,
        "/api/orders": ordering,
    },
    announcements={
        "auth": AUTH_ENDPOINTS,
        "product": PRODUCT_ENDPOINTS,
        "cart": CART_ENDPOINTS,
        "order": ORDER_ENDPOINTS,
    },
    directory=local_directory if settings.directory == "memory" else None,
    registrar=local_directory.register,
    closeables=[forwarder],
    title="Storefront API",
)
app.state.forwarder = forwarder
local_directory.app = app
