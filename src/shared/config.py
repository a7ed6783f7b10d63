"""Environment-driven settings shared by every storefront service."""

import os
from dataclasses import dataclass

from protean.domain import Domain

DEFAULT_PORTS = {
    "registry": 5000,
    "auth": 5001,
    "product": 5002,
    "cart": 5003,
    "order": 5004,
}


@dataclass(frozen=True)
class ServiceSettings:
    """Settings for one service process.

    Read once at start-up by `load_settings` and carried on `app.state`; never
    mutated afterwards.
    """

    name: str
    host: str = "localhost"
    port: int = 5000
    registry_url: str = "http://localhost:5000"
    document_store_url: str | None = None
    jwt_secret: str = "dev-secret-change-me"
    jwt_expires_minutes: int = 24 * 60
    http_timeout: float = 5.0
    directory: str = "http"

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


def load_settings(service: str) -> ServiceSettings:
    """Build settings for `service` from the process environment."""
    env = os.environ
    port = env.get(f"{service.upper()}_PORT") or env.get("PORT") or DEFAULT_PORTS.get(service, 8000)

    return ServiceSettings(
        name=service,
        host=env.get("SERVICE_HOST", "localhost"),
        port=int(port),
        registry_url=env.get("REGISTRY_URL", "http://localhost:5000").rstrip("/"),
        document_store_url=env.get("DOCUMENT_STORE_URL") or None,
        jwt_secret=env.get("JWT_SECRET", "dev-secret-change-me"),
        jwt_expires_minutes=int(env.get("JWT_EXPIRES_MINUTES", str(24 * 60))),
        http_timeout=float(env.get("HTTP_TIMEOUT_SECONDS", "5")),
        directory=env.get("SERVICE_DIRECTORY", "http").lower(),
    )


def configure_document_store(domain: Domain, settings: ServiceSettings) -> None:
    """Point the domain's default database at the document store, if one is configured.

    Must run before `domain.init()`. Without `DOCUMENT_STORE_URL` the domain keeps
    Protean's in-memory provider.
    """
    if not settings.document_store_url:
        return

    domain.config["databases"]["default"] = {
        "provider": "elasticsearch",
        "database_uri": {"hosts": [settings.document_store_url]},
        "namespace_prefix": settings.name,
    }
