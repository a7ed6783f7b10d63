"""Typed clients for calls one storefront service makes to another.

Each client resolves its peer through the ServiceDirectory on every call, so a
re-registered service is picked up without a restart.
"""

from dataclasses import dataclass

import structlog

from shared.discovery import ServiceDirectory
from shared.errors import AuthenticationError, ServiceUnavailableError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Caller:
    """The authenticated user behind a request, as vouched for by the auth service."""

    user_id: str
    username: str
    email: str
    role: str = "user"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class TokenVerifier:
    """Resolves bearer tokens to callers through the auth service."""

    def __init__(self, directory: ServiceDirectory) -> None:
        self.directory = directory

    def verify(self, token: str) -> Caller:
        response = self.directory.request("auth", "GET", "/api/auth/validate-token", headers=_bearer(token))
        body = response.body or {}

        if response.status_code in (401, 404) or (response.ok and not body.get("valid")):
            raise AuthenticationError(body.get("message") or "Invalid token")
        if not response.ok:
            raise ServiceUnavailableError(f"Auth service answered {response.status_code}")

        return Caller(
            user_id=str(body["user_id"]),
            username=body.get("username", ""),
            email=body.get("email", ""),
            role=body.get("role", "user"),
        )


class ProductCatalogue:
    """Read-only view of the product service."""

    def __init__(self, directory: ServiceDirectory) -> None:
        self.directory = directory

    def get_product(self, product_id: str) -> dict | None:
        """Return the product document, or None when the product does not exist."""
        response = self.directory.request("product", "GET", f"/api/products/{product_id}")
        if response.status_code == 404:
            return None
        if not response.ok:
            raise ServiceUnavailableError(f"Product service answered {response.status_code}")
        return response.body


class CartClient:
    """Acts on a user's cart with the user's own bearer token."""

    def __init__(self, directory: ServiceDirectory) -> None:
        self.directory = directory

    def clear(self, token: str) -> bool:
        """Empty the token holder's cart. Returns False when the cart service refused."""
        response = self.directory.request("cart", "POST", "/api/cart/clear", json={}, headers=_bearer(token))
        if not response.ok:
            logger.info("Cart service declined to clear cart", status_code=response.status_code)
        return response.ok
