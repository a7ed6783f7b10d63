"""Relays a described request to a registered service and hands back its answer."""

from typing import Any

import requests
import structlog

from shared.discovery import ServiceResponse
from shared.errors import ServiceUnavailableError

logger = structlog.get_logger(__name__)

# Hop-by-hop and host-specific headers are never forwarded
_DROPPED_HEADERS = {"host", "content-length", "connection", "transfer-encoding"}


class Forwarder:
    """Owns the HTTP session used for proxied calls."""

    def __init__(self, timeout: float = 5.0, session: requests.Session | None = None) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()

    def forward(
        self,
        base_url: str,
        path: str,
        method: str = "GET",
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
        headers = {k: v for k, v in (headers or {}).items() if k.lower() not in _DROPPED_HEADERS}

        try:
            response = self.session.request(
                method.upper(),
                url,
                json=data if method.upper() not in ("GET", "HEAD") else None,
                params=data if method.upper() in ("GET", "HEAD") and isinstance(data, dict) else None,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Proxied request failed", method=method, url=url, error=str(exc))
            raise ServiceUnavailableError(f"Could not reach {url}") from exc

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = {"message": response.text}

        logger.debug("Proxied request", method=method, url=url, status_code=response.status_code)
        return ServiceResponse(status_code=response.status_code, body=body)

    def close(self) -> None:
        self.session.close()
