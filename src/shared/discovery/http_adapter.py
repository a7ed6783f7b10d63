"""Service directory backed by the registry's HTTP API."""

from typing import Any

import requests
import structlog

from shared.discovery.port import ServiceDirectory, ServiceLocation, ServiceResponse
from shared.errors import ServiceUnavailableError

logger = structlog.get_logger(__name__)


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return {"error": response.text}


class HttpServiceDirectory(ServiceDirectory):
    """Talks to the registry over a pooled ``requests.Session``.

    Every call is bounded by ``timeout`` seconds. Nothing is retried.
    """

    def __init__(self, registry_url: str, timeout: float = 5.0, session: requests.Session | None = None) -> None:
        self.registry_url = registry_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _send(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("Service call failed", method=method, url=url, error=str(exc))
            raise ServiceUnavailableError(f"Could not reach {url}") from exc

    def register(self, name: str, url: str, endpoints: dict[str, str] | None = None) -> ServiceLocation:
        payload = {"name": name, "url": url, "endpoints": endpoints or {}}
        response = self._send("POST", f"{self.registry_url}/register", json=payload)
        if not response.ok:
            raise ServiceUnavailableError(f"Registry refused registration of {name} ({response.status_code})")
        return ServiceLocation(name=name, url=url, endpoints=endpoints or {})

    def lookup(self, name: str) -> ServiceLocation:
        response = self._send("GET", f"{self.registry_url}/service/{name}")
        if response.status_code == 404:
            raise ServiceUnavailableError(f"Service {name} is not registered")
        if not response.ok:
            raise ServiceUnavailableError(f"Registry lookup of {name} failed ({response.status_code})")

        body = response.json()
        return ServiceLocation(name=body["name"], url=body["url"], endpoints=body.get("endpoints") or {})

    def services(self) -> list[ServiceLocation]:
        response = self._send("GET", f"{self.registry_url}/services")
        if not response.ok:
            raise ServiceUnavailableError(f"Registry listing failed ({response.status_code})")

        return [
            ServiceLocation(name=item["name"], url=item["url"], endpoints=item.get("endpoints") or {})
            for item in response.json().get("services", [])
        ]

    def request(
        self,
        service: str,
        method: str,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        location = self.lookup(service)
        url = f"{location.url.rstrip('/')}/{path.lstrip('/')}"
        response = self._send(method.upper(), url, json=json, headers=headers)
        return ServiceResponse(status_code=response.status_code, body=_decode(response))

    def close(self) -> None:
        self.session.close()
