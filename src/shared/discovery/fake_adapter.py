"""In-memory service directory for development and testing.

Holds registered locations in a dict and answers ``request`` calls from canned
responses, recording every call in ``calls``. A canned body may be a callable
taking ``(json, headers)`` for responses that depend on the request; when it
returns a ServiceResponse, that response is used as-is.
"""

from collections.abc import Callable
from typing import Any

from shared.discovery.port import ServiceDirectory, ServiceLocation, ServiceResponse
from shared.errors import ServiceUnavailableError


class FakeServiceDirectory(ServiceDirectory):
    """Configurable fake service directory."""

    def __init__(self) -> None:
        self.locations: dict[str, ServiceLocation] = {}
        self.routes: dict[tuple[str, str, str], tuple[int, Any]] = {}
        self.unreachable: set[str] = set()
        self.calls: list[dict] = []
        self.closed = False

    def respond(
        self,
        service: str,
        method: str,
        path: str,
        status_code: int = 200,
        body: Any | Callable[[Any, dict], Any] = None,
    ) -> None:
        """Answer ``method path`` on ``service`` with a canned response."""
        self.locations.setdefault(service, ServiceLocation(name=service, url=f"http://{service}.local"))
        self.routes[(service, method.upper(), path)] = (status_code, body)

    def make_unreachable(self, service: str) -> None:
        """Make every request to ``service`` fail as if the network were down."""
        self.unreachable.add(service)

    def register(self, name: str, url: str, endpoints: dict[str, str] | None = None) -> ServiceLocation:
        self.calls.append({"method": "register", "name": name, "url": url, "endpoints": endpoints or {}})
        location = ServiceLocation(name=name, url=url, endpoints=endpoints or {})
        self.locations[name] = location
        return location

    def lookup(self, name: str) -> ServiceLocation:
        if name not in self.locations:
            raise ServiceUnavailableError(f"Service {name} is not registered")
        return self.locations[name]

    def services(self) -> list[ServiceLocation]:
        return list(self.locations.values())

    def request(
        self,
        service: str,
        method: str,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        call = {
            "method": "request",
            "service": service,
            "http_method": method.upper(),
            "path": path,
            "json": json,
            "headers": headers or {},
        }
        self.calls.append(call)

        if service in self.unreachable:
            raise ServiceUnavailableError(f"Could not reach {service}")
        self.lookup(service)

        route = self.routes.get((service, method.upper(), path))
        if route is None:
            return ServiceResponse(status_code=404, body={"error": "Not found"})

        status_code, body = route
        if callable(body):
            body = body(json, headers or {})
            if isinstance(body, ServiceResponse):
                return body
        return ServiceResponse(status_code=status_code, body=body)

    def requests_to(self, service: str) -> list[dict]:
        return [c for c in self.calls if c["method"] == "request" and c["service"] == service]

    def close(self) -> None:
        self.closed = True
