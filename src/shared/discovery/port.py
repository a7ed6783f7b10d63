"""Service directory port (abstract interface).

Services find each other by name through the registry. The directory hides how
that lookup happens so that handlers and routes can be exercised against an
in-memory fake without any network traffic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ServiceLocation:
    """Where a named service lives and which endpoints it advertises."""

    name: str
    url: str
    endpoints: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceResponse:
    """Status and decoded JSON body of a call to another service."""

    status_code: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ServiceDirectory(ABC):
    """Abstract service directory interface."""

    @abstractmethod
    def register(self, name: str, url: str, endpoints: dict[str, str] | None = None) -> ServiceLocation:
        """Announce (or re-announce) a service to the registry."""
        ...

    @abstractmethod
    def lookup(self, name: str) -> ServiceLocation:
        """Resolve a service name. Raises ServiceUnavailableError when unknown."""
        ...

    @abstractmethod
    def services(self) -> list[ServiceLocation]:
        """Every service currently known to the registry."""
        ...

    @abstractmethod
    def request(
        self,
        service: str,
        method: str,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        """Send a request to `path` on the named service.

        Non-2xx answers are returned, not raised; only transport failures raise
        ServiceUnavailableError.
        """
        ...

    def close(self) -> None:  # noqa: B027
        """Release any pooled resources."""
