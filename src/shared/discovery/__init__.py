"""Service directory factory.

``open_directory()`` picks the adapter named by ``SERVICE_DIRECTORY``:
- ``http`` (default) talks to the registry over HTTP
- ``memory`` keeps everything in-process, for tests and single-process runs
"""

from shared.config import ServiceSettings
from shared.discovery.fake_adapter import FakeServiceDirectory
from shared.discovery.http_adapter import HttpServiceDirectory
from shared.discovery.port import ServiceDirectory, ServiceLocation, ServiceResponse

__all__ = [
    "FakeServiceDirectory",
    "HttpServiceDirectory",
    "ServiceDirectory",
    "ServiceLocation",
    "ServiceResponse",
    "open_directory",
]


def open_directory(settings: ServiceSettings) -> ServiceDirectory:
    """Create the directory a service should use for its lifetime."""
    if settings.directory == "memory":
        return FakeServiceDirectory()
    return HttpServiceDirectory(settings.registry_url, timeout=settings.http_timeout)
