"""Service directory for the all-in-one app.

Records live in this process's registry domain, and peer requests are
dispatched straight into the ASGI app instead of over the network. Requests
must be made from a worker thread (``run_in_threadpool`` or a sync route), since
they are run on the app's event loop.
"""

import json
from typing import Any

import anyio.from_thread
import httpx
from protean.utils.globals import current_domain

from registry.domain import registry
from registry.service.record import ServiceRecord
from registry.service.registration import RegisterService
from shared.discovery import ServiceDirectory, ServiceLocation, ServiceResponse
from shared.errors import ServiceUnavailableError


class LocalServiceDirectory(ServiceDirectory):
    def __init__(self, app=None) -> None:
        self.app = app

    def register(self, name: str, url: str, endpoints: dict[str, str] | None = None) -> ServiceLocation:
        with registry.domain_context():
            current_domain.process(
                RegisterService(name=name, url=url, endpoints=json.dumps(endpoints or {})),
                asynchronous=False,
            )
        return ServiceLocation(name=name, url=url.rstrip("/"), endpoints=endpoints or {})

    def lookup(self, name: str) -> ServiceLocation:
        with registry.domain_context():
            record = current_domain.repository_for(ServiceRecord).find_by_name(name)
        if record is None:
            raise ServiceUnavailableError(f"Service {name} is not registered")
        return ServiceLocation(**record.to_location())

    def services(self) -> list[ServiceLocation]:
        with registry.domain_context():
            records = current_domain.repository_for(ServiceRecord).all_records()
        return [ServiceLocation(**r.to_location()) for r in records]

    def request(
        self,
        service: str,
        method: str,
        path: str,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        location = self.lookup(service)
        if self.app is None:
            raise ServiceUnavailableError(f"Could not reach {service}: no app to dispatch to")
        return anyio.from_thread.run(self._dispatch, location.url, method.upper(), path, json, headers or {})

    async def _dispatch(self, base_url, method, path, payload, headers) -> ServiceResponse:
        transport = httpx.ASGITransport(app=self.app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url=base_url) as client:
            response = await client.request(method, path, json=payload, headers=headers)

        if not response.content:
            return ServiceResponse(status_code=response.status_code)
        try:
            body = response.json()
        except ValueError:
            body = {"error": response.text}
        return ServiceResponse(status_code=response.status_code, body=body)
