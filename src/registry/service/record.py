"""ServiceRecord aggregate: one entry of the service directory.

A record is keyed by its service name. Registering a name that already exists
replaces the URL and endpoint map of the existing record instead of creating a
second one, so a restarted service on a new port is found immediately.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, String, Text

from registry.domain import registry
from registry.service.events import ServiceRegistered, ServiceRelocated

PAGE_SIZE = 100


@registry.aggregate
class ServiceRecord:
    name = String(required=True, max_length=100, unique=True)
    url = String(required=True, max_length=500)
    endpoints = Text()  # JSON object of endpoint name -> path
    registered_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def url_must_be_http(self):
        if self.url and not self.url.startswith(("http://", "https://")):
            raise ValidationError({"url": ["Service URL must start with http:// or https://"]})

    @invariant.post
    def endpoint_paths_must_be_absolute(self):
        for path in self.endpoint_map().values():
            if not str(path).startswith("/"):
                raise ValidationError({"endpoints": [f"Endpoint path {path!r} must start with /"]})

    def endpoint_map(self) -> dict[str, str]:
        return json.loads(self.endpoints) if self.endpoints else {}

    @classmethod
    def register(cls, name, url, endpoints=None):
        now = datetime.now(UTC)
        endpoints_json = json.dumps(endpoints or {})
        record = cls(
            name=name,
            url=url.rstrip("/"),
            endpoints=endpoints_json,
            registered_at=now,
            updated_at=now,
        )
        record.raise_(
            ServiceRegistered(
                record_id=record.id,
                name=name,
                url=record.url,
                endpoints=endpoints_json,
                registered_at=now,
            )
        )
        return record

    def relocate(self, url, endpoints=None):
        """Point the record at a new base URL and endpoint map."""
        previous_url = self.url
        now = datetime.now(UTC)

        self.url = url.rstrip("/")
        self.endpoints = json.dumps(endpoints or {})
        self.updated_at = now

        self.raise_(
            ServiceRelocated(
                record_id=self.id,
                name=self.name,
                previous_url=previous_url,
                url=self.url,
                endpoints=self.endpoints,
                relocated_at=now,
            )
        )

    def resolve(self, endpoint):
        """Path registered under ``endpoint``; ObjectNotFoundError when unknown."""
        path = self.endpoint_map().get(endpoint)
        if path is None:
            raise ObjectNotFoundError(f"Service {self.name} has no endpoint named {endpoint}")
        return path

    def to_location(self):
        return {"name": self.name, "url": self.url, "endpoints": self.endpoint_map()}


@registry.repository(part_of=ServiceRecord)
class ServiceRecordRepository:
    def find_by_name(self, name: str) -> ServiceRecord | None:
        return self._dao.query.filter(name=name).all().first

    def get_by_name(self, name: str) -> ServiceRecord:
        record = self.find_by_name(name)
        if record is None:
            raise ObjectNotFoundError(f"Service {name} not found")
        return record

    def all_records(self) -> list[ServiceRecord]:
        """Every record, by name, read in pages of PAGE_SIZE."""
        query = self._dao.query.order_by("name")
        records: list[ServiceRecord] = []
        while True:
            page = query.offset(len(records)).limit(PAGE_SIZE).all()
            records.extend(page.items)
            if not page.items or len(records) >= page.total:
                return records
