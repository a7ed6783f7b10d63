"""Domain events for the ServiceRecord aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from registry.domain import registry


@registry.event(part_of="ServiceRecord")
class ServiceRegistered:
    """A service announced itself to the registry for the first time."""

    __version__ = 1

    record_id: Identifier(required=True)
    name: String(required=True)
    url: String(required=True)
    endpoints: Text()  # JSON object of endpoint name -> path
    registered_at: DateTime(required=True)


@registry.event(part_of="ServiceRecord")
class ServiceRelocated:
    """A known service re-registered, replacing its URL and endpoints."""

    __version__ = 1

    record_id: Identifier(required=True)
    name: String(required=True)
    previous_url: String(required=True)
    url: String(required=True)
    endpoints: Text()
    relocated_at: DateTime(required=True)
