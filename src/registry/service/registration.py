"""Service registration: command and upsert handler."""

import json

from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from registry.domain import logger, registry
from registry.service.record import ServiceRecord


@registry.command(part_of="ServiceRecord")
class RegisterService:
    """Announce a service under a name, replacing any earlier announcement."""

    name: String(required=True, max_length=100)
    url: String(required=True, max_length=500)
    endpoints: Text()  # JSON object of endpoint name -> path


@registry.command_handler(part_of=ServiceRecord)
class RegisterServiceHandler:
    @handle(RegisterService)
    def register_service(self, command):
        repo = current_domain.repository_for(ServiceRecord)
        endpoints = json.loads(command.endpoints) if command.endpoints else {}

        record = repo.find_by_name(command.name)
        if record is None:
            record = ServiceRecord.register(name=command.name, url=command.url, endpoints=endpoints)
            logger.info("Service registered", service=command.name, url=record.url)
        else:
            record.relocate(url=command.url, endpoints=endpoints)
            logger.info("Service re-registered", service=command.name, url=record.url)

        repo.add(record)
        return str(record.id)
