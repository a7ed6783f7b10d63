"""FastAPI endpoints for the Service Registry."""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from starlette.concurrency import run_in_threadpool

from registry.api.schemas import (
    ProxyRequest,
    RegisterServiceRequest,
    ServiceListResponse,
    ServiceLocationResponse,
)
from registry.service.proxy import Forwarder
from registry.service.record import ServiceRecord
from registry.service.registration import RegisterService

router = APIRouter(tags=["registry"])


def get_forwarder(request: Request) -> Forwarder:
    return request.app.state.forwarder


@router.post("/register", status_code=201, response_model=ServiceLocationResponse)
async def register_service(body: RegisterServiceRequest) -> ServiceLocationResponse:
    """Register a service, or replace the URL and endpoints of an existing one."""
    command = RegisterService(name=body.name, url=body.url, endpoints=json.dumps(body.endpoints))
    current_domain.process(command, asynchronous=False)

    record = current_domain.repository_for(ServiceRecord).get_by_name(body.name)
    return ServiceLocationResponse(**record.to_location())


@router.get("/service/{name}", response_model=ServiceLocationResponse)
async def lookup_service(name: str) -> ServiceLocationResponse:
    record = current_domain.repository_for(ServiceRecord).get_by_name(name)
    return ServiceLocationResponse(**record.to_location())


@router.get("/services", response_model=ServiceListResponse)
async def list_services() -> ServiceListResponse:
    records = current_domain.repository_for(ServiceRecord).all_records()
    return ServiceListResponse(services=[ServiceLocationResponse(**r.to_location()) for r in records])


@router.post("/proxy/{service}/{endpoint}")
async def proxy_request(
    service: str,
    endpoint: str,
    body: ProxyRequest,
    forwarder: Forwarder = Depends(get_forwarder),
) -> Response:
    """Forward a described request to a registered service and relay its answer."""
    record = current_domain.repository_for(ServiceRecord).get_by_name(service)

    if body.url:
        if "://" in body.url or not body.url.startswith("/"):
            raise ValidationError({"url": ["Proxy url must be a path on the target service"]})
        path = body.url
    else:
        path = record.resolve(endpoint)

    response = await run_in_threadpool(
        forwarder.forward,
        record.url,
        path,
        method=body.method,
        data=body.data,
        headers=body.headers,
    )
    if response.body is None:
        return Response(status_code=response.status_code)
    return JSONResponse(status_code=response.status_code, content=response.body)
