"""BDD tests for service registration and lookup."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError
from pytest_bdd import given, parsers, scenarios, then, when
from registry.service.record import ServiceRecord
from registry.service.registration import RegisterService

scenarios("features/service_discovery.feature")


@pytest.fixture()
def error():
    return {"exc": None}


def _register(name, url):
    current_domain.process(
        RegisterService(name=name, url=url, endpoints=json.dumps({"health": "/health"})),
        asynchronous=False,
    )


@given("no services are registered")
def no_services():
    assert current_domain.repository_for(ServiceRecord).all_records() == []


@given(parsers.cfparse('the "{name}" service is registered at "{url}"'))
def service_registered(name, url):
    _register(name, url)


@when(parsers.cfparse('the "{name}" service registers at "{url}"'))
def service_registers(name, url):
    _register(name, url)


@when(parsers.cfparse('"{name}" is looked up'))
def look_up(name, error):
    try:
        current_domain.repository_for(ServiceRecord).get_by_name(name)
    except ObjectNotFoundError as exc:
        error["exc"] = exc


@then(parsers.cfparse('looking up "{name}" returns "{url}"'))
def lookup_returns(name, url):
    assert current_domain.repository_for(ServiceRecord).get_by_name(name).url == url


@then(parsers.cfparse("there is {count:d} registered service"))
def registered_count(count):
    assert len(current_domain.repository_for(ServiceRecord).all_records()) == count


@then("the lookup fails with not found")
def lookup_fails(error):
    assert isinstance(error["exc"], ObjectNotFoundError)
