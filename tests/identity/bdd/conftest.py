"""Shared BDD fixtures for the Identity domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


@given(
    parsers.cfparse('a user "{username}" registered with email "{email}" and password "{password}"'),
    target_fixture="user",
)
def registered_user(register_user, username, email, password):
    return register_user(username=username, email=email, password=password)


@then("the registration is refused")
def registration_refused(error):
    assert isinstance(error["exc"], ValidationError)
