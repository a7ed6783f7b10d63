import os

import pytest


@pytest.fixture(scope="session")
def _identity_domain(request):
    """Initialize the identity domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from identity.domain import identity

    identity.init()
    return identity


@pytest.fixture(autouse=True)
def run_around_tests(_identity_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _identity_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def register_user():
    """Register a user through the command handler and return the stored aggregate."""
    from identity.user.passwords import hash_password
    from identity.user.registration import RegisterUser
    from identity.user.user import User
    from protean import current_domain

    def _register(username="janedoe", email="jane@example.com", password="secret123", role="user"):
        user_id = current_domain.process(
            RegisterUser(
                username=username,
                email=email,
                password_hash=hash_password(password),
                role=role,
            ),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _register
