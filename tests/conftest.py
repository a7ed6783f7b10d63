import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


# ---------------------------------------------------------------------------
# Stand-ins for the services a service under test talks to
# ---------------------------------------------------------------------------
class FakeAuthService:
    """Answers validate-token for the tokens handed out by ``sign_in``."""

    def __init__(self, directory):
        from shared.discovery import ServiceResponse

        self._response = ServiceResponse
        self.users = {}
        directory.respond("auth", "GET", "/api/auth/validate-token", body=self._validate)

    def _validate(self, json, headers):
        token = headers.get("Authorization", "").removeprefix("Bearer ").strip()
        user = self.users.get(token)
        if user is None:
            return self._response(status_code=401, body={"valid": False, "message": "Invalid token"})
        return {"valid": True, **user}

    def sign_in(self, user_id, role="user"):
        """Headers carrying a token that resolves to ``user_id``."""
        token = f"token-{user_id}"
        self.users[token] = {
            "user_id": user_id,
            "username": user_id,
            "email": f"{user_id}@example.com",
            "role": role,
        }
        return {"Authorization": f"Bearer {token}"}


class FakeProductService:
    def __init__(self, directory):
        self.directory = directory
        directory.register("product", "http://product.local")

    def add(self, product_id, name, price, image=None):
        self.directory.respond(
            "product",
            "GET",
            f"/api/products/{product_id}",
            body={"id": product_id, "name": name, "price": price, "image": image, "status": "Active"},
        )


@pytest.fixture()
def directory():
    from shared.discovery import FakeServiceDirectory

    return FakeServiceDirectory()


@pytest.fixture()
def auth_service(directory):
    return FakeAuthService(directory)


@pytest.fixture()
def product_service(directory):
    return FakeProductService(directory)


@pytest.fixture()
def cart_service(directory):
    directory.respond("cart", "POST", "/api/cart/clear", body={"message": "Cart cleared"})
    return directory
