"""Tests for the service directory adapters."""

from unittest.mock import MagicMock

import pytest
import requests
from shared.config import ServiceSettings
from shared.discovery import (
    FakeServiceDirectory,
    HttpServiceDirectory,
    ServiceLocation,
    open_directory,
)
from shared.errors import ServiceUnavailableError


def _response(status_code=200, body=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.content = b"x" if body is not None else b""
    response.json.return_value = body
    return response


class TestOpenDirectory:
    def test_http_by_default(self):
        directory = open_directory(ServiceSettings(name="cart", registry_url="http://registry:5000"))
        assert isinstance(directory, HttpServiceDirectory)
        assert directory.registry_url == "http://registry:5000"
        directory.close()

    def test_memory_directory(self):
        directory = open_directory(ServiceSettings(name="cart", directory="memory"))
        assert isinstance(directory, FakeServiceDirectory)


class TestHttpServiceDirectory:
    @pytest.fixture()
    def session(self):
        return MagicMock(spec=requests.Session)

    @pytest.fixture()
    def directory(self, session):
        return HttpServiceDirectory("http://registry:5000/", timeout=1.5, session=session)

    def test_register_posts_to_registry(self, directory, session):
        session.request.return_value = _response(201, {"name": "cart"})

        location = directory.register("cart", "http://cart:5003", {"clear": "/api/cart/clear"})

        assert location == ServiceLocation("cart", "http://cart:5003", {"clear": "/api/cart/clear"})
        session.request.assert_called_once_with(
            "POST",
            "http://registry:5000/register",
            timeout=1.5,
            json={"name": "cart", "url": "http://cart:5003", "endpoints": {"clear": "/api/cart/clear"}},
        )

    def test_lookup(self, directory, session):
        session.request.return_value = _response(200, {"name": "product", "url": "http://product:5002"})

        location = directory.lookup("product")

        assert location.url == "http://product:5002"
        assert location.endpoints == {}

    def test_lookup_of_unknown_service(self, directory, session):
        session.request.return_value = _response(404, {"error": "Service product not found"})

        with pytest.raises(ServiceUnavailableError):
            directory.lookup("product")

    def test_transport_failure_is_service_unavailable(self, directory, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(ServiceUnavailableError):
            directory.lookup("product")

    def test_request_resolves_then_calls_service(self, directory, session):
        session.request.side_effect = [
            _response(200, {"name": "product", "url": "http://product:5002/"}),
            _response(404, {"error": "Product not found"}),
        ]

        response = directory.request("product", "get", "/api/products/p-1")

        assert response.status_code == 404
        assert response.body == {"error": "Product not found"}
        assert not response.ok
        session.request.assert_called_with(
            "GET", "http://product:5002/api/products/p-1", timeout=1.5, json=None, headers=None
        )

    def test_services(self, directory, session):
        session.request.return_value = _response(
            200, {"services": [{"name": "auth", "url": "http://auth:5001", "endpoints": {}}]}
        )

        assert directory.services() == [ServiceLocation("auth", "http://auth:5001", {})]

    def test_close_closes_session(self, directory, session):
        directory.close()
        session.close.assert_called_once()


class TestFakeServiceDirectory:
    def test_canned_response(self):
        directory = FakeServiceDirectory()
        directory.respond("product", "GET", "/api/products/p-1", body={"name": "Mug"})

        response = directory.request("product", "GET", "/api/products/p-1")

        assert response.ok
        assert response.body == {"name": "Mug"}
        assert directory.requests_to("product")[0]["path"] == "/api/products/p-1"

    def test_unrouted_path_is_not_found(self):
        directory = FakeServiceDirectory()
        directory.register("product", "http://product.local")

        assert directory.request("product", "GET", "/nowhere").status_code == 404

    def test_unknown_service_is_unavailable(self):
        with pytest.raises(ServiceUnavailableError):
            FakeServiceDirectory().request("product", "GET", "/api/products/p-1")

    def test_unreachable_service(self):
        directory = FakeServiceDirectory()
        directory.respond("cart", "POST", "/api/cart/clear", body={})
        directory.make_unreachable("cart")

        with pytest.raises(ServiceUnavailableError):
            directory.request("cart", "POST", "/api/cart/clear")

    def test_reregistration_replaces_location(self):
        directory = FakeServiceDirectory()
        directory.register("cart", "http://old:1")
        directory.register("cart", "http://new:2")

        assert directory.lookup("cart").url == "http://new:2"
        assert len(directory.services()) == 1
