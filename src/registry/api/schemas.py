"""Pydantic request/response schemas for the Registry API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterServiceRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "auth",
                    "url": "http://localhost:5001",
                    "endpoints": {
                        "login": "/api/auth/login",
                        "register": "/api/auth/register",
                        "validate_token": "/api/auth/validate-token",
                    },
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1, max_length=500)
    endpoints: dict[str, str] = Field(default_factory=dict)


class ProxyRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"method": "POST", "data": {"email": "jane@example.com", "password": "secret123"}},
                {"method": "GET", "url": "/api/products/prod-001"},
            ]
        }
    }

    method: str = Field("GET", pattern="^(GET|POST|PUT|PATCH|DELETE|get|post|put|patch|delete)$")
    url: str | None = Field(None, max_length=500, description="Path on the target service; overrides the endpoint map")
    data: Any = None
    headers: dict[str, str] = Field(default_factory=dict)


# --- Response Schemas ---


class ServiceLocationResponse(BaseModel):
    name: str
    url: str
    endpoints: dict[str, str] = Field(default_factory=dict)


class ServiceListResponse(BaseModel):
    services: list[ServiceLocationResponse]
