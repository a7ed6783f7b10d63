"""Pydantic request/response schemas for the Auth API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- Request Schemas ---


class RegisterUserRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "janedoe",
                    "email": "jane.doe@example.com",
                    "password": "correct-horse-battery",
                }
            ]
        }
    }

    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6, max_length=128)
    role: Literal["user", "admin"] | None = None


class LoginRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"email": "jane.doe@example.com", "password": "correct-horse-battery"}]}
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


# --- Response Schemas ---


class PublicUser(BaseModel):
    id: str
    username: str
    email: str
    role: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: PublicUser


class TokenValidationResponse(BaseModel):
    valid: bool = True
    user_id: str
    username: str
    email: str
    role: str
