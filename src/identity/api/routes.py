"""FastAPI endpoints for the Auth service."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.api.schemas import (
    AuthResponse,
    LoginRequest,
    PublicUser,
    RegisterUserRequest,
    TokenValidationResponse,
)
from identity.user.authentication import RecordLogin, authenticate
from identity.user.passwords import hash_password
from identity.user.registration import RegisterUser
from identity.user.tokens import decode_token, issue_token
from identity.user.user import User
from shared.auth import bearer_scheme, bearer_token
from shared.config import ServiceSettings
from shared.errors import AuthenticationError
from shared.service import get_settings

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_for(user: User, settings: ServiceSettings) -> str:
    return issue_token(str(user.id), settings.jwt_secret, settings.jwt_expires_minutes)


def _token_holder(token: str, settings: ServiceSettings) -> User:
    user_id = decode_token(token, settings.jwt_secret)
    return current_domain.repository_for(User).get(user_id)


@router.post("/register", status_code=201, response_model=AuthResponse)
async def register(body: RegisterUserRequest, settings: ServiceSettings = Depends(get_settings)) -> AuthResponse:
    command = RegisterUser(
        username=body.username,
        email=body.email,
        password_hash=hash_password(body.password),
        role=body.role or "user",
    )
    user_id = current_domain.process(command, asynchronous=False)

    user = current_domain.repository_for(User).get(user_id)
    return AuthResponse(
        message="User registered successfully",
        token=_token_for(user, settings),
        user=PublicUser(**user.to_public_dict()),
    )


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, settings: ServiceSettings = Depends(get_settings)) -> AuthResponse:
    user = authenticate(body.email, body.password)
    current_domain.process(RecordLogin(user_id=user.id), asynchronous=False)

    return AuthResponse(
        message="Login successful",
        token=_token_for(user, settings),
        user=PublicUser(**user.to_public_dict()),
    )


# Older clients POST here; both verbs behave the same.
@router.api_route("/validate-token", methods=["GET", "POST"], response_model=TokenValidationResponse)
async def validate_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: ServiceSettings = Depends(get_settings),
):
    """Resolve a bearer token to the user it was issued to.

    Failures are answered inline with ``valid: false`` so callers can tell a
    rejected token from an unreachable auth service.
    """
    if credentials is None or not credentials.credentials:
        return JSONResponse(status_code=401, content={"valid": False, "message": "No token provided"})

    try:
        user = _token_holder(credentials.credentials, settings)
    except AuthenticationError as exc:
        return JSONResponse(status_code=401, content={"valid": False, "message": exc.message})
    except ObjectNotFoundError:
        return JSONResponse(status_code=404, content={"valid": False, "message": "User not found"})

    public = user.to_public_dict()
    return TokenValidationResponse(
        user_id=public["id"],
        username=public["username"],
        email=public["email"],
        role=public["role"],
    )


@router.get("/user", response_model=PublicUser)
async def get_user(token: str = Depends(bearer_token), settings: ServiceSettings = Depends(get_settings)) -> PublicUser:
    return PublicUser(**_token_holder(token, settings).to_public_dict())


@router.get("/users/{user_id}", response_model=PublicUser)
async def get_user_by_id(user_id: str) -> PublicUser:
    """Internal lookup used by other services."""
    user = current_domain.repository_for(User).get(user_id)
    return PublicUser(**user.to_public_dict())
