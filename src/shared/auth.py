"""Bearer-token dependencies for routes that act on behalf of a user."""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shared.clients import Caller, TokenVerifier
from shared.errors import AuthenticationError, PermissionDeniedError

bearer_scheme = HTTPBearer(auto_error=False)


def bearer_token(credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)) -> str:
    """The raw bearer token of the request. 401 when absent."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("No token provided")
    return credentials.credentials


def current_caller(request: Request, token: str = Depends(bearer_token)) -> Caller:
    # Declared sync so FastAPI runs the blocking auth round-trip in its threadpool
    return TokenVerifier(request.app.state.directory).verify(token)


def require_admin(caller: Caller = Depends(current_caller)) -> Caller:
    if not caller.is_admin:
        raise PermissionDeniedError("Admin access required")
    return caller


def resolve_user_id(caller: Caller, claimed: str | None) -> str:
    """The user a request acts on: always the caller, never someone else."""
    if claimed and str(claimed) != caller.user_id:
        raise PermissionDeniedError("Cannot act on behalf of another user")
    return caller.user_id
