"""Signed, time-limited bearer tokens (JWT, HS256)."""

from datetime import UTC, datetime, timedelta

import jwt
import structlog

from shared.errors import AuthenticationError

ALGORITHM = "HS256"

logger = structlog.get_logger(__name__)


def issue_token(user_id: str, secret: str, expires_minutes: int) -> str:
    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=expires_minutes),
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def decode_token(token: str, secret: str) -> str:
    """Verify ``token`` and return the user id it was issued to."""
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM], options={"require": ["sub", "exp"]})
    except jwt.ExpiredSignatureError as exc:
        raise AuthenticationError("Token has expired") from exc
    except jwt.PyJWTError as exc:
        logger.info("Rejected bearer token", reason=str(exc))
        raise AuthenticationError("Invalid token") from exc

    return claims["sub"]
