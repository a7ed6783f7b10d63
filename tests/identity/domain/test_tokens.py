from datetime import UTC, datetime, timedelta

import jwt
import pytest
from identity.user.tokens import ALGORITHM, decode_token, issue_token
from shared.errors import AuthenticationError

SECRET = "test-secret"


def test_issued_token_resolves_to_user_id():
    token = issue_token("user-1", SECRET, expires_minutes=5)

    assert decode_token(token, SECRET) == "user-1"


def test_token_carries_expiry():
    token = issue_token("user-1", SECRET, expires_minutes=5)

    claims = jwt.decode(token, SECRET, algorithms=[ALGORITHM])
    assert claims["exp"] > claims["iat"]


def test_expired_token_rejected():
    past = datetime.now(UTC) - timedelta(hours=2)
    token = jwt.encode({"sub": "user-1", "iat": past, "exp": past + timedelta(minutes=1)}, SECRET, algorithm=ALGORITHM)

    with pytest.raises(AuthenticationError) as exc:
        decode_token(token, SECRET)
    assert exc.value.message == "Token has expired"


def test_token_signed_with_other_secret_rejected():
    token = issue_token("user-1", "another-secret", expires_minutes=5)

    with pytest.raises(AuthenticationError) as exc:
        decode_token(token, SECRET)
    assert exc.value.message == "Invalid token"


def test_tampered_token_rejected():
    token = issue_token("user-1", SECRET, expires_minutes=5)
    header, payload, signature = token.split(".")
    tampered = ".".join([header, payload, signature[::-1]])

    with pytest.raises(AuthenticationError):
        decode_token(tampered, SECRET)


def test_garbage_rejected():
    with pytest.raises(AuthenticationError):
        decode_token("not-a-token", SECRET)


def test_token_without_subject_rejected():
    token = jwt.encode({"exp": datetime.now(UTC) + timedelta(minutes=5)}, SECRET, algorithm=ALGORITHM)

    with pytest.raises(AuthenticationError):
        decode_token(token, SECRET)
