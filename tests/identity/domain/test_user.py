import pytest
from identity.user.events import UserLoggedIn, UserRegistered
from identity.user.user import User, UserRole
from protean.exceptions import ValidationError


def _user(**overrides):
    values = {"username": "janedoe", "email": "Jane@Example.com", "password_hash": "hashed"}
    values.update(overrides)
    return User.register(**values)


class TestUserRegistration:
    def test_register_sets_fields(self):
        user = _user()

        assert user.username == "janedoe"
        assert user.email == "jane@example.com"
        assert user.role == UserRole.USER.value
        assert user.registered_at is not None
        assert user.last_login_at is None

    def test_register_admin(self):
        assert _user(role="admin").role == UserRole.ADMIN.value

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            _user(role="superuser")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            _user(email="not-an-email")

    def test_username_required(self):
        with pytest.raises(ValidationError):
            _user(username="")

    def test_register_raises_event(self):
        user = _user()

        event = next(e for e in user._events if isinstance(e, UserRegistered))
        assert event.username == "janedoe"
        assert event.email == "jane@example.com"
        assert event.role == "user"


class TestUserLogin:
    def test_record_login_sets_timestamp(self):
        user = _user()
        user._events.clear()

        user.record_login()

        assert user.last_login_at is not None
        assert any(isinstance(e, UserLoggedIn) for e in user._events)


class TestPublicView:
    def test_public_dict_hides_password_hash(self):
        public = _user().to_public_dict()

        assert set(public) == {"id", "username", "email", "role"}
        assert "password_hash" not in public
