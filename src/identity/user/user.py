"""User aggregate: a storefront account that can sign in and hold a role.

Only a password hash is ever stored; hashing happens before the aggregate is
built. Email addresses are validated through the EmailAddress value object and
stored lowercased so lookups are case-insensitive.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from identity.domain import identity
from identity.shared.email import EmailAddress
from identity.user.events import UserLoggedIn, UserRegistered


class UserRole(Enum):
    USER = "user"
    ADMIN = "admin"


@identity.aggregate
class User:
    username: String(required=True, max_length=50, unique=True)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.USER.value)
    registered_at: DateTime()
    last_login_at: DateTime()

    @classmethod
    def register(cls, username, email, password_hash, role=None):
        email = EmailAddress.normalize(email)
        now = datetime.now(UTC)

        user = cls(
            username=username.strip(),
            email=email,
            password_hash=password_hash,
            role=role or UserRole.USER.value,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                username=user.username,
                email=email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=self.id, logged_in_at=now))

    def to_public_dict(self):
        """The account as other services and clients may see it."""
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "role": self.role,
        }


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_conflicting(self, email: str, username: str) -> User | None:
        """Any user already holding ``email`` or ``username``."""
        return self.find_by_email(email) or self._dao.query.filter(username=username.strip()).all().first
