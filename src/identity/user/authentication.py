"""Credential checks and login bookkeeping."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.user.passwords import verify_password
from identity.user.user import User


@identity.command(part_of="User")
class RecordLogin:
    user_id: Identifier(required=True)


@identity.command_handler(part_of=User)
class RecordLoginHandler:
    @handle(RecordLogin)
    def record_login(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.record_login()
        repo.add(user)


def authenticate(email: str, password: str) -> User:
    """Return the user owning ``email`` when ``password`` matches.

    Unknown emails and wrong passwords fail identically.
    """
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise ValidationError({"credentials": ["Invalid credentials"]})
    return user
