"""User registration: command and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity, logger
from identity.user.user import User, UserRole


@identity.command(part_of="User")
class RegisterUser:
    """Create an account. The password arrives already hashed."""

    username: String(required=True, max_length=50)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.USER.value)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)

        if repo.find_conflicting(command.email, command.username) is not None:
            raise ValidationError({"user": ["User already exists with this email or username"]})

        user = User.register(
            username=command.username,
            email=command.email,
            password_hash=command.password_hash,
            role=command.role,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
