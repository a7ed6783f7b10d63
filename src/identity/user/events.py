"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    """A new storefront account was created."""

    __version__ = 1

    user_id: Identifier(required=True)
    username: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@identity.event(part_of="User")
class UserLoggedIn:
    """A user presented valid credentials and was issued a token."""

    __version__ = 1

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)
