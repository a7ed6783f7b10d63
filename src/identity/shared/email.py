"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


@identity.value_object
class EmailAddress:
    """A validated email address conforming to standard format rules.

    Enforces structural validity: exactly one @, valid local and domain parts,
    no consecutive dots, no forbidden characters.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        """Ensure that the email address follows a basic valid structure."""
        email = self.address

        if any(ch.isspace() for ch in email):
            raise _invalid(email)

        if email.count("@") != 1:
            raise _invalid(email)

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise _invalid(email)

        if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise _invalid(email)

        if "." not in domain_part:
            raise _invalid(email)

        # Labels may not start or end with a hyphen
        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise _invalid(email)

        if ".." in email:
            raise _invalid(email)

        if any(forbidden in email for forbidden in ';,()":<>[]\\'):
            raise _invalid(email)

    @classmethod
    def normalize(cls, email: str) -> str:
        """Validate ``email`` and return its canonical, lowercased form."""
        return cls(address=email.strip().lower()).address
