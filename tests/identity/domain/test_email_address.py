import pytest
from identity.shared.email import EmailAddress
from protean.exceptions import ValidationError


def test_email_address_element_type():
    from protean.utils import DomainObjects

    assert EmailAddress.element_type == DomainObjects.VALUE_OBJECT


def test_email_address_requires_address():
    with pytest.raises(ValidationError):
        EmailAddress()


def test_email_address_has_max_length():
    with pytest.raises(ValidationError):
        EmailAddress(address="a" * 243 + "@example.com")


@pytest.mark.parametrize(
    "email",
    ["user@example.com", "user.name@example.com", "user+tag@example.com", "user@example.co.uk", "a@b.cc"],
    ids=["simple", "dotted_local", "plus_tag", "country_tld", "minimal"],
)
def test_valid_email_addresses(email):
    assert EmailAddress(address=email).address == email


@pytest.mark.parametrize(
    "email",
    [
        "missing-at-sign",
        "@no-local.com",
        "no-domain@",
        "two@@ats.com",
        "user @space.com",
        "user@nodot",
        "user..dots@example.com",
        "user@-example.com",
        "user;x@example.com",
    ],
    ids=["no_at", "no_local", "no_domain", "double_at", "space", "no_tld", "double_dot", "hyphen_label", "semicolon"],
)
def test_invalid_email_addresses(email):
    with pytest.raises(ValidationError) as exc:
        EmailAddress(address=email)
    assert "email" in exc.value.messages


def test_normalize_lowercases_and_strips():
    assert EmailAddress.normalize("  Jane.Doe@Example.COM ") == "jane.doe@example.com"
